"""Terminal prompts for the export flow."""

from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt


class RichPrompter:
    """Prompter backed by ``rich.prompt``.

    Ctrl-C or end of input at any prompt counts as cancelling it.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def choose(self, message: str, options: list[str]) -> str | None:
        try:
            return Prompt.ask(
                message,
                choices=options,
                default=options[0],
                console=self.console,
            )
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return None

    def select_file(self, title: str, initial_directory: str, file_filter: str) -> str | None:
        self.console.print(f"[bold]{title}[/bold] [dim]({file_filter})[/dim]")
        self.console.print(f"[dim]Relative paths are resolved against {initial_directory}[/dim]")

        while True:
            try:
                answer = Prompt.ask("File (empty to cancel)", default="", console=self.console)
            except (KeyboardInterrupt, EOFError):
                self.console.print()
                return None

            answer = answer.strip().strip('"')
            if not answer:
                return None

            path = Path(answer).expanduser()
            if not path.is_absolute():
                path = Path(initial_directory) / path

            if path.is_file():
                return str(path.resolve())

            self.console.print(f"[red]File not found: {path}")
