"""Decide which target file a source file exports to."""

import logging
from pathlib import Path
from typing import Protocol

from .settings_store import SettingsStore

logger = logging.getLogger(__name__)

USE_LAST = "UseLast"
CHOOSE_NEW = "ChooseNew"


class Prompter(Protocol):
    """User interaction needed by the export flow.

    Both methods return ``None`` when the user cancels.
    """

    def choose(self, message: str, options: list[str]) -> str | None:
        """Ask the user to pick one of ``options``; the first is the default."""
        ...

    def select_file(self, title: str, initial_directory: str, file_filter: str) -> str | None:
        """Ask the user for an existing file."""
        ...


def default_browse_directory() -> str:
    """Starting directory for the file chooser when none is remembered."""
    documents = Path.home() / "Documents"
    return str(documents if documents.is_dir() else Path.home())


class TargetResolver:
    """Resolves the target file for a source file.

    A remembered target that still exists is offered for reuse; otherwise
    (or when the user asks for a new one) the file chooser is shown.
    """

    def __init__(
        self,
        store: SettingsStore,
        prompter: Prompter,
        file_filter: str = "*.dwg",
    ) -> None:
        self.store = store
        self.prompter = prompter
        self.file_filter = file_filter

    def remembered_target(self, source_file: str) -> str | None:
        """Get the remembered target if it still exists on disk."""
        memory = self.store.get_target_memory(source_file)
        if memory is None or not memory.last_target:
            return None
        if not Path(memory.last_target).exists():
            logger.info("Remembered target no longer exists: %s", memory.last_target)
            return None
        return memory.last_target

    def resolve(self, source_file: str) -> str | None:
        """Resolve the target for a source file.

        Args:
            source_file: Path of the document being exported

        Returns:
            Target file path, or None if the user cancelled
        """
        last_target = self.remembered_target(source_file)

        if last_target is not None:
            choice = self.prompter.choose(
                f"Sync target - Last used: {Path(last_target).name}",
                [USE_LAST, CHOOSE_NEW],
            )
            if choice is None:
                return None
            if choice == USE_LAST:
                return last_target

        return self.select_new_target()

    def select_new_target(self) -> str | None:
        """Show the file chooser, remembering the directory it ends in."""
        initial_directory = self.store.get_last_directory() or default_browse_directory()
        selected = self.prompter.select_file(
            "Select AutoCAD file to sync to",
            initial_directory,
            self.file_filter,
        )
        if not selected:
            return None

        self.store.set_last_directory(str(Path(selected).parent))
        return selected
