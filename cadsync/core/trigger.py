"""Hand detected exports to the target application's command queue."""

import logging
import queue
import shlex
import subprocess
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_IMPORT_COMMAND = "IMPORTFROMRHINO"


class CommandQueue(Protocol):
    """Where import commands are posted. ``send`` must not block."""

    def send(self, command: str, export_file: Path) -> None: ...


class InProcessCommandQueue:
    """Command queue drained by the host's own thread."""

    def __init__(self, commands: "queue.Queue[tuple[str, Path]] | None" = None) -> None:
        self.commands: "queue.Queue[tuple[str, Path]]" = commands or queue.Queue()

    def send(self, command: str, export_file: Path) -> None:
        self.commands.put_nowait((command, export_file))


class SubprocessCommandQueue:
    """Runs an external decoder for each command without waiting for it.

    ``argv_template`` items may contain ``{command}`` and ``{export_file}``
    placeholders, e.g. ``["acad-import", "--file", "{export_file}"]``.
    """

    def __init__(self, argv_template: list[str] | str) -> None:
        if isinstance(argv_template, str):
            argv_template = shlex.split(argv_template)
        if not argv_template:
            raise ValueError("Import command line must not be empty")
        self.argv_template = list(argv_template)
        self.processes: list[subprocess.Popen] = []

    def send(self, command: str, export_file: Path) -> None:
        argv = [
            part.format(command=command, export_file=str(export_file))
            for part in self.argv_template
        ]
        # Reap finished decoders so the list does not grow forever
        self.processes = [p for p in self.processes if p.poll() is None]
        self.processes.append(subprocess.Popen(argv))
        logger.debug("Started decoder: %s", argv)


class ImportTrigger:
    """Posts exactly one import command per detected update."""

    def __init__(self, commands: CommandQueue, command: str = DEFAULT_IMPORT_COMMAND) -> None:
        self.commands = commands
        self.command = command

    def __call__(self, export_file: Path) -> None:
        logger.info("Requesting import of %s", export_file)
        self.commands.send(self.command, Path(export_file))
