"""Tests for import triggering."""

import sys
from pathlib import Path

import pytest

from cadsync.core.trigger import (
    DEFAULT_IMPORT_COMMAND,
    ImportTrigger,
    InProcessCommandQueue,
    SubprocessCommandQueue,
)


class TestImportTrigger:
    """Tests for ImportTrigger."""

    def test_sends_one_command_per_update(self, tmp_path: Path) -> None:
        commands = InProcessCommandQueue()
        trigger = ImportTrigger(commands)
        export_file = tmp_path / "rhino_export.json"

        trigger(export_file)

        assert commands.commands.get_nowait() == (DEFAULT_IMPORT_COMMAND, export_file)
        assert commands.commands.empty()

    def test_custom_command(self, tmp_path: Path) -> None:
        commands = InProcessCommandQueue()
        ImportTrigger(commands, "MYIMPORT")(str(tmp_path / "rhino_export.json"))

        command, export_file = commands.commands.get_nowait()
        assert command == "MYIMPORT"
        assert isinstance(export_file, Path)


class TestSubprocessCommandQueue:
    """Tests for SubprocessCommandQueue."""

    def test_empty_command_line(self) -> None:
        with pytest.raises(ValueError):
            SubprocessCommandQueue("")

    def test_runs_command_with_placeholders(self, tmp_path: Path) -> None:
        out = tmp_path / "out.txt"
        script = f"import sys; open({str(out)!r}, 'w').write(' '.join(sys.argv[1:]))"
        commands = SubprocessCommandQueue([sys.executable, "-c", script, "{command}", "{export_file}"])

        commands.send("IMPORTFROMRHINO", tmp_path / "rhino_export.json")
        for process in commands.processes:
            process.wait(timeout=30)

        assert out.read_text() == f"IMPORTFROMRHINO {tmp_path / 'rhino_export.json'}"
