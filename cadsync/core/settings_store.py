"""Persistent settings document shared by all sync runs."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from ..models.config import SETTINGS_FILENAME
from ..models.settings import SyncSettings, TargetMemory

logger = logging.getLogger(__name__)


def write_json_atomic(path: Path, data: dict[str, Any]) -> None:
    """Write pretty-printed JSON so readers never see a partial file.

    The content goes to a ``.tmp`` sibling first and is then renamed over
    the destination.
    """
    path = Path(path)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


class SettingsStore:
    """Reads and writes the settings document under a sync root.

    Nothing is cached between calls: every read goes to disk so two
    commands never work from diverging copies.
    """

    def __init__(self, sync_root: Path, filename: str = SETTINGS_FILENAME) -> None:
        """Initialize settings store.

        Args:
            sync_root: Directory holding the settings document
            filename: Settings document file name
        """
        self.sync_root = Path(sync_root)
        self.settings_file = self.sync_root / filename

    def load(self) -> SyncSettings:
        """Load settings, treating a missing or damaged file as empty."""
        if not self.settings_file.exists():
            return SyncSettings()

        try:
            with open(self.settings_file, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.settings_file, e)
            return SyncSettings()

        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: not a JSON object", self.settings_file)
            return SyncSettings()

        return SyncSettings.from_dict(data)

    def save(self, settings: SyncSettings) -> None:
        """Overwrite the settings document."""
        self.sync_root.mkdir(parents=True, exist_ok=True)
        write_json_atomic(self.settings_file, settings.to_dict())

    def get_target_memory(self, source_file: str) -> TargetMemory | None:
        """Get the remembered target for a source file."""
        return self.load().get_target(source_file)

    def remember_target(self, source_file: str, target_file: str) -> TargetMemory:
        """Record the target a source file was synced to."""
        settings = self.load()
        memory = settings.remember_target(source_file, target_file)
        self.save(settings)
        return memory

    def get_last_directory(self) -> str | None:
        """Get the directory the file chooser last used."""
        return self.load().last_directory

    def set_last_directory(self, directory: str) -> None:
        """Record the directory the file chooser last used."""
        settings = self.load()
        settings.last_directory = directory
        self.save(settings)

    def get_status_summary(self) -> dict[str, Any]:
        """Get a summary of remembered targets."""
        settings = self.load()
        return {
            "settings_file": str(self.settings_file),
            "last_directory": settings.last_directory,
            "tracked_files": len(settings.file_targets),
            "files": [
                {
                    "source": source,
                    "target": memory.last_target,
                    "last_sync": memory.last_sync,
                    "target_exists": Path(memory.last_target).exists(),
                }
                for source, memory in settings.file_targets.items()
            ],
        }
