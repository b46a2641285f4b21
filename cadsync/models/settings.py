"""Typed model of the persisted sync settings document."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class TargetMemory:
    """Which target a source file was last synced to."""

    last_target: str  # Target file path
    last_sync: str  # ISO timestamp of last sync

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {
            "last_target": self.last_target,
            "last_sync": self.last_sync,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TargetMemory":
        """Create from dictionary."""
        return cls(
            last_target=str(data.get("last_target") or ""),
            last_sync=str(data.get("last_sync") or ""),
        )


@dataclass
class SyncSettings:
    """Settings document shared by all sync runs under one sync root.

    Maps each source file path to its target memory, plus the directory
    the file chooser was last pointed at.
    """

    last_directory: str | None = None
    file_targets: dict[str, TargetMemory] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {}
        if self.last_directory:
            result["last_directory"] = self.last_directory
        result["file_targets"] = {k: v.to_dict() for k, v in self.file_targets.items()}
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncSettings":
        """Create from dictionary.

        Members with the wrong shape are dropped rather than rejected so a
        hand-edited document never blocks a sync.
        """
        last_directory = data.get("last_directory")
        if not isinstance(last_directory, str) or not last_directory:
            last_directory = None

        file_targets: dict[str, TargetMemory] = {}
        raw_targets = data.get("file_targets")
        if isinstance(raw_targets, dict):
            for source, entry in raw_targets.items():
                if not isinstance(entry, dict):
                    continue
                memory = TargetMemory.from_dict(entry)
                if memory.last_target:
                    file_targets[source] = memory

        return cls(last_directory=last_directory, file_targets=file_targets)

    def get_target(self, source_file: str) -> TargetMemory | None:
        """Get target memory for a source file."""
        return self.file_targets.get(source_file)

    def remember_target(self, source_file: str, target_file: str) -> TargetMemory:
        """Record the target for a source file, replacing any previous entry."""
        memory = TargetMemory(
            last_target=target_file,
            last_sync=datetime.now(timezone.utc).isoformat(),
        )
        self.file_targets[source_file] = memory
        return memory
