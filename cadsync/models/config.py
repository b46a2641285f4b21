"""Configuration models and path helpers for the sync system."""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from ..errors import ConfigError


SETTINGS_FILENAME = "rhino_sync_settings.json"
EXPORT_FILENAME = "rhino_export.json"
METADATA_FILENAME = "sync_metadata.json"
CONFIG_FILENAME = "cadsync.yaml"

# Characters a file name may not contain, per platform family
_ILLEGAL_NT = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_ILLEGAL_POSIX = re.compile(r"[/\x00]")


def default_sync_root() -> Path:
    """Return the well-known sync root for this machine."""
    if os.name == "nt":
        return Path("C:/RhinoAutoCADSync")
    return Path.home() / "RhinoAutoCADSync"


def sanitize_folder_name(name: str, platform: str | None = None) -> str:
    """Strip characters that are illegal in a file name.

    Args:
        name: Raw name (usually a target file stem)
        platform: "nt" or "posix" (defaults to the running platform)

    Returns:
        The name with every illegal character removed, or "unnamed"
        if nothing is left
    """
    pattern = _ILLEGAL_NT if (platform or os.name) == "nt" else _ILLEGAL_POSIX
    sanitized = pattern.sub("", name)
    return sanitized or "unnamed"


def sync_folder_for_target(
    sync_root: Path,
    target_file: str,
    default_extension: str = "dwg",
) -> Path:
    """Map a target file to its sync folder under the sync root.

    The folder is named ``<stem>_<ext>``; the same target always maps to
    the same folder.
    """
    # Targets remembered on Windows keep backslashes
    target = Path(target_file.replace("\\", "/"))
    extension = target.suffix.lstrip(".").lower() or default_extension
    safe_name = sanitize_folder_name(target.stem)
    return Path(sync_root) / f"{safe_name}_{sanitize_folder_name(extension)}"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


@dataclass
class CadSyncConfig:
    """Main configuration for the sync system.

    Values come from (lowest to highest priority) built-in defaults, the
    YAML config file, and CADSYNC_* environment variables (a ``.env``
    file is honoured).
    """

    sync_root: Path = field(default_factory=default_sync_root)
    poll_interval: float = 1.0  # Seconds between poll ticks
    curve_samples: int = 100  # Curve is sampled at curve_samples + 1 points
    settings_filename: str = SETTINGS_FILENAME
    export_filename: str = EXPORT_FILENAME
    metadata_filename: str = METADATA_FILENAME
    target_extension: str = "dwg"
    file_filter: str = "*.dwg"
    import_command: str = "IMPORTFROMRHINO"

    def __post_init__(self) -> None:
        self.sync_root = Path(self.sync_root).expanduser()
        if self.poll_interval <= 0:
            raise ConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.curve_samples < 1:
            raise ConfigError(f"curve_samples must be at least 1, got {self.curve_samples}")

    def sync_folder_for(self, target_file: str) -> Path:
        """Get the sync folder for a target file."""
        return sync_folder_for_target(self.sync_root, target_file, self.target_extension)

    @property
    def settings_path(self) -> Path:
        return self.sync_root / self.settings_filename

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CadSyncConfig":
        """Create from dictionary."""
        return cls(
            sync_root=Path(data["sync_root"]) if data.get("sync_root") else default_sync_root(),
            poll_interval=float(data.get("poll_interval", 1.0)),
            curve_samples=int(data.get("curve_samples", 100)),
            settings_filename=data.get("settings_filename", SETTINGS_FILENAME),
            export_filename=data.get("export_filename", EXPORT_FILENAME),
            metadata_filename=data.get("metadata_filename", METADATA_FILENAME),
            target_extension=data.get("target_extension", "dwg"),
            file_filter=data.get("file_filter", "*.dwg"),
            import_command=data.get("import_command", "IMPORTFROMRHINO"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        return {
            "sync_root": str(self.sync_root),
            "poll_interval": self.poll_interval,
            "curve_samples": self.curve_samples,
            "settings_filename": self.settings_filename,
            "export_filename": self.export_filename,
            "metadata_filename": self.metadata_filename,
            "target_extension": self.target_extension,
            "file_filter": self.file_filter,
            "import_command": self.import_command,
        }

    @classmethod
    def load(cls, config_path: Path | None = None) -> "CadSyncConfig":
        """Load configuration from YAML and the environment.

        Args:
            config_path: Explicit YAML file. When omitted, ``cadsync.yaml``
                inside the sync root is used if it exists.

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file or an override holds an invalid value
        """
        load_dotenv()

        env_root = os.getenv("CADSYNC_ROOT")
        if config_path is None:
            root = Path(env_root).expanduser() if env_root else default_sync_root()
            config_path = root / CONFIG_FILENAME

        data: dict[str, Any] = {}
        if Path(config_path).exists():
            with open(config_path) as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ConfigError(f"Invalid config file {config_path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Config file {config_path} must contain a mapping")

        if env_root:
            data["sync_root"] = env_root

        try:
            config = cls.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid config value in {config_path}: {e}") from e

        config.poll_interval = _env_float("CADSYNC_POLL_INTERVAL", config.poll_interval)
        config.curve_samples = _env_int("CADSYNC_CURVE_SAMPLES", config.curve_samples)
        config.__post_init__()
        return config

    def save(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        Path(config_path).parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
