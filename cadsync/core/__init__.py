"""Core sync functionality."""

from .encoder import GeometryEncoder, classify, pack_argb
from .operations import ExportOperations, ExportResult, ExportStatus
from .poller import ChangePoller, PollState
from .prompts import RichPrompter
from .resolver import Prompter, TargetResolver
from .settings_store import SettingsStore, write_json_atomic
from .trigger import ImportTrigger, InProcessCommandQueue, SubprocessCommandQueue
from .writer import ExportWriter

__all__ = [
    "ChangePoller",
    "ExportOperations",
    "ExportResult",
    "ExportStatus",
    "ExportWriter",
    "GeometryEncoder",
    "ImportTrigger",
    "InProcessCommandQueue",
    "PollState",
    "Prompter",
    "RichPrompter",
    "SettingsStore",
    "SubprocessCommandQueue",
    "TargetResolver",
    "classify",
    "pack_argb",
    "write_json_atomic",
]
