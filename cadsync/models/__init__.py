"""Data models for the sync system."""

from .config import (
    CadSyncConfig,
    default_sync_root,
    sanitize_folder_name,
    sync_folder_for_target,
)
from .export import (
    ExportDocument,
    ExportedObject,
    GeometryType,
    PAYLOAD_TYPES,
    SyncMetadata,
    load_export_document,
    load_sync_metadata,
)
from .settings import SyncSettings, TargetMemory

__all__ = [
    "CadSyncConfig",
    "ExportDocument",
    "ExportedObject",
    "GeometryType",
    "PAYLOAD_TYPES",
    "SyncMetadata",
    "SyncSettings",
    "TargetMemory",
    "default_sync_root",
    "load_export_document",
    "load_sync_metadata",
    "sanitize_folder_name",
    "sync_folder_for_target",
]
