"""Export operations run from the source application."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from ..host.protocols import HostDocument, HostObject
from ..models.config import CadSyncConfig
from ..models.export import ExportDocument, SyncMetadata
from .encoder import GeometryEncoder
from .resolver import Prompter, TargetResolver
from .settings_store import SettingsStore
from .writer import ExportWriter

logger = logging.getLogger(__name__)

SCOPE_ALL = "All"
SCOPE_SELECTED = "Selected"


class ExportStatus:
    """Outcome of an export run."""

    SUCCESS = "success"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class ExportResult:
    """Result of an export run."""

    status: str
    message: str
    object_count: int = 0
    target_file: str | None = None
    sync_folder: Path | None = None

    @property
    def success(self) -> bool:
        return self.status == ExportStatus.SUCCESS

    @property
    def cancelled(self) -> bool:
        return self.status == ExportStatus.CANCELLED

    @property
    def failed(self) -> bool:
        return self.status == ExportStatus.FAILED


class ExportOperations:
    """Runs the full and quick export flows for a host document."""

    def __init__(
        self,
        config: CadSyncConfig,
        prompter: Prompter,
        store: SettingsStore | None = None,
        encoder: GeometryEncoder | None = None,
        writer: ExportWriter | None = None,
    ) -> None:
        """Initialize export operations.

        Args:
            config: Sync configuration
            prompter: User interaction for target and object selection
            store: Settings store (created under the sync root if not provided)
            encoder: Geometry encoder (created from config if not provided)
            writer: Export writer (created from config if not provided)
        """
        self.config = config
        self.prompter = prompter
        self.store = store or SettingsStore(config.sync_root, config.settings_filename)
        self.encoder = encoder or GeometryEncoder(config.curve_samples)
        self.writer = writer or ExportWriter(
            self.store,
            export_filename=config.export_filename,
            metadata_filename=config.metadata_filename,
        )
        self.resolver = TargetResolver(self.store, prompter, config.file_filter)

    def export(self, document: HostDocument, scope: str | None = None) -> ExportResult:
        """Export a document, asking for the target.

        Args:
            document: Open host document
            scope: "All" or "Selected"; asked for when None

        Returns:
            ExportResult
        """
        target_file = self.resolver.resolve(document.path)
        if not target_file:
            return ExportResult(ExportStatus.CANCELLED, "Export cancelled.")
        return self._export_to(document, target_file, scope)

    def export_last(self, document: HostDocument, scope: str | None = None) -> ExportResult:
        """Export a document to its remembered target without asking for one."""
        target_file = self.resolver.remembered_target(document.path)
        if not target_file:
            return ExportResult(
                ExportStatus.CANCELLED,
                "No previous sync target found. Use 'export' to select target.",
            )
        logger.info("Quick sync to: %s", Path(target_file).name)
        return self._export_to(document, target_file, scope)

    def ask_scope(self) -> str | None:
        """Ask whether to export all objects or only the selection."""
        return self.prompter.choose(
            "Export all objects or selected objects?",
            [SCOPE_ALL, SCOPE_SELECTED],
        )

    def select_objects(self, document: HostDocument, scope: str) -> list[HostObject]:
        """Pick the objects to export for a scope."""
        if scope == SCOPE_ALL:
            return [obj for obj in document.objects if obj.is_valid and obj.visible]
        if scope == SCOPE_SELECTED:
            return list(document.selected_objects())
        raise ValueError(f"Unknown export scope: {scope}")

    def _export_to(self, document: HostDocument, target_file: str, scope: str | None) -> ExportResult:
        if scope is None:
            scope = self.ask_scope()
            if scope is None:
                return ExportResult(ExportStatus.CANCELLED, "Export cancelled.", target_file=target_file)

        objects = self.select_objects(document, scope)
        if not objects:
            message = (
                "No objects selected. Please select objects first."
                if scope == SCOPE_SELECTED
                else "No valid objects to export."
            )
            return ExportResult(ExportStatus.CANCELLED, message, target_file=target_file)

        sync_folder = self.config.sync_folder_for(target_file)

        try:
            exported = self.encoder.encode_all(objects)
            now = datetime.now(timezone.utc).isoformat()
            export_document = ExportDocument(
                timestamp=now,
                target_file=target_file,
                source_file=document.path,
                objects=exported,
            )
            metadata = SyncMetadata(
                target_file=target_file,
                source_file=document.path,
                last_sync=now,
                object_count=len(exported),
            )
            self.writer.write(export_document, metadata, sync_folder)
        except Exception as e:
            logger.exception("Export to %s failed", target_file)
            return ExportResult(
                ExportStatus.FAILED,
                f"Error exporting to AutoCAD: {e}",
                target_file=target_file,
                sync_folder=sync_folder,
            )

        return ExportResult(
            ExportStatus.SUCCESS,
            f"Exported {len(exported)} objects to: {Path(target_file).name}",
            object_count=len(exported),
            target_file=target_file,
            sync_folder=sync_folder,
        )
