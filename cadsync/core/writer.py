"""Write export and metadata documents into a sync folder."""

import logging
from pathlib import Path

from ..models.config import EXPORT_FILENAME, METADATA_FILENAME
from ..models.export import ExportDocument, SyncMetadata
from .settings_store import SettingsStore, write_json_atomic

logger = logging.getLogger(__name__)


class ExportWriter:
    """Drops a sync run's documents into its sync folder."""

    def __init__(
        self,
        store: SettingsStore,
        export_filename: str = EXPORT_FILENAME,
        metadata_filename: str = METADATA_FILENAME,
    ) -> None:
        """Initialize export writer.

        Args:
            store: Settings store updated with the target after each write
            export_filename: Name of the export document in the sync folder
            metadata_filename: Name of the metadata document in the sync folder
        """
        self.store = store
        self.export_filename = export_filename
        self.metadata_filename = metadata_filename

    def write(
        self,
        document: ExportDocument,
        metadata: SyncMetadata,
        folder: Path,
    ) -> tuple[Path, Path]:
        """Write both documents, then remember the target.

        Steps run in order: create folders, write export, write metadata,
        record target memory. A failure stops the sequence and propagates;
        files already written stay in place.

        Returns:
            Tuple of (export path, metadata path)

        Raises:
            OSError: If a directory or file cannot be written
        """
        folder = Path(folder)
        self.store.sync_root.mkdir(parents=True, exist_ok=True)
        folder.mkdir(parents=True, exist_ok=True)

        export_path = folder / self.export_filename
        write_json_atomic(export_path, document.to_dict())
        logger.debug("Wrote %d objects to %s", len(document.objects), export_path)

        metadata_path = folder / self.metadata_filename
        write_json_atomic(metadata_path, metadata.to_dict())

        self.store.remember_target(document.source_file, document.target_file)
        return export_path, metadata_path
