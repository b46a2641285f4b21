"""Target-side detection of new export documents.

The poller stats the export document in one sync folder at a fixed
interval and reports each strictly newer modification time exactly once.
All of its state lives on the instance, so independent pollers (or tests)
never interfere with each other.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..models.config import EXPORT_FILENAME

logger = logging.getLogger(__name__)


@dataclass
class PollState:
    """What the poller is watching and what it has already seen."""

    enabled: bool = False
    folder: Path | None = None
    last_seen_mtime: float | None = None  # None means never


class ChangePoller:
    """Watches a sync folder and calls ``on_update`` for each new export."""

    def __init__(
        self,
        on_update: Callable[[Path], None],
        interval: float = 1.0,
        export_filename: str = EXPORT_FILENAME,
    ) -> None:
        """Initialize poller.

        Args:
            on_update: Called with the export document path when it changes
            interval: Seconds between ticks
            export_filename: Name of the export document in the sync folder
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.on_update = on_update
        self.interval = interval
        self.export_filename = export_filename
        self.state = PollState()
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def current_folder(self) -> Path | None:
        """The folder being watched, or None when idle."""
        return self.state.folder

    @property
    def is_watching(self) -> bool:
        return self.state.enabled

    def start(self, folder: Path) -> None:
        """Start watching ``folder``; restarts the timer if already running."""
        self.stop()
        with self._lock:
            self.state.folder = Path(folder)
            self.state.last_seen_mtime = None
            self.state.enabled = True
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name="cadsync-poller",
                daemon=True,
            )
            self._thread.start()
        logger.info("Auto-sync started for %s", folder)

    def stop(self) -> None:
        """Stop watching. No tick runs after this returns."""
        with self._lock:
            was_enabled = self.state.enabled
            self.state.enabled = False
            self.state.folder = None
            self._stop_event.set()
            thread = self._thread
            self._thread = None

        if thread is not None and thread is not threading.current_thread():
            thread.join()
        if was_enabled:
            logger.info("Auto-sync stopped")

    def tick(self) -> bool:
        """Check once for a newer export document.

        Returns:
            True if an update was reported
        """
        try:
            with self._lock:
                if not self.state.enabled or self.state.folder is None:
                    return False

                export_path = self.state.folder / self.export_filename
                try:
                    mtime = export_path.stat().st_mtime
                except FileNotFoundError:
                    return False

                last_seen = self.state.last_seen_mtime
                if last_seen is not None and mtime <= last_seen:
                    return False

                self.state.last_seen_mtime = mtime

            logger.info("Detected new export: %s", export_path)
            self.on_update(export_path)
            return True
        except Exception as e:
            logger.warning("Auto-sync error: %s", e)
            return False

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(timeout=self.interval):
            self.tick()
