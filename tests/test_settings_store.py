"""Tests for the persistent settings document."""

import json
import tempfile
from pathlib import Path

import pytest

from cadsync.core.settings_store import SettingsStore, write_json_atomic
from cadsync.models.settings import SyncSettings


class TestSettingsStore:
    """Tests for SettingsStore."""

    def test_missing_file_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            store = SettingsStore(Path(tmpdir))
            settings = store.load()

            assert settings.last_directory is None
            assert settings.file_targets == {}

    def test_corrupt_file_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            store = SettingsStore(Path(tmpdir))
            store.settings_file.write_text("{not json")

            assert store.load().file_targets == {}

    def test_non_object_file_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            store = SettingsStore(Path(tmpdir))
            store.settings_file.write_text("[1, 2, 3]")

            assert store.load().file_targets == {}

    def test_malformed_entries_dropped(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            store = SettingsStore(Path(tmpdir))
            store.settings_file.write_text(json.dumps({
                "last_directory": 42,
                "file_targets": {
                    "good.3dm": {"last_target": "/a/good.dwg", "last_sync": "2024-01-01T00:00:00"},
                    "bad.3dm": "not an object",
                    "empty.3dm": {"last_sync": "2024-01-01T00:00:00"},
                },
            }))

            settings = store.load()
            assert settings.last_directory is None
            assert list(settings.file_targets) == ["good.3dm"]

    def test_remember_and_reload(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir) / "root"
            SettingsStore(root).remember_target("/models/a.3dm", "/drawings/a.dwg")

            # Load in new instance
            memory = SettingsStore(root).get_target_memory("/models/a.3dm")
            assert memory is not None
            assert memory.last_target == "/drawings/a.dwg"
            assert memory.last_sync

    def test_remember_overwrites(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            store = SettingsStore(Path(tmpdir))
            store.remember_target("/models/a.3dm", "/drawings/first.dwg")
            store.remember_target("/models/a.3dm", "/drawings/second.dwg")

            settings = store.load()
            assert len(settings.file_targets) == 1
            assert settings.get_target("/models/a.3dm").last_target == "/drawings/second.dwg"

    def test_last_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            store = SettingsStore(Path(tmpdir))
            assert store.get_last_directory() is None

            store.set_last_directory("/drawings")
            store.remember_target("/models/a.3dm", "/drawings/a.dwg")

            assert store.get_last_directory() == "/drawings"

    def test_document_shape(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            store = SettingsStore(Path(tmpdir))
            store.set_last_directory("/drawings")
            store.remember_target("/models/a.3dm", "/drawings/a.dwg")

            data = json.loads(store.settings_file.read_text())
            assert data["last_directory"] == "/drawings"
            assert set(data["file_targets"]["/models/a.3dm"]) == {"last_target", "last_sync"}

    def test_status_summary(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "a.dwg"
            target.write_text("")
            store = SettingsStore(Path(tmpdir))
            store.remember_target("/models/a.3dm", str(target))
            store.remember_target("/models/b.3dm", str(Path(tmpdir) / "gone.dwg"))

            summary = store.get_status_summary()
            assert summary["tracked_files"] == 2
            exists = {f["source"]: f["target_exists"] for f in summary["files"]}
            assert exists == {"/models/a.3dm": True, "/models/b.3dm": False}


class TestWriteJsonAtomic:
    """Tests for write_json_atomic."""

    def test_writes_pretty_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "out.json"
            write_json_atomic(path, {"a": 1})

            assert path.read_text() == '{\n  "a": 1\n}\n'
            assert list(Path(tmpdir).iterdir()) == [path]

    def test_failure_leaves_previous_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "out.json"
            write_json_atomic(path, {"a": 1})

            with pytest.raises(TypeError):
                write_json_atomic(path, {"a": object()})

            assert json.loads(path.read_text()) == {"a": 1}
            assert list(Path(tmpdir).iterdir()) == [path]


class TestSyncSettings:
    """Tests for SyncSettings model."""

    def test_round_trip_without_directory(self) -> None:
        settings = SyncSettings()
        settings.remember_target("a.3dm", "a.dwg")

        data = settings.to_dict()
        assert "last_directory" not in data

        restored = SyncSettings.from_dict(data)
        assert restored.get_target("a.3dm").last_target == "a.dwg"
