"""Tests for target resolution."""

from pathlib import Path

from cadsync.core.resolver import CHOOSE_NEW, USE_LAST, TargetResolver
from cadsync.core.settings_store import SettingsStore

from .conftest import FakePrompter


class TestTargetResolver:
    """Tests for TargetResolver."""

    def test_no_memory_shows_file_chooser(self, sync_root: Path, target_file: str) -> None:
        prompter = FakePrompter(files=[target_file])
        resolver = TargetResolver(SettingsStore(sync_root), prompter)

        assert resolver.resolve("/models/a.3dm") == target_file
        assert prompter.choose_calls == []
        title, _, file_filter = prompter.select_calls[0]
        assert title == "Select AutoCAD file to sync to"
        assert file_filter == "*.dwg"

    def test_use_last_skips_file_chooser(self, sync_root: Path, target_file: str) -> None:
        store = SettingsStore(sync_root)
        store.remember_target("/models/a.3dm", target_file)
        prompter = FakePrompter(choices=[USE_LAST])

        assert TargetResolver(store, prompter).resolve("/models/a.3dm") == target_file
        message, options = prompter.choose_calls[0]
        assert message == "Sync target - Last used: Plan A.dwg"
        assert options == [USE_LAST, CHOOSE_NEW]
        assert prompter.select_calls == []

    def test_choose_new(self, sync_root: Path, target_file: str, tmp_path: Path) -> None:
        other = tmp_path / "drawings" / "other.dwg"
        other.write_text("")
        store = SettingsStore(sync_root)
        store.remember_target("/models/a.3dm", target_file)
        prompter = FakePrompter(choices=[CHOOSE_NEW], files=[str(other)])

        assert TargetResolver(store, prompter).resolve("/models/a.3dm") == str(other)

    def test_stale_target_not_offered(self, sync_root: Path, tmp_path: Path, target_file: str) -> None:
        store = SettingsStore(sync_root)
        store.remember_target("/models/a.3dm", str(tmp_path / "deleted.dwg"))
        prompter = FakePrompter(files=[target_file])

        resolver = TargetResolver(store, prompter)
        assert resolver.remembered_target("/models/a.3dm") is None
        assert resolver.resolve("/models/a.3dm") == target_file
        assert prompter.choose_calls == []

    def test_cancel_reuse_prompt(self, sync_root: Path, target_file: str) -> None:
        store = SettingsStore(sync_root)
        store.remember_target("/models/a.3dm", target_file)
        prompter = FakePrompter(choices=[None])

        assert TargetResolver(store, prompter).resolve("/models/a.3dm") is None
        assert prompter.select_calls == []

    def test_cancel_file_chooser(self, sync_root: Path) -> None:
        store = SettingsStore(sync_root)
        prompter = FakePrompter(files=[None])

        assert TargetResolver(store, prompter).resolve("/models/a.3dm") is None
        assert store.get_last_directory() is None

    def test_chosen_directory_remembered(self, sync_root: Path, target_file: str) -> None:
        store = SettingsStore(sync_root)
        TargetResolver(store, FakePrompter(files=[target_file])).resolve("/models/a.3dm")

        assert store.get_last_directory() == str(Path(target_file).parent)

        prompter = FakePrompter(files=[None])
        TargetResolver(store, prompter).resolve("/models/b.3dm")
        assert prompter.select_calls[0][1] == str(Path(target_file).parent)

    def test_resolve_does_not_remember_target(self, sync_root: Path, target_file: str) -> None:
        store = SettingsStore(sync_root)
        TargetResolver(store, FakePrompter(files=[target_file])).resolve("/models/a.3dm")

        assert store.get_target_memory("/models/a.3dm") is None
