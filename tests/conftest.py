"""Shared fixtures for sync tests."""

from pathlib import Path

import pytest

from cadsync.host.scene import SceneDocument, SceneObject
from cadsync.host.shapes import LineCurve, PolyfaceBrep
from cadsync.models.config import CadSyncConfig


class FakePrompter:
    """Prompter that replays scripted answers and records what was asked."""

    def __init__(self, choices: list[str | None] | None = None, files: list[str | None] | None = None) -> None:
        self.choices = list(choices or [])
        self.files = list(files or [])
        self.choose_calls: list[tuple[str, list[str]]] = []
        self.select_calls: list[tuple[str, str, str]] = []

    def choose(self, message: str, options: list[str]) -> str | None:
        self.choose_calls.append((message, options))
        if not self.choices:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.choices.pop(0)

    def select_file(self, title: str, initial_directory: str, file_filter: str) -> str | None:
        self.select_calls.append((title, initial_directory, file_filter))
        if not self.files:
            raise AssertionError(f"Unexpected file chooser: {title}")
        return self.files.pop(0)


@pytest.fixture
def sync_root(tmp_path: Path) -> Path:
    return tmp_path / "sync_root"


@pytest.fixture
def config(sync_root: Path) -> CadSyncConfig:
    return CadSyncConfig(sync_root=sync_root)


@pytest.fixture
def target_file(tmp_path: Path) -> str:
    drawings = tmp_path / "drawings"
    drawings.mkdir()
    target = drawings / "Plan A.dwg"
    target.write_text("")
    return str(target)


@pytest.fixture
def document(tmp_path: Path) -> SceneDocument:
    """Source document holding a line and a closed box."""
    return SceneDocument(
        path=str(tmp_path / "model.3dm"),
        objects=[
            SceneObject(
                LineCurve((0.0, 0.0, 0.0), (10.0, 0.0, 0.0)),
                id="line-1",
                name="Rail",
                layer="Curves",
                object_type="Curve",
                color=(255, 0, 0, 255),
                selected=True,
            ),
            SceneObject(
                PolyfaceBrep.box((0.0, 0.0, 0.0), (1.0, 1.0, 1.0)),
                id="box-1",
                object_type="Brep",
            ),
        ],
    )
