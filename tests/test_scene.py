"""Tests for scene files."""

import tempfile
from pathlib import Path

import pytest

from cadsync.errors import SceneError
from cadsync.host.scene import load_scene, object_from_dict
from cadsync.host.shapes import ArcCurve, PolyfaceBrep, PolygonMesh

SCENE = """\
path: C:/models/bracket.3dm
objects:
  - id: rail
    name: Rail
    layer: Curves
    color: [255, 0, 0]
    selected: true
    geometry: {type: polyline, points: [[0, 0], [10, 0], [10, 5]]}
  - geometry: {type: box, origin: [0, 0, 0], size: [10, 10, 10]}
  - geometry: {type: circle, center: [0, 0, 0], radius: 2}
    visible: false
  - geometry:
      type: mesh
      vertices: [[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]]
      faces: [[0, 1, 2, 3]]
"""


class TestLoadScene:
    """Tests for load_scene."""

    def test_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            scene_path = Path(tmpdir) / "scene.yaml"
            scene_path.write_text(SCENE)

            document = load_scene(scene_path)

        assert document.path == "C:/models/bracket.3dm"
        assert len(document.objects) == 4

        rail = document.objects[0]
        assert rail.id == "rail"
        assert rail.color == (255, 0, 0, 255)
        assert rail.object_type == "Curve"
        assert [obj.id for obj in document.selected_objects()] == ["rail"]

        assert isinstance(document.objects[1].geometry, PolyfaceBrep)
        assert document.objects[1].geometry.is_solid
        assert isinstance(document.objects[2].geometry, ArcCurve)
        assert document.objects[2].visible is False
        assert isinstance(document.objects[3].geometry, PolygonMesh)

    def test_path_defaults_to_scene_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            scene_path = Path(tmpdir) / "scene.yaml"
            scene_path.write_text("objects: []\n")

            document = load_scene(scene_path)
            assert document.path == str(scene_path.resolve())
            assert document.objects == []

    def test_invalid_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            scene_path = Path(tmpdir) / "scene.yaml"
            scene_path.write_text("objects: [unclosed\n")
            with pytest.raises(SceneError):
                load_scene(scene_path)


class TestObjectFromDict:
    """Tests for object_from_dict."""

    def test_unknown_geometry_type(self) -> None:
        with pytest.raises(SceneError):
            object_from_dict({"geometry": {"type": "nurbs"}})

    def test_missing_geometry(self) -> None:
        with pytest.raises(SceneError):
            object_from_dict({"name": "nothing"})

    def test_invalid_geometry_values(self) -> None:
        with pytest.raises(SceneError):
            object_from_dict({"geometry": {"type": "box", "size": [0, 1, 1]}})

    def test_bad_color(self) -> None:
        with pytest.raises(SceneError):
            object_from_dict({"color": [1, 2], "geometry": {"type": "point", "location": [0, 0, 0]}})

    def test_generated_ids_are_unique(self) -> None:
        data = {"geometry": {"type": "line", "start": [0, 0, 0], "end": [1, 0, 0]}}
        assert object_from_dict(data).id != object_from_dict(data).id
