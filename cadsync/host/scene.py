"""Scene files: a YAML stand-in for an open host document.

A scene lists objects with their attributes and geometry::

    path: C:/models/bracket.3dm
    objects:
      - name: Rail
        layer: Curves
        color: [255, 0, 0, 255]
        selected: true
        geometry: {type: polyline, points: [[0, 0, 0], [10, 0, 0], [10, 5, 0]]}
      - geometry: {type: box, origin: [0, 0, 0], size: [10, 10, 10]}

When ``path`` is omitted the scene file's own path is used as the source
file path.
"""

import math
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..errors import SceneError
from .protocols import Color, Geometry
from .shapes import (
    ArcCurve,
    LineCurve,
    PlaneSurface,
    PointGeometry,
    PolyfaceBrep,
    PolygonMesh,
    PolylineCurve,
)


@dataclass
class SceneObject:
    """Host object read from a scene file."""

    geometry: Geometry
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str | None = None
    layer: str | None = None
    object_type: str = "Unknown"
    color: Color = (0, 0, 0, 255)
    is_valid: bool = True
    visible: bool = True
    selected: bool = False


@dataclass
class SceneDocument:
    """Host document read from a scene file."""

    path: str
    objects: list[SceneObject] = field(default_factory=list)

    def selected_objects(self) -> list[SceneObject]:
        return [obj for obj in self.objects if obj.selected]


def _point(value: Any, what: str) -> tuple[float, float, float]:
    if not isinstance(value, (list, tuple)) or len(value) not in (2, 3):
        raise SceneError(f"{what} must be a list of 2 or 3 numbers, got {value!r}")
    coords = [float(c) for c in value]
    if len(coords) == 2:
        coords.append(0.0)
    return (coords[0], coords[1], coords[2])


def _build_geometry(data: dict[str, Any]) -> tuple[Geometry, str]:
    """Build geometry from its scene description.

    Returns:
        Tuple of (geometry, host object type name)
    """
    kind = data.get("type")
    match kind:
        case "line":
            return LineCurve(_point(data["start"], "start"), _point(data["end"], "end")), "Curve"
        case "polyline":
            points = [_point(p, "polyline point") for p in data["points"]]
            return PolylineCurve(points), "Curve"
        case "arc" | "circle":
            return ArcCurve(
                center=_point(data.get("center", [0, 0, 0]), "center"),
                radius=float(data["radius"]),
                start_angle=float(data.get("start_angle", 0.0)),
                sweep=float(data["sweep"]) if kind == "arc" else 2 * math.pi,
            ), "Curve"
        case "plane":
            return PlaneSurface(
                origin=_point(data.get("origin", [0, 0, 0]), "origin"),
                width=float(data["width"]),
                height=float(data["height"]),
            ), "Surface"
        case "box":
            return PolyfaceBrep.box(
                origin=_point(data.get("origin", [0, 0, 0]), "origin"),
                size=_point(data["size"], "size"),
                omit=tuple(data.get("omit", ())),
            ), "Brep"
        case "face":
            corners = [_point(p, "face corner") for p in data["corners"]]
            return PolyfaceBrep.planar(corners), "Brep"
        case "polysurface":
            vertices = [_point(p, "vertex") for p in data["vertices"]]
            return PolyfaceBrep(vertices, [tuple(f) for f in data["faces"]]), "Brep"
        case "mesh":
            vertices = [_point(p, "vertex") for p in data["vertices"]]
            return PolygonMesh(vertices, [tuple(f) for f in data["faces"]]), "Mesh"
        case "point":
            return PointGeometry(_point(data["location"], "location")), "Point"
        case _:
            raise SceneError(f"Unknown geometry type: {kind!r}")


def object_from_dict(data: dict[str, Any]) -> SceneObject:
    """Create a scene object from its dictionary form."""
    if not isinstance(data, dict) or not isinstance(data.get("geometry"), dict):
        raise SceneError(f"Scene object needs a 'geometry' mapping: {data!r}")

    try:
        geometry, object_type = _build_geometry(data["geometry"])
    except (KeyError, TypeError, ValueError) as e:
        raise SceneError(f"Invalid geometry {data['geometry']!r}: {e}") from e

    color = data.get("color", [0, 0, 0, 255])
    if not isinstance(color, (list, tuple)) or len(color) not in (3, 4):
        raise SceneError(f"color must be [r, g, b] or [r, g, b, a], got {color!r}")
    rgba = tuple(int(c) for c in color) + ((255,) if len(color) == 3 else ())

    obj = SceneObject(
        geometry=geometry,
        name=data.get("name"),
        layer=data.get("layer"),
        object_type=data.get("object_type", object_type),
        color=rgba,  # type: ignore[arg-type]
        is_valid=data.get("valid", True),
        visible=data.get("visible", True),
        selected=data.get("selected", False),
    )
    if data.get("id"):
        obj.id = str(data["id"])
    return obj


def load_scene(scene_path: Path) -> SceneDocument:
    """Load a scene file as a host document.

    Raises:
        SceneError: If the file is not a valid scene description
        OSError: If the file cannot be read
    """
    scene_path = Path(scene_path)
    with open(scene_path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SceneError(f"Invalid scene file {scene_path}: {e}") from e

    if not isinstance(data, dict):
        raise SceneError(f"Scene file {scene_path} must contain a mapping")

    objects = [object_from_dict(item) for item in data.get("objects") or []]
    return SceneDocument(
        path=str(data.get("path") or scene_path.resolve()),
        objects=objects,
    )
