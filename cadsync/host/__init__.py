"""Host application boundary: protocols and reference geometry."""

from .protocols import GeometryKind, HostDocument, HostObject
from .scene import SceneDocument, SceneObject, load_scene
from .shapes import (
    ArcCurve,
    LineCurve,
    PlaneSurface,
    PointGeometry,
    PolyfaceBrep,
    PolygonMesh,
    PolylineCurve,
)

__all__ = [
    "ArcCurve",
    "GeometryKind",
    "HostDocument",
    "HostObject",
    "LineCurve",
    "PlaneSurface",
    "PointGeometry",
    "PolyfaceBrep",
    "PolygonMesh",
    "PolylineCurve",
    "SceneDocument",
    "SceneObject",
    "load_scene",
]
