"""Read-only view of the host application's object model.

The exporter never constructs or mutates host geometry; it only reads it
through these protocols. A host adapter wraps its native objects so that
each geometry reports a ``geometry_kind`` and an accurate world-space
``bounding_box()``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Protocol

Point = tuple[float, float, float]
Color = tuple[int, int, int, int]  # RGBA, 0-255 each


class GeometryKind(Enum):
    """Geometry families the host exposes to the exporter."""

    CURVE = "curve"
    SURFACE = "surface"
    BREP = "brep"
    MESH = "mesh"


class Geometry(Protocol):
    def bounding_box(self) -> tuple[Point, Point]:
        """Return (min, max) corners in world space."""
        ...


class CurveLike(Geometry, Protocol):
    geometry_kind: GeometryKind
    is_closed: bool
    degree: int

    @property
    def domain(self) -> tuple[float, float]: ...

    def point_at(self, t: float) -> Point: ...

    def length(self) -> float: ...


class SurfaceLike(Geometry, Protocol):
    geometry_kind: GeometryKind

    def domain(self, direction: int) -> tuple[float, float]: ...

    def is_closed(self, direction: int) -> bool: ...

    def area(self) -> float: ...


class BrepFaceLike(SurfaceLike, Protocol):
    index: int
    orientation_is_reversed: bool

    def is_planar(self) -> bool: ...


class BrepEdgeLike(Protocol):
    index: int
    start_vertex: Point
    end_vertex: Point

    def length(self) -> float: ...


class BrepLike(Geometry, Protocol):
    geometry_kind: GeometryKind
    is_solid: bool
    is_manifold: bool

    @property
    def faces(self) -> Sequence[BrepFaceLike]: ...

    @property
    def edges(self) -> Sequence[BrepEdgeLike]: ...

    @property
    def vertex_count(self) -> int: ...

    def volume(self) -> float: ...

    def area(self) -> float: ...


class MeshLike(Geometry, Protocol):
    geometry_kind: GeometryKind

    @property
    def vertices(self) -> Sequence[Point]: ...

    @property
    def faces(self) -> Sequence[Sequence[int]]: ...


class HostObject(Protocol):
    """A document object together with its attributes."""

    id: str
    name: str | None
    layer: str | None
    object_type: str
    color: Color
    is_valid: bool
    visible: bool
    geometry: Geometry


class HostDocument(Protocol):
    """The open document in the source application."""

    path: str

    @property
    def objects(self) -> Iterable[HostObject]: ...

    def selected_objects(self) -> list[HostObject]: ...
