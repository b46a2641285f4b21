"""Reference geometry implementing the host protocols.

These are small, exact shapes (lines, polylines, arcs, planar patches,
planar-faced polysurfaces, polygon meshes, points). They stand in for a CAD
host when exporting from a scene file and give the encoder something real
to read in tests.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .protocols import GeometryKind, Point

PLANAR_TOLERANCE = 1e-9


def _sub(a: Point, b: Point) -> Point:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _cross(a: Point, b: Point) -> Point:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _dot(a: Point, b: Point) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _norm(a: Point) -> float:
    return math.sqrt(_dot(a, a))


def _distance(a: Point, b: Point) -> float:
    return _norm(_sub(a, b))


def _lerp(a: Point, b: Point, s: float) -> Point:
    return (a[0] + (b[0] - a[0]) * s, a[1] + (b[1] - a[1]) * s, a[2] + (b[2] - a[2]) * s)


def bounds(points: list[Point]) -> tuple[Point, Point]:
    """Axis-aligned (min, max) of a point set."""
    if not points:
        raise ValueError("Cannot compute bounds of an empty point set")
    xs, ys, zs = zip(*points)
    return (min(xs), min(ys), min(zs)), (max(xs), max(ys), max(zs))


def polygon_normal(corners: list[Point]) -> Point:
    """Newell normal of a polygon; its length is twice the polygon area."""
    nx = ny = nz = 0.0
    for i, current in enumerate(corners):
        following = corners[(i + 1) % len(corners)]
        nx += (current[1] - following[1]) * (current[2] + following[2])
        ny += (current[2] - following[2]) * (current[0] + following[0])
        nz += (current[0] - following[0]) * (current[1] + following[1])
    return (nx, ny, nz)


# =========================================================================
# Curves
# =========================================================================

@dataclass
class LineCurve:
    """Straight segment, parameterized over ``domain``."""

    start: Point
    end: Point
    t0: float = 0.0
    t1: float = 1.0

    geometry_kind = GeometryKind.CURVE
    is_closed = False
    degree = 1

    @property
    def domain(self) -> tuple[float, float]:
        return (self.t0, self.t1)

    def point_at(self, t: float) -> Point:
        return _lerp(self.start, self.end, (t - self.t0) / (self.t1 - self.t0))

    def length(self) -> float:
        return _distance(self.start, self.end)

    def bounding_box(self) -> tuple[Point, Point]:
        return bounds([self.start, self.end])


@dataclass
class PolylineCurve:
    """Connected segments; parameter i lands on vertex i."""

    points: list[Point]
    degree = 1
    geometry_kind = GeometryKind.CURVE

    def __post_init__(self) -> None:
        if len(self.points) < 2:
            raise ValueError("A polyline needs at least two points")
        self.points = [tuple(float(c) for c in p) for p in self.points]

    @property
    def domain(self) -> tuple[float, float]:
        return (0.0, float(len(self.points) - 1))

    @property
    def is_closed(self) -> bool:
        return len(self.points) > 3 and self.points[0] == self.points[-1]

    def point_at(self, t: float) -> Point:
        last = len(self.points) - 1
        t = min(max(t, 0.0), float(last))
        segment = min(int(math.floor(t)), last - 1)
        return _lerp(self.points[segment], self.points[segment + 1], t - segment)

    def length(self) -> float:
        return sum(_distance(a, b) for a, b in zip(self.points, self.points[1:]))

    def bounding_box(self) -> tuple[Point, Point]:
        return bounds(self.points)


@dataclass
class ArcCurve:
    """Circular arc in a plane parallel to XY.

    The parameter is the angle swept from ``start_angle`` (radians), so the
    domain is ``[0, sweep]``. A sweep of 2*pi is a full circle.
    """

    center: Point
    radius: float
    start_angle: float = 0.0
    sweep: float = 2 * math.pi

    geometry_kind = GeometryKind.CURVE
    degree = 2

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise ValueError(f"Arc radius must be positive, got {self.radius}")
        if self.sweep == 0 or abs(self.sweep) > 2 * math.pi + 1e-12:
            raise ValueError(f"Arc sweep must be in (0, 2*pi], got {self.sweep}")

    @property
    def domain(self) -> tuple[float, float]:
        return (0.0, self.sweep)

    @property
    def is_closed(self) -> bool:
        return math.isclose(abs(self.sweep), 2 * math.pi)

    def point_at(self, t: float) -> Point:
        angle = self.start_angle + t
        return (
            self.center[0] + self.radius * math.cos(angle),
            self.center[1] + self.radius * math.sin(angle),
            self.center[2],
        )

    def length(self) -> float:
        return abs(self.sweep) * self.radius

    def bounding_box(self) -> tuple[Point, Point]:
        points = [self.point_at(0.0), self.point_at(self.sweep)]
        # Add every axis extreme the arc passes through
        lo, hi = sorted((self.start_angle, self.start_angle + self.sweep))
        k = math.ceil(lo / (math.pi / 2))
        while k * (math.pi / 2) <= hi:
            points.append(self.point_at(k * (math.pi / 2) - self.start_angle))
            k += 1
        return bounds(points)


# =========================================================================
# Surfaces and polysurfaces
# =========================================================================

@dataclass
class PlaneSurface:
    """Rectangular patch parallel to XY at height ``origin[2]``."""

    origin: Point
    width: float
    height: float

    geometry_kind = GeometryKind.SURFACE

    def domain(self, direction: int) -> tuple[float, float]:
        return (0.0, self.width if direction == 0 else self.height)

    def is_closed(self, direction: int) -> bool:
        return False

    def area(self) -> float:
        return self.width * self.height

    def bounding_box(self) -> tuple[Point, Point]:
        x, y, z = self.origin
        return (x, y, z), (x + self.width, y + self.height, z)


@dataclass
class PlanarFace:
    """Polygonal face of a :class:`PolyfaceBrep`.

    The u direction runs along the first polygon side and v along the last,
    each with a domain as long as that side.
    """

    index: int
    corners: list[Point]
    orientation_is_reversed: bool = False

    geometry_kind = GeometryKind.SURFACE

    def domain(self, direction: int) -> tuple[float, float]:
        if direction == 0:
            return (0.0, _distance(self.corners[0], self.corners[1]))
        return (0.0, _distance(self.corners[0], self.corners[-1]))

    def is_closed(self, direction: int) -> bool:
        return False

    def area(self) -> float:
        return _norm(polygon_normal(self.corners)) / 2

    def is_planar(self) -> bool:
        normal = polygon_normal(self.corners)
        size = _norm(normal)
        if size == 0:
            return False
        unit = (normal[0] / size, normal[1] / size, normal[2] / size)
        origin = self.corners[0]
        return all(
            abs(_dot(_sub(c, origin), unit)) <= PLANAR_TOLERANCE for c in self.corners
        )

    def bounding_box(self) -> tuple[Point, Point]:
        return bounds(self.corners)


@dataclass
class BrepEdge:
    index: int
    start_vertex: Point
    end_vertex: Point

    def length(self) -> float:
        return _distance(self.start_vertex, self.end_vertex)


@dataclass
class PolyfaceBrep:
    """Polysurface whose faces are planar polygons sharing vertices.

    Edges are derived from the face loops. The shell is solid when every
    edge is used by exactly two faces.
    """

    vertices: list[Point]
    face_loops: list[tuple[int, ...]]
    _faces: list[PlanarFace] = field(init=False, repr=False)
    _edges: list[BrepEdge] = field(init=False, repr=False)
    _edge_use: dict[tuple[int, int], int] = field(init=False, repr=False)

    geometry_kind = GeometryKind.BREP

    def __post_init__(self) -> None:
        if not self.face_loops:
            raise ValueError("A polysurface needs at least one face")
        self.vertices = [tuple(float(c) for c in v) for v in self.vertices]
        self.face_loops = [tuple(loop) for loop in self.face_loops]
        for loop in self.face_loops:
            if any(i < 0 or i >= len(self.vertices) for i in loop):
                raise ValueError(f"Face loop {loop} references a missing vertex")
        self._faces = []
        self._edges = []
        self._edge_use = {}
        for index, loop in enumerate(self.face_loops):
            if len(loop) < 3:
                raise ValueError(f"Face {index} has fewer than three vertices")
            self._faces.append(PlanarFace(index, [self.vertices[i] for i in loop]))
            for a, b in zip(loop, loop[1:] + loop[:1]):
                key = (min(a, b), max(a, b))
                if key not in self._edge_use:
                    self._edge_use[key] = 0
                    self._edges.append(
                        BrepEdge(len(self._edges), self.vertices[a], self.vertices[b])
                    )
                self._edge_use[key] += 1

    @classmethod
    def box(
        cls,
        origin: Point,
        size: tuple[float, float, float],
        omit: tuple[str, ...] = (),
    ) -> "PolyfaceBrep":
        """Axis-aligned box with outward-facing faces.

        Args:
            origin: Minimum corner
            size: Extent along x, y and z
            omit: Face names to leave out ("bottom", "top", "front",
                "right", "back", "left"); any omission opens the shell
        """
        x0, y0, z0 = origin
        dx, dy, dz = size
        if min(dx, dy, dz) <= 0:
            raise ValueError(f"Box size must be positive, got {size}")
        x1, y1, z1 = x0 + dx, y0 + dy, z0 + dz
        vertices = [
            (x0, y0, z0), (x1, y0, z0), (x1, y1, z0), (x0, y1, z0),
            (x0, y0, z1), (x1, y0, z1), (x1, y1, z1), (x0, y1, z1),
        ]
        named_faces = {
            "bottom": (0, 3, 2, 1),
            "top": (4, 5, 6, 7),
            "front": (0, 1, 5, 4),
            "right": (1, 2, 6, 5),
            "back": (2, 3, 7, 6),
            "left": (3, 0, 4, 7),
        }
        unknown = set(omit) - set(named_faces)
        if unknown:
            raise ValueError(f"Unknown box faces: {sorted(unknown)}")
        loops = [loop for name, loop in named_faces.items() if name not in omit]
        return cls(vertices, loops)

    @classmethod
    def planar(cls, corners: list[Point]) -> "PolyfaceBrep":
        """Single-face polysurface bounded by ``corners``."""
        return cls(list(corners), [tuple(range(len(corners)))])

    @property
    def faces(self) -> list[PlanarFace]:
        return self._faces

    @property
    def edges(self) -> list[BrepEdge]:
        return self._edges

    @property
    def vertex_count(self) -> int:
        return len({i for loop in self.face_loops for i in loop})

    @property
    def is_solid(self) -> bool:
        return all(count == 2 for count in self._edge_use.values())

    @property
    def is_manifold(self) -> bool:
        return all(count <= 2 for count in self._edge_use.values())

    def area(self) -> float:
        return sum(face.area() for face in self._faces)

    def volume(self) -> float:
        """Enclosed volume, or 0.0 for an open shell."""
        if not self.is_solid:
            return 0.0
        total = 0.0
        for face in self._faces:
            first = face.corners[0]
            for b, c in zip(face.corners[1:], face.corners[2:]):
                total += _dot(first, _cross(b, c)) / 6.0
        return abs(total)

    def bounding_box(self) -> tuple[Point, Point]:
        used = sorted({i for loop in self.face_loops for i in loop})
        return bounds([self.vertices[i] for i in used])


# =========================================================================
# Meshes and others
# =========================================================================

@dataclass
class PolygonMesh:
    """Triangle/quad mesh."""

    vertices: list[Point]
    faces: list[tuple[int, ...]]

    geometry_kind = GeometryKind.MESH

    def __post_init__(self) -> None:
        self.vertices = [tuple(float(c) for c in v) for v in self.vertices]
        for face in self.faces:
            if len(face) not in (3, 4):
                raise ValueError(f"Mesh faces must have 3 or 4 vertices, got {len(face)}")
            if any(i < 0 or i >= len(self.vertices) for i in face):
                raise ValueError(f"Mesh face {face} references a missing vertex")
        self.faces = [tuple(face) for face in self.faces]

    def bounding_box(self) -> tuple[Point, Point]:
        return bounds(self.vertices)


@dataclass
class PointGeometry:
    """A point object; has no dedicated interchange encoding."""

    location: Point

    def bounding_box(self) -> tuple[Point, Point]:
        return self.location, self.location
