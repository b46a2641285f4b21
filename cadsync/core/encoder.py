"""Encode host geometry into interchange records."""

import logging
from collections.abc import Iterable

from ..host.protocols import (
    BrepLike,
    Color,
    CurveLike,
    Geometry,
    GeometryKind,
    HostObject,
    MeshLike,
    SurfaceLike,
)
from ..models.export import (
    BoundingBox,
    BrepPayload,
    ClosedPolysurfacePayload,
    CurvePayload,
    EdgeRecord,
    ExportedObject,
    FaceRecord,
    GeometryPayload,
    GeometryType,
    Interval,
    MeshFace,
    MeshPayload,
    OpenPolysurfacePayload,
    OtherPayload,
    Point3,
    SurfacePayload,
)

logger = logging.getLogger(__name__)

DEFAULT_CURVE_SAMPLES = 100


def pack_argb(color: Color) -> int:
    """Pack an RGBA tuple into a signed 32-bit ARGB integer."""
    r, g, b, a = color
    packed = ((a & 0xFF) << 24) | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)
    return packed - (1 << 32) if packed >= (1 << 31) else packed


def classify(geometry: Geometry) -> str:
    """Pick the interchange tag for a geometry.

    Shells are checked in order: solid, then multi-face, then single face.
    Geometry without a known kind lands on the ``Other`` arm.
    """
    match getattr(geometry, "geometry_kind", None):
        case GeometryKind.CURVE:
            return GeometryType.CURVE
        case GeometryKind.SURFACE:
            return GeometryType.SURFACE
        case GeometryKind.BREP if geometry.is_solid:
            return GeometryType.CLOSED_POLYSURFACE
        case GeometryKind.BREP if len(geometry.faces) > 1:
            return GeometryType.OPEN_POLYSURFACE
        case GeometryKind.BREP:
            return GeometryType.BREP
        case GeometryKind.MESH:
            return GeometryType.MESH
        case _:
            return GeometryType.OTHER


def bounding_box(geometry: Geometry) -> BoundingBox:
    lo, hi = geometry.bounding_box()
    return BoundingBox(min=Point3.of(lo), max=Point3.of(hi))


class GeometryEncoder:
    """Turns host objects into :class:`ExportedObject` records."""

    def __init__(self, curve_samples: int = DEFAULT_CURVE_SAMPLES) -> None:
        """Initialize encoder.

        Args:
            curve_samples: Number of intervals curves are sampled over;
                each curve yields curve_samples + 1 points
        """
        if curve_samples < 1:
            raise ValueError(f"curve_samples must be at least 1, got {curve_samples}")
        self.curve_samples = curve_samples

    def encode(self, obj: HostObject) -> ExportedObject:
        """Encode a single host object.

        Raises:
            Exception: Whatever the host geometry raises while being read
        """
        geometry_type, payload = self.encode_geometry(obj.geometry)
        return ExportedObject(
            id=str(obj.id),
            name=obj.name or f"Object_{obj.id}",
            layer=obj.layer or "Default",
            object_type=obj.object_type,
            color=pack_argb(obj.color),
            geometry_type=geometry_type,
            geometry_data=payload,
        )

    def encode_all(self, objects: Iterable[HostObject]) -> list[ExportedObject]:
        """Encode objects, skipping any that fail.

        A failure on one object is logged and never aborts the others.
        """
        encoded: list[ExportedObject] = []
        for obj in objects:
            try:
                encoded.append(self.encode(obj))
            except Exception as e:
                logger.warning("Error converting object %s: %s", getattr(obj, "id", "?"), e)
        return encoded

    def encode_geometry(self, geometry: Geometry) -> tuple[str, GeometryPayload]:
        """Return (geometry type tag, payload) for a geometry."""
        geometry_type = classify(geometry)
        match geometry_type:
            case GeometryType.CURVE:
                payload = self.encode_curve(geometry)
            case GeometryType.SURFACE:
                payload = self.encode_surface(geometry)
            case GeometryType.CLOSED_POLYSURFACE:
                payload = self.encode_closed_polysurface(geometry)
            case GeometryType.OPEN_POLYSURFACE:
                payload = self.encode_open_polysurface(geometry)
            case GeometryType.BREP:
                payload = self.encode_brep(geometry)
            case GeometryType.MESH:
                payload = self.encode_mesh(geometry)
            case _:
                payload = OtherPayload(bounding_box=bounding_box(geometry))
        return geometry_type, payload

    def encode_curve(self, curve: CurveLike) -> CurvePayload:
        t0, t1 = curve.domain
        n = self.curve_samples
        points = [Point3.of(curve.point_at(t0 + (i / n) * (t1 - t0))) for i in range(n + 1)]
        return CurvePayload(
            points=points,
            is_closed=bool(curve.is_closed),
            degree=int(curve.degree),
            length=float(curve.length()),
        )

    def encode_surface(self, surface: SurfaceLike) -> SurfacePayload:
        u_min, u_max = surface.domain(0)
        v_min, v_max = surface.domain(1)
        return SurfacePayload(
            u_domain=Interval(float(u_min), float(u_max)),
            v_domain=Interval(float(v_min), float(v_max)),
            closed_u=bool(surface.is_closed(0)),
            closed_v=bool(surface.is_closed(1)),
            area=float(surface.area()),
        )

    def _encode_faces(self, brep: BrepLike) -> list[FaceRecord]:
        return [
            FaceRecord(
                index=int(face.index),
                surface=self.encode_surface(face),
                area=float(face.area()),
                is_planar=bool(face.is_planar()),
                orientation_is_reversed=bool(face.orientation_is_reversed),
            )
            for face in brep.faces
        ]

    def encode_closed_polysurface(self, brep: BrepLike) -> ClosedPolysurfacePayload:
        edges = [
            EdgeRecord(
                index=int(edge.index),
                start=Point3.of(edge.start_vertex),
                end=Point3.of(edge.end_vertex),
                length=float(edge.length()),
            )
            for edge in brep.edges
        ]
        return ClosedPolysurfacePayload(
            is_manifold=bool(brep.is_manifold),
            face_count=len(brep.faces),
            edge_count=len(brep.edges),
            vertex_count=int(brep.vertex_count),
            volume=float(brep.volume()),
            surface_area=float(brep.area()),
            bounding_box=bounding_box(brep),
            faces=self._encode_faces(brep),
            edges=edges,
        )

    def encode_open_polysurface(self, brep: BrepLike) -> OpenPolysurfacePayload:
        return OpenPolysurfacePayload(
            is_manifold=bool(brep.is_manifold),
            face_count=len(brep.faces),
            edge_count=len(brep.edges),
            vertex_count=int(brep.vertex_count),
            surface_area=float(brep.area()),
            bounding_box=bounding_box(brep),
            faces=self._encode_faces(brep),
        )

    def encode_brep(self, brep: BrepLike) -> BrepPayload:
        face = brep.faces[0]
        return BrepPayload(
            edge_count=len(brep.edges),
            surface=self.encode_surface(face),
            area=float(face.area()),
            is_planar=bool(face.is_planar()),
            bounding_box=bounding_box(brep),
        )

    def encode_mesh(self, mesh: MeshLike) -> MeshPayload:
        faces = []
        for face in mesh.faces:
            indices = tuple(int(i) for i in face)
            # Hosts store triangles as quads with a repeated last index
            if len(indices) == 4 and indices[2] == indices[3]:
                indices = indices[:3]
            faces.append(MeshFace(indices))
        return MeshPayload(
            vertices=[Point3.of(v) for v in mesh.vertices],
            faces=faces,
        )
