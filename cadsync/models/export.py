"""Interchange schema for exported geometry.

The export document is the only thing the source and target applications
share. Each exported object carries a ``GeometryType`` tag and a payload
whose shape is fixed by that tag; ``PAYLOAD_TYPES`` lists the complete set.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


SCHEMA_VERSION = "1.0"


class GeometryType:
    """Geometry kind tags written to ``GeometryType``."""

    CURVE = "Curve"
    SURFACE = "Surface"
    CLOSED_POLYSURFACE = "ClosedPolysurface"
    OPEN_POLYSURFACE = "OpenPolysurface"
    BREP = "Brep"
    MESH = "Mesh"
    OTHER = "Other"


@dataclass
class Point3:
    """A point in world coordinates."""

    x: float
    y: float
    z: float

    def to_dict(self) -> dict[str, float]:
        return {"X": self.x, "Y": self.y, "Z": self.z}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point3":
        return cls(x=data["X"], y=data["Y"], z=data["Z"])

    @classmethod
    def of(cls, coords: Any) -> "Point3":
        """Build from any (x, y, z) sequence."""
        x, y, z = coords
        return cls(float(x), float(y), float(z))


@dataclass
class Interval:
    """A parameter domain."""

    min: float
    max: float

    def to_dict(self) -> dict[str, float]:
        return {"Min": self.min, "Max": self.max}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Interval":
        return cls(min=data["Min"], max=data["Max"])


@dataclass
class BoundingBox:
    """Axis-aligned world-space bounding box."""

    min: Point3
    max: Point3

    def to_dict(self) -> dict[str, Any]:
        return {"Min": self.min.to_dict(), "Max": self.max.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BoundingBox":
        return cls(min=Point3.from_dict(data["Min"]), max=Point3.from_dict(data["Max"]))


@dataclass
class CurvePayload:
    """Sampled points plus summary values of a curve."""

    points: list[Point3]
    is_closed: bool
    degree: int
    length: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "Points": [p.to_dict() for p in self.points],
            "IsClosed": self.is_closed,
            "Degree": self.degree,
            "Length": self.length,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CurvePayload":
        return cls(
            points=[Point3.from_dict(p) for p in data["Points"]],
            is_closed=data["IsClosed"],
            degree=data["Degree"],
            length=data["Length"],
        )


@dataclass
class SurfacePayload:
    """Parametric domains, closedness and area of a surface."""

    u_domain: Interval
    v_domain: Interval
    closed_u: bool
    closed_v: bool
    area: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "UDomain": self.u_domain.to_dict(),
            "VDomain": self.v_domain.to_dict(),
            "IsClosed": {"U": self.closed_u, "V": self.closed_v},
            "Area": self.area,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SurfacePayload":
        return cls(
            u_domain=Interval.from_dict(data["UDomain"]),
            v_domain=Interval.from_dict(data["VDomain"]),
            closed_u=data["IsClosed"]["U"],
            closed_v=data["IsClosed"]["V"],
            area=data["Area"],
        )


@dataclass
class FaceRecord:
    """One face of a polysurface."""

    index: int
    surface: SurfacePayload
    area: float
    is_planar: bool
    orientation_is_reversed: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "Index": self.index,
            "SurfaceData": self.surface.to_dict(),
            "Area": self.area,
            "IsPlanar": self.is_planar,
            "OrientationIsReversed": self.orientation_is_reversed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FaceRecord":
        return cls(
            index=data["Index"],
            surface=SurfacePayload.from_dict(data["SurfaceData"]),
            area=data["Area"],
            is_planar=data["IsPlanar"],
            orientation_is_reversed=data["OrientationIsReversed"],
        )


@dataclass
class EdgeRecord:
    """One edge of a closed polysurface."""

    index: int
    start: Point3
    end: Point3
    length: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "Index": self.index,
            "StartVertex": self.start.to_dict(),
            "EndVertex": self.end.to_dict(),
            "Length": self.length,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EdgeRecord":
        return cls(
            index=data["Index"],
            start=Point3.from_dict(data["StartVertex"]),
            end=Point3.from_dict(data["EndVertex"]),
            length=data["Length"],
        )


@dataclass
class ClosedPolysurfacePayload:
    """Most detailed record, emitted only for watertight solids."""

    is_manifold: bool
    face_count: int
    edge_count: int
    vertex_count: int
    volume: float
    surface_area: float
    bounding_box: BoundingBox
    faces: list[FaceRecord] = field(default_factory=list)
    edges: list[EdgeRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "IsSolid": True,
            "IsManifold": self.is_manifold,
            "FaceCount": self.face_count,
            "EdgeCount": self.edge_count,
            "VertexCount": self.vertex_count,
            "Volume": self.volume,
            "SurfaceArea": self.surface_area,
            "BoundingBox": self.bounding_box.to_dict(),
            "Faces": [f.to_dict() for f in self.faces],
            "Edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClosedPolysurfacePayload":
        return cls(
            is_manifold=data["IsManifold"],
            face_count=data["FaceCount"],
            edge_count=data["EdgeCount"],
            vertex_count=data["VertexCount"],
            volume=data["Volume"],
            surface_area=data["SurfaceArea"],
            bounding_box=BoundingBox.from_dict(data["BoundingBox"]),
            faces=[FaceRecord.from_dict(f) for f in data["Faces"]],
            edges=[EdgeRecord.from_dict(e) for e in data["Edges"]],
        )


@dataclass
class OpenPolysurfacePayload:
    """Multi-face shell that does not enclose a volume."""

    is_manifold: bool
    face_count: int
    edge_count: int
    vertex_count: int
    surface_area: float
    bounding_box: BoundingBox
    faces: list[FaceRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "IsSolid": False,
            "IsManifold": self.is_manifold,
            "FaceCount": self.face_count,
            "EdgeCount": self.edge_count,
            "VertexCount": self.vertex_count,
            "SurfaceArea": self.surface_area,
            "BoundingBox": self.bounding_box.to_dict(),
            "Faces": [f.to_dict() for f in self.faces],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OpenPolysurfacePayload":
        return cls(
            is_manifold=data["IsManifold"],
            face_count=data["FaceCount"],
            edge_count=data["EdgeCount"],
            vertex_count=data["VertexCount"],
            surface_area=data["SurfaceArea"],
            bounding_box=BoundingBox.from_dict(data["BoundingBox"]),
            faces=[FaceRecord.from_dict(f) for f in data["Faces"]],
        )


@dataclass
class BrepPayload:
    """Single-face shell."""

    edge_count: int
    surface: SurfacePayload
    area: float
    is_planar: bool
    bounding_box: BoundingBox

    def to_dict(self) -> dict[str, Any]:
        return {
            "FaceCount": 1,
            "EdgeCount": self.edge_count,
            "IsSolid": False,
            "SurfaceData": self.surface.to_dict(),
            "Area": self.area,
            "IsPlanar": self.is_planar,
            "BoundingBox": self.bounding_box.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BrepPayload":
        return cls(
            edge_count=data["EdgeCount"],
            surface=SurfacePayload.from_dict(data["SurfaceData"]),
            area=data["Area"],
            is_planar=data["IsPlanar"],
            bounding_box=BoundingBox.from_dict(data["BoundingBox"]),
        )


@dataclass
class MeshFace:
    """Triangle (three indices) or quad (four indices)."""

    indices: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.indices) not in (3, 4):
            raise ValueError(f"Mesh faces must have 3 or 4 vertices, got {len(self.indices)}")
        self.indices = tuple(int(i) for i in self.indices)

    @property
    def is_triangle(self) -> bool:
        return len(self.indices) == 3

    def to_dict(self) -> dict[str, Any]:
        if self.is_triangle:
            a, b, c = self.indices
            return {"A": a, "B": b, "C": c, "Type": "Triangle"}
        a, b, c, d = self.indices
        return {"A": a, "B": b, "C": c, "D": d, "Type": "Quad"}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MeshFace":
        if data.get("Type") == "Quad":
            return cls((data["A"], data["B"], data["C"], data["D"]))
        return cls((data["A"], data["B"], data["C"]))


@dataclass
class MeshPayload:
    """Exact mesh topology, no decimation."""

    vertices: list[Point3]
    faces: list[MeshFace]

    def to_dict(self) -> dict[str, Any]:
        return {
            "Vertices": [v.to_dict() for v in self.vertices],
            "Faces": [f.to_dict() for f in self.faces],
            "VertexCount": len(self.vertices),
            "FaceCount": len(self.faces),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MeshPayload":
        return cls(
            vertices=[Point3.from_dict(v) for v in data["Vertices"]],
            faces=[MeshFace.from_dict(f) for f in data["Faces"]],
        )


@dataclass
class OtherPayload:
    """Fallback record for geometry with no dedicated encoding."""

    bounding_box: BoundingBox

    def to_dict(self) -> dict[str, Any]:
        return {"BoundingBox": self.bounding_box.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OtherPayload":
        return cls(bounding_box=BoundingBox.from_dict(data["BoundingBox"]))


GeometryPayload = (
    CurvePayload
    | SurfacePayload
    | ClosedPolysurfacePayload
    | OpenPolysurfacePayload
    | BrepPayload
    | MeshPayload
    | OtherPayload
)

PAYLOAD_TYPES: dict[str, type] = {
    GeometryType.CURVE: CurvePayload,
    GeometryType.SURFACE: SurfacePayload,
    GeometryType.CLOSED_POLYSURFACE: ClosedPolysurfacePayload,
    GeometryType.OPEN_POLYSURFACE: OpenPolysurfacePayload,
    GeometryType.BREP: BrepPayload,
    GeometryType.MESH: MeshPayload,
    GeometryType.OTHER: OtherPayload,
}


@dataclass
class ExportedObject:
    """One host object in interchange form."""

    id: str
    name: str
    layer: str
    object_type: str
    color: int  # Packed signed 32-bit ARGB
    geometry_type: str
    geometry_data: GeometryPayload

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "Id": self.id,
            "Name": self.name,
            "Layer": self.layer,
            "ObjectType": self.object_type,
            "GeometryType": self.geometry_type,
            "GeometryData": self.geometry_data.to_dict(),
            "Color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExportedObject":
        """Create from dictionary.

        Raises:
            ValueError: If the geometry type tag is not part of the schema
        """
        geometry_type = data["GeometryType"]
        payload_cls = PAYLOAD_TYPES.get(geometry_type)
        if payload_cls is None:
            raise ValueError(f"Unknown geometry type: {geometry_type}")
        return cls(
            id=data["Id"],
            name=data["Name"],
            layer=data["Layer"],
            object_type=data["ObjectType"],
            color=data["Color"],
            geometry_type=geometry_type,
            geometry_data=payload_cls.from_dict(data["GeometryData"]),
        )


@dataclass
class ExportDocument:
    """Full snapshot written by one sync run."""

    timestamp: str
    target_file: str
    source_file: str
    objects: list[ExportedObject] = field(default_factory=list)
    version: str = SCHEMA_VERSION

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "Version": self.version,
            "Timestamp": self.timestamp,
            "TargetFile": self.target_file,
            "SourceFile": self.source_file,
            "Objects": [o.to_dict() for o in self.objects],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExportDocument":
        """Create from dictionary."""
        return cls(
            timestamp=data.get("Timestamp", ""),
            target_file=data.get("TargetFile", ""),
            source_file=data.get("SourceFile", ""),
            objects=[ExportedObject.from_dict(o) for o in data.get("Objects") or []],
            version=data.get("Version", SCHEMA_VERSION),
        )


@dataclass
class SyncMetadata:
    """Small side-channel describing the latest export."""

    target_file: str
    source_file: str
    last_sync: str
    object_count: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "TargetFile": self.target_file,
            "SourceFile": self.source_file,
            "LastSync": self.last_sync,
            "ObjectCount": self.object_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncMetadata":
        """Create from dictionary."""
        return cls(
            target_file=data.get("TargetFile", ""),
            source_file=data.get("SourceFile", ""),
            last_sync=data.get("LastSync", ""),
            object_count=data.get("ObjectCount", 0),
        )


def load_export_document(path: Path) -> ExportDocument:
    """Read an export document written by a sync run."""
    with open(path) as f:
        data = json.load(f)
    return ExportDocument.from_dict(data)


def load_sync_metadata(path: Path) -> SyncMetadata:
    """Read a sync metadata document."""
    with open(path) as f:
        data = json.load(f)
    return SyncMetadata.from_dict(data)
