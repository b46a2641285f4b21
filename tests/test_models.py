"""Tests for interchange data models."""

import pytest

from cadsync.models.export import (
    ExportDocument,
    ExportedObject,
    MeshFace,
    PAYLOAD_TYPES,
    GeometryType,
)


class TestExportedObject:
    """Tests for ExportedObject."""

    def test_unknown_geometry_type(self) -> None:
        data = {
            "Id": "1",
            "Name": "n",
            "Layer": "Default",
            "ObjectType": "Curve",
            "GeometryType": "Nurbs",
            "GeometryData": {},
            "Color": 0,
        }
        with pytest.raises(ValueError):
            ExportedObject.from_dict(data)

    def test_every_tag_has_a_payload(self) -> None:
        tags = {
            value for name, value in vars(GeometryType).items() if not name.startswith("_")
        }
        assert tags == set(PAYLOAD_TYPES)


class TestExportDocument:
    """Tests for ExportDocument."""

    def test_top_level_keys(self) -> None:
        document = ExportDocument(
            timestamp="2024-05-01T12:00:00+00:00",
            target_file="C:\\drawings\\plan.dwg",
            source_file="C:\\models\\plan.3dm",
        )
        assert list(document.to_dict()) == ["Version", "Timestamp", "TargetFile", "SourceFile", "Objects"]

    def test_missing_version_defaults(self) -> None:
        document = ExportDocument.from_dict({"Timestamp": "t", "TargetFile": "a", "SourceFile": "b"})
        assert document.version == "1.0"
        assert document.objects == []


class TestMeshFace:
    """Tests for MeshFace."""

    def test_from_dict(self) -> None:
        assert MeshFace.from_dict({"A": 0, "B": 1, "C": 2, "Type": "Triangle"}).is_triangle
        quad = MeshFace.from_dict({"A": 0, "B": 1, "C": 2, "D": 3, "Type": "Quad"})
        assert quad.indices == (0, 1, 2, 3)

    def test_rejects_pentagon(self) -> None:
        with pytest.raises(ValueError):
            MeshFace((0, 1, 2, 3, 4))
