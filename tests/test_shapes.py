"""Tests for reference geometry."""

import math

import pytest

from cadsync.host.shapes import (
    ArcCurve,
    PlanarFace,
    PolyfaceBrep,
    PolygonMesh,
    PolylineCurve,
)


class TestPolyfaceBrep:
    """Tests for PolyfaceBrep."""

    def test_box_is_solid(self) -> None:
        box = PolyfaceBrep.box((1.0, 1.0, 1.0), (2.0, 2.0, 2.0))

        assert box.is_solid
        assert box.is_manifold
        assert len(box.faces) == 6
        assert len(box.edges) == 12
        assert box.vertex_count == 8
        assert box.volume() == pytest.approx(8.0)
        assert box.area() == pytest.approx(24.0)
        assert box.bounding_box() == ((1.0, 1.0, 1.0), (3.0, 3.0, 3.0))

    def test_open_box(self) -> None:
        box = PolyfaceBrep.box((0, 0, 0), (1, 1, 1), omit=("top", "bottom"))

        assert not box.is_solid
        assert box.is_manifold
        assert box.volume() == 0.0
        assert len(box.faces) == 4

    def test_unknown_face_name(self) -> None:
        with pytest.raises(ValueError):
            PolyfaceBrep.box((0, 0, 0), (1, 1, 1), omit=("roof",))

    def test_bad_vertex_index(self) -> None:
        with pytest.raises(ValueError):
            PolyfaceBrep([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [(0, 1, 5)])

    def test_non_manifold_edge(self) -> None:
        vertices = [(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, -1, 0), (0, 0, 1)]
        fan = PolyfaceBrep(vertices, [(0, 1, 2), (0, 1, 3), (0, 1, 4)])

        assert not fan.is_manifold
        assert not fan.is_solid


class TestPlanarFace:
    """Tests for PlanarFace."""

    def test_area_and_planarity(self) -> None:
        face = PlanarFace(0, [(0, 0, 0), (2, 0, 0), (2, 3, 0), (0, 3, 0)])

        assert face.area() == pytest.approx(6.0)
        assert face.is_planar()
        assert face.domain(0) == (0.0, 2.0)
        assert face.domain(1) == (0.0, 3.0)

    def test_warped_face(self) -> None:
        face = PlanarFace(0, [(0, 0, 0), (1, 0, 0), (1, 1, 0.5), (0, 1, 0)])
        assert not face.is_planar()


class TestCurves:
    """Tests for curve shapes."""

    def test_closed_polyline(self) -> None:
        square = PolylineCurve([(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0), (0, 0, 0)])

        assert square.is_closed
        assert square.domain == (0.0, 4.0)
        assert square.point_at(2.5) == pytest.approx((0.5, 1.0, 0.0))

    def test_polyline_needs_two_points(self) -> None:
        with pytest.raises(ValueError):
            PolylineCurve([(0, 0, 0)])

    def test_quarter_arc_bounding_box(self) -> None:
        arc = ArcCurve((0.0, 0.0, 0.0), 1.0, start_angle=0.0, sweep=math.pi / 2)
        lo, hi = arc.bounding_box()

        assert lo == pytest.approx((0.0, 0.0, 0.0), abs=1e-12)
        assert hi == pytest.approx((1.0, 1.0, 0.0))

    def test_arc_across_positive_x_axis(self) -> None:
        arc = ArcCurve((0.0, 0.0, 0.0), 2.0, start_angle=-math.pi / 4, sweep=math.pi / 2)
        lo, hi = arc.bounding_box()

        assert hi[0] == pytest.approx(2.0)
        assert lo[0] == pytest.approx(2.0 * math.cos(math.pi / 4))

    def test_invalid_radius(self) -> None:
        with pytest.raises(ValueError):
            ArcCurve((0.0, 0.0, 0.0), 0.0)


class TestPolygonMesh:
    """Tests for PolygonMesh."""

    def test_rejects_pentagon(self) -> None:
        with pytest.raises(ValueError):
            PolygonMesh([(0, 0, 0)] * 5, [(0, 1, 2, 3, 4)])
