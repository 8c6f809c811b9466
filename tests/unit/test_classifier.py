"""Unit tests for contour classification.

Tests cover:
- Outer boundary and hole detection independent of winding
- Nested islands inside counters
- Ambiguous inner paths (containment ratio and area conservation)
- Output ordering
- Empty and zero-area input
"""

import pytest

from textplaque.core.classifier import ContourClassifier
from textplaque.domain import Contour, Point
from textplaque.exceptions import EmptyGeometryError


def _rect(x0: float, y0: float, x1: float, y1: float, ccw: bool = True) -> Contour:
    points = [Point(x0, y0), Point(x1, y0), Point(x1, y1), Point(x0, y1)]
    if not ccw:
        points.reverse()
    return Contour(points=points)


class TestOuterAndHoles:
    """Tests for splitting contours into outers and holes."""

    def test_single_contour(self):
        """A lone contour is an outer boundary without holes."""
        shapes = ContourClassifier().classify([_rect(0, 0, 10, 10)])

        assert len(shapes) == 1
        assert shapes[0].holes == []

    @pytest.mark.parametrize("outer_ccw", [True, False])
    @pytest.mark.parametrize("hole_ccw", [True, False])
    def test_hole_detected_for_any_winding(self, outer_ccw, hole_ccw):
        """Holes are found by containment, whatever the winding convention."""
        outer = _rect(0, 0, 100, 100, ccw=outer_ccw)
        hole = _rect(25, 25, 75, 75, ccw=hole_ccw)

        shapes = ContourClassifier().classify([hole, outer])

        assert len(shapes) == 1
        assert shapes[0].outer is outer
        assert shapes[0].holes == [hole]

    def test_island_inside_hole_is_new_outer(self):
        """A contour inside a hole starts a new shape."""
        outer = _rect(0, 0, 100, 100)
        hole = _rect(10, 10, 90, 90, ccw=False)
        island = _rect(30, 30, 70, 70)

        shapes = ContourClassifier().classify([outer, hole, island])

        assert len(shapes) == 2
        assert shapes[0].outer is outer
        assert shapes[0].holes == [hole]
        assert shapes[1].outer is island
        assert shapes[1].holes == []

    def test_parent_is_smallest_container(self):
        """A hole belongs to the innermost outer that contains it."""
        outer = _rect(0, 0, 100, 100)
        hole = _rect(5, 5, 95, 95)
        island = _rect(10, 10, 90, 90)
        island_hole = _rect(40, 40, 60, 60)

        shapes = ContourClassifier().classify([outer, hole, island, island_hole])

        assert len(shapes) == 2
        assert shapes[1].outer is island
        assert shapes[1].holes == [island_hole]

    def test_holes_in_emission_order(self):
        """Holes keep the order in which they were drawn."""
        outer = _rect(0, 0, 100, 50)
        small = _rect(10, 10, 20, 20)
        large = _rect(40, 10, 90, 40)

        shapes = ContourClassifier().classify([outer, small, large])

        assert shapes[0].holes == [small, large]

    def test_net_area_positive(self):
        """Accepted holes never exceed the outer area."""
        shapes = ContourClassifier().classify([_rect(0, 0, 10, 10), _rect(1, 1, 9, 9)])

        assert shapes[0].net_area() == pytest.approx(36.0)


class TestAmbiguousPaths:
    """Tests for rejected hole candidates."""

    def test_low_containment_ratio_rejected(self):
        """A hole candidate crossing the outer boundary is dropped."""
        # U shape with a notch between x=10 and x=20 above y=10
        outer = Contour(
            points=[
                Point(0, 0),
                Point(30, 0),
                Point(30, 30),
                Point(20, 30),
                Point(20, 10),
                Point(10, 10),
                Point(10, 30),
                Point(0, 30),
            ]
        )
        # One of five points lies in the notch
        candidate = Contour(
            points=[Point(2, 2), Point(28, 2), Point(28, 20), Point(15, 20), Point(2, 20)]
        )

        result = ContourClassifier().classify_with_diagnostics([outer, candidate])

        assert len(result.shapes) == 1
        assert result.shapes[0].holes == []
        assert result.ambiguous == [1]
        assert any("ambiguous" in w for w in result.warnings)

    def test_area_conservation_rejects_extra_hole(self):
        """A hole that would make the holes outweigh the outer is dropped."""
        outer = _rect(0, 0, 10, 10)
        first = _rect(0.5, 1, 9.5, 9.5)
        second = _rect(0.5, 0.5, 9.5, 8)

        result = ContourClassifier().classify_with_diagnostics([outer, first, second])

        assert result.shapes[0].holes == [first]
        assert result.ambiguous == [2]
        assert result.shapes[0].net_area() > 0

    def test_containment_ratio_is_configurable(self):
        """A lower ratio accepts partially contained holes."""
        outer = Contour(
            points=[
                Point(0, 0),
                Point(30, 0),
                Point(30, 30),
                Point(20, 30),
                Point(20, 10),
                Point(10, 10),
                Point(10, 30),
                Point(0, 30),
            ]
        )
        candidate = Contour(
            points=[Point(2, 2), Point(28, 2), Point(28, 20), Point(15, 20), Point(2, 20)]
        )

        shapes = ContourClassifier(containment_ratio=0.75).classify([outer, candidate])

        assert shapes[0].holes == [candidate]


class TestOrderingAndEdgeCases:
    """Tests for output order, empty input and zero-area contours."""

    def test_shapes_in_emission_order(self):
        """Shapes follow the emission order of their outers, not their size."""
        small = _rect(0, 0, 5, 5)
        large = _rect(10, 0, 30, 20)

        shapes = ContourClassifier().classify([small, large])

        assert [s.outer for s in shapes] == [small, large]

    def test_zero_area_contour_dropped(self):
        """Collinear contours are dropped with a warning."""
        flat = Contour(points=[Point(0, 0), Point(5, 5), Point(10, 10)])
        square = _rect(20, 20, 30, 30)

        result = ContourClassifier().classify_with_diagnostics([flat, square])

        assert len(result.shapes) == 1
        assert result.dropped_zero_area == [0]
        assert result.warnings

    def test_empty_input_raises(self):
        """Blank text produces no contours and no geometry."""
        with pytest.raises(EmptyGeometryError):
            ContourClassifier().classify([])

    def test_only_zero_area_raises(self):
        """Only degenerate contours leave nothing to build."""
        flat = Contour(points=[Point(0, 0), Point(5, 5), Point(10, 10)])

        with pytest.raises(EmptyGeometryError):
            ContourClassifier().classify([flat])

    def test_every_hole_inside_its_outer(self):
        """Every accepted hole's representative point lies inside its outer."""
        contours = [
            _rect(0, 0, 100, 100),
            _rect(10, 10, 40, 40),
            _rect(60, 60, 90, 90),
            _rect(200, 0, 300, 100),
            _rect(220, 20, 280, 80),
        ]

        shapes = ContourClassifier().classify(contours)

        assert len(shapes) == 2
        for shape in shapes:
            for hole in shape.holes:
                point = hole.representative_point()
                assert shape.outer.contains_point(point.x, point.y)
