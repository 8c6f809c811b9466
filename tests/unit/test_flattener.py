"""Unit tests for path flattening.

Tests cover:
- Straight-line contours and implicit closing
- Quadratic and cubic Bezier sampling
- Contour boundaries (MoveTo, ClosePath, end of input)
- Degenerate contour removal
"""

import pytest

from textplaque.core.flattener import PathFlattener, flatten
from textplaque.domain import ClosePath, CubicTo, LineTo, MoveTo, Point, QuadraticTo


def _square_commands(x0: float, y0: float, size: float) -> list:
    return [
        MoveTo(x0, y0),
        LineTo(x0 + size, y0),
        LineTo(x0 + size, y0 + size),
        LineTo(x0, y0 + size),
        ClosePath(),
    ]


class TestLines:
    """Tests for straight-line contours."""

    def test_square(self):
        """A closed square yields one contour with four points."""
        contours = flatten(_square_commands(0, 0, 10))

        assert len(contours) == 1
        assert contours[0].points == [
            Point(0, 0),
            Point(10, 0),
            Point(10, 10),
            Point(0, 10),
        ]

    def test_explicit_closing_point_is_not_stored(self):
        """A LineTo back to the start point does not duplicate it."""
        commands = _square_commands(0, 0, 10)
        commands.insert(4, LineTo(0, 0))

        contours = flatten(commands)

        assert len(contours[0].points) == 4

    def test_consecutive_duplicates_collapsed(self):
        """Repeated points are stored once."""
        commands = [
            MoveTo(0, 0),
            LineTo(10, 0),
            LineTo(10, 0),
            LineTo(10, 10),
            LineTo(0, 10),
            ClosePath(),
        ]

        contours = flatten(commands)

        assert len(contours[0].points) == 4

    def test_line_without_move_starts_at_origin(self):
        """Drawing before any MoveTo starts the contour at the pen origin."""
        contours = flatten([LineTo(10, 0), LineTo(10, 10), ClosePath()])

        assert contours[0].points[0] == Point(0.0, 0.0)
        assert len(contours[0].points) == 3


class TestCurves:
    """Tests for Bezier sampling."""

    def test_quadratic_adds_segment_points(self):
        """A quadratic segment adds curve_segments points ending at its end point."""
        commands = [MoveTo(0, 0), QuadraticTo(5, 10, 10, 0), ClosePath()]

        contours = PathFlattener(curve_segments=4).flatten(commands)

        points = contours[0].points
        assert len(points) == 5
        assert points[-1] == Point(10, 0)

    def test_quadratic_midpoint(self):
        """The sample at t=0.5 follows the Bernstein blend."""
        commands = [MoveTo(0, 0), QuadraticTo(5, 10, 10, 0), ClosePath()]

        points = PathFlattener(curve_segments=2).flatten(commands)[0].points

        # 0.25 * p0 + 0.5 * p1 + 0.25 * p2
        assert points[1] == Point(5.0, 5.0)

    def test_cubic_adds_segment_points(self):
        """A cubic segment adds curve_segments points ending at its end point."""
        commands = [MoveTo(0, 0), CubicTo(0, 10, 10, 10, 10, 0), ClosePath()]

        contours = PathFlattener(curve_segments=8).flatten(commands)

        points = contours[0].points
        assert len(points) == 9
        assert points[-1] == Point(10, 0)
        assert points[4].x == pytest.approx(5.0)
        assert points[4].y == pytest.approx(7.5)

    def test_curve_starts_from_last_point(self):
        """Curves blend from the contour's current last point."""
        commands = [
            MoveTo(0, 0),
            LineTo(10, 0),
            QuadraticTo(10, 10, 0, 10),
            ClosePath(),
        ]

        points = PathFlattener(curve_segments=2).flatten(commands)[0].points

        # 0.25 * (10, 0) + 0.5 * (10, 10) + 0.25 * (0, 10)
        assert points[2] == Point(7.5, 7.5)

    def test_invalid_segment_count(self):
        """curve_segments must be at least 1."""
        with pytest.raises(ValueError, match="curve_segments"):
            PathFlattener(curve_segments=0)


class TestContourBoundaries:
    """Tests for splitting commands into contours."""

    def test_move_closes_open_contour(self):
        """MoveTo implicitly closes the contour in progress."""
        commands = [
            MoveTo(0, 0),
            LineTo(10, 0),
            LineTo(10, 10),
            MoveTo(20, 0),
            LineTo(30, 0),
            LineTo(30, 10),
            ClosePath(),
        ]

        contours = flatten(commands)

        assert len(contours) == 2
        assert contours[0].points[0] == Point(0, 0)
        assert contours[1].points[0] == Point(20, 0)

    def test_open_contour_at_end_is_kept(self):
        """A contour left open at the end of input is closed and kept."""
        commands = [MoveTo(0, 0), LineTo(10, 0), LineTo(10, 10)]

        contours = flatten(commands)

        assert len(contours) == 1
        assert len(contours[0].points) == 3

    def test_emission_order_preserved(self):
        """Contours come out in the order they were drawn."""
        commands = _square_commands(20, 0, 5) + _square_commands(0, 0, 10)

        contours = flatten(commands)

        assert [c.points[0] for c in contours] == [Point(20, 0), Point(0, 0)]

    def test_degenerate_contours_dropped(self):
        """Contours with fewer than 3 distinct points are dropped."""
        commands = [
            MoveTo(0, 0),
            LineTo(10, 0),
            ClosePath(),
            MoveTo(5, 5),
            ClosePath(),
            *_square_commands(0, 0, 10),
        ]

        contours = flatten(commands)

        assert len(contours) == 1

    def test_empty_input(self):
        """No commands give no contours."""
        assert flatten([]) == []
