"""Flatten font path commands into closed polygons.

Curves are approximated with a fixed number of points per segment so the
output is deterministic for a given configuration.
"""

import structlog

from textplaque.core._bezier import sample_cubic, sample_quadratic
from textplaque.core.geometry import dedupe_points, distinct_point_count
from textplaque.domain import (
    ClosePath,
    Contour,
    CubicTo,
    LineTo,
    MoveTo,
    PathCommand,
    Point,
    QuadraticTo,
)

logger = structlog.get_logger(__name__)


class PathFlattener:
    """Converts a sequence of path commands into contours.

    The flattener is stateless between calls.

    Example:
        flattener = PathFlattener(curve_segments=16)
        contours = flattener.flatten(outline.path)
    """

    def __init__(self, curve_segments: int = 16) -> None:
        """Initialize the flattener.

        Args:
            curve_segments: Points generated per curve segment (>= 1)

        Raises:
            ValueError: If curve_segments is less than 1
        """
        if curve_segments < 1:
            raise ValueError(f"curve_segments must be >= 1, got {curve_segments}")
        self.curve_segments = curve_segments

    def flatten(self, commands: list[PathCommand]) -> list[Contour]:
        """Flatten path commands into closed contours.

        MoveTo starts a new contour and closes any open one. ClosePath closes
        the current contour, and an open contour left at the end of input is
        closed as well. Contours with fewer than 3 distinct points are dropped.

        Args:
            commands: Drawing commands in emission order

        Returns:
            Contours in emission order
        """
        contours: list[Contour] = []
        current: list[Point] | None = None

        for command in commands:
            if isinstance(command, MoveTo):
                if current is not None:
                    self._push(current, contours)
                current = [Point(command.x, command.y)]
            elif isinstance(command, ClosePath):
                if current is not None:
                    self._push(current, contours)
                current = None
            else:
                if current is None:
                    current = [Point(0.0, 0.0)]
                self._extend(current, command)

        if current is not None:
            self._push(current, contours)

        return contours

    def _extend(self, current: list[Point], command: PathCommand) -> None:
        start = current[-1]
        if isinstance(command, LineTo):
            current.append(Point(command.x, command.y))
        elif isinstance(command, QuadraticTo):
            current.extend(
                sample_quadratic(
                    start,
                    Point(command.cx, command.cy),
                    Point(command.x, command.y),
                    self.curve_segments,
                )
            )
        elif isinstance(command, CubicTo):
            current.extend(
                sample_cubic(
                    start,
                    Point(command.c1x, command.c1y),
                    Point(command.c2x, command.c2y),
                    Point(command.x, command.y),
                    self.curve_segments,
                )
            )
        else:
            raise TypeError(f"Unsupported path command: {command!r}")

    def _push(self, points: list[Point], contours: list[Contour]) -> None:
        cleaned = dedupe_points(points)
        if distinct_point_count(cleaned) < 3:
            logger.debug(
                "Dropping degenerate contour",
                raw_points=len(points),
                distinct_points=distinct_point_count(cleaned),
            )
            return
        contours.append(Contour(points=cleaned))


def flatten(commands: list[PathCommand], curve_segments: int = 16) -> list[Contour]:
    """Flatten path commands with a one-off PathFlattener.

    Args:
        commands: Drawing commands in emission order
        curve_segments: Points generated per curve segment

    Returns:
        Contours in emission order
    """
    return PathFlattener(curve_segments=curve_segments).flatten(commands)
