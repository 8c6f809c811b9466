"""Core geometric types for contour representation.

This module defines the fundamental 2D types used by the geometry pipeline:
- Point: An immutable 2D point
- Contour: A closed polygon flattened from a font outline
- WindingDirection: Enum for contour winding direction
"""

from dataclasses import dataclass, field
from enum import Enum, auto


class WindingDirection(Enum):
    """Contour winding direction.

    Font backends do not agree on which direction marks an outer contour,
    so winding is reported for diagnostics and orientation fixes only; it is
    never used to decide whether a contour is a hole.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)


@dataclass
class Contour:
    """A closed polygon representing a shape boundary.

    The polygon is implicitly closed: the last point connects back to the
    first, and a duplicate closing point is never stored.

    Attributes:
        points: List of polygon vertices in drawing order
    """

    points: list[Point]
    _cached_area: float | None = field(default=None, repr=False, init=False)
    _cached_bbox: tuple[float, float, float, float] | None = field(
        default=None, repr=False, init=False
    )

    def __len__(self) -> int:
        return len(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        The sign of the area indicates winding direction:
        - Positive area: counter-clockwise winding
        - Negative area: clockwise winding

        Result is cached for efficiency.

        Returns:
            Signed area of the contour
        """
        if self._cached_area is not None:
            return self._cached_area

        n = len(self.points)
        if n < 3:
            self._cached_area = 0.0
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        self._cached_area = area / 2.0
        return self._cached_area

    def area(self) -> float:
        """Absolute enclosed area."""
        return abs(self.signed_area())

    @property
    def winding(self) -> WindingDirection:
        """Winding direction derived from the signed area."""
        if self.signed_area() < 0:
            return WindingDirection.CLOCKWISE
        return WindingDirection.COUNTER_CLOCKWISE

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the contour.

        Result is cached for efficiency.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if self._cached_bbox is not None:
            return self._cached_bbox

        if not self.points:
            self._cached_bbox = (0.0, 0.0, 0.0, 0.0)
            return self._cached_bbox

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]

        self._cached_bbox = (min(xs), min(ys), max(xs), max(ys))
        return self._cached_bbox

    def contains_point(self, x: float, y: float) -> bool:
        """Check if point is inside contour using ray casting algorithm.

        Casts a ray from the point to the right and counts intersections
        with contour edges. Odd count means inside, even means outside.

        Args:
            x: X coordinate of point to test
            y: Y coordinate of point to test

        Returns:
            True if point is inside contour, False otherwise
        """
        n = len(self.points)
        if n < 3:
            return False

        inside = False
        j = n - 1

        for i in range(n):
            xi, yi = self.points[i].x, self.points[i].y
            xj, yj = self.points[j].x, self.points[j].y

            if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
                inside = not inside

            j = i

        return inside

    def representative_point(self) -> Point:
        """Point used for containment tests against other contours.

        Returns:
            The first vertex of the contour

        Raises:
            ValueError: If the contour has no points
        """
        if not self.points:
            raise ValueError("Empty contour has no representative point")
        return self.points[0]

    def reversed(self) -> "Contour":
        """Return a copy with the opposite winding."""
        return Contour(points=list(reversed(self.points)))

    def oriented(self, counter_clockwise: bool) -> "Contour":
        """Return the contour wound in the requested direction.

        Args:
            counter_clockwise: True for CCW (positive area), False for CW

        Returns:
            This contour if already oriented, otherwise a reversed copy
        """
        is_ccw = self.signed_area() > 0
        if is_ccw == counter_clockwise:
            return self
        return self.reversed()

    def scaled(self, factor: float) -> "Contour":
        """Return a copy uniformly scaled about the origin."""
        return Contour(points=[Point(p.x * factor, p.y * factor) for p in self.points])
