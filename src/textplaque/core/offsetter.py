"""Parallel offset of contours for the background plaque.

Each vertex moves along the bisector of its two adjacent edge normals.
Self-intersections produced by large offsets on concave corners are left
as they are.
"""

import math

import structlog

from textplaque.core.geometry import dedupe_points, distinct_point_count
from textplaque.domain import ClassifiedShape, Contour, OffsetShape, Point
from textplaque.exceptions import DegenerateGeometryError

logger = structlog.get_logger(__name__)


def _normalize(x: float, y: float) -> tuple[float, float] | None:
    length = math.hypot(x, y)
    if length == 0.0 or not math.isfinite(length):
        return None
    return x / length, y / length


class ShapeOffsetter:
    """Grows outer boundaries and shrinks holes.

    "Outward" is derived from each contour's own winding, so the result
    does not depend on the font's winding convention.
    """

    def offset(self, contour: Contour, distance: float, inward: bool = False) -> Contour:
        """Offset a contour by a distance along vertex bisectors.

        Args:
            contour: Closed polygon to offset
            distance: Offset distance (>= 0)
            inward: Move toward the interior instead of away from it

        Returns:
            Offset contour with one point per input vertex

        Raises:
            DegenerateGeometryError: If fewer than 3 valid points remain
        """
        points = dedupe_points(contour.points)
        n = len(points)
        if distinct_point_count(points) < 3:
            raise DegenerateGeometryError("contour has fewer than 3 valid points", point_count=n)

        # For a CCW polygon the right-hand edge normal points outward
        sign = 1.0 if Contour(points=points).signed_area() > 0 else -1.0
        if inward:
            sign = -sign

        normals: list[tuple[float, float]] = []
        for i in range(n):
            a = points[i]
            b = points[(i + 1) % n]
            unit = _normalize(b.x - a.x, b.y - a.y)
            if unit is None:
                raise DegenerateGeometryError("zero-length edge", point_count=n)
            dx, dy = unit
            normals.append((sign * dy, -sign * dx))

        result: list[Point] = []
        for i in range(n):
            n_in = normals[i - 1]
            n_out = normals[i]
            bisector = _normalize(n_in[0] + n_out[0], n_in[1] + n_out[1])
            if bisector is None:
                bisector = n_in
            p = points[i]
            result.append(Point(p.x + bisector[0] * distance, p.y + bisector[1] * distance))

        cleaned = dedupe_points(result)
        if distinct_point_count(cleaned) < 3:
            raise DegenerateGeometryError(
                "offset contour has fewer than 3 valid points",
                point_count=len(cleaned),
            )
        return Contour(points=cleaned)

    def offset_shape(
        self,
        shape: ClassifiedShape,
        outer_offset: float,
        inner_offset: float,
    ) -> OffsetShape:
        """Offset a whole shape for use as background outline.

        Holes whose winding flips after shrinking have collapsed and are
        dropped.

        Args:
            shape: Classified shape to offset
            outer_offset: Distance to grow the outer boundary
            inner_offset: Distance to shrink each hole

        Returns:
            OffsetShape referencing the source shape

        Raises:
            DegenerateGeometryError: If the outer boundary degenerates
        """
        outer = self.offset(shape.outer, outer_offset)

        holes: list[Contour] = []
        for index, hole in enumerate(shape.holes):
            try:
                shrunk = self.offset(hole, inner_offset, inward=True)
            except DegenerateGeometryError:
                logger.warning("Dropping collapsed hole", hole=index, reason="degenerate")
                continue
            if shrunk.winding != hole.winding or shrunk.area() == 0.0:
                logger.warning(
                    "Dropping collapsed hole",
                    hole=index,
                    reason="winding flipped",
                    inner_offset=inner_offset,
                )
                continue
            if self._is_inverted(hole, shrunk):
                logger.warning(
                    "Dropping collapsed hole",
                    hole=index,
                    reason="edges reversed",
                    inner_offset=inner_offset,
                )
                continue
            holes.append(shrunk)

        return OffsetShape(
            outer=outer,
            holes=holes,
            outer_offset=outer_offset,
            inner_offset=inner_offset,
            source=shape,
        )

    @staticmethod
    def _is_inverted(original: Contour, shrunk: Contour) -> bool:
        """Check whether most edges point backwards after shrinking.

        A convex hole shrunk past its center is mirrored through a point,
        which keeps its winding but reverses every edge.
        """
        before = dedupe_points(original.points)
        after = shrunk.points
        n = len(before)
        if n != len(after):
            return False

        reversed_edges = 0
        for i in range(n):
            j = (i + 1) % n
            old_dx = before[j].x - before[i].x
            old_dy = before[j].y - before[i].y
            new_dx = after[j].x - after[i].x
            new_dy = after[j].y - after[i].y
            if old_dx * new_dx + old_dy * new_dy < 0:
                reversed_edges += 1
        return reversed_edges * 2 > n
