"""Geometric operations on flattened contours.

This module provides core mathematical utilities for:
- Signed area calculation (shoelace formula)
- Point-in-polygon testing (ray casting algorithm)
- Bounding box containment
- Containment ratio of one polygon inside another
- Point de-duplication

All functions are pure and stateless.
"""

import math

from textplaque.domain import Contour, Point

BBox = tuple[float, float, float, float]


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> p1 = Point(0.0, 0.0)
        >>> p2 = Point(1.0, 0.0)
        >>> p3 = Point(1.0, 1.0)
        >>> p4 = Point(0.0, 1.0)
        >>> signed_area([p1, p2, p3, p4])  # CCW square
        1.0
        >>> signed_area([p1, p4, p3, p2])  # CW square
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def point_in_polygon(point: Point, polygon: list[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise

    Examples:
        >>> square = [Point(0.0, 0.0), Point(2.0, 0.0), Point(2.0, 2.0), Point(0.0, 2.0)]
        >>> point_in_polygon(Point(1.0, 1.0), square)  # Center
        True
        >>> point_in_polygon(Point(3.0, 3.0), square)  # Outside
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def bbox_contains(outer: BBox, inner: BBox) -> bool:
    """Check whether one bounding box lies within another (edges may touch).

    Args:
        outer: (min_x, min_y, max_x, max_y) of the container
        inner: (min_x, min_y, max_x, max_y) of the candidate

    Returns:
        True if inner is fully within outer
    """
    return (
        inner[0] >= outer[0]
        and inner[1] >= outer[1]
        and inner[2] <= outer[2]
        and inner[3] <= outer[3]
    )


def containment_ratio(inner: Contour, outer: Contour) -> float:
    """Share of the inner contour's vertices that lie inside the outer contour.

    Args:
        inner: Candidate hole
        outer: Candidate container

    Returns:
        Ratio in [0, 1]; 0.0 for an empty inner contour
    """
    if not inner.points:
        return 0.0
    inside = sum(1 for p in inner.points if point_in_polygon(p, outer.points))
    return inside / len(inner.points)


def dedupe_points(points: list[Point], tolerance: float = 1e-9) -> list[Point]:
    """Collapse consecutive duplicates and a duplicate closing point.

    Args:
        points: Polygon vertices in order
        tolerance: Distance below which two points are considered equal

    Returns:
        Points with no two consecutive (cyclically) equal vertices
    """
    result: list[Point] = []
    for p in points:
        if not (math.isfinite(p.x) and math.isfinite(p.y)):
            continue
        if result and math.hypot(p.x - result[-1].x, p.y - result[-1].y) <= tolerance:
            continue
        result.append(p)

    while len(result) > 1 and math.hypot(
        result[0].x - result[-1].x, result[0].y - result[-1].y
    ) <= tolerance:
        result.pop()

    return result


def distinct_point_count(points: list[Point]) -> int:
    """Number of distinct positions among the points."""
    return len({p.to_tuple() for p in points})
