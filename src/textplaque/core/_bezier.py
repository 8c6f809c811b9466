"""Internal Bezier curve sampling.

This is an internal module containing helper functions for the path
flattener. Not intended for public use.
"""

from textplaque.domain import Point


def sample_quadratic(p0: Point, p1: Point, p2: Point, segments: int) -> list[Point]:
    """Sample a quadratic Bezier curve at evenly spaced parameters.

    Args:
        p0: Start point (the contour's current last point)
        p1: Control point
        p2: End point
        segments: Number of points to produce

    Returns:
        Points at t = 1/segments ... 1, excluding the start point
    """
    points: list[Point] = []
    for i in range(1, segments + 1):
        t = i / segments
        mt = 1.0 - t
        a = mt * mt
        b = 2.0 * mt * t
        c = t * t
        points.append(
            Point(
                a * p0.x + b * p1.x + c * p2.x,
                a * p0.y + b * p1.y + c * p2.y,
            )
        )
    return points


def sample_cubic(p0: Point, p1: Point, p2: Point, p3: Point, segments: int) -> list[Point]:
    """Sample a cubic Bezier curve at evenly spaced parameters.

    Args:
        p0: Start point (the contour's current last point)
        p1: First control point
        p2: Second control point
        p3: End point
        segments: Number of points to produce

    Returns:
        Points at t = 1/segments ... 1, excluding the start point
    """
    points: list[Point] = []
    for i in range(1, segments + 1):
        t = i / segments
        mt = 1.0 - t
        a = mt * mt * mt
        b = 3.0 * mt * mt * t
        c = 3.0 * mt * t * t
        d = t * t * t
        points.append(
            Point(
                a * p0.x + b * p1.x + c * p2.x + d * p3.x,
                a * p0.y + b * p1.y + c * p2.y + d * p3.y,
            )
        )
    return points
