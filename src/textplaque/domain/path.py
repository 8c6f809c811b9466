"""Font outline drawing commands.

This module defines the path commands produced by a font backend:
- MoveTo: Start a new contour
- LineTo: Straight segment to a point
- QuadraticTo: Quadratic Bezier segment (one control point)
- CubicTo: Cubic Bezier segment (two control points)
- ClosePath: Close the current contour

Coordinates are in the backend's output units (already scaled to the
requested size) with the y axis pointing up.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new contour at (x, y)."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight segment from the current point to (x, y)."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class QuadraticTo:
    """Quadratic Bezier segment through control point (cx, cy) to (x, y)."""

    cx: float
    cy: float
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class CubicTo:
    """Cubic Bezier segment through (c1x, c1y) and (c2x, c2y) to (x, y)."""

    c1x: float
    c1y: float
    c2x: float
    c2y: float
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class ClosePath:
    """Close the current contour."""


PathCommand = MoveTo | LineTo | QuadraticTo | CubicTo | ClosePath


@dataclass(frozen=True)
class GlyphOutline:
    """Outline of a laid-out text string as returned by a font backend.

    Attributes:
        advance_width: Total horizontal advance of the longest line
        ascender: Font ascender at the requested size
        descender: Font descender at the requested size (usually negative)
        path: Drawing commands for every glyph, positioned by advance width
    """

    advance_width: float
    ascender: float
    descender: float
    path: list[PathCommand] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Check whether the outline has no drawing commands.

        Returns:
            True for blank or whitespace-only text
        """
        return len(self.path) == 0
