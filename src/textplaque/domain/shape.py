"""Shapes with holes built from classified contours."""

from dataclasses import dataclass, field

from textplaque.domain.contour import Contour


@dataclass
class ClassifiedShape:
    """An outer boundary together with the holes it encloses.

    Attributes:
        outer: The outer boundary contour
        holes: Contours enclosed by the outer boundary (counters of the glyph)
    """

    outer: Contour
    holes: list[Contour] = field(default_factory=list)

    def net_area(self) -> float:
        """Filled area: outer area minus the holes' areas."""
        return self.outer.area() - sum(hole.area() for hole in self.holes)

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Bounding box of the outer boundary."""
        return self.outer.bounding_box()

    def scaled(self, factor: float) -> "ClassifiedShape":
        """Return a copy uniformly scaled about the origin."""
        return ClassifiedShape(
            outer=self.outer.scaled(factor),
            holes=[hole.scaled(factor) for hole in self.holes],
        )


@dataclass
class OffsetShape:
    """A classified shape grown outward and with shrunken holes.

    Used as the outline of the background plaque.

    Attributes:
        outer: Outer boundary offset outward by outer_offset
        holes: Holes offset inward by inner_offset
        outer_offset: Distance the outer boundary was grown
        inner_offset: Distance each hole was shrunk
        source: The shape this was derived from
    """

    outer: Contour
    holes: list[Contour]
    outer_offset: float
    inner_offset: float
    source: ClassifiedShape | None = None

    def as_shape(self) -> ClassifiedShape:
        """View the offset outline as a plain shape for extrusion."""
        return ClassifiedShape(outer=self.outer, holes=list(self.holes))


def shapes_bounding_box(shapes: list[ClassifiedShape]) -> tuple[float, float, float, float]:
    """Union bounding box of several shapes.

    Args:
        shapes: Shapes to measure

    Returns:
        Tuple of (min_x, min_y, max_x, max_y)

    Raises:
        ValueError: If shapes is empty
    """
    if not shapes:
        raise ValueError("Cannot measure an empty shape list")

    boxes = [shape.bounding_box() for shape in shapes]
    return (
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )
