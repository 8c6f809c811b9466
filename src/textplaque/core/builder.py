"""Build the foreground and background solids from classified shapes.

The foreground is the glyph body extruded as is. The background is the
same outline grown outward with shrunken counters, extruded below the
foreground. Both are scaled to the target width and centered together.
"""

import structlog

from textplaque.core.extrusion import extrude_shapes
from textplaque.core.offsetter import ShapeOffsetter
from textplaque.domain import (
    ClassifiedShape,
    Dimensions,
    Material,
    Mesh,
    OffsetShape,
    Solid,
    shapes_bounding_box,
)
from textplaque.exceptions import EmptyGeometryError, GeometryError

logger = structlog.get_logger(__name__)


class SolidBuilder:
    """Turns classified shapes into positioned foreground and background solids.

    Example:
        builder = SolidBuilder()
        fg = builder.build_foreground(shapes, depth=1.0)
        bg = builder.build_background(shapes, 0.75, 0.5, depth=2.0)
        factor = builder.scale_factor(shapes, target_width=60.0)
        fg, bg = builder.fit(fg, bg, factor, 0.0, 0.0)
        fg_solid, bg_solid = builder.position(fg, bg, overlap=0.05)
    """

    def __init__(self, offsetter: ShapeOffsetter | None = None) -> None:
        self.offsetter = offsetter or ShapeOffsetter()

    def build_foreground(self, shapes: list[ClassifiedShape], depth: float) -> Mesh:
        """Extrude the glyph shapes from z=0 to z=depth.

        Raises:
            EmptyGeometryError: If shapes is empty
            DegenerateGeometryError: If a shape cannot be triangulated
        """
        if not shapes:
            raise EmptyGeometryError("no shapes for the foreground")
        return extrude_shapes(shapes, depth)

    def offset_shapes(
        self,
        shapes: list[ClassifiedShape],
        outer_offset: float,
        inner_offset: float,
    ) -> list[OffsetShape]:
        """Offset every shape for the background outline."""
        return [
            self.offsetter.offset_shape(shape, outer_offset, inner_offset) for shape in shapes
        ]

    def build_background(
        self,
        shapes: list[ClassifiedShape],
        outer_offset: float,
        inner_offset: float,
        depth: float,
    ) -> Mesh:
        """Extrude the offset outline from z=0 to z=depth.

        Args:
            shapes: Glyph shapes (not yet offset)
            outer_offset: Distance the outline grows
            inner_offset: Distance each counter shrinks
            depth: Background height

        Returns:
            Background mesh in the same units as the shapes

        Raises:
            EmptyGeometryError: If shapes is empty
            DegenerateGeometryError: If an offset shape degenerates
        """
        if not shapes:
            raise EmptyGeometryError("no shapes for the background")
        offset = self.offset_shapes(shapes, outer_offset, inner_offset)
        return self.extrude_offset(offset, depth)

    def extrude_offset(self, offset_shapes: list[OffsetShape], depth: float) -> Mesh:
        """Extrude already offset shapes from z=0 to z=depth.

        Raises:
            EmptyGeometryError: If offset_shapes is empty
        """
        if not offset_shapes:
            raise EmptyGeometryError("no shapes for the background")
        return extrude_shapes([o.as_shape() for o in offset_shapes], depth)

    def scale_factor(self, shapes: list[ClassifiedShape], target_width: float) -> float:
        """Uniform factor that makes the shapes' bounding width equal target_width.

        Raises:
            EmptyGeometryError: If shapes is empty
            GeometryError: If the shapes have no width
        """
        if not shapes:
            raise EmptyGeometryError("no shapes to measure")
        min_x, _, max_x, _ = shapes_bounding_box(shapes)
        width = max_x - min_x
        if width <= 0.0:
            raise GeometryError("shapes have zero width")
        return target_width / width

    def fit(
        self,
        foreground: Mesh,
        background: Mesh,
        factor: float,
        x_offset: float = 0.0,
        y_offset: float = 0.0,
    ) -> tuple[Mesh, Mesh]:
        """Scale both meshes in XY and center them on the foreground.

        Z is left untouched so depths stay in millimetres.

        Returns:
            Tuple of (foreground, background) after scaling and translation
        """
        fg = foreground.scaled(factor, factor, 1.0)
        bg = background.scaled(factor, factor, 1.0)

        (min_x, min_y, _), (max_x, max_y, _) = fg.bounding_box()
        dx = -(min_x + max_x) / 2.0 + x_offset
        dy = -(min_y + max_y) / 2.0 + y_offset

        return fg.translated(dx, dy, 0.0), bg.translated(dx, dy, 0.0)

    def position(
        self,
        foreground: Mesh,
        background: Mesh,
        overlap: float,
        foreground_material: Material | None = None,
        background_material: Material | None = None,
        names: tuple[str, str] = ("Foreground", "Background"),
    ) -> tuple[Solid, Solid]:
        """Stack the foreground on the background.

        The background occupies z in [0, background_depth]; the foreground
        starts at background_depth - overlap so the two bodies fuse when
        printed.

        Args:
            foreground: Foreground mesh starting at z=0
            background: Background mesh starting at z=0
            overlap: Depth the foreground sinks into the background
            foreground_material: Material of the foreground part
            background_material: Material of the background part
            names: Part names for (foreground, background)

        Returns:
            Tuple of (foreground solid, background solid)
        """
        _, (_, _, background_depth) = background.bounding_box()
        z_start = background_depth - overlap

        fg_solid = Solid(
            name=names[0],
            mesh=foreground,
            material=foreground_material or Material(name=names[0], color="#FFFFFF"),
            translation=(0.0, 0.0, z_start),
        )
        bg_solid = Solid(
            name=names[1],
            mesh=background,
            material=background_material or Material(name=names[1], color="#666666"),
            translation=(0.0, 0.0, 0.0),
        )
        logger.debug(
            "Positioned solids",
            background_depth=background_depth,
            foreground_z=z_start,
            overlap=overlap,
        )
        return fg_solid, bg_solid

    def dimensions(
        self,
        foreground: Mesh,
        foreground_depth: float,
        background_depth: float,
    ) -> Dimensions:
        """Report the plaque size from the foreground bounds."""
        (min_x, min_y, _), (max_x, max_y, _) = foreground.bounding_box()
        return Dimensions(
            width=max_x - min_x,
            height=max_y - min_y,
            depth=foreground_depth + background_depth,
        )
