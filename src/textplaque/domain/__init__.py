"""Domain models for textplaque.

This module contains the value types that flow through the pipeline, from
font path commands to the exported package. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Recomputed per render instead of patched in place
- Independent of fontTools and of the 3MF serialization details

Key classes:
- PathCommand variants: MoveTo, LineTo, QuadraticTo, CubicTo, ClosePath
- GlyphOutline: Laid-out text outline from a font backend
- Point, Contour: Flattened 2D polygons
- ClassifiedShape, OffsetShape: Outer boundaries with their holes
- Mesh, Material, Solid: Extruded geometry ready for export
- PackageModel: A complete exportable unit
"""

from textplaque.domain.contour import Contour, Point, WindingDirection
from textplaque.domain.mesh import (
    Dimensions,
    Material,
    Mesh,
    Solid,
    Triangle,
    ValidationReport,
    Vertex,
)
from textplaque.domain.package import PackageLayout, PackageModel, UpAxis
from textplaque.domain.path import (
    ClosePath,
    CubicTo,
    GlyphOutline,
    LineTo,
    MoveTo,
    PathCommand,
    QuadraticTo,
)
from textplaque.domain.shape import ClassifiedShape, OffsetShape, shapes_bounding_box

__all__: list[str] = [
    # Enums
    "WindingDirection",
    "UpAxis",
    "PackageLayout",
    # Path commands
    "MoveTo",
    "LineTo",
    "QuadraticTo",
    "CubicTo",
    "ClosePath",
    "PathCommand",
    "GlyphOutline",
    # 2D types
    "Point",
    "Contour",
    "ClassifiedShape",
    "OffsetShape",
    "shapes_bounding_box",
    # 3D types
    "Vertex",
    "Triangle",
    "Mesh",
    "Material",
    "Solid",
    "Dimensions",
    "ValidationReport",
    "PackageModel",
]
