"""Render orchestration: text to solids to 3MF bytes.

This module coordinates the full workflow:
1. Ask the font backend for the text outline
2. Flatten and classify contours into shapes
3. Build foreground and offset background meshes
4. Scale, center and stack the solids
5. Package the result as 3MF

Every render recomputes everything. A failed render leaves the previous
result untouched.
"""

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from textplaque.config import TextPlaqueSettings
from textplaque.core.builder import SolidBuilder
from textplaque.core.classifier import ContourClassifier
from textplaque.core.flattener import PathFlattener
from textplaque.core.validator import MeshValidator
from textplaque.domain import (
    ClassifiedShape,
    Dimensions,
    Material,
    PackageModel,
    Solid,
    ValidationReport,
)
from textplaque.exceptions import EmptyModelError, TextPlaqueError
from textplaque.io.font import FontBackend
from textplaque.io.threemf import ThreeMFPackager
from textplaque.utils import RenderLogger


@dataclass
class RenderResult:
    """Outcome of one successful render.

    Attributes:
        text: The rendered text
        foreground: Raised glyph body
        background: Offset plaque below the glyphs
        dimensions: Plaque size in millimetres
        shapes: Classified shapes before scaling (font units)
        reports: Validation report per part name
        warnings: Non-fatal diagnostics collected during the render
    """

    text: str
    foreground: Solid
    background: Solid
    dimensions: Dimensions
    shapes: list[ClassifiedShape]
    reports: dict[str, ValidationReport] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    @property
    def solids(self) -> list[Solid]:
        """Solids in export order (foreground first)."""
        return [self.foreground, self.background]


class PlaquePipeline:
    """Renders text into a two-part plaque and exports it.

    Example:
        settings = TextPlaqueSettings()
        with FontToolsBackend(Path("font.ttf")) as backend:
            pipeline = PlaquePipeline(settings, backend)
            result = pipeline.render("Hello")
            pipeline.write(Path("hello.3mf"))
    """

    def __init__(
        self,
        settings: TextPlaqueSettings,
        backend: FontBackend,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Application settings
            backend: Font backend used to lay out text
            logger: Logger for render statistics (module logger if None)
        """
        self.settings = settings
        self.backend = backend
        self.logger = logger or structlog.get_logger(__name__)
        self.render_logger = RenderLogger(self.logger)

        geometry = settings.geometry
        self.flattener = PathFlattener(curve_segments=geometry.curve_segments)
        self.classifier = ContourClassifier(
            containment_ratio=geometry.containment_ratio,
            area_epsilon=geometry.area_epsilon,
        )
        self.builder = SolidBuilder()
        self.validator = MeshValidator()
        self.packager = ThreeMFPackager(
            validator=self.validator,
            application=settings.export.application,
        )
        self.last_result: RenderResult | None = None

    def render(self, text: str | None = None) -> RenderResult:
        """Render text into foreground and background solids.

        Args:
            text: Text to render (settings.plaque.text if None)

        Returns:
            RenderResult, also stored as last_result

        Raises:
            FontLoadError: If the font backend fails
            EmptyGeometryError: If the text has no printable outline
            DegenerateGeometryError: If a shape cannot be extruded
        """
        plaque = self.settings.plaque
        text = plaque.text if text is None else text
        self.render_logger.log_render_start(text)

        try:
            result = self._render(text)
        except TextPlaqueError as e:
            self.render_logger.log_render_error(text, e)
            raise

        self.render_logger.log_render_complete(
            foreground_triangles=result.foreground.mesh.triangle_count,
            background_triangles=result.background.mesh.triangle_count,
            dimensions=result.dimensions,
        )
        self.last_result = result
        return result

    def _render(self, text: str) -> RenderResult:
        plaque = self.settings.plaque
        warnings: list[str] = []

        outline = self.backend.get_outline(text, plaque.font_size)
        contours = self.flattener.flatten(outline.path)

        classification = self.classifier.classify_with_diagnostics(contours)
        shapes = classification.shapes
        warnings.extend(classification.warnings)
        self.render_logger.log_classification(
            contours=len(contours),
            shapes=len(shapes),
            holes=classification.hole_count,
        )

        factor = self.builder.scale_factor(shapes, plaque.final_width)

        # Offsets are millimetres after scaling
        outer_offset = plaque.outer_offset / factor
        inner_offset = plaque.inner_offset / factor
        offset_shapes = self.builder.offset_shapes(shapes, outer_offset, inner_offset)
        for shape, offset in zip(shapes, offset_shapes):
            collapsed = len(shape.holes) - len(offset.holes)
            if collapsed:
                warnings.append(f"{collapsed} hole(s) closed in the background")

        foreground = self.builder.build_foreground(shapes, plaque.foreground_depth)
        background = self.builder.extrude_offset(offset_shapes, plaque.background_depth)
        foreground, background = self.builder.fit(
            foreground,
            background,
            factor,
            plaque.x_offset,
            plaque.y_offset,
        )

        fg_solid, bg_solid = self.builder.position(
            foreground,
            background,
            plaque.overlap,
            foreground_material=Material(name="Foreground", color=plaque.foreground_color),
            background_material=Material(name="Background", color=plaque.background_color),
        )

        reports: dict[str, ValidationReport] = {}
        for solid in (fg_solid, bg_solid):
            report = self.validator.validate(solid.mesh)
            reports[solid.name] = report
            self.render_logger.log_validation(solid.name, report)
            warnings.extend(f"{solid.name}: {w}" for w in report.warnings)

        dimensions = self.builder.dimensions(
            foreground,
            plaque.foreground_depth,
            plaque.background_depth,
        )
        return RenderResult(
            text=text,
            foreground=fg_solid,
            background=bg_solid,
            dimensions=dimensions,
            shapes=shapes,
            reports=reports,
            warnings=warnings,
        )

    def build_package(self, result: RenderResult | None = None) -> PackageModel:
        """Assemble the exportable model for a render result.

        Raises:
            EmptyModelError: If nothing has been rendered yet
        """
        result = result or self.last_result
        if result is None:
            raise EmptyModelError()
        export = self.settings.export
        return PackageModel(
            solids=result.solids,
            unit=export.unit,
            up_axis=export.up_axis,
            layout=export.layout,
            title=result.text.strip() or "Text",
        )

    def export(self, result: RenderResult | None = None) -> bytes:
        """Serialize a render result (last_result by default) to 3MF bytes.

        Raises:
            EmptyModelError: If nothing has been rendered yet
        """
        return self.packager.package(self.build_package(result))

    def write(self, path: Path, result: RenderResult | None = None) -> int:
        """Write the 3MF package to a file.

        Returns:
            Number of bytes written
        """
        data = self.export(result)
        path.write_bytes(data)
        return len(data)
