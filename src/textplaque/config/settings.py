"""Configuration settings for textplaque."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from textplaque.domain import PackageLayout, UpAxis

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class GeometryConfig(BaseModel):
    """Configuration for outline flattening and classification."""

    curve_segments: int = Field(
        default=16,
        ge=1,
        le=128,
        description="Points generated per Bezier segment (8 for preview, 16-32 for export)",
    )
    containment_ratio: float = Field(
        default=0.95,
        gt=0.5,
        le=1.0,
        description="Share of hole boundary points that must lie inside the outer contour",
    )
    area_epsilon: float = Field(
        default=1e-9,
        ge=0.0,
        description="Contours with an absolute area at or below this are dropped",
    )


class PlaqueConfig(BaseModel):
    """Shape of the rendered plaque. All lengths are millimetres."""

    text: str = Field(
        default="",
        description="Text to render; newlines start a new line",
    )
    foreground_depth: float = Field(
        default=1.0,
        gt=0.0,
        le=50.0,
        description="Height of the raised glyph body",
    )
    background_depth: float = Field(
        default=2.0,
        gt=0.0,
        le=50.0,
        description="Height of the background plaque",
    )
    outer_offset: float = Field(
        default=0.75,
        ge=0.0,
        le=20.0,
        description="How far the plaque outline grows beyond the glyph outline",
    )
    inner_offset: float = Field(
        default=0.5,
        ge=0.0,
        le=20.0,
        description="How far glyph counters shrink in the plaque",
    )
    x_offset: float = Field(default=0.0, description="Final X translation")
    y_offset: float = Field(default=0.0, description="Final Y translation")
    scale: float = Field(
        default=1.0,
        gt=0.0,
        le=10.0,
        description="Multiplier applied to target_width",
    )
    target_width: float = Field(
        default=60.0,
        gt=0.0,
        le=1000.0,
        description="Foreground width before the scale multiplier",
    )
    overlap: float = Field(
        default=0.05,
        gt=0.0,
        description="Depth by which the foreground sinks into the background",
    )
    font_size: float = Field(
        default=72.0,
        gt=0.0,
        description="Size requested from the font backend",
    )
    foreground_color: str = Field(
        default="#FFFFFF",
        pattern=HEX_COLOR_PATTERN,
        description="Colour of the glyph body",
    )
    background_color: str = Field(
        default="#666666",
        pattern=HEX_COLOR_PATTERN,
        description="Colour of the background plaque",
    )

    @field_validator("foreground_color", "background_color")
    @classmethod
    def _normalize_color(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _check_overlap(self) -> "PlaqueConfig":
        if self.overlap >= self.background_depth:
            raise ValueError("overlap must be smaller than background_depth")
        if self.overlap >= self.foreground_depth:
            raise ValueError("overlap must be smaller than foreground_depth")
        return self

    @property
    def final_width(self) -> float:
        """Foreground width after applying the scale multiplier."""
        return self.target_width * self.scale


class ExportConfig(BaseModel):
    """Configuration for 3MF export."""

    up_axis: UpAxis = Field(
        default=UpAxis.Y_UP,
        description="Up axis of the source geometry (Y_UP leaves coordinates unchanged)",
    )
    unit: str = Field(
        default="millimeter",
        pattern=r"^(micron|millimeter|centimeter|inch|foot|meter)$",
        description="3MF model unit",
    )
    layout: PackageLayout = Field(
        default=PackageLayout.ASSEMBLY,
        description="Flat objects or one assembly with per-part metadata",
    )
    application: str = Field(
        default="BambuStudio-02.02.00.85",
        description="Application metadata written to the root model",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class TextPlaqueSettings(BaseModel):
    """Main application settings."""

    plaque: PlaqueConfig = Field(default_factory=PlaqueConfig)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> TextPlaqueSettings:
    """Get default application settings."""
    return TextPlaqueSettings()
