"""Unit tests for settings and presets."""

import pytest
from pydantic import ValidationError

from textplaque.config import (
    PRODUCTS,
    THEMES,
    ExportConfig,
    GeometryConfig,
    PlaqueConfig,
    TextPlaqueSettings,
    apply_presets,
    find_product,
    find_theme,
)
from textplaque.domain import PackageLayout, UpAxis


class TestPlaqueConfig:
    """Tests for plaque dimensions."""

    def test_defaults(self):
        """Defaults describe a 60 mm wide plaque."""
        config = PlaqueConfig()

        assert config.foreground_depth == 1.0
        assert config.background_depth == 2.0
        assert config.outer_offset == 0.75
        assert config.inner_offset == 0.5
        assert config.overlap == 0.05
        assert config.final_width == 60.0

    def test_final_width_uses_scale(self):
        """The scale multiplies the target width."""
        assert PlaqueConfig(target_width=50.0, scale=1.5).final_width == 75.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"overlap": 2.0},
            {"overlap": 1.5, "foreground_depth": 1.0},
            {"overlap": 0.0},
        ],
    )
    def test_overlap_must_fit(self, kwargs):
        """Overlap is positive and smaller than both depths."""
        with pytest.raises(ValidationError):
            PlaqueConfig(**kwargs)

    @pytest.mark.parametrize("field", ["foreground_depth", "background_depth", "target_width"])
    def test_positive_lengths(self, field):
        """Depths and width must be positive."""
        with pytest.raises(ValidationError):
            PlaqueConfig(**{field: 0.0})

    def test_colors_upper_cased(self):
        """Colours are normalized to upper case."""
        config = PlaqueConfig(foreground_color="#ff00aa")

        assert config.foreground_color == "#FF00AA"

    def test_invalid_color(self):
        """Colours must be #RRGGBB."""
        with pytest.raises(ValidationError):
            PlaqueConfig(background_color="red")


class TestOtherConfig:
    """Tests for geometry and export settings."""

    def test_geometry_defaults(self):
        config = GeometryConfig()

        assert config.curve_segments == 16
        assert config.containment_ratio == 0.95

    def test_curve_segments_bounds(self):
        with pytest.raises(ValidationError):
            GeometryConfig(curve_segments=0)

    def test_export_defaults(self):
        """Y_UP leaves coordinates unchanged by default."""
        config = ExportConfig()

        assert config.up_axis == UpAxis.Y_UP
        assert config.layout == PackageLayout.ASSEMBLY
        assert config.unit == "millimeter"

    def test_export_from_strings(self):
        """Enum fields accept their string values."""
        config = ExportConfig(up_axis="Z_UP", layout="flat")

        assert config.up_axis == UpAxis.Z_UP
        assert config.layout == PackageLayout.FLAT

    def test_invalid_unit(self):
        with pytest.raises(ValidationError):
            ExportConfig(unit="parsec")


class TestPresets:
    """Tests for themes and products."""

    def test_lookup_case_insensitive(self):
        assert find_theme("nasa") is not None
        assert find_theme("NASA").name == "Nasa"
        assert find_product("keychain") is PRODUCTS[0]
        assert find_theme("Unknown") is None
        assert find_product("Unknown") is None

    def test_catalogue(self):
        """Every theme has a font and a sample text."""
        assert len(THEMES) == 5
        for theme in THEMES:
            assert theme.font
            assert theme.text

    def test_theme_applies_colours_and_text(self):
        """A caps theme fills in its sample text in upper case."""
        settings = apply_presets(TextPlaqueSettings(), theme=find_theme("Nasa"))

        assert settings.plaque.text == "NASA"
        assert settings.plaque.foreground_color == "#FF0000"
        assert settings.plaque.background_color == "#FFFFFF"

    def test_caps_theme_upper_cases_text(self):
        """Existing text is kept but upper-cased."""
        base = TextPlaqueSettings(plaque=PlaqueConfig(text="hello"))

        settings = apply_presets(base, theme=find_theme("TOS Title"))

        assert settings.plaque.text == "HELLO"

    def test_plain_theme_keeps_case(self):
        base = TextPlaqueSettings(plaque=PlaqueConfig(text="hello"))

        settings = apply_presets(base, theme=find_theme("Highway"))

        assert settings.plaque.text == "hello"

    def test_product_applies_dimensions(self):
        """Keychain sets the physical dimensions."""
        settings = apply_presets(TextPlaqueSettings(), product=find_product("Keychain"))

        assert settings.plaque.target_width == pytest.approx(76.2)
        assert settings.plaque.background_depth == 2.0
        assert settings.plaque.outer_offset == 4.0
        assert settings.plaque.foreground_depth == 1.0
        assert settings.plaque.overlap == 0.05

    def test_base_settings_unchanged(self):
        """Applying presets returns new settings."""
        base = TextPlaqueSettings()

        apply_presets(base, theme=find_theme("Nasa"), product=find_product("Keychain"))

        assert base.plaque.text == ""
        assert base.plaque.target_width == 60.0
        assert base.plaque.foreground_color == "#FFFFFF"

    def test_presets_are_frozen(self):
        with pytest.raises(ValidationError):
            THEMES[0].color = "#000000"
