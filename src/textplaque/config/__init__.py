"""Configuration management for textplaque.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, presets or defaults.

Key classes:
- PlaqueConfig: Text and plaque dimensions
- GeometryConfig: Flattening and classification settings
- ExportConfig: 3MF export settings
- LoggingConfig: Logging settings
- TextPlaqueSettings: Main application settings
- Theme, Product: Immutable presets
"""

from textplaque.config.presets import (
    PRODUCTS,
    THEMES,
    Product,
    Theme,
    apply_presets,
    find_product,
    find_theme,
)
from textplaque.config.settings import (
    ExportConfig,
    GeometryConfig,
    LoggingConfig,
    PlaqueConfig,
    TextPlaqueSettings,
    get_default_settings,
)

__all__ = [
    "PRODUCTS",
    "THEMES",
    "ExportConfig",
    "GeometryConfig",
    "LoggingConfig",
    "PlaqueConfig",
    "Product",
    "TextPlaqueSettings",
    "Theme",
    "apply_presets",
    "find_product",
    "find_theme",
    "get_default_settings",
]
