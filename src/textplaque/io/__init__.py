"""I/O layer for textplaque.

This module handles reading fonts and writing 3MF packages. It keeps
fontTools and the 3MF serialization details out of the core algorithms.

Key responsibilities:
- Load TTF/OTF fonts and lay out text as path commands
- Serialize solids into 3MF archives (flat or assembly layout)
- Remap coordinates for the configured up axis
- Suggest output file names

Key classes:
- FontBackend: Protocol for text layout backends
- FontToolsBackend: fontTools implementation
- ThreeMFPackager: 3MF writer
"""

from textplaque.io.font import FontBackend, FontToolsBackend, PathCommandPen
from textplaque.io.threemf import (
    MIME_TYPE,
    PackagerStage,
    ThreeMFPackager,
    suggest_filename,
    transform_coordinates,
)

__all__ = [
    "MIME_TYPE",
    "FontBackend",
    "FontToolsBackend",
    "PackagerStage",
    "PathCommandPen",
    "ThreeMFPackager",
    "suggest_filename",
    "transform_coordinates",
]
