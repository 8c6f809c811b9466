"""Font backends that turn text into outline path commands.

This module provides:
- FontBackend: The protocol the pipeline depends on
- FontToolsBackend: A fontTools implementation for TTF/OTF files
"""

from io import BytesIO
from pathlib import Path
from typing import Any, Protocol

from fontTools.pens.basePen import BasePen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont

from textplaque.domain import (
    ClosePath,
    CubicTo,
    GlyphOutline,
    LineTo,
    MoveTo,
    PathCommand,
    QuadraticTo,
)
from textplaque.exceptions import FontLoadError

NOTDEF = ".notdef"


class FontBackend(Protocol):
    """Anything that can lay out text as outline commands."""

    def get_outline(self, text: str, size: float) -> GlyphOutline:
        """Lay out text at the given size.

        Args:
            text: Text to lay out; newlines start a new line
            size: Requested size (em height in output units)

        Returns:
            GlyphOutline positioned by advance widths
        """
        ...


class PathCommandPen(BasePen):
    """Records drawing calls as domain path commands.

    BasePen decomposes TrueType implied on-curve points and composite
    glyphs, so only single segments reach the callbacks.
    """

    def __init__(self, glyph_set: Any = None) -> None:
        super().__init__(glyph_set)
        self.commands: list[PathCommand] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(MoveTo(float(pt[0]), float(pt[1])))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(LineTo(float(pt[0]), float(pt[1])))

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self.commands.append(
            QuadraticTo(float(pt1[0]), float(pt1[1]), float(pt2[0]), float(pt2[1]))
        )

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.commands.append(
            CubicTo(
                float(pt1[0]),
                float(pt1[1]),
                float(pt2[0]),
                float(pt2[1]),
                float(pt3[0]),
                float(pt3[1]),
            )
        )

    def _closePath(self) -> None:
        self.commands.append(ClosePath())

    def _endPath(self) -> None:
        self.commands.append(ClosePath())


class FontToolsBackend:
    """Lays out text with a TrueType or OpenType font using fontTools.

    Only advance widths are used for placement; no kerning or shaping.

    Example:
        with FontToolsBackend(Path("font.ttf")) as backend:
            outline = backend.get_outline("Hello", 72.0)
    """

    def __init__(self, font_path: Path | None = None) -> None:
        """Initialize the backend.

        Args:
            font_path: Path to a TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None
        self._name = str(font_path) if font_path is not None else "<memory>"

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "<memory>") -> "FontToolsBackend":
        """Create a loaded backend from raw font bytes.

        Args:
            data: Font file contents
            name: Name used in error messages

        Raises:
            FontLoadError: If the bytes are not a readable font
        """
        backend = cls()
        backend._name = name
        try:
            backend._font = TTFont(BytesIO(data))
            backend._check_tables()
        except FontLoadError:
            raise
        except Exception as e:
            raise FontLoadError(name, str(e)) from e
        return backend

    def load(self) -> None:
        """Load the font file.

        Raises:
            FontLoadError: If the file is missing or cannot be parsed
        """
        if self._font is not None:
            return
        if self._font_path is None:
            raise FontLoadError(self._name, "no font path given")
        if not self._font_path.exists():
            raise FontLoadError(self._name, "file not found")

        try:
            self._font = TTFont(str(self._font_path))
            self._check_tables()
        except FontLoadError:
            raise
        except Exception as e:
            raise FontLoadError(self._name, str(e)) from e

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    def _check_tables(self) -> None:
        font = self._require_font()
        for tag in ("head", "hhea", "hmtx", "cmap"):
            if tag not in font:
                raise FontLoadError(self._name, f"missing '{tag}' table")

    @property
    def units_per_em(self) -> int:
        """Return the font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    def get_outline(self, text: str, size: float) -> GlyphOutline:
        """Lay out text as path commands.

        Glyphs are placed at cumulative advance widths, scaled by
        size / unitsPerEm. Each newline moves down one line height
        (ascender - descender + line gap). Characters missing from the
        character map fall back to .notdef.

        Args:
            text: Text to lay out
            size: Requested size

        Returns:
            GlyphOutline with commands for every glyph

        Raises:
            FontLoadError: If the font cannot be loaded or drawn
        """
        self.load()
        font = self._require_font()

        try:
            scale = size / self.units_per_em
            hhea = font["hhea"]
            ascender = hhea.ascent * scale  # type: ignore[attr-defined]
            descender = hhea.descent * scale  # type: ignore[attr-defined]
            line_height = (hhea.ascent - hhea.descent + hhea.lineGap) * scale  # type: ignore[attr-defined]

            cmap = font.getBestCmap() or {}
            hmtx = font["hmtx"]
            glyph_set = font.getGlyphSet()

            pen = PathCommandPen(glyph_set)
            x = 0.0
            y = 0.0
            widest = 0.0
            for char in text.replace("\r\n", "\n").replace("\r", "\n"):
                if char == "\n":
                    widest = max(widest, x)
                    x = 0.0
                    y -= line_height
                    continue

                name = cmap.get(ord(char), NOTDEF)
                if name not in glyph_set:
                    name = NOTDEF
                if name in glyph_set:
                    glyph_set[name].draw(TransformPen(pen, (scale, 0, 0, scale, x, y)))
                advance = hmtx[name][0] if name in hmtx.metrics else 0  # type: ignore[attr-defined]
                x += advance * scale
            widest = max(widest, x)
        except Exception as e:
            raise FontLoadError(self._name, f"cannot draw text: {e}") from e

        return GlyphOutline(
            advance_width=widest,
            ascender=ascender,
            descender=descender,
            path=pen.commands,
        )

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontToolsBackend":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
