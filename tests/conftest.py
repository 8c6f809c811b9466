"""Shared fixtures for textplaque tests.

The test font is built on the fly with fontTools' FontBuilder so no binary
fixtures are needed. Glyph outlines (units per em 1000):

- O: rounded outer contour with a rounded counter (quadratic curves)
- H: a single 12-point polygon
- i: a stem and a separate dot
- space: empty, advance only
- .notdef: a plain box
"""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from textplaque.domain import ClassifiedShape, Contour, Point

UNITS_PER_EM = 1000
ADVANCES = {".notdef": 500, "space": 250, "O": 600, "H": 600, "i": 200}


def _polygon(pen: TTGlyphPen, points: list[tuple[float, float]]) -> None:
    pen.moveTo(points[0])
    for point in points[1:]:
        pen.lineTo(point)
    pen.closePath()


def _glyph_o():
    pen = TTGlyphPen(None)
    pen.moveTo((300, 0))
    pen.qCurveTo((550, 0), (550, 350))
    pen.qCurveTo((550, 700), (300, 700))
    pen.qCurveTo((50, 700), (50, 350))
    pen.qCurveTo((50, 0), (300, 0))
    pen.closePath()
    pen.moveTo((300, 150))
    pen.qCurveTo((150, 150), (150, 350))
    pen.qCurveTo((150, 550), (300, 550))
    pen.qCurveTo((450, 550), (450, 350))
    pen.qCurveTo((450, 150), (300, 150))
    pen.closePath()
    return pen.glyph()


def _glyph_h():
    pen = TTGlyphPen(None)
    _polygon(
        pen,
        [
            (0, 0),
            (0, 700),
            (100, 700),
            (100, 400),
            (400, 400),
            (400, 700),
            (500, 700),
            (500, 0),
            (400, 0),
            (400, 300),
            (100, 300),
            (100, 0),
        ],
    )
    return pen.glyph()


def _glyph_i():
    pen = TTGlyphPen(None)
    _polygon(pen, [(0, 0), (0, 450), (100, 450), (100, 0)])
    _polygon(pen, [(0, 550), (0, 650), (100, 650), (100, 550)])
    return pen.glyph()


def _glyph_notdef():
    pen = TTGlyphPen(None)
    _polygon(pen, [(50, 0), (50, 700), (450, 700), (450, 0)])
    return pen.glyph()


def _glyph_empty():
    return TTGlyphPen(None).glyph()


def build_test_font(path: Path) -> Path:
    """Build a tiny TrueType font and save it to path."""
    glyphs = {
        ".notdef": _glyph_notdef(),
        "space": _glyph_empty(),
        "O": _glyph_o(),
        "H": _glyph_h(),
        "i": _glyph_i(),
    }

    fb = FontBuilder(unitsPerEm=UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(list(glyphs))
    fb.setupCharacterMap({ord(" "): "space", ord("O"): "O", ord("H"): "H", ord("i"): "i"})
    fb.setupGlyf(glyphs)
    glyf = fb.font["glyf"]
    side_bearings = {}
    for name in glyphs:
        glyf[name].recalcBounds(glyf)
        side_bearings[name] = getattr(glyf[name], "xMin", 0)
    fb.setupHorizontalMetrics({name: (ADVANCES[name], side_bearings[name]) for name in glyphs})

    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Plaque Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture(scope="session")
def font_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Path to the generated test font."""
    return build_test_font(tmp_path_factory.mktemp("fonts") / "PlaqueTest-Regular.ttf")


@pytest.fixture(scope="session")
def font_bytes(font_path: Path) -> bytes:
    """Raw bytes of the generated test font."""
    return font_path.read_bytes()


def square(x0: float, y0: float, size: float, ccw: bool = True) -> Contour:
    """Axis-aligned square contour."""
    points = [
        Point(x0, y0),
        Point(x0 + size, y0),
        Point(x0 + size, y0 + size),
        Point(x0, y0 + size),
    ]
    if not ccw:
        points.reverse()
    return Contour(points=points)


@pytest.fixture
def square_shape() -> ClassifiedShape:
    """10x10 square without holes."""
    return ClassifiedShape(outer=square(0.0, 0.0, 10.0))


@pytest.fixture
def ring_shape() -> ClassifiedShape:
    """10x10 square with a 4x4 square hole in the middle."""
    return ClassifiedShape(outer=square(0.0, 0.0, 10.0), holes=[square(3.0, 3.0, 4.0)])
