"""Exception hierarchy for textplaque."""


class TextPlaqueError(Exception):
    """Base exception for all textplaque errors."""

    pass


class FontError(TextPlaqueError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading or parsing a font."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GeometryError(TextPlaqueError):
    """Errors in geometry construction."""

    pass


class EmptyGeometryError(GeometryError):
    """No printable outline could be derived from the input."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"No geometry to build: {reason}")


class DegenerateGeometryError(GeometryError):
    """A shape collapsed below three valid points."""

    def __init__(self, reason: str, point_count: int = 0) -> None:
        self.reason = reason
        self.point_count = point_count
        super().__init__(f"Degenerate geometry: {reason}")


class ExportError(TextPlaqueError):
    """Errors related to package export."""

    pass


class EmptyModelError(ExportError):
    """Packager was given a model without solids."""

    def __init__(self) -> None:
        super().__init__("Cannot export a 3MF package without solids")
