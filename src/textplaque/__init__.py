"""textplaque - Turn text into 3D-printable plaques.

textplaque renders a string in an outline font, extrudes the glyphs into a
raised foreground body, grows an offset background plaque underneath it, and
writes both bodies into a 3MF package that slicers open as a two-part,
two-colour print.

Example:
    $ textplaque "Hello" --font Roboto-Bold.ttf

This will create hello_3d_text.3mf with a foreground and a background part.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
