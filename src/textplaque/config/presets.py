"""Theme and product presets.

Themes carry a look (font file, colours, sample text); products carry the
physical constraints of a printed item (target size, thicknesses). Both are
frozen models: applying a preset returns new settings and never touches
shared state.
"""

from pydantic import BaseModel, ConfigDict, Field

from textplaque.config.settings import HEX_COLOR_PATTERN, TextPlaqueSettings


class Theme(BaseModel):
    """A visual preset."""

    model_config = ConfigDict(frozen=True)

    name: str
    font: str = Field(description="Font file name, resolved by the caller")
    color: str = Field(pattern=HEX_COLOR_PATTERN, description="Initial text colour")
    background: str = Field(pattern=HEX_COLOR_PATTERN, description="Initial background colour")
    text: str = Field(description="Sample text")
    tags: tuple[str, ...] = ()
    caps: bool = Field(default=False, description="Render text in upper case")


class Product(BaseModel):
    """Physical constraints of a printed item. Lengths are millimetres."""

    model_config = ConfigDict(frozen=True)

    name: str
    min_size: tuple[float, float]
    target_size: tuple[float, float]
    background_thickness: float = Field(gt=0.0)
    background_padding: float = Field(ge=0.0)
    text_thickness: float = Field(gt=0.0)
    text_overlap: float = Field(gt=0.0)


THEMES: tuple[Theme, ...] = (
    Theme(
        name="TOS Title",
        font="TOS_Title.ttf",
        color="#FFFF00",
        background="#000000",
        text="STAR TREK",
        tags=("Star Trek",),
        caps=True,
    ),
    Theme(
        name="TNG Title",
        font="Federation_Regular.ttf",
        color="#0077FF",
        background="#000000",
        text="STAR TREK",
        tags=("Star Trek",),
        caps=True,
    ),
    Theme(
        name="DS9 Title",
        font="DS9_Title.ttf",
        color="#CCCCCC",
        background="#000000",
        text="STAR TREK",
        tags=("Star Trek",),
        caps=True,
    ),
    Theme(
        name="Nasa",
        font="Nasalization.ttf",
        color="#FF0000",
        background="#FFFFFF",
        text="NASA",
        tags=("Misc",),
        caps=True,
    ),
    Theme(
        name="Highway",
        font="HWYGOTH.ttf",
        color="#FFFFFF",
        background="#44DD44",
        text="Highway",
        tags=("Misc",),
    ),
)

PRODUCTS: tuple[Product, ...] = (
    Product(
        name="Keychain",
        min_size=(36.0, 12.0),
        target_size=(76.2, 25.4),
        background_thickness=2.0,
        background_padding=4.0,
        text_thickness=1.0,
        text_overlap=0.05,
    ),
)


def find_theme(name: str) -> Theme | None:
    """Look up a theme by case-insensitive name."""
    for theme in THEMES:
        if theme.name.lower() == name.lower():
            return theme
    return None


def find_product(name: str) -> Product | None:
    """Look up a product by case-insensitive name."""
    for product in PRODUCTS:
        if product.name.lower() == name.lower():
            return product
    return None


def apply_presets(
    settings: TextPlaqueSettings,
    theme: Theme | None = None,
    product: Product | None = None,
) -> TextPlaqueSettings:
    """Return settings with theme colours and product dimensions applied.

    Theme text is used only when the settings carry no text; caps themes
    upper-case whatever text ends up being rendered.

    Args:
        settings: Base settings (left unchanged)
        theme: Optional visual preset
        product: Optional physical preset

    Returns:
        New settings instance
    """
    plaque = settings.plaque.model_dump()

    if theme is not None:
        plaque["foreground_color"] = theme.color
        plaque["background_color"] = theme.background
        if not plaque["text"]:
            plaque["text"] = theme.text
        if theme.caps:
            plaque["text"] = plaque["text"].upper()

    if product is not None:
        plaque["target_width"] = product.target_size[0]
        plaque["background_depth"] = product.background_thickness
        plaque["outer_offset"] = product.background_padding
        plaque["foreground_depth"] = product.text_thickness
        plaque["overlap"] = product.text_overlap

    return settings.model_copy(update={"plaque": type(settings.plaque).model_validate(plaque)})
