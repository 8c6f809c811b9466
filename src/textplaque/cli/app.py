"""CLI application entry point for textplaque.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from textplaque import __version__
from textplaque.cli.output import (
    SYM_OK,
    console,
    print_dimensions,
    print_error,
    print_font_info,
    print_geometry_info,
    print_header,
    print_presets,
    print_step,
    print_success,
    print_warnings,
)
from textplaque.config import (
    PRODUCTS,
    THEMES,
    ExportConfig,
    GeometryConfig,
    LoggingConfig,
    PlaqueConfig,
    TextPlaqueSettings,
    apply_presets,
    find_product,
    find_theme,
)
from textplaque.core.pipeline import PlaquePipeline
from textplaque.domain import PackageLayout, UpAxis
from textplaque.exceptions import EmptyGeometryError, FontLoadError, TextPlaqueError
from textplaque.io import FontToolsBackend, suggest_filename
from textplaque.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="textplaque",
    help="Turn text into a two-colour 3D-printable plaque (3MF).",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Textplaque[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def render(
    text: Annotated[
        str | None,
        typer.Argument(
            help="Text to render (use \\n for a new line; theme text if omitted)",
            show_default=False,
        ),
    ] = None,
    font: Annotated[
        Path | None,
        typer.Option(
            "--font",
            "-f",
            help="Path to TTF/OTF font file (default: the theme's font in --font-dir)",
        ),
    ] = None,
    font_dir: Annotated[
        Path,
        typer.Option(
            "--font-dir",
            help="Directory holding theme fonts",
        ),
    ] = Path("."),
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {text}_3d_text.3mf)",
        ),
    ] = None,
    foreground_depth: Annotated[
        float | None,
        typer.Option("--depth", "-d", help="Foreground (text) depth in mm"),
    ] = None,
    background_depth: Annotated[
        float | None,
        typer.Option("--background-depth", "-b", help="Background depth in mm"),
    ] = None,
    outer_offset: Annotated[
        float | None,
        typer.Option("--outer-offset", help="Background padding around the text in mm"),
    ] = None,
    inner_offset: Annotated[
        float | None,
        typer.Option("--inner-offset", help="How far counters shrink in the background, in mm"),
    ] = None,
    x_offset: Annotated[
        float | None,
        typer.Option("--x-offset", help="X translation in mm"),
    ] = None,
    y_offset: Annotated[
        float | None,
        typer.Option("--y-offset", help="Y translation in mm"),
    ] = None,
    scale: Annotated[
        float | None,
        typer.Option("--scale", "-s", help="Multiplier applied to the target width"),
    ] = None,
    width: Annotated[
        float | None,
        typer.Option("--width", "-w", help="Target text width in mm before --scale"),
    ] = None,
    overlap: Annotated[
        float | None,
        typer.Option("--overlap", help="Depth the text sinks into the background, in mm"),
    ] = None,
    color: Annotated[
        str | None,
        typer.Option("--color", help="Text colour (#RRGGBB)"),
    ] = None,
    background_color: Annotated[
        str | None,
        typer.Option("--background-color", help="Background colour (#RRGGBB)"),
    ] = None,
    curve_segments: Annotated[
        int,
        typer.Option(
            "--curve-segments",
            help="Points per curve segment (8 for drafts, 16-32 for export)",
            min=1,
            max=128,
        ),
    ] = 16,
    up_axis: Annotated[
        str,
        typer.Option("--up-axis", help="Up axis of the exported model (X_UP|Y_UP|Z_UP)"),
    ] = UpAxis.Y_UP.value,
    unit: Annotated[
        str,
        typer.Option("--unit", help="3MF model unit"),
    ] = "millimeter",
    layout: Annotated[
        str,
        typer.Option("--layout", help="Package layout (assembly|flat)"),
    ] = PackageLayout.ASSEMBLY.value,
    theme_name: Annotated[
        str | None,
        typer.Option("--theme", "-t", help="Apply a theme preset (see --list-presets)"),
    ] = None,
    product_name: Annotated[
        str | None,
        typer.Option("--product", "-p", help="Apply a product preset (see --list-presets)"),
    ] = None,
    list_presets: Annotated[
        bool,
        typer.Option(
            "--list-presets",
            help="List themes and products and exit",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Build the geometry and report dimensions without writing a file",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Render TEXT as a raised foreground on an offset background plaque.

    Example:
        textplaque "Hello" --font Roboto-Regular.ttf

    This will create hello_3d_text.3mf with two parts, the text and its
    background, each assigned to its own filament.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if list_presets:
        print_presets(THEMES, PRODUCTS)
        raise typer.Exit(code=0)

    theme = None
    if theme_name is not None:
        theme = find_theme(theme_name)
        if theme is None:
            print_error(
                f"Unknown theme: {theme_name}",
                details="Valid values: " + ", ".join(t.name for t in THEMES),
            )
            raise typer.Exit(code=1)

    product = None
    if product_name is not None:
        product = find_product(product_name)
        if product is None:
            print_error(
                f"Unknown product: {product_name}",
                details="Valid values: " + ", ".join(p.name for p in PRODUCTS),
            )
            raise typer.Exit(code=1)

    overrides: dict[str, Any] = {
        "foreground_depth": foreground_depth,
        "background_depth": background_depth,
        "outer_offset": outer_offset,
        "inner_offset": inner_offset,
        "x_offset": x_offset,
        "y_offset": y_offset,
        "scale": scale,
        "target_width": width,
        "overlap": overlap,
        "foreground_color": color,
        "background_color": background_color,
    }

    try:
        settings = TextPlaqueSettings(
            plaque=PlaqueConfig(text=(text or "").replace("\\n", "\n")),
            geometry=GeometryConfig(curve_segments=curve_segments),
            export=ExportConfig(
                up_axis=UpAxis(up_axis.upper()),
                unit=unit,
                layout=PackageLayout(layout.lower()),
            ),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "ERROR",
            ),
        )
        settings = apply_presets(settings, theme=theme, product=product)
        plaque = settings.plaque.model_dump()
        plaque.update({key: value for key, value in overrides.items() if value is not None})
        settings = settings.model_copy(update={"plaque": PlaqueConfig.model_validate(plaque)})
    except (ValidationError, ValueError) as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1)

    if not settings.plaque.text.strip():
        print_error("No text to render", details="Pass TEXT or choose a --theme.")
        raise typer.Exit(code=1)

    font_path = font
    if font_path is None and theme is not None:
        font_path = font_dir / theme.font
    if font_path is None:
        print_error("No font given", details="Pass --font or choose a --theme.")
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    start = time.time()
    try:
        if not quiet:
            print_step("Loading font")

        with FontToolsBackend(font_path) as backend:
            if not quiet:
                print_font_info(font_path=str(font_path), upm=backend.units_per_em)
                print_step("Building geometry")

            pipeline = PlaquePipeline(settings, backend, logger=logger)
            result = pipeline.render()

            if not quiet:
                print_geometry_info(
                    shapes=len(result.shapes),
                    holes=sum(len(shape.holes) for shape in result.shapes),
                    fg_triangles=result.foreground.mesh.triangle_count,
                    bg_triangles=result.background.mesh.triangle_count,
                )
                print_dimensions(result.dimensions)
                print_warnings(result.warnings, verbose=verbose)

            if dry_run:
                if not quiet:
                    console.print(
                        f"\n[bold green]{SYM_OK} Dry run complete[/bold green] "
                        "- no file written"
                    )
                raise typer.Exit(code=0)

            if not quiet:
                print_step("Writing 3MF")

            output_path = output or Path(suggest_filename(settings.plaque.text))
            size = pipeline.write(output_path, result)

        if not quiet:
            print_success(
                output_path=str(output_path),
                file_size=_format_file_size(size),
                total_time_s=time.time() - start,
            )

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except EmptyGeometryError as e:
        print_error(f"Nothing to print: {e.reason}")
        raise typer.Exit(code=1)
    except TextPlaqueError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except OSError as e:
        print_error(f"Could not write output: {e}")
        raise typer.Exit(code=1)


def _format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable form.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
