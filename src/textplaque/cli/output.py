"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from textplaque.config import Product, Theme
from textplaque.domain import Dimensions

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Textplaque[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        upm: Units per em value
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(font_path)
    console.print(line)
    console.print(f"  {upm:,} UPM")


def print_geometry_info(shapes: int, holes: int, fg_triangles: int, bg_triangles: int) -> None:
    """Print geometry statistics of a render."""
    console.print(f"  {shapes} shapes {SYM_DOT} {holes} holes")
    console.print(
        f"  {fg_triangles:,} foreground triangles {SYM_DOT} "
        f"{bg_triangles:,} background triangles"
    )


def print_dimensions(dimensions: Dimensions) -> None:
    """Print plaque dimensions as a table.

    Args:
        dimensions: Rendered plaque size in millimetres
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Axis")
    table.add_column("Size", justify="right")
    table.add_row("Width", f"{dimensions.width:.2f} mm")
    table.add_row("Height", f"{dimensions.height:.2f} mm")
    table.add_row("Depth", f"{dimensions.depth:.2f} mm")
    console.print(table)


def print_warnings(warnings: list[str], verbose: bool) -> None:
    """Print render warnings.

    Args:
        warnings: Non-fatal diagnostics
        verbose: Whether to list every warning
    """
    if not warnings:
        return
    console.print(f"  [yellow]{SYM_WARN} {len(warnings)} warnings[/yellow]")
    if verbose:
        for warning in warnings:
            console.print(f"    {warning}")


def print_presets(themes: tuple[Theme, ...], products: tuple[Product, ...]) -> None:
    """Print available themes and products."""
    table = Table(title="Themes", title_justify="left")
    table.add_column("Name", style="bold")
    table.add_column("Font")
    table.add_column("Text")
    table.add_column("Background")
    table.add_column("Tags")
    for theme in themes:
        table.add_row(
            theme.name,
            theme.font,
            theme.color,
            theme.background,
            ", ".join(theme.tags),
        )
    console.print(table)

    table = Table(title="Products", title_justify="left")
    table.add_column("Name", style="bold")
    table.add_column("Target size")
    table.add_column("Background")
    table.add_column("Padding")
    table.add_column("Text")
    for product in products:
        width, height = product.target_size
        table.add_row(
            product.name,
            f"{width:g} x {height:g} mm",
            f"{product.background_thickness:g} mm",
            f"{product.background_padding:g} mm",
            f"{product.text_thickness:g} mm",
        )
    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(output_path: str, file_size: str, total_time_s: float) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total render time in seconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")
