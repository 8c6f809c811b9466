"""Command-line interface for textplaque.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Theme and product presets
- Dry-run mode reporting dimensions without writing a file
- Verbose/quiet output modes
- Detailed error reporting
"""

from textplaque.cli.app import cli, main

__all__ = ["cli", "main"]
