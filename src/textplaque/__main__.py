"""Allow running textplaque as ``python -m textplaque``."""

from textplaque.cli import cli

if __name__ == "__main__":
    cli()
