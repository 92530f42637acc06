"""CLI entry point for the Kelly bet calculator app.

All command logic lives in the cli subpackage.
"""

from kelly_tools.apps.calculator.cli import app

__all__ = ["app", "main"]


def main() -> None:
    """Run the calculator CLI application."""
    app()


if __name__ == "__main__":
    main()
