"""Entry point for ``python -m ding``."""

from ding.cli.commands import app

if __name__ == "__main__":
    app()
