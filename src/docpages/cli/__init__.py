"""Command-line interface for docpages."""

from docpages.cli.main import app

__all__ = ["app"]
