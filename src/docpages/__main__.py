"""Entry point for running docpages as a module.

Usage:
    python -m docpages [command] [options]
"""

from docpages.cli.main import app

if __name__ == "__main__":
    app()
