"""Utility functions for docpages."""

from docpages.utils.file_utils import read_file_async, write_file_async
from docpages.utils.logging import setup_logging

__all__ = [
    "read_file_async",
    "setup_logging",
    "write_file_async",
]
