"""Configuration management for docpages."""

from docpages.config.loader import load_config
from docpages.config.models import (
    BuildConfig,
    ConverterConfig,
    DocPagesConfig,
    DocsConfig,
    OutputConfig,
)

__all__ = [
    "BuildConfig",
    "ConverterConfig",
    "DocPagesConfig",
    "DocsConfig",
    "OutputConfig",
    "load_config",
]
