"""Default configuration values for docpages."""

from pathlib import Path

# Default configuration file name
DEFAULT_CONFIG_FILENAME = "docpages.config.json"

# Search paths for configuration file (in order of priority)
CONFIG_SEARCH_PATHS = [
    Path.cwd() / DEFAULT_CONFIG_FILENAME,
    Path.home() / ".config" / "docpages" / "config.json",
]

# Where `update-docs` extracts the AsciiDoc sources of every version
DEFAULT_EXTRACTED_PATH = "docs/extracted"

# One YAML descriptor per documentation version
DEFAULT_METADATA_PATH = "docs/metadata"

# Source file rendered for each page directory
INDEX_FILENAME = "index.adoc"

# id of the generated table of contents container
TOC_MARKER = "toc"

DEFAULT_ASCIIDOCTOR = "asciidoctor"

DEFAULT_OUTPUT_DIR = "out"

# URL prefix of documentation pages
DEFAULT_BASE_PATH = "docs"

DEFAULT_CONCURRENCY = 4

# Environment variables
ENV_ASCIIDOCTOR = "DOCPAGES_ASCIIDOCTOR"
ENV_OUTPUT = "DOCPAGES_OUTPUT"
