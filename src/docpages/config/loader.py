"""Configuration loading and merging logic."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from docpages.config.defaults import CONFIG_SEARCH_PATHS, ENV_ASCIIDOCTOR, ENV_OUTPUT
from docpages.config.models import DocPagesConfig


def find_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file.

    Args:
        explicit_path: Explicitly specified config file path (from CLI).

    Returns:
        Path to config file if found, None otherwise.
    """
    if explicit_path is not None:
        if explicit_path.exists():
            return explicit_path
        raise FileNotFoundError(f"Config file not found: {explicit_path}")

    for search_path in CONFIG_SEARCH_PATHS:
        if search_path.exists():
            return search_path

    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Load configuration from a JSON file."""
    with open(path) as f:
        return json.load(f)


def merge_cli_overrides(
    config: DocPagesConfig,
    docs_root: Optional[Path] = None,
    metadata: Optional[Path] = None,
    output: Optional[Path] = None,
    asciidoctor: Optional[str] = None,
    highlighter: Optional[str] = None,
    concurrency: Optional[int] = None,
    verbose: Optional[int] = None,
    log_file: Optional[Path] = None,
) -> DocPagesConfig:
    """Merge CLI overrides into the configuration.

    CLI arguments take precedence over config file values.

    Args:
        config: Base configuration from file.
        docs_root: Extracted AsciiDoc sources directory.
        metadata: Version descriptor directory.
        output: Output directory for the static site.
        asciidoctor: Asciidoctor executable.
        highlighter: Name of the syntax highlighter.
        concurrency: Maximum pages rendered concurrently.
        verbose: Verbosity level override.
        log_file: Log file path.

    Returns:
        Configuration with CLI overrides applied.
    """
    data = config.model_dump()

    if docs_root is not None:
        data["docs"]["extracted_path"] = docs_root
    if metadata is not None:
        data["docs"]["metadata_path"] = metadata

    if output is not None:
        data["output"]["output_path"] = output
    if verbose is not None:
        data["output"]["verbosity"] = verbose

    if asciidoctor is not None:
        data["converter"]["executable"] = asciidoctor
    if highlighter is not None:
        data["converter"]["highlighter"] = highlighter

    if concurrency is not None:
        data["build"]["max_concurrency"] = concurrency

    if log_file is not None:
        data["log_file"] = log_file

    return DocPagesConfig.model_validate(data)


def load_config(
    config_path: Optional[Path] = None,
    **cli_overrides: Any,
) -> DocPagesConfig:
    """Load configuration with CLI overrides.

    Configuration is loaded from the following sources (in order of priority):
    1. CLI arguments (highest priority)
    2. Environment variables
    3. Config file (if found)
    4. Default values (lowest priority)

    Args:
        config_path: Explicit config file path (from --config CLI option).
        **cli_overrides: CLI argument overrides.

    Returns:
        Merged configuration object.
    """
    config = DocPagesConfig()

    found_config = find_config_file(config_path)
    if found_config is not None:
        file_data = load_config_file(found_config)
        config = DocPagesConfig.model_validate(file_data)

    # Environment only fills in what the CLI left unset
    if executable := os.environ.get(ENV_ASCIIDOCTOR):
        if cli_overrides.get("asciidoctor") is None:
            cli_overrides["asciidoctor"] = executable

    if output := os.environ.get(ENV_OUTPUT):
        if cli_overrides.get("output") is None:
            cli_overrides["output"] = Path(output)

    return merge_cli_overrides(config, **cli_overrides)
