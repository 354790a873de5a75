"""Pydantic configuration models for docpages."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from docpages.config.defaults import (
    DEFAULT_ASCIIDOCTOR,
    DEFAULT_BASE_PATH,
    DEFAULT_CONCURRENCY,
    DEFAULT_EXTRACTED_PATH,
    DEFAULT_METADATA_PATH,
    DEFAULT_OUTPUT_DIR,
    INDEX_FILENAME,
    TOC_MARKER,
)


class SafeMode(str, Enum):
    """Asciidoctor safe modes."""

    UNSAFE = "unsafe"
    SAFE = "safe"
    SERVER = "server"
    SECURE = "secure"


class TocPosition(str, Enum):
    """Placement of the generated table of contents."""

    LEFT = "left"
    RIGHT = "right"
    AUTO = "auto"


class DocsConfig(BaseModel):
    """Location of the documentation sources."""

    extracted_path: Path = Path(DEFAULT_EXTRACTED_PATH)
    metadata_path: Path = Path(DEFAULT_METADATA_PATH)
    index_filename: str = INDEX_FILENAME
    toc_marker: str = TOC_MARKER


class ConverterConfig(BaseModel):
    """Asciidoctor invocation settings."""

    executable: str = DEFAULT_ASCIIDOCTOR
    safe_mode: SafeMode = SafeMode.UNSAFE
    toc_position: TocPosition = TocPosition.LEFT
    show_title: bool = True
    highlighter: str = "pygments"
    pygments_style: str = "default"
    attributes: dict[str, str] = Field(default_factory=dict)
    timeout_seconds: float = Field(default=120.0, gt=0.0, le=3600.0)


class BuildConfig(BaseModel):
    """Static build behavior."""

    max_concurrency: int = Field(default=DEFAULT_CONCURRENCY, ge=1, le=64)


class OutputConfig(BaseModel):
    """Output configuration."""

    output_path: Path = Path(DEFAULT_OUTPUT_DIR)
    base_path: str = DEFAULT_BASE_PATH
    verbosity: int = Field(default=1, ge=0, le=3)


class DocPagesConfig(BaseModel):
    """Root configuration model."""

    docs: DocsConfig = Field(default_factory=DocsConfig)
    converter: ConverterConfig = Field(default_factory=ConverterConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    # Log file (optional, can be overridden by CLI)
    log_file: Optional[Path] = None

    model_config = ConfigDict(extra="ignore")  # Ignore unknown fields in config file
