"""Exception types raised by docpages."""

from pathlib import Path
from typing import Optional


class DocPagesError(Exception):
    """Base class for all docpages errors."""


class MetadataError(DocPagesError):
    """A version descriptor file could not be parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid metadata file {path}: {reason}")


class ConverterNotFoundError(DocPagesError):
    """The Asciidoctor executable is not available."""

    def __init__(self, executable: str):
        self.executable = executable
        super().__init__(
            f"Asciidoctor executable not found: {executable!r}. "
            "Install asciidoctor or set DOCPAGES_ASCIIDOCTOR."
        )


class ConversionError(DocPagesError):
    """Asciidoctor failed to convert a source file."""

    def __init__(
        self,
        path: Path,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        self.path = path
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            message = f"Conversion of {path} timed out"
        else:
            message = f"Conversion of {path} failed with exit code {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
