"""AsciiDoc to HTML conversion through the Asciidoctor CLI."""

import asyncio
import html
import logging
import re
import shutil
from pathlib import Path
from typing import Optional

from docpages.config.models import ConverterConfig
from docpages.conversion.fragments import parse_fragment
from docpages.conversion.highlight import (
    Highlighter,
    HighlighterRegistry,
    create_highlighter,
)
from docpages.errors import ConversionError, ConverterNotFoundError
from docpages.utils.file_utils import read_file_async

logger = logging.getLogger("docpages.conversion.converter")

# Level-0 section title, e.g. "= Vert.x Core Manual"
DOCUMENT_TITLE_PATTERN = re.compile(r"=[ \t]+(.+?)[ \t]*")

# Header attribute entry, e.g. ":toc: left" or ":!sectnums:"
ATTRIBUTE_ENTRY_PATTERN = re.compile(r":!?\w[\w-]*!?:(?:[ \t].*)?")

BLOCK_COMMENT_DELIMITER = "////"


class Document:
    """A converted AsciiDoc document."""

    def __init__(
        self,
        path: Path,
        html_body: str,
        title: str = "",
        highlighter: Optional[Highlighter] = None,
    ):
        self.path = path
        self.title = title
        self._html = html_body
        self._highlighter = highlighter
        self._converted: Optional[str] = None

    def get_document_title(self) -> str:
        return self.title

    def convert(self) -> str:
        """Full HTML body, with source blocks highlighted."""
        if self._converted is None:
            body = self._html
            if self._highlighter is not None:
                body = self._highlighter.apply(body)
            self._converted = body
        return self._converted


class AsciidoctorConverter:
    """Converts AsciiDoc files by running the `asciidoctor` executable.

    Must be initialized before use; `initialize()` is idempotent and safe
    to await from concurrent page builds.
    """

    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        registry: Optional[HighlighterRegistry] = None,
    ):
        self._config = config or ConverterConfig()
        self._registry = registry or HighlighterRegistry()
        self._executable: Optional[str] = None
        self._highlighter: Optional[Highlighter] = None
        self._init_lock = asyncio.Lock()
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def highlighter(self) -> Optional[Highlighter]:
        return self._highlighter

    async def initialize(self) -> None:
        """Locate the executable and register the configured highlighter.

        Raises:
            ConverterNotFoundError: If asciidoctor cannot be found.
            ValueError: If the configured highlighter is unknown.
        """
        async with self._init_lock:
            if self._initialized:
                return

            executable = shutil.which(self._config.executable)
            if executable is None:
                raise ConverterNotFoundError(self._config.executable)

            # Drop anything registered by an earlier initialization
            self._registry.unregister_all()
            highlighter = create_highlighter(
                self._config.highlighter, self._config.pygments_style
            )
            if highlighter is not None:
                self._registry.register(highlighter)
                self._highlighter = self._registry.get(highlighter.name)

            self._executable = executable
            self._initialized = True
            logger.debug(
                f"Using {executable} (highlighter: {self._config.highlighter})"
            )

    def attributes(self) -> dict[str, str]:
        """Document attributes passed on every conversion."""
        attrs: dict[str, str] = {}
        if self._config.show_title:
            attrs["showtitle"] = ""
        attrs["toc"] = self._config.toc_position.value
        attrs.update(self._config.attributes)
        return attrs

    def build_command(self, path: Path) -> list[str]:
        """Command line converting `path` to embedded HTML on stdout."""
        cmd = [
            self._executable or self._config.executable,
            "--embedded",
            "--safe-mode",
            self._config.safe_mode.value,
        ]
        for name, value in self.attributes().items():
            cmd.extend(["-a", f"{name}={value}" if value else name])
        cmd.extend(["--out-file", "-", str(path)])
        return cmd

    async def load_file(self, path: Path) -> Document:
        """Convert an AsciiDoc file.

        Args:
            path: Source file.

        Returns:
            The converted document.

        Raises:
            FileNotFoundError: If the source file does not exist.
            ConversionError: If asciidoctor fails or times out.
        """
        await self.initialize()

        if not path.is_file():
            raise FileNotFoundError(f"AsciiDoc source not found: {path}")

        logger.debug(f"Converting {path}")
        process = await asyncio.create_subprocess_exec(
            *self.build_command(path),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self._config.timeout_seconds
            )
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise ConversionError(path) from e

        warnings = stderr.decode("utf-8", errors="replace")
        if process.returncode != 0:
            raise ConversionError(path, process.returncode, warnings)
        if warnings.strip():
            logger.warning(f"asciidoctor: {warnings.strip()}")

        body = stdout.decode("utf-8")
        title = self._extract_title(body)
        if not title:
            title = await self._read_source_title(path)

        return Document(path, body, title=title, highlighter=self._highlighter)

    def _extract_title(self, body: str) -> str:
        """Inner HTML of the rendered document title, if shown."""
        for node in parse_fragment(body):
            if node.tag == "h1":
                return node.inner_html(body).strip()
        return ""

    async def _read_source_title(self, path: Path) -> str:
        content = await read_file_async(path)
        return html.escape(find_document_title(content), quote=False)


def find_document_title(content: str) -> str:
    """Level-0 title from the document header, or "" without one.

    Blank lines, comments and attribute entries may precede the title. The
    first other line must be the title; a "= ..." line anywhere later,
    such as inside a listing, is body content.
    """
    in_comment = False
    for line in content.splitlines():
        line = line.rstrip()
        if line == BLOCK_COMMENT_DELIMITER:
            in_comment = not in_comment
            continue
        if in_comment or not line or line.startswith("//"):
            continue
        if ATTRIBUTE_ENTRY_PATTERN.fullmatch(line):
            continue
        match = DOCUMENT_TITLE_PATTERN.fullmatch(line)
        return match.group(1) if match else ""
    return ""


def create_converter(
    config: ConverterConfig,
    registry: Optional[HighlighterRegistry] = None,
) -> AsciidoctorConverter:
    """Create a converter from configuration."""
    return AsciidoctorConverter(config=config, registry=registry)
