"""Static site build: enumerate, generate, render and write every page."""

import asyncio
import logging
import time
from pathlib import Path
from typing import Optional, Sequence

from pydantic import BaseModel

from docpages.config.models import DocPagesConfig
from docpages.context.metadata_loader import MetadataCollection, MetadataLoader
from docpages.context.version_context import VersionContext
from docpages.conversion.converter import AsciidoctorConverter, create_converter
from docpages.models.page import IndexProps, PageProps, StaticPath
from docpages.orchestration.cache import PageCache
from docpages.orchestration.pages import PageGenerator
from docpages.orchestration.progress import ProgressTracker
from docpages.output.renderer import PageRenderer
from docpages.utils.file_utils import write_file_async

logger = logging.getLogger("docpages.orchestration.builder")

HIGHLIGHT_STYLESHEET = "highlight.css"


class BuildResult(BaseModel):
    """Summary of a completed build."""

    output_path: Path
    pages_written: int = 0
    versions: list[str] = []
    cache_hits: int = 0
    cache_misses: int = 0
    duration_seconds: float = 0.0


class SiteBuilder:
    """Builds the static documentation pages for one run.

    Every builder owns its own page cache, so cached page data lives
    exactly as long as the run.
    """

    def __init__(
        self,
        config: DocPagesConfig,
        converter: Optional[AsciidoctorConverter] = None,
        progress_tracker: Optional[ProgressTracker] = None,
        version_context: Optional[VersionContext] = None,
    ):
        """Initialize the builder.

        Args:
            config: Build configuration.
            converter: Converter to use (created from config if omitted).
            progress_tracker: Progress display (disabled if omitted).
            version_context: Shared current-version context.
        """
        self._config = config
        self._converter = converter or create_converter(config.converter)
        self._progress = progress_tracker or ProgressTracker(show_progress=False)
        self._version_context = version_context or VersionContext()
        self._cache: PageCache = PageCache()

        # Will be initialized lazily
        self._metadata: Optional[MetadataCollection] = None
        self._generator: Optional[PageGenerator] = None
        self._renderer: Optional[PageRenderer] = None

    @property
    def output_root(self) -> Path:
        """Directory that receives the documentation pages."""
        return self._config.output.output_path / self._config.output.base_path.strip("/")

    async def _initialize(self) -> None:
        if self._generator is not None:
            return

        self._metadata = await MetadataLoader(self._config.docs.metadata_path).load_all()
        logger.info(f"Known versions: {', '.join(self._metadata.versions) or 'none'}")

        self._generator = PageGenerator(
            docs_config=self._config.docs,
            metadata=self._metadata,
            converter=self._converter,
            cache=self._cache,
        )

        stylesheets = []
        if self._config.converter.highlighter != "none":
            base = "/" + self._config.output.base_path.strip("/")
            stylesheets.append(f"{base}/{HIGHLIGHT_STYLESHEET}")

        self._renderer = PageRenderer(
            metadata=self._metadata,
            version_context=self._version_context,
            base_path=self._config.output.base_path,
            stylesheets=stylesheets,
        )

    async def get_static_paths(self) -> list[StaticPath]:
        await self._initialize()
        return await self._generator.get_static_paths()

    async def get_static_props(self, slug: Sequence[str]) -> PageProps:
        await self._initialize()
        return await self._generator.get_static_props(slug)

    async def render_slug(self, slug: Sequence[str]) -> str:
        """Render one page to HTML."""
        props = await self.get_static_props(slug)
        return self._renderer.render(props)

    def page_path(self, path: StaticPath) -> Path:
        """Output file for a static path."""
        return self.output_root.joinpath(*path.slug, "index.html")

    async def build(self) -> BuildResult:
        """Render and write every static path.

        The first page that fails aborts the build.

        Returns:
            BuildResult summarizing the run.
        """
        started = time.monotonic()
        await self._initialize()

        paths = await self._generator.get_static_paths()
        result = BuildResult(
            output_path=self.output_root,
            versions=self._metadata.versions,
        )
        if not paths:
            logger.warning("No documentation pages to build")
            result.duration_seconds = time.monotonic() - started
            return result

        logger.info(f"Rendering {len(paths)} pages to {self.output_root}")
        self._progress.set_total(len(paths))
        semaphore = asyncio.Semaphore(self._config.build.max_concurrency)

        async def build_page(path: StaticPath) -> None:
            async with semaphore:
                html = await self.render_slug(path.slug)
                await write_file_async(self.page_path(path), html)
                self._progress.advance(path.key)

        try:
            await self._run_pages([build_page(p) for p in paths])
            await self._write_landing_page()
            await self._write_stylesheet()
        finally:
            self._progress.finish()

        result.pages_written = self._progress.completed
        result.cache_hits = self._cache.hits
        result.cache_misses = self._cache.misses
        result.duration_seconds = time.monotonic() - started
        logger.info(
            f"Wrote {result.pages_written} pages in {result.duration_seconds:.1f}s"
        )
        return result

    @staticmethod
    async def _run_pages(jobs: list) -> None:
        """Run page jobs until all finish or one fails.

        On the first failure the remaining jobs are cancelled and awaited
        before the error is re-raised, so nothing is written afterwards.
        """
        tasks = [asyncio.create_task(job) for job in jobs]
        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        for task in tasks:
            if task in done and task.exception() is not None:
                raise task.exception()

    async def _write_landing_page(self) -> None:
        """Index of the latest version at the documentation root."""
        if not len(self._metadata):
            return
        html = self._renderer.render(IndexProps())
        await write_file_async(self.output_root / "index.html", html)

    async def _write_stylesheet(self) -> None:
        highlighter = self._converter.highlighter
        if highlighter is None:
            return
        css = highlighter.stylesheet()
        if css:
            await write_file_async(self.output_root / HIGHLIGHT_STYLESHEET, css)
