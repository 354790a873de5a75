"""Static path enumeration and per-page data generation."""

import logging
from pathlib import Path
from typing import Optional, Protocol, Sequence

from docpages.config.models import DocsConfig
from docpages.context.metadata_loader import MetadataCollection
from docpages.context.resolver import PathResolver, normalize_slug
from docpages.context.walker import read_dir_recursive
from docpages.conversion.fragments import ConvertedDocument, render_document
from docpages.models.page import ContentProps, IndexProps, PageProps, StaticPath
from docpages.orchestration.cache import PageCache

logger = logging.getLogger("docpages.orchestration.pages")

MISSING_SOURCES_WARNING = (
    "AsciiDoc source files of documentation not found in {path}. "
    "Run the docs extraction step first; no documentation pages will be built."
)


class DocumentConverter(Protocol):
    """Anything that can load and convert a source file."""

    async def load_file(self, path: Path) -> ConvertedDocument: ...


class PageGenerator:
    """Produces the static paths and the data for each documentation page."""

    def __init__(
        self,
        docs_config: DocsConfig,
        metadata: MetadataCollection,
        converter: DocumentConverter,
        cache: Optional[PageCache[ContentProps]] = None,
    ):
        """Initialize the generator.

        Args:
            docs_config: Source locations.
            metadata: Known documentation versions.
            converter: Converter used for content pages.
            cache: Page cache for this build (a fresh one if omitted).
        """
        self._docs = docs_config
        self._metadata = metadata
        self._converter = converter
        self._cache: PageCache[ContentProps] = cache if cache is not None else PageCache()
        self._resolver = PathResolver(
            docs_config.extracted_path,
            metadata.versions,
            index_filename=docs_config.index_filename,
        )

    @property
    def cache(self) -> PageCache[ContentProps]:
        return self._cache

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    async def get_static_paths(self) -> list[StaticPath]:
        """Enumerate every page to pre-render.

        One index page per known version, then one page per discovered
        source file below a version root. Returns an empty list when the
        documentation root does not exist.
        """
        root = self._docs.extracted_path
        if not root.is_dir():
            logger.warning(MISSING_SOURCES_WARNING.format(path=root))
            return []

        paths = [StaticPath(slug=(version,)) for version in self._metadata.versions]

        files = await read_dir_recursive(root, self._docs.index_filename)
        for f in files:
            slug = self._resolver.slug_for(f)
            # index.adoc at the root or directly in a version directory is
            # covered by the version index
            if len(slug) >= 2:
                paths.append(StaticPath(slug=slug))

        logger.info(f"Found {len(files)} source files, {len(paths)} static paths")
        return paths

    async def get_static_props(self, slug: Sequence[str]) -> PageProps:
        """Produce the data for one page.

        Args:
            slug: Path segments of the page.

        Returns:
            IndexProps for a version index, ContentProps otherwise.

        Raises:
            FileNotFoundError: If the page's source file does not exist.
        """
        slug = normalize_slug(slug)
        resolved = self._resolver.resolve(slug)

        if resolved.is_version_index:
            return IndexProps(version=resolved.version)

        key = "/".join(slug)

        async def compute() -> ContentProps:
            document = await self._converter.load_file(resolved.source_path)
            result = render_document(document, self._docs.toc_marker)
            return ContentProps(
                title=result.title,
                toc=result.toc,
                contents=result.body,
                version=resolved.version,
            )

        return await self._cache.get_or_compute(key, compute)
