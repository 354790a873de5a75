"""Render page data into HTML documents."""

import logging
from enum import Enum
from typing import Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from docpages.context.metadata_loader import MetadataCollection
from docpages.context.version_context import VersionContext
from docpages.models.metadata import MetadataEntry
from docpages.models.page import PageProps

logger = logging.getLogger("docpages.output.renderer")


class PageView(str, Enum):
    """The two views a documentation page can take."""

    INDEX = "index"
    CONTENT = "content"


def select_view(props: PageProps) -> PageView:
    """Index view when there are no contents, content view otherwise."""
    if getattr(props, "contents", None) is None:
        return PageView.INDEX
    return PageView.CONTENT


class PageRenderer:
    """Renders documentation pages with Jinja2 templates."""

    TEMPLATES = {
        PageView.INDEX: "docs_index.html.j2",
        PageView.CONTENT: "docs.html.j2",
    }

    def __init__(
        self,
        metadata: MetadataCollection,
        version_context: Optional[VersionContext] = None,
        base_path: str = "docs",
        stylesheets: Optional[list[str]] = None,
    ):
        """Initialize the renderer.

        Args:
            metadata: Known documentation versions.
            version_context: Shared current-version context.
            base_path: URL prefix of documentation pages.
            stylesheets: Extra stylesheet URLs linked from every page.
        """
        self._metadata = metadata
        self._context = version_context or VersionContext()
        self._base_path = "/" + base_path.strip("/")
        self._stylesheets = stylesheets or []
        self._env = Environment(
            loader=PackageLoader("docpages.output", "templates"),
            autoescape=select_autoescape(["html", "xml", "html.j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @property
    def version_context(self) -> VersionContext:
        return self._context

    def index_metadata(self, version: Optional[str]) -> Optional[MetadataEntry]:
        """Metadata for an index page, defaulting to the latest version."""
        if version is not None:
            return self._metadata.find(version)
        return self._metadata.latest()

    def render(self, props: PageProps) -> str:
        """Render a page and publish its version to the version context."""
        view = select_view(props)
        self._context.publish(props.version)

        common = {
            "base_path": self._base_path,
            "versions": self._metadata.versions,
            "current_version": self._context.current,
            "stylesheets": self._stylesheets,
        }
        template = self._env.get_template(self.TEMPLATES[view])

        if view is PageView.INDEX:
            entry = self.index_metadata(props.version)
            if entry is None:
                logger.warning(f"No metadata for version {props.version}")
            return template.render(
                version=props.version,
                link_version=entry.version if entry else props.version,
                metadata=entry.metadata if entry else None,
                **common,
            )

        return template.render(
            title=props.title,
            toc=props.toc,
            contents=props.contents,
            **common,
        )
