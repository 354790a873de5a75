"""Page data models passed between generation and rendering."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

Slug = tuple[str, ...]


class StaticPath(BaseModel):
    """A page to pre-render, identified by its slug."""

    slug: Slug

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> str:
        """Slug segments joined with "/"."""
        return "/".join(self.slug)


class RenderResult(BaseModel):
    """Converted document split into title, body and table of contents."""

    title: str
    body: str
    toc: str = ""


class IndexProps(BaseModel):
    """Page data for a version index.

    Without a version the index lists the latest known version.
    """

    version: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def contents(self) -> None:
        return None


class ContentProps(BaseModel):
    """Page data for a converted document."""

    title: str
    toc: str
    contents: str
    version: Optional[str] = None

    model_config = ConfigDict(frozen=True)


PageProps = Union[IndexProps, ContentProps]
