"""Domain models for docpages."""

from docpages.models.metadata import (
    Category,
    MetadataEntry,
    MetadataItem,
    VersionMetadata,
)
from docpages.models.page import (
    ContentProps,
    IndexProps,
    PageProps,
    RenderResult,
    Slug,
    StaticPath,
)

__all__ = [
    "Category",
    "ContentProps",
    "IndexProps",
    "MetadataEntry",
    "MetadataItem",
    "PageProps",
    "RenderResult",
    "Slug",
    "StaticPath",
    "VersionMetadata",
]
