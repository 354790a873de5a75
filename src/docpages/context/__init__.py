"""Context layer: metadata, source discovery and slug resolution."""

from docpages.context.metadata_loader import MetadataCollection, MetadataLoader
from docpages.context.resolver import PathResolver, ResolvedPath, normalize_slug, parse_slug
from docpages.context.version_context import VersionContext
from docpages.context.walker import read_dir_recursive

__all__ = [
    "MetadataCollection",
    "MetadataLoader",
    "PathResolver",
    "ResolvedPath",
    "VersionContext",
    "normalize_slug",
    "parse_slug",
    "read_dir_recursive",
]
