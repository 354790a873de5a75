"""Map slugs to documentation versions and source files."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence

from docpages.config.defaults import INDEX_FILENAME
from docpages.models.page import Slug


def normalize_slug(segments: Iterable[str]) -> Slug:
    """Drop empty segments left by leading or trailing slashes."""
    return tuple(s for s in segments if s)


def parse_slug(path: str) -> Slug:
    """Split a URL path such as "4.x/guide/" into a slug."""
    return normalize_slug(path.split("/"))


@dataclass(frozen=True)
class ResolvedPath:
    """Outcome of resolving a slug."""

    slug: Slug
    version: Optional[str]
    source_path: Optional[Path]

    @property
    def is_version_index(self) -> bool:
        return self.source_path is None


class PathResolver:
    """Resolves slugs against the extracted documentation tree.

    The version segment stays part of the file path, so the layout under
    the root mirrors the slug exactly: `<root>/4.x/guide/index.adoc`.
    """

    def __init__(
        self,
        docs_root: Path,
        versions: Iterable[str],
        index_filename: str = INDEX_FILENAME,
    ):
        self.docs_root = docs_root
        self.versions = frozenset(versions)
        self.index_filename = index_filename

    def detect_version(self, slug: Sequence[str]) -> Optional[str]:
        """Return the first segment if it names a known version."""
        if slug and slug[0] in self.versions:
            return slug[0]
        return None

    def resolve(self, slug: Sequence[str]) -> ResolvedPath:
        slug = tuple(slug)
        version = self.detect_version(slug)

        if version is not None and len(slug) <= 1:
            return ResolvedPath(slug=slug, version=version, source_path=None)

        source = self.docs_root.joinpath(*slug, self.index_filename)
        return ResolvedPath(slug=slug, version=version, source_path=source)

    def slug_for(self, source_path: Path) -> Slug:
        """Slug of a discovered source file: its directory below the root."""
        root = Path(os.path.abspath(self.docs_root))
        relative = Path(os.path.abspath(source_path.parent)).relative_to(root)
        return normalize_slug(relative.parts)
