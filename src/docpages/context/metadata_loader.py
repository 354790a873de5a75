"""Load the versioned metadata collection from YAML descriptor files."""

import logging
from pathlib import Path
from typing import Iterator, Optional

import aiofiles
import yaml
from pydantic import ValidationError

from docpages.errors import MetadataError
from docpages.models.metadata import MetadataEntry, VersionMetadata

logger = logging.getLogger("docpages.context.metadata_loader")


class MetadataCollection:
    """Immutable, version-sorted sequence of metadata entries."""

    def __init__(self, entries: list[MetadataEntry]):
        self._entries = tuple(sorted(entries, key=lambda e: e.version))
        self._by_version = {e.version: e for e in self._entries}

    def __iter__(self) -> Iterator[MetadataEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def versions(self) -> list[str]:
        """Known version identifiers in ascending order."""
        return [e.version for e in self._entries]

    def has_version(self, version: Optional[str]) -> bool:
        return version in self._by_version

    def find(self, version: str) -> Optional[MetadataEntry]:
        return self._by_version.get(version)

    def latest(self) -> Optional[MetadataEntry]:
        """The most recent version, or None when the collection is empty."""
        return self._entries[-1] if self._entries else None


class MetadataLoader:
    """Reads one descriptor file per documentation version."""

    SUFFIXES = (".yml", ".yaml")

    def __init__(self, metadata_path: Path):
        """Initialize the loader.

        Args:
            metadata_path: Directory holding `<version>.yml` descriptors.
        """
        self._path = metadata_path

    async def load_all(self) -> MetadataCollection:
        """Load every descriptor in the metadata directory.

        Returns:
            Collection sorted by version.

        Raises:
            MetadataError: If a descriptor is not valid.
        """
        if not self._path.is_dir():
            logger.warning(f"Metadata directory not found: {self._path}")
            return MetadataCollection([])

        files = sorted(
            p for p in self._path.iterdir()
            if p.is_file() and p.suffix.lower() in self.SUFFIXES
        )

        entries = [await self.load_file(f) for f in files]
        logger.debug(f"Loaded metadata for {len(entries)} versions from {self._path}")
        return MetadataCollection(entries)

    async def load_file(self, path: Path) -> MetadataEntry:
        """Load a single descriptor; the version is the file stem."""
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            content = await f.read()

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise MetadataError(path, str(e)) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise MetadataError(path, "descriptor must be a mapping")

        try:
            metadata = VersionMetadata.model_validate(data)
        except ValidationError as e:
            raise MetadataError(path, str(e)) from e

        return MetadataEntry(version=path.stem, metadata=metadata)
