"""Version metadata models.

Each documentation version ships a descriptor listing the categories shown
on its index page and the entries within each category.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MetadataItem(BaseModel):
    """A single documentation entry within a category."""

    id: str
    name: str
    href: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(extra="allow", frozen=True)

    @property
    def link(self) -> str:
        """Relative link to the entry, defaulting to its id."""
        return self.href or f"{self.id}/"


class Category(BaseModel):
    """A group of entries on a version index page."""

    id: str
    name: str
    entries: list[MetadataItem] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow", frozen=True)


class VersionMetadata(BaseModel):
    """Descriptor contents for one documentation version."""

    categories: list[Category] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow", frozen=True)

    @property
    def entry_count(self) -> int:
        """Total number of entries across all categories."""
        return sum(len(c.entries) for c in self.categories)


class MetadataEntry(BaseModel):
    """A version identifier paired with its descriptor."""

    version: str
    metadata: VersionMetadata

    model_config = ConfigDict(frozen=True)
