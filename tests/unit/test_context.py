"""Tests for the context layer components."""

from pathlib import Path

import pytest

from docpages.context.metadata_loader import MetadataCollection, MetadataLoader
from docpages.context.resolver import PathResolver, normalize_slug, parse_slug
from docpages.context.version_context import VersionContext
from docpages.context.walker import read_dir_recursive
from docpages.errors import MetadataError


class TestReadDirRecursive:
    """Tests for read_dir_recursive."""

    @pytest.mark.asyncio
    async def test_finds_index_files_at_any_depth(self, docs_root: Path):
        """Only files named index.adoc are returned, at every level."""
        files = await read_dir_recursive(docs_root)

        relative = {f.relative_to(docs_root).as_posix() for f in files}
        assert relative == {
            "index.adoc",
            "4.x/index.adoc",
            "4.x/vertx-core/java/index.adoc",
            "4.x/vertx-web/java/index.adoc",
            "4.x/guide/index.adoc",
            "3.9.0/vertx-core/java/index.adoc",
        }

    @pytest.mark.asyncio
    async def test_returns_absolute_paths(self, docs_root: Path, monkeypatch):
        """Relative roots still produce absolute paths."""
        monkeypatch.chdir(docs_root.parent.parent)
        files = await read_dir_recursive(Path("docs/extracted"))

        assert files
        assert all(f.is_absolute() for f in files)
        assert docs_root / "4.x" / "guide" / "index.adoc" in files

    @pytest.mark.asyncio
    async def test_single_nested_file(self, tmp_path: Path):
        """A lone deeply nested source is found."""
        source = tmp_path / "docs" / "extracted" / "4.x" / "guide" / "index.adoc"
        source.parent.mkdir(parents=True)
        source.write_text("= Guide\n", encoding="utf-8")

        files = await read_dir_recursive(tmp_path / "docs" / "extracted")
        assert files == [source]

    @pytest.mark.asyncio
    async def test_exact_file_name_only(self, tmp_path: Path):
        """Near-miss names are not matched."""
        for name in ["index.adoc.bak", "my-index.adoc", "INDEX.ADOC", "index.asciidoc"]:
            (tmp_path / name).write_text("", encoding="utf-8")

        assert await read_dir_recursive(tmp_path) == []

    @pytest.mark.asyncio
    async def test_missing_root_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            await read_dir_recursive(tmp_path / "missing")


class TestPathResolver:
    """Tests for PathResolver."""

    @pytest.fixture
    def resolver(self) -> PathResolver:
        return PathResolver(Path("docs/extracted"), ["3.9.0", "4.x"])

    def test_version_index(self, resolver: PathResolver):
        resolved = resolver.resolve(["4.x"])

        assert resolved.is_version_index is True
        assert resolved.version == "4.x"
        assert resolved.source_path is None

    def test_content_path_keeps_version_segment(self, resolver: PathResolver):
        resolved = resolver.resolve(["4.x", "guide"])

        assert resolved.is_version_index is False
        assert resolved.version == "4.x"
        assert resolved.source_path == Path("docs/extracted/4.x/guide/index.adoc")

    def test_unknown_version_falls_through_to_file(self, resolver: PathResolver):
        """Unknown first segments resolve to a file path, even for one segment."""
        resolved = resolver.resolve(["5.x"])

        assert resolved.version is None
        assert resolved.source_path == Path("docs/extracted/5.x/index.adoc")

    def test_unversioned_nested_slug(self, resolver: PathResolver):
        resolved = resolver.resolve(["guides", "howto"])

        assert resolved.version is None
        assert resolved.source_path == Path("docs/extracted/guides/howto/index.adoc")

    def test_empty_slug_resolves_root_index(self, resolver: PathResolver):
        resolved = resolver.resolve([])

        assert resolved.version is None
        assert resolved.source_path == Path("docs/extracted/index.adoc")

    def test_detect_version(self, resolver: PathResolver):
        assert resolver.detect_version(("3.9.0", "vertx-core")) == "3.9.0"
        assert resolver.detect_version(("vertx-core",)) is None
        assert resolver.detect_version(()) is None

    def test_slug_for(self, docs_root: Path):
        resolver = PathResolver(docs_root, ["4.x"])

        assert resolver.slug_for(docs_root / "4.x" / "guide" / "index.adoc") == ("4.x", "guide")
        assert resolver.slug_for(docs_root / "4.x" / "index.adoc") == ("4.x",)
        assert resolver.slug_for(docs_root / "index.adoc") == ()

    def test_slug_for_relative_root(self, docs_root: Path, monkeypatch):
        monkeypatch.chdir(docs_root.parent.parent)
        resolver = PathResolver(Path("docs/extracted"), ["4.x"])

        slug = resolver.slug_for(docs_root / "4.x" / "vertx-core" / "java" / "index.adoc")
        assert slug == ("4.x", "vertx-core", "java")

    def test_normalize_slug(self):
        assert normalize_slug(["4.x", ""]) == ("4.x",)
        assert normalize_slug(["", "4.x", "", "guide"]) == ("4.x", "guide")
        assert parse_slug("/4.x/guide/") == ("4.x", "guide")
        assert parse_slug("") == ()


class TestMetadataLoader:
    """Tests for MetadataLoader."""

    @pytest.mark.asyncio
    async def test_load_all_sorted_by_version(self, metadata_dir: Path):
        collection = await MetadataLoader(metadata_dir).load_all()

        assert collection.versions == ["3.9.0", "4.x"]
        assert len(collection) == 2
        assert collection.latest().version == "4.x"

    @pytest.mark.asyncio
    async def test_descriptor_contents(self, metadata_dir: Path):
        collection = await MetadataLoader(metadata_dir).load_all()
        entry = collection.find("4.x")

        assert [c.name for c in entry.metadata.categories] == ["Core", "Data access"]
        core = entry.metadata.categories[0]
        assert core.entries[0].description == "The core of Vert.x"
        assert core.entries[1].link == "vertx-web/"
        assert entry.metadata.categories[1].entries[0].link == "vertx-pg-client/java/"
        assert entry.metadata.entry_count == 3

    @pytest.mark.asyncio
    async def test_missing_directory_is_empty(self, tmp_path: Path):
        collection = await MetadataLoader(tmp_path / "missing").load_all()

        assert len(collection) == 0
        assert collection.latest() is None
        assert collection.has_version("4.x") is False

    @pytest.mark.asyncio
    async def test_empty_descriptor(self, tmp_path: Path):
        (tmp_path / "5.x.yaml").write_text("", encoding="utf-8")

        collection = await MetadataLoader(tmp_path).load_all()
        assert collection.find("5.x").metadata.categories == []

    @pytest.mark.asyncio
    async def test_malformed_descriptor_raises(self, tmp_path: Path):
        bad = tmp_path / "4.x.yml"
        bad.write_text("- just\n- a list\n", encoding="utf-8")

        with pytest.raises(MetadataError) as exc_info:
            await MetadataLoader(tmp_path).load_all()
        assert exc_info.value.path == bad

    @pytest.mark.asyncio
    async def test_invalid_yaml_raises(self, tmp_path: Path):
        (tmp_path / "4.x.yml").write_text("categories: [unclosed\n", encoding="utf-8")

        with pytest.raises(MetadataError):
            await MetadataLoader(tmp_path).load_all()

    def test_collection_sorts_entries(self):
        from docpages.models.metadata import MetadataEntry, VersionMetadata

        collection = MetadataCollection(
            [
                MetadataEntry(version="4.x", metadata=VersionMetadata()),
                MetadataEntry(version="3.9.0", metadata=VersionMetadata()),
            ]
        )
        assert [e.version for e in collection] == ["3.9.0", "4.x"]


class TestVersionContext:
    """Tests for VersionContext."""

    def test_publish_notifies_listeners(self):
        context = VersionContext()
        seen = []
        context.subscribe(seen.append)

        context.publish("4.x")
        context.publish(None)

        assert seen == ["4.x", None]
        assert context.current is None

    def test_unsubscribe(self):
        context = VersionContext(initial="3.9.0")
        seen = []
        unsubscribe = context.subscribe(seen.append)

        unsubscribe()
        context.publish("4.x")

        assert seen == []
        assert context.current == "4.x"
