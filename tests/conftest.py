"""Pytest configuration and fixtures."""

import os
import stat
import textwrap
from pathlib import Path

import pytest

from docpages.config.models import DocPagesConfig

SAMPLE_HTML = textwrap.dedent(
    """\
    <h1>Vert.x Core Manual</h1>
    <div id="toc" class="toc">
    <div id="toctitle">Table of Contents</div>
    <ul class="sectlevel1">
    <li><a href="#_in_the_beginning">In the beginning</a></li>
    </ul>
    </div>
    <div class="sect1">
    <h2 id="_in_the_beginning">In the beginning</h2>
    <div class="sectionbody">
    <div class="paragraph">
    <p>There was Vert.x.<br>
    And it was good.</p>
    </div>
    </div>
    </div>
    """
)

METADATA_3 = """\
categories:
  - id: core
    name: Core
    entries:
      - id: vertx-core
        name: Vert.x Core
"""

METADATA_4 = """\
categories:
  - id: core
    name: Core
    entries:
      - id: vertx-core
        name: Vert.x Core
        description: The core of Vert.x
      - id: vertx-web
        name: Vert.x Web
  - id: data
    name: Data access
    entries:
      - id: vertx-pg-client
        name: Reactive PostgreSQL client
        href: vertx-pg-client/java/
"""


class FakeDocument:
    """Converted document returning canned HTML."""

    def __init__(self, title: str, html: str):
        self.title = title
        self._html = html

    def convert(self) -> str:
        return self._html


class FakeConverter:
    """Records every conversion and serves SAMPLE_HTML for existing files."""

    highlighter = None

    def __init__(self, html: str = SAMPLE_HTML, title: str = "Vert.x Core Manual"):
        self.html = html
        self.title = title
        self.calls: list[Path] = []

    async def load_file(self, path: Path) -> FakeDocument:
        self.calls.append(path)
        if not path.is_file():
            raise FileNotFoundError(f"AsciiDoc source not found: {path}")
        return FakeDocument(self.title, self.html)


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """Extracted documentation tree for versions 3.9.0 and 4.x."""
    root = tmp_path / "docs" / "extracted"
    files = [
        "index.adoc",
        "4.x/index.adoc",
        "4.x/vertx-core/java/index.adoc",
        "4.x/vertx-web/java/index.adoc",
        "4.x/vertx-web/java/images/diagram.png",
        "4.x/guide/index.adoc",
        "4.x/guide/README.md",
        "3.9.0/vertx-core/java/index.adoc",
    ]
    for name in files:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"= {path.parent.name}\n\nContent.\n", encoding="utf-8")
    return root


@pytest.fixture
def metadata_dir(tmp_path: Path) -> Path:
    """One descriptor per documentation version."""
    path = tmp_path / "docs" / "metadata"
    path.mkdir(parents=True)
    (path / "4.x.yml").write_text(METADATA_4, encoding="utf-8")
    (path / "3.9.0.yml").write_text(METADATA_3, encoding="utf-8")
    (path / "README.txt").write_text("not a descriptor", encoding="utf-8")
    return path


@pytest.fixture
def config(tmp_path: Path, docs_root: Path, metadata_dir: Path) -> DocPagesConfig:
    return DocPagesConfig.model_validate(
        {
            "docs": {"extracted_path": docs_root, "metadata_path": metadata_dir},
            "output": {"output_path": tmp_path / "out"},
        }
    )


@pytest.fixture
def fake_converter() -> FakeConverter:
    return FakeConverter()


@pytest.fixture
def fake_asciidoctor(tmp_path: Path):
    """Write an executable standing in for the asciidoctor CLI.

    The script prints the canned body to stdout and records its arguments
    next to itself.
    """
    if os.name == "nt":
        pytest.skip("shell script executables require a POSIX system")

    def make(body: str = SAMPLE_HTML, exit_code: int = 0, stderr: str = "") -> Path:
        script = tmp_path / "bin" / "asciidoctor"
        script.parent.mkdir(exist_ok=True)
        (tmp_path / "bin" / "body.html").write_text(body, encoding="utf-8")
        script.write_text(
            textwrap.dedent(
                f"""\
                #!/bin/sh
                dir=$(dirname "$0")
                printf '%s\\n' "$@" > "$dir/args.txt"
                cat "$dir/body.html"
                printf '%s' '{stderr}' >&2
                exit {exit_code}
                """
            ),
            encoding="utf-8",
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return make
