"""AsciiDoc conversion, syntax highlighting and table of contents extraction."""

from docpages.conversion.converter import AsciidoctorConverter, Document, create_converter
from docpages.conversion.fragments import (
    FragmentNode,
    parse_fragment,
    render_document,
    split_toc,
)
from docpages.conversion.highlight import (
    Highlighter,
    HighlighterRegistry,
    PygmentsHighlighter,
    create_highlighter,
)

__all__ = [
    "AsciidoctorConverter",
    "Document",
    "FragmentNode",
    "Highlighter",
    "HighlighterRegistry",
    "PygmentsHighlighter",
    "create_converter",
    "create_highlighter",
    "parse_fragment",
    "render_document",
    "split_toc",
]
