"""Split converted HTML into body and table of contents.

Asciidoctor renders the table of contents as a top-level
`<div id="toc">` container. Pages show it in a sidebar, so it is cut out
of the body by slicing the original markup at the element's source
offsets. Nothing is re-serialized; the surrounding markup is preserved
byte for byte.

Of the HTML5 implied end tags only the paragraph rule is applied: a block
element start tag closes an open `<p>`. Other implied ends, such as a `<li>`
closing the previous `<li>`, are not modelled; Asciidoctor closes those
elements explicitly.
"""

from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Optional, Protocol

from docpages.config.defaults import TOC_MARKER
from docpages.models.page import RenderResult

VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    }
)

# Start tags that close an open <p>
CLOSES_PARAGRAPH = frozenset(
    {
        "address", "article", "aside", "blockquote", "details", "dialog",
        "div", "dl", "fieldset", "figcaption", "figure", "footer", "form",
        "h1", "h2", "h3", "h4", "h5", "h6", "header", "hgroup", "hr",
        "main", "menu", "nav", "ol", "p", "pre", "section", "summary",
        "table", "ul",
    }
)

# Elements that keep an outer <p> out of reach
PARAGRAPH_SCOPE = frozenset(
    {
        "applet", "button", "caption", "html", "marquee", "object",
        "table", "td", "template", "th",
    }
)


@dataclass
class FragmentNode:
    """An element with its location in the source string."""

    tag: str
    attrs: dict[str, Optional[str]]
    start: int
    inner_start: int
    inner_end: Optional[int] = None
    end: Optional[int] = None
    children: list["FragmentNode"] = field(default_factory=list)

    def get(self, name: str) -> Optional[str]:
        return self.attrs.get(name)

    def outer_html(self, source: str) -> str:
        return source[self.start:self.end]

    def inner_html(self, source: str) -> str:
        return source[self.inner_start:self.inner_end]


class _OffsetParser(HTMLParser):
    """HTMLParser that records start and end offsets of every element."""

    def __init__(self, source: str):
        super().__init__(convert_charrefs=True)
        self._source = source
        self._line_starts = [0]
        for i, ch in enumerate(source):
            if ch == "\n":
                self._line_starts.append(i + 1)
        self.roots: list[FragmentNode] = []
        self._stack: list[FragmentNode] = []

    def _offset(self) -> int:
        lineno, col = self.getpos()
        return self._line_starts[lineno - 1] + col

    def _attach(self, node: FragmentNode) -> None:
        if self._stack:
            self._stack[-1].children.append(node)
        else:
            self.roots.append(node)

    def handle_starttag(self, tag, attrs):
        start = self._offset()
        if tag in CLOSES_PARAGRAPH:
            self._close_paragraph(start)
        inner_start = start + len(self.get_starttag_text() or "")
        node = FragmentNode(tag=tag, attrs=dict(attrs), start=start, inner_start=inner_start)
        self._attach(node)
        if tag in VOID_ELEMENTS:
            node.inner_end = node.end = inner_start
        else:
            self._stack.append(node)

    def handle_startendtag(self, tag, attrs):
        start = self._offset()
        if tag in CLOSES_PARAGRAPH:
            self._close_paragraph(start)
        end = start + len(self.get_starttag_text() or "")
        node = FragmentNode(
            tag=tag, attrs=dict(attrs), start=start,
            inner_start=end, inner_end=end, end=end,
        )
        self._attach(node)

    def _close_paragraph(self, offset: int) -> None:
        for depth in range(len(self._stack) - 1, -1, -1):
            tag = self._stack[depth].tag
            if tag == "p":
                for node in self._stack[depth:]:
                    node.inner_end = node.end = offset
                del self._stack[depth:]
                return
            if tag in PARAGRAPH_SCOPE:
                return

    def handle_endtag(self, tag):
        # Stray end tags are ignored
        if not any(n.tag == tag for n in self._stack):
            return

        inner_end = self._offset()
        close = self._source.find(">", inner_end)
        end = len(self._source) if close < 0 else close + 1

        # Elements left open inside this one end where it ends
        while self._stack:
            node = self._stack.pop()
            if node.tag == tag:
                node.inner_end = inner_end
                node.end = end
                break
            node.inner_end = node.end = inner_end

    def close(self):
        super().close()
        length = len(self._source)
        while self._stack:
            node = self._stack.pop()
            node.inner_end = node.end = length


def parse_fragment(html: str) -> list[FragmentNode]:
    """Parse an HTML fragment into top-level nodes with source offsets."""
    parser = _OffsetParser(html)
    parser.feed(html)
    parser.close()
    return parser.roots


def find_toc(nodes: list[FragmentNode], marker: str = TOC_MARKER) -> Optional[FragmentNode]:
    """First top-level `div` whose id equals `marker`."""
    for node in nodes:
        if node.tag == "div" and node.get("id") == marker:
            return node
    return None


def split_toc(html: str, marker: str = TOC_MARKER) -> tuple[str, str]:
    """Excise the table of contents container from `html`.

    Args:
        html: Converted document body.
        marker: id of the container to cut out.

    Returns:
        Tuple of (contents, toc). When no container is present, toc is ""
        and contents is `html` unchanged.
    """
    node = find_toc(parse_fragment(html), marker)
    if node is None:
        return html, ""

    toc = html[node.start:node.end]
    contents = html[:node.start] + html[node.end:]
    return contents, toc


class ConvertedDocument(Protocol):
    """What `render_document` needs from a converter's document."""

    @property
    def title(self) -> str: ...

    def convert(self) -> str: ...


def render_document(document: ConvertedDocument, marker: str = TOC_MARKER) -> RenderResult:
    """Convert a document and split off its table of contents."""
    contents, toc = split_toc(document.convert(), marker)
    return RenderResult(title=document.title, body=contents, toc=toc)
