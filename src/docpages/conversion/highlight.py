"""Build-time syntax highlighting of converted source blocks.

Without a `source-highlighter` attribute Asciidoctor emits source listings
as plain `<pre class="highlight"><code class="language-X">` blocks. A
registered highlighter rewrites those blocks after conversion, so pages
ship highlighted markup and need no client-side script.
"""

import html
import logging
import re
from abc import ABC, abstractmethod
from typing import Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger("docpages.conversion.highlight")

SOURCE_BLOCK_PATTERN = re.compile(
    r'<pre class="highlight"><code class="language-(?P<lang>[\w.+#-]+)"'
    r'(?P<attrs>[^>]*)>(?P<code>.*?)</code></pre>',
    re.DOTALL,
)

# Inline markup inside a listing, such as callout markers. Elements with
# content are kept whole so their text is not lexed as code.
INLINE_MARKUP_PATTERN = re.compile(
    r"<(?P<tag>[a-zA-Z][\w-]*)\b[^>]*>[^<]*</(?P=tag)>|<[a-zA-Z/][^>]*>"
)

# Tags, character references and text runs of Pygments HTML output
HIGHLIGHTED_TOKEN_PATTERN = re.compile(r"(<[^>]*>)|(&[^;]*;)|([^<&]+)")


class Highlighter(ABC):
    """Base class for syntax highlighters."""

    name: str = ""

    @abstractmethod
    def highlight_code(self, code: str, language: str) -> Optional[str]:
        """Highlight plain source text.

        Returns:
            Highlighted HTML, or None if the language is not supported.
        """

    def stylesheet(self) -> Optional[str]:
        """CSS needed by the highlighted markup, if any."""
        return None

    def apply(self, document_html: str) -> str:
        """Rewrite every supported source block in `document_html`.

        Inline markup inside a listing, such as callout markers, is lifted
        out before highlighting and put back at the same text position.
        """

        def replace(match: re.Match) -> str:
            language = match.group("lang")
            code, markup = split_inline_markup(match.group("code"))
            highlighted = self.highlight_code(code, language)
            if highlighted is None:
                return match.group(0)

            return (
                f'<pre class="{self.name} highlight">'
                f'<code class="language-{language}"{match.group("attrs")}>'
                f"{splice_inline_markup(highlighted, markup)}</code></pre>"
            )

        return SOURCE_BLOCK_PATTERN.sub(replace, document_html)


def split_inline_markup(raw: str) -> tuple[str, list[tuple[int, str]]]:
    """Separate listing HTML into plain text and (text offset, tag) pairs."""
    text: list[str] = []
    markup: list[tuple[int, str]] = []
    length = 0
    position = 0
    for match in INLINE_MARKUP_PATTERN.finditer(raw):
        chunk = html.unescape(raw[position : match.start()])
        text.append(chunk)
        length += len(chunk)
        markup.append((length, match.group(0)))
        position = match.end()
    text.append(html.unescape(raw[position:]))
    return "".join(text), markup


def splice_inline_markup(highlighted: str, markup: list[tuple[int, str]]) -> str:
    """Insert tags into highlighted HTML at their offsets in the plain text."""
    if not markup:
        return highlighted

    out: list[str] = []
    offset = 0
    pending = 0
    for match in HIGHLIGHTED_TOKEN_PATTERN.finditer(highlighted):
        tag, entity, text = match.groups()
        if tag is not None:
            out.append(tag)
            continue

        piece = entity if entity is not None else text
        width = 1 if entity is not None else len(text)
        start = 0
        while pending < len(markup) and markup[pending][0] < offset + width:
            cut = 0 if entity is not None else max(markup[pending][0] - offset, start)
            out.append(piece[start:cut])
            out.append(markup[pending][1])
            start = cut
            pending += 1
        out.append(piece[start:])
        offset += width

    out.extend(tag for _, tag in markup[pending:])
    return "".join(out)


class PygmentsHighlighter(Highlighter):
    """Highlights source blocks with Pygments."""

    name = "pygments"
    CSS_CLASS = "pygments"

    def __init__(self, style: str = "default"):
        self._style = style
        self._formatter = HtmlFormatter(nowrap=True, classprefix="tok-")

    def highlight_code(self, code: str, language: str) -> Optional[str]:
        try:
            lexer = get_lexer_by_name(language, stripnl=False, ensurenl=False)
        except ClassNotFound:
            logger.debug(f"No Pygments lexer for language '{language}'")
            return None
        return highlight(code, lexer, self._formatter)

    def stylesheet(self) -> str:
        formatter = HtmlFormatter(style=self._style, classprefix="tok-")
        return formatter.get_style_defs(f".{self.CSS_CLASS}")


class HighlighterRegistry:
    """Named highlighters available to the converter."""

    def __init__(self):
        self._highlighters: dict[str, Highlighter] = {}

    @property
    def names(self) -> list[str]:
        return sorted(self._highlighters)

    def register(self, highlighter: Highlighter) -> None:
        """Register a highlighter under its name.

        Raises:
            ValueError: If a highlighter with that name is already registered.
        """
        if highlighter.name in self._highlighters:
            raise ValueError(f"Highlighter already registered: {highlighter.name}")
        self._highlighters[highlighter.name] = highlighter

    def unregister_all(self) -> None:
        self._highlighters.clear()

    def get(self, name: str) -> Optional[Highlighter]:
        return self._highlighters.get(name)


def create_highlighter(name: str, style: str = "default") -> Optional[Highlighter]:
    """Create a built-in highlighter by name.

    Args:
        name: "pygments", or "none" to disable highlighting.
        style: Pygments style used for the stylesheet.

    Raises:
        ValueError: If the name is unknown.
    """
    if name == "none":
        return None
    if name == PygmentsHighlighter.name:
        return PygmentsHighlighter(style=style)
    raise ValueError(f"Unknown highlighter: {name}")
