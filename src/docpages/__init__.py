"""docpages.

Build-time page generation for a versioned AsciiDoc documentation site.
Discovers extracted AsciiDoc sources, converts them to HTML, extracts the
table of contents, and renders static pages for every documentation version.
"""

__version__ = "0.1.0"

from docpages.models.page import ContentProps, IndexProps, RenderResult, StaticPath

__all__ = [
    "__version__",
    "ContentProps",
    "IndexProps",
    "RenderResult",
    "StaticPath",
]
