"""Page rendering."""

from docpages.output.renderer import PageRenderer, PageView, select_view

__all__ = [
    "PageRenderer",
    "PageView",
    "select_view",
]
