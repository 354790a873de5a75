"""Orchestration layer for page generation and static builds."""

from docpages.orchestration.builder import BuildResult, SiteBuilder
from docpages.orchestration.cache import PageCache
from docpages.orchestration.pages import PageGenerator
from docpages.orchestration.progress import ProgressTracker

__all__ = [
    "BuildResult",
    "PageCache",
    "PageGenerator",
    "ProgressTracker",
    "SiteBuilder",
]
