"""Build progress display with Rich console output."""

import logging
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

logger = logging.getLogger("docpages.orchestration.progress")


class ProgressTracker:
    """Tracks and displays page rendering progress using Rich."""

    def __init__(
        self,
        console: Optional[Console] = None,
        show_progress: bool = True,
    ):
        """Initialize the progress tracker.

        Args:
            console: Rich console for output (created if not provided).
            show_progress: Whether to show progress bar.
        """
        self._console = console or Console()
        self._show_progress = show_progress
        self._progress: Optional[Progress] = None
        self._task_id: Optional[TaskID] = None
        self._total = 0
        self._completed = 0

    @property
    def completed(self) -> int:
        return self._completed

    def set_total(self, total: int) -> None:
        """Set the total number of pages to render."""
        self._total = total
        self._completed = 0

        if self._show_progress:
            self._create_progress_bar()

    def _create_progress_bar(self) -> None:
        if self._progress is not None:
            return

        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TextColumn("•"),
            TimeElapsedColumn(),
            console=self._console,
            transient=False,
        )
        self._progress.start()
        self._task_id = self._progress.add_task(
            "Rendering pages",
            total=self._total,
        )

    def advance(self, current_item: str = "") -> None:
        """Mark one more page as rendered.

        Args:
            current_item: Slug of the page just rendered.
        """
        self._completed += 1
        if self._progress and self._task_id is not None:
            display_item = current_item
            if len(display_item) > 50:
                display_item = "..." + display_item[-47:]

            description = f"Rendered: {display_item}" if current_item else "Rendering pages"
            self._progress.update(
                self._task_id,
                completed=self._completed,
                description=description,
            )

    def finish(self) -> None:
        """Stop the progress bar."""
        if self._progress:
            self._progress.stop()
            self._progress = None
