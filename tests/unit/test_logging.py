"""Tests for logging setup."""

import io
import logging
from pathlib import Path

import pytest
from rich.console import Console

from docpages.utils.logging import PER_PAGE_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def restore_loggers():
    names = ("docpages", *PER_PAGE_LOGGERS)
    saved = {name: logging.getLogger(name).level for name in names}
    handlers = list(logging.getLogger("docpages").handlers)
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)
    root = logging.getLogger("docpages")
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers


def make_console() -> Console:
    return Console(file=io.StringIO(), width=200)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_levels(self):
        assert setup_logging(verbosity=0, console=make_console()).level == logging.WARNING
        assert setup_logging(verbosity=1, console=make_console()).level == logging.INFO
        assert setup_logging(verbosity=2, console=make_console()).level == logging.DEBUG

    def test_handlers_replaced(self):
        setup_logging(console=make_console())
        logger = setup_logging(console=make_console())

        assert len(logger.handlers) == 1

    def test_per_page_records_hidden_below_verbosity_3(self):
        """Cache and highlighter debug records only show at the highest verbosity."""
        console = make_console()
        setup_logging(verbosity=2, console=console)

        logging.getLogger("docpages.orchestration.cache").debug("Cache hit: 4.x/guide")
        logging.getLogger("docpages.orchestration.builder").debug("Rendering 6 pages")

        output = console.file.getvalue()
        assert "Cache hit" not in output
        assert "Rendering 6 pages" in output

    def test_per_page_records_shown_at_verbosity_3(self):
        console = make_console()
        setup_logging(verbosity=3, console=console)

        logging.getLogger("docpages.orchestration.cache").debug("Cache hit: 4.x/guide")

        assert "Cache hit" in console.file.getvalue()

    def test_log_file_receives_debug(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "build.log"
        console = make_console()
        setup_logging(verbosity=0, log_file=log_file, console=console)

        logging.getLogger("docpages.orchestration.cache").debug("Cache hit: 4.x/guide")
        for handler in logging.getLogger("docpages").handlers:
            handler.flush()

        assert "DEBUG - Cache hit: 4.x/guide" in log_file.read_text(encoding="utf-8")
        assert console.file.getvalue() == ""
