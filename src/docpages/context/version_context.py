"""Shared "current version" context for navigation components."""

import logging
from typing import Callable, Optional

logger = logging.getLogger("docpages.context.version_context")

VersionListener = Callable[[Optional[str]], None]


class VersionContext:
    """Holds the documentation version of the page being rendered.

    Renderers publish the resolved version on entry to a view; navigation
    components subscribe to be told about each change.
    """

    def __init__(self, initial: Optional[str] = None):
        self._current = initial
        self._listeners: list[VersionListener] = []

    @property
    def current(self) -> Optional[str]:
        return self._current

    def subscribe(self, listener: VersionListener) -> Callable[[], None]:
        """Register a listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, version: Optional[str]) -> None:
        """Set the current version and notify every listener."""
        self._current = version
        logger.debug(f"Current version: {version}")
        for listener in list(self._listeners):
            listener(version)
