"""Page-visibility signal sources for pausing and resuming polling."""
from typing import Callable, Protocol

import structlog

logger = structlog.get_logger(__name__)

VisibilityCallback = Callable[[bool], None]


class VisibilitySource(Protocol):
    """
    Host facility that reports when the dashboard page is hidden or shown.

    Callbacks receive ``True`` when the page becomes hidden and ``False``
    when it becomes visible again.
    """

    def subscribe(self, callback: VisibilityCallback) -> None: ...

    def unsubscribe(self, callback: VisibilityCallback) -> None: ...


class ManualVisibilitySource:
    """In-process visibility source driven by explicit ``set_hidden`` calls."""

    def __init__(self, hidden: bool = False):
        self._hidden = hidden
        self._subscribers: list[VisibilityCallback] = []

    @property
    def hidden(self) -> bool:
        return self._hidden

    def subscribe(self, callback: VisibilityCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: VisibilityCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def set_hidden(self, hidden: bool) -> bool:
        """
        Update visibility and notify subscribers.

        Returns:
            True if the state changed and subscribers were notified
        """
        if hidden == self._hidden:
            return False

        self._hidden = hidden
        logger.info("visibility_changed", hidden=hidden, subscribers=len(self._subscribers))

        # copy: a callback may unsubscribe itself
        for callback in list(self._subscribers):
            callback(hidden)
        return True
