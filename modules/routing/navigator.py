"""
Path-based navigation state.

Holds the current path and history. ``replace`` swaps the current entry
without adding a back-button step and then notifies subscribers, which
is how a redirect made outside the router forces a re-render.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)

NavigationListener = Callable[[str], None]


class Navigator:
    """Current path, history and navigation subscribers."""

    def __init__(self, initial_path: str = "/") -> None:
        self._history: list[str] = [initial_path]
        self._listeners: list[NavigationListener] = []

    @property
    def current_path(self) -> str:
        return self._history[-1]

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    def push(self, path: str) -> None:
        """Navigate to ``path`` adding a history entry."""
        self._history.append(path)
        self._notify(path)

    def replace(self, path: str) -> None:
        """Navigate to ``path`` replacing the current history entry."""
        self._history[-1] = path
        self._notify(path)

    def subscribe(self, listener: NavigationListener) -> Callable[[], None]:
        """
        Register a listener called with the new path after every navigation.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, path: str) -> None:
        logger.debug("Navigated to %s", path)
        for listener in list(self._listeners):
            listener(path)
