"""Selection protocol: the one-shot callback and backing-list merge."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

SelectHandler = Callable[[str], None]


@dataclass(frozen=True)
class SelectionResult:
    """Terminal outcome of a committed session."""

    text: str
    appended: bool = False


class OneShot:
    """Deliver a selection to ``handler`` at most once.

    The handler reference is dropped on first use so nothing captured by it
    outlives the session that fired it.
    """

    def __init__(self, handler: SelectHandler | None) -> None:
        self._handler = handler
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def fire(self, text: str) -> bool:
        """Invoke the handler with ``text``; returns ``False`` if already used."""
        if self._consumed:
            return False
        self._consumed = True
        handler, self._handler = self._handler, None
        if handler is not None:
            handler(text)
        return True

    def discard(self) -> None:
        """Consume without invoking, as a cancelled session does."""
        self._consumed = True
        self._handler = None


def merge_selection(items: list[str], text: str) -> bool:
    """Append ``text`` to ``items`` unless empty or already present.

    On append, blank placeholder entries are removed as well. Returns whether
    ``text`` was appended.
    """
    if not text or text in items:
        return False
    items.append(text)
    items[:] = [item for item in items if item]
    return True
