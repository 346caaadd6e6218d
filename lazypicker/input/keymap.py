"""Key bindings attached to one host surface."""

from __future__ import annotations

from collections.abc import Callable

KeyCallback = Callable[[], "bool | None"]


class SurfaceKeymap:
    """Key token to callback table owned by a single surface.

    Binding a token again replaces its callback. A cleared keymap lets every
    key fall through, which is how closed surfaces stop reacting to input.
    """

    def __init__(self) -> None:
        self._callbacks: dict[str, KeyCallback] = {}

    def bind(self, key: str, callback: KeyCallback) -> None:
        self._callbacks[key] = callback

    def clear(self) -> None:
        self._callbacks.clear()

    def dispatch(self, key: str) -> bool | None:
        """Run the callback bound to ``key``; ``None`` when nothing is bound."""
        callback = self._callbacks.get(key)
        if callback is None:
            return None
        return callback()
