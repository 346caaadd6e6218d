"""Surface host contract and the shared in-process surface table.

A host owns content buffers and the windows showing them, exposes cursor and
key-binding primitives, and reports the screen size. ``BaseHost`` implements
everything except drawing; concrete hosts add rendering and an input source.
"""

from __future__ import annotations

import abc
import itertools
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from ..errors import AllocationFailed, HostCallFailed
from ..input import KeyCallback, SurfaceKeymap
from ..layout import NO_GLYPHS, BorderGlyphs, Geometry, ScreenSize

logger = logging.getLogger(__name__)

SurfaceHandle = int
TextCallback = Callable[[str], bool]


class SurfaceHost(Protocol):
    """Capabilities a picker needs from its host."""

    def current_size(self) -> ScreenSize: ...

    def create_surface(self, editable: bool) -> SurfaceHandle: ...

    def set_lines(self, handle: SurfaceHandle, lines: Sequence[str]) -> None: ...

    def get_lines(self, handle: SurfaceHandle) -> list[str]: ...

    def set_modifiable(self, handle: SurfaceHandle, modifiable: bool) -> None: ...

    def place_window(
        self,
        handle: SurfaceHandle,
        geometry: Geometry,
        glyphs: BorderGlyphs,
        *,
        padding: int = 0,
    ) -> None: ...

    def set_cursorline(self, handle: SurfaceHandle, enabled: bool) -> None: ...

    def get_cursor(self, handle: SurfaceHandle) -> tuple[int, int]: ...

    def set_cursor(self, handle: SurfaceHandle, row: int, col: int = 0) -> None: ...

    def bind_key(self, handle: SurfaceHandle, key: str, callback: KeyCallback) -> None: ...

    def bind_text_input(self, handle: SurfaceHandle, callback: TextCallback) -> None: ...

    def unbind_keys(self, handle: SurfaceHandle) -> None: ...

    def focus(self, handle: SurfaceHandle) -> None: ...

    def set_editing(self, editing: bool) -> None: ...

    def highlight(self, handle: SurfaceHandle, row: int, start_col: int, end_col: int) -> None: ...

    def close(self, handle: SurfaceHandle) -> None: ...


@dataclass
class HostSurface:
    """Host-side record of one content buffer and its window."""

    handle: SurfaceHandle
    editable: bool
    lines: list[str] = field(default_factory=lambda: [""])
    modifiable: bool = True
    geometry: Geometry | None = None
    glyphs: BorderGlyphs = NO_GLYPHS
    padding: int = 0
    cursorline: bool = False
    cursor: tuple[int, int] = (1, 0)
    highlights: list[tuple[int, int, int]] = field(default_factory=list)
    keys: SurfaceKeymap = field(default_factory=SurfaceKeymap)
    text_input: TextCallback | None = None


class BaseHost(abc.ABC):
    """Surface table, focus tracking, and key dispatch shared by all hosts."""

    def __init__(self) -> None:
        self._surfaces: dict[SurfaceHandle, HostSurface] = {}
        self._handles = itertools.count(1)
        self._focus_history: list[SurfaceHandle] = []
        self.editing = False
        self.dirty = True

    # Surface table -------------------------------------------------------

    @abc.abstractmethod
    def current_size(self) -> ScreenSize:
        """Return the screen size pickers are centered in."""

    def _check_allocation(self, editable: bool) -> None:
        """Hook for hosts that can refuse to allocate a buffer."""

    def _surface(self, handle: SurfaceHandle) -> HostSurface:
        surface = self._surfaces.get(handle)
        if surface is None:
            raise HostCallFailed(f"surface {handle} does not exist")
        return surface

    def create_surface(self, editable: bool) -> SurfaceHandle:
        self._check_allocation(editable)
        handle = next(self._handles)
        self._surfaces[handle] = HostSurface(handle=handle, editable=editable)
        logger.debug("allocated surface %d (editable=%s)", handle, editable)
        return handle

    def is_open(self, handle: SurfaceHandle) -> bool:
        return handle in self._surfaces

    def open_handles(self) -> list[SurfaceHandle]:
        return list(self._surfaces)

    def surface(self, handle: SurfaceHandle) -> HostSurface:
        """Return the host record for ``handle`` (for rendering and inspection)."""
        return self._surface(handle)

    def close(self, handle: SurfaceHandle) -> None:
        surface = self._surfaces.pop(handle, None)
        if surface is None:
            return
        surface.keys.clear()
        surface.text_input = None
        self._focus_history = [h for h in self._focus_history if h != handle]
        self.dirty = True
        logger.debug("closed surface %d", handle)

    # Content -------------------------------------------------------------

    def set_lines(self, handle: SurfaceHandle, lines: Sequence[str]) -> None:
        surface = self._surface(handle)
        if not surface.modifiable:
            raise HostCallFailed(f"surface {handle} is not modifiable")
        surface.lines = [str(line) for line in lines] or [""]
        row, col = surface.cursor
        surface.cursor = (min(row, len(surface.lines)), col)
        self.dirty = True

    def get_lines(self, handle: SurfaceHandle) -> list[str]:
        return list(self._surface(handle).lines)

    def set_modifiable(self, handle: SurfaceHandle, modifiable: bool) -> None:
        self._surface(handle).modifiable = bool(modifiable)

    # Windows -------------------------------------------------------------

    def place_window(
        self,
        handle: SurfaceHandle,
        geometry: Geometry,
        glyphs: BorderGlyphs,
        *,
        padding: int = 0,
    ) -> None:
        surface = self._surfaces.get(handle)
        if surface is None:
            raise AllocationFailed(f"cannot open a window for missing surface {handle}")
        if geometry.width <= 0 or geometry.height <= 0:
            raise AllocationFailed(f"invalid window size {geometry.width}x{geometry.height}")
        surface.geometry = geometry
        surface.glyphs = glyphs
        surface.padding = max(0, padding)
        self.dirty = True

    def set_cursorline(self, handle: SurfaceHandle, enabled: bool) -> None:
        self._surface(handle).cursorline = bool(enabled)
        self.dirty = True

    def highlight(self, handle: SurfaceHandle, row: int, start_col: int, end_col: int) -> None:
        self._surface(handle).highlights.append((row, start_col, end_col))
        self.dirty = True

    # Cursor --------------------------------------------------------------

    def get_cursor(self, handle: SurfaceHandle) -> tuple[int, int]:
        return self._surface(handle).cursor

    def set_cursor(self, handle: SurfaceHandle, row: int, col: int = 0) -> None:
        surface = self._surface(handle)
        if not 1 <= row <= len(surface.lines):
            raise HostCallFailed(f"cursor row {row} outside surface {handle}")
        surface.cursor = (row, max(0, col))
        self.dirty = True

    # Focus and keys ------------------------------------------------------

    @property
    def focused(self) -> SurfaceHandle | None:
        return self._focus_history[-1] if self._focus_history else None

    def focus(self, handle: SurfaceHandle) -> None:
        self._surface(handle)
        self._focus_history = [h for h in self._focus_history if h != handle]
        self._focus_history.append(handle)
        self.dirty = True

    def set_editing(self, editing: bool) -> None:
        self.editing = bool(editing)
        self.dirty = True

    def bind_key(self, handle: SurfaceHandle, key: str, callback: KeyCallback) -> None:
        self._surface(handle).keys.bind(key, callback)

    def bind_text_input(self, handle: SurfaceHandle, callback: TextCallback) -> None:
        self._surface(handle).text_input = callback

    def unbind_keys(self, handle: SurfaceHandle) -> None:
        surface = self._surfaces.get(handle)
        if surface is None:
            return
        surface.keys.clear()
        surface.text_input = None

    def press(self, key: str) -> bool:
        """Deliver one key token to the focused surface.

        Bound keys win; anything else goes to the surface's text-input
        callback while editing. Returns whether some handler consumed the key.
        """
        handle = self.focused
        if handle is None:
            return False
        surface = self._surfaces[handle]
        result = surface.keys.dispatch(key)
        if result is not None:
            self.dirty = True
            return True
        if self.editing and surface.text_input is not None:
            handled = surface.text_input(key)
            if handled:
                self.dirty = True
            return handled
        return False

    def press_keys(self, keys: Sequence[str]) -> None:
        for key in keys:
            self.press(key)

    def type_text(self, text: str) -> None:
        for ch in text:
            self.press(ch)
