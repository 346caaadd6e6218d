"""Surface: one content buffer paired with the window that shows it.

A surface is created by a picker session, mutated only from that session's
event handlers, and destroyed exactly once when the session closes. Only
allocation failures escape; every other host failure is logged and dropped.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence

from .errors import HostCallFailed
from .host.base import SurfaceHandle, SurfaceHost
from .layout import BorderGlyphs, Geometry

logger = logging.getLogger(__name__)


class SurfaceRole(enum.Enum):
    TITLE = "title"
    INPUT = "input"
    LIST = "list"


class Surface:
    """Owned handle to a host surface with a fixed role."""

    def __init__(self, host: SurfaceHost, handle: SurfaceHandle, role: SurfaceRole) -> None:
        self.host = host
        self.handle = handle
        self.role = role
        self.geometry: Geometry | None = None
        self._closed = False

    @classmethod
    def create(cls, host: SurfaceHost, role: SurfaceRole, lines: Sequence[str] = ()) -> Surface:
        """Allocate a surface and fill it with ``lines``.

        Title and list content is made read-only after population. Raises
        ``AllocationFailed`` when the host has no buffer to give.
        """
        handle = host.create_surface(editable=role is SurfaceRole.INPUT)
        surface = cls(host, handle, role)
        surface._write(lines)
        if not surface.editable:
            surface._call("set_modifiable", handle, False)
        return surface

    @property
    def editable(self) -> bool:
        return self.role is SurfaceRole.INPUT

    @property
    def closed(self) -> bool:
        return self._closed

    def _call(self, name: str, *args, default=None):
        try:
            return getattr(self.host, name)(*args)
        except HostCallFailed as exc:
            logger.debug("%s surface %d: %s failed: %s", self.role.value, self.handle, name, exc)
            return default

    def _write(self, lines: Sequence[str]) -> None:
        self._call("set_lines", self.handle, list(lines))

    def set_content(self, lines: Sequence[str]) -> None:
        """Replace all content, lifting read-only protection for the write."""
        if self._closed:
            return
        if self.editable:
            self._write(lines)
            return
        self._call("set_modifiable", self.handle, True)
        self._write(lines)
        self._call("set_modifiable", self.handle, False)

    def lines(self) -> list[str]:
        if self._closed:
            return []
        return self._call("get_lines", self.handle, default=[])

    def first_line(self) -> str:
        lines = self.lines()
        return lines[0] if lines else ""

    def render(self, geometry: Geometry, glyphs: BorderGlyphs, *, padding: int = 0) -> None:
        """Open (or move) the window; ``AllocationFailed`` propagates."""
        self.host.place_window(self.handle, geometry, glyphs, padding=padding)
        self.geometry = geometry

    def destroy(self) -> None:
        """Close the window and release its buffer; repeated calls do nothing."""
        if self._closed:
            return
        self._closed = True
        self._call("unbind_keys", self.handle)
        self._call("close", self.handle)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"Surface({self.role.value}, handle={self.handle}, {state})"
