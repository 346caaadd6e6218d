"""Headless host keeping surfaces in memory.

Used by tests and by callers that drive pickers programmatically. Key
delivery goes through ``press``; nothing is drawn. Optional fault injection
simulates hosts that run out of buffers or reject cursor calls.
"""

from __future__ import annotations

from ..errors import AllocationFailed, HostCallFailed
from ..layout import BorderGlyphs, Geometry, ScreenSize
from .base import BaseHost, SurfaceHandle


class MemoryHost(BaseHost):
    """In-process ``SurfaceHost`` with a fixed screen size."""

    def __init__(
        self,
        width: int = 80,
        height: int = 24,
        *,
        fail_create_after: int | None = None,
        fail_place_after: int | None = None,
        fail_cursor: bool = False,
    ) -> None:
        super().__init__()
        self.screen = ScreenSize(width=width, height=height)
        self.fail_create_after = fail_create_after
        self.fail_place_after = fail_place_after
        self.fail_cursor = fail_cursor
        self.created_count = 0
        self.placed_count = 0
        self.closed_handles: list[SurfaceHandle] = []

    def current_size(self) -> ScreenSize:
        return self.screen

    def resize(self, width: int, height: int) -> None:
        self.screen = ScreenSize(width=width, height=height)

    def _check_allocation(self, editable: bool) -> None:
        if self.fail_create_after is not None and self.created_count >= self.fail_create_after:
            raise AllocationFailed("buffer allocation refused")
        self.created_count += 1

    def place_window(
        self,
        handle: SurfaceHandle,
        geometry: Geometry,
        glyphs: BorderGlyphs,
        *,
        padding: int = 0,
    ) -> None:
        if self.fail_place_after is not None and self.placed_count >= self.fail_place_after:
            raise AllocationFailed("window allocation refused")
        super().place_window(handle, geometry, glyphs, padding=padding)
        self.placed_count += 1

    def close(self, handle: SurfaceHandle) -> None:
        if self.is_open(handle):
            self.closed_handles.append(handle)
        super().close(handle)

    def get_cursor(self, handle: SurfaceHandle) -> tuple[int, int]:
        if self.fail_cursor:
            raise HostCallFailed("cursor read refused")
        return super().get_cursor(handle)

    def set_cursor(self, handle: SurfaceHandle, row: int, col: int = 0) -> None:
        if self.fail_cursor:
            raise HostCallFailed("cursor write refused")
        super().set_cursor(handle, row, col)

    def geometry(self, handle: SurfaceHandle) -> Geometry | None:
        return self.surface(handle).geometry
