"""Host that draws surfaces as floating boxes on a raw terminal.

Every redraw clears the alternate screen and paints open surfaces in the
order they were created, so later surfaces overlap earlier ones. Input is
read one key token at a time and delivered through ``BaseHost.press``.
"""

from __future__ import annotations

import logging
import shutil
import sys
from collections.abc import Callable

from ..ansi import HIGHLIGHT, RESET, REVERSE, display_width, pad_text, split_at_cols
from ..input import read_key
from ..layout import ScreenSize
from .base import BaseHost, HostSurface

logger = logging.getLogger(__name__)

KEY_POLL_TIMEOUT_MS = 200


class TerminalHost(BaseHost):
    """``SurfaceHost`` rendering to the controlling terminal with ANSI escapes."""

    def __init__(
        self,
        stdin_fd: int | None = None,
        stdout_fd: int | None = None,
        *,
        terminal=None,
        key_reader: Callable[[int, int | None], str] = read_key,
        get_terminal_size: Callable[[tuple[int, int]], object] = shutil.get_terminal_size,
    ) -> None:
        super().__init__()
        self.stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self.stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
        self._terminal = terminal
        self._read_key = key_reader
        self._get_terminal_size = get_terminal_size

    @property
    def terminal(self):
        if self._terminal is None:
            from ..terminal import TerminalController

            self._terminal = TerminalController(self.stdin_fd, self.stdout_fd)
        return self._terminal

    def current_size(self) -> ScreenSize:
        term = self._get_terminal_size((80, 24))
        return ScreenSize(width=term.columns, height=term.lines)

    # Rendering -----------------------------------------------------------

    @staticmethod
    def _move(row: int, col: int) -> str:
        return f"\x1b[{row + 1};{col + 1}H"

    def _border_row(
        self,
        left: str | None,
        fill: str,
        right: str | None,
        surface: HostSurface,
    ) -> str:
        glyphs = surface.glyphs
        parts = []
        if glyphs.has_left:
            parts.append(left or fill)
        parts.append(fill * surface.geometry.width)
        if glyphs.has_right:
            parts.append(right or fill)
        return "".join(parts)

    def _content_row(self, surface: HostSurface, line_idx: int) -> str:
        width = surface.geometry.width
        text = surface.lines[line_idx] if line_idx < len(surface.lines) else ""
        cell = pad_text(" " * surface.padding + text, width)
        spans = [(start, end) for row, start, end in surface.highlights if row == line_idx]
        selected = surface.cursorline and line_idx == surface.cursor[0] - 1
        base = REVERSE if selected else ""
        if spans:
            start, end = spans[-1]
            before, middle, after = split_at_cols(
                cell,
                start + surface.padding,
                end + surface.padding,
            )
            body = f"{base}{before}{HIGHLIGHT}{middle}{RESET}{base}{after}"
        else:
            body = f"{base}{cell}"
        if base or spans:
            body += RESET
        return body

    def _scroll_start(self, surface: HostSurface) -> int:
        height = surface.geometry.height
        row = surface.cursor[0]
        return max(0, min(row - height, len(surface.lines) - height))

    def render_surface(self, surface: HostSurface, screen: ScreenSize) -> list[str]:
        """Return positioned output chunks drawing one surface."""
        geometry = surface.geometry
        if geometry is None:
            return []
        glyphs = surface.glyphs
        rows: list[str] = []
        if glyphs.has_top:
            rows.append(self._border_row(glyphs.top_left, glyphs.top, glyphs.top_right, surface))
        start = self._scroll_start(surface)
        for offset in range(geometry.height):
            body = self._content_row(surface, start + offset)
            left = glyphs.left if glyphs.has_left else ""
            right = glyphs.right if glyphs.has_right else ""
            rows.append(f"{left}{body}{right}")
        if glyphs.has_bottom:
            rows.append(self._border_row(glyphs.bottom_left, glyphs.bottom, glyphs.bottom_right, surface))

        out: list[str] = []
        for idx, row_text in enumerate(rows):
            screen_row = geometry.row + idx
            if screen_row >= screen.height:
                break
            out.append(self._move(screen_row, geometry.col))
            out.append(row_text)
        return out

    def _cursor_position(self) -> tuple[int, int] | None:
        handle = self.focused
        if handle is None or not self.editing:
            return None
        surface = self.surface(handle)
        if not surface.editable or surface.geometry is None:
            return None
        geometry = surface.geometry
        row = geometry.row + int(surface.glyphs.has_top)
        text = surface.lines[0] if surface.lines else ""
        col = geometry.col + int(surface.glyphs.has_left) + surface.padding + display_width(text)
        return row, min(col, geometry.col + geometry.width)

    def render(self) -> None:
        """Redraw every open, placed surface."""
        screen = self.current_size()
        out = ["\x1b[H\x1b[2J"]
        for handle in self.open_handles():
            out.extend(self.render_surface(self.surface(handle), screen))
        cursor = self._cursor_position()
        if cursor is not None:
            out.append(self._move(*cursor))
        self.terminal.write("".join(out))
        self.terminal.set_cursor_visible(cursor is not None)
        self.dirty = False

    # Event loop ----------------------------------------------------------

    def run_until_idle(self) -> None:
        """Draw and dispatch keys until every surface has been closed.

        ``CTRL_C`` that no surface binds aborts the loop with
        ``KeyboardInterrupt`` after the terminal has been restored.
        """
        with self.terminal.raw_mode():
            last_size: ScreenSize | None = None
            while self.open_handles():
                size = self.current_size()
                if size != last_size:
                    last_size = size
                    self.dirty = True
                if self.dirty:
                    self.render()
                key = self._read_key(self.stdin_fd, KEY_POLL_TIMEOUT_MS)
                if not key:
                    continue
                handled = self.press(key)
                if not handled and key == "CTRL_C":
                    logger.debug("interrupted with %d open surfaces", len(self.open_handles()))
                    raise KeyboardInterrupt
