"""Picker session state machine.

A session owns the surfaces of one open picker and interprets events through
a single transition function, ``handle``. Host key bindings only translate
key tokens into ``PickerEvent`` values; all content changes happen here.

States move strictly forward::

    OPENING -> ACTIVE -> COMMITTING -> CLOSED
                      -> CANCELLING -> CLOSED

Nothing prevents two sessions from being open on one host at the same time;
they simply overlap on screen.
"""

from __future__ import annotations

import abc
import enum
import functools
import logging
from collections.abc import Callable, Mapping, Sequence

from ..errors import AllocationFailed, HostCallFailed
from ..host.base import SurfaceHost
from ..layout import BorderGlyphs, Geometry, StackLayout
from ..surface import Surface, SurfaceRole
from .events import EDITABLE_KEYMAP, READONLY_KEYMAP, PickerEvent, text_event_for_key
from .selection import OneShot, SelectHandler, SelectionResult, merge_selection

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    OPENING = "opening"
    ACTIVE = "active"
    COMMITTING = "committing"
    CANCELLING = "cancelling"
    CLOSED = "closed"


class PickerSession(abc.ABC):
    """Shared lifecycle for read-only and editable pickers."""

    keymap: Mapping[str, PickerEvent] = {}

    def __init__(self, host: SurfaceHost, on_select: SelectHandler | None) -> None:
        self.host = host
        self.state = SessionState.OPENING
        self.surfaces: list[Surface] = []
        self.cursor_row = 1
        self.result: SelectionResult | None = None
        self._selection = OneShot(on_select)
        self._handlers: dict[PickerEvent, Callable[[str], bool]] = {
            PickerEvent.CURSOR_DOWN: lambda _text: self._move_cursor(1),
            PickerEvent.CURSOR_UP: lambda _text: self._move_cursor(-1),
            PickerEvent.COMMIT: lambda _text: self._commit(),
            PickerEvent.CANCEL: lambda _text: self._cancel(),
        }

    # Lifecycle -----------------------------------------------------------

    @property
    @abc.abstractmethod
    def focus_surface(self) -> Surface:
        """Surface that holds focus and the key bindings."""

    @property
    @abc.abstractmethod
    def list_surface(self) -> Surface:
        """Surface showing the items, with the cursor line."""

    @property
    def closed(self) -> bool:
        return self.state is SessionState.CLOSED

    def _allocate(
        self,
        plan: Sequence[tuple[SurfaceRole, Sequence[str], Geometry, BorderGlyphs, int]],
    ) -> None:
        """Create every surface, then open every window, rolling back on failure."""
        try:
            for role, lines, _geometry, _glyphs, _padding in plan:
                self.surfaces.append(Surface.create(self.host, role, lines))
            for surface, (_role, _lines, geometry, glyphs, padding) in zip(self.surfaces, plan):
                surface.render(geometry, glyphs, padding=padding)
        except AllocationFailed:
            logger.debug("allocation failed after %d surfaces; rolling back", len(self.surfaces))
            for surface in self.surfaces:
                surface.destroy()
            self.surfaces = []
            self._selection.discard()
            self.state = SessionState.CLOSED
            raise

    def _activate(self) -> None:
        """Bind keys on the focus surface, focus it, and enter ``ACTIVE``."""
        focus = self.focus_surface
        for key, event in self.keymap.items():
            self._host_call("bind_key", focus.handle, key, functools.partial(self.handle, event))
        self._host_call("bind_text_input", focus.handle, self._handle_text_key)
        self._host_call("set_cursorline", self.list_surface.handle, True)
        self._write_cursor(1)
        self._host_call("focus", focus.handle)
        self.state = SessionState.ACTIVE
        logger.debug("%s active with %d surfaces", type(self).__name__, len(self.surfaces))

    def _teardown(self) -> None:
        for surface in self.surfaces:
            surface.destroy()
        self.state = SessionState.CLOSED

    # Transitions ---------------------------------------------------------

    def handle(self, event: PickerEvent, text: str = "") -> bool:
        """Apply one event; returns ``False`` when the session ignores it."""
        if self.state is not SessionState.ACTIVE:
            logger.debug("ignoring %s in state %s", event.value, self.state.value)
            return False
        handler = self._handlers.get(event)
        if handler is None:
            return False
        return handler(text)

    def _handle_text_key(self, key: str) -> bool:
        event = text_event_for_key(key)
        if event is None:
            return False
        return self.handle(event, key)

    def _cancel(self) -> bool:
        self.state = SessionState.CANCELLING
        self._selection.discard()
        self._teardown()
        logger.debug("%s cancelled", type(self).__name__)
        return True

    def _finish_commit(self, text: str, appended: bool = False) -> bool:
        self._teardown()
        self.result = SelectionResult(text=text, appended=appended)
        logger.debug("%s committed %r", type(self).__name__, text)
        self._selection.fire(text)
        return True

    @abc.abstractmethod
    def _move_cursor(self, delta: int) -> bool:
        """Move the list cursor by one row in the direction of ``delta``."""

    @abc.abstractmethod
    def _commit(self) -> bool:
        """Resolve the selection and close the session."""

    # Host helpers --------------------------------------------------------

    def _host_call(self, name: str, *args, default=None):
        try:
            return getattr(self.host, name)(*args)
        except HostCallFailed as exc:
            logger.debug("host %s failed: %s", name, exc)
            return default

    def _read_cursor(self) -> int | None:
        cursor = self._host_call("get_cursor", self.list_surface.handle)
        if cursor is None:
            return None
        return cursor[0]

    def _write_cursor(self, row: int) -> bool:
        try:
            self.host.set_cursor(self.list_surface.handle, row, 0)
        except HostCallFailed as exc:
            logger.debug("cursor write to row %d failed: %s", row, exc)
            return False
        self.cursor_row = row
        return True


class ReadOnlySession(PickerSession):
    """A single list surface; commit resolves to the line under the cursor."""

    keymap = READONLY_KEYMAP

    def __init__(self, host: SurfaceHost, items: Sequence[str], on_select: SelectHandler | None) -> None:
        super().__init__(host, on_select)
        self.items = list(items)
        self._list: Surface | None = None

    @property
    def focus_surface(self) -> Surface:
        return self.list_surface

    @property
    def list_surface(self) -> Surface:
        if self._list is None:
            raise RuntimeError("session has no surfaces yet")
        return self._list

    def open(self, geometry: Geometry, glyphs: BorderGlyphs, *, padding: int = 0) -> None:
        self._allocate([(SurfaceRole.LIST, self.items, geometry, glyphs, padding)])
        self._list = self.surfaces[0]
        self._activate()

    def _move_cursor(self, delta: int) -> bool:
        row = self._read_cursor()
        if row is None:
            return False
        line_count = len(self.list_surface.lines())
        target = row + delta
        if target < 1 or target > line_count:
            return False
        return self._write_cursor(target)

    def _commit(self) -> bool:
        self.state = SessionState.COMMITTING
        row = self._read_cursor() or self.cursor_row
        lines = self.list_surface.lines()
        text = lines[row - 1] if 1 <= row <= len(lines) else ""
        return self._finish_commit(text)


class EditableSession(PickerSession):
    """Title, input and list surfaces; the input keeps focus and is edited in place.

    ``items`` is the caller's backing list and is extended on commit.
    """

    keymap = EDITABLE_KEYMAP

    def __init__(
        self,
        host: SurfaceHost,
        title: str,
        items: list[str],
        on_select: SelectHandler | None,
    ) -> None:
        super().__init__(host, on_select)
        self.title = title
        self.items = items
        self._handlers.update(
            {
                PickerEvent.INSERT_TEXT: self._insert_text,
                PickerEvent.DELETE_BACKWARD: lambda _text: self._edit_input(lambda line: line[:-1]),
                PickerEvent.CLEAR_INPUT: lambda _text: self._edit_input(lambda _line: ""),
            }
        )

    @property
    def title_surface(self) -> Surface:
        return self.surfaces[0]

    @property
    def input_surface(self) -> Surface:
        return self.surfaces[1]

    @property
    def list_surface(self) -> Surface:
        return self.surfaces[2]

    @property
    def focus_surface(self) -> Surface:
        return self.input_surface

    def open(self, layout: StackLayout, *, padding: int = 0) -> None:
        title_glyphs, input_glyphs, list_glyphs = layout.glyphs
        self._allocate(
            [
                (SurfaceRole.TITLE, [self.title], layout.title, title_glyphs, padding),
                (SurfaceRole.INPUT, [], layout.input, input_glyphs, padding),
                (SurfaceRole.LIST, list(self.items), layout.list, list_glyphs, padding),
            ]
        )
        self._activate()
        self._host_call("set_editing", True)

    def _teardown(self) -> None:
        self._host_call("set_editing", False)
        super()._teardown()

    def _set_input(self, text: str) -> None:
        self.input_surface.set_content([text])
        self._host_call("set_cursor", self.input_surface.handle, 1, len(text))

    def _move_cursor(self, delta: int) -> bool:
        row = self._read_cursor()
        if row is None:
            return False
        lines = self.list_surface.lines()
        if delta > 0:
            if row >= len(lines):
                return False
            # Down shows the item the cursor lands on (0-based index ``row``).
            text = lines[row]
        else:
            if row <= 1:
                return False
            # Up reads 0-based ``row - 2``, one position behind the current row.
            text = lines[row - 2]
        self._set_input(text)
        self._write_cursor(row + delta)
        return True

    def _insert_text(self, text: str) -> bool:
        return self._edit_input(lambda line: line + text)

    def _edit_input(self, edit: Callable[[str], str]) -> bool:
        current = self.input_surface.first_line()
        updated = edit(current)
        if updated == current:
            return False
        self._set_input(updated)
        return True

    def _commit(self) -> bool:
        self.state = SessionState.COMMITTING
        text = self.input_surface.first_line()
        appended = merge_selection(self.items, text)
        return self._finish_commit(text, appended)
