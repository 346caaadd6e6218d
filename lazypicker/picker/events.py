"""Picker events and the key tokens that produce them."""

from __future__ import annotations

import enum


class PickerEvent(enum.Enum):
    CURSOR_DOWN = "cursor_down"
    CURSOR_UP = "cursor_up"
    COMMIT = "commit"
    CANCEL = "cancel"
    INSERT_TEXT = "insert_text"
    DELETE_BACKWARD = "delete_backward"
    CLEAR_INPUT = "clear_input"


# Bound on the input surface, which keeps focus for the whole session.
EDITABLE_KEYMAP: dict[str, PickerEvent] = {
    "CTRL_J": PickerEvent.CURSOR_DOWN,
    "CTRL_K": PickerEvent.CURSOR_UP,
    "ENTER": PickerEvent.COMMIT,
    "CTRL_E": PickerEvent.CANCEL,
}

READONLY_KEYMAP: dict[str, PickerEvent] = {
    "CTRL_J": PickerEvent.CURSOR_DOWN,
    "CTRL_K": PickerEvent.CURSOR_UP,
    "DOWN": PickerEvent.CURSOR_DOWN,
    "UP": PickerEvent.CURSOR_UP,
    "j": PickerEvent.CURSOR_DOWN,
    "k": PickerEvent.CURSOR_UP,
    "ENTER": PickerEvent.COMMIT,
    "CTRL_E": PickerEvent.CANCEL,
    "ESC": PickerEvent.CANCEL,
}


def text_event_for_key(key: str) -> PickerEvent | None:
    """Map an unbound key token to a text-edit event, if it is one."""
    if key == "BACKSPACE":
        return PickerEvent.DELETE_BACKWARD
    if key == "CTRL_U":
        return PickerEvent.CLEAR_INPUT
    if len(key) == 1 and key.isprintable():
        return PickerEvent.INSERT_TEXT
    return None
