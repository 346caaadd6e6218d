"""Picker sessions, events, and the caller-facing open functions."""

from .api import PickerSpec, SessionHandles, Variant, open_editable_picker, open_picker, open_readonly_picker
from .events import EDITABLE_KEYMAP, READONLY_KEYMAP, PickerEvent
from .selection import OneShot, SelectionResult, merge_selection
from .session import EditableSession, PickerSession, ReadOnlySession, SessionState

__all__ = [
    "EDITABLE_KEYMAP",
    "READONLY_KEYMAP",
    "EditableSession",
    "OneShot",
    "PickerEvent",
    "PickerSession",
    "PickerSpec",
    "ReadOnlySession",
    "SelectionResult",
    "SessionHandles",
    "SessionState",
    "Variant",
    "merge_selection",
    "open_editable_picker",
    "open_picker",
    "open_readonly_picker",
]
