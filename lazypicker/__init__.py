"""lazypicker: centered terminal popups that resolve to a single selection."""

import logging

from .errors import AllocationFailed, HostCallFailed, InvalidLayout, PickerError
from .host import MemoryHost, SurfaceHost, TerminalHost
from .layout import (
    BorderGlyphs,
    BorderStyle,
    Geometry,
    LayoutConfig,
    ScreenSize,
    StackLayout,
    compute_layout,
    compute_stack_layout,
)
from .picker import (
    EditableSession,
    PickerEvent,
    PickerSpec,
    ReadOnlySession,
    SessionHandles,
    SessionState,
    Variant,
    open_editable_picker,
    open_picker,
    open_readonly_picker,
)
from .surface import Surface, SurfaceRole

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AllocationFailed",
    "BorderGlyphs",
    "BorderStyle",
    "EditableSession",
    "Geometry",
    "HostCallFailed",
    "InvalidLayout",
    "LayoutConfig",
    "MemoryHost",
    "PickerError",
    "PickerEvent",
    "PickerSpec",
    "ReadOnlySession",
    "ScreenSize",
    "SessionHandles",
    "SessionState",
    "StackLayout",
    "Surface",
    "SurfaceHost",
    "SurfaceRole",
    "TerminalHost",
    "Variant",
    "compute_layout",
    "compute_stack_layout",
    "open_editable_picker",
    "open_picker",
    "open_readonly_picker",
]
