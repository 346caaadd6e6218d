"""Caller-facing entry points for opening pickers."""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..host.base import SurfaceHandle, SurfaceHost
from ..layout import (
    AUTO_WIDTH_PADDING,
    LayoutConfig,
    ScreenMetrics,
    compute_layout,
    compute_stack_layout,
    content_extent,
)
from .selection import SelectHandler
from .session import EditableSession, PickerSession, ReadOnlySession

logger = logging.getLogger(__name__)


class Variant(enum.Enum):
    READONLY = "readonly"
    EDITABLE = "editable"


@dataclass
class PickerSpec:
    """Everything needed to open a picker except the selection handler."""

    items: list[str]
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    title: str | None = None
    variant: Variant = Variant.READONLY


@dataclass(frozen=True)
class SessionHandles:
    """Surface identities of an open editable picker, for caller post-processing."""

    session: EditableSession
    title: SurfaceHandle
    input: SurfaceHandle
    list: SurfaceHandle


def open_readonly_picker(
    host: SurfaceHost,
    items: Sequence[str],
    layout: LayoutConfig,
    on_select: SelectHandler | None,
    *,
    screen: ScreenMetrics | None = None,
) -> ReadOnlySession:
    """Open a single-surface list picker centered on the screen.

    Raises ``InvalidLayout`` before touching the host and ``AllocationFailed``
    when the host cannot provide the surface.
    """
    layout.validate()
    metrics = screen if screen is not None else host
    geometry = compute_layout(layout, metrics.current_size(), content_extent(None, items))
    session = ReadOnlySession(host, items, on_select)
    session.open(geometry, layout.surface_glyphs(), padding=AUTO_WIDTH_PADDING)
    return session


def open_editable_picker(
    host: SurfaceHost,
    title: str,
    items: list[str],
    layout: LayoutConfig,
    on_select: SelectHandler | None,
    *,
    screen: ScreenMetrics | None = None,
) -> SessionHandles:
    """Open the title/input/list picker with focus and editing on the input.

    A committed input is appended to ``items`` in place when it is new.
    Surfaces created before an allocation failure are destroyed before the
    ``AllocationFailed`` reaches the caller.
    """
    layout.validate()
    metrics = screen if screen is not None else host
    stack = compute_stack_layout(layout, metrics.current_size(), title, items)
    session = EditableSession(host, title, items, on_select)
    session.open(stack, padding=AUTO_WIDTH_PADDING)
    return SessionHandles(
        session=session,
        title=session.title_surface.handle,
        input=session.input_surface.handle,
        list=session.list_surface.handle,
    )


def open_picker(host: SurfaceHost, spec: PickerSpec, on_select: SelectHandler | None) -> PickerSession:
    """Open the picker variant described by ``spec`` and return its session."""
    if spec.variant is Variant.EDITABLE:
        return open_editable_picker(host, spec.title or "", spec.items, spec.layout, on_select).session
    return open_readonly_picker(host, spec.items, spec.layout, on_select)
