"""Layout policy and geometry helpers for picker surfaces.

All functions here are pure: they take a ``LayoutConfig``, the current screen
size, and the content to display, and return geometry without touching a
host. A ``Geometry`` row/col is the outer top-left corner of the surface
(border included when present) while width/height describe the content area,
the same convention floating windows use in terminal editors.
"""

from __future__ import annotations

import enum
import math
import shutil
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from .errors import InvalidLayout

DEFAULT_RATIO = 0.5
AUTO_WIDTH_PADDING = 2


@dataclass(frozen=True)
class ScreenSize:
    """Screen dimensions in character cells."""

    width: int
    height: int


class ScreenMetrics(Protocol):
    def current_size(self) -> ScreenSize: ...


class TerminalScreenMetrics:
    """Screen metrics backed by the controlling terminal."""

    def __init__(self, fallback: tuple[int, int] = (80, 24)) -> None:
        self.fallback = fallback

    def current_size(self) -> ScreenSize:
        term = shutil.get_terminal_size(self.fallback)
        return ScreenSize(width=term.columns, height=term.lines)


class BorderStyle(enum.Enum):
    NONE = "none"
    ROUNDED = "rounded"
    CUSTOM = "custom"


@dataclass(frozen=True)
class BorderGlyphs:
    """Eight per-edge border glyphs; ``None`` means the edge is not drawn.

    Order follows the clockwise convention starting at the top-left corner.
    """

    top_left: str | None = None
    top: str | None = None
    top_right: str | None = None
    right: str | None = None
    bottom_right: str | None = None
    bottom: str | None = None
    bottom_left: str | None = None
    left: str | None = None

    @property
    def has_top(self) -> bool:
        return self.top is not None

    @property
    def has_bottom(self) -> bool:
        return self.bottom is not None

    @property
    def has_left(self) -> bool:
        return self.left is not None

    @property
    def has_right(self) -> bool:
        return self.right is not None

    def thickness(self) -> tuple[int, int]:
        """Return ``(extra_columns, extra_rows)`` the border adds around content."""
        return (
            int(self.has_left) + int(self.has_right),
            int(self.has_top) + int(self.has_bottom),
        )

    def as_tuple(self) -> tuple[str | None, ...]:
        return (
            self.top_left,
            self.top,
            self.top_right,
            self.right,
            self.bottom_right,
            self.bottom,
            self.bottom_left,
            self.left,
        )


NO_GLYPHS = BorderGlyphs()
ROUNDED_GLYPHS = BorderGlyphs("╭", "─", "╮", "│", "╯", "─", "╰", "│")
# The three stacked surfaces share vertical edges and use the input box's
# top/bottom edges as separators, so together they draw one rounded frame.
TITLE_GLYPHS = BorderGlyphs("╭", "─", "╮", "│", None, None, None, "│")
INPUT_GLYPHS = BorderGlyphs("│", "─", "│", "│", "│", "─", "│", "│")
LIST_GLYPHS = BorderGlyphs(None, None, None, "│", "╯", "─", "╰", "│")


@dataclass(frozen=True)
class LayoutConfig:
    """How a picker should be sized and framed.

    ``width_ratio``/``height_ratio`` of ``None`` mean "use the default ratio"
    unless the matching ``auto_*`` flag asks for auto-fit to content.
    """

    border: BorderStyle = BorderStyle.ROUNDED
    width_ratio: float | None = None
    height_ratio: float | None = None
    auto_width: bool = False
    auto_height: bool = False
    glyphs: BorderGlyphs | None = None

    def validate(self) -> None:
        """Raise ``InvalidLayout`` when a present ratio lies outside ``(0, 1]``."""
        for name in ("width_ratio", "height_ratio"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidLayout(f"{name} must be a number, got {value!r}")
            if math.isnan(value) or not 0.0 < value <= 1.0:
                raise InvalidLayout(f"{name} must be in (0, 1], got {value!r}")
        if self.border is BorderStyle.CUSTOM and self.glyphs is None:
            raise InvalidLayout("custom border style requires glyphs")

    @property
    def bordered(self) -> bool:
        return self.border is not BorderStyle.NONE

    def surface_glyphs(self) -> BorderGlyphs:
        """Return glyphs used for a single (non-stacked) surface."""
        if self.border is BorderStyle.NONE:
            return NO_GLYPHS
        if self.border is BorderStyle.CUSTOM and self.glyphs is not None:
            return self.glyphs
        return ROUNDED_GLYPHS


@dataclass(frozen=True)
class ContentExtent:
    max_line_width: int
    line_count: int


def content_extent(title: str | None, items: Sequence[str]) -> ContentExtent:
    """Measure the longest line (title included) and the number of items."""
    max_line_width = len(title) if title else 0
    for item in items:
        max_line_width = max(max_line_width, len(item))
    return ContentExtent(max_line_width=max_line_width, line_count=len(items))


@dataclass(frozen=True)
class Geometry:
    row: int
    col: int
    width: int
    height: int


@dataclass(frozen=True)
class StackLayout:
    """Geometry for the title/input/list stack of an editable picker."""

    title: Geometry
    input: Geometry
    list: Geometry
    glyphs: tuple[BorderGlyphs, BorderGlyphs, BorderGlyphs]


def _ratio_size(total: int, ratio: float | None) -> int:
    value = DEFAULT_RATIO if ratio is None else ratio
    return int(math.floor(total * value))


def _centered_offset(total: int, used: int) -> int:
    return max(0, int(math.floor((total - used) / 2)))


def _auto_width(config: LayoutConfig, extent: ContentExtent | None, width: int) -> int:
    if not config.auto_width or config.width_ratio is not None or extent is None:
        return width
    if extent.max_line_width <= 0:
        return width
    return extent.max_line_width + AUTO_WIDTH_PADDING * 2


def compute_layout(
    config: LayoutConfig,
    screen: ScreenSize,
    extent: ContentExtent | None = None,
) -> Geometry:
    """Size and center a single surface on ``screen``.

    Fixed ratios floor ``screen * ratio``; auto-fit applies only when the
    corresponding ratio is unset. Bordered surfaces add two cells in each
    direction to the extent used for centering.
    """
    config.validate()
    width = _auto_width(config, extent, _ratio_size(screen.width, config.width_ratio))
    height = _ratio_size(screen.height, config.height_ratio)
    if config.auto_height and config.height_ratio is None and extent is not None:
        height = max(1, extent.line_count)
    width = max(1, width)
    height = max(1, height)

    extra_cols, extra_rows = config.surface_glyphs().thickness()
    return Geometry(
        row=_centered_offset(screen.height, height + extra_rows),
        col=_centered_offset(screen.width, width + extra_cols),
        width=width,
        height=height,
    )


def compute_stack_layout(
    config: LayoutConfig,
    screen: ScreenSize,
    title: str,
    items: Sequence[str],
) -> StackLayout:
    """Lay out title (1 row), input (1 row) and list (one row per item) surfaces.

    The list is at least one row tall so an empty picker stays addressable.
    Each surface starts right below the previous one's content and border rows.
    """
    config.validate()
    extent = content_extent(title, items)
    width = max(1, _auto_width(config, extent, _ratio_size(screen.width, config.width_ratio)))
    height = _ratio_size(screen.height, config.height_ratio)
    if config.auto_height and config.height_ratio is None:
        # One row for the title, one for the (empty) input.
        height = len(items) + 2
    height = max(1, height)

    if config.bordered:
        glyphs = (TITLE_GLYPHS, INPUT_GLYPHS, LIST_GLYPHS)
    else:
        glyphs = (NO_GLYPHS, NO_GLYPHS, NO_GLYPHS)
    extra_rows = sum(g.thickness()[1] for g in glyphs)
    extra_cols = glyphs[0].thickness()[0]

    left = _centered_offset(screen.width, width + extra_cols)
    top = _centered_offset(screen.height, height + extra_rows)

    heights = (1, 1, max(1, len(items)))
    placed: list[Geometry] = []
    for surface_height, surface_glyphs in zip(heights, glyphs):
        placed.append(Geometry(row=top, col=left, width=width, height=surface_height))
        top += surface_height + surface_glyphs.thickness()[1]
    return StackLayout(title=placed[0], input=placed[1], list=placed[2], glyphs=glyphs)
