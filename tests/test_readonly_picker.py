"""Behavior tests for the single-surface read-only list picker."""

from __future__ import annotations

import unittest

from lazypicker.errors import AllocationFailed
from lazypicker.host import MemoryHost
from lazypicker.layout import BorderStyle, Geometry, LayoutConfig, ROUNDED_GLYPHS
from lazypicker.picker import PickerSpec, ReadOnlySession, SessionState, Variant, open_picker, open_readonly_picker


def _open(items: list[str], layout: LayoutConfig | None = None):
    host = MemoryHost(80, 24)
    received: list[str] = []
    session = open_readonly_picker(
        host,
        items,
        layout or LayoutConfig(auto_width=True, auto_height=True),
        received.append,
    )
    return host, session, received


class ReadOnlyPickerTests(unittest.TestCase):
    def test_open_places_one_focused_list_surface(self) -> None:
        host, session, _received = _open(["./build.sh", "./build_release.sh"])
        handle = session.list_surface.handle
        self.assertEqual(host.open_handles(), [handle])
        self.assertEqual(host.focused, handle)
        self.assertFalse(host.editing)
        self.assertEqual(host.geometry(handle), Geometry(row=10, col=28, width=22, height=2))
        self.assertEqual(host.surface(handle).glyphs, ROUNDED_GLYPHS)

    def test_navigation_is_clamped_to_the_item_range(self) -> None:
        host, session, _received = _open(["a", "b", "c"])
        host.press("UP")
        self.assertEqual(session.cursor_row, 1)
        host.press_keys(["DOWN", "j", "CTRL_J", "DOWN"])
        self.assertEqual(session.cursor_row, 3)
        host.press("k")
        self.assertEqual(session.cursor_row, 2)

    def test_commit_returns_line_under_cursor_verbatim(self) -> None:
        items = ["  spaced  ", "b"]
        host, _session, received = _open(items)
        host.press("ENTER")
        self.assertEqual(received, ["  spaced  "])
        self.assertEqual(items, ["  spaced  ", "b"])
        self.assertEqual(host.open_handles(), [])

    def test_commit_after_moving_selects_that_line(self) -> None:
        host, session, received = _open(["a", "b", "c"])
        host.press_keys(["DOWN", "DOWN", "ENTER"])
        self.assertEqual(received, ["c"])
        self.assertIs(session.state, SessionState.CLOSED)

    def test_escape_cancels_without_callback(self) -> None:
        host, session, received = _open(["a"])
        host.press("ESC")
        self.assertEqual(received, [])
        self.assertEqual(host.open_handles(), [])
        self.assertIsNone(session.result)

    def test_printable_keys_do_not_edit_the_list(self) -> None:
        host, session, _received = _open(["a"])
        self.assertFalse(host.press("x"))
        self.assertEqual(session.list_surface.lines(), ["a"])

    def test_empty_list_commits_empty_text(self) -> None:
        host, _session, received = _open([])
        host.press("DOWN")
        host.press("ENTER")
        self.assertEqual(received, [""])

    def test_allocation_failure_leaves_nothing_open(self) -> None:
        host = MemoryHost(fail_place_after=0)
        with self.assertRaises(AllocationFailed):
            open_readonly_picker(host, ["a"], LayoutConfig(), lambda _text: None)
        self.assertEqual(host.open_handles(), [])

    def test_borderless_fixed_ratio_layout(self) -> None:
        layout = LayoutConfig(border=BorderStyle.NONE, width_ratio=0.5, height_ratio=0.25)
        host, session, _received = _open(["a"], layout)
        self.assertEqual(host.geometry(session.list_surface.handle), Geometry(row=9, col=20, width=40, height=6))


class OpenPickerDispatchTests(unittest.TestCase):
    def test_spec_variant_selects_session_type(self) -> None:
        host = MemoryHost()
        readonly = open_picker(host, PickerSpec(items=["a"]), None)
        self.assertIsInstance(readonly, ReadOnlySession)
        editable = open_picker(
            host,
            PickerSpec(items=["a"], title="T", variant=Variant.EDITABLE),
            None,
        )
        self.assertEqual(len(editable.surfaces), 3)
        self.assertEqual(editable.title_surface.lines(), ["T"])

    def test_missing_handler_still_closes_on_commit(self) -> None:
        host = MemoryHost()
        session = open_picker(host, PickerSpec(items=["a"]), None)
        host.press("ENTER")
        self.assertTrue(session.closed)
        self.assertEqual(session.result.text, "a")


if __name__ == "__main__":
    unittest.main()
