"""Tests for terminal mode control and the drawing host.

The host is driven with a fake terminal and a scripted key source, so no
real tty is touched.
"""

from __future__ import annotations

import contextlib
import os
import termios
import unittest
from unittest import mock

from lazypicker.host import TerminalHost
from lazypicker.layout import BorderStyle, LayoutConfig
from lazypicker.picker import open_editable_picker, open_readonly_picker
from lazypicker.terminal import TerminalController


class FakeTerminal:
    def __init__(self) -> None:
        self.writes: list[str] = []
        self.cursor_visible: list[bool] = []
        self.raw_entries = 0
        self.raw_exits = 0

    def write(self, text: str) -> None:
        self.writes.append(text)

    def set_cursor_visible(self, visible: bool) -> None:
        self.cursor_visible.append(visible)

    @contextlib.contextmanager
    def raw_mode(self):
        self.raw_entries += 1
        try:
            yield
        finally:
            self.raw_exits += 1


def scripted_keys(keys):
    pending = list(keys)

    def read(_fd, _timeout_ms=None):
        return pending.pop(0) if pending else "CTRL_C"

    return read


def make_host(keys=(), width=40, height=12) -> tuple[TerminalHost, FakeTerminal]:
    terminal = FakeTerminal()
    host = TerminalHost(
        0,
        1,
        terminal=terminal,
        key_reader=scripted_keys(keys),
        get_terminal_size=lambda _fallback: os.terminal_size((width, height)),
    )
    return host, terminal


class TerminalControllerTests(unittest.TestCase):
    def test_enable_and_disable_switch_alternate_screen(self) -> None:
        saved_state = [1, 2, 3]
        with mock.patch("lazypicker.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "lazypicker.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("lazypicker.terminal.os.write") as write_mock, mock.patch(
            "lazypicker.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("lazypicker.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_cursor_visibility_skips_redundant_writes(self) -> None:
        with mock.patch("lazypicker.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
        with mock.patch("lazypicker.terminal.os.write") as write_mock:
            controller.set_cursor_visible(True)
            controller.set_cursor_visible(False)
            controller.set_cursor_visible(False)
        self.assertEqual(write_mock.call_count, 1)
        self.assertEqual(write_mock.call_args.args, (1, b"\x1b[?25l"))


class TerminalHostTests(unittest.TestCase):
    def test_current_size_comes_from_terminal(self) -> None:
        host, _terminal = make_host(width=100, height=30)
        size = host.current_size()
        self.assertEqual((size.width, size.height), (100, 30))

    def test_render_draws_bordered_list_with_highlighted_cursor_row(self) -> None:
        host, terminal = make_host()
        layout = LayoutConfig(auto_width=True, auto_height=True)
        open_readonly_picker(host, ["one", "two"], layout, None)

        host.render()

        frame = terminal.writes[-1]
        self.assertTrue(frame.startswith("\x1b[H\x1b[2J"))
        self.assertIn("╭", frame)
        self.assertIn("╯", frame)
        self.assertIn("\033[7m  one", frame)
        self.assertIn("  two", frame)
        self.assertEqual(terminal.cursor_visible[-1], False)
        self.assertFalse(host.dirty)

    def test_editing_places_cursor_after_input_text(self) -> None:
        host, terminal = make_host()
        layout = LayoutConfig(auto_width=True, auto_height=True)
        handles = open_editable_picker(host, "Run", ["make"], layout, None)
        host.type_text("ab")

        host.render()

        geometry = host.surface(handles.input).geometry
        # Border, padding and the two typed characters precede the cursor.
        expected = f"\x1b[{geometry.row + 2};{geometry.col + 1 + 1 + 2 + 2}H"
        self.assertTrue(terminal.writes[-1].endswith(expected))
        self.assertEqual(terminal.cursor_visible[-1], True)

    def test_borderless_surface_draws_only_content(self) -> None:
        host, terminal = make_host()
        layout = LayoutConfig(border=BorderStyle.NONE, auto_width=True, auto_height=True)
        open_readonly_picker(host, ["one"], layout, None)

        host.render()

        self.assertNotIn("│", terminal.writes[-1])

    def test_run_until_idle_returns_after_commit(self) -> None:
        host, terminal = make_host(keys=["", "j", "ENTER"])
        selected: list[str] = []
        layout = LayoutConfig(auto_width=True, auto_height=True)
        open_readonly_picker(host, ["one", "two"], layout, selected.append)

        host.run_until_idle()

        self.assertEqual(selected, ["two"])
        self.assertEqual(host.open_handles(), [])
        self.assertEqual((terminal.raw_entries, terminal.raw_exits), (1, 1))

    def test_unbound_ctrl_c_interrupts_and_restores_terminal(self) -> None:
        host, terminal = make_host(keys=[])
        layout = LayoutConfig(auto_width=True, auto_height=True)
        open_readonly_picker(host, ["one"], layout, None)

        with self.assertRaises(KeyboardInterrupt):
            host.run_until_idle()

        self.assertEqual(terminal.raw_exits, 1)

    def test_typed_keys_reach_the_editable_input(self) -> None:
        host, _terminal = make_host(keys=["m", "a", "k", "e", "ENTER"])
        selected: list[str] = []
        items = ["./a.sh"]
        layout = LayoutConfig(auto_width=True, auto_height=True)
        open_editable_picker(host, "Run", items, layout, selected.append)

        host.run_until_idle()

        self.assertEqual(selected, ["make"])
        self.assertEqual(items, ["./a.sh", "make"])
        self.assertFalse(host.editing)


if __name__ == "__main__":
    unittest.main()
