"""Command-line front door for lazypicker.

Parses CLI options, builds a layout from config defaults plus overrides, and
runs one picker on the controlling terminal. The selection is printed to
stdout so the command composes with shell substitution.
"""

from __future__ import annotations

import argparse
import contextlib
import dataclasses
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from .config import load_layout_defaults
from .errors import PickerError
from .host import TerminalHost
from .layout import BorderStyle, LayoutConfig
from .picker import open_editable_picker, open_readonly_picker
from .project_command import ProjectCommandContext, open_project_command_picker

logger = logging.getLogger(__name__)

EXIT_SELECTED = 0
EXIT_CANCELLED = 1
EXIT_INTERRUPTED = 130


def _ratio(value: str) -> float:
    """argparse type for ratios in ``(0, 1]``."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid ratio value: {value!r}") from exc
    if not 0.0 < parsed <= 1.0:
        raise argparse.ArgumentTypeError("ratio must be in (0, 1]")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazypicker",
        description="Pick one line from a list in a centered terminal popup.",
    )
    parser.add_argument("items", nargs="*", help="Items to pick from. Read from stdin when omitted.")
    parser.add_argument("--editable", action="store_true", help="Show an editable input above the list.")
    parser.add_argument("--title", default="", help="Title shown above the input (editable picker).")
    parser.add_argument(
        "--project-commands",
        nargs="?",
        const="",
        default=None,
        metavar="DIR",
        help="Pick a command for project DIR (default: current directory).",
    )
    parser.add_argument("--width-ratio", type=_ratio, default=None, help="Popup width as a screen ratio.")
    parser.add_argument("--height-ratio", type=_ratio, default=None, help="Popup height as a screen ratio.")
    parser.add_argument("--no-border", action="store_true", help="Draw surfaces without borders.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Log level used with --log-file.",
    )
    return parser


def layout_from_args(args: argparse.Namespace, base: LayoutConfig | None = None) -> LayoutConfig:
    """Apply CLI overrides on top of the configured layout defaults."""
    layout = base if base is not None else load_layout_defaults()
    changes: dict[str, object] = {}
    if args.width_ratio is not None:
        changes["width_ratio"] = args.width_ratio
    if args.height_ratio is not None:
        changes["height_ratio"] = args.height_ratio
    if args.no_border:
        changes["border"] = BorderStyle.NONE
        changes["glyphs"] = None
    return dataclasses.replace(layout, **changes) if changes else layout


def _configure_logging(log_file: Path | None, level: str) -> None:
    # The popup owns the terminal, so logs only ever go to a file.
    if log_file is None:
        return
    logging.basicConfig(
        filename=str(log_file),
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _read_stdin_items() -> list[str]:
    if sys.stdin.isatty():
        return []
    return [line.rstrip("\r\n") for line in sys.stdin if line.strip()]


@contextlib.contextmanager
def _tty_host():
    """Yield a host drawing on the controlling terminal; closes the tty on exit."""
    tty_fd = os.open("/dev/tty", os.O_RDWR)
    try:
        yield TerminalHost(tty_fd, tty_fd)
    finally:
        os.close(tty_fd)


def _run_picker(
    args: argparse.Namespace,
    host: TerminalHost,
    layout: LayoutConfig,
    items: list[str],
    project_dir: str | None,
    selections: list[str],
) -> None:
    if project_dir is not None:
        context = ProjectCommandContext(persist=True)
        handles = open_project_command_picker(
            host,
            context,
            project_dir,
            lambda _project_dir, cmd: selections.append(cmd),
            layout=layout,
        )
        if handles is None:
            raise SystemExit(f"Cannot list project directory: {project_dir}")
    elif args.editable:
        open_editable_picker(host, args.title, items, layout, selections.append)
    else:
        open_readonly_picker(host, items, layout, selections.append)
    host.run_until_idle()


def main(argv: Sequence[str] | None = None, host: TerminalHost | None = None) -> int:
    """Run one picker and print its selection.

    Returns ``0`` when something was selected, ``1`` when the picker was
    cancelled, and ``130`` on Ctrl-C. ``host`` is primarily for tests; without
    it the controlling terminal is opened and closed again before returning.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_file, args.log_level)
    layout = layout_from_args(args)

    selections: list[str] = []
    project_dir: str | None = None

    if args.project_commands is not None:
        project_dir = str(Path(args.project_commands or os.getcwd()).resolve())
        if not Path(project_dir).is_dir():
            raise SystemExit(f"Not a directory: {project_dir}")
        items: list[str] = []
    else:
        items = list(args.items) or _read_stdin_items()
        if not items and not args.editable:
            raise SystemExit("Nothing to pick from.")

    with contextlib.ExitStack() as stack:
        if host is None:
            try:
                host = stack.enter_context(_tty_host())
            except OSError as exc:
                raise SystemExit(f"Cannot open terminal: {exc}") from exc
        try:
            _run_picker(args, host, layout, items, project_dir, selections)
        except PickerError as exc:
            logger.error("picker failed: %s", exc)
            raise SystemExit(f"lazypicker: {exc}") from exc
        except KeyboardInterrupt:
            return EXIT_INTERRUPTED

    if not selections:
        return EXIT_CANCELLED
    sys.stdout.write(selections[0] + "\n")
    return EXIT_SELECTED
