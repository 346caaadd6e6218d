"""Project command picker built on the editable picker.

Each project directory keeps its own command list, seeded from the ``*.sh``
scripts found in it. The last selected command becomes the default: it is
listed first next time and is used when the input is committed empty.
Running the command is left to a caller-supplied ``runner``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from . import config
from .errors import HostCallFailed
from .host.base import SurfaceHost
from .layout import BorderStyle, LayoutConfig
from .picker.api import SessionHandles, open_editable_picker

logger = logging.getLogger(__name__)

PICKER_TITLE = "Project Command ('Ctrl+e' to close picker)"
# Column span of ``Ctrl+e`` inside ``PICKER_TITLE``.
TITLE_HIGHLIGHT_SPAN = (18, 24)

CommandRunner = Callable[[str, str], None]


@dataclass
class ProjectCommandState:
    cmd_list: list[str] = field(default_factory=list)
    # Index into ``cmd_list`` of the command selected last.
    default_cmd_index: int | None = None

    def default_command(self) -> str | None:
        if not self.cmd_list:
            return None
        if self.default_cmd_index is not None and 0 <= self.default_cmd_index < len(self.cmd_list):
            return self.cmd_list[self.default_cmd_index]
        return self.cmd_list[0]


def discover_script_files(project_dir: str) -> list[str] | None:
    """Return ``./name.sh`` entries of ``project_dir`` sorted by name.

    ``None`` when the directory cannot be read.
    """
    try:
        entries = list(Path(project_dir).iterdir())
    except OSError as exc:
        logger.debug("cannot list %s: %s", project_dir, exc)
        return None
    return sorted(f"./{entry.name}" for entry in entries if entry.suffix == ".sh")


class ProjectCommandContext:
    """Per-project command state shared across picker invocations.

    Owned by whoever opens project command pickers; pickers themselves keep
    no state between sessions.
    """

    def __init__(self, *, persist: bool = False) -> None:
        self.persist = persist
        self._states: dict[str, ProjectCommandState] = {}

    def get(self, project_dir: str) -> ProjectCommandState | None:
        return self._states.get(project_dir)

    def state_for(self, project_dir: str, enable_script_files: bool = True) -> ProjectCommandState | None:
        """Return the state for ``project_dir``, creating it on first use.

        A new state is restored from config when persistence is enabled, or
        else seeded with discovered scripts. Returns ``None`` when the project
        directory cannot be listed.
        """
        state = self._states.get(project_dir)
        if state is not None:
            return state

        if self.persist:
            stored = config.load_project_commands(project_dir)
            if stored is not None:
                commands, default_index = stored
                state = ProjectCommandState(cmd_list=commands, default_cmd_index=default_index)

        if state is None:
            if enable_script_files:
                scripts = discover_script_files(project_dir)
                if scripts is None:
                    return None
                state = ProjectCommandState(cmd_list=scripts)
            else:
                state = ProjectCommandState()

        self._states[project_dir] = state
        return state

    def display_list(self, project_dir: str) -> list[str]:
        """Return commands for display with the default command on top."""
        state = self._states.get(project_dir)
        if state is None:
            return []
        if state.default_cmd_index is None:
            return list(state.cmd_list)
        top_line = state.default_command()
        return [top_line] + [line for line in state.cmd_list if line != top_line]

    def resolve_selection(self, project_dir: str, selected: str) -> str | None:
        """Turn the committed input into the command to run.

        An empty input falls back to the default (or first) command. A new
        command is appended and becomes the default. Returns ``None`` when
        there is nothing to run.
        """
        state = self._states.get(project_dir)
        if state is None:
            return None

        cmd = selected
        if not cmd:
            cmd = state.default_command()
            if cmd is None:
                return None

        if cmd not in state.cmd_list:
            state.cmd_list.append(cmd)
            state.cmd_list[:] = [line for line in state.cmd_list if line]

        state.default_cmd_index = state.cmd_list.index(cmd)
        logger.debug("default command for %s is now %r", project_dir, cmd)

        if self.persist:
            config.save_project_commands(project_dir, state.cmd_list, state.default_cmd_index)
        return cmd


def open_project_command_picker(
    host: SurfaceHost,
    context: ProjectCommandContext,
    project_dir: str,
    runner: CommandRunner,
    *,
    layout: LayoutConfig | None = None,
    enable_script_files: bool = True,
) -> SessionHandles | None:
    """Open the command picker for ``project_dir``.

    ``runner(project_dir, command)`` is called once if the picker commits to a
    runnable command. Returns ``None`` when the project cannot be listed.
    """
    state = context.state_for(project_dir, enable_script_files=enable_script_files)
    if state is None:
        return None

    if layout is None:
        layout = LayoutConfig(border=BorderStyle.ROUNDED, auto_width=True, auto_height=True)

    def on_select(selected: str) -> None:
        cmd = context.resolve_selection(project_dir, selected)
        if cmd is not None:
            runner(project_dir, cmd)

    handles = open_editable_picker(host, PICKER_TITLE, context.display_list(project_dir), layout, on_select)

    start_col, end_col = TITLE_HIGHLIGHT_SPAN
    try:
        host.highlight(handles.title, 0, start_col, end_col)
    except HostCallFailed as exc:
        logger.debug("title highlight failed: %s", exc)
    return handles
