"""Persistent JSON config helpers.

Stores layout defaults and per-project command lists.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .errors import InvalidLayout
from .layout import BorderStyle, LayoutConfig

logger = logging.getLogger(__name__)

APP_NAME = "lazypicker"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never breaks an interactive session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _coerce_ratio(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not 0.0 < value <= 1.0:
        return None
    return float(value)


def load_layout_defaults(base: LayoutConfig | None = None) -> LayoutConfig:
    """Overlay the ``layout`` config section on ``base``.

    Unknown border names, out-of-range ratios and non-boolean flags are
    ignored field by field.
    """
    layout = base if base is not None else LayoutConfig(auto_width=True, auto_height=True)
    raw = load_config().get("layout")
    if not isinstance(raw, dict):
        return layout

    border = layout.border
    raw_border = raw.get("border")
    if isinstance(raw_border, str):
        try:
            candidate = BorderStyle(raw_border.strip().lower())
        except ValueError:
            candidate = border
        if candidate is not BorderStyle.CUSTOM:
            border = candidate

    width_ratio = _coerce_ratio(raw.get("width_ratio")) if "width_ratio" in raw else layout.width_ratio
    height_ratio = _coerce_ratio(raw.get("height_ratio")) if "height_ratio" in raw else layout.height_ratio
    auto_width = raw.get("auto_width")
    auto_height = raw.get("auto_height")
    result = LayoutConfig(
        border=border,
        width_ratio=width_ratio,
        height_ratio=height_ratio,
        auto_width=auto_width if isinstance(auto_width, bool) else layout.auto_width,
        auto_height=auto_height if isinstance(auto_height, bool) else layout.auto_height,
        glyphs=layout.glyphs,
    )
    try:
        result.validate()
    except InvalidLayout:
        return layout
    return result


def load_project_commands(project_dir: str) -> tuple[list[str], int | None] | None:
    """Return ``(commands, default_index)`` persisted for ``project_dir``.

    ``None`` means nothing usable is stored. Non-string commands are dropped
    and a default index outside the list is discarded.
    """
    section = load_config().get("project_commands")
    if not isinstance(section, dict):
        return None
    entry = section.get(project_dir)
    if not isinstance(entry, dict):
        return None
    raw_commands = entry.get("commands")
    if not isinstance(raw_commands, list):
        return None
    commands = [cmd for cmd in raw_commands if isinstance(cmd, str) and cmd]
    default_index = entry.get("default_index")
    if isinstance(default_index, bool) or not isinstance(default_index, int):
        default_index = None
    elif not 0 <= default_index < len(commands):
        default_index = None
    return commands, default_index


def save_project_commands(project_dir: str, commands: list[str], default_index: int | None) -> None:
    """Persist the command list and default index for ``project_dir``."""
    config = load_config()
    section = config.get("project_commands")
    if not isinstance(section, dict):
        section = {}
    section[project_dir] = {
        "commands": [cmd for cmd in commands if cmd],
        "default_index": default_index,
    }
    config["project_commands"] = section
    save_config(config)
