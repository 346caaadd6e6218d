"""Input-layer public API: terminal key decoding and per-surface keymaps."""

from .keymap import KeyCallback, SurfaceKeymap
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyCallback",
    "SurfaceKeymap",
]
