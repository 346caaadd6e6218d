"""Surface hosts: the in-memory host and the raw-terminal host."""

from .base import BaseHost, HostSurface, SurfaceHandle, SurfaceHost
from .memory import MemoryHost
from .terminal import TerminalHost

__all__ = [
    "BaseHost",
    "HostSurface",
    "MemoryHost",
    "SurfaceHandle",
    "SurfaceHost",
    "TerminalHost",
]
