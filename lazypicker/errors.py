"""Exception hierarchy for picker sessions and their hosts.

Only ``AllocationFailed`` and ``InvalidLayout`` ever reach callers of the
``open_*`` functions. ``HostCallFailed`` is raised by hosts for non-critical
calls and absorbed by the session that made them.
"""

from __future__ import annotations


class PickerError(Exception):
    """Base class for every error raised by lazypicker."""


class AllocationFailed(PickerError):
    """The host could not allocate a content buffer or open a window."""


class HostCallFailed(PickerError):
    """A non-critical host call (cursor, content read/write) failed."""


class InvalidLayout(PickerError, ValueError):
    """A layout ratio was outside the half-open interval ``(0, 1]``."""
