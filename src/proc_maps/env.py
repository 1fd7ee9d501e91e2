"""Configuration snapshot — settings passed in, not looked up.

The only setting this library honours is where procfs is mounted
(``PROC_MAPS_MOUNT``).  Rather than reading ``os.environ`` deep inside the
resolver, callers take a snapshot once with ``Environment.from_os()`` and
hand it down.  Tests build an ``Environment`` from a plain dict and never
touch the real process environment.
"""

from __future__ import annotations

import os

MOUNT_VAR = "PROC_MAPS_MOUNT"
"""Environment variable naming the procfs mount point."""


class Environment:
    """A read-only copy of configuration variables.

    The dict given at construction is copied, so later changes to it (or
    to ``os.environ``) don't leak into an existing snapshot.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Snapshot *initial*, or start empty."""
        self._vars: dict[str, str] = dict(initial) if initial else {}

    @classmethod
    def from_os(cls) -> Environment:
        """Return a snapshot of the current process environment."""
        return cls(initial=dict(os.environ))

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for *key*, or *default* if not set."""
        return self._vars.get(key, default)
