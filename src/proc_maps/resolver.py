"""Source resolver — turn a process id into the path of its maps file.

``/proc`` is normally mounted at the filesystem root, but containers and
test fixtures often put a procfs (or a fake one) elsewhere.  The mount
point is chosen in this order:

    1. An explicit ``mnt`` argument.
    2. ``PROC_MAPS_MOUNT`` from the given ``Environment``.
    3. ``/proc``.

A pid that isn't purely numeric is not a pid at all: it is taken to be
the path of a maps file, so ``resolve_source(pid="/tmp/maps")`` works.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from proc_maps.codec import MapsError
from proc_maps.env import MOUNT_VAR

if TYPE_CHECKING:
    from proc_maps.env import Environment

DEFAULT_MOUNT = Path("/proc")

_PID_RE = re.compile(r"[0-9]+")


def resolve_mount(mnt: str | Path | None = None, env: Environment | None = None) -> Path:
    """Return the directory where procfs is mounted.

    Args:
        mnt: Explicit mount point; wins over everything else.
        env: Configuration snapshot consulted for ``PROC_MAPS_MOUNT``.

    """
    if mnt:
        return Path(mnt)
    if env is not None:
        override = env.get(MOUNT_VAR)
        if override:
            return Path(override)
    return DEFAULT_MOUNT


def maps_path(
    pid: int | str,
    *,
    mnt: str | Path | None = None,
    env: Environment | None = None,
) -> Path:
    """Return ``<mount>/<pid>/maps``."""
    return resolve_mount(mnt, env) / str(pid) / "maps"


def resolve_source(
    *,
    file: str | Path | None = None,
    pid: int | str | None = None,
    mnt: str | Path | None = None,
    env: Environment | None = None,
) -> Path:
    """Work out which file to read from a path or a process id.

    Args:
        file: Path to a maps file.  Used as-is when given.
        pid: Process id, or a non-numeric string taken as a path.
        mnt: Explicit procfs mount point.
        env: Configuration snapshot for the mount override.

    Returns:
        The path of the maps file to open.

    Raises:
        MapsError: If neither *file* nor *pid* is given.

    """
    if file:
        return Path(file)

    if pid is not None and pid != "":
        pid_str = str(pid)
        if _PID_RE.fullmatch(pid_str):
            return maps_path(pid_str, mnt=mnt, env=env)
        return Path(pid_str)

    msg = "Filename or PID required"
    raise MapsError(msg)
