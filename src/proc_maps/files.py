"""Read and write maps files on disk.

These are the thin I/O wrappers around the document codec::

    regions = read_maps(1234)                       # /proc/1234/maps
    regions = read_maps(1234, mnt="/host/proc")     # explicit mount
    regions = read_maps(file="/tmp/saved.maps")     # any file

    text = write_maps(regions)                      # just the text
    write_maps(regions, file="/tmp/copy.maps")      # ... also to a file
    write_maps(regions, fh=sys.stdout)              # ... or a handle

Files are opened as UTF-8 text.  Pathnames are arbitrary bytes to the
kernel, so undecodable bytes are carried as surrogate escapes and written
back unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from proc_maps.codec import MapsError
from proc_maps.document import read_regions, write_regions
from proc_maps.logging import LogLevel
from proc_maps.resolver import resolve_source

if TYPE_CHECKING:
    from collections.abc import Iterable

    from proc_maps.env import Environment
    from proc_maps.logging import Logger
    from proc_maps.region import Region

ENCODING = "utf-8"
ERRORS = "surrogateescape"


class MapsOpenError(MapsError):
    """Raise when a maps file cannot be opened."""

    def __init__(self, path: Path, reason: str) -> None:
        """Record the path that failed and why."""
        super().__init__(f"Open failed ({path}): {reason}")
        self.path = path


def _open(path: Path, mode: str, *, source: str, logger: Logger | None) -> TextIO:
    """Open *path* as text, turning ``OSError`` into ``MapsOpenError``."""
    try:
        fh = path.open(mode, encoding=ENCODING, errors=ERRORS)
    except OSError as exc:
        reason = exc.strerror or str(exc)
        if logger is not None:
            logger.log(LogLevel.ERROR, f"open failed: {reason}", source=source, path=str(path))
        raise MapsOpenError(path, reason) from exc
    if logger is not None:
        logger.log(LogLevel.DEBUG, f"opened with mode {mode!r}", source=source, path=str(path))
    return fh


def read_maps(
    pid: int | str | None = None,
    *,
    file: str | Path | None = None,
    mnt: str | Path | None = None,
    env: Environment | None = None,
    logger: Logger | None = None,
) -> list[Region]:
    """Read and parse a maps file.

    Args:
        pid: Process id (or a non-numeric string taken as a path).
        file: Path to a maps file; one of *file* or *pid* is required.
        mnt: Where procfs is mounted (default ``/proc``).
        env: Configuration snapshot consulted for ``PROC_MAPS_MOUNT``.
        logger: Optional event log.

    Returns:
        The regions in file order.

    Raises:
        MapsError: If neither *file* nor *pid* is given.
        MapsOpenError: If the file cannot be opened.

    """
    path = resolve_source(file=file, pid=pid, mnt=mnt, env=env)

    with _open(path, "r", source="read_maps", logger=logger) as fh:
        regions = read_regions(fh)

    if logger is not None:
        logger.log(
            LogLevel.INFO,
            f"read {len(regions)} regions",
            source="read_maps",
            path=str(path),
        )
    return regions


def write_maps(
    regions: Iterable[Region] | None,
    *,
    fh: TextIO | None = None,
    file: str | Path | None = None,
    logger: Logger | None = None,
) -> str:
    """Return the contents of a maps file for *regions*, optionally writing it.

    This is the opposite of ``read_maps``.

    Args:
        regions: The regions to write, in order.
        fh: Write the text to this open handle.
        file: Open this path and write the text there too.
        logger: Optional event log.

    Returns:
        The full document text.

    Raises:
        MapsError: If *regions* is missing.
        MapsOpenError: If *file* cannot be opened.

    """
    out = write_regions(regions)

    if fh is not None:
        fh.write(out)
        if logger is not None:
            logger.log(LogLevel.INFO, f"wrote {len(out)} characters", source="write_maps")
    if file:
        path = Path(file)
        with _open(path, "w", source="write_maps", logger=logger) as target:
            target.write(out)
        if logger is not None:
            logger.log(
                LogLevel.INFO,
                f"wrote {len(out)} characters",
                source="write_maps",
                path=str(path),
            )

    return out
