"""Event log for maps file reads and writes.

``read_maps`` and ``write_maps`` record what they touched into a
``Logger`` the caller passes in: each file opened (DEBUG), each
successful read or write with its size (INFO), and each open that
failed (ERROR).  Nothing is printed; the web API serves the entries at
``/api/log``.

Lines skipped by the parser never reach the log.  A maps file has no
reliable way to tell a corrupt line from one we simply don't understand.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity of a file event, ordered so ``min_level`` filtering is a comparison."""

    DEBUG = 0
    INFO = 1
    ERROR = 2


@dataclass(frozen=True)
class LogEntry:
    """One recorded file event.

    Attributes:
        level: The severity of this event.
        message: What happened, e.g. ``read 12 regions``.
        source: The operation that recorded it (``read_maps``/``write_maps``).
        path: The file concerned; ``None`` for writes to a caller's handle.

    """

    level: LogLevel
    message: str
    source: str
    path: str | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``, with the path when known."""
        text = f"[{self.level.name}] {self.source}: {self.message}"
        return f"{text} ({self.path})" if self.path is not None else text


class Logger:
    """Append-only buffer of file events for one caller."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return a copy of all entries, oldest first."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        path: str | None = None,
    ) -> None:
        """Record an event for *source*, optionally naming the file *path*."""
        self._entries.append(LogEntry(level=level, message=message, source=source, path=path))

    def filter(
        self,
        *,
        min_level: LogLevel = LogLevel.DEBUG,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries at or above *min_level*, optionally from one *source*."""
        return [
            e
            for e in self._entries
            if e.level >= min_level and (source is None or e.source == source)
        ]
