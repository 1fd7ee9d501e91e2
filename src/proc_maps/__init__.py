"""Read and write ``/proc/[pid]/maps`` files.

Re-exports public symbols so callers can write::

    from proc_maps import read_maps, parse_line, Region
"""

from proc_maps.codec import MapsError, format_line, parse_line
from proc_maps.document import read_regions, write_regions
from proc_maps.env import MOUNT_VAR, Environment
from proc_maps.files import ENCODING, ERRORS, MapsOpenError, read_maps, write_maps
from proc_maps.logging import LogEntry, Logger, LogLevel
from proc_maps.region import Region
from proc_maps.resolver import DEFAULT_MOUNT, maps_path, resolve_mount, resolve_source

__all__ = [
    "DEFAULT_MOUNT",
    "ENCODING",
    "ERRORS",
    "MOUNT_VAR",
    "Environment",
    "LogEntry",
    "LogLevel",
    "Logger",
    "MapsError",
    "MapsOpenError",
    "Region",
    "format_line",
    "maps_path",
    "parse_line",
    "read_maps",
    "read_regions",
    "resolve_mount",
    "resolve_source",
    "write_maps",
    "write_regions",
]
