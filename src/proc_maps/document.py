"""Document codec — apply the line codec across a whole maps file.

A maps document is just the ordered list of its region lines.  Reading
keeps every line that parses and drops the rest (blank lines included)
without comment; writing concatenates the formatted lines in order.
Neither direction checks anything across regions: overlapping or
out-of-order ranges pass through untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from proc_maps.codec import MapsError, format_line, parse_line

if TYPE_CHECKING:
    from collections.abc import Iterable

    from proc_maps.region import Region


def read_regions(lines: Iterable[str] | None) -> list[Region]:
    """Parse maps lines into regions, preserving their order.

    Args:
        lines: Any iterable of text lines, e.g. an open file.

    Returns:
        One region per matching line.  Lines that don't match are skipped.

    Raises:
        MapsError: If *lines* is ``None``.

    """
    if lines is None:
        msg = "Lines required"
        raise MapsError(msg)

    regions: list[Region] = []
    for line in lines:
        region = parse_line(line)
        if region is None:
            continue
        regions.append(region)
    return regions


def write_regions(regions: Iterable[Region] | None) -> str:
    """Return the text of a maps document containing *regions*.

    This is the opposite of ``read_regions``.

    Raises:
        MapsError: If *regions* is ``None`` or a string, or contains ``None``.

    """
    if regions is None:
        msg = "Regions required"
        raise MapsError(msg)
    if isinstance(regions, str):
        msg = "Regions must be a sequence of Region"
        raise MapsError(msg)

    return "".join(format_line(region) for region in regions)
