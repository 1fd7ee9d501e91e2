"""Line codec — convert one maps line to a ``Region`` and back.

The kernel writes each region in a fixed layout::

    <start>-<end> <perms> <offset> <major>:<minor> <inode> [<pathname>]

Addresses and offset are hexadecimal, the inode is decimal, and the
pathname runs to the end of the line (it may itself contain spaces).
``parse_line`` and ``format_line`` are inverses: formatting a parsed
region reproduces the canonical line, with hex case and padding
normalized the way the kernel prints them.

A line that does not fit the layout is not an error.  ``parse_line``
returns ``None`` and lets the caller decide; the document reader simply
skips it.  Only a missing argument is treated as misuse.
"""

from __future__ import annotations

import re

from proc_maps.region import Region

# Width of the structural columns before the pathname.  The kernel pads
# to 73 columns on 64-bit; we pad to 72 and add one separating space.
_STRUCT_WIDTH = 72

_HEX = "[0-9A-Fa-f]+"

_LINE_RE = re.compile(
    rf"""
    \s*
    (?P<start>{_HEX})-(?P<end>{_HEX})
    \s+ (?P<read>[r-])(?P<write>[w-])(?P<execute>[x-])(?P<shared>[sp])
    \s+ (?P<offset>{_HEX})
    \s+ (?P<device>{_HEX}:{_HEX})
    \s+ (?P<inode>[0-9]+)
    (?:\s+ (?P<pathname>.*))?
    """,
    re.VERBOSE,
)


class MapsError(Exception):
    """Raise when a maps operation is called without its required input."""


def parse_line(line: str | None) -> Region | None:
    """Parse a single line from a maps file into a region.

    For example::

        08048000-08056000 r-xp 00000000 03:0c 64593   /usr/sbin/gpm

    becomes ``Region(address_start=0x8048000, address_end=0x8056000,
    read=True, write=False, execute=True, shared=False, offset=0,
    device="03:0c", inode="64593", pathname="/usr/sbin/gpm")``.

    Args:
        line: One line of a maps file, with or without its newline.

    Returns:
        The parsed region, or ``None`` if the line does not match the
        maps layout (an empty line never matches).

    Raises:
        MapsError: If *line* is ``None``.

    """
    if line is None:
        msg = "Line required"
        raise MapsError(msg)

    match = _LINE_RE.fullmatch(line.rstrip("\n"))
    if match is None:
        return None

    return Region(
        address_start=int(match["start"], 16),
        address_end=int(match["end"], 16),
        read=match["read"] == "r",
        write=match["write"] == "w",
        execute=match["execute"] == "x",
        shared=match["shared"] == "s",
        offset=int(match["offset"], 16),
        device=match["device"],
        inode=match["inode"],
        pathname=match["pathname"] or "",
    )


def format_line(region: Region | None) -> str:
    """Return a single newline-terminated maps line for *region*.

    This is the opposite of ``parse_line``.  Addresses are lowercase hex
    without padding, the offset is padded to eight digits, and the
    structural columns are left-justified to a fixed width so pathnames
    line up, just as the kernel lays them out.

    Raises:
        MapsError: If *region* is ``None``.

    """
    if region is None:
        msg = "Region required"
        raise MapsError(msg)

    head = (
        f"{region.address_start:x}-{region.address_end:x} {region.perms} "
        f"{region.offset:08x} {region.device} {region.inode}"
    )
    return f"{head:<{_STRUCT_WIDTH}} {region.pathname}\n"
