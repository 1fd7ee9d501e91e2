"""Memory regions — one mapped range of a process's virtual address space.

Every line of ``/proc/[pid]/maps`` describes a single contiguous range of
virtual addresses and what backs it::

    address           perms offset  dev   inode   pathname
    08048000-08056000 r-xp 00000000 03:0c 64593   /usr/sbin/gpm

A ``Region`` is the structured form of one such line.  The device and
inode are identifiers the kernel hands out; we carry them as text and
never do arithmetic on them.  The pathname is opaque too: ``[heap]``,
``[stack]`` and ``/lib/libc.so.6 (deleted)`` are all just strings.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Region:
    """Describe one mapped region of a process's address space.

    Frozen so a parsed region behaves as a plain value: two regions with
    the same fields compare equal and can be shared freely.
    """

    address_start: int
    """Inclusive start virtual address."""

    address_end: int
    """Exclusive end virtual address (not checked against the start)."""

    read: bool
    """True when the region is readable (``r``)."""

    write: bool
    """True when the region is writable (``w``)."""

    execute: bool
    """True when the region is executable (``x``)."""

    shared: bool
    """True for a shared mapping (``s``), False for private (``p``)."""

    offset: int
    """Byte offset into the backing object."""

    device: str
    """Backing device as ``major:minor`` in hex, e.g. ``03:0c``."""

    inode: str
    """Backing inode number as decimal digits, ``0`` when anonymous."""

    pathname: str = ""
    """Backing file or pseudo-name; empty for anonymous mappings."""

    @property
    def private(self) -> bool:
        """Return True for a private (copy-on-write) mapping."""
        return not self.shared

    @property
    def perms(self) -> str:
        """Return the four-character permission block, e.g. ``r-xp``."""
        return (
            ("r" if self.read else "-")
            + ("w" if self.write else "-")
            + ("x" if self.execute else "-")
            + ("s" if self.shared else "p")
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Region:
        """Reconstruct a region from a dict produced by ``to_dict``.

        Values must already have the right JSON type: no string is read
        as a flag or a number.

        Raises:
            KeyError: If a required field is missing.
            TypeError: If a field has the wrong type.

        """
        pathname = data.get("pathname")
        return cls(
            address_start=_int_field(data, "address_start"),
            address_end=_int_field(data, "address_end"),
            read=_bool_field(data, "read"),
            write=_bool_field(data, "write"),
            execute=_bool_field(data, "execute"),
            shared=_bool_field(data, "shared"),
            offset=_int_field(data, "offset"),
            device=_str_field(data, "device"),
            inode=_str_field(data, "inode"),
            pathname="" if pathname is None else _str_field(data, "pathname"),
        )


def _int_field(data: dict[str, Any], name: str) -> int:
    """Return a non-negative integer field, rejecting bools."""
    value = data[name]
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        msg = f"{name} must be a non-negative integer, got {value!r}"
        raise TypeError(msg)
    return value


def _bool_field(data: dict[str, Any], name: str) -> bool:
    """Return a boolean field."""
    value = data[name]
    if not isinstance(value, bool):
        msg = f"{name} must be a boolean, got {value!r}"
        raise TypeError(msg)
    return value


def _str_field(data: dict[str, Any], name: str) -> str:
    """Return a string field."""
    value = data[name]
    if not isinstance(value, str):
        msg = f"{name} must be a string, got {value!r}"
        raise TypeError(msg)
    return value
