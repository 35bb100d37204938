"""
L1 Domain — Version comparison (pure).

Compares dotted-numeric version strings of unequal length.
No I/O, no subprocess.
"""

from __future__ import annotations

import enum
import re

_NUMERIC_RUN = re.compile(r"\d+(?:\.\d+)*")


class Ordering(enum.IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def parse_version(version: str | None) -> tuple[int, ...] | None:
    """Extract the numeric components of a version string.

    The first dotted-numeric run is used, so decorated strings parse:
    ``"v1.2"`` → ``(1, 2)``, ``"4.83a"`` → ``(4, 83)``,
    ``"TinyTeX 2024"`` → ``(2024,)``.

    Returns:
        Tuple of ints, or None when the string has no digits at all
        (e.g. ``"unknown"``).
    """
    if not version:
        return None
    match = _NUMERIC_RUN.search(version)
    if not match:
        return None
    return tuple(int(part) for part in match.group(0).split("."))


def compare_versions(a: str | None, b: str | None) -> Ordering:
    """Compare two version strings.

    Missing trailing fields count as zero, so ``"1.2"`` equals
    ``"1.2.0"``. A malformed version (no digits) sorts below every
    well-formed one; two malformed versions compare equal.
    """
    pa = parse_version(a)
    pb = parse_version(b)

    if pa is None or pb is None:
        if pa is None and pb is None:
            return Ordering.EQUAL
        return Ordering.LESS if pa is None else Ordering.GREATER

    width = max(len(pa), len(pb))
    pa = pa + (0,) * (width - len(pa))
    pb = pb + (0,) * (width - len(pb))

    if pa < pb:
        return Ordering.LESS
    if pa > pb:
        return Ordering.GREATER
    return Ordering.EQUAL


def version_gte(a: str | None, b: str | None) -> bool:
    """True when ``a`` is equal to or newer than ``b``."""
    return compare_versions(a, b) >= Ordering.EQUAL
