"""
L3 Detection — Windows application registry fallback.

When a tool is installed but not on PATH (R for Windows does this by
default), the "Uninstall" registry keys still list it. We fuzzy-match
the display name and derive an executable from its install location.

Read-only. Only consulted after PATH lookup failed.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

UNINSTALL_SUBKEY = r"SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall"

UNINSTALL_KEYS: list[tuple[str, str]] = [
    ("HKEY_LOCAL_MACHINE", UNINSTALL_SUBKEY),
    ("HKEY_LOCAL_MACHINE", r"SOFTWARE\WOW6432Node\Microsoft\Windows\CurrentVersion\Uninstall"),
    ("HKEY_CURRENT_USER", UNINSTALL_SUBKEY),
]

# The R runtime is driven through its script host, not R.exe
REGISTRY_EXECUTABLES: dict[str, str] = {
    "R": "Rscript.exe",
    "Rscript": "Rscript.exe",
}

# Display-name hint used when a manifest entry gives none
DEFAULT_REGISTRY_NAMES: dict[str, str] = {
    "R": "R for Windows",
    "Rscript": "R for Windows",
}


@dataclass
class RegistryEntry:
    """One installed-application record."""

    display_name: str
    install_location: str = ""


def registry_available() -> bool:
    return sys.platform == "win32"


def iter_uninstall_entries() -> Iterator[RegistryEntry]:
    """Yield every application listed under the Uninstall keys."""
    import winreg

    for hive_name, subkey in UNINSTALL_KEYS:
        hive = getattr(winreg, hive_name)
        try:
            root = winreg.OpenKey(hive, subkey)
        except OSError:
            logger.debug("Registry key not present: %s\\%s", hive_name, subkey)
            continue

        with root:
            index = 0
            while True:
                try:
                    child_name = winreg.EnumKey(root, index)
                except OSError:
                    break  # no more subkeys
                index += 1

                try:
                    with winreg.OpenKey(root, child_name) as child:
                        display_name = _query_str(winreg, child, "DisplayName")
                        location = _query_str(winreg, child, "InstallLocation")
                except OSError:
                    continue

                if display_name:
                    yield RegistryEntry(display_name=display_name, install_location=location)


def _query_str(winreg, key, value_name: str) -> str:
    try:
        value, _ = winreg.QueryValueEx(key, value_name)
    except OSError:
        return ""
    return str(value) if value else ""


def find_registry_entry(
    hint: str, entries: Iterable[RegistryEntry],
) -> RegistryEntry | None:
    """First entry whose display name contains ``hint`` (case-insensitive)."""
    needle = hint.casefold()
    for entry in entries:
        if needle in entry.display_name.casefold():
            return entry
    return None


def executable_candidates(install_location: str, command: str) -> list[Path]:
    """Candidate binaries under an install location, most likely first."""
    exe = REGISTRY_EXECUTABLES.get(command, f"{command}.exe")
    root = Path(install_location.strip().strip('"'))
    return [root / "bin" / exe, root / exe]


def locate_via_registry(
    command: str,
    hint: str | None,
    entries: Iterable[RegistryEntry] | None = None,
) -> str | None:
    """Find ``command`` through the application registry.

    Args:
        command: Tool identifier (selects the executable name).
        hint: Fuzzy display-name substring, e.g. ``"R for Windows"``.
        entries: Registry records to search. Defaults to the live
            Windows registry; tests pass canned records.

    Returns:
        Path to an existing executable, or None.
    """
    if not hint:
        return None

    if entries is None:
        if not registry_available():
            return None
        entries = iter_uninstall_entries()

    entry = find_registry_entry(hint, entries)
    if entry is None:
        logger.debug("No registry entry matches '%s'", hint)
        return None

    if not entry.install_location:
        logger.info("Registry entry '%s' has no InstallLocation", entry.display_name)
        return None

    for candidate in executable_candidates(entry.install_location, command):
        if candidate.is_file():
            logger.info("Found %s via registry at %s", command, candidate)
            return str(candidate)

    logger.info(
        "Registry entry '%s' matched but no %s executable under %s",
        entry.display_name, command, entry.install_location,
    )
    return None
