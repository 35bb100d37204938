"""
Host platform facts — which install hints apply, and whether the
platform's package manager and Docker are available.
"""

from __future__ import annotations

import platform
import shutil
from collections.abc import Callable

# Preferred package managers per platform, most preferred first.
# Names double as the install_hint keys in the manifest.
PACKAGE_MANAGERS: dict[str, tuple[str, ...]] = {
    "macos": ("brew",),
    "windows": ("winget",),
    "linux": ("apt", "dnf", "pacman"),
}

# Binary to look for when it differs from the hint key
_PM_BINARIES = {"apt": "apt-get"}

PLATFORMS = tuple(PACKAGE_MANAGERS)


def current_platform() -> str:
    """Return ``macos``, ``windows`` or ``linux``."""
    system = platform.system().lower()
    if system == "darwin":
        return "macos"
    if system == "windows":
        return "windows"
    return "linux"


def detect_package_manager(
    platform_key: str,
    which: Callable[[str], str | None] = shutil.which,
) -> tuple[str | None, bool]:
    """Find the package manager to recommend on a platform.

    Returns:
        ``(name, available)``. When none is installed the preferred
        one is returned with ``available=False`` so callers can
        suggest installing it.
    """
    candidates = PACKAGE_MANAGERS.get(platform_key, ())
    for name in candidates:
        if which(_PM_BINARIES.get(name, name)):
            return name, True
    return (candidates[0] if candidates else None), False


def docker_available(which: Callable[[str], str | None] = shutil.which) -> bool:
    return which("docker") is not None
