"""
Detection result — what a strategy found for one dependency.
"""

from __future__ import annotations

from dataclasses import dataclass

# discovered_via values
VIA_PATH = "path"
VIA_REGISTRY = "registry"

# Version reported when a binary is present but its output did not parse
UNKNOWN_VERSION = "unknown"


@dataclass
class DetectionResult:
    """Presence and version of one dependency, computed fresh per run."""

    installed: bool
    version: str = ""
    discovered_via: str | None = None
    install_path: str | None = None

    @classmethod
    def not_found(cls) -> DetectionResult:
        return cls(installed=False)
