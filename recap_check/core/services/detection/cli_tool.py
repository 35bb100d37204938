"""
L3 Detection — Command-line tools.

PATH lookup (registry fallback on Windows), then the tool's version
invocation. Presence is decided by the lookup alone: a binary that
is found but prints nothing parseable is still installed, with
version ``"unknown"``.
"""

from __future__ import annotations

import logging

from recap_check.core.services.detection.result import (
    UNKNOWN_VERSION,
    VIA_REGISTRY,
    DetectionResult,
)
from recap_check.core.services.detection.runner import Location, ProbeRunner
from recap_check.core.services.detection.version_text import extract_version, version_command

logger = logging.getLogger(__name__)


def detect_cli(
    command: str,
    registry_name: str | None = None,
    runner: ProbeRunner | None = None,
) -> DetectionResult:
    """Detect a command-line tool and its version."""
    runner = runner or ProbeRunner()
    if not command:
        logger.warning("cli check without a command; treating as not installed")
        return DetectionResult.not_found()

    location = runner.locate(command, registry_name)
    if location is None:
        return DetectionResult.not_found()

    from_registry = location.via == VIA_REGISTRY
    probe = runner.run(version_command(command, _probe_executable(command, location, runner)))

    version = extract_version(command, probe.output) if probe else None
    if version is None:
        logger.info("%s found at %s but its version did not parse", command, location.path)

    return DetectionResult(
        installed=True,
        version=version or UNKNOWN_VERSION,
        discovered_via=location.via,
        install_path=location.path if from_registry else None,
    )


def _probe_executable(command: str, location: Location, runner: ProbeRunner) -> str:
    """Path of the binary that answers the version query.

    Usually the located command itself, so ``.cmd``/``.bat`` shims found
    through PATHEXT run too. Tools queried through a helper (R through
    Rscript) resolve the helper on PATH; a registry hit already points
    at the helper.
    """
    helper = version_command(command)[0]
    if location.via == VIA_REGISTRY or helper == command:
        return location.path
    return runner.which(helper) or helper
