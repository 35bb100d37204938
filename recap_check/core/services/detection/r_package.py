"""
L3 Detection — R packages.

Asks ``Rscript`` for ``packageVersion()``. A missing package raises
inside R; the expression catches it and prints nothing, which we read
as "not installed".
"""

from __future__ import annotations

import logging
import re

from recap_check.core.services.detection.result import VIA_REGISTRY, DetectionResult
from recap_check.core.services.detection.runner import ProbeRunner

logger = logging.getLogger(__name__)

R_SCRIPT = "Rscript"

# Letters, digits and dots; starts with a letter, does not end with a dot
_R_PACKAGE_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9.]*[A-Za-z0-9]$")


def package_version_expr(package: str) -> str:
    return (
        f"tryCatch(cat(as.character(packageVersion('{package}'))), "
        "error = function(e) cat(''))"
    )


def detect_r_package(
    package: str,
    registry_name: str | None = None,
    runner: ProbeRunner | None = None,
) -> DetectionResult:
    """Detect an installed R package and its version."""
    runner = runner or ProbeRunner()

    if not package or not _R_PACKAGE_NAME.match(package):
        logger.warning("Invalid R package name %r; treating as not installed", package)
        return DetectionResult.not_found()

    location = runner.locate(R_SCRIPT, registry_name)
    if location is None:
        logger.debug("Rscript not found; cannot check package %s", package)
        return DetectionResult.not_found()

    from_registry = location.via == VIA_REGISTRY
    probe = runner.run([location.path, "-e", package_version_expr(package)])
    if probe is None:
        return DetectionResult.not_found()

    lines = [ln.strip() for ln in probe.stdout.splitlines() if ln.strip()]
    if not lines:
        return DetectionResult.not_found()

    return DetectionResult(
        installed=True,
        version=lines[-1],
        discovered_via=location.via,
        install_path=location.path if from_registry else None,
    )
