"""
Dependency evaluator — one dependency spec in, one verdict out.

Dispatches the spec's check to its detection strategy, then applies
the required / minimum-version policy. Rendering is the caller's job.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from recap_check.core.domain.version_compare import version_gte
from recap_check.core.models.dependency import (
    CliCheck,
    DependencySpec,
    RPackageCheck,
    TexCheck,
)
from recap_check.core.services.detection import (
    DetectionResult,
    ProbeRunner,
    detect_cli,
    detect_r_package,
    detect_tex,
)

logger = logging.getLogger(__name__)


class Verdict(str, enum.Enum):
    MISSING_REQUIRED = "missing_required"
    MISSING_RECOMMENDED = "missing_recommended"
    VERSION_OK = "version_ok"
    VERSION_BELOW_MINIMUM = "version_below_minimum"
    NO_VERSION_GATE = "no_version_gate"

    @property
    def installed(self) -> bool:
        return self not in (Verdict.MISSING_REQUIRED, Verdict.MISSING_RECOMMENDED)


@dataclass
class DependencyReport:
    """Everything a renderer needs about one evaluated dependency."""

    name: str
    required: bool
    verdict: Verdict
    version: str = ""
    min_version: str | None = None
    message: str = ""
    install_hint: str | None = None
    discovered_via: str | None = None
    install_path: str | None = None

    @property
    def installed(self) -> bool:
        return self.verdict.installed

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "name": self.name,
            "required": self.required,
            "verdict": self.verdict.value,
            "installed": self.installed,
            "version": self.version,
            "min_version": self.min_version,
            "message": self.message,
            "install_hint": self.install_hint,
            "discovered_via": self.discovered_via,
            "install_path": self.install_path,
        }


def detect_dependency(
    spec: DependencySpec, runner: ProbeRunner | None = None,
) -> DetectionResult:
    """Run the detection strategy matching ``spec.check``."""
    check = spec.check
    if isinstance(check, CliCheck):
        return detect_cli(check.command, check.registry_name, runner=runner)
    if isinstance(check, TexCheck):
        return detect_tex(runner=runner)
    if isinstance(check, RPackageCheck):
        return detect_r_package(check.package, check.registry_name, runner=runner)

    logger.warning("Unsupported check type %r; treating as not installed", check.type)
    return DetectionResult.not_found()


def classify(spec: DependencySpec, result: DetectionResult) -> Verdict:
    """Apply requirement and minimum-version policy (pure)."""
    if not result.installed:
        return Verdict.MISSING_REQUIRED if spec.required else Verdict.MISSING_RECOMMENDED
    if not spec.min_version:
        return Verdict.NO_VERSION_GATE
    if version_gte(result.version, spec.min_version):
        return Verdict.VERSION_OK
    return Verdict.VERSION_BELOW_MINIMUM


def evaluate_dependency(
    name: str,
    spec: DependencySpec,
    runner: ProbeRunner | None = None,
    platform_key: str = "linux",
    package_manager: str | None = None,
    package_manager_available: bool = False,
) -> DependencyReport:
    """Detect and classify one dependency.

    A fault inside detection is logged and counted as "not installed";
    it never reaches the caller.
    """
    try:
        result = detect_dependency(spec, runner)
    except Exception:
        logger.exception("Detection of %s failed", name)
        result = DetectionResult.not_found()

    verdict = classify(spec, result)
    logger.debug("%s: %s (version=%r)", name, verdict.value, result.version)

    return DependencyReport(
        name=name,
        required=spec.required,
        verdict=verdict,
        version=result.version,
        min_version=spec.min_version,
        message=spec.message,
        install_hint=spec.hint_for(platform_key, package_manager, package_manager_available),
        discovered_via=result.discovered_via,
        install_path=result.install_path,
    )
