"""
Check use case — evaluate every dependency of one template.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field

from recap_check.core.config.loader import ConfigError
from recap_check.core.config.template_resolver import list_templates, resolve_dependencies
from recap_check.core.models.manifest import Manifest
from recap_check.core.services.detection import ProbeRunner
from recap_check.core.services.evaluator import DependencyReport, Verdict, evaluate_dependency
from recap_check.core.services.platform_info import (
    current_platform,
    detect_package_manager,
    docker_available,
)

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"[0-9]+")


class SelectionError(Exception):
    """Raised when a template selection is malformed or out of range."""


@dataclass
class CheckResult:
    """Outcome of checking one template."""

    template: str
    platform: str
    package_manager: str | None = None
    package_manager_available: bool = False
    docker_available: bool = False
    reports: list[DependencyReport] = field(default_factory=list)

    @property
    def counts(self) -> dict[str, int]:
        tally = Counter(r.verdict for r in self.reports)
        return {v.value: tally.get(v, 0) for v in Verdict}

    @property
    def missing_required(self) -> list[DependencyReport]:
        return [r for r in self.reports if r.verdict is Verdict.MISSING_REQUIRED]

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "template": self.template,
            "platform": self.platform,
            "package_manager": {
                "name": self.package_manager,
                "available": self.package_manager_available,
            },
            "docker_available": self.docker_available,
            "dependencies": [r.to_dict() for r in self.reports],
            "summary": {"total": len(self.reports), **self.counts},
        }


def select_template(names: list[str], selection: str) -> str:
    """Turn a user's selection into a template name.

    Accepts a 1-based number (as typed at the prompt) or an exact
    template name.

    Raises:
        SelectionError: Non-numeric unknown text or out-of-range number.
    """
    choice = (selection or "").strip()
    if choice in names:
        return choice
    if not _NUMBER.fullmatch(choice):
        raise SelectionError(f"Invalid selection: {selection!r}")

    index = int(choice)
    if not 1 <= index <= len(names):
        raise SelectionError(f"Invalid selection: {index} (choose 1-{len(names)})")
    return names[index - 1]


def run_check(
    manifest: Manifest,
    template: str,
    runner: ProbeRunner | None = None,
    platform_key: str | None = None,
) -> CheckResult:
    """Resolve a template and evaluate each dependency once, in order.

    Raises:
        ConfigError: Unknown template or broken ``extends`` chain.
    """
    dependencies = resolve_dependencies(manifest, template)
    runner = runner or ProbeRunner()
    platform_key = platform_key or current_platform()
    pm_name, pm_available = detect_package_manager(platform_key, which=runner.which)

    result = CheckResult(
        template=template,
        platform=platform_key,
        package_manager=pm_name,
        package_manager_available=pm_available,
        docker_available=docker_available(which=runner.which),
    )

    logger.info("Checking %d dependencies for template '%s'", len(dependencies), template)
    for name, spec in dependencies.items():
        result.reports.append(evaluate_dependency(
            name,
            spec,
            runner=runner,
            platform_key=platform_key,
            package_manager=pm_name,
            package_manager_available=pm_available,
        ))

    return result


def available_templates(manifest: Manifest) -> list[str]:
    """Template names in declaration order.

    Raises:
        ConfigError: The manifest declares no templates.
    """
    names = list_templates(manifest)
    if not names:
        raise ConfigError(f"No templates found in {manifest.source or 'manifest'}")
    return names
