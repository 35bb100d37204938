"""
L3 Detection — LaTeX toolchain.

Strategy:
    1. latexmk on PATH (same probe as a ``cli`` check)
    2. otherwise parse the "Checking LaTeX" section of ``quarto check``
"""

from __future__ import annotations

import logging
import re

from recap_check.core.services.detection.cli_tool import detect_cli
from recap_check.core.services.detection.result import DetectionResult
from recap_check.core.services.detection.runner import ProbeRunner

logger = logging.getLogger(__name__)

LATEX_BUILD_TOOL = "latexmk"
DIAGNOSTICS_TOOL = "quarto"
QUARTO_FALLBACK_VERSION = "detected via quarto"

_NOT_DETECTED = re.compile(r"TeX:\s*\(not detected\)", re.IGNORECASE)
_SECTION_START = re.compile(r"Checking LaTeX", re.IGNORECASE)
_SECTION_END = re.compile(r"^\[[^\]]+\]\s+Checking ")
_USING = re.compile(r"Using:\s*(.*)", re.IGNORECASE)
_VERSION = re.compile(r"Version:\s*(.*)", re.IGNORECASE)


def parse_quarto_check(text: str) -> str | None:
    """Extract a TeX description from a ``quarto check`` transcript.

    Returns:
        ``"<using> <version>"``, either part alone, the fallback
        ``"detected via quarto"``, or None when TeX is not detected.
    """
    if not text or not text.strip():
        return None
    if _NOT_DETECTED.search(text):
        return None

    in_section = False
    section_seen = False
    section: list[str] = []
    for line in text.splitlines():
        if not in_section:
            if _SECTION_START.search(line):
                in_section = section_seen = True
            continue
        if _SECTION_END.match(line):
            break
        section.append(line)

    using = _first_field(_USING, section)
    version = _first_field(_VERSION, section)

    if using and version:
        return f"{using} {version}"
    if using or version:
        return using or version
    if section_seen or _USING.search(text):
        return QUARTO_FALLBACK_VERSION
    return None


def _first_field(pattern: re.Pattern[str], lines: list[str]) -> str:
    for line in lines:
        match = pattern.search(line)
        if match:
            return match.group(1).strip()
    return ""


def detect_tex(runner: ProbeRunner | None = None) -> DetectionResult:
    """Detect a usable LaTeX installation."""
    runner = runner or ProbeRunner()

    result = detect_cli(LATEX_BUILD_TOOL, runner=runner)
    if result.installed:
        return result

    location = runner.locate(DIAGNOSTICS_TOOL)
    if location is None:
        return DetectionResult.not_found()

    probe = runner.run([location.path, "check"])
    if probe is None:
        return DetectionResult.not_found()
    if probe.returncode != 0:
        logger.debug("quarto check exited %d; parsing output anyway", probe.returncode)

    version = parse_quarto_check(probe.output)
    if version is None:
        return DetectionResult.not_found()

    return DetectionResult(installed=True, version=version, discovered_via=location.via)
