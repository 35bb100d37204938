"""
L3 Detection — Probe runner.

The single seam between detection strategies and the host: PATH
lookup, registry fallback, and subprocess calls with a bounded
timeout. Faults come back as ``None``, never as exceptions, so a
hanging or broken tool cannot stall or crash the run.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass

from recap_check.core.services.detection.registry import (
    DEFAULT_REGISTRY_NAMES,
    RegistryEntry,
    locate_via_registry,
    registry_available,
)
from recap_check.core.services.detection.result import VIA_PATH, VIA_REGISTRY

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


@dataclass
class ProbeOutput:
    """Captured output of one external invocation."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def output(self) -> str:
        # Tools disagree on which stream carries the version
        return (self.stdout or "") + (self.stderr or "")


@dataclass
class Location:
    """Where an executable was found."""

    path: str
    via: str = VIA_PATH


def _timeout_from_env() -> float:
    raw = os.environ.get("RECAP_PROBE_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid RECAP_PROBE_TIMEOUT=%r", raw)
        return DEFAULT_TIMEOUT
    return value if value > 0 else DEFAULT_TIMEOUT


class ProbeRunner:
    """Runs read-only probes against the host.

    Args:
        timeout: Seconds per external invocation (default:
            ``RECAP_PROBE_TIMEOUT`` env var, else 10).
        use_registry: Allow the Windows registry fallback. Defaults to
            True on Windows only.
        registry_entries: Canned registry records instead of the live
            registry.
    """

    def __init__(
        self,
        timeout: float | None = None,
        use_registry: bool | None = None,
        registry_entries: Iterable[RegistryEntry] | None = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else _timeout_from_env()
        self.use_registry = registry_available() if use_registry is None else use_registry
        self.registry_entries = list(registry_entries) if registry_entries is not None else None

    def which(self, command: str) -> str | None:
        return shutil.which(command)

    def locate(self, command: str, registry_name: str | None = None) -> Location | None:
        """Find an executable on PATH, then through the registry.

        Without a ``registry_name`` the per-tool default hint is used
        (R installs as "R for Windows").
        """
        found = self.which(command)
        if found:
            return Location(path=found, via=VIA_PATH)

        hint = registry_name or DEFAULT_REGISTRY_NAMES.get(command)
        if not (hint and self.use_registry):
            return None

        try:
            path = locate_via_registry(command, hint, self.registry_entries)
        except OSError as e:
            logger.warning("Registry lookup for %s failed: %s", command, e)
            return None

        return Location(path=path, via=VIA_REGISTRY) if path else None

    def run(self, argv: list[str]) -> ProbeOutput | None:
        """Run a command and capture its output.

        A non-zero exit is still returned; diagnostics tools often exit
        non-zero while printing what we need.

        Returns:
            ProbeOutput, or None when the command could not be run or
            timed out.
        """
        logger.debug("Probing: %s (timeout=%ss)", " ".join(argv), self.timeout)
        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Timed out after %ss: %s", self.timeout, argv[0])
            return None
        except OSError as e:
            logger.warning("Cannot run %s: %s", argv[0], e)
            return None

        return ProbeOutput(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
