"""
Manifest loader — reads manifest.json into domain models.

This is the primary entry point for loading template definitions.
It reads JSON (or YAML), validates against Pydantic schemas, and
returns a typed ``Manifest``.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any

import yaml

from recap_check import __version__
from recap_check.core.models.manifest import Manifest, Template

logger = logging.getLogger(__name__)

# Default manifest filenames, in lookup order
MANIFEST_FILES = ("manifest.json", "manifest.yml", "manifest.yaml")

FETCH_TIMEOUT = 15


class ConfigError(Exception):
    """Raised when the manifest is missing, unreadable or invalid."""


def find_manifest_file(start_dir: Path | None = None) -> Path | None:
    """Search for a manifest starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the manifest, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        for filename in MANIFEST_FILES:
            candidate = current / filename
            if candidate.is_file():
                return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_manifest(path: Path | None = None) -> Manifest:
    """Load and validate a manifest file.

    Args:
        path: Explicit path to the manifest. If None, searches upward.

    Returns:
        Validated Manifest model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_manifest_file()

    if path is None:
        raise ConfigError(
            f"No {MANIFEST_FILES[0]} found. "
            "Run from a template directory, or specify --manifest."
        )

    if not path.is_file():
        raise ConfigError(f"Manifest file not found: {path}")

    logger.debug("Loading manifest from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    fmt = "yaml" if path.suffix.lower() in (".yml", ".yaml") else "json"
    return parse_manifest(raw, source=str(path), fmt=fmt)


def fetch_manifest(url: str, timeout: float = FETCH_TIMEOUT) -> Manifest:
    """Download a manifest document and parse it.

    Used when no local manifest exists and a URL was configured.

    Raises:
        ConfigError: On any network failure or invalid content.
    """
    logger.info("Fetching manifest from %s", url)
    req = urllib.request.Request(
        url, headers={"User-Agent": f"recap-check/{__version__}"},
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode("utf-8")
    except (urllib.error.URLError, OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot fetch manifest from {url}: {e}") from e

    fmt = "yaml" if url.lower().endswith((".yml", ".yaml")) else "json"
    return parse_manifest(raw, source=url, fmt=fmt)


def parse_manifest(raw: str, source: str = "<string>", fmt: str = "json") -> Manifest:
    """Parse manifest text into a ``Manifest``.

    The document is a mapping of template name to a body holding an
    optional ``extends`` key plus dependency entries keyed by name.
    """
    try:
        if fmt == "yaml":
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {source}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {source}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping of templates in {source}, got {type(data).__name__}")

    templates: dict[str, Template] = {}
    for name, body in data.items():
        templates[str(name)] = _parse_template(str(name), body, source)

    logger.info("Loaded manifest %s with %d templates", source, len(templates))
    return Manifest(templates=templates, source=source)


def _parse_template(name: str, body: Any, source: str) -> Template:
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise ConfigError(
            f"Template '{name}' in {source} must be a mapping, got {type(body).__name__}"
        )

    dependencies = {k: v for k, v in body.items() if k != "extends"}
    try:
        return Template.model_validate({
            "name": name,
            "extends": body.get("extends"),
            "dependencies": dependencies,
        })
    except Exception as e:
        raise ConfigError(f"Invalid template '{name}' in {source}: {e}") from e
