"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from recap_check.core.config.loader import load_manifest
from recap_check.core.models.manifest import Manifest


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def manifest_path(fixtures_dir: Path) -> Path:
    """The sample manifest: ``base`` and ``advanced`` (extends base)."""
    return fixtures_dir / "manifest.json"


@pytest.fixture
def manifest(manifest_path: Path) -> Manifest:
    return load_manifest(manifest_path)
