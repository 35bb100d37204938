"""
Domain models — Pydantic types for manifests and dependencies.

    from recap_check.core.models import Manifest, Template, DependencySpec
"""

from recap_check.core.models.dependency import (
    CheckSpec,
    CliCheck,
    DependencySpec,
    RPackageCheck,
    TexCheck,
    UnsupportedCheck,
)
from recap_check.core.models.manifest import Manifest, Template

__all__ = [
    # dependency.py
    "CheckSpec",
    "CliCheck",
    "DependencySpec",
    # manifest.py
    "Manifest",
    "RPackageCheck",
    "Template",
    "TexCheck",
    "UnsupportedCheck",
]
