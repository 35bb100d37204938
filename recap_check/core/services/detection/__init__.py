"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
Subprocess calls and registry reads only.
"""

from recap_check.core.services.detection.cli_tool import detect_cli  # noqa: F401
from recap_check.core.services.detection.r_package import (  # noqa: F401
    detect_r_package,
    package_version_expr,
)
from recap_check.core.services.detection.registry import (  # noqa: F401
    RegistryEntry,
    find_registry_entry,
    locate_via_registry,
)
from recap_check.core.services.detection.result import (  # noqa: F401
    UNKNOWN_VERSION,
    VIA_PATH,
    VIA_REGISTRY,
    DetectionResult,
)
from recap_check.core.services.detection.runner import (  # noqa: F401
    Location,
    ProbeOutput,
    ProbeRunner,
)
from recap_check.core.services.detection.tex import (  # noqa: F401
    QUARTO_FALLBACK_VERSION,
    detect_tex,
    parse_quarto_check,
)
from recap_check.core.services.detection.version_text import (  # noqa: F401
    VERSION_COMMANDS,
    extract_version,
    version_command,
)
