"""
L1 Domain — pure functions, no I/O, no subprocess.
"""

from recap_check.core.domain.version_compare import (  # noqa: F401
    Ordering,
    compare_versions,
    parse_version,
    version_gte,
)
