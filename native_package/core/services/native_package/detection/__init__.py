"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
"""

from native_package.core.services.native_package.detection.host_facts import (  # noqa: F401
    HostFacts,
    detect_host_facts,
    os_family_from_release,
)
from native_package.core.services.native_package.detection.installed_state import (  # noqa: F401
    check_installed,
)
