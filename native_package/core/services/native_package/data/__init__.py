"""
L0 Data — ``__init__.py`` re-exports all data constants.
"""

from native_package.core.services.native_package.data.backend_catalog import (  # noqa: F401
    BACKEND_COMMANDS,
    DEB_INSTALLED_STATUS,
)
from native_package.core.services.native_package.data.platform_maps import (  # noqa: F401
    ARCH_MAP,
    DISTRO_FAMILY_MAP,
    OS_FAMILY_MAP,
)
