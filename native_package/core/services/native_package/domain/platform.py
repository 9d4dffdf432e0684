"""
L1 Domain — Platform classification (pure).

Maps the raw OS-family and architecture facts to the closed enums
used everywhere else. No I/O, no subprocess. Both functions are
total: anything unrecognised is ``UNSUPPORTED``.
"""

from __future__ import annotations

from native_package.core.models.package import ArchKey, PackageType
from native_package.core.services.native_package.data.platform_maps import (
    ARCH_MAP,
    OS_FAMILY_MAP,
)


def classify_os(os_family: str) -> PackageType:
    """Package type for an OS family (``"Debian"``, ``"RedHat"``, ``"Alpine"``)."""
    return OS_FAMILY_MAP.get(os_family, PackageType.UNSUPPORTED)


def classify_arch(arch: str) -> ArchKey:
    """Arch key for a raw ``uname -m`` string."""
    return ARCH_MAP.get(arch, ArchKey.UNSUPPORTED)
