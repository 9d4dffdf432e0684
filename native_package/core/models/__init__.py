"""
Domain models — Pydantic types for native-package.

All models are re-exported here for convenient access:

    from native_package.core.models import PackageConfig, ResolvedTarget, PackageReceipt
"""

from native_package.core.models.package import (
    ArchKey,
    InstalledState,
    NativePackageSpec,
    PackageConfig,
    PackageType,
    PackageTypeEntry,
    ResolvedTarget,
)
from native_package.core.models.receipt import InstallState, PackageReceipt

__all__ = [
    # package.py
    "ArchKey",
    "InstalledState",
    "NativePackageSpec",
    "PackageConfig",
    "PackageType",
    "PackageTypeEntry",
    "ResolvedTarget",
    # receipt.py
    "InstallState",
    "PackageReceipt",
]
