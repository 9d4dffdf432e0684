"""
L1 Domain — Error taxonomy.

Every error names the phase that produced it. The use-case layer
reports ``phase`` alongside the message; nothing here does I/O.
"""

from __future__ import annotations


class NativePackageError(Exception):
    """Base class for all install/remove failures."""

    phase: str = "unknown"

    def __init__(self, message: str, *, phase: str | None = None) -> None:
        super().__init__(message)
        if phase is not None:
            self.phase = phase


class ConfigurationError(NativePackageError):
    """Required URL or name missing for the host's platform.

    Raised before any side effect.
    """

    phase = "resolve"

    def __init__(
        self,
        *,
        os_family: str,
        package_type: str,
        architecture: str,
        arch_key: str,
    ) -> None:
        self.os_family = os_family
        self.package_type = package_type
        self.architecture = architecture
        self.arch_key = arch_key
        super().__init__(
            f"No suitable package URL or name found in package_urls for "
            f"OS family '{os_family}' (type '{package_type}') and "
            f"architecture '{architecture}' (key '{arch_key}'). "
            f"Check that package_urls has a URL for the arch and a 'name' "
            f"key for the type."
        )


class ProbeError(NativePackageError):
    """Installed-state probe could not run. Degrades to UNKNOWN."""

    phase = "probe"


class DownloadError(NativePackageError):
    """Artifact fetch failed (network, HTTP status, or filesystem)."""

    phase = "download"


class InstallError(NativePackageError):
    """Native installer rejected the artifact."""

    phase = "install"


class RemovalError(NativePackageError):
    """Native remover failed."""

    phase = "remove"


class PurgeError(NativePackageError):
    """Deb purge failed. Logged only."""

    phase = "purge"
