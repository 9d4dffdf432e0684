"""
L5 Orchestration — Install and removal coordinators.

These functions tie everything together:

    classify → resolve → check → act

Install:  start → resolved → {skipped | fatal | downloaded → installed → cleaned_up}
Remove:   start → resolved → {noop | removed | absent}, then purge (deb)

Errors are raised as ``NativePackageError`` subclasses; the only
thing ever undone is the scratch directory of an install run.
"""

from __future__ import annotations

import logging
import tempfile
import time
from pathlib import Path

from native_package.core.models.package import (
    InstalledState,
    NativePackageSpec,
    PackageConfig,
    PackageType,
    ResolvedTarget,
)
from native_package.core.models.receipt import InstallState, PackageReceipt
from native_package.core.services.native_package.detection.host_facts import HostFacts
from native_package.core.services.native_package.detection.installed_state import (
    PROBE_TIMEOUT,
    check_installed,
)
from native_package.core.services.native_package.domain.errors import (
    ConfigurationError,
    PurgeError,
    RemovalError,
)
from native_package.core.services.native_package.domain.platform import (
    classify_arch,
    classify_os,
)
from native_package.core.services.native_package.execution.backends import (
    BACKEND_TIMEOUT,
    install_local_file,
    purge,
    remove_by_name,
)
from native_package.core.services.native_package.execution.download import (
    DOWNLOAD_TIMEOUT,
    fetch_artifact,
)
from native_package.core.services.native_package.resolver.artifact import (
    artifact_filename,
    resolve,
)

logger = logging.getLogger(__name__)

TEMP_DIR_SUFFIX = "native_package"


def resolve_for_host(
    facts: HostFacts,
    config: PackageConfig,
    *,
    want_install: bool,
) -> ResolvedTarget:
    """Classify the host and resolve its target (start → resolved)."""
    ptype = classify_os(facts.os_family)
    akey = classify_arch(facts.architecture)
    target = resolve(config, ptype, akey, want_install)
    logger.debug(
        "Resolved %s/%s → type=%s key=%s name=%s url=%s",
        facts.os_family, facts.architecture,
        target.package_type, target.arch_key, target.name, target.url,
    )
    return target


def _configuration_error(facts: HostFacts, target: ResolvedTarget) -> ConfigurationError:
    return ConfigurationError(
        os_family=facts.os_family,
        package_type=target.package_type.value,
        architecture=facts.architecture,
        arch_key=target.arch_key.value,
    )


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def install_package(
    facts: HostFacts,
    config: PackageConfig,
    *,
    sudo_password: str = "",
    probe_timeout: int = PROBE_TIMEOUT,
    download_timeout: int = DOWNLOAD_TIMEOUT,
    backend_timeout: int = BACKEND_TIMEOUT,
) -> PackageReceipt:
    """Ensure the package for this host is installed.

    The probe runs as soon as a name resolves, so an installed package
    is skipped even when this platform has no URL.

    Args:
        facts: Host OS family and architecture.
        config: The ``package_urls`` document.
        sudo_password: Sudo password for the installer, if not root.
        probe_timeout: Seconds for the installed-state probe.
        download_timeout: Socket timeout for the artifact download.
        backend_timeout: Seconds for the package manager call.

    Returns:
        A skipped receipt when already installed, otherwise an ok
        receipt in state ``cleaned_up``.

    Raises:
        ConfigurationError: No name for this platform, or no URL and
            the package is not installed. Raised before anything is
            created.
        DownloadError: Fetch failed. Scratch directory is removed.
        InstallError: Package manager failed. Scratch directory is removed.
    """
    start = time.monotonic()
    target = resolve_for_host(facts, config, want_install=True)

    if target.name is None:
        raise _configuration_error(facts, target)

    # An installed package needs no URL
    state = check_installed(target.package_type, target.name, timeout=probe_timeout)
    if state is InstalledState.INSTALLED:
        logger.info("%s is already installed, nothing to do", target.name)
        return PackageReceipt.skip(
            "install", InstallState.SKIPPED, target,
            reason=f"{target.name} is already installed",
            duration_ms=_elapsed_ms(start),
            metadata={"installed_state": state.value},
        )
    if target.url is None:
        raise _configuration_error(facts, target)
    if state is InstalledState.UNKNOWN:
        logger.warning(
            "Could not determine whether %s is installed; installing anyway",
            target.name,
        )

    filename = artifact_filename(target.url, target.package_type)
    with tempfile.TemporaryDirectory(suffix=TEMP_DIR_SUFFIX) as tmp:
        artifact = Path(tmp) / filename
        fetch_artifact(target.url, artifact, timeout=download_timeout)
        logger.debug("State: %s", InstallState.DOWNLOADED)

        result = install_local_file(
            target.package_type, artifact,
            sudo_password=sudo_password, timeout=backend_timeout,
        )
        logger.debug("State: %s", InstallState.INSTALLED)
    logger.debug("State: %s (removed %s)", InstallState.CLEANED_UP, tmp)

    logger.info("Installed %s from %s", target.name, filename)
    return PackageReceipt.success(
        "install", InstallState.CLEANED_UP, target,
        output=result.get("stdout", ""),
        duration_ms=_elapsed_ms(start),
        metadata={
            "installed_state": state.value,
            "artifact": filename,
            "temp_dir": tmp,
        },
    )


def remove_package(
    facts: HostFacts,
    config: PackageConfig,
    *,
    sudo_password: str = "",
    probe_timeout: int = PROBE_TIMEOUT,
    backend_timeout: int = BACKEND_TIMEOUT,
) -> PackageReceipt:
    """Ensure the package for this host is not installed.

    A missing name is a no-op, not an error. When the remover fails
    but the probe reports the package absent, the package manager
    is treated as having reported absence. The deb purge is best
    effort.

    Raises:
        RemovalError: The package manager failed and the package is
            (or may still be) installed.
    """
    start = time.monotonic()
    target = resolve_for_host(facts, config, want_install=False)

    if target.name is None:
        logger.info(
            "No package name for %s/%s, nothing to remove",
            facts.os_family, facts.architecture,
        )
        return PackageReceipt.skip(
            "remove", InstallState.NOOP, target,
            reason="no package name configured for this platform",
            duration_ms=_elapsed_ms(start),
        )

    final_state = InstallState.REMOVED
    output = ""
    try:
        result = remove_by_name(
            target.package_type, target.name,
            sudo_password=sudo_password, timeout=backend_timeout,
        )
        output = result.get("stdout", "")
    except RemovalError:
        probed = check_installed(target.package_type, target.name, timeout=probe_timeout)
        if probed is not InstalledState.NOT_INSTALLED:
            raise
        logger.info("%s is not installed", target.name)
        final_state = InstallState.ABSENT

    purged = None
    if target.package_type is PackageType.DEB:
        try:
            purge(
                target.package_type, target.name,
                sudo_password=sudo_password, timeout=backend_timeout,
            )
            purged = True
        except PurgeError as exc:
            logger.warning("Ignoring purge failure: %s", exc)
            purged = False

    if final_state is InstallState.REMOVED:
        logger.info("Removed %s", target.name)
    return PackageReceipt.success(
        "remove", final_state, target,
        output=output,
        duration_ms=_elapsed_ms(start),
        metadata={"purged": purged} if purged is not None else {},
    )


def ensure_package(
    facts: HostFacts,
    spec: NativePackageSpec,
    *,
    sudo_password: str = "",
) -> PackageReceipt:
    """Install or remove according to ``spec.installed``."""
    if spec.installed:
        return install_package(facts, spec.package_urls, sudo_password=sudo_password)
    return remove_package(facts, spec.package_urls, sudo_password=sudo_password)
