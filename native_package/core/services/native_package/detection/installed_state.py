"""
L3 Detection — Installed-state probes.

Read-only queries against the native package database. Any probe
that cannot run (checker binary missing, timeout, OS error) yields
``UNKNOWN`` instead of raising; callers treat UNKNOWN as "not
installed" and carry on.
"""

from __future__ import annotations

import logging
import subprocess

from native_package.core.models.package import InstalledState, PackageType
from native_package.core.services.native_package.data.backend_catalog import (
    DEB_INSTALLED_STATUS,
)
from native_package.core.services.native_package.domain.commands import render_command
from native_package.core.services.native_package.domain.errors import ProbeError

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 10


def _run_probe(cmd: list[str], *, timeout: int) -> subprocess.CompletedProcess:
    """Run a probe command, wrapping execution failures in ProbeError."""
    logger.debug("Probe: %s", " ".join(cmd))
    try:
        return subprocess.run(
            cmd,
            capture_output=True, text=True, timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise ProbeError(f"Package checker not found: {cmd[0]}") from exc
    except subprocess.TimeoutExpired as exc:
        raise ProbeError(f"Probe timed out after {timeout}s: {cmd[0]}") from exc
    except OSError as exc:
        raise ProbeError(f"OS error running {cmd[0]}: {exc}") from exc


def _deb_state(r: subprocess.CompletedProcess) -> InstalledState:
    if DEB_INSTALLED_STATUS in (r.stdout or ""):
        return InstalledState.INSTALLED
    return InstalledState.NOT_INSTALLED


def _exit_code_state(r: subprocess.CompletedProcess) -> InstalledState:
    if r.returncode == 0:
        return InstalledState.INSTALLED
    return InstalledState.NOT_INSTALLED


# Success criterion per package type.
_INTERPRETERS = {
    PackageType.DEB: _deb_state,
    PackageType.RPM: _exit_code_state,
    PackageType.APK: _exit_code_state,
}


def check_installed(
    ptype: PackageType,
    name: str | None,
    *,
    timeout: int = PROBE_TIMEOUT,
) -> InstalledState:
    """Check whether a package is installed.

      deb → dpkg-query -W -f='${Status}' NAME  (stdout has "install ok installed")
      rpm → rpm -q NAME                        (exit 0)
      apk → apk info -e NAME                   (exit 0)

    Args:
        ptype: Resolved package type.
        name: Package name. None means there is nothing to check.
        timeout: Seconds before the probe is abandoned.

    Returns:
        INSTALLED / NOT_INSTALLED, or UNKNOWN when not applicable
        or when the probe itself failed.
    """
    interpret = _INTERPRETERS.get(ptype)
    if interpret is None or not name:
        return InstalledState.UNKNOWN

    cmd = render_command(ptype, "probe", name=name)
    assert cmd is not None
    try:
        r = _run_probe(cmd, timeout=timeout)
    except ProbeError as exc:
        logger.warning("Installed-state probe failed for %s (%s): %s", name, ptype, exc)
        return InstalledState.UNKNOWN

    state = interpret(r)
    logger.debug("Probe result for %s (%s): %s", name, ptype, state)
    return state
