"""
L4 Execution — Native package backends.

Install a local artifact, remove by name, and (deb only) purge.
Commands come from ``data/backend_catalog.py``; the backend is
selected by PackageType. All commands run as root.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from native_package.core.models.package import PackageType
from native_package.core.services.native_package.domain.commands import (
    backend_env,
    render_command,
)
from native_package.core.services.native_package.domain.errors import (
    InstallError,
    PurgeError,
    RemovalError,
)
from native_package.core.services.native_package.execution.subprocess_runner import (
    _run_subprocess,
)

logger = logging.getLogger(__name__)

BACKEND_TIMEOUT = 600


def _describe_failure(result: dict[str, Any]) -> str:
    detail = (result.get("stderr") or "").strip()
    return f"{result['error']}: {detail}" if detail else result["error"]


def _run_backend(
    ptype: PackageType,
    operation: str,
    *,
    sudo_password: str,
    timeout: int,
    **values: str,
) -> dict[str, Any]:
    cmd = render_command(ptype, operation, **values)
    if cmd is None:
        return {"ok": False, "error": f"No '{operation}' command for package type '{ptype}'"}
    return _run_subprocess(
        cmd,
        needs_sudo=True,
        sudo_password=sudo_password,
        timeout=timeout,
        env_overrides=backend_env(ptype) or None,
    )


def install_local_file(
    ptype: PackageType,
    path: Path,
    *,
    sudo_password: str = "",
    timeout: int = BACKEND_TIMEOUT,
) -> dict[str, Any]:
    """Install a downloaded package file.

    Raises:
        InstallError: The package manager rejected the artifact.
    """
    result = _run_backend(
        ptype, "install",
        path=str(path), sudo_password=sudo_password, timeout=timeout,
    )
    if not result["ok"]:
        raise InstallError(f"Installing {path.name} failed: {_describe_failure(result)}")
    return result


def remove_by_name(
    ptype: PackageType,
    name: str,
    *,
    sudo_password: str = "",
    timeout: int = BACKEND_TIMEOUT,
) -> dict[str, Any]:
    """Remove an installed package by name.

    Raises:
        RemovalError: The package manager failed.
    """
    result = _run_backend(
        ptype, "remove",
        name=name, sudo_password=sudo_password, timeout=timeout,
    )
    if not result["ok"]:
        raise RemovalError(f"Removing {name} failed: {_describe_failure(result)}")
    return result


def purge(
    ptype: PackageType,
    name: str,
    *,
    sudo_password: str = "",
    timeout: int = BACKEND_TIMEOUT,
) -> dict[str, Any]:
    """Strip residual configuration files (``dpkg -P``).

    Raises:
        PurgeError: The purge failed, or the backend has no purge.
    """
    result = _run_backend(
        ptype, "purge",
        name=name, sudo_password=sudo_password, timeout=timeout,
    )
    if not result["ok"]:
        raise PurgeError(f"Purging {name} failed: {_describe_failure(result)}")
    return result
