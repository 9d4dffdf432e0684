"""
L3 Detection — Host facts.

Supplies the two raw strings the classifier consumes: the OS family
(Ansible-style: ``Debian``, ``RedHat``, ``Alpine``) and the machine
architecture (``uname -m``). Read-only.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from native_package.core.services.native_package.data.platform_maps import (
    DISTRO_FAMILY_MAP,
)

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")


class HostFacts(BaseModel):
    """Raw platform facts for one run."""

    model_config = ConfigDict(frozen=True)

    os_family: str
    architecture: str
    distro_id: str = ""


def _read_os_release(path: Path) -> dict[str, str]:
    """Parse an os-release file into a dict. Missing file → empty dict."""
    info: dict[str, str] = {}
    try:
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                info[key] = value.strip().strip('"').strip("'")
    except (FileNotFoundError, OSError):
        logger.debug("Cannot read %s", path)
    return info


def os_family_from_release(info: dict[str, str]) -> str:
    """Map os-release ``ID`` / ``ID_LIKE`` to an OS family.

    ``ID`` is tried first, then each ``ID_LIKE`` entry in order.
    Unknown distros get their capitalised ID, or ``platform.system()``
    when there is no os-release at all.
    """
    distro_id = info.get("ID", "").lower()
    candidates = [distro_id, *info.get("ID_LIKE", "").lower().split()]
    for candidate in candidates:
        family = DISTRO_FAMILY_MAP.get(candidate)
        if family:
            return family
    if distro_id:
        return distro_id.capitalize()
    return platform.system()


def detect_host_facts(
    *,
    os_family: str | None = None,
    architecture: str | None = None,
    os_release_path: Path = OS_RELEASE_PATH,
) -> HostFacts:
    """Detect host facts. Explicit values override detection.

    Args:
        os_family: Override for the OS family.
        architecture: Override for the machine architecture.
        os_release_path: os-release file to read.

    Returns:
        HostFacts for this run.
    """
    info = _read_os_release(os_release_path)
    facts = HostFacts(
        os_family=os_family or os_family_from_release(info),
        architecture=architecture or platform.machine(),
        distro_id=info.get("ID", ""),
    )
    logger.debug(
        "Host facts: family=%s arch=%s distro=%s",
        facts.os_family, facts.architecture, facts.distro_id,
    )
    return facts
