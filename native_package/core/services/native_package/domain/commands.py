"""
L1 Domain — Backend command rendering (pure).

No I/O, no subprocess.
"""

from __future__ import annotations

from native_package.core.models.package import PackageType
from native_package.core.services.native_package.data.backend_catalog import (
    BACKEND_COMMANDS,
)


def render_command(ptype: PackageType, operation: str, **values: str) -> list[str] | None:
    """Render a backend command template for a package type.

    ``{path}`` / ``{name}`` tokens are substituted from ``values``.
    Other braces (e.g. dpkg-query's ``${Status}``) are left alone.

    Returns:
        The argv list, or None when the backend has no such operation.
    """
    template = BACKEND_COMMANDS.get(ptype, {}).get(operation)
    if not template:
        return None
    cmd: list[str] = []
    for part in template:
        for key, value in values.items():
            part = part.replace(f"{{{key}}}", value)
        cmd.append(part)
    return cmd


def backend_env(ptype: PackageType) -> dict[str, str]:
    """Extra environment for a backend's commands."""
    return dict(BACKEND_COMMANDS.get(ptype, {}).get("env", {}))
