"""
L2 Resolver — Artifact resolution.

Turns (package_urls, package type, arch key) into a ResolvedTarget.
A pure lookup with defaulting: nothing here raises on missing data.
The install orchestrator decides that a missing URL or name is fatal.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from urllib.parse import unquote, urlparse

from native_package.core.models.package import (
    ArchKey,
    PackageConfig,
    PackageType,
    ResolvedTarget,
)


def resolve(
    config: PackageConfig,
    ptype: PackageType,
    akey: ArchKey,
    want_install: bool,
) -> ResolvedTarget:
    """Resolve the target for the host's platform.

    Args:
        config: The ``package_urls`` document.
        ptype: Classified package type.
        akey: Classified arch key.
        want_install: Look up the URL too. Removal only needs the name.

    Returns:
        ResolvedTarget. ``url`` and ``name`` are None when either
        axis is unsupported; no lookup is attempted in that case.
    """
    if ptype is PackageType.UNSUPPORTED or akey is ArchKey.UNSUPPORTED:
        return ResolvedTarget(package_type=ptype, arch_key=akey)

    entry = config.entry(ptype)
    if entry is None:
        return ResolvedTarget(package_type=ptype, arch_key=akey)

    return ResolvedTarget(
        package_type=ptype,
        arch_key=akey,
        url=entry.url_for(akey) if want_install else None,
        name=entry.name,
    )


def artifact_filename(url: str, ptype: PackageType) -> str:
    """Local filename for a downloaded artifact: the URL's last path segment.

    Query strings and fragments are ignored. Falls back to
    ``package.<type>`` when the path ends in ``/``, is empty, or decodes
    to ``.`` / ``..``. The ``.<type>`` extension is appended when missing
    so the package manager reads the argument as a local file.
    """
    suffix = f".{ptype.value}"
    name = PurePosixPath(unquote(urlparse(url).path)).name
    if name in ("", ".", ".."):
        return f"package{suffix}"
    if not name.endswith(suffix):
        name += suffix
    return name
