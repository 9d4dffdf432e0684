"""
Package models — platform enums, the package_urls document, and the
resolved target handed to the orchestrators.

The document is validated lazily: a missing type entry, name or URL
is not an error here. Whoever needs the value decides whether its
absence is fatal.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)


class PackageType(StrEnum):
    """Native package ecosystem of the host."""

    DEB = "deb"
    RPM = "rpm"
    APK = "apk"
    UNSUPPORTED = "unsupported"


class ArchKey(StrEnum):
    """CPU architecture bucket, used as a lookup key in package_urls.

    ``IA64`` is the key for 64-bit x86 (``x86_64``), not Itanium.
    The name is part of the document format and is kept as-is.
    """

    X86 = "x86"
    IA64 = "ia64"
    ARM = "arm"
    AARCH64 = "aarch64"
    UNSUPPORTED = "unsupported"


class InstalledState(StrEnum):
    """Result of an idempotency probe."""

    INSTALLED = "installed"
    NOT_INSTALLED = "not_installed"
    UNKNOWN = "unknown"


# Extra spellings accepted for the ia64 key. The canonical key wins.
ARCH_KEY_ALIASES: dict[str, ArchKey] = {
    "x86_64": ArchKey.IA64,
    "amd64": ArchKey.IA64,
}

_ARCH_KEY_VALUES = {a.value for a in ArchKey if a is not ArchKey.UNSUPPORTED}


class PackageTypeEntry(BaseModel):
    """One ``package_urls.<type>`` block.

    The YAML shape is flat — ``name`` sits next to the arch keys::

        deb:
          name: foo
          ia64: https://example.com/foo_amd64.deb
          aarch64: https://example.com/foo_arm64.deb

    It is folded into ``name`` + ``urls`` on load.
    """

    name: str | None = None
    urls: dict[ArchKey, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _fold_arch_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "urls" in data:
            return data

        urls: dict[ArchKey, str] = {}
        aliased: dict[ArchKey, str] = {}
        for key, value in data.items():
            if key == "name":
                continue
            key = str(key)
            if key in ARCH_KEY_ALIASES:
                aliased[ARCH_KEY_ALIASES[key]] = value
            elif key in _ARCH_KEY_VALUES:
                urls[ArchKey(key)] = value
            else:
                logger.warning("Ignoring unknown key '%s' in package_urls entry", key)

        for akey, url in aliased.items():
            urls.setdefault(akey, url)

        return {"name": data.get("name"), "urls": urls}

    def url_for(self, akey: ArchKey) -> str | None:
        """URL for an arch key, or None when the entry has none."""
        return self.urls.get(akey)


class PackageConfig(BaseModel):
    """The ``package_urls`` mapping: PackageType → PackageTypeEntry."""

    model_config = ConfigDict(extra="ignore")

    deb: PackageTypeEntry | None = None
    rpm: PackageTypeEntry | None = None
    apk: PackageTypeEntry | None = None

    def entry(self, ptype: PackageType) -> PackageTypeEntry | None:
        """Look up the entry for a package type."""
        if ptype is PackageType.UNSUPPORTED:
            return None
        return getattr(self, ptype.value)

    def configured_types(self) -> list[PackageType]:
        """Package types that have an entry."""
        return [p for p in PackageType if p is not PackageType.UNSUPPORTED and self.entry(p)]


class NativePackageSpec(BaseModel):
    """The whole input document."""

    package_urls: PackageConfig = Field(default_factory=PackageConfig)
    installed: bool = True


class ResolvedTarget(BaseModel):
    """The concrete (URL, name) selected for the current host.

    ``url`` is only populated when installing.
    """

    model_config = ConfigDict(frozen=True)

    package_type: PackageType
    arch_key: ArchKey
    url: str | None = None
    name: str | None = None

    @property
    def supported(self) -> bool:
        """Whether both platform axes were recognised."""
        return (
            self.package_type is not PackageType.UNSUPPORTED
            and self.arch_key is not ArchKey.UNSUPPORTED
        )
