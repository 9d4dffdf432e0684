"""
L0 Data — Platform lookup tables.

Pure data. No logic.
"""

from __future__ import annotations

from native_package.core.models.package import ArchKey, PackageType

# OS family (Ansible-style fact) → package type.
OS_FAMILY_MAP: dict[str, PackageType] = {
    "Debian": PackageType.DEB,
    "RedHat": PackageType.RPM,
    "Alpine": PackageType.APK,
}

# Raw `uname -m` → package_urls arch key.
#
# x86_64 maps to "ia64". The key predates this tool and existing
# package_urls documents depend on it.
ARCH_MAP: dict[str, ArchKey] = {
    "x86_64": ArchKey.IA64,
    "aarch64": ArchKey.AARCH64,
    "armv7l": ArchKey.ARM,
    "armv6l": ArchKey.ARM,
    "i386": ArchKey.X86,
    "i686": ArchKey.X86,
}

# /etc/os-release ID (or ID_LIKE entry) → OS family.
DISTRO_FAMILY_MAP: dict[str, str] = {
    "debian": "Debian",
    "ubuntu": "Debian",
    "linuxmint": "Debian",
    "raspbian": "Debian",
    "pop": "Debian",
    "kali": "Debian",
    "devuan": "Debian",
    "rhel": "RedHat",
    "centos": "RedHat",
    "fedora": "RedHat",
    "rocky": "RedHat",
    "almalinux": "RedHat",
    "ol": "RedHat",
    "amzn": "RedHat",
    "alpine": "Alpine",
}
