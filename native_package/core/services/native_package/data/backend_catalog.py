"""
L0 Data — Native package backend commands.

One entry per package type. Templates use ``{path}`` (local artifact)
and ``{name}`` (package name) placeholders, resolved at call time.
Every command runs as root.
"""

from __future__ import annotations

from native_package.core.models.package import PackageType

BACKEND_COMMANDS: dict[PackageType, dict] = {
    PackageType.DEB: {
        "install": ["apt-get", "install", "-y", "{path}"],
        "remove": ["apt-get", "remove", "-y", "{name}"],
        "purge": ["dpkg", "-P", "{name}"],
        "probe": ["dpkg-query", "-W", "-f=${Status}", "{name}"],
        "env": {"DEBIAN_FRONTEND": "noninteractive"},
    },
    PackageType.RPM: {
        "install": ["yum", "install", "-y", "{path}"],
        "remove": ["yum", "remove", "-y", "{name}"],
        "probe": ["rpm", "-q", "{name}"],
    },
    PackageType.APK: {
        # Local .apk files carry no signature chain
        "install": ["apk", "add", "--allow-untrusted", "{path}"],
        "remove": ["apk", "del", "{name}"],
        "probe": ["apk", "info", "-e", "{name}"],
    },
}

# dpkg-query ${Status} value of a fully installed package.
DEB_INSTALLED_STATUS = "install ok installed"
