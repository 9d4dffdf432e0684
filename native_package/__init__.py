"""
native-package — install or remove a package from direct URLs
using the host's native package manager (deb / rpm / apk).
"""

__version__ = "0.1.0"
