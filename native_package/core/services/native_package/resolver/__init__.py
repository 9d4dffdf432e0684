"""
L2 Resolver — ``__init__.py`` re-exports resolution functions.
"""

from native_package.core.services.native_package.resolver.artifact import (  # noqa: F401
    artifact_filename,
    resolve,
)
