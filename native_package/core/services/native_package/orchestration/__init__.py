"""
L5 Orchestration — ``__init__.py`` re-exports top-level coordinators.

These are the entry points that external code calls.
"""

from native_package.core.services.native_package.orchestration.orchestrator import (  # noqa: F401
    ensure_package,
    install_package,
    remove_package,
    resolve_for_host,
)
