"""
Native package service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate layer (data → domain → resolver → detection →
execution → orchestration)::

    from native_package.core.services.native_package import install_package
"""

# ── L1: Domain ──
from native_package.core.services.native_package.domain.errors import (  # noqa: F401
    ConfigurationError,
    DownloadError,
    InstallError,
    NativePackageError,
    ProbeError,
    PurgeError,
    RemovalError,
)
from native_package.core.services.native_package.domain.platform import (  # noqa: F401
    classify_arch,
    classify_os,
)

# ── L2: Resolver ──
from native_package.core.services.native_package.resolver.artifact import (  # noqa: F401
    artifact_filename,
    resolve,
)

# ── L3: Detection ──
from native_package.core.services.native_package.detection.host_facts import (  # noqa: F401
    HostFacts,
    detect_host_facts,
)
from native_package.core.services.native_package.detection.installed_state import (  # noqa: F401
    check_installed,
)

# ── L5: Orchestration ──
from native_package.core.services.native_package.orchestration.orchestrator import (  # noqa: F401
    ensure_package,
    install_package,
    remove_package,
    resolve_for_host,
)
