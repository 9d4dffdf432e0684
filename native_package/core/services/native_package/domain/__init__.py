"""
L1 Domain — ``__init__.py`` re-exports pure domain functions and errors.

No I/O, no subprocess.
"""

from native_package.core.services.native_package.domain.errors import (  # noqa: F401
    ConfigurationError,
    DownloadError,
    InstallError,
    NativePackageError,
    ProbeError,
    PurgeError,
    RemovalError,
)
from native_package.core.services.native_package.domain.commands import (  # noqa: F401
    backend_env,
    render_command,
)
from native_package.core.services.native_package.domain.platform import (  # noqa: F401
    classify_arch,
    classify_os,
)
