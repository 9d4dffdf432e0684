"""
L4 Execution — ``__init__.py`` re-exports all execution functions.

These functions WRITE: they download files and change the host's
installed package set.
"""

from native_package.core.services.native_package.execution.backends import (  # noqa: F401
    install_local_file,
    purge,
    remove_by_name,
)
from native_package.core.services.native_package.execution.download import (  # noqa: F401
    fetch_artifact,
)
from native_package.core.services.native_package.execution.subprocess_runner import (  # noqa: F401
    _run_subprocess,
)
