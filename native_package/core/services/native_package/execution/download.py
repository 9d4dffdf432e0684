"""
L4 Execution — Artifact download.

Fetches a package file into the run's scratch directory.
"""

from __future__ import annotations

import logging
import os
import urllib.error
import urllib.request
from pathlib import Path

from native_package import __version__
from native_package.core.services.native_package.domain.errors import DownloadError

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = 300
_CHUNK_SIZE = 64 * 1024


def _fmt_size(n: int | float) -> str:
    """Format byte count to human-readable string."""
    for unit in ("B", "KB", "MB", "GB"):
        if n < 1024:
            return f"{n:.1f} {unit}"
        n /= 1024
    return f"{n:.1f} TB"


def fetch_artifact(
    url: str,
    dest: Path,
    *,
    timeout: int = DOWNLOAD_TIMEOUT,
    mode: int = 0o644,
) -> Path:
    """Download ``url`` to ``dest`` and set its file mode.

    Args:
        url: Artifact URL (http, https, or file).
        dest: Destination file path. Its directory must exist.
        timeout: Socket timeout in seconds.
        mode: File mode applied after the write.

    Returns:
        ``dest``.

    Raises:
        DownloadError: On network errors, non-2xx HTTP status, or
            write failures. A partial file is removed.
    """
    logger.info("Downloading %s → %s", url, dest)

    written = 0
    try:
        req = urllib.request.Request(
            url,
            headers={"User-Agent": f"native-package/{__version__}"},
        )
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            status = getattr(resp, "status", None)
            if status is not None and not 200 <= status < 300:
                raise DownloadError(f"Download of {url} failed: HTTP {status}")
            with open(dest, "wb") as f:
                for chunk in iter(lambda: resp.read(_CHUNK_SIZE), b""):
                    f.write(chunk)
                    written += len(chunk)
        os.chmod(dest, mode)
    except DownloadError:
        dest.unlink(missing_ok=True)
        raise
    except urllib.error.HTTPError as exc:
        dest.unlink(missing_ok=True)
        raise DownloadError(f"Download of {url} failed: HTTP {exc.code} {exc.reason}") from exc
    except urllib.error.URLError as exc:
        dest.unlink(missing_ok=True)
        raise DownloadError(f"Download of {url} failed: {exc.reason}") from exc
    except (OSError, ValueError) as exc:
        dest.unlink(missing_ok=True)
        raise DownloadError(f"Download of {url} failed: {exc}") from exc

    logger.info("Downloaded %s (%s)", dest.name, _fmt_size(written))
    return dest
