"""
L4 Execution — Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for commands
that change the system (install, remove, purge). Probes are
read-only and live in ``detection/``.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)


def _fmt_cmd(cmd: list[str]) -> str:
    return " ".join(shlex.quote(c) for c in cmd)


def _run_subprocess(
    cmd: list[str],
    *,
    needs_sudo: bool = False,
    sudo_password: str = "",
    timeout: int = 600,
    env_overrides: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Run a command with sudo and env support.

    Sudo handling:
    - Already root → command runs as-is.
    - Password given → ``sudo -S -k``, password piped via stdin only,
      never logged and never in the argv.
    - No password → ``sudo -n`` (works with NOPASSWD rules, fails
      fast otherwise).

    Args:
        cmd: Command list for ``subprocess.run()``.
        needs_sudo: Whether the command requires root.
        sudo_password: Sudo password (piped to stdin).
        timeout: Seconds before ``TimeoutExpired``.
        env_overrides: Extra env vars (e.g. DEBIAN_FRONTEND).

    Returns:
        ``{"ok": True, "stdout": "...", "elapsed_ms": N}`` on success,
        ``{"ok": False, "error": "...", ...}`` on failure.
    """
    is_root = os.geteuid() == 0
    use_password = needs_sudo and not is_root and bool(sudo_password)

    # ── Sudo handling ──
    if needs_sudo and not is_root:
        if use_password:
            cmd = ["sudo", "-S", "-k"] + cmd
        else:
            cmd = ["sudo", "-n"] + cmd

    # ── Environment ──
    env = os.environ.copy()
    if env_overrides:
        env.update(env_overrides)
        if needs_sudo and not is_root:
            # sudo resets the environment; pass overrides explicitly
            assignments = [f"{k}={v}" for k, v in env_overrides.items()]
            head = 3 if use_password else 2
            cmd = cmd[:head] + assignments + cmd[head:]

    logger.info("CMD %s", _fmt_cmd(cmd))

    # ── Execute ──
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            input=(sudo_password + "\n") if use_password else None,
            env=env,
        )
        elapsed_ms = int((time.monotonic() - start) * 1000)

        if result.stdout:
            logger.debug("STDOUT %s", result.stdout.strip())
        if result.stderr:
            logger.debug("STDERR %s", result.stderr.strip())

        if result.returncode == 0:
            return {
                "ok": True,
                "stdout": result.stdout[-2000:] if result.stdout else "",
                "elapsed_ms": elapsed_ms,
            }

        stderr = result.stderr[-2000:] if result.stderr else ""

        if needs_sudo and not is_root:
            lowered = stderr.lower()
            if use_password and ("incorrect password" in lowered or "sorry" in lowered):
                return {
                    "ok": False,
                    "needs_sudo": True,
                    "error": "Wrong sudo password.",
                }
            if not use_password and "a password is required" in lowered:
                return {
                    "ok": False,
                    "needs_sudo": True,
                    "error": "This step requires sudo. Run as root or pass --ask-sudo.",
                }

        return {
            "ok": False,
            "error": f"Command failed (exit {result.returncode})",
            "returncode": result.returncode,
            "stderr": stderr,
            "stdout": result.stdout[-2000:] if result.stdout else "",
            "elapsed_ms": elapsed_ms,
        }

    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"Command timed out ({timeout}s)"}
    except OSError as e:
        logger.exception("Subprocess error: %s", _fmt_cmd(cmd))
        return {"ok": False, "error": str(e)}
