"""
Receipt model — the outcome of one install or remove run.

The orchestrators return a PackageReceipt on every terminal state
that is not an error. Errors are raised (see ``domain/errors.py``)
and turned into a failure receipt by the use-case layer.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, Field

from native_package.core.models.package import ResolvedTarget


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class InstallState(StrEnum):
    """Orchestrator states.

    Install:  start → resolved → {skipped | fatal | downloaded → installed → cleaned_up}
    Remove:   start → resolved → {noop | removed | absent}
    """

    START = "start"
    RESOLVED = "resolved"
    SKIPPED = "skipped"
    FATAL = "fatal"
    DOWNLOADED = "downloaded"
    INSTALLED = "installed"
    CLEANED_UP = "cleaned_up"
    NOOP = "noop"
    REMOVED = "removed"
    ABSENT = "absent"


class PackageReceipt(BaseModel):
    """Result of one orchestrator run."""

    action: Literal["install", "remove"]
    status: Literal["ok", "skipped", "failed"] = "ok"
    state: InstallState = InstallState.START

    target: ResolvedTarget | None = None
    phase: str | None = None         # phase that produced the error
    error: str | None = None
    output: str = ""

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the run ended without error."""
        return self.status != "failed"

    @property
    def changed(self) -> bool:
        """Whether the run modified the host's package set."""
        return self.state in (InstallState.CLEANED_UP, InstallState.REMOVED)

    @classmethod
    def success(
        cls,
        action: Literal["install", "remove"],
        state: InstallState,
        target: ResolvedTarget | None = None,
        output: str = "",
        **kwargs: Any,
    ) -> PackageReceipt:
        """Create a success receipt."""
        return cls(
            action=action,
            status="ok",
            state=state,
            target=target,
            output=output,
            **kwargs,
        )

    @classmethod
    def skip(
        cls,
        action: Literal["install", "remove"],
        state: InstallState,
        target: ResolvedTarget | None = None,
        reason: str = "",
        **kwargs: Any,
    ) -> PackageReceipt:
        """Create a skip receipt."""
        return cls(
            action=action,
            status="skipped",
            state=state,
            target=target,
            output=reason,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        action: Literal["install", "remove"],
        error: str,
        phase: str | None = None,
        target: ResolvedTarget | None = None,
        **kwargs: Any,
    ) -> PackageReceipt:
        """Create a failure receipt."""
        return cls(
            action=action,
            status="failed",
            state=InstallState.FATAL,
            target=target,
            phase=phase,
            error=error,
            **kwargs,
        )
