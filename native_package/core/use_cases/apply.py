"""
Apply use case — install or remove the configured package on this host.

This is the top-level entry for the CLI: it loads the document,
gathers host facts, runs the orchestrator, and turns any raised
error into a single result carrying the phase and the platform.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from native_package.core.config.loader import ConfigError, load_spec
from native_package.core.models.package import (
    InstalledState,
    NativePackageSpec,
    PackageType,
    ResolvedTarget,
)
from native_package.core.models.receipt import PackageReceipt
from native_package.core.services.native_package.detection.host_facts import (
    HostFacts,
    detect_host_facts,
)
from native_package.core.services.native_package.detection.installed_state import (
    check_installed,
)
from native_package.core.services.native_package.domain.commands import render_command
from native_package.core.services.native_package.domain.errors import (
    ConfigurationError,
    NativePackageError,
)
from native_package.core.services.native_package.orchestration.orchestrator import (
    ensure_package,
    resolve_for_host,
)
from native_package.core.services.native_package.resolver.artifact import (
    artifact_filename,
)

logger = logging.getLogger(__name__)

Direction = Literal["apply", "install", "remove"]


@dataclass
class ApplyResult:
    """Result of one apply/install/remove run."""

    action: str = ""
    facts: HostFacts | None = None
    target: ResolvedTarget | None = None
    receipt: PackageReceipt | None = None
    dry_run: bool = False
    plan: list[str] = field(default_factory=list)
    installed_state: InstalledState | None = None
    error: str | None = None
    phase: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def platform(self) -> str:
        """Host and resolved platform, e.g. ``Debian/x86_64 (deb/ia64)``."""
        if self.facts is None:
            return ""
        label = f"{self.facts.os_family}/{self.facts.architecture}"
        if self.target is not None:
            label += f" ({self.target.package_type.value}/{self.target.arch_key.value})"
        return label

    def to_dict(self) -> dict:
        result: dict = {"action": self.action, "ok": self.ok}
        if self.facts:
            result["facts"] = self.facts.model_dump()
        if self.target:
            result["target"] = self.target.model_dump(mode="json")
        if self.error:
            result["error"] = self.error
            result["phase"] = self.phase
            if self.platform:
                result["platform"] = self.platform
            return result

        if self.dry_run:
            result["dry_run"] = True
            result["plan"] = self.plan
            if self.installed_state:
                result["installed_state"] = self.installed_state.value
        if self.receipt:
            result["receipt"] = self.receipt.model_dump(mode="json")
        return result


def _want_install(direction: Direction, spec: NativePackageSpec) -> bool:
    if direction == "install":
        return True
    if direction == "remove":
        return False
    return spec.installed


def _plan(target: ResolvedTarget, want_install: bool) -> list[str]:
    """Human-readable list of what a real run would do."""
    ptype = target.package_type
    if ptype is PackageType.UNSUPPORTED or target.name is None:
        return []

    steps: list[str] = []
    if want_install:
        if target.url is None:
            return []
        filename = artifact_filename(target.url, ptype)
        steps.append(f"download {target.url} → <tmp>/{filename}")
        cmd = render_command(ptype, "install", path=f"<tmp>/{filename}")
        steps.append(" ".join(cmd or []))
        steps.append("remove <tmp>")
        return steps

    for operation in ("remove", "purge"):
        cmd = render_command(ptype, operation, name=target.name)
        if cmd:
            steps.append(" ".join(cmd))
    return steps


def run_apply(
    direction: Direction = "apply",
    *,
    config_path: Path | None = None,
    spec: NativePackageSpec | None = None,
    os_family: str | None = None,
    architecture: str | None = None,
    sudo_password: str = "",
    dry_run: bool = False,
) -> ApplyResult:
    """Install or remove the configured package on this host.

    Args:
        direction: ``"apply"`` honours the document's ``installed``
            flag; ``"install"`` / ``"remove"`` force it.
        config_path: Optional explicit path to the document.
        spec: Already-loaded document (skips loading).
        os_family: Override for the detected OS family.
        architecture: Override for the detected architecture.
        sudo_password: Sudo password for package manager calls.
        dry_run: Resolve and probe only; report the planned steps.

    Returns:
        ApplyResult. ``error``/``phase`` are set on failure.
    """
    result = ApplyResult(action=direction, dry_run=dry_run)

    # ── Load config ──────────────────────────────────────────────
    if spec is None:
        try:
            spec = load_spec(config_path)
        except ConfigError as e:
            result.error = str(e)
            result.phase = "config"
            return result

    want_install = _want_install(direction, spec)
    result.action = "install" if want_install else "remove"

    facts = detect_host_facts(os_family=os_family, architecture=architecture)
    result.facts = facts

    # ── Dry run: resolve + probe, no side effects ────────────────
    if dry_run:
        target = resolve_for_host(facts, spec.package_urls, want_install=want_install)
        result.target = target
        if not want_install:
            result.plan = _plan(target, want_install)
            return result
        # Same order as install_package: name, installed check, then URL
        if target.name is not None:
            result.installed_state = check_installed(target.package_type, target.name)
            if result.installed_state is InstalledState.INSTALLED:
                return result
        if target.url is None or target.name is None:
            err = ConfigurationError(
                os_family=facts.os_family,
                package_type=target.package_type.value,
                architecture=facts.architecture,
                arch_key=target.arch_key.value,
            )
            result.error = str(err)
            result.phase = err.phase
            return result
        result.plan = _plan(target, want_install)
        return result

    # ── Execute ──────────────────────────────────────────────────
    if spec.installed is not want_install:
        spec = spec.model_copy(update={"installed": want_install})
    try:
        receipt = ensure_package(facts, spec, sudo_password=sudo_password)
    except NativePackageError as e:
        logger.debug("%s failed in phase %s", result.action, e.phase, exc_info=True)
        result.target = resolve_for_host(facts, spec.package_urls, want_install=want_install)
        result.error = str(e)
        result.phase = e.phase
        result.receipt = PackageReceipt.failure(
            result.action, str(e), phase=e.phase, target=result.target,
        )
        return result

    result.receipt = receipt
    result.target = receipt.target
    return result


def run_resolve(
    *,
    config_path: Path | None = None,
    remove: bool = False,
    os_family: str | None = None,
    architecture: str | None = None,
) -> ApplyResult:
    """Resolve the target for this host without touching anything."""
    result = ApplyResult(action="remove" if remove else "install", dry_run=True)
    try:
        spec = load_spec(config_path)
    except ConfigError as e:
        result.error = str(e)
        result.phase = "config"
        return result

    facts = detect_host_facts(os_family=os_family, architecture=architecture)
    result.facts = facts
    result.target = resolve_for_host(facts, spec.package_urls, want_install=not remove)
    result.plan = _plan(result.target, not remove)
    return result


@dataclass
class ConfigCheckResult:
    """Result of validating the document."""

    valid: bool = False
    spec: NativePackageSpec | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        result: dict = {"valid": self.valid, "errors": self.errors, "warnings": self.warnings}
        if self.spec:
            result["installed"] = self.spec.installed
            result["types"] = [t.value for t in self.spec.package_urls.configured_types()]
        return result


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate the document and flag entries that cannot be used."""
    result = ConfigCheckResult()
    try:
        spec = load_spec(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    result.spec = spec
    result.valid = True

    configured = spec.package_urls.configured_types()
    if not configured:
        result.warnings.append("package_urls has no deb, rpm or apk entry")
    for ptype in configured:
        entry = spec.package_urls.entry(ptype)
        assert entry is not None
        if not entry.name:
            result.warnings.append(f"package_urls.{ptype.value} has no 'name'")
        if not entry.urls:
            result.warnings.append(f"package_urls.{ptype.value} has no architecture URLs")
    return result
