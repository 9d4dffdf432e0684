"""
native-package — CLI entrypoint.

Usage:
    native-package --help
    native-package facts
    native-package -c native_package.yml apply
    python -m native_package.main remove --dry-run
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from native_package import __version__
from native_package.core.observability.logging_config import (
    level_from_flags,
    setup_logging,
)


def _platform_options(f):
    f = click.option(
        "--arch", "architecture", default=None,
        help="Override the detected machine architecture (e.g. x86_64).",
    )(f)
    f = click.option(
        "--os-family", default=None,
        help="Override the detected OS family (Debian, RedHat, Alpine).",
    )(f)
    return f


def _run_options(f):
    f = click.option("--dry-run", is_flag=True, help="Resolve and probe only; change nothing.")(f)
    f = click.option("--ask-sudo", is_flag=True, help="Prompt for a sudo password.")(f)
    f = click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")(f)
    return f


@click.group()
@click.version_option(version=__version__, prog_name="native-package")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to native_package.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """native-package — install packages from direct URLs with the native package manager."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(level_from_flags(debug=debug, verbose=verbose, quiet=quiet))


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@_platform_options
def facts(as_json: bool, os_family: str | None, architecture: str | None) -> None:
    """Show detected host facts and their classification."""
    from native_package.core.services.native_package.detection.host_facts import (
        detect_host_facts,
    )
    from native_package.core.services.native_package.domain.platform import (
        classify_arch,
        classify_os,
    )

    host = detect_host_facts(os_family=os_family, architecture=architecture)
    ptype = classify_os(host.os_family)
    akey = classify_arch(host.architecture)

    if as_json:
        click.echo(json.dumps({
            **host.model_dump(),
            "package_type": ptype.value,
            "arch_key": akey.value,
        }, indent=2))
        return

    click.secho("\n🖥️  Host", fg="cyan", bold=True)
    click.echo(f"   OS family:    {host.os_family}" + (f" ({host.distro_id})" if host.distro_id else ""))
    click.echo(f"   Architecture: {host.architecture}")
    color = "yellow" if "unsupported" in (ptype.value, akey.value) else "green"
    click.secho(f"   Package type: {ptype.value}", fg=color)
    click.secho(f"   Arch key:     {akey.value}", fg=color)
    click.echo()


@cli.command()
@click.option("--remove", is_flag=True, help="Resolve for removal (name only).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@_platform_options
@click.pass_context
def resolve(
    ctx: click.Context,
    remove: bool,
    as_json: bool,
    os_family: str | None,
    architecture: str | None,
) -> None:
    """Show which package this host would get. Changes nothing."""
    from native_package.core.use_cases.apply import run_resolve

    result = run_resolve(
        config_path=ctx.obj.get("config_path"),
        remove=remove,
        os_family=os_family,
        architecture=architecture,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    target = result.target
    assert target is not None
    click.secho(f"\n🎯 Target ({result.action})", fg="cyan", bold=True)
    click.echo(f"   Type: {target.package_type.value}   Arch key: {target.arch_key.value}")
    click.echo(f"   Name: {target.name or '—'}")
    if not remove:
        click.echo(f"   URL:  {target.url or '—'}")
    if result.plan:
        click.echo()
        for step in result.plan:
            click.echo(f"     • {step}")
    click.echo()


def _run(
    ctx: click.Context,
    direction: str,
    *,
    as_json: bool,
    ask_sudo: bool,
    dry_run: bool,
    os_family: str | None,
    architecture: str | None,
) -> None:
    from native_package.core.use_cases.apply import run_apply

    sudo_password = ""
    if ask_sudo and not dry_run:
        sudo_password = click.prompt("sudo password", hide_input=True, err=True)

    result = run_apply(
        direction,  # type: ignore[arg-type]
        config_path=ctx.obj.get("config_path"),
        os_family=os_family,
        architecture=architecture,
        sudo_password=sudo_password,
        dry_run=dry_run,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        where = f" on {result.platform}" if result.platform else ""
        click.secho(
            f"❌ {result.action} failed [{result.phase}]{where}: {result.error}",
            fg="red", err=True,
        )
        sys.exit(1)

    quiet = ctx.obj.get("quiet", False)

    if dry_run:
        if result.installed_state and result.installed_state.value == "installed":
            click.echo("[dry-run] already installed, nothing to do")
        elif not result.plan:
            click.echo("[dry-run] nothing to do")
        else:
            click.secho(f"[dry-run] {result.action} would run:", fg="cyan")
            for step in result.plan:
                click.echo(f"   • {step}")
        return

    receipt = result.receipt
    assert receipt is not None
    name = receipt.target.name if receipt.target and receipt.target.name else "package"
    if receipt.changed:
        verb = "installed" if result.action == "install" else "removed"
        click.secho(f"✅ {name} {verb}", fg="green")
    elif not quiet:
        click.echo(f"✓ {receipt.output or f'{name}: no change'}")
    if ctx.obj.get("verbose") and receipt.output and receipt.changed:
        for line in receipt.output.splitlines()[:10]:
            click.echo(f"   │ {line}")


@cli.command()
@_run_options
@_platform_options
@click.pass_context
def apply(ctx: click.Context, **kwargs) -> None:
    """Install or remove, following the document's `installed` flag."""
    _run(ctx, "apply", **kwargs)


@cli.command()
@_run_options
@_platform_options
@click.pass_context
def install(ctx: click.Context, **kwargs) -> None:
    """Install the package for this host (skipped if already installed)."""
    _run(ctx, "install", **kwargs)


@cli.command()
@_run_options
@_platform_options
@click.pass_context
def remove(ctx: click.Context, **kwargs) -> None:
    """Remove the package for this host (no-op if no name is configured)."""
    _run(ctx, "remove", **kwargs)


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate native_package.yml."""
    from native_package.core.use_cases.apply import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.spec is not None
        types = result.spec.package_urls.configured_types()
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Types: {', '.join(t.value for t in types) or 'none'}")
        click.echo(f"   Installed: {result.spec.installed}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


if __name__ == "__main__":
    cli()
