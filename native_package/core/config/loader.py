"""
Configuration loader — reads the package_urls document.

Reads YAML, validates against the Pydantic models, and returns a
typed NativePackageSpec. Shape problems (not a mapping, wrong types)
are reported here; a missing URL or name for the host is not — that
is only known once the platform has been classified.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from native_package.core.models.package import NativePackageSpec

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "native_package.yml"


class ConfigError(Exception):
    """Raised when the config document is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for native_package.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def parse_spec(data: object, *, source: str = "<document>") -> NativePackageSpec:
    """Validate an already-parsed document.

    Raises:
        ConfigError: If the document is not a mapping or fails validation.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {source}, got {type(data).__name__}")

    try:
        return NativePackageSpec.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e


def load_spec(path: Path | None = None) -> NativePackageSpec:
    """Load and validate the config document.

    Args:
        path: Explicit path. If None, searches upward from the cwd.

    Returns:
        Validated NativePackageSpec.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(f"No {CONFIG_FILE} found. Specify one with --config.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    spec = parse_spec(data, source=str(path))
    logger.info(
        "Loaded %s (types: %s, installed=%s)",
        path,
        ", ".join(t.value for t in spec.package_urls.configured_types()) or "none",
        spec.installed,
    )
    return spec
