"""
docsrails config management with extends/inheritance support.

Supports:
- Local file: extends: "./base.yaml"
- Multiple extends: extends: ["./base.yaml", "../shared.yaml"]

Guard settings live under the guard identifier:

    valid_docs:
      enabled: true
      severity: warn
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import yaml

from core.logger import log_config_loaded

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".docsrails.yaml"

MAX_CONFIG_BYTES = 1_000_000
MAX_YAML_ALIASES = 100

SEVERITIES = ("info", "warn", "block")


@dataclass(frozen=True)
class GuardConfig:
    """Settings for the valid docs guard."""

    enabled: bool = True
    severity: Literal["info", "warn", "block"] = "warn"


def safe_yaml_load(stream):
    """yaml.safe_load with an alias expansion limit (billion laughs)."""
    class _Loader(yaml.SafeLoader):
        def compose_node(self, parent, index):
            if self.check_event(yaml.AliasEvent):
                count = getattr(self, "_alias_count", 0) + 1
                if count > MAX_YAML_ALIASES:
                    raise yaml.YAMLError(
                        f"YAML alias limit exceeded (max {MAX_YAML_ALIASES})"
                    )
                self._alias_count = count
            return super().compose_node(parent, index)
    return yaml.load(stream, Loader=_Loader)


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Override wins for conflicts.

    Special handling for lists: extends/appends instead of replace.
    """
    result = base.copy()

    for key, value in override.items():
        if key in result:
            if isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            elif isinstance(result[key], list) and isinstance(value, list):
                result[key] = result[key] + value
            else:
                result[key] = value
        else:
            result[key] = value

    return result


def load_extended_config(
    config_path: Path,
    seen_paths: set[str] | None = None
) -> dict:
    """Load config with extends resolution.

    Args:
        config_path: Path to the config file
        seen_paths: Set of already-loaded paths (circular reference detection)

    Returns:
        Merged config dict
    """
    if seen_paths is None:
        seen_paths = set()

    path_key = str(config_path.resolve())
    if path_key in seen_paths:
        logger.warning("Circular config reference detected: %s", config_path)
        return {}

    seen_paths.add(path_key)

    with open(config_path, encoding="utf-8") as f:
        config = safe_yaml_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"Config must be a mapping: {config_path}")

    extends = config.pop("extends", None)
    if not extends:
        return config

    if isinstance(extends, str):
        extends = [extends]

    merged: dict = {}
    for parent_ref in extends:
        parent_config = resolve_extends(parent_ref, config_path.parent, seen_paths)
        if parent_config:
            merged = deep_merge(merged, parent_config)

    return deep_merge(merged, config)


def resolve_extends(
    ref: str,
    base_dir: Path,
    seen_paths: set[str]
) -> dict | None:
    """Resolve a single extends reference relative to *base_dir*."""
    if ref.startswith("http://") or ref.startswith("https://"):
        logger.warning("Remote config extends not supported: %s", ref)
        return None

    local_path = Path(ref) if ref.startswith("/") else base_dir / ref
    if local_path.exists():
        return load_extended_config(local_path, seen_paths.copy())

    logger.warning("Config file not found: %s", local_path)
    return None


def load_config_with_extends(config_path: Path | str) -> dict:
    """Load config file with full extends support.

    This is the main entry point for loading configs.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    if config_path.stat().st_size > MAX_CONFIG_BYTES:
        raise ValueError(f"Config file too large: {config_path}")

    return load_extended_config(config_path)


def guard_config(config: dict, guard: str = "valid_docs") -> GuardConfig:
    """Build a GuardConfig from the *guard* section of a loaded config."""
    section = config.get(guard) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{guard}' config must be a mapping")

    severity = section.get("severity", GuardConfig.severity)
    if severity not in SEVERITIES:
        raise ValueError(
            f"Invalid severity for '{guard}': {severity!r}"
            f" (expected one of {', '.join(SEVERITIES)})"
        )
    return GuardConfig(
        enabled=bool(section.get("enabled", True)),
        severity=severity,
    )


def load_guard_config(config_path: Path | str | None = None) -> GuardConfig:
    """Load guard settings, falling back to defaults without a config file.

    With no explicit path, ``.docsrails.yaml`` in the working directory is
    used when present.
    """
    if config_path is None:
        default = Path.cwd() / DEFAULT_CONFIG_NAME
        if not default.exists():
            return GuardConfig()
        config_path = default
    settings = guard_config(load_config_with_extends(config_path))
    log_config_loaded(str(config_path), settings.enabled, settings.severity)
    return settings
