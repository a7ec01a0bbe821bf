"""Load and merge configuration from .dirdiff.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from dirdiff.config.schema import (
    OUTPUT_FORMATS,
    VIEW_TYPES,
    CompareConfig,
    DirDiffConfig,
    ExportConfig,
    IgnoreConfig,
    NamespacesConfig,
    OutputConfig,
)

CONFIG_FILE_NAME = ".dirdiff.toml"

_TRUE = ("1", "true", "yes")
_FALSE = ("0", "false", "no")


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: DirDiffConfig) -> None:
    """Apply DIRDIFF_* environment variable overrides."""
    if val := os.environ.get("DIRDIFF_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("DIRDIFF_VIEW"):
        if val in VIEW_TYPES:
            cfg.output.view = val  # type: ignore[assignment]
    if val := os.environ.get("DIRDIFF_ENCODING"):
        cfg.compare.encoding = val
    if val := os.environ.get("DIRDIFF_IGNORE_FILE"):
        cfg.ignore.file = val
    if val := os.environ.get("DIRDIFF_IGNORE_PATTERNS"):
        cfg.ignore.patterns.extend(p.strip() for p in val.split(os.pathsep) if p.strip())
    if val := os.environ.get("DIRDIFF_DETECT_MOVES"):
        if val.lower() in _TRUE:
            cfg.compare.detect_moves = True
        elif val.lower() in _FALSE:
            cfg.compare.detect_moves = False


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: DirDiffConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Invalid output.format: {cfg.output.format!r}")
    if cfg.output.view not in VIEW_TYPES:
        raise ConfigError(f"Invalid output.view: {cfg.output.view!r}")
    if not isinstance(cfg.ignore.patterns, list):
        raise ConfigError("ignore.patterns must be a list of globs")


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> DirDiffConfig:
    """Load, validate, and return a DirDiffConfig."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = DirDiffConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = DirDiffConfig(
            version=raw.get("version", "1.0"),
            compare=_build_section(raw, CompareConfig, "compare"),
            ignore=_build_section(raw, IgnoreConfig, "ignore"),
            output=_build_section(raw, OutputConfig, "output"),
            export=_build_section(raw, ExportConfig, "export"),
            namespaces=_build_section(raw, NamespacesConfig, "namespaces"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
