"""Load an AnalyzerConfig from a YAML or JSON file."""

from __future__ import annotations

import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from dep_analyzer.errors import ConfigError
from dep_analyzer.models import EDGE_KINDS, AnalyzerConfig

logger = logging.getLogger(__name__)

_FIELDS = {f.name for f in fields(AnalyzerConfig)}


def load_config(path: Path | str, validate: bool = True) -> AnalyzerConfig:
    """Read a config file; ``validate=False`` allows partial configs, e.g. for scanning."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e

    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        elif path.suffix == ".json":
            data = json.loads(text)
        else:
            raise ConfigError(f"unsupported config format {path.suffix!r}; use .yaml, .yml or .json")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot parse config {path}: {e}") from e

    logger.debug("loaded config from %s", path)
    return config_from_dict(data or {}, base_dir=path.parent, validate=validate)


def config_from_dict(
    data: dict[str, Any], base_dir: Path | None = None, validate: bool = True
) -> AnalyzerConfig:
    """Build a config; relative root paths are taken relative to ``base_dir``."""
    if not isinstance(data, dict):
        raise ConfigError("config must be a mapping")
    unknown = sorted(set(data) - _FIELDS)
    if unknown:
        raise ConfigError(f"unknown config key(s): {', '.join(unknown)}")

    values = dict(data)
    roots = [Path(r) for r in values.get("root_paths", [])]
    if base_dir is not None:
        roots = [r if r.is_absolute() else base_dir / r for r in roots]
    values["root_paths"] = roots
    values["entry_ids"] = [str(e) for e in values.get("entry_ids", [])]
    values["namespace_map"] = {str(k): str(v) for k, v in (values.get("namespace_map") or {}).items()}

    config = AnalyzerConfig(**values)
    if validate:
        validate_config(config)
    return config


def validate_config(config: AnalyzerConfig) -> None:
    if not config.root_paths:
        raise ConfigError("at least one root path is required")
    if not config.entry_ids:
        raise ConfigError("at least one entry class id is required")
    if config.edge_kind not in EDGE_KINDS:
        raise ConfigError(f"edge_kind must be one of {', '.join(EDGE_KINDS)}, not {config.edge_kind!r}")
    if config.workers < 1:
        raise ConfigError("workers must be at least 1")
    if not config.extension.startswith("."):
        raise ConfigError(f"extension must start with '.', got {config.extension!r}")
