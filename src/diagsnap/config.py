"""Configuration loading with smart defaults."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import fastjsonschema
import pyjson5

from .exceptions import ConfigError, ConfigNotFoundError
from .model import Context

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "diagsnap.json5"

_UPDATE_CHOICES = ["wip", "overwrite", "disabled"]

_CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "log_level": {"type": "string"},
        "snapshots_dir": {"type": "string"},
        "wip_dir": {"type": ["string", "null"]},
        "update": {"enum": _UPDATE_CHOICES},
        "context": {
            "type": "object",
            "properties": {
                "package_name": {"type": "string"},
                "source_directory": {"type": "string"},
                "workspace_root": {"type": "string"},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}

_VALIDATE = fastjsonschema.compile(_CONFIG_SCHEMA)

_CONTEXT_FIELDS = ("package_name", "source_directory", "workspace_root")


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load configuration, falling back to ./diagsnap.json5 or defaults"""
    if path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_NAME
        config = _read_config(candidate) if candidate.exists() else {}
    else:
        candidate = Path(path)
        if not candidate.exists():
            raise ConfigNotFoundError(f"Configuration file not found: {candidate}")
        config = _read_config(candidate)

    config.setdefault("log_level", "INFO")
    config.setdefault("snapshots_dir", "tests/ui")
    config.setdefault("wip_dir", None)
    config.setdefault("update", "wip")
    config.setdefault("context", {})
    return config


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = pyjson5.load(handle)
        _VALIDATE(payload)
    except fastjsonschema.JsonSchemaException as exc:
        raise ConfigError(f"Invalid configuration {path}: {exc.message}") from exc
    except Exception as exc:
        raise ConfigError(f"Failed to load configuration {path}: {exc}") from exc
    logger.debug(f"Loaded configuration from {path}")
    return dict(payload)


def context_from_config(config: Dict[str, Any], **overrides: Optional[str]) -> Context:
    """Build a Context from the config's context block; non-None overrides win."""

    values = dict(config.get("context") or {})
    values.update({key: value for key, value in overrides.items() if value is not None})

    unknown = sorted(set(values) - set(_CONTEXT_FIELDS))
    if unknown:
        raise ConfigError(f"Unknown context fields: {', '.join(unknown)}")
    missing = [name for name in _CONTEXT_FIELDS if not values.get(name)]
    if missing:
        raise ConfigError(f"Missing context values: {', '.join(missing)}")

    return Context(
        package_name=values["package_name"],
        source_directory=values["source_directory"],
        workspace_root=values["workspace_root"],
    )
