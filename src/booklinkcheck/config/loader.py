"""Config loading from TOML or JSON files."""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from booklinkcheck.contracts.config import LinkcheckConfig
from booklinkcheck.contracts.exceptions import ConfigError


def _linkcheck_table(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    """Pick the ``[output.linkcheck]`` table out of a ``book.toml`` payload."""
    output = payload.get("output")
    if isinstance(output, Mapping) and "linkcheck" in output:
        table = output["linkcheck"]
        if not isinstance(table, Mapping):
            raise ConfigError("output.linkcheck must be a table")
        return table
    return payload


def parse_config(payload: Mapping[str, Any]) -> LinkcheckConfig:
    try:
        return LinkcheckConfig.model_validate(dict(_linkcheck_table(payload)))
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc


def load_config(path: str | Path) -> LinkcheckConfig:
    """Load and validate config from a TOML (``book.toml`` or standalone) or JSON file."""
    config_path = Path(path).expanduser().resolve()

    try:
        text = config_path.read_text(encoding="utf-8")
        if config_path.suffix == ".json":
            raw_payload: Any = json.loads(text)
        else:
            raw_payload = tomllib.loads(text)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in config file: {config_path}: {exc}") from exc

    if not isinstance(raw_payload, dict):
        raise ConfigError(f"config root must be an object: {config_path}")
    return parse_config(raw_payload)
