"""Read ``ifbsync.json`` into an :class:`IfbSyncConfig`."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from ifbsync.contracts.config import IfbSyncConfig
from ifbsync.contracts.exceptions import ConfigError


def load_config(path: str | Path) -> IfbSyncConfig:
    """Load and validate a JSON config file.

    Raises:
        ConfigError: If the file cannot be read, is not a JSON object, or
            fails validation.
    """
    config_path = Path(path).expanduser().resolve()

    try:
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc

    if not isinstance(payload, dict):
        raise ConfigError(f"config file must hold a JSON object: {config_path}")
    try:
        return IfbSyncConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid config in {config_path.name}: {exc}") from exc
