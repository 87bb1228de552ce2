"""Plugin configuration (command toggles, service URLs).

Stored in {data_dir}/config.json. get_config() returns defaults merged with
stored values; update_config() applies a partial update and persists it.
Service URLs can be overridden from the environment (CHAT_SERVICE_URL,
HISCORE_URL, PRICE_SERVICE_URL); the CLI loads .env before reading them.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from chat_commands.chat_client import DEFAULT_CHAT_SERVICE_URL
from chat_commands.hiscore import DEFAULT_HISCORE_URL
from chat_commands.items import DEFAULT_PRICE_SERVICE_URL

_CONFIG_DEFAULTS: dict[str, Any] = {
    "lvl": True,
    "price": True,
    "clue": True,
    "killcount": True,
    "qp": True,
    "pb": True,
    "gc": True,
    "duels": True,
    "pks": True,
    "chat_service_url": DEFAULT_CHAT_SERVICE_URL,
    "hiscore_url": DEFAULT_HISCORE_URL,
    "price_service_url": DEFAULT_PRICE_SERVICE_URL,
}

_ENV_OVERRIDES = {
    "chat_service_url": "CHAT_SERVICE_URL",
    "hiscore_url": "HISCORE_URL",
    "price_service_url": "PRICE_SERVICE_URL",
}


class ChatCommandsConfig(BaseModel):
    """Typed view of the merged config."""

    lvl: bool = True  # !lvl, !total and !cmb
    price: bool = True
    clue: bool = True
    killcount: bool = True
    qp: bool = True
    pb: bool = True
    gc: bool = True
    duels: bool = True
    pks: bool = True
    chat_service_url: str = DEFAULT_CHAT_SERVICE_URL
    hiscore_url: str = DEFAULT_HISCORE_URL
    price_service_url: str = DEFAULT_PRICE_SERVICE_URL


def _config_path(data_dir: Path) -> Path:
    return data_dir / "config.json"


def get_config(data_dir: Path) -> dict[str, Any]:
    """Read config, returning defaults merged with stored values."""
    config = dict(_CONFIG_DEFAULTS)
    path = _config_path(data_dir)
    if path.is_file():
        stored = json.loads(path.read_text())
        for key, value in stored.items():
            if key in config:
                config[key] = value
    return config


def update_config(data_dir: Path, fields: dict[str, Any]) -> dict[str, Any]:
    """Merge fields into config and persist. Returns full config."""
    config = get_config(data_dir)
    for key, value in fields.items():
        if key in config:
            config[key] = value
    data_dir.mkdir(parents=True, exist_ok=True)
    _config_path(data_dir).write_text(json.dumps(config, indent=2))
    return config


def load_config(data_dir: Path) -> ChatCommandsConfig:
    """Merged config with environment overrides applied, validated."""
    config = get_config(data_dir)
    for key, env_name in _ENV_OVERRIDES.items():
        value = os.getenv(env_name, "")
        if value:
            config[key] = value
    return ChatCommandsConfig.model_validate(config)
