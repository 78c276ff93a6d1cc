"""Configuration loading for ServiceNow Knowledge Search."""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

CONFIG_FILE = Path(__file__).resolve().parent.parent / "config.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "sources": {
        "documentation": {"enabled": True},
        "community": {"enabled": True},
        "devsite": {"enabled": True},
        "blog": {"enabled": True},
        "github": {"enabled": True},
        "youtube": {"enabled": True},
        "nowcreate": {"enabled": True},
    },
    "cache": {"ttl_seconds": 1800},
    "search": {
        "adapter_timeout_seconds": 10.0,
        "max_results_per_source": 5,
        "use_fixtures": False,
    },
    "rate_limit": {"window_seconds": 60, "max_calls": 30},
    "reliability": {"failure_threshold": 3, "cooldown_seconds": 120.0},
    "servicenow": {
        "instance_url": None,
        "client_id": None,
        "client_secret": None,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip().lower() in {"1", "true", "yes", "on"}


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from config.json with fallback defaults.

    Environment variables (optionally from a .env file) override the file:
    KS_USE_FIXTURES, SERVICENOW_INSTANCE_URL, SERVICENOW_CLIENT_ID,
    SERVICENOW_CLIENT_SECRET.
    """
    load_dotenv()

    config_path = path or CONFIG_FILE
    config = copy.deepcopy(DEFAULT_CONFIG)

    try:
        if config_path.exists():
            config = _deep_merge(
                config, json.loads(config_path.read_text(encoding="utf-8"))
            )
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not load {config_path.name}: {e}")

    use_fixtures = _env_flag("KS_USE_FIXTURES")
    if use_fixtures is not None:
        config["search"]["use_fixtures"] = use_fixtures

    for key in ("instance_url", "client_id", "client_secret"):
        value = os.getenv(f"SERVICENOW_{key.upper()}")
        if value:
            config["servicenow"][key] = value.strip()

    return config
