"""
Configuration Manager for the cost segregation service

Handles loading application configuration from user-editable JSON files,
with environment variables taking precedence.

Config file locations (checked in order):
1. $COSTSEG_CONFIG (explicit path)
2. ./config.json (current working directory)
3. ~/.config/costseg/config.json

If no config file exists, DEFAULT_CONFIG is used as-is.
Tax tables are configured separately (see tax_year_config.py).
"""

import os
import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any, List

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "COSTSEG_CONFIG"

# Default configuration
DEFAULT_CONFIG = {
    "_comment": "Cost segregation service configuration - edit this file to configure the application",
    "log_level": "INFO",
    "log_to_file": False,
    "log_dir": "logs",
    "server_host": "127.0.0.1",
    "server_port": 8000,
    "cors_allowed_origins": ["http://localhost:3000"],
}

# config key -> (environment variable, type)
ENV_OVERRIDES = {
    "log_level": ("COSTSEG_LOG_LEVEL", str),
    "log_to_file": ("COSTSEG_LOG_TO_FILE", bool),
    "log_dir": ("COSTSEG_LOG_DIR", str),
    "server_host": ("COSTSEG_SERVER_HOST", str),
    "server_port": ("COSTSEG_SERVER_PORT", int),
    "cors_allowed_origins": ("COSTSEG_CORS_ALLOWED_ORIGINS", list),
}


def get_config_paths() -> List[Path]:
    """Get list of possible config file locations, in priority order."""
    paths = []

    # 1. Explicit path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        paths.append(Path(env_path))

    # 2. Current working directory
    paths.append(Path.cwd() / "config.json")

    # 3. User config directory
    paths.append(Path.home() / ".config" / "costseg" / "config.json")

    return paths


def find_config_file() -> Optional[Path]:
    """Find the first existing config file."""
    for path in get_config_paths():
        if path.exists():
            logger.info(f"Found config file: {path}")
            return path
    return None


def _coerce_env_value(raw: str, kind: type) -> Any:
    if kind is bool:
        return raw.strip().lower() in ("true", "1", "yes")
    if kind is int:
        return int(raw)
    if kind is list:
        return [item.strip() for item in raw.split(",") if item.strip()]
    return raw


def apply_environment_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Environment variables take precedence over file values."""
    for config_key, (env_key, kind) in ENV_OVERRIDES.items():
        raw = os.environ.get(env_key)
        if raw is None or raw == "":
            continue
        try:
            config[config_key] = _coerce_env_value(raw, kind)
            logger.debug(f"Set {config_key} from {env_key}")
        except ValueError:
            logger.warning(f"Ignoring invalid value for {env_key}: {raw!r}")
    return config


def load_config() -> Dict[str, Any]:
    """
    Load configuration from file and environment.

    Returns merged config (defaults <- file <- environment).
    """
    config = dict(DEFAULT_CONFIG)

    config_path = find_config_file()

    if config_path is not None:
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)

            # Merge file config with defaults
            for key, value in file_config.items():
                if not key.startswith('_'):  # Skip comments
                    config[key] = value

            logger.info(f"Loaded config from: {config_path}")

        except (OSError, json.JSONDecodeError, AttributeError) as e:
            logger.error(f"Error loading config from {config_path}: {e}")
    else:
        logger.debug("No config file found, using defaults")

    return apply_environment_overrides(config)


# Singleton config instance
_config: Optional[Dict[str, Any]] = None


def get_config() -> Dict[str, Any]:
    """Get the current config (loads if not already loaded)."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached config so the next get_config() reloads it."""
    global _config
    _config = None
