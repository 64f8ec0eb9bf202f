"""
Application settings.
Built-in defaults, overlaid by config/config.json in the app root, then by
the user config directory, then by environment variables.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

app_root = Path(__file__).parent.parent.parent

DEFAULT_SETTINGS = {
    'api_client': {
        'timeout_ms': 30000,
        'user_agent': 'curl-workbench/1.0',
        'retries': 0,
        'verify_ssl': True,
        'max_body_size': 1024 * 1024,
    },
    'logging': {
        'level': 'INFO',
    },
    'server': {
        'host': '127.0.0.1',
        'port': 8000,
    },
}


def get_config_dir() -> Path:
    """User configuration directory, overridable with CURL_WORKBENCH_CONFIG_DIR."""
    override = os.environ.get('CURL_WORKBENCH_CONFIG_DIR')
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "curl-workbench"


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _load_file(config_file: Path) -> Dict[str, Any]:
    """Load a JSON config file; missing or invalid files yield {}."""
    if not config_file.exists():
        return {}
    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning("Skipping config file %s: %s", config_file, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Skipping config file %s: top level is not an object", config_file)
        return {}
    return data


def _apply_env_overrides(settings: Dict[str, Any]) -> None:
    port = os.environ.get('CURL_WORKBENCH_PORT')
    if port:
        try:
            settings['server']['port'] = int(port)
        except ValueError:
            logger.warning("Ignoring invalid CURL_WORKBENCH_PORT: %s", port)

    level = os.environ.get('CURL_WORKBENCH_LOG_LEVEL')
    if level:
        settings['logging']['level'] = level.upper()


def load_settings(root: Optional[Path] = None) -> Dict[str, Any]:
    """Load settings from every source, later sources winning."""
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    for config_file in ((root or app_root) / "config" / "config.json",
                        get_config_dir() / "config.json"):
        _merge(settings, _load_file(config_file))
    _apply_env_overrides(settings)
    return settings


_settings: Optional[Dict[str, Any]] = None


def get_settings() -> Dict[str, Any]:
    """Settings loaded once per process."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def get_api_client_settings() -> Dict[str, Any]:
    return get_settings()['api_client']
