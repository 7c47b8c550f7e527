import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .paths import app_config_dir, default_data_file

SETTINGS_FILENAME = "app_settings.json"
DEBUG_ENV_VAR = "PROMPTHELPER_DEBUG"
DATA_FILE_ENV_VAR = "PROMPTHELPER_DATA_FILE"

DEFAULT_SETTINGS = {
    "storage": {
        "data_file": None,  # None -> <user root>/data/library.json
    },
    "general_settings": {
        "debug_mode": False,
        "seed_sample_data": True,
    },
    "export_settings": {
        "directory": None,
    },
}


def load_env_file(env_path: Optional[Path] = None) -> bool:
    """Load environment variables from a .env file if one exists."""
    path = env_path or Path(".") / ".env"
    if not path.exists():
        return False
    load_dotenv(path)
    logging.debug(f"Environment variables loaded from '{path}'")
    return True


def settings_file() -> Path:
    return app_config_dir() / SETTINGS_FILENAME


def _merge_defaults(settings: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(DEFAULT_SETTINGS)
    for section, values in settings.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def load_app_settings() -> dict:
    """Loads application settings, creating the file with defaults if not found."""
    path = settings_file()
    if not path.exists():
        logging.info(f"'{path}' not found. Creating with default settings.")
        save_app_settings(DEFAULT_SETTINGS)
        return copy.deepcopy(DEFAULT_SETTINGS)
    try:
        with path.open('r', encoding='utf-8') as f:
            settings = json.load(f)
    except (IOError, json.JSONDecodeError) as e:
        logging.error(f"Error loading '{path}': {e}. Returning default settings.")
        return copy.deepcopy(DEFAULT_SETTINGS)
    if not isinstance(settings, dict):
        logging.error(f"'{path}' does not contain a settings object. Returning default settings.")
        return copy.deepcopy(DEFAULT_SETTINGS)
    return _merge_defaults(settings)


def save_app_settings(settings: dict) -> bool:
    """Saves the provided settings dictionary to the settings file."""
    path = settings_file()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logging.info(f"Settings saved to '{path}'.")
        return True
    except IOError as e:
        logging.error(f"Error saving settings to '{path}': {e}")
        return False


def is_debug_enabled(settings: Optional[dict] = None) -> bool:
    """Environment variable wins over the settings file."""
    env_value = os.getenv(DEBUG_ENV_VAR)
    if env_value is not None:
        return env_value.lower() in ("1", "true", "yes")
    general = (settings or {}).get("general_settings", {})
    return bool(general.get("debug_mode", False))


def resolve_data_file(settings: Optional[dict] = None) -> Path:
    """Return the library file from the environment, settings, or the default location."""
    env_value = os.getenv(DATA_FILE_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()
    configured = (settings or {}).get("storage", {}).get("data_file")
    if configured:
        return Path(configured).expanduser()
    return default_data_file()
