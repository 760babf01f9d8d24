import copy
import json
from typing import Dict, Any

from spantrans.core import database as db
from spantrans.core.schema import initialize_database
from spantrans.logger import get_logger

logger = get_logger(__name__)

API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"

# Provider endpoints
DEEPL_API_URL = "https://api.deepl.com/v2"
DEEPL_FREE_API_URL = "https://api-free.deepl.com/v2"
FREE_API_KEY_SUFFIX = ":fx"

PROVIDER_DEFAULTS = {
    "timeout": 30
}

# Default configuration template
DEFAULT_CONFIG = {
    "deepl": {
        "api_key": API_KEY_PLACEHOLDER,
        "api_url": "",  # Empty: derived from the key (free keys end in ':fx')
        "timeout": 30
    },
    "languages": {
        "first": "DE",
        "second": "EN-US"
    },
    "glossary_name": "",
    "round_trip": False,
    "translation": {
        "split_sentences": "all",  # none | all | sentence_only
        "preserve_formatting": False,
        "formality": "default",  # default | more | less
        "model_type": "prefer_quality"  # latency | quality | prefer_latency | prefer_quality
    },
    "rephrase": {
        "target_lang": "",
        "style": ""
    },
    "log_mode": "off"
}


def default_config() -> Dict[str, Any]:
    """Return a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def get_api_url(deepl_config: Dict[str, Any]) -> str:
    """
    Resolve the provider base URL.

    An explicit api_url wins; otherwise free-tier keys (suffix ':fx') use the
    free endpoint and everything else the pro endpoint.
    """
    api_url = deepl_config.get('api_url') or ''
    if api_url:
        return api_url.rstrip('/')
    api_key = deepl_config.get('api_key') or ''
    if api_key.endswith(FREE_API_KEY_SUFFIX):
        return DEEPL_FREE_API_URL
    return DEEPL_API_URL


def initialize_app():
    """
    Initialize the application.
    This function is called on first run or when performing a factory reset.
    It creates the database and default configuration in database.
    """
    logger.info("Initializing application...")

    initialize_database()
    logger.info("Database initialized")

    try:
        existing_config = db.get_app_config('config')
        if not existing_config:
            logger.info("No config in database, initializing default config")
            save_config(default_config())
        else:
            logger.debug("Config already exists in database")
    except Exception as e:
        logger.error(f"Failed to check/initialize config in database: {e}")
        logger.warning("Application will use in-memory default configuration")

    logger.info("Application initialization complete")


def _merge_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Fill in sections and keys missing from a stored configuration."""
    merged = default_config()
    for key, value in config.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def load_config() -> Dict[str, Any]:
    """Load the configuration from database."""
    try:
        config_json = db.get_app_config('config')
        if config_json:
            config = _merge_defaults(json.loads(config_json))
            logger.debug("Configuration loaded from database")
            return config

        logger.info("No config in database, using defaults and saving to database")
        config = default_config()
        try:
            save_config(config)
        except Exception as save_error:
            logger.error(f"Failed to save default config to database: {save_error}")
            logger.warning("Returning default configuration without saving")
        return config
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse config from database: {e}")
        logger.warning("Using default configuration")
        config = default_config()
        try:
            save_config(config)
            logger.info("Saved default configuration to replace corrupted data")
        except Exception as save_error:
            logger.error(f"Failed to replace corrupted config: {save_error}")
        return config
    except Exception as e:
        logger.error(f"Failed to load config from database: {e}")
        logger.warning("Using default configuration")
        return default_config()


def save_config(config: Dict[str, Any]):
    """Save the configuration to database."""
    try:
        config_json = json.dumps(config, ensure_ascii=False)
        db.set_app_config('config', config_json)
        logger.info("Configuration saved to database")
    except Exception as e:
        logger.error(f"Failed to save config to database: {e}")
        raise


def factory_reset():
    """
    Perform a factory reset.
    WARNING: This will delete the stored settings and reset to defaults.
    """
    logger.warning("Performing factory reset...")

    if db.DB_FILE.exists():
        db.DB_FILE.unlink()
        logger.info("Database deleted")

    initialize_app()
    logger.info("Factory reset complete")
