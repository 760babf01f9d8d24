"""Settings management API routes."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, jsonify, request

import spantrans.config as config
from spantrans.deepl.models import (
    Formality,
    MODEL_TYPE_NAMES,
    SPLIT_SENTENCES_NAMES,
    TONES,
    WRITING_STYLES,
)
from spantrans.language_codes import LanguagePair, get_all_language_codes
from spantrans.logger import get_logger, LOG_MODES, _clear_log_mode_cache

settings_bp = Blueprint("settings", __name__)
logger = get_logger(__name__)

SECTION_KEYS = ("deepl", "languages", "translation", "rephrase")
TOP_LEVEL_KEYS = ("glossary_name", "round_trip", "log_mode")


@settings_bp.get("/")
def get_settings():
    """Return current configuration with the choices the frontend offers."""
    current_config = config.load_config()
    logger.debug("Settings retrieved")

    try:
        language_pair = LanguagePair.from_config(current_config["languages"]).to_dict()
    except ValueError:
        language_pair = None

    return jsonify({
        "config": current_config,
        "meta": {
            "languages": get_all_language_codes(),
            "language_pair": language_pair,
            "split_sentences": list(SPLIT_SENTENCES_NAMES),
            "formality": [f.value for f in Formality],
            "model_type": list(MODEL_TYPE_NAMES),
            "writing_styles": list(WRITING_STYLES),
            "tones": list(TONES),
            "log_modes": list(LOG_MODES),
            "provider_defaults": config.PROVIDER_DEFAULTS,
        }
    })


@settings_bp.put("/")
def update_settings():
    """Update system configuration."""
    data = request.get_json(silent=True)
    if not data or "config" not in data:
        return jsonify({"error": "Request body must contain 'config'", "code": "config_missing"}), 400

    new_config = data["config"]

    validation_error = validate_config(new_config)
    if validation_error:
        return jsonify({"error": validation_error, "code": "invalid_config"}), 400

    # Merge with existing config to preserve any fields not in the request
    current_config = config.load_config()
    for section in SECTION_KEYS:
        if section in new_config:
            current_config[section].update(new_config[section])
    for key in TOP_LEVEL_KEYS:
        if key in new_config:
            current_config[key] = new_config[key]

    # The merged pair can still collide, e.g. when only one side was sent
    try:
        LanguagePair.from_config(current_config["languages"])
    except ValueError as e:
        return jsonify({"error": str(e), "code": "invalid_config"}), 400

    config.save_config(current_config)

    # Clear log mode cache to ensure new log mode takes effect
    _clear_log_mode_cache()

    logger.info("Settings updated successfully")
    return jsonify({"message": "Settings updated successfully", "config": current_config})


def validate_config(config_dict: Dict[str, Any]) -> str | None:
    """Validate configuration structure and return error message if invalid."""
    if not isinstance(config_dict, dict):
        return "Configuration must be an object"

    for section in SECTION_KEYS:
        if section in config_dict and not isinstance(config_dict[section], dict):
            return f"{section} must be an object"

    deepl_config = config_dict.get("deepl", {})
    if "api_key" in deepl_config and not isinstance(deepl_config["api_key"], str):
        return "deepl api_key must be a string"
    if "api_url" in deepl_config and deepl_config["api_url"] and not isinstance(deepl_config["api_url"], str):
        return "deepl api_url must be a string"
    if "timeout" in deepl_config:
        timeout = deepl_config["timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            return "deepl timeout must be a positive number"

    languages = config_dict.get("languages", {})
    for key in ("first", "second"):
        if key in languages and (not isinstance(languages[key], str) or not languages[key].strip()):
            return f"languages.{key} must be a non-empty string"

    translation = config_dict.get("translation", {})
    if "split_sentences" in translation and translation["split_sentences"] not in SPLIT_SENTENCES_NAMES:
        return f"Invalid split_sentences: {translation['split_sentences']}"
    if "formality" in translation and translation["formality"] not in [f.value for f in Formality]:
        return f"Invalid formality: {translation['formality']}"
    if "model_type" in translation and translation["model_type"] not in MODEL_TYPE_NAMES:
        return f"Invalid model_type: {translation['model_type']}"
    if "preserve_formatting" in translation and not isinstance(translation["preserve_formatting"], bool):
        return "preserve_formatting must be a boolean"

    if "round_trip" in config_dict and not isinstance(config_dict["round_trip"], bool):
        return "round_trip must be a boolean"
    if "glossary_name" in config_dict and not isinstance(config_dict["glossary_name"], str):
        return "glossary_name must be a string"
    if "log_mode" in config_dict and config_dict["log_mode"] not in LOG_MODES:
        return f"Invalid log_mode: {config_dict['log_mode']}"

    return None
