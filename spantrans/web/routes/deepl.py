"""Provider account API routes."""

from __future__ import annotations

from flask import Blueprint, jsonify

from spantrans.logger import get_logger
from spantrans.web.workspace import current_workspace

deepl_bp = Blueprint("deepl", __name__)
logger = get_logger(__name__)


@deepl_bp.get("/usage")
def get_usage():
    """Return the character usage of the configured account."""
    usage = current_workspace().get_client().get_usage()
    return jsonify({"usage": usage.to_dict()})


@deepl_bp.get("/languages")
def get_languages():
    languages = current_workspace().get_client().get_target_languages()
    return jsonify({"languages": [language.to_dict() for language in languages]})


@deepl_bp.get("/glossaries")
def get_glossaries():
    glossaries = current_workspace().get_client().list_glossaries()
    return jsonify({"glossaries": [glossary.to_dict() for glossary in glossaries]})
