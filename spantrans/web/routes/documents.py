"""Document API routes: create documents and start review sessions on them."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, jsonify, request

from spantrans.document import Span, resolve_span
from spantrans.logger import get_logger
from spantrans.web.workspace import current_workspace

documents_bp = Blueprint("documents", __name__)
logger = get_logger(__name__)


def _optional_int(data: Dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer")
    return value


def _resolve_request_span(document, data: Dict[str, Any]) -> Tuple[Span, str]:
    start = _optional_int(data, "start")
    end = _optional_int(data, "end")
    cursor = _optional_int(data, "cursor")
    selection = (start, end) if start is not None and end is not None else None
    return resolve_span(document, selection=selection, cursor=cursor)


@documents_bp.post("")
def create_document():
    """Create an in-memory document."""
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    text = data.get("text")
    if not isinstance(text, str):
        return jsonify({"error": "text must be a string", "code": "invalid_text"}), 400

    document = current_workspace().add_document(text)
    logger.info("Created document %s (%s chars)", document.document_id, len(text))
    return jsonify({"document": document.to_dict()}), 201


@documents_bp.get("/<document_id>")
def get_document(document_id: str):
    document = current_workspace().get_document(document_id)
    if not document:
        return jsonify({"error": "Document not found", "code": "document_not_found"}), 404
    return jsonify({"document": document.to_dict()})


@documents_bp.post("/<document_id>/translate")
def translate_span(document_id: str):
    """Translate the selection (or the paragraph at the cursor) into a review session."""
    workspace = current_workspace()
    document = workspace.get_document(document_id)
    if not document:
        return jsonify({"error": "Document not found", "code": "document_not_found"}), 404

    data: Dict[str, Any] = request.get_json(silent=True) or {}
    round_trip = data.get("round_trip")
    if round_trip is not None and not isinstance(round_trip, bool):
        return jsonify({"error": "round_trip must be a boolean", "code": "invalid_round_trip"}), 400

    try:
        span, _ = _resolve_request_span(document, data)
    except ValueError as e:
        return jsonify({"error": str(e), "code": "invalid_span"}), 400

    service = workspace.get_service()
    session = service.translate_span(document, span, round_trip=round_trip)
    return jsonify({"session": session.to_dict(), "document": document.to_dict()})


@documents_bp.post("/<document_id>/rephrase")
def rephrase_span(document_id: str):
    """Rephrase the selection (or the paragraph at the cursor) into a review session."""
    workspace = current_workspace()
    document = workspace.get_document(document_id)
    if not document:
        return jsonify({"error": "Document not found", "code": "document_not_found"}), 404

    data: Dict[str, Any] = request.get_json(silent=True) or {}
    style = data.get("style")
    target_lang = data.get("target_lang")

    try:
        span, _ = _resolve_request_span(document, data)
    except ValueError as e:
        return jsonify({"error": str(e), "code": "invalid_span"}), 400

    service = workspace.get_service()
    session = service.rephrase_span(document, span, style_or_tone=style, target_lang=target_lang)
    return jsonify({"session": session.to_dict(), "document": document.to_dict()})
