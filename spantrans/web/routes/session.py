"""Review session API routes."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, jsonify, request

from spantrans.logger import get_logger
from spantrans.web.workspace import current_workspace

session_bp = Blueprint("session", __name__)
logger = get_logger(__name__)


def _session_payload(session):
    return jsonify({"session": session.to_dict(), "document": session.document.to_dict()})


@session_bp.get("")
def get_session():
    """Return the current (or last) review session."""
    session = current_workspace().sessions.current
    if session is None:
        return jsonify({"session": None})
    return jsonify({"session": session.to_dict()})


@session_bp.put("/draft")
def edit_draft():
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    text = data.get("text")
    if not isinstance(text, str):
        return jsonify({"error": "text must be a string", "code": "invalid_text"}), 400

    session = current_workspace().sessions.edit(text)
    return jsonify({"session": session.to_dict()})


@session_bp.post("/accept")
def accept_session():
    """Write the draft back into the document."""
    session = current_workspace().sessions.accept()
    return _session_payload(session)


@session_bp.post("/dismiss")
def dismiss_session():
    session = current_workspace().sessions.dismiss()
    return _session_payload(session)
