"""JSON error responses for translation failures."""

from __future__ import annotations

from flask import jsonify

from spantrans.deepl.exceptions import DeepLError, ErrorKind, TranslationError
from spantrans.translation.session import SessionError
from spantrans.logger import get_logger

logger = get_logger(__name__)

# Provider failures the client can act on keep their status; the rest are 502
PASS_THROUGH_STATUS = {
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.PAYLOAD_TOO_LARGE: 413,
    ErrorKind.SERVICE_UNAVAILABLE: 503,
}


def status_for_error(error: TranslationError) -> int:
    if isinstance(error, DeepLError):
        return PASS_THROUGH_STATUS.get(error.kind, 502)
    if isinstance(error, SessionError):
        return 404 if error.details.get("reason") == "no_session" else 409
    return 400


def translation_error_response(error: TranslationError):
    status = status_for_error(error)
    logger.warning("Request failed with %s (%s): %s", status, error.code, error)
    error_response = {"error": str(error), "code": error.code or "translation_error"}
    if error.details:
        error_response["details"] = error.details
    return jsonify(error_response), status
