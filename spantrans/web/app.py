"""Flask application configuration and blueprint registration."""

from __future__ import annotations

from flask import Flask, jsonify

from spantrans.deepl.exceptions import TranslationError
from spantrans.logger import get_logger

from .errors import translation_error_response
from .routes.documents import documents_bp
from .routes.session import session_bp
from .routes.deepl import deepl_bp
from .routes.settings import settings_bp
from .workspace import EXTENSION_KEY, Workspace

logger = get_logger(__name__)


def build_app(client=None, detector=None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # Ensure JSON responses keep Unicode data.
    app.json.ensure_ascii = False

    app.extensions[EXTENSION_KEY] = Workspace(client=client, detector=detector)

    register_blueprints(app)
    register_default_routes(app)

    return app


def register_blueprints(app: Flask) -> None:
    """Register Flask blueprints."""
    app.register_blueprint(documents_bp, url_prefix="/api/documents")
    app.register_blueprint(session_bp, url_prefix="/api/session")
    app.register_blueprint(deepl_bp, url_prefix="/api/deepl")
    app.register_blueprint(settings_bp, url_prefix="/api/settings")


def register_default_routes(app: Flask) -> None:
    """Register health route and error handlers."""

    @app.get("/health")
    def health_check():
        logger.debug("Health check requested")
        return jsonify({"status": "ok"})

    @app.errorhandler(TranslationError)
    def translation_error(e):
        return translation_error_response(e)

    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify({"error": "Not found", "code": "not_found"}), 404

    @app.errorhandler(500)
    def internal_error(e):
        logger.exception("Internal server error: %s", e)
        return jsonify({"error": "Unexpected error occurred", "code": "internal_error"}), 500
