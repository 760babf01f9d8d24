"""Route blueprints for the web application."""

from .documents import documents_bp
from .session import session_bp
from .deepl import deepl_bp
from .settings import settings_bp

__all__ = [
    "documents_bp",
    "session_bp",
    "deepl_bp",
    "settings_bp",
]
