"""In-memory state shared by the web routes: documents and the review session."""

from __future__ import annotations

import threading
import uuid
from typing import Any, Callable, Dict, Optional

from flask import current_app

from spantrans.config import load_config
from spantrans.deepl.client import DeepLClient
from spantrans.document import TextDocument
from spantrans.translation.service import TranslationService
from spantrans.translation.session import SessionManager

EXTENSION_KEY = "spantrans"


class Workspace:
    """Documents opened through the API plus the one session manager."""

    def __init__(self, client=None, detector: Optional[Callable[[str], str]] = None):
        self.client = client
        self.detector = detector
        self.sessions = SessionManager()
        self._documents: Dict[str, TextDocument] = {}
        self._documents_lock = threading.Lock()

    def add_document(self, text: str) -> TextDocument:
        document = TextDocument(text, document_id=uuid.uuid4().hex)
        with self._documents_lock:
            self._documents[document.document_id] = document
        return document

    def get_document(self, document_id: str) -> Optional[TextDocument]:
        with self._documents_lock:
            return self._documents.get(document_id)

    def get_client(self, config: Optional[Dict[str, Any]] = None):
        """The injected client, or one built from the current settings."""
        if self.client is not None:
            return self.client
        return DeepLClient.from_config(config if config is not None else load_config())

    def get_service(self) -> TranslationService:
        """A service built from the current settings, sharing this workspace's sessions."""
        config = load_config()
        return TranslationService(
            config=config,
            client=self.get_client(config),
            detector=self.detector,
            sessions=self.sessions,
        )


def current_workspace() -> Workspace:
    return current_app.extensions[EXTENSION_KEY]
