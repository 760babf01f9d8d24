"""
Translation Service Module

This module wires the pieces together for callers (web routes, editors):
- configuration validation
- TranslationService: config -> client -> orchestrator -> review sessions
- route construction from the configured language pair
"""

from typing import Any, Callable, Dict, List, Optional

from spantrans.config import API_KEY_PLACEHOLDER, load_config
from spantrans.deepl.client import DeepLClient
from spantrans.deepl.exceptions import TranslationError
from spantrans.deepl.models import TranslationOptions
from spantrans.detection import detect_language
from spantrans.document import Document, Span
from spantrans.language_codes import LanguagePair
from spantrans.logger import get_logger
from spantrans.translation.orchestrator import RequestOrchestrator, build_route
from spantrans.translation.session import ReviewSession, SessionManager

logger = get_logger(__name__)


def validate_deepl_config(config: Optional[Dict[str, Any]] = None) -> None:
    """
    Validate that the provider configuration is properly set up.

    Raises:
        TranslationError: If configuration is invalid or missing, with code and details.
    """
    if config is None:
        config = load_config()

    deepl_config = config.get('deepl', {})
    if not deepl_config:
        raise TranslationError(
            "DeepL configuration not found",
            code="deepl_config_missing",
            details={"missing_field": "deepl"},
        )

    api_key = deepl_config.get('api_key', '')
    if not api_key or api_key == API_KEY_PLACEHOLDER:
        raise TranslationError(
            "DeepL API key not configured. Please set it in Settings.",
            code="deepl_config_missing",
            details={"missing_field": "api_key"},
        )

    _language_pair(config)


def _language_pair(config: Dict[str, Any]) -> LanguagePair:
    languages = config.get('languages', {})
    try:
        return LanguagePair.from_config(languages)
    except ValueError as e:
        raise TranslationError(
            str(e),
            code="invalid_language_pair",
            details={"languages": languages},
        )


class TranslationService:
    """Translate or rephrase spans of a document into review sessions."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        client=None,
        detector: Optional[Callable[[str], str]] = None,
        sessions: Optional[SessionManager] = None,
    ):
        self.config = config if config is not None else load_config()
        self.client = client if client is not None else DeepLClient.from_config(self.config)
        self.detect_language = detector or detect_language
        self.sessions = sessions if sessions is not None else SessionManager()
        self.language_pair = _language_pair(self.config)
        self.orchestrator = RequestOrchestrator(
            self.client,
            self.detect_language,
            glossary_name=self.config.get('glossary_name', ''),
            options=TranslationOptions.from_config(self.config.get('translation', {})),
        )
        logger.debug(
            f"Initialized translation service for {self.language_pair.first} <-> {self.language_pair.second}"
        )

    def route_for(self, text: str, round_trip: Optional[bool] = None) -> List[str]:
        """Target languages for `text`; `round_trip` defaults to the configured flag."""
        return self._route(self.detect_language(text), round_trip)

    def _route(self, detected_lang: str, round_trip: Optional[bool]) -> List[str]:
        if round_trip is None:
            round_trip = bool(self.config.get('round_trip', False))
        return build_route(detected_lang, self.language_pair, round_trip)

    def translate_text(self, text: str, round_trip: Optional[bool] = None) -> str:
        """Translate `text` to the other language of the pair (and back, for a round trip)."""
        if not text or not text.strip():
            raise TranslationError("Text to translate is empty", code="empty_text")
        detected_lang = self.detect_language(text)
        return self.orchestrator.translate_chain(
            text,
            self._route(detected_lang, round_trip),
            source_lang=detected_lang,
        )

    def rephrase_text(
        self,
        text: str,
        style_or_tone: Optional[str] = None,
        target_lang: Optional[str] = None,
    ) -> str:
        rephrase_config = self.config.get('rephrase', {})
        return self.orchestrator.rephrase(
            text,
            target_lang=target_lang or rephrase_config.get('target_lang') or None,
            style_or_tone=style_or_tone or rephrase_config.get('style') or None,
        )

    def translate_span(self, document: Document, span: Span, round_trip: Optional[bool] = None) -> ReviewSession:
        """Open a review session holding the translation of `span`."""
        return self.sessions.run(
            document,
            span,
            lambda text: self.translate_text(text, round_trip),
            kind="translate",
        )

    def rephrase_span(
        self,
        document: Document,
        span: Span,
        style_or_tone: Optional[str] = None,
        target_lang: Optional[str] = None,
    ) -> ReviewSession:
        """Open a review session holding the rephrased text of `span`."""
        return self.sessions.run(
            document,
            span,
            lambda text: self.rephrase_text(text, style_or_tone, target_lang),
            kind="rephrase",
        )
