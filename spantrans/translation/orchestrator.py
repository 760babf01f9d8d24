"""
Request orchestration: single-hop and round-trip translation chains, rephrasing.
"""

from typing import Callable, List, Optional, Sequence

from spantrans.deepl.exceptions import TranslationError
from spantrans.deepl.models import TranslationOptions
from spantrans.language_codes import LanguagePair
from spantrans.logger import get_logger
from spantrans.translation.glossary import GlossaryResolver

logger = get_logger(__name__)


def build_route(detected_lang: str, pair: LanguagePair, round_trip: bool = False) -> List[str]:
    """
    Build the target language sequence for a text written in `detected_lang`.

    Examples:
        >>> build_route('DE', LanguagePair('DE', 'EN-US'))
        ['EN-US']
        >>> build_route('DE', LanguagePair('DE', 'EN-US'), round_trip=True)
        ['EN-US', 'DE']
    """
    other = pair.other_language(detected_lang)
    if round_trip:
        return [other, detected_lang]
    return [other]


class RequestOrchestrator:
    """Sequence translation client calls for one user request."""

    def __init__(
        self,
        client,
        detect_language: Callable[[str], str],
        glossary_name: str = "",
        options: Optional[TranslationOptions] = None,
    ):
        self.client = client
        self.detect_language = detect_language
        self.glossary_name = glossary_name or ""
        self.options = options or TranslationOptions()

    def translate_chain(
        self,
        text: str,
        target_langs: Sequence[str],
        source_lang: Optional[str] = None,
    ) -> str:
        """
        Translate `text` through each language of `target_langs` in order.

        The first hop translates from the detected language of `text`; every
        later hop translates the previous result, with the previous target as
        its source. A failure at any hop aborts the chain.

        Args:
            text: Source text, must not be blank
            target_langs: Non-empty ordered target languages
            source_lang: Language of `text` when the caller already detected it

        Returns:
            Text produced by the last hop
        """
        if not target_langs:
            raise ValueError("At least one target language is required")
        if not text or not text.strip():
            raise TranslationError("Text to translate is empty", code="empty_text")

        if not source_lang:
            source_lang = self.detect_language(text)
        glossaries = GlossaryResolver(self.client)

        current = text
        for hop, target_lang in enumerate(target_langs):
            glossary_id = glossaries.resolve(self.glossary_name, source_lang, target_lang)
            logger.info(f"Translating hop {hop + 1}/{len(target_langs)}: {source_lang} -> {target_lang}")
            result = self.client.translate(
                current,
                target_lang,
                source_lang=source_lang,
                glossary_id=glossary_id,
                options=self.options,
            )
            current = result.text
            source_lang = target_lang

        return current

    def rephrase(
        self,
        text: str,
        target_lang: Optional[str] = None,
        style_or_tone: Optional[str] = None,
    ) -> str:
        """Rewrite `text` in the given writing style or tone."""
        if not text or not text.strip():
            raise TranslationError("Text to rephrase is empty", code="empty_text")
        logger.info(f"Rephrasing text (target={target_lang or 'auto'}, style={style_or_tone or 'default'})")
        return self.client.rephrase(text, target_lang=target_lang, style_or_tone=style_or_tone)
