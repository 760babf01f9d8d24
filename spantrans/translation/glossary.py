"""
Glossary lookup by name and language direction.
"""

from typing import Dict, List, Optional, Tuple

from spantrans.deepl.models import Glossary
from spantrans.language_codes import extract_base_language
from spantrans.logger import get_logger

logger = get_logger(__name__)


class GlossaryResolver:
    """
    Find glossary ids for (name, source, target) lookups.

    A resolver is meant to live for a single request: the catalog is fetched
    at most once, and every answer (including "no glossary") is remembered for
    the rest of that request.
    """

    def __init__(self, client):
        self.client = client
        self._catalog: Optional[List[Glossary]] = None
        self._cache: Dict[Tuple[str, str, str], Optional[str]] = {}

    def _get_catalog(self) -> List[Glossary]:
        if self._catalog is None:
            # Provider errors propagate and abort the enclosing request
            self._catalog = self.client.list_glossaries()
            logger.debug(f"Fetched {len(self._catalog)} glossaries")
        return self._catalog

    def resolve(self, name: str, source_lang: str, target_lang: str) -> Optional[str]:
        """
        Return the id of the glossary called `name` for source_lang -> target_lang.

        Languages are compared in base form and direction matters: a DE->EN
        glossary does not match an EN->DE request.
        """
        if not name:
            return None

        key = (name, extract_base_language(source_lang), extract_base_language(target_lang))
        if key in self._cache:
            return self._cache[key]

        glossary_id = None
        for glossary in self._get_catalog():
            entry_key = (
                glossary.name,
                extract_base_language(glossary.source_lang),
                extract_base_language(glossary.target_lang),
            )
            if entry_key == key:
                glossary_id = glossary.glossary_id
                break

        if glossary_id is None:
            logger.info(f"No glossary named '{name}' for {key[1]} -> {key[2]}")
        else:
            logger.debug(f"Using glossary {glossary_id} for {key[1]} -> {key[2]}")

        self._cache[key] = glossary_id
        return glossary_id
