from typing import Dict, List, Optional, Tuple

import pytest

import spantrans.logger as logger_module
from spantrans.core import database as db
from spantrans.deepl.models import Glossary, TranslationResult


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path, monkeypatch):
    """Keep settings database and log files inside the test's temp directory."""
    monkeypatch.setattr(db, "DB_FILE", tmp_path / "translations.db")
    monkeypatch.setattr(logger_module, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(logger_module, "LOG_FILE", tmp_path / "logs" / "app.log")
    monkeypatch.setattr(logger_module, "_log_mode_cache", None)
    yield tmp_path


class FakeClient:
    """Records provider calls instead of sending them."""

    def __init__(
        self,
        translations: Optional[Dict[Tuple[str, str], str]] = None,
        glossaries: Optional[List[Glossary]] = None,
        fail_on_call: Optional[int] = None,
        error: Optional[Exception] = None,
        glossary_error: Optional[Exception] = None,
    ):
        self.translations = translations or {}
        self.glossaries = glossaries or []
        self.fail_on_call = fail_on_call
        self.error = error
        self.glossary_error = glossary_error
        self.calls: List[dict] = []
        self.rephrase_calls: List[dict] = []
        self.glossary_fetches = 0

    def translate(self, text, target_lang, source_lang=None, glossary_id=None, options=None):
        self.calls.append({
            "text": text,
            "target_lang": target_lang,
            "source_lang": source_lang,
            "glossary_id": glossary_id,
            "options": options,
        })
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise self.error
        translated = self.translations.get((text, target_lang), f"{text} [{target_lang}]")
        return TranslationResult(text=translated)

    def rephrase(self, text, target_lang=None, style_or_tone=None):
        self.rephrase_calls.append({"text": text, "target_lang": target_lang, "style_or_tone": style_or_tone})
        if self.error is not None and self.fail_on_call is None:
            raise self.error
        return f"{text} (rephrased)"

    def list_glossaries(self):
        self.glossary_fetches += 1
        if self.glossary_error is not None:
            raise self.glossary_error
        return list(self.glossaries)


@pytest.fixture
def fake_client_class():
    return FakeClient
