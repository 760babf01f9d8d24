"""
DeepL request options and response records.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any


class SplitSentences(str, Enum):
    """Sentence splitting; three distinct wire values, not a boolean."""
    NONE = "0"
    ALL = "1"  # punctuation and newlines
    SENTENCE_ONLY = "nonewlines"  # punctuation only


class Formality(str, Enum):
    DEFAULT = "default"
    MORE = "more"
    LESS = "less"


class ModelType(str, Enum):
    LATENCY = "latency_optimized"
    QUALITY = "quality_optimized"
    PREFER_LATENCY = "prefer_latency_optimized"
    PREFER_QUALITY = "prefer_quality_optimized"


# Config names -> enum members
SPLIT_SENTENCES_NAMES = {
    "none": SplitSentences.NONE,
    "all": SplitSentences.ALL,
    "sentence_only": SplitSentences.SENTENCE_ONLY,
}

MODEL_TYPE_NAMES = {
    "latency": ModelType.LATENCY,
    "quality": ModelType.QUALITY,
    "prefer_latency": ModelType.PREFER_LATENCY,
    "prefer_quality": ModelType.PREFER_QUALITY,
}

WRITING_STYLES = ("simple", "business", "academic", "casual")
TONES = ("enthusiastic", "friendly", "confident", "diplomatic")
DEFAULT_STYLE = "default"


@dataclass
class TranslationOptions:
    """Options sent with every translate request. The provider validates combinations."""
    split_sentences: SplitSentences = SplitSentences.ALL
    preserve_formatting: bool = False
    formality: Formality = Formality.DEFAULT
    model_type: ModelType = ModelType.PREFER_QUALITY

    @classmethod
    def from_config(cls, translation_config: Dict[str, Any]) -> "TranslationOptions":
        """
        Build options from the 'translation' config section.

        Unknown names fall back to the defaults.
        """
        defaults = cls()
        split = SPLIT_SENTENCES_NAMES.get(
            str(translation_config.get('split_sentences', '')).lower(), defaults.split_sentences
        )
        try:
            formality = Formality(str(translation_config.get('formality', 'default')).lower())
        except ValueError:
            formality = defaults.formality
        model_type = MODEL_TYPE_NAMES.get(
            str(translation_config.get('model_type', '')).lower(), defaults.model_type
        )
        return cls(
            split_sentences=split,
            preserve_formatting=bool(translation_config.get('preserve_formatting', False)),
            formality=formality,
            model_type=model_type,
        )

    def to_params(self) -> Dict[str, str]:
        return {
            "split_sentences": self.split_sentences.value,
            "preserve_formatting": "1" if self.preserve_formatting else "0",
            "formality": self.formality.value,
            "model_type": self.model_type.value,
        }


def rephrase_parameters(style_or_tone: Optional[str]) -> Dict[str, str]:
    """
    Map a style or tone name to the rephrase request parameter.

    Exactly one key is returned: 'writing_style', 'tone' or, for names in
    neither family, 'style'.

    Examples:
        >>> rephrase_parameters("academic")
        {'writing_style': 'prefer_academic'}
        >>> rephrase_parameters("friendly")
        {'tone': 'prefer_friendly'}
        >>> rephrase_parameters(None)
        {'style': 'default'}
    """
    name = (style_or_tone or "").strip().lower()
    if name in WRITING_STYLES:
        return {"writing_style": f"prefer_{name}"}
    if name in TONES:
        return {"tone": f"prefer_{name}"}
    return {"style": DEFAULT_STYLE}


@dataclass
class TranslationResult:
    text: str
    detected_source_language: Optional[str] = None


@dataclass
class Glossary:
    glossary_id: str
    name: str
    source_lang: str
    target_lang: str
    entry_count: int = 0
    ready: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Glossary":
        return cls(
            glossary_id=data["glossary_id"],
            name=data.get("name", ""),
            source_lang=data.get("source_lang", ""),
            target_lang=data.get("target_lang", ""),
            entry_count=data.get("entry_count", 0),
            ready=data.get("ready", True),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "glossary_id": self.glossary_id,
            "name": self.name,
            "source_lang": self.source_lang,
            "target_lang": self.target_lang,
            "entry_count": self.entry_count,
            "ready": self.ready,
        }


@dataclass
class Usage:
    character_count: int = 0
    character_limit: int = 0

    @property
    def limit_reached(self) -> bool:
        return self.character_limit > 0 and self.character_count >= self.character_limit

    def to_dict(self) -> Dict[str, Any]:
        return {
            "character_count": self.character_count,
            "character_limit": self.character_limit,
            "limit_reached": self.limit_reached,
        }


@dataclass
class Language:
    code: str
    name: str
    supports_formality: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "name": self.name, "supports_formality": self.supports_formality}
