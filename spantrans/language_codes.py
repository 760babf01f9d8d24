"""
Language code mappings and utilities.

Codes follow the provider's convention: upper-case ISO 639-1 base codes
(DE, EN, FR) with an optional region or variant suffix (EN-US, PT-BR, ZH-HANS).

The base form of a code is everything before the first '-'. Base comparison is
case-insensitive because the provider reports glossary languages in lower case
('de', 'en') while target languages are upper case ('EN-US').
"""

from dataclasses import dataclass
from typing import Optional, Dict

BASE_SEPARATOR = '-'

# Target languages offered by the provider
LANGUAGE_NAMES = {
    'AR': 'Arabic',
    'BG': 'Bulgarian',
    'CS': 'Czech',
    'DA': 'Danish',
    'DE': 'German',
    'EL': 'Greek',
    'EN': 'English',
    'EN-GB': 'English (British)',
    'EN-US': 'English (American)',
    'ES': 'Spanish',
    'ET': 'Estonian',
    'FI': 'Finnish',
    'FR': 'French',
    'HU': 'Hungarian',
    'ID': 'Indonesian',
    'IT': 'Italian',
    'JA': 'Japanese',
    'KO': 'Korean',
    'LT': 'Lithuanian',
    'LV': 'Latvian',
    'NB': 'Norwegian (Bokmål)',
    'NL': 'Dutch',
    'PL': 'Polish',
    'PT': 'Portuguese',
    'PT-BR': 'Portuguese (Brazilian)',
    'PT-PT': 'Portuguese (European)',
    'RO': 'Romanian',
    'RU': 'Russian',
    'SK': 'Slovak',
    'SL': 'Slovenian',
    'SV': 'Swedish',
    'TR': 'Turkish',
    'UK': 'Ukrainian',
    'ZH': 'Chinese',
    'ZH-HANS': 'Chinese (Simplified)',
    'ZH-HANT': 'Chinese (Traditional)',
}


def normalize_language_code(code: str) -> str:
    """
    Normalize a language code to the provider's upper-case form.

    Examples:
        >>> normalize_language_code('de')
        'DE'
        >>> normalize_language_code(' en-us ')
        'EN-US'
        >>> normalize_language_code('zh_cn')
        'ZH-CN'
    """
    return code.strip().replace('_', BASE_SEPARATOR).upper()


def get_language_name(code: str) -> Optional[str]:
    """
    Get the full language name from code.

    Examples:
        >>> get_language_name('DE')
        'German'
        >>> get_language_name('en-us')
        'English (American)'
    """
    return LANGUAGE_NAMES.get(normalize_language_code(code))


def extract_base_language(code: str) -> str:
    """
    Extract base language from code (remove region).

    Args:
        code: Language code (e.g., 'EN-US', 'pt-BR', 'DE')

    Returns:
        Upper-case base language code (e.g., 'EN', 'PT', 'DE')

    Examples:
        >>> extract_base_language('EN-US')
        'EN'
        >>> extract_base_language('de')
        'DE'
    """
    return code.split(BASE_SEPARATOR)[0].strip().upper()


def languages_match(code1: str, code2: str, strict: bool = False) -> bool:
    """
    Check if two language codes match.

    Args:
        code1: First language code
        code2: Second language code
        strict: If True, must match exactly. If False, base language match is ok.

    Examples:
        >>> languages_match('EN', 'EN-US')
        True
        >>> languages_match('EN', 'EN-US', strict=True)
        False
        >>> languages_match('de', 'DE')
        True
    """
    if strict:
        return code1 == code2

    return extract_base_language(code1) == extract_base_language(code2)


@dataclass(frozen=True)
class LanguagePair:
    """The two languages a user translates between."""
    first: str
    second: str

    def __post_init__(self):
        if not self.first or not self.second:
            raise ValueError("Both languages of a language pair must be set")
        if self.first == self.second:
            raise ValueError(f"Language pair needs two different languages, got {self.first} twice")

    @classmethod
    def from_config(cls, languages_config: Dict[str, str]) -> "LanguagePair":
        return cls(
            normalize_language_code(languages_config.get('first', '')),
            normalize_language_code(languages_config.get('second', '')),
        )

    def other_language(self, code: str) -> str:
        """
        Return the pair member that the text in `code` should be translated to.

        Examples:
            >>> LanguagePair('DE', 'EN-US').other_language('DE')
            'EN-US'
            >>> LanguagePair('DE', 'EN-US').other_language('EN')
            'DE'
            >>> LanguagePair('DE', 'EN-US').other_language('FR')
            'DE'
        """
        if languages_match(code, self.first):
            return self.second
        return self.first

    def to_dict(self) -> Dict[str, Dict[str, Optional[str]]]:
        return {
            'first': {'code': self.first, 'name': get_language_name(self.first)},
            'second': {'code': self.second, 'name': get_language_name(self.second)},
        }


def get_all_language_codes() -> Dict[str, str]:
    """
    Get all supported language codes.

    Returns:
        Dict mapping code to language name
    """
    return LANGUAGE_NAMES.copy()
