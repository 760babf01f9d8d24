"""Default language detection for source texts."""

from langdetect import DetectorFactory, detect
from langdetect.lang_detect_exception import LangDetectException

from spantrans.deepl.exceptions import TranslationError
from spantrans.language_codes import normalize_language_code
from spantrans.logger import get_logger

logger = get_logger(__name__)

# Deterministic results for the same input
DetectorFactory.seed = 0


def detect_language(text: str) -> str:
    """
    Detect the language of `text`.

    Returns:
        Upper-case language code (e.g. 'DE', 'ZH-CN')

    Raises:
        TranslationError: If no language could be detected
    """
    try:
        code = detect(text)
    except LangDetectException as e:
        raise TranslationError(
            f"Could not detect the language of the text: {e}",
            code="detection_failed",
        )
    language = normalize_language_code(code)
    logger.debug(f"Detected language {language}")
    return language
