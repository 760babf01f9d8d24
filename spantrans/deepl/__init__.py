"""
DeepL Module

This module provides the provider client, its request/response records and
the error taxonomy for failed requests.
"""

from spantrans.deepl.exceptions import (
    TranslationError,
    ErrorKind,
    DeepLError,
    BadRequestError,
    UnauthorizedError,
    NotFoundError,
    PayloadTooLargeError,
    RateLimitedError,
    QuotaExceededError,
    ServiceUnavailableError,
    InternalError,
    error_for_status,
)
from spantrans.deepl.models import (
    SplitSentences,
    Formality,
    ModelType,
    TranslationOptions,
    TranslationResult,
    Glossary,
    Usage,
    Language,
    rephrase_parameters,
)
from spantrans.deepl.client import DeepLClient

__all__ = [
    'TranslationError', 'ErrorKind', 'DeepLError', 'BadRequestError', 'UnauthorizedError',
    'NotFoundError', 'PayloadTooLargeError', 'RateLimitedError', 'QuotaExceededError',
    'ServiceUnavailableError', 'InternalError', 'error_for_status',
    'SplitSentences', 'Formality', 'ModelType', 'TranslationOptions', 'TranslationResult',
    'Glossary', 'Usage', 'Language', 'rephrase_parameters', 'DeepLClient',
]
