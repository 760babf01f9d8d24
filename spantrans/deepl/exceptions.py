"""
DeepL Service Exceptions

This module contains the error taxonomy for provider failures.
Separated to avoid circular imports between client.py and the translation package.

Every provider failure is a DeepLError carrying an ErrorKind. The kind is
chosen from the HTTP status code by error_for_status(); codes without an entry
map to ErrorKind.INTERNAL_ERROR.
"""

from enum import Enum
from typing import Optional


class TranslationError(Exception):
    """Translation service error with optional code and details."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    RATE_LIMITED = "rate_limited"
    QUOTA_EXCEEDED = "quota_exceeded"
    SERVICE_UNAVAILABLE = "service_unavailable"
    INTERNAL_ERROR = "internal_error"


class DeepLError(TranslationError):
    """A failed provider request."""

    kind = ErrorKind.INTERNAL_ERROR
    summary = "Internal error"

    def __init__(self, provider_message: Optional[str] = None, status_code: Optional[int] = None):
        self.status_code = status_code
        self.provider_message = provider_message or ""

        message = self.summary
        if status_code is not None:
            message = f"{message} ({status_code})"
        if self.provider_message:
            message = f"{message}: {self.provider_message}"

        details = {"kind": self.kind.value}
        if status_code is not None:
            details["status_code"] = status_code
        if self.provider_message:
            details["provider_message"] = self.provider_message

        super().__init__(message, code=self.kind.value, details=details)


class BadRequestError(DeepLError):
    kind = ErrorKind.BAD_REQUEST
    summary = "Bad request, check the request parameters"


class UnauthorizedError(DeepLError):
    kind = ErrorKind.UNAUTHORIZED
    summary = "Authorization failed, check the API key"


class NotFoundError(DeepLError):
    kind = ErrorKind.NOT_FOUND
    summary = "The requested resource could not be found"


class PayloadTooLargeError(DeepLError):
    kind = ErrorKind.PAYLOAD_TOO_LARGE
    summary = "The request size exceeds the limit"


class RateLimitedError(DeepLError):
    kind = ErrorKind.RATE_LIMITED
    summary = "Too many requests, please wait and resend the request"


class QuotaExceededError(DeepLError):
    kind = ErrorKind.QUOTA_EXCEEDED
    summary = "Quota exceeded, the character limit has been reached"


class ServiceUnavailableError(DeepLError):
    kind = ErrorKind.SERVICE_UNAVAILABLE
    summary = "Resource currently unavailable, try again later"


class InternalError(DeepLError):
    kind = ErrorKind.INTERNAL_ERROR
    summary = "Internal error"


STATUS_ERRORS = {
    400: BadRequestError,
    403: UnauthorizedError,
    404: NotFoundError,
    413: PayloadTooLargeError,
    429: RateLimitedError,
    456: QuotaExceededError,
    503: ServiceUnavailableError,
}


def error_for_status(status_code: int, message: Optional[str] = None) -> DeepLError:
    """
    Build the error for a non-200 provider response.

    Args:
        status_code: HTTP status code of the response
        message: Message included by the provider, kept verbatim

    Returns:
        DeepLError subclass instance (InternalError for unmapped codes)
    """
    error_class = STATUS_ERRORS.get(status_code, InternalError)
    return error_class(message, status_code=status_code)
