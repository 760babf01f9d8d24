"""
DeepL API Client

This module contains the request implementations for each provider endpoint:
- translate
- write/rephrase
- usage
- languages
- glossaries

Each call performs exactly one blocking request, parses the JSON payload and
either returns the parsed result or raises a DeepLError. Nothing is retried.
"""

import json
from typing import Any, Dict, List, Optional

import httpx

from spantrans.config import API_KEY_PLACEHOLDER, PROVIDER_DEFAULTS, get_api_url
from spantrans.language_codes import extract_base_language
from spantrans.logger import get_logger
from spantrans.deepl.exceptions import TranslationError, InternalError, error_for_status
from spantrans.deepl.models import (
    Glossary,
    Language,
    TranslationOptions,
    TranslationResult,
    Usage,
    rephrase_parameters,
)

logger = get_logger(__name__)

# Charsets the provider has been seen to declare for UTF-8 bodies
LATIN1_CHARSETS = {"iso-8859-1", "iso8859-1", "iso_8859-1", "latin-1", "latin1", "l1", "cp819"}


def get_httpx_timeout(timeout_config: Any) -> httpx.Timeout:
    """
    Convert timeout configuration to httpx.Timeout object.

    Args:
        timeout_config: Either a number (read timeout) or a dict with
            connect, write, read, pool keys

    Returns:
        httpx.Timeout object
    """
    if isinstance(timeout_config, dict):
        return httpx.Timeout(
            connect=timeout_config.get('connect', 10.0),
            write=timeout_config.get('write', 30.0),
            read=timeout_config.get('read', 30.0),
            pool=timeout_config.get('pool', 10.0),
        )
    else:
        timeout_value = float(timeout_config) if timeout_config else float(PROVIDER_DEFAULTS['timeout'])
        return httpx.Timeout(
            connect=10.0,
            write=30.0,
            read=timeout_value,
            pool=10.0,
        )


def decode_body(response: httpx.Response) -> str:
    """
    Decode a response body from its raw bytes.

    The provider labels some UTF-8 bodies as Latin-1. When the declared charset
    is Latin-1 but the bytes are valid UTF-8, the body is decoded as UTF-8.
    """
    raw = response.content
    declared = (response.charset_encoding or "utf-8").lower()

    if declared in LATIN1_CHARSETS:
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return raw.decode("latin-1")

    try:
        return raw.decode(declared)
    except (LookupError, UnicodeDecodeError):
        return raw.decode("utf-8", errors="replace")


def extract_error_message(response: httpx.Response) -> str:
    """Pull the provider's error message out of a failed response."""
    body = decode_body(response)
    try:
        error_json = json.loads(body)
    except ValueError:
        return body[:500]

    if isinstance(error_json, dict):
        message = error_json.get("message")
        detail = error_json.get("detail")
        if message and detail:
            return f"{message}, {detail}"
        if message or detail:
            return str(message or detail)
    return body[:500]


def _require_text(text: str) -> str:
    if text is None or not str(text).strip():
        raise TranslationError("Text to translate is empty", code="empty_text")
    return text


class DeepLClient:
    """Blocking client for the DeepL API v2."""

    def __init__(
        self,
        api_key: str,
        api_url: Optional[str] = None,
        timeout: Any = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not api_key or api_key == API_KEY_PLACEHOLDER:
            raise TranslationError(
                "DeepL API key not configured. Please set it in Settings.",
                code="deepl_config_missing",
                details={"missing_field": "api_key"},
            )
        self.api_key = api_key
        self.api_url = get_api_url({"api_key": api_key, "api_url": api_url or ""})
        self.timeout = timeout if timeout is not None else PROVIDER_DEFAULTS['timeout']
        self.transport = transport

    @classmethod
    def from_config(cls, config: Dict[str, Any], transport: Optional[httpx.BaseTransport] = None) -> "DeepLClient":
        deepl_config = config.get('deepl', {})
        return cls(
            api_key=deepl_config.get('api_key', ''),
            api_url=deepl_config.get('api_url', ''),
            timeout=deepl_config.get('timeout', PROVIDER_DEFAULTS['timeout']),
            transport=transport,
        )

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"DeepL-Auth-Key {self.api_key}"}

    def _request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request and return the decoded JSON payload."""
        url = f"{self.api_url}/{endpoint}"
        logger.debug(f"  Calling DeepL API: {method} {endpoint}")

        try:
            with httpx.Client(timeout=get_httpx_timeout(self.timeout), transport=self.transport) as client:
                response = client.request(method, url, headers=self._headers(), data=data, json=json_body)
        except httpx.TimeoutException:
            raise InternalError("DeepL API request timeout")
        except httpx.HTTPError as e:
            raise InternalError(f"DeepL API request failed: {e}")

        if response.status_code != 200:
            message = extract_error_message(response)
            logger.error(f"DeepL API error on {endpoint}: {response.status_code} - {message}")
            raise error_for_status(response.status_code, message)

        try:
            return json.loads(decode_body(response))
        except ValueError:
            raise InternalError(f"Unexpected DeepL API response format on {endpoint}", status_code=200)

    def translate(
        self,
        text: str,
        target_lang: str,
        source_lang: Optional[str] = None,
        glossary_id: Optional[str] = None,
        options: Optional[TranslationOptions] = None,
    ) -> TranslationResult:
        """
        Translate text with a single provider call.

        Args:
            text: Text to translate, must not be blank
            target_lang: Target language code (e.g. 'EN-US')
            source_lang: Source language code; required when glossary_id is set
            glossary_id: Optional glossary to apply
            options: Request options, defaults when omitted

        Returns:
            The first translation candidate

        Raises:
            TranslationError: Invalid arguments, raised before any request
            DeepLError: The provider rejected the request
        """
        _require_text(text)
        if not target_lang:
            raise TranslationError("Target language is required", code="target_lang_required")
        if glossary_id and not source_lang:
            raise TranslationError(
                "A source language is required when using a glossary",
                code="source_lang_required",
                details={"glossary_id": glossary_id},
            )

        options = options or TranslationOptions()
        data = {"text": text, "target_lang": target_lang}
        if source_lang:
            # The provider only accepts base codes as source languages
            data["source_lang"] = extract_base_language(source_lang)
        if glossary_id:
            data["glossary_id"] = glossary_id
        data.update(options.to_params())

        result = self._request("POST", "translate", data=data)

        translations = result.get('translations') if isinstance(result, dict) else None
        if not translations:
            raise InternalError("No translations in DeepL response", status_code=200)

        candidate = translations[0]
        logger.debug(f"  Received {len(candidate.get('text', ''))} chars from DeepL")
        return TranslationResult(
            text=candidate.get('text', ''),
            detected_source_language=candidate.get('detected_source_language'),
        )

    def rephrase(
        self,
        text: str,
        target_lang: Optional[str] = None,
        style_or_tone: Optional[str] = None,
    ) -> str:
        """Rewrite text in a writing style or tone; returns the first improvement."""
        _require_text(text)

        body: Dict[str, Any] = {"text": [text]}
        if target_lang:
            body["target_lang"] = target_lang
        body.update(rephrase_parameters(style_or_tone))

        result = self._request("POST", "write/rephrase", json_body=body)

        improvements = result.get('improvements') if isinstance(result, dict) else None
        if not improvements:
            raise InternalError("No improvements in DeepL response", status_code=200)
        return improvements[0].get('text', '')

    def get_usage(self) -> Usage:
        """Query the character usage of the account."""
        result = self._request("POST", "usage", data={"type": "target"})
        if not isinstance(result, dict):
            raise InternalError("Unexpected usage payload from DeepL", status_code=200)
        return Usage(
            character_count=result.get('character_count', 0),
            character_limit=result.get('character_limit', 0),
        )

    def get_target_languages(self) -> List[Language]:
        """List the languages the provider can translate into."""
        result = self._request("POST", "languages", data={"type": "target"})
        if not isinstance(result, list):
            raise InternalError("Unexpected languages payload from DeepL", status_code=200)
        return [
            Language(
                code=item.get('language', ''),
                name=item.get('name', ''),
                supports_formality=bool(item.get('supports_formality', False)),
            )
            for item in result
        ]

    def list_glossaries(self) -> List[Glossary]:
        """Fetch the full glossary catalog."""
        result = self._request("GET", "glossaries")
        if not isinstance(result, dict):
            raise InternalError("Unexpected glossaries payload from DeepL", status_code=200)
        return [Glossary.from_dict(item) for item in result.get('glossaries', [])]
