"""DeepL client for translating app content."""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp
from yarl import URL

from provision_ai.settings import settings

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 5000

# DeepL status codes and the message shown to the app
_STATUS_MESSAGES = {
    400: "Invalid translation request",
    403: "Translation service authentication failed",
    429: "Translation rate limit exceeded",
    456: "Translation quota exceeded",
}


class TranslationError(Exception):
    """Translation failed, carries the status to answer the caller with."""

    def __init__(self, status_code: int, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


class DeepLClient:
    """DeepL client for translating text."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[URL] = None,
        timeout: Optional[int] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """
        Initialize DeepL client.

        :param api_key: DeepL authentication key
        :param url: Translate endpoint URL
        :param timeout: Timeout for requests in seconds
        :param session: HTTP session to reuse, created on first use otherwise
        """
        self.api_key = api_key or settings.deepl_api_key
        self.url = url or settings.deepl_url
        self.timeout = timeout or settings.deepl_timeout
        self._session = session

        if not self.api_key:
            logger.warning("DeepL API key not configured, translations will fail")

    @property
    def is_configured(self) -> bool:
        """Check if DeepL client is properly configured."""
        return bool(self.api_key)

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"User-Agent": "FC25Locker/1.0"},
            )
        return self._session

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self._session is not None and not self._session.closed:
            await self._session.close()

    async def translate(
        self,
        text: str,
        target_language: str,
        source_language: str = "EN",
    ) -> Dict[str, Any]:
        """
        Translate text with DeepL.

        :param text: Text to translate
        :param target_language: DeepL target language code
        :param source_language: DeepL source language code
        :return: Translated text, source language and usage
        :raises TranslationError: if DeepL rejected the request or is unreachable
        """
        logger.info(
            "Translation request: %d characters, %s -> %s",
            len(text),
            source_language,
            target_language,
        )

        form = {
            "text": text,
            "target_lang": target_language,
            "source_lang": source_language,
            "preserve_formatting": "1",
            "formality": "default",
        }
        headers = {"Authorization": f"DeepL-Auth-Key {self.api_key}"}

        try:
            async with self._get_session().post(
                str(self.url),
                data=form,
                headers=headers,
            ) as response:
                payload = await self._read_payload(response)
                if response.status >= 400:
                    raise self._status_error(response.status, payload)
        except asyncio.TimeoutError:
            logger.error("DeepL request timed out after %ss", self.timeout)
            raise TranslationError(408, "Translation request timed out", "timeout")
        except aiohttp.ClientError as e:
            logger.error("Error calling DeepL: %s", str(e))
            raise TranslationError(500, "Translation failed", str(e))

        translations = payload.get("translations") if isinstance(payload, dict) else None
        if not translations:
            logger.error("Invalid translation response format: %s", payload)
            raise TranslationError(
                500, "Translation failed", "Invalid translation response format"
            )

        translated_text = translations[0].get("text", "")
        logger.info("Translation completed successfully")
        return {
            "translatedText": translated_text,
            "sourceLanguage": translations[0].get("detected_source_language")
            or source_language,
            "usage": {"character_count": len(translated_text)},
        }

    @staticmethod
    async def _read_payload(response: aiohttp.ClientResponse) -> Any:
        try:
            return await response.json(content_type=None)
        except ValueError:
            return await response.text()

    @staticmethod
    def _status_error(status: int, payload: Any) -> TranslationError:
        message = _STATUS_MESSAGES.get(
            status, f"Translation service error ({status})"
        )
        logger.error("DeepL returned %d: %s", status, payload)
        return TranslationError(status, message, payload)
