"""Text translation through DeepL."""

from provision_ai.services.translation.client import (
    MAX_TEXT_LENGTH,
    DeepLClient,
    TranslationError,
)

__all__ = ["MAX_TEXT_LENGTH", "DeepLClient", "TranslationError"]
