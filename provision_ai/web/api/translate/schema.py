"""Translation API schemas."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TranslateRequest(BaseModel):
    """Text the app wants translated."""

    text: Optional[str] = Field(None, description="Text to translate")
    target_language: Optional[str] = Field(
        None, alias="targetLanguage", description="DeepL target language code"
    )
    source_language: str = Field(
        "EN", alias="sourceLanguage", description="DeepL source language code"
    )

    model_config = ConfigDict(populate_by_name=True)


class TranslationUsage(BaseModel):
    """Usage of a translation."""

    character_count: int = Field(..., description="Length of the translated text")


class TranslateResponse(BaseModel):
    """Translated text."""

    translatedText: str = Field(..., description="Translated text")
    sourceLanguage: str = Field(..., description="Detected or requested source language")
    usage: TranslationUsage
