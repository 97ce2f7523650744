"""Translation API views."""

from typing import Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import UJSONResponse

from provision_ai.services.translation import (
    MAX_TEXT_LENGTH,
    DeepLClient,
    TranslationError,
)
from provision_ai.web.api.ask_ai.schema import ErrorResponse
from provision_ai.web.dependencies import get_translation_client

from .schema import TranslateRequest, TranslateResponse

router = APIRouter()


@router.post(
    "",
    response_model=TranslateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def translate(
    request: Optional[TranslateRequest] = Body(None),
    client: DeepLClient = Depends(get_translation_client),
):
    """
    Translate app content with DeepL.

    :param request: text, target and source language
    :param client: DeepL client
    :returns: translated text with its source language and usage
    """
    if request is None or not request.text or not request.target_language:
        return UJSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Text and target language are required"},
        )

    if len(request.text) > MAX_TEXT_LENGTH:
        return UJSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": f"Text too long (max {MAX_TEXT_LENGTH} characters)"},
        )

    try:
        result = await client.translate(
            request.text,
            target_language=request.target_language,
            source_language=request.source_language,
        )
    except TranslationError as e:
        return UJSONResponse(
            status_code=e.status_code,
            content={"error": e.message, "details": e.details},
        )

    return TranslateResponse.model_validate(result)
