"""Ask AI API views."""

import json
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from fastapi.responses import UJSONResponse
from loguru import logger

from provision_ai.services.admission import AdmissionLimiter, AdmissionRejected
from provision_ai.services.ai import AnswerEngine, AnswerGenerationError
from provision_ai.web.dependencies import get_admission_limiter, get_answer_engine

from .schema import AIMetricsResponse, AskAIRequest, AskAIResponse, ErrorResponse

router = APIRouter()

QUESTION_REQUIRED = "Question or prompt is required"
GENERATION_FAILED = "Failed to get response from AI"


async def parse_ask_ai_request(request: Request) -> Optional[AskAIRequest]:
    """
    Read the request body without failing on malformed input.

    :param request: incoming request
    :returns: parsed request, None if the body is not a JSON object
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug(f"Unreadable /api/ask-ai body: {e}")
        return None

    if not isinstance(body, dict):
        return None
    return AskAIRequest.model_validate(body)


@router.post(
    "",
    response_model=AskAIResponse,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": AskAIRequest.model_json_schema()}
            },
        },
    },
)
async def ask_ai(
    background_tasks: BackgroundTasks,
    request: Optional[AskAIRequest] = Depends(parse_ask_ai_request),
    engine: AnswerEngine = Depends(get_answer_engine),
    limiter: AdmissionLimiter = Depends(get_admission_limiter),
):
    """
    Answer a football video game question.

    The record of the answer is written after the response is sent, so
    a storage failure never hides a generated answer.

    :param background_tasks: tasks run after the response
    :param request: question, prompt alias and VIP flag
    :param engine: answer engine
    :param limiter: admission limiter
    :returns: answer, token usage and optional audio URL
    """
    question = request.text if request else None
    if not question:
        return UJSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": QUESTION_REQUIRED},
        )

    try:
        async with limiter.slot():
            outcome = await engine.answer(question, is_vip=bool(request.is_vip))
    except AdmissionRejected as e:
        return UJSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={"error": str(e)},
        )
    except AnswerGenerationError as e:
        logger.error(f"Error in /api/ask-ai: {e.details}")
        return UJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": GENERATION_FAILED, "details": e.details},
        )

    background_tasks.add_task(engine.persist, outcome.record)

    return AskAIResponse(
        answer=outcome.answer,
        tokens_used=outcome.tokens_used,
        audio_url=outcome.audio_url,
    )


@router.get("/metrics", response_model=AIMetricsResponse)
async def get_ai_metrics(
    engine: AnswerEngine = Depends(get_answer_engine),
    limiter: AdmissionLimiter = Depends(get_admission_limiter),
) -> AIMetricsResponse:
    """
    Get performance metrics of the answer steps and admission control.

    :param engine: answer engine
    :param limiter: admission limiter
    :returns: per-step metrics
    """
    metrics = engine.get_metrics()
    metrics["admission"] = limiter.get_metrics()
    return AIMetricsResponse(metrics=metrics)
