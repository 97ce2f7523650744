from typing import Awaitable, Callable

from fastapi import FastAPI
from loguru import logger
from openai import AsyncOpenAI

from provision_ai.services.admission import AdmissionLimiter
from provision_ai.services.ai import AnswerEngine
from provision_ai.services.answer_store import create_answer_store
from provision_ai.services.audio_store import create_audio_store
from provision_ai.services.translation import DeepLClient
from provision_ai.settings import settings


def _log_credentials() -> None:
    """Report which provider keys were loaded, never their values."""
    logger.info(
        f"OpenAI API key: {'loaded' if settings.openai_api_key else 'not loaded'}"
    )
    logger.info(f"DeepL API key: {'loaded' if settings.deepl_api_key else 'not loaded'}")


def _setup_answer_engine(app: FastAPI) -> None:  # pragma: no cover
    """
    Initialize the answer engine.

    This function creates the OpenAI client, the answer and audio stores
    and the engine using them, and stores them in the application's
    state property.

    :param app: fastAPI application.
    """
    if not settings.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY is not set, cannot answer questions")

    # One client for every request, connection pooling is left to the SDK
    openai_client = AsyncOpenAI(api_key=settings.openai_api_key.strip())

    answer_store = create_answer_store(settings)
    audio_store = create_audio_store(settings)

    app.state.openai_client = openai_client
    app.state.answer_engine = AnswerEngine.from_settings(
        settings,
        llm_client=openai_client,
        store=answer_store,
        audio_store=audio_store,
    )
    app.state.admission_limiter = AdmissionLimiter(
        max_concurrent=settings.admission_max_concurrent,
        wait_timeout=settings.admission_wait_timeout,
    )
    logger.info(
        f"Answer engine ready: store={settings.answer_store_backend.value}, "
        f"audio={settings.audio_store_backend.value}, "
        f"keys={settings.answer_key_strategy.value}"
    )


def _setup_translation(app: FastAPI) -> None:  # pragma: no cover
    """
    Initialize the DeepL client.

    :param app: fastAPI application.
    """
    app.state.translation_client = DeepLClient(
        api_key=settings.deepl_api_key,
        url=settings.deepl_url,
        timeout=settings.deepl_timeout,
    )


def register_startup_event(
    app: FastAPI,
) -> Callable[[], Awaitable[None]]:  # pragma: no cover
    """
    Actions to run on application startup.

    This function uses fastAPI app to store data
    in the state, such as the answer engine.

    :param app: the fastAPI application.
    :return: function that actually performs actions.
    """

    @app.on_event("startup")
    async def _startup() -> None:  # noqa: WPS430
        _log_credentials()
        _setup_answer_engine(app)
        _setup_translation(app)
        logger.info(f"Server running on port {settings.port}")

    return _startup


def register_shutdown_event(
    app: FastAPI,
) -> Callable[[], Awaitable[None]]:  # pragma: no cover
    """
    Actions to run on application's shutdown.

    :param app: fastAPI application.
    :return: function that actually performs actions.
    """

    @app.on_event("shutdown")
    async def _shutdown() -> None:  # noqa: WPS430
        if hasattr(app.state, "translation_client"):
            await app.state.translation_client.close()
        if hasattr(app.state, "openai_client"):
            await app.state.openai_client.close()
        logger.info("Application shutdown complete")

    return _shutdown
