from importlib import metadata

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import UJSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger

from provision_ai.logging_config import configure_logging
from provision_ai.settings import AudioStoreBackend, settings
from provision_ai.web.api.router import api_router
from provision_ai.web.lifetime import register_shutdown_event, register_startup_event


def get_app() -> FastAPI:
    """
    Get FastAPI application.

    This is the main constructor of an application.

    :return: application.
    """
    configure_logging()

    logger.info("Starting proVision FC AI service")

    app = FastAPI(
        title="provision_ai",
        version=metadata.version("provision_ai"),
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        default_response_class=UJSONResponse,
    )

    # The mobile app calls from arbitrary origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Adds startup and shutdown events.
    register_startup_event(app)
    register_shutdown_event(app)

    # Main router for the API.
    app.include_router(router=api_router, prefix="/api")

    if settings.audio_store_backend == AudioStoreBackend.LOCAL:
        app.mount(
            "/audio",
            StaticFiles(directory=settings.audio_dir, check_dir=False),
            name="audio",
        )

    return app
