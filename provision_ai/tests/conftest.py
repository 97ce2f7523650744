"""Pytest configuration and fixtures."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from provision_ai.services.admission import AdmissionLimiter
from provision_ai.services.ai import AnswerEngine
from provision_ai.services.answer_store import InMemoryAnswerStore
from provision_ai.settings import Settings
from provision_ai.tests.fakes import FakeAudioStore, FakeOpenAI
from provision_ai.web.application import get_app
from provision_ai.web.dependencies import (
    get_admission_limiter,
    get_answer_engine,
)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(openai_api_key="test-openai-key", answer_store_backend="memory")


@pytest.fixture
def openai_client() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture
def answer_store() -> InMemoryAnswerStore:
    return InMemoryAnswerStore()


@pytest.fixture
def audio_store() -> FakeAudioStore:
    return FakeAudioStore()


@pytest.fixture
def engine(test_settings, openai_client, answer_store, audio_store) -> AnswerEngine:
    return AnswerEngine.from_settings(
        test_settings,
        llm_client=openai_client,
        store=answer_store,
        audio_store=audio_store,
    )


@pytest.fixture
def limiter() -> AdmissionLimiter:
    return AdmissionLimiter(max_concurrent=4, wait_timeout=1.0)


@pytest.fixture
def fastapi_app(engine, limiter) -> FastAPI:
    """
    Application with the startup-built clients replaced by fakes.

    Startup hooks only run inside a ``with TestClient(...)`` block,
    the tests never enter one.
    """
    app = get_app()
    app.dependency_overrides[get_answer_engine] = lambda: engine
    app.dependency_overrides[get_admission_limiter] = lambda: limiter
    return app


@pytest.fixture
def client(fastapi_app) -> TestClient:
    return TestClient(fastapi_app)
