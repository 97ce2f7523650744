"""Tests for the answer engine and its step services."""

import asyncio

import pytest

from provision_ai.services.ai import (
    AnswerEngine,
    AnswerGenerationError,
    CompletionService,
    EmbeddingService,
    SpeechService,
    StepStatus,
)
from provision_ai.services.answer_store import InMemoryAnswerStore
from provision_ai.tests.fakes import (
    FakeAudioStore,
    FakeOpenAI,
    api_status_error,
    completion_response,
)


class TestEmbeddingService:
    @pytest.mark.asyncio
    async def test_returns_vector(self):
        client = FakeOpenAI()
        service = EmbeddingService(client)

        result = await service.embed("best formation?")

        assert result.status is StepStatus.OK
        assert result.value == [0.1, 0.2, 0.3]

    @pytest.mark.asyncio
    async def test_malformed_response_degrades(self):
        client = FakeOpenAI()
        client.embeddings.create.return_value = completion_response("not an embedding")
        service = EmbeddingService(client)

        result = await service.embed("best formation?")

        assert result.status is StepStatus.DEGRADED
        assert result.value_or_none() is None
        assert service.get_metrics()["failed_requests"] == 1

    @pytest.mark.asyncio
    async def test_network_error_degrades(self):
        client = FakeOpenAI()
        client.embeddings.create.side_effect = ConnectionError("reset by peer")

        result = await EmbeddingService(client).embed("best formation?")

        assert result.status is StepStatus.DEGRADED
        assert "reset by peer" in result.reason


class TestCompletionService:
    @pytest.mark.asyncio
    async def test_returns_answer_and_tokens(self):
        result = await CompletionService(FakeOpenAI(["Press high."])).complete("How?")

        assert result.is_ok
        assert result.value.answer == "Press high."
        assert result.value.tokens_used == 42

    @pytest.mark.asyncio
    async def test_missing_usage_counts_zero_tokens(self):
        client = FakeOpenAI()
        client.chat.completions.create.side_effect = None
        client.chat.completions.create.return_value = completion_response(
            "Press high.", total_tokens=None
        )

        result = await CompletionService(client).complete("How?")

        assert result.value.tokens_used == 0

    @pytest.mark.asyncio
    async def test_empty_answer_is_fatal(self):
        client = FakeOpenAI()
        client.chat.completions.create.side_effect = None
        client.chat.completions.create.return_value = completion_response("")

        result = await CompletionService(client).complete("How?")

        assert result.is_fatal

    @pytest.mark.asyncio
    async def test_provider_error_is_fatal_with_details(self):
        client = FakeOpenAI()
        body = {"message": "Rate limit reached", "type": "requests"}
        client.chat.completions.create.side_effect = api_status_error(429, body)

        result = await CompletionService(client).complete("How?")

        assert result.is_fatal
        assert result.details == body

    @pytest.mark.asyncio
    async def test_not_retried(self):
        client = FakeOpenAI()
        client.chat.completions.create.side_effect = ConnectionError("down")

        await CompletionService(client).complete("How?")

        assert client.chat.completions.create.await_count == 1


class TestSpeechService:
    @pytest.mark.asyncio
    async def test_uploads_audio(self):
        audio_store = FakeAudioStore()
        service = SpeechService(FakeOpenAI(), audio_store)

        result = await service.synthesize("Press high.")

        assert result.is_ok
        assert result.value.endswith("1.mp3")
        assert audio_store.uploads == [b"ID3fake-mp3"]

    @pytest.mark.asyncio
    async def test_without_audio_store_degrades(self):
        client = FakeOpenAI()

        result = await SpeechService(client, None).synthesize("Press high.")

        assert result.status is StepStatus.DEGRADED
        client.audio.speech.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_audio_degrades(self):
        client = FakeOpenAI()
        client.audio.speech.create.return_value.content = b""

        result = await SpeechService(client, FakeAudioStore()).synthesize("Press high.")

        assert result.status is StepStatus.DEGRADED


class TestAnswerEngine:
    @pytest.mark.asyncio
    async def test_answer_builds_record(self, engine):
        outcome = await engine.answer("Best formation?", is_vip=True)

        assert outcome.record.question == "Best formation?"
        assert outcome.record.answer == outcome.answer
        assert outcome.record.embedding == [0.1, 0.2, 0.3]
        assert outcome.record.audio_url == outcome.audio_url is not None

    @pytest.mark.asyncio
    async def test_answer_does_not_persist(self, engine, answer_store):
        await engine.answer("Best formation?")

        assert answer_store.records == {}

    @pytest.mark.asyncio
    async def test_completion_failure_raises(self, engine, openai_client):
        openai_client.chat.completions.create.side_effect = api_status_error(
            503, {"message": "overloaded"}
        )

        with pytest.raises(AnswerGenerationError) as exc_info:
            await engine.answer("Best formation?", is_vip=True)

        assert exc_info.value.details == {"message": "overloaded"}
        openai_client.audio.speech.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_persist_writes_record(self, engine, answer_store):
        outcome = await engine.answer("Best formation?")

        assert await engine.persist(outcome.record) is True
        assert await answer_store.get("Best formation?") is not None

    @pytest.mark.asyncio
    async def test_concurrent_identical_questions_last_write_wins(self, test_settings):
        store = InMemoryAnswerStore()
        engine = AnswerEngine.from_settings(
            test_settings,
            llm_client=FakeOpenAI(answers=["A1.", "A2."]),
            store=store,
        )

        first, second = await asyncio.gather(
            engine.answer("Q?"), engine.answer("Q?")
        )
        await asyncio.gather(engine.persist(first.record), engine.persist(second.record))

        assert {first.answer, second.answer} == {"A1.", "A2."}
        assert list(store.records) == ["Q?"]
        assert store.records["Q?"].answer == second.answer
