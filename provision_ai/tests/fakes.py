"""Fake provider clients and stores for tests."""

from types import SimpleNamespace
from typing import List, Optional
from unittest.mock import AsyncMock

import httpx
import openai

from provision_ai.services.answer_store import AnswerRecord, InMemoryAnswerStore
from provision_ai.services.audio_store import AudioStore

EMBEDDING = [0.1, 0.2, 0.3]


def embedding_response(vector: Optional[List[float]] = None):
    return SimpleNamespace(data=[SimpleNamespace(embedding=vector or EMBEDDING)])


def completion_response(answer: str, total_tokens: Optional[int] = 42):
    usage = SimpleNamespace(total_tokens=total_tokens) if total_tokens is not None else None
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=answer))],
        usage=usage,
    )


def speech_response(audio: bytes = b"ID3fake-mp3"):
    return SimpleNamespace(content=audio)


def api_status_error(status_code: int, body: dict) -> openai.APIStatusError:
    """Build the error the OpenAI SDK raises for a non-2xx response."""
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status_code, request=request, json={"error": body})
    return openai.APIStatusError(body.get("message", "error"), response=response, body=body)


class FakeOpenAI:
    """Stands in for ``AsyncOpenAI`` with the three endpoints the engine uses."""

    def __init__(self, answers: Optional[List[str]] = None):
        answers = answers or ["Play a 4-2-3-1 and hit fast wingers on the break."]
        self.embeddings = SimpleNamespace(
            create=AsyncMock(return_value=embedding_response())
        )
        self.chat = SimpleNamespace(
            completions=SimpleNamespace(
                create=AsyncMock(side_effect=[completion_response(a) for a in answers])
            )
        )
        self.audio = SimpleNamespace(
            speech=SimpleNamespace(create=AsyncMock(return_value=speech_response()))
        )

    @property
    def call_count(self) -> int:
        return (
            self.embeddings.create.await_count
            + self.chat.completions.create.await_count
            + self.audio.speech.create.await_count
        )


class FakeAudioStore(AudioStore):
    """Keeps uploaded clips in memory."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads: List[bytes] = []

    async def upload(self, audio: bytes) -> str:
        if self.fail:
            raise ConnectionError("storage unreachable")
        self.uploads.append(audio)
        return f"https://storage.example.com/audio/{len(self.uploads)}.mp3"


class FailingAnswerStore(InMemoryAnswerStore):
    """Answer store whose writes always fail."""

    async def save(self, record: AnswerRecord) -> str:
        raise RuntimeError("firestore is down")
