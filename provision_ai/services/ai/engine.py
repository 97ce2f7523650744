"""Answer engine sequencing the provider calls of a question."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from loguru import logger
from openai import AsyncOpenAI

from provision_ai.services.ai.completion import CompletionService
from provision_ai.services.ai.embedding import EmbeddingService
from provision_ai.services.ai.errors import AnswerGenerationError
from provision_ai.services.ai.speech import SpeechService
from provision_ai.services.answer_store import AnswerRecord, AnswerStore
from provision_ai.services.audio_store import AudioStore
from provision_ai.settings import Settings


@dataclass(frozen=True)
class AnswerOutcome:
    """What the caller gets back, plus the record still to be persisted."""

    answer: str
    tokens_used: int
    audio_url: Optional[str]
    record: AnswerRecord


class AnswerEngine:
    """
    Answers football video game questions.

    The embedding and speech steps are best effort, only a failed
    completion aborts a request. Persistence is a separate call so the
    answer can be returned before the record is written.
    """

    def __init__(
        self,
        embeddings: EmbeddingService,
        completions: CompletionService,
        speech: SpeechService,
        store: AnswerStore,
    ):
        """
        Initialize the engine.

        :param embeddings: Question embedding service
        :param completions: Answer completion service
        :param speech: VIP speech synthesis service
        :param store: Answer record store
        """
        self.embeddings = embeddings
        self.completions = completions
        self.speech = speech
        self.store = store
        self.persist_failures = 0

    @classmethod
    def from_settings(
        cls,
        app_settings: Settings,
        llm_client: AsyncOpenAI,
        store: AnswerStore,
        audio_store: Optional[AudioStore] = None,
    ) -> "AnswerEngine":
        """
        Build the engine and its services from settings.

        :param app_settings: Application settings
        :param llm_client: OpenAI client shared by the process
        :param store: Answer record store
        :param audio_store: Speech audio store, None disables speech
        :return: Answer engine
        """
        return cls(
            embeddings=EmbeddingService(
                llm_client,
                model=app_settings.openai_embedding_model,
            ),
            completions=CompletionService(
                llm_client,
                model=app_settings.openai_completion_model,
                max_tokens=app_settings.completion_max_tokens,
                temperature=app_settings.completion_temperature,
                top_p=app_settings.completion_top_p,
            ),
            speech=SpeechService(
                llm_client,
                audio_store,
                model=app_settings.openai_tts_model,
                voice=app_settings.openai_tts_voice,
            ),
            store=store,
        )

    async def answer(self, question: str, is_vip: bool = False) -> AnswerOutcome:
        """
        Generate the answer to a question.

        :param question: Validated, non-empty question
        :param is_vip: Whether the caller gets a spoken answer
        :return: Answer outcome
        :raises AnswerGenerationError: if the completion step failed
        """
        logger.info(f"Received user message: {question!r} (VIP: {is_vip})")

        embedding = await self.embeddings.embed(question.lower().strip())

        completion = await self.completions.complete(question)
        if completion.is_fatal:
            raise AnswerGenerationError(completion.reason, details=completion.details)

        audio_url = None
        if is_vip:
            speech = await self.speech.synthesize(completion.value.answer)
            audio_url = speech.value_or_none()

        record = AnswerRecord(
            question=question,
            answer=completion.value.answer,
            embedding=embedding.value_or_none(),
            audio_url=audio_url,
        )
        return AnswerOutcome(
            answer=completion.value.answer,
            tokens_used=completion.value.tokens_used,
            audio_url=audio_url,
            record=record,
        )

    async def persist(self, record: AnswerRecord) -> bool:
        """
        Write an answer record, logging instead of raising on failure.

        :param record: Record to write
        :return: True if the record was written
        """
        try:
            key = await self.store.save(record)
        except Exception as e:
            self.persist_failures += 1
            logger.error(f"Failed to store AI answer for {record.question!r}: {e}")
            return False

        logger.info(f"AI answer stored under key {key!r}")
        return True

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get metrics of every step.

        :return: Dictionary of metrics keyed by step
        """
        return {
            "embedding": self.embeddings.get_health(),
            "completion": self.completions.get_health(),
            "speech": self.speech.get_health(),
            "persistence": {"failed_writes": self.persist_failures},
        }
