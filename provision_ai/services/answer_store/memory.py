"""In-process answer store."""

from datetime import datetime, timezone
from typing import Dict, Optional

from loguru import logger

from provision_ai.services.answer_store.base import AnswerStore
from provision_ai.services.answer_store.types import AnswerRecord
from provision_ai.settings import KeyStrategy


class InMemoryAnswerStore(AnswerStore):
    """Keeps records in a dict, for local development and tests."""

    def __init__(self, key_strategy: KeyStrategy = KeyStrategy.RAW):
        super().__init__(key_strategy)
        self.records: Dict[str, AnswerRecord] = {}
        logger.info("Initialized in-memory answer store")

    async def save(self, record: AnswerRecord) -> str:
        key = self.key_for(record.question)
        self.records[key] = record.model_copy(
            update={"created_at": datetime.now(timezone.utc)}
        )
        return key

    async def get(self, question: str) -> Optional[AnswerRecord]:
        return self.records.get(self.key_for(question))
