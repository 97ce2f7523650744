"""Interface of answer record storage."""

import abc
from typing import Optional

from provision_ai.services.answer_store.keys import document_key
from provision_ai.services.answer_store.types import AnswerRecord
from provision_ai.settings import KeyStrategy


class AnswerStore(abc.ABC):
    """
    Document store of answer records.

    Records are keyed by their question, a save creates or fully
    overwrites the document.
    """

    def __init__(self, key_strategy: KeyStrategy = KeyStrategy.RAW):
        self.key_strategy = key_strategy

    def key_for(self, question: str) -> str:
        return document_key(question, self.key_strategy)

    @abc.abstractmethod
    async def save(self, record: AnswerRecord) -> str:
        """
        Create or overwrite the record of a question.

        :param record: Record to write
        :return: Document key the record was written under
        """

    @abc.abstractmethod
    async def get(self, question: str) -> Optional[AnswerRecord]:
        """
        Read the record of a question.

        :param question: Question as received
        :return: Stored record, None if there is none
        """
