"""Firestore answer store."""

from typing import Optional

from firebase_admin import firestore_async
from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore
from loguru import logger
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from provision_ai.services.answer_store.base import AnswerStore
from provision_ai.services.answer_store.types import AnswerRecord
from provision_ai.settings import KeyStrategy

TRANSIENT_ERRORS = (
    ConnectionError,
    TimeoutError,
    gcp_exceptions.ServiceUnavailable,
    gcp_exceptions.DeadlineExceeded,
    gcp_exceptions.InternalServerError,
)


class FirestoreAnswerStore(AnswerStore):
    """Client for the Firestore answers collection."""

    def __init__(
        self,
        client,
        collection: str = "ai_answers",
        key_strategy: KeyStrategy = KeyStrategy.RAW,
    ):
        """
        Initialize the store.

        :param client: Async Firestore client
        :param collection: Collection holding the answer documents
        :param key_strategy: How questions map to document IDs
        """
        super().__init__(key_strategy)
        self.client = client
        self.collection = collection
        logger.info(f"Initialized Firestore answer store: {collection}")

    @classmethod
    def from_app(
        cls,
        app,
        collection: str = "ai_answers",
        key_strategy: KeyStrategy = KeyStrategy.RAW,
    ) -> "FirestoreAnswerStore":
        """
        Build the store on top of a Firebase app.

        :param app: Initialized Firebase app
        :param collection: Collection holding the answer documents
        :param key_strategy: How questions map to document IDs
        :return: Firestore answer store
        """
        return cls(
            firestore_async.client(app=app),
            collection=collection,
            key_strategy=key_strategy,
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        reraise=True,
    )
    async def save(self, record: AnswerRecord) -> str:
        key = self.key_for(record.question)
        document = record.to_document()
        document["createdAt"] = firestore.SERVER_TIMESTAMP

        await self.client.collection(self.collection).document(key).set(document)
        logger.debug(f"Wrote answer document {self.collection}/{key}")
        return key

    async def get(self, question: str) -> Optional[AnswerRecord]:
        key = self.key_for(question)
        snapshot = await self.client.collection(self.collection).document(key).get()
        if not snapshot.exists:
            return None
        return AnswerRecord.model_validate(snapshot.to_dict())
