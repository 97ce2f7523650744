"""Answer record storage."""

from provision_ai.services.answer_store.base import AnswerStore
from provision_ai.services.answer_store.keys import document_key, normalize_question
from provision_ai.services.answer_store.memory import InMemoryAnswerStore
from provision_ai.services.answer_store.types import AnswerRecord
from provision_ai.settings import AnswerStoreBackend, Settings


def create_answer_store(app_settings: Settings) -> AnswerStore:
    """
    Build the answer store selected in settings.

    :param app_settings: Application settings
    :return: Answer store
    """
    if app_settings.answer_store_backend == AnswerStoreBackend.MEMORY:
        return InMemoryAnswerStore(key_strategy=app_settings.answer_key_strategy)

    from provision_ai.services.answer_store.firestore_client import (
        FirestoreAnswerStore,
    )
    from provision_ai.services.firebase import get_firebase_app

    return FirestoreAnswerStore.from_app(
        get_firebase_app(app_settings),
        collection=app_settings.answers_collection,
        key_strategy=app_settings.answer_key_strategy,
    )


__all__ = [
    "AnswerRecord",
    "AnswerStore",
    "InMemoryAnswerStore",
    "create_answer_store",
    "document_key",
    "normalize_question",
]
