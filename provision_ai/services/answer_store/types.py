"""Shared types for answer storage."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AnswerRecord(BaseModel):
    """A generated answer as it is persisted."""

    question: str
    answer: str
    embedding: Optional[List[float]] = None
    audio_url: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> Dict[str, Any]:
        """Document fields, ``createdAt`` is left to the store."""
        return {
            "question": self.question,
            "answer": self.answer,
            "audio_url": self.audio_url,
            "embedding": self.embedding,
        }
