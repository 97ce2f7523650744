"""Ask AI API schemas."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class AskAIRequest(BaseModel):
    """
    Question sent by the mobile app.

    Fields are loosely typed so a wrong type is treated like a missing
    value instead of failing validation.
    """

    question: Any = Field(None, description="Question to answer")
    prompt: Any = Field(
        None, description="Fallback for older app versions sending `prompt`"
    )
    is_vip: Any = Field(
        False, alias="isVIP", description="Whether to add a spoken answer"
    )

    model_config = ConfigDict(populate_by_name=True)

    @property
    def text(self) -> Optional[str]:
        """Question text, ``question`` first, ``prompt`` as fallback."""
        for candidate in (self.question, self.prompt):
            if isinstance(candidate, str) and candidate.strip():
                return candidate
        return None


class AskAIResponse(BaseModel):
    """Answer returned to the mobile app."""

    answer: str = Field(..., description="Coaching answer")
    tokens_used: int = Field(..., description="Tokens billed for the completion")
    audio_url: Optional[str] = Field(None, description="Spoken answer for VIP players")


class ErrorResponse(BaseModel):
    """Error body of the ask AI endpoint."""

    error: str = Field(..., description="Human readable error")
    details: Optional[Any] = Field(None, description="Provider diagnostics")


class AIMetricsResponse(BaseModel):
    """Response model for AI metrics."""

    metrics: Dict[str, Any] = Field(..., description="Per-step performance metrics")
