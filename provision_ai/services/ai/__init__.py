"""
AI services of provision_ai.

The answer engine runs the embedding, completion and speech services
against one shared OpenAI client.
"""

from .completion import Completion, CompletionService
from .embedding import EmbeddingService
from .engine import AnswerEngine, AnswerOutcome
from .errors import AnswerGenerationError
from .results import StepResult, StepStatus
from .speech import SpeechService

__all__ = [
    "AnswerEngine",
    "AnswerGenerationError",
    "AnswerOutcome",
    "Completion",
    "CompletionService",
    "EmbeddingService",
    "SpeechService",
    "StepResult",
    "StepStatus",
]
