"""Question embedding service."""

from typing import List

from loguru import logger
from openai import AsyncOpenAI

from provision_ai.services.ai.errors import provider_error_details
from provision_ai.services.ai.results import StepResult
from provision_ai.services.ai.service_base import AIServiceBase


class EmbeddingService(AIServiceBase):
    """
    Computes question embeddings for later semantic reuse.

    Embeddings are best effort: every failure is reported as a degraded
    step and never raised.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = "text-embedding-ada-002",
        enable_metrics: bool = True,
    ):
        """
        Initialize the embedding service.

        :param client: OpenAI client shared by the process
        :param model: Embedding model name
        :param enable_metrics: Whether to track performance metrics
        """
        super().__init__(enable_metrics=enable_metrics)
        self.client = client
        self.model = model

    @property
    def model_name(self) -> str:
        return self.model

    async def _request_embedding(self, text: str) -> List[float]:
        response = await self.client.embeddings.create(model=self.model, input=text)
        if not response.data or not response.data[0].embedding:
            raise ValueError("Unexpected embedding API response structure.")
        return list(response.data[0].embedding)

    async def embed(self, text: str) -> StepResult[List[float]]:
        """
        Generate the embedding of a question.

        :param text: Normalized question text
        :return: ``ok`` with the vector, or ``degraded`` on any failure
        """
        logger.debug(f"Generating embedding using model: {self.model}")
        try:
            vector = await self.run_with_metrics(self._request_embedding, text)
        except Exception as e:
            details = provider_error_details(e)
            logger.warning(f"Embedding API error, continuing without embedding: {details}")
            return StepResult.degraded(f"embedding failed: {details}")

        logger.debug(f"Generated embedding with {len(vector)} dimensions")
        return StepResult.ok(vector)
