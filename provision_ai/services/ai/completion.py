"""Coaching answer completion service."""

from dataclasses import dataclass

from loguru import logger
from openai import AsyncOpenAI

from provision_ai.services.ai.errors import provider_error_details
from provision_ai.services.ai.prompts import build_messages
from provision_ai.services.ai.results import StepResult
from provision_ai.services.ai.service_base import AIServiceBase


@dataclass(frozen=True)
class Completion:
    """Answer text and the tokens the provider billed for it."""

    answer: str
    tokens_used: int


class CompletionService(AIServiceBase):
    """
    Requests coaching answers from the chat completion model.

    The completion is required: failures are reported as fatal steps
    carrying the provider's error payload. Calls are never retried.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = "gpt-4o",
        max_tokens: int = 800,
        temperature: float = 0.8,
        top_p: float = 0.9,
        enable_metrics: bool = True,
    ):
        """
        Initialize the completion service.

        :param client: OpenAI client shared by the process
        :param model: Chat completion model name
        :param max_tokens: Upper bound of generated tokens
        :param temperature: Sampling temperature
        :param top_p: Nucleus sampling value
        :param enable_metrics: Whether to track performance metrics
        """
        super().__init__(enable_metrics=enable_metrics)
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.top_p = top_p

    @property
    def model_name(self) -> str:
        return self.model

    async def _request_completion(self, question: str) -> Completion:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=build_messages(question),
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            top_p=self.top_p,
        )
        if not response.choices or not response.choices[0].message.content:
            raise ValueError("Completion response contained no answer.")

        tokens_used = response.usage.total_tokens if response.usage else 0
        return Completion(
            answer=response.choices[0].message.content,
            tokens_used=tokens_used or 0,
        )

    async def complete(self, question: str) -> StepResult[Completion]:
        """
        Generate the coaching answer to a question.

        :param question: Question exactly as the player typed it
        :return: ``ok`` with the completion, or ``fatal`` with error details
        """
        logger.info(f"Sending completion request to model {self.model}")
        try:
            completion = await self.run_with_metrics(self._request_completion, question)
        except Exception as e:
            details = provider_error_details(e)
            logger.error(f"Completion API error: {details}")
            return StepResult.fatal(f"completion failed: {e}", details=details)

        logger.info(f"Completion succeeded, tokens used: {completion.tokens_used}")
        return StepResult.ok(completion)
