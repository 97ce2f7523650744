"""Speech synthesis service for VIP answers."""

from typing import Optional

from loguru import logger
from openai import AsyncOpenAI

from provision_ai.services.ai.errors import provider_error_details
from provision_ai.services.ai.results import StepResult
from provision_ai.services.ai.service_base import AIServiceBase
from provision_ai.services.audio_store import AudioStore


class SpeechService(AIServiceBase):
    """
    Reads answers aloud for VIP players.

    Speech is best effort: a failed synthesis or upload degrades the
    response to text only.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        audio_store: Optional[AudioStore],
        model: str = "tts-1",
        voice: str = "alloy",
        enable_metrics: bool = True,
    ):
        """
        Initialize the speech service.

        :param client: OpenAI client shared by the process
        :param audio_store: Where clips are uploaded, None disables speech
        :param model: Text-to-speech model name
        :param voice: Voice preset
        :param enable_metrics: Whether to track performance metrics
        """
        super().__init__(enable_metrics=enable_metrics)
        self.client = client
        self.audio_store = audio_store
        self.model = model
        self.voice = voice

    @property
    def model_name(self) -> str:
        return self.model

    async def _synthesize_and_upload(self, text: str) -> str:
        response = await self.client.audio.speech.create(
            model=self.model,
            voice=self.voice,
            input=text,
        )
        audio = response.content
        if not audio:
            raise ValueError("No audio returned from the speech API")
        return await self.audio_store.upload(audio)

    async def synthesize(self, text: str) -> StepResult[str]:
        """
        Turn an answer into a playable audio URL.

        :param text: Answer text
        :return: ``ok`` with the audio URL, or ``degraded`` on any failure
        """
        if self.audio_store is None:
            logger.warning("No audio store configured, skipping speech synthesis")
            return StepResult.degraded("no audio store configured")

        logger.info("Generating speech audio for VIP answer")
        try:
            audio_url = await self.run_with_metrics(self._synthesize_and_upload, text)
        except Exception as e:
            details = provider_error_details(e)
            logger.warning(f"Speech synthesis error, answering with text only: {details}")
            return StepResult.degraded(f"speech failed: {details}")

        logger.info(f"Speech audio available at {audio_url}")
        return StepResult.ok(audio_url)
