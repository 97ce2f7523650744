"""Firebase Storage audio store."""

import asyncio

import firebase_admin
from firebase_admin import storage
from loguru import logger

from provision_ai.services.audio_store.base import AudioStore


class FirebaseAudioStore(AudioStore):
    """Uploads audio clips to the Firebase Storage bucket and makes them public."""

    def __init__(self, app: firebase_admin.App, prefix: str = "ai_answers_audio"):
        """
        Initialize the store.

        :param app: Firebase app holding the bucket configuration
        :param prefix: Folder of the audio clips inside the bucket
        """
        self.bucket = storage.bucket(app=app)
        self.prefix = prefix
        logger.info(f"Initialized Firebase audio store: {self.bucket.name}/{prefix}")

    async def upload(self, audio: bytes) -> str:
        # The storage client is synchronous, keep it off the event loop
        loop = asyncio.get_running_loop()
        blob = self.bucket.blob(f"{self.prefix}/{self.new_object_name()}")

        await loop.run_in_executor(
            None,
            lambda: blob.upload_from_string(audio, content_type=self.content_type),
        )
        await loop.run_in_executor(None, blob.make_public)

        logger.debug(f"Uploaded {len(audio)} bytes of audio to {blob.name}")
        return blob.public_url
