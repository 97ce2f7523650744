"""Local directory audio store."""

import asyncio
from pathlib import Path

from loguru import logger
from yarl import URL

from provision_ai.services.audio_store.base import AudioStore


class LocalAudioStore(AudioStore):
    """Writes audio clips to a directory served by the web application."""

    def __init__(self, directory: str, base_url: URL):
        """
        Initialize the store.

        :param directory: Directory the clips are written to
        :param base_url: Public URL the directory is served under
        """
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.base_url = base_url
        logger.info(f"Initialized local audio store in {self.directory}")

    async def upload(self, audio: bytes) -> str:
        name = self.new_object_name()
        path = self.directory / name

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, path.write_bytes, audio)

        logger.debug(f"Wrote {len(audio)} bytes of audio to {path}")
        return str(self.base_url / name)
