"""Interface of speech audio storage."""

import abc
import uuid


class AudioStore(abc.ABC):
    """Stores synthesized speech and hands out a URL for it."""

    content_type = "audio/mpeg"

    @staticmethod
    def new_object_name() -> str:
        """Unique file name for a new audio clip."""
        return f"{uuid.uuid4().hex}.mp3"

    @abc.abstractmethod
    async def upload(self, audio: bytes) -> str:
        """
        Store an audio clip.

        :param audio: MP3 bytes
        :return: URL the client can fetch the clip from
        """
