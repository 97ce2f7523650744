"""Speech audio storage."""

from typing import Optional

from provision_ai.services.audio_store.base import AudioStore
from provision_ai.services.audio_store.local import LocalAudioStore
from provision_ai.settings import AudioStoreBackend, Settings


def create_audio_store(app_settings: Settings) -> Optional[AudioStore]:
    """
    Build the audio store selected in settings.

    :param app_settings: Application settings
    :return: Audio store, or None when speech audio is not stored
    """
    if app_settings.audio_store_backend == AudioStoreBackend.LOCAL:
        return LocalAudioStore(app_settings.audio_dir, app_settings.audio_base_url)

    if app_settings.audio_store_backend == AudioStoreBackend.FIREBASE:
        from provision_ai.services.audio_store.firebase_storage import (
            FirebaseAudioStore,
        )
        from provision_ai.services.firebase import get_firebase_app

        return FirebaseAudioStore(get_firebase_app(app_settings))

    return None


__all__ = ["AudioStore", "LocalAudioStore", "create_audio_store"]
