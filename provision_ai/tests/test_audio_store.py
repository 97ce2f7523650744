"""Tests for the local audio store."""

import pytest
from yarl import URL

from provision_ai.services.audio_store import LocalAudioStore


@pytest.mark.asyncio
async def test_upload_writes_file_and_returns_url(tmp_path):
    store = LocalAudioStore(str(tmp_path / "audio"), URL("http://localhost:5000/audio"))

    url = await store.upload(b"ID3fake-mp3")

    name = url.rsplit("/", 1)[1]
    assert url == f"http://localhost:5000/audio/{name}"
    assert name.endswith(".mp3")
    assert (tmp_path / "audio" / name).read_bytes() == b"ID3fake-mp3"
