"""Tests for settings and the stores they select."""

import base64
import json
from unittest.mock import patch

from provision_ai.services.answer_store import InMemoryAnswerStore, create_answer_store
from provision_ai.services.audio_store import LocalAudioStore, create_audio_store
from provision_ai.services.firebase import load_credentials
from provision_ai.settings import KeyStrategy, Settings


def test_unprefixed_variables(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-unprefixed")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("DEEPL_API_KEY", "deepl-unprefixed")

    app_settings = Settings()

    assert app_settings.openai_api_key == "sk-unprefixed"
    assert app_settings.port == 8080
    assert app_settings.deepl_api_key == "deepl-unprefixed"


def test_prefixed_variables(monkeypatch):
    monkeypatch.setenv("PROVISION_AI_ANSWER_KEY_STRATEGY", "hashed")
    monkeypatch.setenv("PROVISION_AI_ADMISSION_MAX_CONCURRENT", "0")

    app_settings = Settings()

    assert app_settings.answer_key_strategy is KeyStrategy.HASHED
    assert app_settings.admission_max_concurrent == 0


def test_urls():
    app_settings = Settings(deepl_host="api.deepl.com", public_base_url="https://coach.example.com")

    assert str(app_settings.deepl_url) == "https://api.deepl.com/v2/translate"
    assert str(app_settings.audio_base_url) == "https://coach.example.com/audio"


def test_memory_answer_store():
    app_settings = Settings(answer_store_backend="memory", answer_key_strategy="normalized")

    store = create_answer_store(app_settings)

    assert isinstance(store, InMemoryAnswerStore)
    assert store.key_strategy is KeyStrategy.NORMALIZED


def test_no_audio_store_by_default():
    assert create_audio_store(Settings(audio_store_backend="none")) is None


def test_local_audio_store(tmp_path):
    app_settings = Settings(
        audio_store_backend="local",
        audio_dir=str(tmp_path),
        public_base_url="http://localhost:5000",
    )

    store = create_audio_store(app_settings)

    assert isinstance(store, LocalAudioStore)


def test_base64_credentials_take_precedence():
    account = {"type": "service_account", "project_id": "fc25assistant"}
    encoded = base64.b64encode(json.dumps(account).encode("utf-8")).decode("ascii")
    app_settings = Settings(
        firebase_credentials_base64=encoded,
        firebase_credentials_file="/does/not/exist.json",
    )

    with patch("provision_ai.services.firebase.credentials.Certificate") as certificate:
        load_credentials(app_settings)

    certificate.assert_called_once_with(account)


def test_credentials_file(tmp_path):
    app_settings = Settings(firebase_credentials_file=str(tmp_path / "sa.json"))

    with patch("provision_ai.services.firebase.credentials.Certificate") as certificate:
        load_credentials(app_settings)

    certificate.assert_called_once_with(str(tmp_path / "sa.json"))
