import enum
from pathlib import Path
from tempfile import gettempdir
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from yarl import URL

TEMP_DIR = Path(gettempdir())


class LogLevel(str, enum.Enum):  # noqa: WPS600
    """Possible log levels."""

    NOTSET = "NOTSET"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    FATAL = "FATAL"


class AnswerStoreBackend(str, enum.Enum):  # noqa: WPS600
    """Where answer records are persisted."""

    FIRESTORE = "firestore"
    MEMORY = "memory"


class AudioStoreBackend(str, enum.Enum):  # noqa: WPS600
    """Where synthesized speech is uploaded."""

    FIREBASE = "firebase"
    LOCAL = "local"
    NONE = "none"


class KeyStrategy(str, enum.Enum):  # noqa: WPS600
    """How a question is turned into a document key."""

    RAW = "raw"
    NORMALIZED = "normalized"
    HASHED = "hashed"


class Settings(BaseSettings):
    """
    Application settings.

    These parameters can be configured
    with environment variables.
    """

    host: str = "0.0.0.0"
    port: int = Field(5000, validation_alias=AliasChoices("PROVISION_AI_PORT", "PORT"))
    # quantity of workers for uvicorn
    workers_count: int = 1
    # Enable uvicorn reloading
    reload: bool = False

    log_level: LogLevel = LogLevel.INFO
    enable_file_logging: bool = False
    logs_dir: Optional[str] = None
    structured_logging: bool = False

    # OpenAI settings
    openai_api_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("PROVISION_AI_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    openai_embedding_model: str = "text-embedding-ada-002"
    openai_completion_model: str = "gpt-4o"
    openai_tts_model: str = "tts-1"
    openai_tts_voice: str = "alloy"

    # Completion sampling
    completion_max_tokens: int = 800
    completion_temperature: float = 0.8
    completion_top_p: float = 0.9

    # Answer persistence
    answer_store_backend: AnswerStoreBackend = AnswerStoreBackend.FIRESTORE
    answers_collection: str = "ai_answers"
    answer_key_strategy: KeyStrategy = KeyStrategy.RAW

    # Firebase credentials, base64 takes precedence over the file
    firebase_credentials_file: Optional[str] = None
    firebase_credentials_base64: Optional[str] = Field(
        None,
        validation_alias=AliasChoices(
            "PROVISION_AI_FIREBASE_CREDENTIALS_BASE64",
            "FIREBASE_SERVICE_ACCOUNT_JSON_BASE64",
        ),
    )
    firebase_storage_bucket: Optional[str] = None

    # Speech audio storage
    audio_store_backend: AudioStoreBackend = AudioStoreBackend.NONE
    audio_dir: str = str(TEMP_DIR / "provision_ai_audio")
    public_base_url: str = "http://localhost:5000"

    # Admission control, 0 disables the limiter
    admission_max_concurrent: int = 16
    admission_wait_timeout: float = 10.0  # Seconds

    # DeepL settings
    deepl_api_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("PROVISION_AI_DEEPL_API_KEY", "DEEPL_API_KEY"),
    )
    deepl_host: str = "api-free.deepl.com"
    deepl_timeout: int = 10  # Seconds

    @property
    def deepl_url(self) -> URL:
        """
        Assemble DeepL translate endpoint URL from settings.

        :return: DeepL URL.
        """
        return URL.build(
            scheme="https",
            host=self.deepl_host,
            path="/v2/translate",
        )

    @property
    def audio_base_url(self) -> URL:
        """
        Assemble the public URL prefix of locally stored audio files.

        :return: audio URL prefix.
        """
        return URL(self.public_base_url) / "audio"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROVISION_AI_",
        populate_by_name=True,
    )


settings = Settings()
