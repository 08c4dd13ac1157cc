from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # API Keys
    groq_api_key: str = ""

    # External binaries
    yt_dlp_path: str = "yt-dlp"
    ffmpeg_path: str = "ffmpeg"

    # App config
    api_host: str = "0.0.0.0"
    port: int = 3000
    upload_dir: Path = Path("uploads")
    max_upload_bytes: int = 100 * 1024 * 1024
    max_duration_seconds: int = 1800
    transcription_url: str = "https://api.groq.com/openai/v1/audio/transcriptions"
    transcription_model: str = "whisper-large-v3"
    dictionary_api_url: str = "https://api.dictionaryapi.dev/api/v2/entries/en"
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
