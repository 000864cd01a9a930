from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="AAC_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:8000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:8000",
    ]

    cors_origin_regex: str | None = None
    trusted_hosts: list[str] = ["*"]
    root_path: str = ""

    # Volumes
    volume_base_url: str | None = None  # e.g. https://cdn.example.org/aac
    volume_dir: Path | None = None  # local tree holding volume-<n>/meta.json
    volume_count: int = 7
    preload_volumes: bool = True
    fetch_timeout: float = 10.0

    # Write-through cache for raw volume documents
    cache_backend: Literal["none", "file", "supabase"] = "file"
    cache_dir: Path = Path(".cache/volumes")

    # Supabase (only needed for cache_backend="supabase")
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None
    supabase_cache_table: str = "volume_cache"

    # Speech (OpenAI text-to-speech; falls back to logging when no key is set)
    openai_api_key: str | None = None
    speech_model: str = "tts-1"
    speech_voice: str = "alloy"
    speech_output_dir: Path = Path(".cache/speech")
    speech_timeout: float = 15.0
    speech_max_retries: int = 1

    # Session limits
    phrase_history_limit: int = 100  # Cleared phrases kept per session
    usage_log_limit: int = 1000  # Timestamped usage events kept per session


settings = Settings()
