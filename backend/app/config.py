"""
Application configuration using Pydantic Settings.
All config is loaded from environment variables / .env file.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # ── App ──────────────────────────────────────────────
    APP_NAME: str = "visuarealm-workspace"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"  # comma-separated

    # ── Supabase (auth + optional notepad storage) ───────
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""  # anon/public key

    # ── LLM (Provider-Agnostic) ──────────────────────────
    LLM_PROVIDER: str = "openai"  # openai | gemini | groq
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_API_KEY: str = ""
    LLM_TEMPERATURE: float = 0.7

    # ── Image generation ─────────────────────────────────
    IMAGE_MODEL: str = "gemini-2.5-flash-image"
    IMAGE_API_KEY: str = ""  # falls back to LLM_API_KEY
    IMAGE_MIN_PROMPT_LENGTH: int = 3

    # ── Uploads ──────────────────────────────────────────
    MAX_UPLOAD_MB: int = 10

    # ── Notepad ──────────────────────────────────────────
    NOTEPAD_STORE: str = "file"  # file | memory | supabase
    NOTEPAD_DATA_DIR: str = ".data/notepad"
    NOTEPAD_TABLE: str = "notepad_documents"
    NOTEPAD_STORAGE_KEY: str = "vr_notepad_v2"
    NOTEPAD_LEGACY_KEY: str = "vr_notepad"
    NOTEPAD_COMPLETION: str = "llm"  # llm | http
    NOTEPAD_COMPLETION_URL: str = "http://localhost:8000/api/chat"
    NOTEPAD_COMPLETION_TIMEOUT: float = 60.0

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_MB * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance (singleton)."""
    return Settings()
