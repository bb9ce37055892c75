"""
RHK Engine configuration.

Settings are read from environment variables (upper-case names first) and an
optional `.env` file. The API key may arrive under several names because the
engine is often deployed behind hosting platforms that prefix variables.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the analyzer client, rendering output and logging."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ===== Analyzer (OpenAI-compatible endpoint) =====
    GEMINI_API_KEY: Optional[str] = Field(
        None,
        validation_alias=AliasChoices(
            "GEMINI_API_KEY", "API_KEY", "VITE_API_KEY", "REACT_APP_API_KEY"
        ),
    )
    RHK_ENGINE_MODEL_NAME: str = "gemini-2.5-flash"
    RHK_ENGINE_BASE_URL: Optional[str] = "https://generativelanguage.googleapis.com/v1beta/openai/"
    RHK_ENGINE_REQUEST_TIMEOUT: float = 120.0
    RHK_ENGINE_MAX_RETRIES: int = 2

    # ===== Input limits =====
    MAX_IMAGE_BYTES: int = 5 * 1024 * 1024

    # ===== Report appearance =====
    # institutional logo above the period on the cover; empty hides it
    REPORT_LOGO_URL: Optional[str] = "https://upload.wikimedia.org/wikipedia/commons/9/9a/Kementerian_Agama_new_logo.png"

    # ===== Output / logging =====
    OUTPUT_DIR: str = "final_reports"
    LOG_FILE: str = "logs/rhk_engine.log"
    LOG_LEVEL: str = "INFO"

    # ===== Web server =====
    HOST: str = "127.0.0.1"
    PORT: int = 5000

    def resolve_api_key(self) -> str:
        """Return the configured key stripped of whitespace, or an empty string."""
        return (self.GEMINI_API_KEY or "").strip()


settings = Settings()

__all__ = ["Settings", "settings"]
