from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_credential_store_path() -> Path:
    return Path.home() / ".edusynth" / "settings.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    gemini_api_key: str = Field(default="", alias="GEMINI_API_KEY")
    gemini_base_url: str = Field(default="https://generativelanguage.googleapis.com", alias="GEMINI_BASE_URL")
    gemini_model: str = Field(default="gemini-1.5-flash", alias="GEMINI_MODEL")
    llm_timeout_seconds: float = Field(default=25.0, alias="LLM_TIMEOUT_SECONDS")
    llm_temperature: float = Field(default=0.35, alias="LLM_TEMPERATURE")
    llm_top_p: float = Field(default=0.9, alias="LLM_TOP_P")
    llm_max_output_tokens: int = Field(default=700, alias="LLM_MAX_OUTPUT_TOKENS")

    credential_store_path: Path = Field(
        default_factory=_default_credential_store_path,
        alias="CREDENTIAL_STORE_PATH",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    def model_post_init(self, __context: Any) -> None:  # type: ignore[override]
        self.gemini_base_url = self.gemini_base_url.strip().rstrip("/") or "https://generativelanguage.googleapis.com"
        self.gemini_model = self.gemini_model.strip() or "gemini-1.5-flash"
        self.gemini_api_key = self.gemini_api_key.strip()
        self.log_level = self.log_level.strip().upper() or "INFO"
        if self.llm_timeout_seconds <= 0:
            self.llm_timeout_seconds = 25.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
