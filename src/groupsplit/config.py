from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    bot_token: str = Field("", alias="BOT_TOKEN")
    openai_api_key: Optional[str] = Field(None, alias="OPENAI_API_KEY")
    openai_model: str = Field("gpt-4o-mini", alias="OPENAI_MODEL")
    summary_timeout: float = Field(30.0, alias="SUMMARY_TIMEOUT")
    summary_language: str = Field("Traditional Chinese (Hong Kong style)", alias="SUMMARY_LANGUAGE")
    currency_symbol: str = Field("$", alias="CURRENCY_SYMBOL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
