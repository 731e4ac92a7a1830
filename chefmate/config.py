"""Application configuration."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from chefmate.services.llm import CompletionConfig, LLMProvider


class Settings(BaseSettings):
    """Environment-driven settings for the web app."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    llm_provider: LLMProvider = LLMProvider.XAI
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    xai_api_key: Optional[str] = None
    xai_model: str = "grok-2-1212"
    llm_base_url: Optional[str] = None
    llm_timeout_seconds: float = 90.0
    generation_timeout_seconds: float = 120.0
    chat_history_turns: int = 10

    def completion_config(self) -> CompletionConfig:
        """Build the explicit completion config for the selected provider."""

        if self.llm_provider is LLMProvider.OPENAI:
            api_key, model = self.openai_api_key, self.openai_model
        else:
            api_key, model = self.xai_api_key, self.xai_model
        return CompletionConfig(
            provider=self.llm_provider,
            api_key=api_key,
            model=model,
            base_url=self.llm_base_url,
            timeout_seconds=self.llm_timeout_seconds,
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()


settings = get_settings()
