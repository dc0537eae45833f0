"""Application configuration."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Travel Chatbot API"
    app_env: str = "development"
    cors_origins: str = "*"
    log_level: str = "INFO"
    port: int = 8000

    ai_provider: str = "openai"
    ai_model: str | None = None
    ai_api_key: str | None = None
    ai_base_url: str | None = None
    ai_timeout_seconds: float = 20.0

    openai_api_key: str | None = None
    openai_model: str = Field(
        default="gpt-5-mini",
        validation_alias=AliasChoices("openai_model", "gpt_model"),
    )
    openai_base_url: str | None = None

    anthropic_api_key: str | None = None
    anthropic_model: str = "claude-3-5-sonnet-latest"

    airtable_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("airtable_token", "airtable_api_key"),
    )
    airtable_base_id: str | None = None
    airtable_table: str = "Leads"
    airtable_api_url: str = "https://api.airtable.com/v0"
    airtable_timeout_seconds: float = 30.0

    assistant_persona_prompt: str = (
        "Tu es un assistant de voyage francophone, empathique, concis et pro. "
        "Tu fais du slot-filling : tu ne poses qu'UNE question à la fois, et tu adaptes le ton."
    )

    @property
    def cors_origins_list(self) -> list[str]:
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def airtable_enabled(self) -> bool:
        return bool(self.airtable_token and self.airtable_base_id and self.airtable_table)


@lru_cache
def get_settings() -> Settings:
    return Settings()
