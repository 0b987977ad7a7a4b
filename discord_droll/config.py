"""Application configuration powered by Pydantic settings."""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly-typed environment configuration for the dice art bot."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        frozen=True,
    )

    discord_bot_token: str = Field(..., json_schema_extra={"env": "DISCORD_BOT_TOKEN"})
    openai_api_key: str = Field(..., json_schema_extra={"env": "OPENAI_API_KEY"})

    openai_chat_model: str = Field("gpt-4", json_schema_extra={"env": "OPENAI_CHAT_MODEL"})
    openai_chat_max_tokens: int = Field(60, json_schema_extra={"env": "OPENAI_CHAT_MAX_TOKENS"})
    openai_chat_temperature: float = Field(
        0.7, ge=0.0, le=2.0, json_schema_extra={"env": "OPENAI_CHAT_TEMPERATURE"}
    )
    openai_image_model: str = Field("dall-e-3", json_schema_extra={"env": "OPENAI_IMAGE_MODEL"})
    openai_image_size: str = Field("1024x1024", json_schema_extra={"env": "OPENAI_IMAGE_SIZE"})

    http_timeout_seconds: int = Field(45, json_schema_extra={"env": "HTTP_TIMEOUT_SECONDS"})

    trigger_author_name: str = Field("Beyond 20", json_schema_extra={"env": "TRIGGER_AUTHOR_NAME"})
    trigger_interaction_name: str = Field("roll", json_schema_extra={"env": "TRIGGER_INTERACTION_NAME"})
    trigger_embed_title: str = Field("Ds", json_schema_extra={"env": "TRIGGER_EMBED_TITLE"})

    unknown_roll_policy: Literal["reject", "default"] = Field(
        "reject", json_schema_extra={"env": "UNKNOWN_ROLL_POLICY"}
    )
    default_roll_count: int = Field(1, ge=1, le=4, json_schema_extra={"env": "DEFAULT_ROLL_COUNT"})

    notify_on_upstream_error: bool = Field(True, json_schema_extra={"env": "NOTIFY_ON_UPSTREAM_ERROR"})
    send_prompt_on_upload_failure: bool = Field(
        True, json_schema_extra={"env": "SEND_PROMPT_ON_UPLOAD_FAILURE"}
    )

    @field_validator("unknown_roll_policy", mode="before")
    @classmethod
    def _normalise_policy(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("discord_bot_token", "openai_api_key")
    @classmethod
    def _reject_blank_secret(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @property
    def uses_default_roll(self) -> bool:
        """Return True when unrecognised roll labels fall back to ``default_roll_count``."""

        return self.unknown_roll_policy == "default"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached instance of Settings."""

    return Settings()
