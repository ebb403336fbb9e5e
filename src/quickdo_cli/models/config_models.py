"""Configuration models persisted as ``config.json``."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Where the task collection lives."""

    tasks_file: str | None = Field(
        default=None, description="JSON task file; defaults to the user data dir"
    )


class AssistantConfig(BaseModel):
    """OpenAI-compatible text generation settings.

    Without an API key the local, deterministic assistant is used.
    """

    api_key: str | None = Field(default=None, description="Bearer token")
    endpoint: str = Field(default="https://api.openai.com/v1")
    model: str = Field(default="gpt-4o-mini")
    timeout: float = Field(default=30.0, gt=0)
    temperature: float = Field(default=0.3, ge=0, le=2)

    @property
    def enabled(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("endpoint cannot be empty")
        return v.strip().rstrip("/")


class ParsingConfig(BaseModel):
    """Natural-language parsing settings."""

    use_dateparser: bool = Field(default=True)
    languages: list[str] = Field(default_factory=lambda: ["en"])


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "json", "table"] = Field(default="pretty")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main quickdo configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    assistant: AssistantConfig = Field(default_factory=AssistantConfig)
    parsing: ParsingConfig = Field(default_factory=ParsingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
