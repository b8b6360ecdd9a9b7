"""Application settings using Pydantic."""

import os
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(
        default=os.getenv("ENVIRONMENT", "development"),
        description="Deployment environment (development|production)",
    )

    # Text generation (Llama Stack, OpenAI-compatible chat completions)
    llama_stack_url: str = "http://localhost:5001"
    llama_stack_model: str = "openai/gpt-4o"
    llama_stack_timeout_seconds: float = Field(
        default=120.0,
        description="HTTP timeout for one chat completion request.",
    )
    llama_stack_provider: Literal["real", "fake", "off"] = Field(
        default="real",
        description="Text generation provider mode: real=call Llama Stack, fake=deterministic stub, off=disable.",
    )
    use_fake_providers: bool = Field(
        default=False,
        description=(
            "Convenience switch: treat all providers as fake in dev/tests. "
            "This overrides per-provider modes when set to true (off still disables)."
        ),
    )

    # Knowledge tool process
    knowledge_provider: Literal["real", "fake", "off"] = Field(
        default="real",
        description=(
            "Knowledge tool mode. real=talk to the tool process, "
            "fake=in-memory canned replies, off=no knowledge lookups (research branch skips)."
        ),
    )
    knowledge_transport: Literal["stdio", "http"] = Field(
        default="stdio",
        description="How to reach the knowledge tool: stdio=spawn a subprocess, http=POST to a tool gateway.",
    )
    knowledge_command: str = Field(
        default="node",
        description="Executable used to spawn the knowledge tool process (stdio transport).",
    )
    knowledge_args: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["notebooklm-mcp/dist/index.js"],
        description="Arguments for the knowledge tool process. Env var can be comma-separated.",
    )
    knowledge_http_url: str = Field(
        default="http://localhost:3000/api",
        description="Base URL of the tool gateway (http transport).",
    )
    knowledge_api_key: str = Field(
        default="",
        description="Optional x-api-key header sent to the tool gateway.",
    )
    tool_timeout_seconds: float = Field(
        default=60.0,
        description="Per-call timeout for knowledge tool invocations.",
    )
    tool_client_name: str = "teachmate"
    tool_client_version: str = "1.0.0"

    @field_validator("knowledge_args", mode="before")
    @classmethod
    def _split_knowledge_args(cls, v: Any) -> list[str]:
        if v is None or v == "":
            return []
        if isinstance(v, str):
            return [p.strip() for p in v.split(",") if p.strip()]
        return list(v)

    # API Configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_key: str = "dev-api-key"  # Override in production

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Ensure default API key is not used in production."""
        if os.getenv("ENVIRONMENT") == "production" and v == "dev-api-key":
            raise ValueError("Cannot use default API key in production. Set API_KEY env var.")
        return v

    @model_validator(mode="after")
    def validate_model(self) -> "Settings":
        """Ensure a model is configured."""
        if not self.llama_stack_model:
            raise ValueError("LLAMA_STACK_MODEL must be configured")
        return self

    @model_validator(mode="after")
    def validate_tool_timeout(self) -> "Settings":
        if self.tool_timeout_seconds <= 0:
            raise ValueError("TOOL_TIMEOUT_SECONDS must be positive")
        return self

    # Observability
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Lazily construct Settings so tests and CLIs can set env vars before first access.
    return Settings()


def reset_settings_cache() -> None:
    get_settings.cache_clear()


class _SettingsProxy:
    """Lazy proxy for Settings.

    This avoids eager settings instantiation at import time, which can make tests
    order-dependent when env vars are changed during `pytest_configure()`.
    """

    def __getattr__(self, name: str) -> Any:
        return getattr(get_settings(), name)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<SettingsProxy {get_settings()!r}>"


settings = _SettingsProxy()
