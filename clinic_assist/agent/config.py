"""Generation client configuration with environment variable loading.

Pydantic-based configuration for the Agno agents behind the assistant and
the form builder. Supports OpenAI and OpenAI-compatible APIs via custom base URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from clinic_assist.errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()


class GenerationConfig(BaseModel):
    """Configuration for the remote model.

    Attributes:
        api_key: API key for model access.
        base_url: API base URL (None for OpenAI default).
        model_name: Model identifier used by both tools.
        chat_temperature: Sampling temperature for assistant replies.
        form_temperature: Sampling temperature for form generation.
        chat_max_tokens: Maximum tokens in an assistant reply.
        form_max_tokens: Maximum tokens in a generated form document.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY", ""),
        validate_default=True,
        description="API key for LLM provider",
    )
    base_url: str | None = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or None,
        description="API base URL (None for OpenAI default)",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"),
        description="Model to use",
    )
    chat_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    form_temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="Low temperature keeps generated field lists stable",
    )
    chat_max_tokens: int = Field(default=1024, ge=1, le=128000)
    form_max_tokens: int = Field(default=8192, ge=1, le=128000)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set LLM_API_KEY or OPENAI_API_KEY in .env"
            )
        return v.strip()


def get_generation_config(**overrides: object) -> GenerationConfig:
    """Create generation configuration from environment.

    Args:
        **overrides: Explicit values taking precedence over the environment.

    Returns:
        Configured GenerationConfig instance.

    Raises:
        ConfigurationError: If no API key is set or a value is out of range.
    """
    try:
        return GenerationConfig(**overrides)
    except PydanticValidationError as e:
        raise ConfigurationError(str(e)) from e
