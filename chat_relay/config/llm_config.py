from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-3.5-turbo"


class LlmConfig(BaseSettings):
    """Configuration for the upstream chat completion API.

    The API key is mandatory; constructing the config without it raises a
    ``ValidationError`` so the process fails at startup rather than on the
    first request.
    """

    api_key: str = Field(..., alias="OPENAI_API_KEY")
    base_url: str = Field(DEFAULT_BASE_URL, alias="LLM_BASE_URL")
    model: str = Field(DEFAULT_MODEL, alias="LLM_MODEL")
    timeout: float = Field(30.0, alias="LLM_TIMEOUT")

    @field_validator("api_key", "base_url", "model")
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("value must not be blank")
        return value.strip()

    @field_validator("timeout")
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("LLM_TIMEOUT must be positive")
        return value

    @property
    def completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True, frozen=True
    )


@lru_cache()
def get_llm_config() -> LlmConfig:
    """Return a cached language model configuration."""

    return LlmConfig()  # type: ignore[call-arg]
