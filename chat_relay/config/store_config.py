"""Settings for the transcript store.

Messages are written to a Supabase project through its PostgREST
interface, so the store is addressed by the project URL and a service
role key.  Both are required.
"""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class StoreConfig(BaseSettings):
    """Connection settings for the message table."""

    url: str = Field(..., alias="SUPABASE_URL")
    service_key: str = Field(..., alias="SUPABASE_SERVICE_ROLE_KEY")
    table: str = Field("messages", alias="STORE_TABLE")
    timeout: float = Field(10.0, alias="STORE_TIMEOUT")

    @field_validator("url", "service_key", "table")
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("value must not be blank")
        return value.strip()

    @field_validator("timeout")
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("STORE_TIMEOUT must be positive")
        return value

    @property
    def insert_url(self) -> str:
        return f"{self.url.rstrip('/')}/rest/v1/{self.table}"

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True, frozen=True
    )


@lru_cache()
def get_store_config() -> StoreConfig:
    """Return a cached store configuration."""

    return StoreConfig()  # type: ignore[call-arg]
