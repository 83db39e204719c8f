from functools import lru_cache

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseModel):
    """Credential and base URL held by a client for its whole lifetime."""

    model_config = ConfigDict(frozen=True)

    authorization: str
    instance_url: str


class ClientSettings(BaseSettings):
    """Connection settings read from ``ANALYTICS_ENGINE_*`` environment variables (or ``.env``)."""

    model_config = SettingsConfigDict(
        env_prefix="ANALYTICS_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    authorization: str = ""
    instance_url: str = ""


@lru_cache(maxsize=1)
def get_settings() -> ClientSettings:
    return ClientSettings()
