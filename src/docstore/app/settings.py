from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    # flat = easy env overrides
    name: str = "docstore"
    version: str = "0.1.0"
    api_prefix: str = ""
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    max_payload_bytes: int = 50 * 1024 * 1024
    host: str = "0.0.0.0"
    port: int = 5000

    model_config = SettingsConfigDict(
        env_prefix="APP_",  # APP_NAME, APP_MAX_PAYLOAD_BYTES, ...
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_app_settings(**kwargs) -> AppSettings:
    # Only include kwargs that are not None, so defaults in AppSettings are used
    filtered_kwargs = {k: v for k, v in kwargs.items() if v is not None}
    return AppSettings(**filtered_kwargs)
