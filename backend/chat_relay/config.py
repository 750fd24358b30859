"""Configuration management for the chat relay backend.

Loads environment variables (and a local .env file when present) through
pydantic BaseSettings. Field aliases keep the deployment variable names.
"""

import logging
from datetime import datetime, timezone
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_ACCOUNT_PATH = "/etc/secrets/FIREBASE_SERVICE_ACCOUNT"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    port: int = Field(5000, alias="PORT")
    log_level: str = Field("info", alias="LOG_LEVEL")

    openai_api_key: str = Field(..., alias="OPENAI_API_KEY")
    openai_chat_model: str = Field("gpt-3.5-turbo", alias="OPENAI_CHAT_MODEL")

    firebase_storage_bucket: str = Field(..., alias="FIREBASE_STORAGE_BUCKET")
    firebase_service_account_path: str = Field(DEFAULT_SERVICE_ACCOUNT_PATH, alias="FIREBASE_SERVICE_ACCOUNT_PATH")

    # Signed image URLs all share this fixed expiry
    signed_url_expires_at: datetime = Field(
        datetime(2035, 3, 17, tzinfo=timezone.utc), alias="SIGNED_URL_EXPIRES_AT"
    )
    http_timeout_seconds: float = Field(30.0, alias="HTTP_TIMEOUT_SECONDS")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    s = Settings()  # type: ignore
    logger.info("Loaded settings port=%s bucket=%s chat_model=%s", s.port, s.firebase_storage_bucket, s.openai_chat_model)
    return s
