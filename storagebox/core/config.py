# storagebox/core/config.py
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Token signing; no default so the process refuses to start without it
    jwt_secret: str = Field(min_length=1)
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = Field(default=7, ge=1, le=7)

    database_url: str = "sqlite:///./storagebox.db"

    # S3 credentials fall back to the boto3 credential chain when unset
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    aws_s3_bucket_name: str = "storagebox"
    aws_endpoint_url: Optional[str] = None
    s3_key_prefix: str = "storage_app"

    # Display-only ceiling used by the dashboard
    storage_quota_gb: int = 10

    cookie_name: str = "token"
    cookie_secure: bool = False

    # slowapi limit string, fixed window per client address
    rate_limit: str = "100/15 minutes"

    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    # Tell pydantic-settings to load from .env at project root
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignore any extra stuff in .env
        frozen=True,
    )

    @property
    def token_ttl_seconds(self) -> int:
        return self.token_ttl_days * 24 * 60 * 60


@lru_cache
def get_settings() -> Settings:
    return Settings()
