from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PUBLIC_URL = "https://your-r2-domain.com"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    env: Literal["local", "prod", "test"] = Field(default="local", alias="ENV")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )

    r2_endpoint: str | None = Field(default=None, alias="R2_ENDPOINT")
    aws_access_key_id: str | None = Field(default=None, alias="AWS_ACCESS_KEY_ID")
    aws_secret_access_key: str | None = Field(default=None, alias="AWS_SECRET_ACCESS_KEY")
    r2_bucket: str | None = Field(default=None, alias="R2_BUCKET")
    r2_public_url: str | None = Field(default=None, alias="R2_PUBLIC_URL")
    r2_region: str = Field(default="auto", alias="R2_REGION")

    relay_upload_timeout: float = Field(default=300.0, alias="RELAY_UPLOAD_TIMEOUT")

    @property
    def public_base_url(self) -> str:
        return self.r2_public_url or DEFAULT_PUBLIC_URL


@lru_cache
def get_settings() -> Settings:
    return Settings()
