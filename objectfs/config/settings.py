# Configuration management

from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    # Object store connection
    s3_bucket: str = ""
    aws_region: str = "us-east-1"
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    s3_endpoint_url: Optional[str] = None  # MinIO, LocalStack, ...

    # Adapter behaviour
    storage_directory: str = ""
    storage_create_bucket: bool = False
    storage_acl: str = "private"
    storage_detect_content_type: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
