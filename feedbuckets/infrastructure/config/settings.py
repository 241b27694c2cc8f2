from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from feedbuckets.domain.enums import BucketSchemeName


class Settings(BaseSettings):
    # App
    app_name: str = "FeedBuckets"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = ""  # Loaded from environment, validated in model_validator
    database_echo: bool = False

    # CORS - comma-separated list of allowed origins
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Identity - header carrying the already authenticated user ID
    user_header_name: str = "X-User-ID"

    # Buckets - one scheme per deployment, shared by the view and mark-read paths
    bucket_scheme: str = BucketSchemeName.ROLLING.value  # Options: "rolling", "calendar"

    @model_validator(mode="after")
    def validate_config(self) -> "Settings":
        """Validate required configuration and the bucket scheme"""
        if not self.database_url:
            raise ValueError("DATABASE_URL is required. Set in environment or .env file.")

        if self.bucket_scheme not in BucketSchemeName.values():
            raise ValueError(
                f"Invalid bucket_scheme '{self.bucket_scheme}'. "
                f"Must be one of: {', '.join(BucketSchemeName.values())}"
            )
        return self

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="allow", case_sensitive=False
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
