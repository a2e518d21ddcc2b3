from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

from matchmaker.constants.error_constant import ERROR_DB_CONNECTION_FAILED


class Settings(BaseSettings):

    # Database
    DATABASE_URL: str | None = None

    # AI provider
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str | None = None
    EMBEDDING_MODEL: str = "text-embedding-3-small"
    CHAT_MODEL: str = "gpt-4o-mini"
    EMBEDDING_DIM: int = 1536
    AI_TIMEOUT_SECONDS: float = Field(default=20.0, gt=0)
    AI_MAX_RETRIES: int = Field(default=2, ge=0, le=5)

    # Matching
    FEED_BATCH_SIZE: int = Field(default=5, ge=1, le=50)
    FEED_SCAN_CHUNK: int = Field(default=200, ge=1)
    DAILY_PICKS_COUNT: int = Field(default=3, ge=1, le=10)
    DAILY_PICKS_CANDIDATES: int = Field(default=30, ge=1, le=200)
    TIMEZONE: str = "UTC"

    # Photos
    STORAGE_BASE_URL: str | None = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    DEMO_EXTERNAL_ID_PREFIX: str = "demo_"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("DATABASE_URL")
    def check_database_url(cls, v: str | None) -> str:
        if not v:
            raise ValueError(ERROR_DB_CONNECTION_FAILED)
        return v


settings = Settings()
