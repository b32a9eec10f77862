from aws_lambda_powertools import Logger
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = Logger(utc=True)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "posts-api"
    database_url: str
    database_pool_max_size: int = Field(default=5, ge=1)
    database_pool_min_size: int = Field(default=1, ge=0)
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8100


def load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as error:
        logger.exception(f"Invalid configuration {error.error_count()=}")
        raise SystemExit(1) from error
