"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class FetchConfig(BaseSettings):
    """Spreadsheet/CSV source retrieval configuration."""

    model_config = {"env_prefix": "STOREPNL_FETCH_"}

    timeout: int = 30
    csv_encoding: str = "utf-8"
    user_agent: str = "storepnl/0.1"


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration."""

    model_config = {"env_prefix": "STOREPNL_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "eu-central-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis session cache configuration."""

    model_config = {"env_prefix": "STOREPNL_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    session_ttl: int = 8 * 60 * 60


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "STOREPNL_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    percent_sentinel: str = "—"

    fetch: FetchConfig = FetchConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
