"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration."""

    model_config = {"env_prefix": "CONTENTMOD_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis cache configuration for workflow definitions."""

    model_config = {"env_prefix": "CONTENTMOD_REDIS_"}

    enabled: bool = False
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    workflow_ttl: int = 300
    key_prefix: str = "contentmod:"  # shared Redis namespace


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "CONTENTMOD_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    state_backend: Literal["memory", "dynamodb"] = "memory"
    workflow_seed_path: str | None = None

    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
