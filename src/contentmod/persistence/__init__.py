"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from contentmod.core.config import AppSettings
from contentmod.persistence.dynamodb_backend import DynamoDBStateBackend, DynamoDBWorkflowRepository
from contentmod.persistence.memory_backend import MemoryStateBackend, MemoryWorkflowRepository
from contentmod.persistence.redis_backend import RedisCacheBackend
from contentmod.persistence.seed_loader import load_workflows


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (state_backend, workflow_repository, cache). ``cache`` is
        None unless Redis is enabled.
    """
    if settings is None:
        settings = AppSettings()

    cache = None
    if settings.redis.enabled:
        cache = RedisCacheBackend(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
            key_prefix=settings.redis.key_prefix,
        )

    if settings.state_backend == "dynamodb":
        state_backend = DynamoDBStateBackend(
            table_suffix=settings.dynamodb.table_suffix,
            region=settings.dynamodb.region,
            endpoint_url=settings.dynamodb.endpoint_url,
        )
        workflows = DynamoDBWorkflowRepository(
            table_suffix=settings.dynamodb.table_suffix,
            region=settings.dynamodb.region,
            endpoint_url=settings.dynamodb.endpoint_url,
            cache=cache,
            cache_ttl=settings.redis.workflow_ttl,
        )
    else:
        # DynamoDB tables are seeded by scripts/seed_dynamodb.py instead
        state_backend = MemoryStateBackend()
        workflows = MemoryWorkflowRepository(
            load_workflows(settings.workflow_seed_path) if settings.workflow_seed_path else None
        )

    return state_backend, workflows, cache
