"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from storepnl.core.config import AppSettings
from storepnl.persistence.dynamodb_backend import DynamoDBLinkRegistry, DynamoDBUserDirectory
from storepnl.persistence.redis_backend import RedisCacheBackend


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (link_registry, user_directory, cache).
    """
    if settings is None:
        settings = AppSettings()

    cache = RedisCacheBackend(
        host=settings.redis.host,
        port=settings.redis.port,
        db=settings.redis.db,
    )

    links = DynamoDBLinkRegistry(
        table_suffix=settings.dynamodb.table_suffix,
        region=settings.dynamodb.region,
        endpoint_url=settings.dynamodb.endpoint_url,
    )

    users = DynamoDBUserDirectory(
        table_suffix=settings.dynamodb.table_suffix,
        region=settings.dynamodb.region,
        endpoint_url=settings.dynamodb.endpoint_url,
    )

    return links, users, cache
