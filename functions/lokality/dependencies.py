"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging

from lokality.auth import get_firebase_app
from lokality.config import get_settings
from lokality.db import DbClient, FirestoreDbClient, InMemoryDbClient, SqlDbClient
from lokality.presence import InMemoryPresenceClient, PresenceClient, RedisPresenceClient
from lokality.storage import InMemoryStorageClient, S3StorageClient, StorageClient
from models import api_config

logger = logging.getLogger(__name__)

_db_client: DbClient | None = None
_storage_client: StorageClient | None = None
_presence_client: PresenceClient | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so state persists across requests.

    Preference order: in-memory toggle, SQL database URL, Firestore, in-memory.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends:
        _db_client = InMemoryDbClient()
    elif settings.database_url:
        _db_client = SqlDbClient(settings.database_url)
    elif get_firebase_app(settings) is not None:
        from firebase_admin import firestore

        _db_client = FirestoreDbClient(firestore.client(get_firebase_app(settings)))
    else:
        logger.warning("No database configured; using in-memory storage")
        _db_client = InMemoryDbClient()
    return _db_client


def get_storage_client() -> StorageClient:
    global _storage_client
    if _storage_client:
        return _storage_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.s3_bucket:
        _storage_client = InMemoryStorageClient()
    else:
        _storage_client = S3StorageClient(
            bucket=settings.s3_bucket,
            region=settings.s3_region or "",
            endpoint=settings.s3_endpoint or "",
            access_key_id=settings.aws_access_key_id or "",
            secret_access_key=settings.aws_secret_access_key or "",
            public_base_url=settings.public_base_url or "",
        )
    return _storage_client


def get_presence_client() -> PresenceClient:
    """
    Return a singleton presence client.
    """
    global _presence_client
    if _presence_client:
        return _presence_client

    settings = get_settings()
    if settings.redis_url and not settings.use_in_memory_backends:
        _presence_client = RedisPresenceClient(url=settings.redis_url)
    else:
        _presence_client = InMemoryPresenceClient()
    return _presence_client


def configure_ai() -> None:
    """Push the Gemini key and model from settings into the model helpers."""
    settings = get_settings()
    if settings.google_api_key:
        api_config.DEFAULT_API_KEY = settings.google_api_key
    api_config.DEFAULT_MODEL = settings.gemini_model


def reset_clients() -> None:
    """Drop cached clients so the next request rebuilds them from settings."""
    global _db_client, _storage_client, _presence_client
    _db_client = None
    _storage_client = None
    _presence_client = None
