"""
Realtime presence abstraction.

Supports an in-memory fallback for tests/local runs and a Redis-backed
implementation for production. Each user has a `status/<uid>` entry holding
`{"state": "online"|"offline", "lastChanged": <epoch ms>}`.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import redis
from redis import exceptions as redis_exceptions

from shared.constants import PRESENCE_KEY_PREFIX
from shared.types import PresenceStatus

logger = logging.getLogger(__name__)


def status_from_value(value: Any) -> PresenceStatus:
    """Anything other than an explicit online state reads as offline."""
    if isinstance(value, dict) and value.get("state") == PresenceStatus.ONLINE.value:
        return PresenceStatus.ONLINE
    return PresenceStatus.OFFLINE


def _make_value(status: PresenceStatus) -> dict:
    return {"state": status.value, "lastChanged": int(time.time() * 1000)}


class PresenceClient(Protocol):
    """Minimal presence interface: read and write a user's status."""

    def get_status(self, user_id: Optional[str]) -> PresenceStatus:
        ...

    def set_status(self, user_id: str, status: PresenceStatus) -> None:
        ...


@dataclass
class InMemoryPresenceClient:
    """Simple dict-backed presence store for testing/dev."""

    values: dict[str, dict] = field(default_factory=dict)

    def get_status(self, user_id: Optional[str]) -> PresenceStatus:
        if not user_id:
            return PresenceStatus.OFFLINE
        return status_from_value(self.values.get(PRESENCE_KEY_PREFIX + user_id))

    def set_status(self, user_id: str, status: PresenceStatus) -> None:
        self.values[PRESENCE_KEY_PREFIX + user_id] = _make_value(status)


@dataclass
class RedisPresenceClient:
    """Redis-backed presence store; entries expire so stale sessions go offline."""

    url: str
    ttl_seconds: int = 300

    def __post_init__(self):
        self.client = redis.Redis.from_url(self.url)

    def get_status(self, user_id: Optional[str]) -> PresenceStatus:
        if not user_id:
            return PresenceStatus.OFFLINE
        try:
            raw = self.client.get(PRESENCE_KEY_PREFIX + user_id)
        except redis_exceptions.ConnectionError:
            # Connection resets can happen on managed Redis. Report offline
            # and reconnect for the next read.
            logger.warning("Presence read failed for %s; reconnecting", user_id)
            self.client = redis.Redis.from_url(self.url)
            return PresenceStatus.OFFLINE
        if raw is None:
            return PresenceStatus.OFFLINE
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Malformed presence value for %s", user_id)
            return PresenceStatus.OFFLINE
        return status_from_value(value)

    def set_status(self, user_id: str, status: PresenceStatus) -> None:
        self.client.set(
            PRESENCE_KEY_PREFIX + user_id,
            json.dumps(_make_value(status)),
            ex=self.ttl_seconds,
        )
