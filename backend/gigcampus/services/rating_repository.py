"""
Rating Repositories - Keyed storage for per-user rating ledgers

Each backend stores one whole UserRatingData document per user id and
replaces it wholesale on write. Backend failures are raised as
PersistenceError; nothing is swallowed or degraded.

Backends:
    - InMemoryRatingRepository  (tests, rating_store=memory)
    - SQLRatingRepository       (user_ratings table, rating_store=sql)
    - RedisRatingRepository     (one JSON string per user, rating_store=redis)

Usage:
    repository = get_rating_repository()
    data = await repository.get("user-123")   # None when absent
    await repository.put("user-123", data)
"""

import json
import logging
from typing import Any, Dict, Optional, Protocol

import redis.asyncio as redis
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gigcampus.exceptions import PersistenceError
from gigcampus.models.rating import UserRatingRecord
from gigcampus.schemas.rating import UserRatingData

logger = logging.getLogger(__name__)


class RatingRepository(Protocol):
    """Protocol for rating ledger stores."""

    async def get(self, user_id: str) -> Optional[UserRatingData]:
        """Return the stored ledger, or None if the user has none."""
        ...

    async def put(self, user_id: str, data: UserRatingData) -> None:
        """Replace the stored ledger for the user."""
        ...

    async def delete(self, user_id: str) -> None:
        """Remove the ledger for the user (no-op when absent)."""
        ...


def _decode(user_id: str, payload: Any) -> UserRatingData:
    try:
        if isinstance(payload, (str, bytes)):
            return UserRatingData.model_validate_json(payload)
        return UserRatingData.model_validate(payload)
    except ValidationError as e:
        logger.error(f"Stored rating data for {user_id} is corrupt: {e}")
        raise PersistenceError(f"Stored rating data for user {user_id} is unreadable") from e


class InMemoryRatingRepository:
    """Dictionary-backed store holding serialized copies of each ledger."""

    def __init__(self) -> None:
        self._records: Dict[str, str] = {}

    async def get(self, user_id: str) -> Optional[UserRatingData]:
        payload = self._records.get(user_id)
        if payload is None:
            return None
        return _decode(user_id, payload)

    async def put(self, user_id: str, data: UserRatingData) -> None:
        self._records[user_id] = data.model_dump_json()

    async def delete(self, user_id: str) -> None:
        self._records.pop(user_id, None)


class SQLRatingRepository:
    """
    SQLAlchemy-backed store using the user_ratings table.

    Attributes:
        session_factory: async_sessionmaker producing AsyncSession objects;
            each operation runs in its own session and transaction
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def get(self, user_id: str) -> Optional[UserRatingData]:
        try:
            async with self.session_factory() as session:
                record = await session.get(UserRatingRecord, user_id)
                payload = record.data if record else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to read rating data for {user_id}: {e}")
            raise PersistenceError(f"Could not read rating data for user {user_id}") from e

        if payload is None:
            return None
        return _decode(user_id, payload)

    async def put(self, user_id: str, data: UserRatingData) -> None:
        payload = data.model_dump(mode="json")
        try:
            async with self.session_factory() as session:
                await self._upsert(session, user_id, payload)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to write rating data for {user_id}: {e}")
            raise PersistenceError(f"Could not save rating data for user {user_id}") from e

    async def delete(self, user_id: str) -> None:
        try:
            async with self.session_factory() as session:
                record = await session.get(UserRatingRecord, user_id)
                if record is not None:
                    await session.delete(record)
                    await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete rating data for {user_id}: {e}")
            raise PersistenceError(f"Could not delete rating data for user {user_id}") from e

    @staticmethod
    async def _upsert(session: AsyncSession, user_id: str, payload: dict) -> None:
        record = await session.get(UserRatingRecord, user_id)
        if record is None:
            session.add(UserRatingRecord(user_id=user_id, data=payload))
        else:
            record.data = payload


class RedisRatingRepository:
    """
    Redis-backed store, one JSON string per user.

    Keys follow {prefix}_{user_id}, e.g. gigcampus_rating_data_user-123.

    Attributes:
        redis_url: Redis connection URL
        prefix: Key prefix shared by all ledger entries
    """

    def __init__(self, redis_url: str, prefix: str = "gigcampus_rating_data"):
        self.redis_url = redis_url
        self.prefix = prefix
        self.redis: Optional[redis.Redis] = None

    def _key(self, user_id: str) -> str:
        return f"{self.prefix}_{user_id}"

    def _client(self) -> redis.Redis:
        if self.redis is None:
            self.redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True
            )
        return self.redis

    async def get(self, user_id: str) -> Optional[UserRatingData]:
        try:
            payload = await self._client().get(self._key(user_id))
        except redis.RedisError as e:
            logger.error(f"Redis read failed for {user_id}: {e}")
            raise PersistenceError(f"Could not read rating data for user {user_id}") from e

        if payload is None:
            return None
        return _decode(user_id, payload)

    async def put(self, user_id: str, data: UserRatingData) -> None:
        try:
            await self._client().set(self._key(user_id), data.model_dump_json())
        except redis.RedisError as e:
            logger.error(f"Redis write failed for {user_id}: {e}")
            raise PersistenceError(f"Could not save rating data for user {user_id}") from e

    async def delete(self, user_id: str) -> None:
        try:
            await self._client().delete(self._key(user_id))
        except redis.RedisError as e:
            logger.error(f"Redis delete failed for {user_id}: {e}")
            raise PersistenceError(f"Could not delete rating data for user {user_id}") from e

    async def close(self) -> None:
        if self.redis is not None:
            await self.redis.close()
            self.redis = None


# ==============================================================================
# Shared instance for dependency injection
# ==============================================================================

_rating_repository: Optional[RatingRepository] = None


def build_rating_repository(store: str) -> RatingRepository:
    """
    Create a repository for the configured store name.

    Raises:
        ValueError: If the store name is not sql, redis or memory
    """
    from gigcampus.config import get_settings

    settings = get_settings()
    if store == "memory":
        return InMemoryRatingRepository()
    if store == "sql":
        from gigcampus.database import async_session
        return SQLRatingRepository(async_session)
    if store == "redis":
        return RedisRatingRepository(settings.redis_url, prefix=settings.rating_key_prefix)
    raise ValueError(f"Unknown rating store: {store!r}")


def get_rating_repository() -> RatingRepository:
    """Get the shared repository for the configured rating store."""
    global _rating_repository
    if _rating_repository is None:
        from gigcampus.config import get_settings

        _rating_repository = build_rating_repository(get_settings().rating_store)
        logger.info(f"Using {type(_rating_repository).__name__} for rating data")
    return _rating_repository
