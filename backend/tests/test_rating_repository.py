"""
Tests for Rating Repositories

Tests cover:
- In-memory store (copies, corrupt payloads)
- SQLAlchemy store on a temporary SQLite file
- Redis store with a mocked client
- Store selection by name
"""

import pytest
import pytest_asyncio
import redis.asyncio as redis
from unittest.mock import AsyncMock
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from gigcampus.database import Base
from gigcampus.exceptions import PersistenceError
from gigcampus.models import UserRatingRecord  # noqa: F401
from gigcampus.schemas.rating import SkillRating, UserRatingData
from gigcampus.services.rating_repository import (
    InMemoryRatingRepository,
    RedisRatingRepository,
    SQLRatingRepository,
    build_rating_repository,
)


def sample_data() -> UserRatingData:
    return UserRatingData(
        overall_rating=2.5,
        skills=[SkillRating(skill="Python", rating=2.5, projects_completed=3)],
        total_projects_completed=3,
    )


class TestInMemoryRepository:
    """Test the dictionary-backed store."""

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self):
        assert await InMemoryRatingRepository().get("user-1") is None

    @pytest.mark.asyncio
    async def test_put_stores_a_copy(self):
        repository = InMemoryRatingRepository()
        data = sample_data()
        await repository.put("user-1", data)

        data.skills[0].rating = 4.0
        stored = await repository.get("user-1")

        assert stored.skills[0].rating == 2.5

    @pytest.mark.asyncio
    async def test_delete(self):
        repository = InMemoryRatingRepository()
        await repository.put("user-1", sample_data())
        await repository.delete("user-1")
        await repository.delete("user-1")

        assert await repository.get("user-1") is None

    @pytest.mark.asyncio
    async def test_corrupt_payload_raises(self):
        repository = InMemoryRatingRepository()
        repository._records["user-1"] = "{not json"

        with pytest.raises(PersistenceError):
            await repository.get("user-1")


class TestSQLRepository:
    """Test the SQLAlchemy store against a temporary SQLite file."""

    @pytest_asyncio.fixture
    async def session_factory(self, tmp_path):
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ratings.db'}")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        await engine.dispose()

    @pytest.mark.asyncio
    async def test_round_trip(self, session_factory):
        repository = SQLRatingRepository(session_factory)
        await repository.put("user-1", sample_data())

        stored = await repository.get("user-1")

        assert stored.overall_rating == 2.5
        assert stored.skills[0].skill == "Python"
        assert stored.total_projects_completed == 3

    @pytest.mark.asyncio
    async def test_put_replaces_record(self, session_factory):
        repository = SQLRatingRepository(session_factory)
        await repository.put("user-1", sample_data())
        await repository.put("user-1", UserRatingData())

        stored = await repository.get("user-1")

        assert stored.skills == []
        assert stored.overall_rating == 0.0

    @pytest.mark.asyncio
    async def test_delete(self, session_factory):
        repository = SQLRatingRepository(session_factory)
        await repository.put("user-1", sample_data())
        await repository.delete("user-1")

        assert await repository.get("user-1") is None

    @pytest.mark.asyncio
    async def test_missing_table_raises_persistence_error(self, tmp_path):
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
        repository = SQLRatingRepository(async_sessionmaker(engine, class_=AsyncSession))

        with pytest.raises(PersistenceError):
            await repository.get("user-1")
        with pytest.raises(PersistenceError):
            await repository.put("user-1", sample_data())

        await engine.dispose()


class TestRedisRepository:
    """Test the Redis store with a mocked client."""

    @pytest.fixture
    def repository(self):
        repository = RedisRatingRepository("redis://localhost:6379/0")
        repository.redis = AsyncMock()
        return repository

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, repository):
        repository.redis.get.return_value = None

        assert await repository.get("user-1") is None
        repository.redis.get.assert_called_once_with("gigcampus_rating_data_user-1")

    @pytest.mark.asyncio
    async def test_put_writes_json(self, repository):
        await repository.put("user-1", sample_data())

        key, payload = repository.redis.set.call_args.args
        assert key == "gigcampus_rating_data_user-1"
        assert UserRatingData.model_validate_json(payload).skills[0].skill == "Python"

    @pytest.mark.asyncio
    async def test_get_decodes_json(self, repository):
        repository.redis.get.return_value = sample_data().model_dump_json()

        stored = await repository.get("user-1")

        assert stored.overall_rating == 2.5

    @pytest.mark.asyncio
    async def test_delete_uses_key(self, repository):
        await repository.delete("user-1")

        repository.redis.delete.assert_called_once_with("gigcampus_rating_data_user-1")

    @pytest.mark.asyncio
    async def test_redis_errors_raise_persistence_error(self, repository):
        repository.redis.get.side_effect = redis.ConnectionError("down")
        repository.redis.set.side_effect = redis.ConnectionError("down")

        with pytest.raises(PersistenceError):
            await repository.get("user-1")
        with pytest.raises(PersistenceError):
            await repository.put("user-1", sample_data())

    @pytest.mark.asyncio
    async def test_custom_prefix(self):
        repository = RedisRatingRepository("redis://localhost:6379/0", prefix="ratings")
        repository.redis = AsyncMock()
        repository.redis.get.return_value = None

        await repository.get("user-1")

        repository.redis.get.assert_called_once_with("ratings_user-1")

    @pytest.mark.asyncio
    async def test_close(self, repository):
        client = repository.redis
        await repository.close()

        client.close.assert_awaited_once()
        assert repository.redis is None


class TestBuildRepository:
    """Test store selection."""

    def test_memory(self):
        assert isinstance(build_rating_repository("memory"), InMemoryRatingRepository)

    def test_sql(self):
        assert isinstance(build_rating_repository("sql"), SQLRatingRepository)

    def test_redis(self):
        assert isinstance(build_rating_repository("redis"), RedisRatingRepository)

    def test_unknown(self):
        with pytest.raises(ValueError):
            build_rating_repository("mongo")
