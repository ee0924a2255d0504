"""
Unit tests for SQLite repeat interval store.
"""

import pytest

from local_notifications.infrastructure.local.repeat_interval_store import SqliteRepeatIntervalStore
from local_notifications.models.enums import RepeatInterval


@pytest.fixture
def store(session_factory):
    return SqliteRepeatIntervalStore(session_factory=session_factory)


class TestRepeatIntervalStore:
    """Tests for repeat interval persistence."""

    @pytest.mark.asyncio
    async def test_set_and_get_all(self, store):
        await store.set("a", RepeatInterval.WEEK)
        await store.set("b", RepeatInterval.HOUR)

        assert await store.get_all() == {"a": RepeatInterval.WEEK, "b": RepeatInterval.HOUR}

    @pytest.mark.asyncio
    async def test_set_overwrites(self, store):
        await store.set("a", RepeatInterval.WEEK)
        await store.set("a", RepeatInterval.MINUTE)

        assert await store.get_all() == {"a": RepeatInterval.MINUTE}

    @pytest.mark.asyncio
    async def test_delete(self, store):
        await store.set("a", RepeatInterval.DAY)

        assert await store.delete("a") is True
        assert await store.delete("a") is False
        assert await store.get_all() == {}

    @pytest.mark.asyncio
    async def test_clear(self, store):
        await store.set("a", RepeatInterval.DAY)
        await store.set("b", RepeatInterval.DAY)

        assert await store.clear() == 2
        assert await store.get_all() == {}

    @pytest.mark.asyncio
    async def test_retain_drops_unknown_ids(self, store):
        await store.set("a", RepeatInterval.DAY)
        await store.set("b", RepeatInterval.WEEK)

        deleted = await store.retain(["b", "c"])

        assert deleted == 1
        assert await store.get_all() == {"b": RepeatInterval.WEEK}

    @pytest.mark.asyncio
    async def test_retain_nothing_clears(self, store):
        await store.set("a", RepeatInterval.DAY)

        assert await store.retain([]) == 1
        assert await store.get_all() == {}
