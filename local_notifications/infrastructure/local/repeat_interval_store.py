"""
SQLite implementation of the repeat interval store.
"""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import delete, select

from local_notifications.infrastructure.local.database import (
    RepeatIntervalORM,
    get_session_factory,
)
from local_notifications.interfaces.repeat_interval_store import IRepeatIntervalStore
from local_notifications.models.enums import RepeatInterval
from local_notifications.utils.datetime_utils import now_utc


class SqliteRepeatIntervalStore(IRepeatIntervalStore):
    """SQLite implementation of repeat interval store."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def get_all(self) -> dict[str, RepeatInterval]:
        async with self._session_factory() as session:
            result = await session.execute(select(RepeatIntervalORM))
            return {
                orm.notification_id: RepeatInterval(orm.repeat_interval)
                for orm in result.scalars().all()
            }

    async def set(self, notification_id: str, interval: RepeatInterval) -> None:
        async with self._session_factory() as session:
            orm = await session.get(RepeatIntervalORM, notification_id)
            if orm:
                orm.repeat_interval = interval.value
            else:
                session.add(
                    RepeatIntervalORM(
                        notification_id=notification_id,
                        repeat_interval=interval.value,
                        created_at=now_utc(),
                    )
                )
            await session.commit()

    async def delete(self, notification_id: str) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(RepeatIntervalORM).where(
                    RepeatIntervalORM.notification_id == notification_id
                )
            )
            await session.commit()
            return result.rowcount > 0

    async def clear(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(delete(RepeatIntervalORM))
            await session.commit()
            return result.rowcount

    async def retain(self, notification_ids: Iterable[str]) -> int:
        keep = set(notification_ids)
        async with self._session_factory() as session:
            query = delete(RepeatIntervalORM)
            if keep:
                query = query.where(RepeatIntervalORM.notification_id.not_in(keep))
            result = await session.execute(query)
            await session.commit()
            return result.rowcount
