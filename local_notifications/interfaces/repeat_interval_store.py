"""
Repeat interval store interface.

Remembers which RepeatInterval the user picked for each scheduled
notification, since platform triggers do not keep it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from local_notifications.models.enums import RepeatInterval


class IRepeatIntervalStore(ABC):
    """Abstract interface for repeat interval persistence."""

    @abstractmethod
    async def get_all(self) -> dict[str, RepeatInterval]:
        """Get all stored intervals keyed by notification id."""
        pass

    @abstractmethod
    async def set(self, notification_id: str, interval: RepeatInterval) -> None:
        """Store (or overwrite) the interval for a notification."""
        pass

    @abstractmethod
    async def delete(self, notification_id: str) -> bool:
        """Delete the interval for a notification. Returns True if one existed."""
        pass

    @abstractmethod
    async def clear(self) -> int:
        """Delete all intervals. Returns count of deleted entries."""
        pass

    @abstractmethod
    async def retain(self, notification_ids: Iterable[str]) -> int:
        """Delete entries whose id is not in the given set. Returns count deleted."""
        pass
