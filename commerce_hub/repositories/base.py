"""
Base class for tenant-scoped repositories.

Every read or write on a tenant-owned table takes the tenant id as a required
argument; there is no unscoped ``get(id)``.
"""

from __future__ import annotations

import time

from sqlalchemy.ext.asyncio import AsyncSession


def epoch_millis() -> int:
    return int(time.time() * 1000)


class SessionRepository:
    """Holds the session and exposes transaction control to callers."""

    def __init__(self, db: AsyncSession):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy async session for database queries
        """
        self._db = db

    @property
    def session(self) -> AsyncSession:
        return self._db

    async def commit(self) -> None:
        await self._db.commit()

    async def rollback(self) -> None:
        await self._db.rollback()

    @staticmethod
    def _apply(entity, updates: dict) -> None:
        for field, value in updates.items():
            setattr(entity, field, value)
