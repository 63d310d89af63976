# ============================================================================
# SCOPE: MULTI-TENANT
# Tenant-Aware: Yes - tenant_id is a required argument of every method.
# ============================================================================
"""Repository for knowledge base database operations."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, select

from commerce_hub.models.db import KnowledgeBase
from commerce_hub.repositories.base import SessionRepository


class KnowledgeRepository(SessionRepository):
    """Database operations for knowledge base entries."""

    def _scoped(self, tenant_id: UUID):
        return select(KnowledgeBase).where(KnowledgeBase.tenant_id == tenant_id)

    async def get(self, tenant_id: UUID, entry_id: UUID) -> KnowledgeBase | None:
        stmt = self._scoped(tenant_id).where(KnowledgeBase.id == entry_id)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_tenant(self, tenant_id: UUID) -> list[KnowledgeBase]:
        """Entries of a tenant, newest first."""
        stmt = self._scoped(tenant_id).order_by(KnowledgeBase.created_at.desc(), KnowledgeBase.id)
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def search(self, tenant_id: UUID, query: str) -> list[KnowledgeBase]:
        """Case-insensitive substring search over title and content."""
        term = query.strip().lower()
        stmt = (
            self._scoped(tenant_id)
            .where(
                or_(
                    func.lower(KnowledgeBase.title).contains(term, autoescape=True),
                    func.lower(KnowledgeBase.content).contains(term, autoescape=True),
                )
            )
            .order_by(KnowledgeBase.created_at.desc(), KnowledgeBase.id)
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def create(self, tenant_id: UUID, **fields: Any) -> KnowledgeBase:
        entry = KnowledgeBase(tenant_id=tenant_id, **fields)
        self._db.add(entry)
        await self._db.flush()
        await self._db.refresh(entry)
        return entry

    async def update(self, tenant_id: UUID, entry_id: UUID, **updates: Any) -> KnowledgeBase | None:
        entry = await self.get(tenant_id, entry_id)
        if entry is None:
            return None
        self._apply(entry, updates)
        await self._db.flush()
        await self._db.refresh(entry)
        return entry
