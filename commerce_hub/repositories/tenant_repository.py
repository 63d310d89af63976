# ============================================================================
# SCOPE: GLOBAL
# Description: Tenant registry. Tenants are the unit of isolation, so this is
#              the only repository whose reads are not filtered by tenant.
# ============================================================================
"""Repository for tenant database operations."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import func, select

from commerce_hub.models.db import Tenant
from commerce_hub.repositories.base import SessionRepository


class TenantRepository(SessionRepository):
    """Database operations for tenants."""

    async def get(self, tenant_id: UUID) -> Tenant | None:
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Tenant | None:
        stmt = select(Tenant).where(Tenant.slug == slug)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Tenant]:
        """All tenants, newest first."""
        stmt = select(Tenant).order_by(Tenant.created_at.desc(), Tenant.id)
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def create(self, **fields: Any) -> Tenant:
        tenant = Tenant(**fields)
        self._db.add(tenant)
        await self._db.flush()
        await self._db.refresh(tenant)
        return tenant

    async def update(self, tenant_id: UUID, **updates: Any) -> Tenant | None:
        """
        Update a tenant.

        Returns:
            Updated Tenant, or None when it does not exist
        """
        tenant = await self.get(tenant_id)
        if tenant is None:
            return None
        self._apply(tenant, updates)
        await self._db.flush()
        await self._db.refresh(tenant)
        return tenant

    async def count_active(self) -> int:
        stmt = select(func.count()).select_from(Tenant).where(Tenant.is_active.is_(True))
        result = await self._db.execute(stmt)
        return int(result.scalar_one())
