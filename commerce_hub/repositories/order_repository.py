# ============================================================================
# SCOPE: MULTI-TENANT
# Tenant-Aware: Yes - tenant_id is a required argument of every scoped method.
# ============================================================================
"""Repository for order database operations."""

from __future__ import annotations

from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import func, select

from commerce_hub.models.db import Order
from commerce_hub.repositories.base import SessionRepository, epoch_millis


class OrderRepository(SessionRepository):
    """Database operations for orders."""

    def _scoped(self, tenant_id: UUID):
        return select(Order).where(Order.tenant_id == tenant_id)

    async def get(self, tenant_id: UUID, order_id: UUID) -> Order | None:
        stmt = self._scoped(tenant_id).where(Order.id == order_id)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_tenant(self, tenant_id: UUID) -> list[Order]:
        stmt = self._scoped(tenant_id).order_by(Order.created_at.desc(), Order.id)
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def list_for_customer(self, tenant_id: UUID, customer_id: str) -> list[Order]:
        stmt = (
            self._scoped(tenant_id)
            .where(Order.customer_id == customer_id)
            .order_by(Order.created_at.desc(), Order.id)
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def _next_order_number(self) -> str:
        # ORD-<epoch millis>, bumped past numbers already taken in the same millisecond
        millis = epoch_millis()
        while True:
            candidate = f"ORD-{millis}"
            stmt = select(func.count()).select_from(Order).where(Order.order_number == candidate)
            if (await self._db.execute(stmt)).scalar_one() == 0:
                return candidate
            millis += 1

    async def create(self, tenant_id: UUID, **fields: Any) -> Order:
        order = Order(tenant_id=tenant_id, order_number=await self._next_order_number(), **fields)
        self._db.add(order)
        await self._db.flush()
        await self._db.refresh(order)
        return order

    async def update(self, tenant_id: UUID, order_id: UUID, **updates: Any) -> Order | None:
        order = await self.get(tenant_id, order_id)
        if order is None:
            return None
        self._apply(order, updates)
        await self._db.flush()
        await self._db.refresh(order)
        return order

    async def count_for_tenant(self, tenant_id: UUID) -> int:
        stmt = select(func.count(Order.id)).where(Order.tenant_id == tenant_id)
        return int((await self._db.execute(stmt)).scalar_one())

    async def revenue(self, tenant_id: UUID | None = None) -> Decimal:
        """Sum of order totals, for one tenant or platform-wide."""
        stmt = select(func.coalesce(func.sum(Order.total_amount), 0))
        if tenant_id is not None:
            stmt = stmt.where(Order.tenant_id == tenant_id)
        total = (await self._db.execute(stmt)).scalar_one()
        return Decimal(str(total))
