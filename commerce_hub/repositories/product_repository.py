# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Catalog queries. Every statement filters on tenant_id.
# Tenant-Aware: Yes - tenant_id is a required argument of every method.
# ============================================================================
"""Repository for product and inventory database operations."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import delete as sql_delete, func, or_, select
from sqlalchemy.orm import selectinload

from commerce_hub.models.db import Inventory, Product
from commerce_hub.repositories.base import SessionRepository

DEFAULT_REORDER_POINT = 10


class ProductRepository(SessionRepository):
    """Database operations for products."""

    def _scoped(self, tenant_id: UUID):
        return select(Product).where(Product.tenant_id == tenant_id)

    async def get(self, tenant_id: UUID, product_id: UUID) -> Product | None:
        stmt = self._scoped(tenant_id).where(Product.id == product_id)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(self, tenant_id: UUID, product_ids: list[UUID]) -> list[Product]:
        """Products with the given ids, in the order the ids were given; unknown ids are skipped."""
        if not product_ids:
            return []
        stmt = self._scoped(tenant_id).where(Product.id.in_(product_ids))
        result = await self._db.execute(stmt)
        by_id = {product.id: product for product in result.scalars().all()}
        return [by_id[pid] for pid in dict.fromkeys(product_ids) if pid in by_id]

    async def list_for_tenant(self, tenant_id: UUID, *, active_only: bool = False) -> list[Product]:
        """
        List a tenant's products, newest first.

        Args:
            tenant_id: Owning tenant
            active_only: Skip products flagged inactive
        """
        stmt = self._scoped(tenant_id)
        if active_only:
            stmt = stmt.where(Product.is_active.is_(True))
        stmt = stmt.order_by(Product.created_at.desc(), Product.id)
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def search(self, tenant_id: UUID, query: str) -> list[Product]:
        """
        Case-insensitive substring search over name, description and category.

        Args:
            tenant_id: Owning tenant
            query: Search term (LIKE wildcards are escaped)

        Returns:
            Matching products, newest first
        """
        term = query.strip().lower()
        stmt = (
            self._scoped(tenant_id)
            .where(
                or_(
                    func.lower(Product.name).contains(term, autoescape=True),
                    func.lower(Product.description).contains(term, autoescape=True),
                    func.lower(Product.category).contains(term, autoescape=True),
                )
            )
            .order_by(Product.created_at.desc(), Product.id)
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def create(self, tenant_id: UUID, **fields: Any) -> Product:
        """Create a product together with its empty inventory row."""
        product = Product(tenant_id=tenant_id, **fields)
        self._db.add(product)
        await self._db.flush()

        inventory = Inventory(
            product_id=product.id,
            quantity_available=0,
            quantity_reserved=0,
            reorder_point=DEFAULT_REORDER_POINT,
        )
        self._db.add(inventory)
        await self._db.flush()
        await self._db.refresh(product)
        return product

    async def update(self, tenant_id: UUID, product_id: UUID, **updates: Any) -> Product | None:
        product = await self.get(tenant_id, product_id)
        if product is None:
            return None
        self._apply(product, updates)
        await self._db.flush()
        await self._db.refresh(product)
        return product

    async def delete(self, tenant_id: UUID, product_id: UUID) -> bool:
        """
        Delete a product (and its inventory row).

        Returns:
            True if deleted, False if the product does not exist within the tenant
        """
        product = await self.get(tenant_id, product_id)
        if product is None:
            return False
        await self._db.execute(sql_delete(Inventory).where(Inventory.product_id == product.id))
        await self._db.delete(product)
        await self._db.flush()
        return True


class InventoryRepository(SessionRepository):
    """Stock levels; tenant scoping goes through the owning product."""

    def _scoped(self, tenant_id: UUID):
        return (
            select(Inventory)
            .join(Product, Inventory.product_id == Product.id)
            .where(Product.tenant_id == tenant_id)
            .options(selectinload(Inventory.product))
        )

    async def get(self, tenant_id: UUID, product_id: UUID) -> Inventory | None:
        stmt = self._scoped(tenant_id).where(Inventory.product_id == product_id)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_tenant(self, tenant_id: UUID) -> list[Inventory]:
        stmt = self._scoped(tenant_id).order_by(Product.name)
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def update(self, tenant_id: UUID, product_id: UUID, **updates: Any) -> Inventory | None:
        """
        Update stock levels of a product.

        Raising ``quantity_available`` stamps ``last_restocked``.

        Returns:
            Updated Inventory, or None when the product has no inventory within the tenant
        """
        inventory = await self.get(tenant_id, product_id)
        if inventory is None:
            return None

        new_quantity = updates.get("quantity_available")
        if new_quantity is not None and new_quantity > inventory.quantity_available:
            inventory.last_restocked = datetime.now(UTC)

        self._apply(inventory, updates)
        await self._db.flush()
        await self._db.refresh(inventory)
        return inventory
