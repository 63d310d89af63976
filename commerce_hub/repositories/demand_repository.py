# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Unmatched-search signal, one row per (tenant, query, category).
# Tenant-Aware: Yes - tenant_id is a required argument of every method.
# ============================================================================
"""Repository for demand tracking database operations."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import select

from commerce_hub.core.shared.logger import get_repository_logger
from commerce_hub.models.db import DemandTracking
from commerce_hub.repositories.base import SessionRepository

logger = get_repository_logger("demand")

DEFAULT_CATEGORY = "general"
QUERY_KEY_LENGTH = 500
CATEGORY_LENGTH = 100


def normalize_query(query: str) -> str:
    """Lower-case and collapse whitespace so equivalent searches share a row."""
    return " ".join(query.lower().split())[:QUERY_KEY_LENGTH]


class DemandRepository(SessionRepository):
    """Database operations for demand tracking."""

    def _scoped(self, tenant_id: UUID):
        return select(DemandTracking).where(DemandTracking.tenant_id == tenant_id)

    async def list_for_tenant(self, tenant_id: UUID) -> list[DemandTracking]:
        """Records of a tenant, most recently searched first."""
        stmt = self._scoped(tenant_id).order_by(DemandTracking.last_searched.desc(), DemandTracking.id)
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def top_for_tenant(self, tenant_id: UUID, limit: int = 10) -> list[DemandTracking]:
        """Most searched records of a tenant."""
        stmt = (
            self._scoped(tenant_id)
            .order_by(DemandTracking.search_count.desc(), DemandTracking.last_searched.desc())
            .limit(limit)
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def find_by_query(self, tenant_id: UUID, query: str, category: str) -> DemandTracking | None:
        stmt = self._scoped(tenant_id).where(
            DemandTracking.query_key == normalize_query(query),
            DemandTracking.category == category,
        )
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, tenant_id: UUID, query: str, **fields: Any) -> DemandTracking:
        record = DemandTracking(
            tenant_id=tenant_id,
            query=query,
            query_key=normalize_query(query),
            **fields,
        )
        self._db.add(record)
        await self._db.flush()
        await self._db.refresh(record)
        return record

    async def update(self, tenant_id: UUID, record_id: UUID, **updates: Any) -> DemandTracking | None:
        stmt = self._scoped(tenant_id).where(DemandTracking.id == record_id)
        record = (await self._db.execute(stmt)).scalar_one_or_none()
        if record is None:
            return None
        self._apply(record, updates)
        await self._db.flush()
        await self._db.refresh(record)
        return record

    async def record_no_result(self, tenant_id: UUID, query: str, category: str | None = None) -> DemandTracking:
        """
        Upsert the demand signal for a search that matched nothing.

        First occurrence inserts searchCount=1, noResultsCount=1 and zero
        potential revenue; later occurrences increment both counters and
        refresh last_searched.
        """
        category = category or DEFAULT_CATEGORY
        now = datetime.now(UTC)

        existing = await self.find_by_query(tenant_id, query, category)
        if existing is None:
            logger.debug("New demand record", tenant_id=str(tenant_id), category=category)
            return await self.create(
                tenant_id,
                query,
                category=category,
                search_count=1,
                no_results_count=1,
                potential_revenue=0,
                last_searched=now,
            )

        existing.search_count += 1
        existing.no_results_count += 1
        existing.last_searched = now
        await self._db.flush()
        await self._db.refresh(existing)
        return existing
