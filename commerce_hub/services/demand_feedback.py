"""
Demand Feedback Loop

Records a demand signal when a search-intent message matched no product.
Runs after the conversation is committed, in its own commit; a failure here
is logged and swallowed so the chat response is unaffected.
"""

from __future__ import annotations

from uuid import UUID

from commerce_hub.core.shared.logger import get_service_logger
from commerce_hub.models.db import DemandTracking
from commerce_hub.repositories.demand_repository import CATEGORY_LENGTH, DEFAULT_CATEGORY, DemandRepository
from commerce_hub.schemas.assistant import Decision

logger = get_service_logger("demand_feedback")


def demand_category(decision: Decision) -> str:
    categories = [c.strip() for c in decision.entities.categories if c and c.strip()]
    return categories[0][:CATEGORY_LENGTH] if categories else DEFAULT_CATEGORY


class DemandFeedbackLoop:
    def __init__(self, demand: DemandRepository):
        self._demand = demand

    @staticmethod
    def should_record(decision: Decision) -> bool:
        return decision.is_unmatched_search

    async def observe(self, tenant_id: UUID, query: str, decision: Decision) -> DemandTracking | None:
        """
        Upsert the demand record for an unmatched search.

        Returns:
            The stored record, or None when nothing was recorded (not an
            unmatched search, or the write failed)
        """
        if not self.should_record(decision):
            return None

        category = demand_category(decision)
        try:
            record = await self._demand.record_no_result(tenant_id, query, category)
            await self._demand.commit()
        except Exception:
            logger.exception("Failed to record demand signal", tenant_id=str(tenant_id), category=category)
            try:
                await self._demand.rollback()
            except Exception:
                logger.exception("Rollback after demand failure also failed", tenant_id=str(tenant_id))
            return None

        logger.info(
            "Demand signal recorded",
            tenant_id=str(tenant_id),
            category=category,
            search_count=record.search_count,
        )
        return record
