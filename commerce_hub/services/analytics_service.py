"""
Analytics Service

Dashboard aggregates computed from repository reads. Each figure comes from
an independent query, so counts may drift slightly under concurrent writes.
"""

from __future__ import annotations

from uuid import UUID

from commerce_hub.core.shared.logger import get_service_logger
from commerce_hub.models.db import DemandTracking
from commerce_hub.repositories import ConversationRepository, DemandRepository, OrderRepository, TenantRepository
from commerce_hub.schemas.analytics import ActivityLevel, StatsResponse, TenantActivity
from commerce_hub.schemas.catalog import TenantResponse
from commerce_hub.services.catalog_assistant import NO_INSIGHTS, CatalogAssistant

logger = get_service_logger("analytics")

# Reported when there are no conversations to measure
DEFAULT_AI_ACCURACY = 94.2

ACTIVITY_TENANT_LIMIT = 5
ACTIVE_THRESHOLD = 100
MODERATE_THRESHOLD = 50
TOP_DEMAND_LIMIT = 10


def ai_accuracy(total: int, escalated: int) -> float:
    """Share of conversations resolved without escalation, as a percentage."""
    if total <= 0:
        return DEFAULT_AI_ACCURACY
    return (total - escalated) * 100 / total


def activity_level(conversation_count: int) -> ActivityLevel:
    if conversation_count > ACTIVE_THRESHOLD:
        return ActivityLevel.ACTIVE
    if conversation_count > MODERATE_THRESHOLD:
        return ActivityLevel.MODERATE
    return ActivityLevel.LOW


class AnalyticsService:
    def __init__(
        self,
        tenants: TenantRepository,
        conversations: ConversationRepository,
        orders: OrderRepository,
        demand: DemandRepository,
        assistant: CatalogAssistant,
    ):
        self._tenants = tenants
        self._conversations = conversations
        self._orders = orders
        self._demand = demand
        self._assistant = assistant

    async def get_stats(self, tenant_id: UUID | None = None) -> StatsResponse:
        """
        Platform-wide or per-tenant statistics.

        With a tenant filter, ``active_tenants`` is reported as 1.
        """
        if tenant_id is not None:
            active_tenants = 1
        else:
            active_tenants = await self._tenants.count_active()

        total, escalated = await self._conversations.count_stats(tenant_id)
        revenue = await self._orders.revenue(tenant_id)

        return StatsResponse(
            active_tenants=active_tenants,
            total_conversations=total,
            total_revenue=float(revenue),
            ai_accuracy=ai_accuracy(total, escalated),
        )

    async def get_tenant_activity(self) -> list[TenantActivity]:
        """Activity of the most recently created tenants."""
        tenants = (await self._tenants.list_all())[:ACTIVITY_TENANT_LIMIT]

        activity = []
        for tenant in tenants:
            conversation_count, _ = await self._conversations.count_stats(tenant.id)
            order_count = await self._orders.count_for_tenant(tenant.id)
            revenue = await self._orders.revenue(tenant.id)
            activity.append(
                TenantActivity(
                    tenant=TenantResponse.model_validate(tenant),
                    conversation_count=conversation_count,
                    order_count=order_count,
                    revenue=float(revenue),
                    status=activity_level(conversation_count),
                )
            )
        return activity

    async def top_demand(self, tenant_id: UUID, limit: int = TOP_DEMAND_LIMIT) -> list[DemandTracking]:
        return await self._demand.top_for_tenant(tenant_id, limit=limit)

    async def demand_insights(self, tenant_id: UUID) -> str:
        records = await self._demand.top_for_tenant(tenant_id, limit=TOP_DEMAND_LIMIT)
        if not records:
            return NO_INSIGHTS
        logger.debug("Summarizing demand", tenant_id=str(tenant_id), records=len(records))
        return await self._assistant.summarize_demand(records)
