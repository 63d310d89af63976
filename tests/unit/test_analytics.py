"""
Tests for analytics aggregation.
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from commerce_hub.repositories import ConversationRepository, DemandRepository, OrderRepository, TenantRepository
from commerce_hub.schemas.analytics import ActivityLevel
from commerce_hub.services.analytics_service import (
    DEFAULT_AI_ACCURACY,
    AnalyticsService,
    activity_level,
    ai_accuracy,
)
from commerce_hub.services.catalog_assistant import NO_INSIGHTS, CatalogAssistant


@pytest.mark.unit
def test_ai_accuracy_without_conversations_is_default():
    assert ai_accuracy(0, 0) == DEFAULT_AI_ACCURACY == 94.2


@pytest.mark.unit
def test_ai_accuracy_is_share_not_escalated():
    assert ai_accuracy(10, 2) == 80.0
    assert ai_accuracy(3, 1) == 200 / 3
    assert ai_accuracy(5, 2) == 60.0


@pytest.mark.unit
@pytest.mark.parametrize(
    "count,level",
    [(0, ActivityLevel.LOW), (50, ActivityLevel.LOW), (51, ActivityLevel.MODERATE), (100, ActivityLevel.MODERATE), (101, ActivityLevel.ACTIVE)],
)
def test_activity_level_thresholds(count, level):
    assert activity_level(count) == level


@pytest.fixture
def analytics(db_session, mock_llm):
    return AnalyticsService(
        tenants=TenantRepository(db_session),
        conversations=ConversationRepository(db_session),
        orders=OrderRepository(db_session),
        demand=DemandRepository(db_session),
        assistant=CatalogAssistant(mock_llm),
    )


async def _conversation(db_session, tenant_id, escalated: bool):
    repo = ConversationRepository(db_session)
    await repo.create(
        tenant_id,
        channel="web",
        messages=[],
        intent="search",
        confidence=0.2 if escalated else 0.9,
        handoff_requested=escalated,
        status="escalated" if escalated else "active",
    )
    await repo.commit()


async def _order(db_session, tenant_id, total: str):
    repo = OrderRepository(db_session)
    await repo.create(tenant_id, items=[{"name": "x", "quantity": 1, "price": total}], total_amount=Decimal(total))
    await repo.commit()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_stats_with_no_data(analytics):
    stats = await analytics.get_stats()

    assert stats.active_tenants == 0
    assert stats.total_conversations == 0
    assert stats.total_revenue == 0.0
    assert stats.ai_accuracy == 94.2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_stats_platform_and_tenant(analytics, db_session, tenant_factory):
    acme = await tenant_factory(slug="acme")
    globex = await tenant_factory(slug="globex")
    await tenant_factory(slug="dormant", is_active=False)

    for escalated in (False, False, False, True, True):
        await _conversation(db_session, acme.id, escalated)
    for _ in range(5):
        await _conversation(db_session, globex.id, False)
    await _order(db_session, acme.id, "100.50")
    await _order(db_session, globex.id, "20.00")

    platform = await analytics.get_stats()
    assert platform.active_tenants == 2
    assert platform.total_conversations == 10
    assert platform.total_revenue == pytest.approx(120.5)
    assert platform.ai_accuracy == 80.0

    scoped = await analytics.get_stats(acme.id)
    assert scoped.active_tenants == 1
    assert scoped.total_conversations == 5
    assert scoped.total_revenue == pytest.approx(100.5)
    assert scoped.ai_accuracy == 60.0


@pytest.mark.unit
@pytest.mark.asyncio
async def test_tenant_activity_lists_at_most_five(analytics, db_session, tenant_factory):
    tenants = [await tenant_factory() for _ in range(6)]
    await _conversation(db_session, tenants[-1].id, False)

    activity = await analytics.get_tenant_activity()

    assert len(activity) == 5
    newest = activity[0]
    assert newest.tenant.id == tenants[-1].id
    assert newest.conversation_count == 1
    assert newest.order_count == 0
    assert newest.status == ActivityLevel.LOW


@pytest.mark.unit
@pytest.mark.asyncio
async def test_demand_insights_without_records_skips_model(analytics, mock_llm, tenant_factory):
    tenant = await tenant_factory()

    assert await analytics.demand_insights(tenant.id) == NO_INSIGHTS
    mock_llm.generate_chat.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_demand_insights_summarizes_top_records(analytics, db_session, mock_llm, tenant_factory):
    tenant = await tenant_factory()
    demand = DemandRepository(db_session)
    await demand.record_no_result(tenant.id, "red shoes")
    await demand.commit()
    mock_llm.generate_chat = AsyncMock(return_value="Stock red shoes.")

    assert await analytics.demand_insights(tenant.id) == "Stock red shoes."
    prompt = mock_llm.generate_chat.call_args.args[0][0]["content"]
    assert "red shoes" in prompt
