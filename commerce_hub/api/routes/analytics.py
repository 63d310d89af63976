"""Dashboard analytics endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from commerce_hub.api.dependencies import get_analytics_service
from commerce_hub.schemas.analytics import (
    DemandInsightsResponse,
    DemandTrackingResponse,
    StatsResponse,
    TenantActivity,
)
from commerce_hub.services import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    tenant_id: Optional[UUID] = Query(None, alias="tenantId"),  # noqa: B008
    analytics: AnalyticsService = Depends(get_analytics_service),  # noqa: B008
):
    """Platform-wide statistics, or one tenant's when tenantId is given."""
    return await analytics.get_stats(tenant_id)


@router.get("/tenant-activity", response_model=list[TenantActivity])
async def get_tenant_activity(analytics: AnalyticsService = Depends(get_analytics_service)):  # noqa: B008
    return await analytics.get_tenant_activity()


@router.get("/demand-tracking", response_model=list[DemandTrackingResponse])
async def get_demand_tracking(
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    analytics: AnalyticsService = Depends(get_analytics_service),  # noqa: B008
):
    """Top 10 unmatched searches by search count."""
    return await analytics.top_demand(tenant_id)


@router.get("/demand-insights", response_model=DemandInsightsResponse)
async def get_demand_insights(
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    analytics: AnalyticsService = Depends(get_analytics_service),  # noqa: B008
):
    return DemandInsightsResponse(insights=await analytics.demand_insights(tenant_id))
