"""
Analytics response schemas.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from commerce_hub.schemas.catalog import TenantResponse
from commerce_hub.schemas.common import CamelModel


class ActivityLevel(str, Enum):
    ACTIVE = "active"
    MODERATE = "moderate"
    LOW = "low"


class StatsResponse(CamelModel):
    active_tenants: int
    total_conversations: int
    total_revenue: float
    ai_accuracy: float


class TenantActivity(CamelModel):
    tenant: TenantResponse
    conversation_count: int
    order_count: int
    revenue: float
    status: ActivityLevel


class DemandTrackingResponse(CamelModel):
    id: UUID
    tenant_id: UUID
    query: str
    category: str
    search_count: int
    no_results_count: int
    potential_revenue: Decimal
    last_searched: datetime
    created_at: datetime


class DemandInsightsResponse(CamelModel):
    insights: str
