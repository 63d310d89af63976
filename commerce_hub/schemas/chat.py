"""
Schemas for the assistant endpoints (chat, AI search, comparison, extraction).
"""

from uuid import UUID

from pydantic import Field

from commerce_hub.schemas.assistant import Channel, Intent, ProductSearchFilters
from commerce_hub.schemas.common import CamelModel


class ChatRequest(CamelModel):
    message: str = Field(..., min_length=1, max_length=4000)
    tenant_id: UUID
    customer_id: str | None = Field(None, max_length=255)
    channel: Channel = Channel.WEB


class ChatResponse(CamelModel):
    response: str
    intent: Intent
    confidence: float
    suggested_products: list[str]
    requires_escalation: bool


class ProductSearchRequest(CamelModel):
    tenant_id: UUID
    query: str = Field(..., min_length=1, max_length=500)
    filters: ProductSearchFilters = Field(default_factory=ProductSearchFilters)


class CompareRequest(CamelModel):
    tenant_id: UUID
    product_ids: list[UUID]


class CompareResponse(CamelModel):
    comparison: str


class ExtractRequest(CamelModel):
    description: str = Field(..., min_length=1, max_length=8000)
