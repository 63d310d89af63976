"""
Order, conversation and document schemas.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar
from uuid import UUID

from pydantic import ConfigDict, Field

from commerce_hub.schemas.assistant import Channel, MessageTurn
from commerce_hub.schemas.common import CamelModel, PartialUpdate


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class ConversationStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    ESCALATED = "escalated"


class DocumentType(str, Enum):
    QUOTE = "quote"
    INVOICE = "invoice"
    RECEIPT = "receipt"


# =============================================================================
# Orders
# =============================================================================


class OrderLineItem(CamelModel):
    model_config = ConfigDict(extra="allow")

    product_id: UUID | None = None
    name: str | None = None
    quantity: int = Field(1, ge=1)
    price: Decimal = Field(..., ge=0)


class OrderCreate(CamelModel):
    tenant_id: UUID
    customer_id: str | None = Field(None, max_length=255)
    customer_name: str | None = Field(None, max_length=255)
    customer_email: str | None = Field(None, max_length=255)
    items: list[OrderLineItem] = Field(..., min_length=1)
    total_amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    source: Channel = Channel.WEB
    conversation_id: UUID | None = None


class OrderUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"status", "payment_status"})

    status: OrderStatus | None = None
    payment_status: PaymentStatus | None = None
    customer_name: str | None = Field(None, max_length=255)
    customer_email: str | None = Field(None, max_length=255)


class OrderResponse(CamelModel):
    id: UUID
    tenant_id: UUID
    order_number: str
    customer_id: str | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    items: list[dict[str, Any]]
    total_amount: Decimal
    status: OrderStatus
    payment_status: PaymentStatus
    source: str
    conversation_id: UUID | None = None
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Conversations
# =============================================================================


class ConversationCreate(CamelModel):
    tenant_id: UUID
    customer_id: str | None = Field(None, max_length=255)
    channel: Channel = Channel.WEB
    messages: list[MessageTurn] = Field(default_factory=list)
    intent: str | None = None
    confidence: float | None = Field(None, ge=0.0, le=1.0)
    handoff_requested: bool = False
    status: ConversationStatus = ConversationStatus.ACTIVE


class ConversationResponse(CamelModel):
    id: UUID
    tenant_id: UUID
    customer_id: str | None = None
    channel: str
    messages: list[MessageTurn]
    intent: str | None = None
    confidence: float | None = None
    handoff_requested: bool
    status: ConversationStatus
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Documents
# =============================================================================


class QuoteLineRequest(CamelModel):
    product_id: UUID
    quantity: int = Field(1, ge=1)
    price: Decimal | None = Field(None, ge=0, description="Unit price; defaults to the catalog price")


class QuoteRequest(CamelModel):
    tenant_id: UUID
    customer_id: str | None = Field(None, max_length=255)
    customer_name: str | None = Field(None, max_length=255)
    customer_email: str | None = Field(None, max_length=255)
    items: list[QuoteLineRequest] = Field(..., min_length=1)


class DocumentResponse(CamelModel):
    id: UUID
    tenant_id: UUID
    order_id: UUID | None = None
    type: DocumentType
    document_number: str
    content: dict[str, Any]
    file_path: str | None = None
    status: str
    created_at: datetime
