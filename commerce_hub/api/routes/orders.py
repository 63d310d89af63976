# ============================================================================
# SCOPE: MULTI-TENANT
# Tenant-Aware: Yes - every endpoint takes tenantId.
# ============================================================================
"""Order API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from commerce_hub.api.dependencies import (
    get_conversation_repository,
    get_order_repository,
    get_tenant_repository,
    require_tenant,
)
from commerce_hub.core.domain.exceptions import EntityNotFoundException
from commerce_hub.repositories import ConversationRepository, OrderRepository, TenantRepository
from commerce_hub.schemas.sales import OrderCreate, OrderResponse, OrderUpdate

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    customer_id: Optional[str] = Query(None, alias="customerId"),
    orders: OrderRepository = Depends(get_order_repository),  # noqa: B008
):
    if customer_id:
        return await orders.list_for_customer(tenant_id, customer_id)
    return await orders.list_for_tenant(tenant_id)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderCreate,
    orders: OrderRepository = Depends(get_order_repository),  # noqa: B008
    tenants: TenantRepository = Depends(get_tenant_repository),  # noqa: B008
    conversations: ConversationRepository = Depends(get_conversation_repository),  # noqa: B008
):
    """Create an order; the order number is generated."""
    await require_tenant(tenants, payload.tenant_id)
    # The originating conversation must belong to the same tenant
    if payload.conversation_id is not None:
        if await conversations.get(payload.tenant_id, payload.conversation_id) is None:
            raise EntityNotFoundException("Conversation", payload.conversation_id)
    order = await orders.create(
        payload.tenant_id,
        customer_id=payload.customer_id,
        customer_name=payload.customer_name,
        customer_email=payload.customer_email,
        items=[item.model_dump(mode="json", by_alias=True) for item in payload.items],
        total_amount=payload.total_amount,
        status=payload.status.value,
        payment_status=payload.payment_status.value,
        source=payload.source.value,
        conversation_id=payload.conversation_id,
    )
    await orders.commit()
    return order


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID,
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    orders: OrderRepository = Depends(get_order_repository),  # noqa: B008
):
    order = await orders.get(tenant_id, order_id)
    if order is None:
        raise EntityNotFoundException("Order", order_id)
    return order


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: UUID,
    payload: OrderUpdate,
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    orders: OrderRepository = Depends(get_order_repository),  # noqa: B008
):
    updates = payload.model_dump(mode="json", exclude_unset=True)
    order = await orders.update(tenant_id, order_id, **updates)
    if order is None:
        raise EntityNotFoundException("Order", order_id)
    await orders.commit()
    return order
