"""Inventory API endpoints (tenant scoping through the owning product)."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from commerce_hub.api.dependencies import get_inventory_repository
from commerce_hub.core.domain.exceptions import EntityNotFoundException
from commerce_hub.repositories import InventoryRepository
from commerce_hub.schemas.catalog import InventoryItemResponse, InventoryResponse, InventoryUpdate

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("", response_model=list[InventoryItemResponse])
async def list_inventory(
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    inventory: InventoryRepository = Depends(get_inventory_repository),  # noqa: B008
):
    return await inventory.list_for_tenant(tenant_id)


@router.put("/{product_id}", response_model=InventoryResponse)
async def update_inventory(
    product_id: UUID,
    payload: InventoryUpdate,
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    inventory: InventoryRepository = Depends(get_inventory_repository),  # noqa: B008
):
    row = await inventory.update(tenant_id, product_id, **payload.model_dump(exclude_unset=True, exclude_none=True))
    if row is None:
        raise EntityNotFoundException("Inventory", product_id, "Inventory not found")
    await inventory.commit()
    return row
