# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Catalog CRUD plus the assistant-backed search, comparison and
#              extraction endpoints.
# Tenant-Aware: Yes - every endpoint takes tenantId.
# ============================================================================
"""Product API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from commerce_hub.api.dependencies import (
    get_catalog_assistant,
    get_product_repository,
    get_tenant_repository,
    require_tenant,
)
from commerce_hub.core.domain.exceptions import EntityNotFoundException
from commerce_hub.repositories import ProductRepository, TenantRepository
from commerce_hub.schemas.assistant import ProductDraft
from commerce_hub.schemas.catalog import ProductCreate, ProductResponse, ProductUpdate
from commerce_hub.schemas.chat import CompareRequest, CompareResponse, ExtractRequest, ProductSearchRequest
from commerce_hub.services import CatalogAssistant

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
async def list_products(
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    search: Optional[str] = Query(None, description="Substring of name, description or category"),
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
):
    if search:
        return await products.search(tenant_id, search)
    return await products.list_for_tenant(tenant_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductCreate,
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
    tenants: TenantRepository = Depends(get_tenant_repository),  # noqa: B008
):
    """Create a product; its inventory row starts empty."""
    await require_tenant(tenants, payload.tenant_id)
    product = await products.create(payload.tenant_id, **payload.model_dump(exclude={"tenant_id"}))
    await products.commit()
    return product


@router.post("/search", response_model=list[ProductResponse])
async def search_products(
    payload: ProductSearchRequest,
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
    assistant: CatalogAssistant = Depends(get_catalog_assistant),  # noqa: B008
):
    """AI-ranked search over the tenant's active products; never fails on model errors."""
    candidates = await products.list_for_tenant(payload.tenant_id, active_only=True)
    if payload.filters.category:
        wanted = payload.filters.category.lower()
        candidates = [p for p in candidates if (p.category or "").lower() == wanted]
    return await assistant.rank_search(payload.query, payload.filters, candidates)


@router.post("/compare", response_model=CompareResponse)
async def compare_products(
    payload: CompareRequest,
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
    assistant: CatalogAssistant = Depends(get_catalog_assistant),  # noqa: B008
):
    found = await products.get_many(payload.tenant_id, payload.product_ids)
    found_ids = {product.id for product in found}
    for product_id in payload.product_ids:
        if product_id not in found_ids:
            raise EntityNotFoundException("Product", product_id)
    return CompareResponse(comparison=await assistant.compare(found))


@router.post("/extract", response_model=ProductDraft)
async def extract_product(
    payload: ExtractRequest,
    assistant: CatalogAssistant = Depends(get_catalog_assistant),  # noqa: B008
):
    """Best-effort structured fields from a free-text description."""
    return await assistant.extract_product_info(payload.description)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: UUID,
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
):
    product = await products.get(tenant_id, product_id)
    if product is None:
        raise EntityNotFoundException("Product", product_id)
    return product


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: UUID,
    payload: ProductUpdate,
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
):
    product = await products.update(tenant_id, product_id, **payload.model_dump(exclude_unset=True))
    if product is None:
        raise EntityNotFoundException("Product", product_id)
    await products.commit()
    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: UUID,
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
):
    if not await products.delete(tenant_id, product_id):
        raise EntityNotFoundException("Product", product_id)
    await products.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
