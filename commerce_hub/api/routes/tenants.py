# ============================================================================
# SCOPE: GLOBAL
# Description: Tenant administration. Tenants are soft-disabled via PATCH,
#              never deleted.
# ============================================================================
"""Tenant API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from commerce_hub.api.dependencies import get_tenant_repository, require_tenant
from commerce_hub.core.domain.exceptions import EntityNotFoundException, ValidationException
from commerce_hub.repositories import TenantRepository
from commerce_hub.schemas.catalog import TenantCreate, TenantResponse, TenantUpdate

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get("", response_model=list[TenantResponse])
async def list_tenants(tenants: TenantRepository = Depends(get_tenant_repository)):  # noqa: B008
    """All tenants, newest first."""
    return await tenants.list_all()


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    payload: TenantCreate,
    tenants: TenantRepository = Depends(get_tenant_repository),  # noqa: B008
):
    if await tenants.get_by_slug(payload.slug):
        raise ValidationException(f"Slug '{payload.slug}' is already in use", field="slug")

    tenant = await tenants.create(**payload.model_dump())
    await tenants.commit()
    return tenant


@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant(
    tenant_id: UUID,
    tenants: TenantRepository = Depends(get_tenant_repository),  # noqa: B008
):
    return await require_tenant(tenants, tenant_id)


@router.patch("/{tenant_id}", response_model=TenantResponse)
async def update_tenant(
    tenant_id: UUID,
    payload: TenantUpdate,
    tenants: TenantRepository = Depends(get_tenant_repository),  # noqa: B008
):
    """Partial update; ``isActive: false`` soft-disables the tenant."""
    tenant = await tenants.update(tenant_id, **payload.model_dump(exclude_unset=True))
    if tenant is None:
        raise EntityNotFoundException("Tenant", tenant_id)
    await tenants.commit()
    return tenant
