"""Knowledge base API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from commerce_hub.api.dependencies import get_knowledge_repository, get_tenant_repository, require_tenant
from commerce_hub.repositories import KnowledgeRepository, TenantRepository
from commerce_hub.schemas.catalog import KnowledgeBaseCreate, KnowledgeBaseResponse

router = APIRouter(prefix="/knowledge-base", tags=["knowledge-base"])


@router.get("", response_model=list[KnowledgeBaseResponse])
async def list_knowledge(
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    search: Optional[str] = Query(None, description="Substring of title or content"),
    knowledge: KnowledgeRepository = Depends(get_knowledge_repository),  # noqa: B008
):
    if search:
        return await knowledge.search(tenant_id, search)
    return await knowledge.list_for_tenant(tenant_id)


@router.post("", response_model=KnowledgeBaseResponse, status_code=status.HTTP_201_CREATED)
async def create_knowledge(
    payload: KnowledgeBaseCreate,
    knowledge: KnowledgeRepository = Depends(get_knowledge_repository),  # noqa: B008
    tenants: TenantRepository = Depends(get_tenant_repository),  # noqa: B008
):
    await require_tenant(tenants, payload.tenant_id)
    entry = await knowledge.create(payload.tenant_id, **payload.model_dump(exclude={"tenant_id"}))
    await knowledge.commit()
    return entry
