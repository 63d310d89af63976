"""Conversation log API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from commerce_hub.api.dependencies import get_conversation_repository, get_tenant_repository, require_tenant
from commerce_hub.repositories import ConversationRepository, TenantRepository
from commerce_hub.schemas.sales import ConversationCreate, ConversationResponse

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.get("", response_model=list[ConversationResponse])
async def list_conversations(
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    conversations: ConversationRepository = Depends(get_conversation_repository),  # noqa: B008
):
    return await conversations.list_for_tenant(tenant_id)


@router.post("", response_model=ConversationResponse, status_code=status.HTTP_201_CREATED)
async def create_conversation(
    payload: ConversationCreate,
    conversations: ConversationRepository = Depends(get_conversation_repository),  # noqa: B008
    tenants: TenantRepository = Depends(get_tenant_repository),  # noqa: B008
):
    await require_tenant(tenants, payload.tenant_id)
    data = payload.model_dump(mode="json", exclude={"tenant_id"})
    conversation = await conversations.create(payload.tenant_id, **data)
    await conversations.commit()
    return conversation
