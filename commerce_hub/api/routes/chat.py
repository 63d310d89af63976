"""
Assistant chat endpoint.

Classifier failures never surface here: the reply degrades to the
human-handoff message. Unknown tenant -> 404, disabled tenant -> 403, tenant
context or conversation write failure -> 500.
"""

import logging

from fastapi import APIRouter, Depends

from commerce_hub.api.dependencies import get_chat_service
from commerce_hub.schemas.chat import ChatRequest, ChatResponse
from commerce_hub.services import ChatService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["assistant"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    payload: ChatRequest,
    service: ChatService = Depends(get_chat_service),  # noqa: B008
):
    result = await service.handle_message(
        payload.message,
        payload.tenant_id,
        customer_id=payload.customer_id,
        channel=payload.channel,
    )
    if result.is_degraded:
        logger.warning(f"Chat reply degraded for tenant {payload.tenant_id}: {result.error.kind.value}")

    decision = result.decision
    return ChatResponse(
        response=decision.response,
        intent=decision.intent,
        confidence=decision.confidence,
        suggested_products=decision.suggested_products,
        requires_escalation=decision.requires_escalation,
    )
