"""
Chat Service

The conversational pipeline for one inbound message:

    tenant context -> classification -> conversation record -> demand feedback

Steps run sequentially within the request. Only tenant lookup/context reads
and the conversation write can fail the request; classification degrades and
demand feedback swallows its own errors.
"""

from __future__ import annotations

from uuid import UUID

from commerce_hub.core.domain.exceptions import EntityNotFoundException, TenantInactiveException
from commerce_hub.core.shared.logger import get_service_logger
from commerce_hub.repositories import KnowledgeRepository, ProductRepository, TenantRepository
from commerce_hub.schemas.assistant import Channel
from commerce_hub.services.conversation_recorder import ConversationRecorder, exchange_turns
from commerce_hub.services.demand_feedback import DemandFeedbackLoop
from commerce_hub.services.intent_classifier import ClassificationResult, IntentClassifier

logger = get_service_logger("chat")


class ChatService:
    def __init__(
        self,
        tenants: TenantRepository,
        products: ProductRepository,
        knowledge: KnowledgeRepository,
        classifier: IntentClassifier,
        recorder: ConversationRecorder,
        demand_feedback: DemandFeedbackLoop,
    ):
        self._tenants = tenants
        self._products = products
        self._knowledge = knowledge
        self._classifier = classifier
        self._recorder = recorder
        self._demand_feedback = demand_feedback

    async def handle_message(
        self,
        message: str,
        tenant_id: UUID,
        customer_id: str | None = None,
        channel: Channel | str = Channel.WEB,
    ) -> ClassificationResult:
        """
        Process a customer message end to end.

        Raises:
            EntityNotFoundException: Unknown tenant
            TenantInactiveException: Tenant is soft-disabled
        """
        tenant = await self._tenants.get(tenant_id)
        if tenant is None:
            raise EntityNotFoundException("Tenant", tenant_id)
        if not tenant.is_active:
            raise TenantInactiveException(tenant_id)

        # Newest first; the classifier keeps the head of each list
        products = await self._products.list_for_tenant(tenant_id, active_only=True)
        knowledge = await self._knowledge.list_for_tenant(tenant_id)

        result = await self._classifier.classify(message, tenant_id, products, knowledge)
        decision = result.decision

        await self._recorder.record(
            tenant_id,
            channel,
            exchange_turns(message, decision.response),
            decision,
            customer_id=customer_id,
        )
        await self._demand_feedback.observe(tenant_id, message, decision)

        logger.info(
            "Chat message handled",
            tenant_id=str(tenant_id),
            intent=decision.intent.value,
            degraded=result.is_degraded,
        )
        return result
