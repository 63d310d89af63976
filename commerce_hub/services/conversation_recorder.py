"""
Conversation Recorder

Persists one chat exchange as a Conversation row carrying the classified
intent, confidence and escalation state.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Sequence
from uuid import UUID

from commerce_hub.core.shared.logger import get_service_logger
from commerce_hub.models.db import Conversation
from commerce_hub.repositories.conversation_repository import ConversationRepository
from commerce_hub.schemas.assistant import Channel, Decision, MessageRole, MessageTurn
from commerce_hub.schemas.sales import ConversationStatus

logger = get_service_logger("conversation_recorder")


def exchange_turns(message: str, reply: str) -> list[MessageTurn]:
    """User turn then assistant turn, both stamped with the server clock."""
    now = datetime.now(UTC)
    return [
        MessageTurn(role=MessageRole.USER, content=message, timestamp=now),
        MessageTurn(role=MessageRole.ASSISTANT, content=reply, timestamp=now),
    ]


class ConversationRecorder:
    def __init__(self, conversations: ConversationRepository):
        self._conversations = conversations

    async def record(
        self,
        tenant_id: UUID,
        channel: Channel | str,
        turns: Sequence[MessageTurn],
        decision: Decision,
        customer_id: str | None = None,
    ) -> Conversation:
        """
        Create and commit a Conversation for the exchange.

        Status is ``escalated`` and handoff is requested exactly when the
        decision requires escalation. Each call creates a new row.
        """
        status = ConversationStatus.ESCALATED if decision.requires_escalation else ConversationStatus.ACTIVE
        conversation = await self._conversations.create(
            tenant_id,
            customer_id=customer_id,
            channel=Channel(channel).value,
            messages=[turn.model_dump(mode="json") for turn in turns],
            intent=decision.intent.value,
            confidence=decision.confidence,
            handoff_requested=decision.requires_escalation,
            status=status.value,
        )
        await self._conversations.commit()

        logger.debug(
            "Conversation recorded",
            tenant_id=str(tenant_id),
            conversation_id=str(conversation.id),
            status=status.value,
        )
        return conversation
