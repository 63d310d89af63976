# ============================================================================
# SCOPE: MULTI-TENANT
# Tenant-Aware: Yes - tenant_id is a required argument of every scoped method.
# ============================================================================
"""Repository for conversation database operations."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import case, func, select

from commerce_hub.models.db import Conversation
from commerce_hub.repositories.base import SessionRepository


class ConversationRepository(SessionRepository):
    """Database operations for assistant conversations."""

    def _scoped(self, tenant_id: UUID):
        return select(Conversation).where(Conversation.tenant_id == tenant_id)

    async def get(self, tenant_id: UUID, conversation_id: UUID) -> Conversation | None:
        stmt = self._scoped(tenant_id).where(Conversation.id == conversation_id)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_tenant(self, tenant_id: UUID) -> list[Conversation]:
        stmt = self._scoped(tenant_id).order_by(Conversation.created_at.desc(), Conversation.id)
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def create(self, tenant_id: UUID, **fields: Any) -> Conversation:
        conversation = Conversation(tenant_id=tenant_id, **fields)
        self._db.add(conversation)
        await self._db.flush()
        await self._db.refresh(conversation)
        return conversation

    async def update(self, tenant_id: UUID, conversation_id: UUID, **updates: Any) -> Conversation | None:
        conversation = await self.get(tenant_id, conversation_id)
        if conversation is None:
            return None
        self._apply(conversation, updates)
        await self._db.flush()
        await self._db.refresh(conversation)
        return conversation

    async def count_stats(self, tenant_id: UUID | None = None) -> tuple[int, int]:
        """
        Count conversations and escalated (handoff-requested) conversations.

        Args:
            tenant_id: Restrict to one tenant; None counts platform-wide

        Returns:
            Tuple of (total, escalated)
        """
        stmt = select(
            func.count(Conversation.id),
            func.coalesce(func.sum(case((Conversation.handoff_requested.is_(True), 1), else_=0)), 0),
        )
        if tenant_id is not None:
            stmt = stmt.where(Conversation.tenant_id == tenant_id)
        total, escalated = (await self._db.execute(stmt)).one()
        return int(total), int(escalated)
