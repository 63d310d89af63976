# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Assistant conversations with their classified intent.
# Tenant-Aware: Yes - tenant_id is an indexed FK.
# ============================================================================
"""
Conversation model.

Messages are stored as an ordered JSON list of turns shaped as
{"role": "user" | "assistant", "content": str, "timestamp": ISO-8601}.
"""

from sqlalchemy import Boolean, Column, Float, ForeignKey, Index, String, Uuid

from .base import Base, JSONType, TimestampMixin, uuid_pk


class Conversation(Base, TimestampMixin):
    """
    Attributes:
        channel: telegram, whatsapp or web
        intent: Classified intent of the last exchange
        confidence: Classifier confidence in [0, 1]
        handoff_requested: Whether a human agent was requested
        status: active, closed or escalated
    """

    __tablename__ = "conversations"

    id = uuid_pk()

    tenant_id = Column(
        Uuid,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    customer_id = Column(String(255), nullable=True, comment="External customer identifier")
    channel = Column(String(20), default="web", nullable=False)
    messages = Column(JSONType, default=list, nullable=False)
    intent = Column(String(50), nullable=True)
    confidence = Column(Float, nullable=True)
    handoff_requested = Column(Boolean, default=False, nullable=False)
    status = Column(String(20), default="active", nullable=False)

    __table_args__ = (Index("idx_conversations_tenant_status", "tenant_id", "status"),)

    def __repr__(self) -> str:
        return f"<Conversation(id='{self.id}', intent='{self.intent}', status='{self.status}')>"
