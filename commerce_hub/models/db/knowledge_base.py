# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Knowledge base entries included in the assistant context.
# Tenant-Aware: Yes - tenant_id is an indexed FK.
# ============================================================================
"""
KnowledgeBase model - tenant FAQ/policy entries.

The embedding is stored as a plain JSON float list; it is kept for future
semantic retrieval and is not used for ranking.
"""

from sqlalchemy import Boolean, Column, ForeignKey, String, Text, Uuid

from .base import Base, JSONType, TimestampMixin, uuid_pk


class KnowledgeBase(Base, TimestampMixin):
    __tablename__ = "knowledge_base"

    id = uuid_pk()

    tenant_id = Column(
        Uuid,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(100), nullable=True)
    tags = Column(JSONType, default=list, nullable=False)
    is_public = Column(Boolean, default=False, nullable=False)
    embedding = Column(JSONType, nullable=True, comment="Optional embedding vector (float list)")

    def __repr__(self) -> str:
        return f"<KnowledgeBase(title='{self.title}')>"
