# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Root entity. Every other table references a tenant.
# Tenant-Aware: Yes - IS the root table of the multi-tenant system.
# ============================================================================
"""
Tenant model - isolated customer organization.
"""

from sqlalchemy import Boolean, Column, Index, String, Text

from .base import Base, JSONType, TimestampMixin, uuid_pk


class Tenant(Base, TimestampMixin):
    """
    Tenant (customer organization) of the platform.

    Attributes:
        id: Unique identifier (UUID)
        slug: URL-friendly unique identifier (e.g., "acme-store")
        name: Display name
        industry: Free-form industry label
        settings: Opaque tenant-defined settings map
        is_active: Soft-disable flag; tenants are never hard-deleted
    """

    __tablename__ = "tenants"

    id = uuid_pk()

    slug = Column(
        String(100),
        unique=True,
        nullable=False,
        comment="URL-friendly unique identifier",
    )

    name = Column(String(255), nullable=False, comment="Display name")
    description = Column(Text, nullable=True)
    industry = Column(String(100), nullable=True)

    settings = Column(
        JSONType,
        default=dict,
        nullable=False,
        comment="Tenant-defined settings (open-ended keys)",
    )

    is_active = Column(Boolean, default=True, nullable=False, index=True)

    __table_args__ = (Index("idx_tenants_created_at", "created_at"),)

    def __repr__(self) -> str:
        return f"<Tenant(slug='{self.slug}', name='{self.name}', active={self.is_active})>"
