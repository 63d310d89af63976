# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Unmatched product searches, aggregated per query and category.
# Tenant-Aware: Yes - tenant_id is part of the unique key.
# ============================================================================
"""
DemandTracking model.

One row per (tenant, normalized query, category). ``query`` keeps the text
as first seen; ``query_key`` is the lower-cased, whitespace-collapsed form
used for matching.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint, Uuid

from .base import Base, TimestampMixin, utcnow, uuid_pk


class DemandTracking(Base, TimestampMixin):
    __tablename__ = "demand_tracking"

    id = uuid_pk()

    tenant_id = Column(
        Uuid,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    query = Column(Text, nullable=False)
    query_key = Column(String(500), nullable=False)
    category = Column(String(100), default="general", nullable=False)
    search_count = Column(Integer, default=1, nullable=False)
    no_results_count = Column(Integer, default=0, nullable=False)
    potential_revenue = Column(Numeric(10, 2), default=0, nullable=False)
    last_searched = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("tenant_id", "query_key", "category", name="uq_demand_tracking_query"),
    )

    def __repr__(self) -> str:
        return f"<DemandTracking(query='{self.query}', searches={self.search_count})>"
