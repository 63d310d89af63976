# ============================================================================
# SCOPE: MULTI-TENANT
# Tenant-Aware: Yes - tenant_id is an indexed FK.
# ============================================================================
"""
Order model.
"""

from sqlalchemy import Column, ForeignKey, Numeric, String, Uuid

from .base import Base, JSONType, TimestampMixin, uuid_pk


class Order(Base, TimestampMixin):
    """
    Customer order.

    Attributes:
        order_number: Unique generated number (ORD-<epoch millis>)
        items: Line items as JSON ({productId, name, quantity, price, ...})
        status: pending, processing, completed or cancelled
        payment_status: pending, paid, failed or refunded
        source: Channel the order came from
        conversation_id: Originating conversation, if any
    """

    __tablename__ = "orders"

    id = uuid_pk()

    tenant_id = Column(
        Uuid,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    order_number = Column(String(50), unique=True, nullable=False)
    customer_id = Column(String(255), nullable=True, index=True)
    customer_name = Column(String(255), nullable=True)
    customer_email = Column(String(255), nullable=True)
    items = Column(JSONType, default=list, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), default="pending", nullable=False)
    payment_status = Column(String(20), default="pending", nullable=False)
    source = Column(String(20), default="web", nullable=False)

    conversation_id = Column(
        Uuid,
        ForeignKey("conversations.id", ondelete="SET NULL"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Order(order_number='{self.order_number}', status='{self.status}')>"
