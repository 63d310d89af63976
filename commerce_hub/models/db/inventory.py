"""
Inventory model - stock levels, one row per product.

Tenant scoping goes through the owning product.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Uuid
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, uuid_pk


class Inventory(Base, TimestampMixin):
    __tablename__ = "inventory"

    id = uuid_pk()

    product_id = Column(
        Uuid,
        ForeignKey("products.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    quantity_available = Column(Integer, default=0, nullable=False)
    quantity_reserved = Column(Integer, default=0, nullable=False)
    reorder_point = Column(Integer, default=10, nullable=False)
    last_restocked = Column(DateTime(timezone=True), nullable=True)

    product = relationship("Product")

    def __repr__(self) -> str:
        return f"<Inventory(product_id='{self.product_id}', available={self.quantity_available})>"
