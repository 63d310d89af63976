# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Tenant catalog. SKU is expected unique per tenant.
# Tenant-Aware: Yes - tenant_id is an indexed FK.
# ============================================================================
"""
Product model - catalog item owned by a single tenant.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Index, Numeric, String, Text, Uuid

from .base import Base, JSONType, TimestampMixin, uuid_pk


class Product(Base, TimestampMixin):
    """
    Catalog product.

    Attributes:
        id: Unique identifier
        tenant_id: Owning tenant
        sku: Stock keeping unit
        name: Product name
        price: Non-negative price with two decimals
        category: Category label
        tags: Free-form tag list
        specifications: Tenant-defined specification map
        images: Image URLs
        is_active: Whether the product is sellable
    """

    __tablename__ = "products"

    id = uuid_pk()

    tenant_id = Column(
        Uuid,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    sku = Column(String(100), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=True, index=True)
    tags = Column(JSONType, default=list, nullable=False)
    specifications = Column(JSONType, default=dict, nullable=False)
    images = Column(JSONType, default=list, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        Index("idx_products_tenant_sku", "tenant_id", "sku"),
    )

    def __repr__(self) -> str:
        return f"<Product(sku='{self.sku}', name='{self.name}')>"
