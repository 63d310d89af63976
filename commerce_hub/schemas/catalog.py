# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Request/response schemas for tenants, products, inventory and
#              knowledge base endpoints.
# ============================================================================
"""
Catalog API schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar
from uuid import UUID

from pydantic import Field

from commerce_hub.schemas.common import CamelModel, PartialUpdate

# =============================================================================
# Tenants
# =============================================================================


class TenantCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-z0-9][a-z0-9-]*$")
    description: str | None = None
    industry: str | None = Field(None, max_length=100)
    settings: dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True


class TenantUpdate(PartialUpdate):
    """Partial update; set isActive=false to soft-disable a tenant."""

    non_nullable: ClassVar[frozenset[str]] = frozenset({"name", "settings", "is_active"})

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    industry: str | None = Field(None, max_length=100)
    settings: dict[str, Any] | None = None
    is_active: bool | None = None


class TenantResponse(CamelModel):
    id: UUID
    name: str
    slug: str
    description: str | None = None
    industry: str | None = None
    settings: dict[str, Any] = Field(default_factory=dict)
    is_active: bool
    created_at: datetime


# =============================================================================
# Products
# =============================================================================


class ProductCreate(CamelModel):
    tenant_id: UUID
    sku: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: str | None = Field(None, max_length=100)
    tags: list[str] = Field(default_factory=list)
    specifications: dict[str, Any] = Field(default_factory=dict)
    images: list[str] = Field(default_factory=list)
    is_active: bool = True


class ProductUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"sku", "name", "price", "tags", "specifications", "images", "is_active"}
    )

    sku: str | None = Field(None, min_length=1, max_length=100)
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    category: str | None = Field(None, max_length=100)
    tags: list[str] | None = None
    specifications: dict[str, Any] | None = None
    images: list[str] | None = None
    is_active: bool | None = None


class ProductResponse(CamelModel):
    id: UUID
    tenant_id: UUID
    sku: str
    name: str
    description: str | None = None
    price: Decimal
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    specifications: dict[str, Any] = Field(default_factory=dict)
    images: list[str] = Field(default_factory=list)
    is_active: bool
    created_at: datetime


# =============================================================================
# Inventory
# =============================================================================


class InventoryUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"quantity_available", "quantity_reserved", "reorder_point"})

    quantity_available: int | None = Field(None, ge=0)
    quantity_reserved: int | None = Field(None, ge=0)
    reorder_point: int | None = Field(None, ge=0)


class InventoryResponse(CamelModel):
    id: UUID
    product_id: UUID
    quantity_available: int
    quantity_reserved: int
    reorder_point: int
    last_restocked: datetime | None = None
    updated_at: datetime


class InventoryItemResponse(InventoryResponse):
    """Inventory row joined with its product."""

    product: ProductResponse


# =============================================================================
# Knowledge base
# =============================================================================


class KnowledgeBaseCreate(CamelModel):
    tenant_id: UUID
    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    category: str | None = Field(None, max_length=100)
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False
    embedding: list[float] | None = None


class KnowledgeBaseResponse(CamelModel):
    id: UUID
    tenant_id: UUID
    title: str
    content: str
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_public: bool
    created_at: datetime
    updated_at: datetime
