"""
FastAPI dependencies. Everything is resolved from the ServiceContainer stored
on the application state; nothing here holds module-level state.
"""

from collections.abc import AsyncIterator
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from commerce_hub.core.container import ServiceContainer
from commerce_hub.core.domain.exceptions import EntityNotFoundException
from commerce_hub.database.async_db import session_scope
from commerce_hub.models.db import Tenant
from commerce_hub.repositories import (
    ConversationRepository,
    DemandRepository,
    DocumentRepository,
    InventoryRepository,
    KnowledgeRepository,
    OrderRepository,
    ProductRepository,
    TenantRepository,
)
from commerce_hub.services import AnalyticsService, CatalogAssistant, ChatService, QuoteService


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


async def get_db_session(container: ServiceContainer = Depends(get_container)) -> AsyncIterator[AsyncSession]:  # noqa: B008
    async with session_scope(container.session_factory) as session:
        yield session


# ============================================================================
# Repositories
# ============================================================================


def get_tenant_repository(db: AsyncSession = Depends(get_db_session)) -> TenantRepository:  # noqa: B008
    return TenantRepository(db)


def get_product_repository(db: AsyncSession = Depends(get_db_session)) -> ProductRepository:  # noqa: B008
    return ProductRepository(db)


def get_inventory_repository(db: AsyncSession = Depends(get_db_session)) -> InventoryRepository:  # noqa: B008
    return InventoryRepository(db)


def get_knowledge_repository(db: AsyncSession = Depends(get_db_session)) -> KnowledgeRepository:  # noqa: B008
    return KnowledgeRepository(db)


def get_conversation_repository(db: AsyncSession = Depends(get_db_session)) -> ConversationRepository:  # noqa: B008
    return ConversationRepository(db)


def get_order_repository(db: AsyncSession = Depends(get_db_session)) -> OrderRepository:  # noqa: B008
    return OrderRepository(db)


def get_demand_repository(db: AsyncSession = Depends(get_db_session)) -> DemandRepository:  # noqa: B008
    return DemandRepository(db)


def get_document_repository(db: AsyncSession = Depends(get_db_session)) -> DocumentRepository:  # noqa: B008
    return DocumentRepository(db)


# ============================================================================
# Services
# ============================================================================


def get_catalog_assistant(container: ServiceContainer = Depends(get_container)) -> CatalogAssistant:  # noqa: B008
    return container.get_catalog_assistant()


def get_chat_service(
    db: AsyncSession = Depends(get_db_session),  # noqa: B008
    container: ServiceContainer = Depends(get_container),  # noqa: B008
) -> ChatService:
    return container.create_chat_service(db)


def get_analytics_service(
    db: AsyncSession = Depends(get_db_session),  # noqa: B008
    container: ServiceContainer = Depends(get_container),  # noqa: B008
) -> AnalyticsService:
    return container.create_analytics_service(db)


def get_quote_service(
    db: AsyncSession = Depends(get_db_session),  # noqa: B008
    container: ServiceContainer = Depends(get_container),  # noqa: B008
) -> QuoteService:
    return container.create_quote_service(db)


async def require_tenant(tenants: TenantRepository, tenant_id: UUID) -> Tenant:
    """Fetch a tenant or raise EntityNotFoundException."""
    tenant = await tenants.get(tenant_id)
    if tenant is None:
        raise EntityNotFoundException("Tenant", tenant_id)
    return tenant
