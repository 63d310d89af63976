"""
Shared pytest fixtures for all tests.

Provides an on-disk SQLite database per test (via aiosqlite), a fake language
model, the service container and an HTTP client bound to the application.
"""

from decimal import Decimal
from typing import Any, AsyncGenerator
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from commerce_hub.config.settings import Settings
from commerce_hub.core.app_factory import create_app
from commerce_hub.core.container import ServiceContainer
from commerce_hub.database.async_db import create_session_factory
from commerce_hub.models.db import Base, KnowledgeBase, Product, Tenant
from commerce_hub.repositories import ProductRepository


# ============================================================================
# SETTINGS / DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Test settings pointing at a throwaway SQLite file."""
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'commerce_hub_test.db'}",
        ENVIRONMENT="test",
        LLM_API_KEY="test-key",
        CORS_ORIGINS=["http://testserver"],
    )


@pytest_asyncio.fixture
async def async_engine(settings: Settings):
    """Create the schema on a fresh database."""
    engine = create_async_engine(settings.async_database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(async_engine)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session used by tests to seed and inspect data."""
    async with session_factory() as session:
        yield session


# ============================================================================
# LLM FIXTURES
# ============================================================================


@pytest.fixture
def mock_llm() -> AsyncMock:
    """
    Fake language model.

    ``generate_chat`` returns an empty JSON object unless a test sets
    ``return_value`` or ``side_effect``.
    """
    mock = AsyncMock()
    mock.model_name = "test-model"
    mock.generate_chat = AsyncMock(return_value="{}")
    mock.health_check = AsyncMock(return_value=True)
    return mock


# ============================================================================
# APPLICATION FIXTURES
# ============================================================================


@pytest.fixture
def container(settings: Settings, mock_llm: AsyncMock, async_engine) -> ServiceContainer:
    return ServiceContainer(settings, llm=mock_llm, engine=async_engine)


@pytest.fixture
def app(container: ServiceContainer):
    return create_app(container=container)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client; unhandled errors come back as 500 responses instead of raising."""
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


# ============================================================================
# DATA FACTORIES
# ============================================================================


@pytest.fixture
def tenant_factory(db_session: AsyncSession):
    """Create and commit a tenant."""
    counter = {"n": 0}

    async def create(**overrides: Any) -> Tenant:
        counter["n"] += 1
        fields = {
            "slug": f"tenant-{counter['n']}",
            "name": f"Tenant {counter['n']}",
            "industry": "retail",
            "settings": {},
            "is_active": True,
        }
        fields.update(overrides)
        tenant = Tenant(**fields)
        db_session.add(tenant)
        await db_session.commit()
        await db_session.refresh(tenant)
        return tenant

    return create


@pytest.fixture
def product_factory(db_session: AsyncSession):
    """Create and commit a product (with its inventory row)."""
    counter = {"n": 0}
    products = ProductRepository(db_session)

    async def create(tenant_id, **overrides: Any) -> Product:
        counter["n"] += 1
        fields = {
            "sku": f"SKU-{counter['n']:03d}",
            "name": f"Product {counter['n']}",
            "description": f"Description for product {counter['n']}",
            "price": Decimal("99.99"),
            "category": "general",
            "tags": [],
            "specifications": {},
            "images": [],
            "is_active": True,
        }
        fields.update(overrides)
        product = await products.create(tenant_id, **fields)
        await products.commit()
        return product

    return create


@pytest.fixture
def knowledge_factory(db_session: AsyncSession):
    async def create(tenant_id, **overrides: Any) -> KnowledgeBase:
        fields = {
            "title": "Shipping policy",
            "content": "Orders ship within 2 business days.",
            "category": "policy",
            "tags": ["shipping"],
        }
        fields.update(overrides)
        entry = KnowledgeBase(tenant_id=tenant_id, **fields)
        db_session.add(entry)
        await db_session.commit()
        await db_session.refresh(entry)
        return entry

    return create
