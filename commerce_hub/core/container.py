"""
Service Container

Composition root of the application. Owns the process-wide resources (async
engine, session factory, language model) and builds repositories and
services bound to a request's session. Created by the app factory and stored
in ``app.state.container``.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from commerce_hub.config.settings import Settings, get_settings
from commerce_hub.core.interfaces.llm import ILLM
from commerce_hub.database.async_db import create_async_database_engine, create_session_factory
from commerce_hub.integrations.llm import create_openai_compatible_llm
from commerce_hub.repositories import (
    ConversationRepository,
    DemandRepository,
    DocumentRepository,
    KnowledgeRepository,
    OrderRepository,
    ProductRepository,
    TenantRepository,
)
from commerce_hub.services import (
    AnalyticsService,
    CatalogAssistant,
    ChatService,
    ConversationRecorder,
    DemandFeedbackLoop,
    IntentClassifier,
    QuoteService,
)

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Wires concrete implementations together.

    Shared resources are created lazily and live as long as the container;
    services are cheap and built per request around the request's session.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        llm: ILLM | None = None,
        engine: AsyncEngine | None = None,
    ):
        """
        Initialize container.

        Args:
            settings: Application settings (uses cached settings if not provided)
            llm: Language model override (tests inject fakes here)
            engine: Async engine override (tests inject an in-memory database)
        """
        self.settings = settings or get_settings()
        self._llm = llm
        self._engine = engine
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._assistant: CatalogAssistant | None = None
        self._classifier: IntentClassifier | None = None

        logger.info("ServiceContainer initialized")

    # ============================================================
    # SHARED RESOURCES
    # ============================================================

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_database_engine(self.settings)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = create_session_factory(self.engine)
        return self._session_factory

    def get_llm(self) -> ILLM:
        if self._llm is None:
            logger.info(f"Creating LLM instance with model: {self.settings.LLM_MODEL}")
            self._llm = create_openai_compatible_llm(self.settings)
        return self._llm

    def get_catalog_assistant(self) -> CatalogAssistant:
        if self._assistant is None:
            self._assistant = CatalogAssistant(self.get_llm())
        return self._assistant

    def get_intent_classifier(self) -> IntentClassifier:
        if self._classifier is None:
            self._classifier = IntentClassifier(
                self.get_llm(),
                max_products=self.settings.CLASSIFIER_MAX_PRODUCTS,
                max_knowledge=self.settings.CLASSIFIER_MAX_KNOWLEDGE,
            )
        return self._classifier

    # ============================================================
    # PER-REQUEST SERVICES
    # ============================================================

    def create_chat_service(self, db: AsyncSession) -> ChatService:
        return ChatService(
            tenants=TenantRepository(db),
            products=ProductRepository(db),
            knowledge=KnowledgeRepository(db),
            classifier=self.get_intent_classifier(),
            recorder=ConversationRecorder(ConversationRepository(db)),
            demand_feedback=DemandFeedbackLoop(DemandRepository(db)),
        )

    def create_analytics_service(self, db: AsyncSession) -> AnalyticsService:
        return AnalyticsService(
            tenants=TenantRepository(db),
            conversations=ConversationRepository(db),
            orders=OrderRepository(db),
            demand=DemandRepository(db),
            assistant=self.get_catalog_assistant(),
        )

    def create_quote_service(self, db: AsyncSession) -> QuoteService:
        return QuoteService(
            tenants=TenantRepository(db),
            products=ProductRepository(db),
            documents=DocumentRepository(db),
            assistant=self.get_catalog_assistant(),
        )

    async def aclose(self) -> None:
        """Dispose the engine's connection pool."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")
