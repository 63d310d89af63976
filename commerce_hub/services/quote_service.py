"""
Quote Service

Generates quote documents: resolves the requested items against the tenant
catalog, asks the assistant for the document content and stores it.
"""

from __future__ import annotations

from decimal import Decimal

from commerce_hub.core.domain.exceptions import EntityNotFoundException
from commerce_hub.core.shared.logger import get_service_logger
from commerce_hub.models.db import Document
from commerce_hub.repositories import DocumentRepository, ProductRepository, TenantRepository
from commerce_hub.schemas.assistant import QuoteCustomer
from commerce_hub.schemas.sales import DocumentType, QuoteRequest
from commerce_hub.services.catalog_assistant import CatalogAssistant, QuoteLine

logger = get_service_logger("quotes")


class QuoteService:
    def __init__(
        self,
        tenants: TenantRepository,
        products: ProductRepository,
        documents: DocumentRepository,
        assistant: CatalogAssistant,
    ):
        self._tenants = tenants
        self._products = products
        self._documents = documents
        self._assistant = assistant

    async def create_quote(self, request: QuoteRequest) -> Document:
        """
        Raises:
            EntityNotFoundException: Unknown tenant or product
            CapabilityRequiredException: Quote content could not be generated
        """
        tenant = await self._tenants.get(request.tenant_id)
        if tenant is None:
            raise EntityNotFoundException("Tenant", request.tenant_id)

        products = await self._products.get_many(request.tenant_id, [item.product_id for item in request.items])
        by_id = {product.id: product for product in products}

        lines = []
        for item in request.items:
            product = by_id.get(item.product_id)
            if product is None:
                raise EntityNotFoundException("Product", item.product_id)
            unit_price = item.price if item.price is not None else Decimal(str(product.price))
            lines.append(QuoteLine(product=product, quantity=item.quantity, unit_price=unit_price))

        customer = QuoteCustomer(name=request.customer_name, email=request.customer_email)
        content = await self._assistant.generate_quote_content(customer, lines, tenant)
        if request.customer_id:
            content.setdefault("customerId", request.customer_id)

        document = await self._documents.create(
            request.tenant_id,
            DocumentType.QUOTE.value,
            content,
            status="generated",
        )
        await self._documents.commit()

        logger.info("Quote generated", tenant_id=str(tenant.id), document_number=document.document_number)
        return document
