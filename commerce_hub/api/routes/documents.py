"""Generated document endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from commerce_hub.api.dependencies import get_document_repository, get_quote_service
from commerce_hub.repositories import DocumentRepository
from commerce_hub.schemas.sales import DocumentResponse, QuoteRequest
from commerce_hub.services import QuoteService

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=list[DocumentResponse])
async def list_documents(
    tenant_id: UUID = Query(..., alias="tenantId"),  # noqa: B008
    documents: DocumentRepository = Depends(get_document_repository),  # noqa: B008
):
    return await documents.list_for_tenant(tenant_id)


@router.post("/quote", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_quote(
    payload: QuoteRequest,
    quotes: QuoteService = Depends(get_quote_service),  # noqa: B008
):
    """
    Generate a quote document.

    Responds 503 when the quote content cannot be generated; no partial
    document is stored.
    """
    return await quotes.create_quote(payload)
