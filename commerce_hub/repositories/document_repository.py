# ============================================================================
# SCOPE: MULTI-TENANT
# Tenant-Aware: Yes - tenant_id is a required argument of every method.
# ============================================================================
"""Repository for generated documents (quotes, invoices, receipts)."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import func, select

from commerce_hub.models.db import Document
from commerce_hub.repositories.base import SessionRepository, epoch_millis

NUMBER_PREFIXES = {
    "quote": "QT",
    "invoice": "INV",
    "receipt": "RCP",
}


class DocumentRepository(SessionRepository):
    """Database operations for documents."""

    async def _next_document_number(self, document_type: str) -> str:
        prefix = NUMBER_PREFIXES.get(document_type, "DOC")
        millis = epoch_millis()
        while True:
            candidate = f"{prefix}-{millis}"
            stmt = select(func.count()).select_from(Document).where(Document.document_number == candidate)
            if (await self._db.execute(stmt)).scalar_one() == 0:
                return candidate
            millis += 1

    async def create(self, tenant_id: UUID, document_type: str, content: dict[str, Any], **fields: Any) -> Document:
        document = Document(
            tenant_id=tenant_id,
            type=document_type,
            document_number=await self._next_document_number(document_type),
            content=content,
            **fields,
        )
        self._db.add(document)
        await self._db.flush()
        await self._db.refresh(document)
        return document

    async def list_for_tenant(self, tenant_id: UUID) -> list[Document]:
        stmt = (
            select(Document)
            .where(Document.tenant_id == tenant_id)
            .order_by(Document.created_at.desc(), Document.id)
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())
