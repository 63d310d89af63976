"""
Document model - generated quotes, invoices and receipts.
"""

from sqlalchemy import Column, ForeignKey, String, Uuid

from .base import Base, JSONType, TimestampMixin, uuid_pk


class Document(Base, TimestampMixin):
    __tablename__ = "documents"

    id = uuid_pk()

    tenant_id = Column(
        Uuid,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="SET NULL"), nullable=True)
    type = Column(String(20), nullable=False, comment="quote, invoice or receipt")
    document_number = Column(String(50), unique=True, nullable=False)
    content = Column(JSONType, nullable=False)
    file_path = Column(String(500), nullable=True)
    status = Column(String(20), default="draft", nullable=False)

    def __repr__(self) -> str:
        return f"<Document(number='{self.document_number}', type='{self.type}')>"
