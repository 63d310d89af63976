from commerce_hub.schemas.assistant import (
    Channel,
    Decision,
    DecisionEntities,
    Intent,
    MessageRole,
    MessageTurn,
    PriceRange,
    ProductDraft,
    ProductSearchFilters,
    QuoteCustomer,
)
from commerce_hub.schemas.common import CamelModel, ErrorResponse, PartialUpdate

__all__ = [
    "CamelModel",
    "Channel",
    "Decision",
    "DecisionEntities",
    "ErrorResponse",
    "Intent",
    "MessageRole",
    "MessageTurn",
    "PartialUpdate",
    "PriceRange",
    "ProductDraft",
    "ProductSearchFilters",
    "QuoteCustomer",
]
