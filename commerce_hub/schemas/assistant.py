"""
Assistant schemas - the structured decision produced for a customer message
and the payloads exchanged with the catalog assistant.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from commerce_hub.schemas.common import CamelModel

DEFAULT_REPLY = "I'm not sure how to help with that. Let me connect you with a human agent."
FALLBACK_REPLY = "I'm experiencing technical difficulties. Let me connect you with a human agent."

# Confidence below this always escalates to a human
ESCALATION_THRESHOLD = 0.5


class Intent(str, Enum):
    """Closed set of customer intents."""

    SEARCH = "search"
    COMPARE = "compare"
    ADD_TO_CART = "add_to_cart"
    CREATE_QUOTE = "create_quote"
    CHECKOUT = "checkout"
    KB_ANSWER = "kb_answer"
    STATUS = "status"
    HANDOFF = "handoff"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "Intent":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNKNOWN


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Channel(str, Enum):
    TELEGRAM = "telegram"
    WHATSAPP = "whatsapp"
    WEB = "web"


class MessageTurn(CamelModel):
    """One turn of a conversation."""

    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class PriceRange(CamelModel):
    min: Decimal | None = Field(None, ge=0)
    max: Decimal | None = Field(None, ge=0)

    def contains(self, price: Decimal) -> bool:
        if self.min is not None and price < self.min:
            return False
        if self.max is not None and price > self.max:
            return False
        return True


class DecisionEntities(CamelModel):
    """Loosely structured extraction; unknown keys returned by the model are kept."""

    model_config = ConfigDict(extra="allow")

    product_names: list[str] = Field(default_factory=list)
    price_range: PriceRange | None = None
    categories: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)

    @field_validator("product_names", "categories", "features", mode="before")
    @classmethod
    def coerce_string_list(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(item) for item in value if item is not None]
        return []

    @field_validator("price_range", mode="before")
    @classmethod
    def drop_invalid_price_range(cls, value):
        # Models often answer {"min": 0, "max": 0} for "no range"
        if not isinstance(value, dict):
            return None
        if not value.get("min") and not value.get("max"):
            return None
        try:
            return PriceRange.model_validate(value)
        except ValueError:
            return None


class Decision(CamelModel):
    """Structured outcome of classifying one customer message."""

    intent: Intent = Intent.UNKNOWN
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    entities: DecisionEntities = Field(default_factory=DecisionEntities)
    response: str = DEFAULT_REPLY
    suggested_products: list[str] = Field(default_factory=list)
    requires_escalation: bool = True

    @classmethod
    def fallback(cls) -> "Decision":
        return cls(
            intent=Intent.UNKNOWN,
            confidence=0.0,
            entities=DecisionEntities(),
            response=FALLBACK_REPLY,
            suggested_products=[],
            requires_escalation=True,
        )

    @property
    def is_unmatched_search(self) -> bool:
        return self.intent == Intent.SEARCH and not self.suggested_products


class ProductSearchFilters(CamelModel):
    category: str | None = None
    price_range: PriceRange | None = None
    features: list[str] = Field(default_factory=list)


class ProductDraft(CamelModel):
    """Best-effort product fields extracted from free text; everything optional."""

    name: str | None = None
    category: str | None = None
    specifications: dict[str, Any] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    estimated_price: Decimal | None = Field(None, ge=0)


class QuoteCustomer(CamelModel):
    name: str | None = None
    email: str | None = None
