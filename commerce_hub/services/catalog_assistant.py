"""
Catalog Assistant

Auxiliary language-model operations around the catalog. Each one has its own
failure policy:

- compare: needs two products, propagates model failures
- rank_search: falls back to a local substring match
- extract_product_info: falls back to an empty draft
- generate_quote_content: propagates model failures
- summarize_demand: falls back to a fixed message
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Sequence

from pydantic import ValidationError

from commerce_hub.core.domain.exceptions import CapabilityRequiredException, InsufficientInputException
from commerce_hub.core.interfaces.llm import ILLM, LLMError
from commerce_hub.core.shared.logger import get_service_logger
from commerce_hub.models.db import DemandTracking, Product, Tenant
from commerce_hub.schemas.assistant import ProductDraft, ProductSearchFilters, QuoteCustomer
from commerce_hub.services.context import demand_to_context, product_to_context, to_json
from commerce_hub.utils.json_extractor import extract_json_safely

logger = get_service_logger("catalog_assistant")

NO_COMPARISON = "Unable to generate comparison."
NO_INSIGHTS = "No insights available."
INSIGHTS_UNAVAILABLE = "Unable to generate demand insights at this time."
QUOTE_VALIDITY_DAYS = 30

COMPARE_PROMPT = """Compare these products and provide a detailed analysis highlighting key differences, pros and cons:

{products}

Format the response as a clear comparison with recommendations."""

SEARCH_PROMPT = """Based on this search query: "{query}", find the most relevant products from this catalog:

{products}

Consider:
- Product names and descriptions
- Categories and tags
- Category: {category}
- Price range: {price_range}
- Required features: {features}

Respond with JSON containing an array of product IDs ranked by relevance:
{{"productIds": ["id1", "id2", "id3"], "reasoning": "explanation"}}"""

EXTRACT_PROMPT = """Extract structured product information from this description:

"{description}"

Respond with JSON containing:
{{
  "name": "product name",
  "category": "category",
  "specifications": {{}},
  "tags": [],
  "estimatedPrice": 0
}}"""

QUOTE_PROMPT = """Generate a professional quote document content for:

Customer: {customer}
Company: {company}

Items:
{items}

Total: ${total}

Include:
- Professional formatting
- Terms and conditions
- Validity period ({validity} days)
- Payment terms

Respond with JSON containing the quote structure."""

INSIGHTS_PROMPT = """Analyze this demand tracking data and provide actionable business insights:

{records}

Focus on:
- Stock gaps and procurement recommendations
- Market trends and opportunities
- Customer behavior patterns
- Revenue optimization suggestions

Provide a concise executive summary."""


@dataclass(frozen=True)
class QuoteLine:
    product: Product
    quantity: int
    unit_price: Decimal

    @property
    def total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {
            "productId": str(self.product.id),
            "sku": self.product.sku,
            "name": self.product.name,
            "quantity": self.quantity,
            "unitPrice": str(self.unit_price),
            "total": str(self.total),
        }


def match_locally(
    query: str,
    candidates: Sequence[Product],
    filters: ProductSearchFilters | None = None,
) -> list[Product]:
    """
    Case-insensitive substring match on name or description.

    Candidate order is preserved, so identical input always yields identical output.
    """
    term = query.strip().lower()
    matches = []
    for product in candidates:
        haystacks = (product.name or "", product.description or "")
        if not any(term in text.lower() for text in haystacks):
            continue
        if filters and filters.price_range and not filters.price_range.contains(Decimal(str(product.price))):
            continue
        matches.append(product)
    return matches


class CatalogAssistant:
    """Language-model helpers for comparison, search, extraction, quotes and demand."""

    def __init__(self, llm: ILLM):
        self._llm = llm

    async def _ask(self, prompt: str, temperature: float, json_mode: bool = False) -> str:
        return await self._llm.generate_chat(
            [{"role": "user", "content": prompt}],
            temperature=temperature,
            json_mode=json_mode,
        )

    async def compare(self, products: Sequence[Product]) -> str:
        """
        Compare two or more products.

        Raises:
            InsufficientInputException: Fewer than two products given
            CapabilityRequiredException: The language model failed
        """
        if len(products) < 2:
            raise InsufficientInputException(
                "Need at least 2 products to compare", required=2, received=len(products)
            )

        prompt = COMPARE_PROMPT.format(products=to_json((product_to_context(p) for p in products), indent=2))
        try:
            text = await self._ask(prompt, temperature=0.2)
        except LLMError as e:
            logger.error("Product comparison failed", error=str(e))
            raise CapabilityRequiredException("product comparison") from e

        return text.strip() or NO_COMPARISON

    async def rank_search(
        self,
        query: str,
        filters: ProductSearchFilters | None,
        candidates: Sequence[Product],
    ) -> list[Product]:
        """
        Rank candidates by relevance to the query.

        Returns the candidates the model picked, in the model's order. When the
        model fails or its answer cannot be parsed, falls back to match_locally.
        """
        filters = filters or ProductSearchFilters()
        if not candidates:
            return []

        price_range = "any"
        if filters.price_range:
            low = filters.price_range.min if filters.price_range.min is not None else 0
            high = filters.price_range.max if filters.price_range.max is not None else "any"
            price_range = f"${low}-${high}"

        prompt = SEARCH_PROMPT.format(
            query=query,
            products=to_json((product_to_context(p) for p in candidates), indent=2),
            category=filters.category or "any",
            price_range=price_range,
            features=", ".join(filters.features) or "none",
        )

        try:
            raw = await self._ask(prompt, temperature=0.1, json_mode=True)
        except LLMError as e:
            logger.warning("AI product search failed, using local match", error=str(e))
            return match_locally(query, candidates, filters)

        payload = extract_json_safely(raw, expected_type=dict)
        ranked_ids = payload.get("productIds") if payload else None
        if not isinstance(ranked_ids, list):
            logger.warning("AI product search returned no productIds, using local match")
            return match_locally(query, candidates, filters)

        by_id = {str(product.id): product for product in candidates}
        return [by_id[pid] for pid in dict.fromkeys(str(i) for i in ranked_ids) if pid in by_id]

    async def extract_product_info(self, description: str) -> ProductDraft:
        """Best-effort extraction; returns an empty draft on any failure."""
        try:
            raw = await self._ask(EXTRACT_PROMPT.format(description=description), temperature=0.2, json_mode=True)
        except LLMError as e:
            logger.warning("Product info extraction failed", error=str(e))
            return ProductDraft()

        payload = extract_json_safely(raw, expected_type=dict)
        if not payload:
            return ProductDraft()
        try:
            return ProductDraft.model_validate(payload)
        except ValidationError as e:
            logger.warning("Product info extraction returned invalid fields", error=str(e)[:300])
            return ProductDraft()

    async def generate_quote_content(
        self,
        customer: QuoteCustomer,
        lines: Sequence[QuoteLine],
        tenant: Tenant,
    ) -> dict[str, Any]:
        """
        Generate the structured content of a quote document.

        Line items and total are always taken from the catalog, whatever the
        model writes for them.

        Raises:
            CapabilityRequiredException: The model failed or returned no JSON object
        """
        total = sum((line.total for line in lines), Decimal("0"))
        customer_label = customer.name or "Customer"
        if customer.email:
            customer_label = f"{customer_label} ({customer.email})"

        prompt = QUOTE_PROMPT.format(
            customer=customer_label,
            company=tenant.name,
            items="\n".join(
                f"- {line.product.name} x{line.quantity} @ ${line.unit_price} each" for line in lines
            ),
            total=total,
            validity=QUOTE_VALIDITY_DAYS,
        )

        try:
            raw = await self._ask(prompt, temperature=0.1, json_mode=True)
        except LLMError as e:
            logger.error("Quote generation failed", tenant_id=str(tenant.id), error=str(e))
            raise CapabilityRequiredException("quote content") from e

        content = extract_json_safely(raw, expected_type=dict)
        if not content:
            raise CapabilityRequiredException("quote content", "Quote content was not valid JSON")

        content["items"] = [line.to_dict() for line in lines]
        content["total"] = str(total)
        content.setdefault("validityDays", QUOTE_VALIDITY_DAYS)
        return content

    async def summarize_demand(self, records: Sequence[DemandTracking]) -> str:
        """Executive summary of demand records; never raises."""
        prompt = INSIGHTS_PROMPT.format(records=to_json((demand_to_context(r) for r in records), indent=2))
        try:
            text = await self._ask(prompt, temperature=0.3)
        except LLMError as e:
            logger.warning("Demand insights generation failed", error=str(e))
            return INSIGHTS_UNAVAILABLE
        return text.strip() or NO_INSIGHTS

