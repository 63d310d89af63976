"""
Intent Classifier

Turns a raw customer message into a structured Decision using the language
model, with a bounded slice of the tenant's catalog and knowledge base as
context. The classifier never raises: any failure of the model (unreachable,
timeout, rate limit, unparsable output) yields the fallback Decision together
with a ClassifierError describing what went wrong. Exactly one model call is
made per classification.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence
from uuid import UUID

from pydantic import ValidationError

from commerce_hub.core.interfaces.llm import ILLM, LLMError, LLMRateLimitError, LLMTimeoutError
from commerce_hub.core.shared.logger import get_service_logger
from commerce_hub.models.db import KnowledgeBase, Product
from commerce_hub.schemas.assistant import (
    DEFAULT_REPLY,
    ESCALATION_THRESHOLD,
    Decision,
    DecisionEntities,
    Intent,
)
from commerce_hub.services.context import knowledge_to_context, product_to_context, to_json
from commerce_hub.utils.json_extractor import extract_json_safely

logger = get_service_logger("intent_classifier")

CLASSIFY_TEMPERATURE = 0.3

SYSTEM_PROMPT = """You are an expert AI sales assistant for a multi-tenant e-commerce platform.
Analyze the customer message and provide structured insights.

Available products: {products}
Knowledge base: {knowledge}

Respond with JSON in this format:
{{
  "intent": "search|compare|add_to_cart|create_quote|checkout|kb_answer|status|handoff|unknown",
  "confidence": 0.0-1.0,
  "entities": {{
    "product_names": [],
    "price_range": {{"min": 0, "max": 0}},
    "categories": [],
    "features": []
  }},
  "response": "customer-facing response text",
  "suggestedProducts": ["product_id1", "product_id2"],
  "requiresEscalation": false
}}
Only suggest product ids from the available products."""


class ClassifierErrorKind(str, Enum):
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    MALFORMED_OUTPUT = "malformed_output"


@dataclass(frozen=True)
class ClassifierError:
    kind: ClassifierErrorKind
    message: str


@dataclass(frozen=True)
class ClassificationResult:
    """Decision plus the error that forced a fallback, if any."""

    decision: Decision
    error: ClassifierError | None = None

    @property
    def is_degraded(self) -> bool:
        return self.error is not None


def clamp_confidence(value: Any) -> float:
    """Coerce to float in [0, 1]; anything non-numeric counts as 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return max(0.0, min(1.0, number))


def _as_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def _suggested_ids(raw: Any, allowed: Sequence[str]) -> list[str]:
    if not isinstance(raw, list):
        return []
    allowed_ids = set(allowed)
    # dict.fromkeys keeps first-seen order while dropping duplicates
    ids = dict.fromkeys(str(item) for item in raw if item is not None)
    return [product_id for product_id in ids if product_id in allowed_ids]


def _entities(raw: Any) -> DecisionEntities:
    if not isinstance(raw, dict):
        return DecisionEntities()
    try:
        return DecisionEntities.model_validate(raw)
    except ValidationError:
        logger.debug("Discarding unparsable entities", entities=str(raw)[:200])
        return DecisionEntities()


def parse_decision(payload: dict[str, Any], context_product_ids: Sequence[str]) -> Decision:
    """
    Build a Decision from the model's JSON payload.

    Confidence is clamped, unknown intents map to ``unknown`` and suggested ids
    outside the context catalog are dropped. Escalation is forced below the
    confidence threshold whatever the model reported.
    """
    confidence = clamp_confidence(payload.get("confidence"))
    response = payload.get("response")
    if not isinstance(response, str) or not response.strip():
        response = DEFAULT_REPLY

    suggested = payload.get("suggestedProducts", payload.get("suggested_products"))
    flag = payload.get("requiresEscalation", payload.get("requires_escalation"))

    return Decision(
        intent=Intent.parse(payload.get("intent")) if payload.get("intent") else Intent.UNKNOWN,
        confidence=confidence,
        entities=_entities(payload.get("entities")),
        response=response.strip(),
        suggested_products=_suggested_ids(suggested, context_product_ids),
        requires_escalation=_as_flag(flag) or confidence < ESCALATION_THRESHOLD,
    )


class IntentClassifier:
    """
    Classifies customer messages against tenant context.

    Example:
        ```python
        classifier = IntentClassifier(llm)
        result = await classifier.classify("Do you have gaming laptops?", tenant.id, products, knowledge)
        if result.is_degraded:
            ...
        ```
    """

    def __init__(self, llm: ILLM, max_products: int = 20, max_knowledge: int = 10):
        self._llm = llm
        self.max_products = max_products
        self.max_knowledge = max_knowledge

    def build_messages(
        self,
        message: str,
        products: Sequence[Product],
        knowledge: Sequence[KnowledgeBase],
    ) -> list[dict[str, str]]:
        system = SYSTEM_PROMPT.format(
            products=to_json(product_to_context(p) for p in products),
            knowledge=to_json(knowledge_to_context(k) for k in knowledge),
        )
        return [
            {"role": "system", "content": system},
            {"role": "user", "content": message},
        ]

    async def classify(
        self,
        message: str,
        tenant_id: UUID,
        products: Sequence[Product],
        knowledge: Sequence[KnowledgeBase],
    ) -> ClassificationResult:
        """
        Classify one message.

        Args:
            message: Raw customer message
            tenant_id: Tenant the message belongs to
            products: Tenant catalog, already ordered by the caller; only the first
                ``max_products`` are sent
            knowledge: Tenant knowledge base, already ordered; only the first
                ``max_knowledge`` are sent

        Returns:
            ClassificationResult; ``decision`` is the fallback when ``error`` is set
        """
        log = logger.with_context(tenant_id=str(tenant_id))
        context_products = list(products)[: self.max_products]
        context_knowledge = list(knowledge)[: self.max_knowledge]
        messages = self.build_messages(message, context_products, context_knowledge)

        try:
            raw = await self._llm.generate_chat(messages, temperature=CLASSIFY_TEMPERATURE, json_mode=True)
        except LLMTimeoutError as e:
            return self._degraded(log, ClassifierErrorKind.TIMEOUT, e)
        except LLMRateLimitError as e:
            return self._degraded(log, ClassifierErrorKind.RATE_LIMITED, e)
        except LLMError as e:
            return self._degraded(log, ClassifierErrorKind.UNAVAILABLE, e)
        except Exception as e:
            log.exception("Unexpected error from language model")
            return self._degraded(log, ClassifierErrorKind.UNAVAILABLE, e)

        payload = extract_json_safely(raw or "", expected_type=dict)
        if not payload:
            return self._degraded(log, ClassifierErrorKind.MALFORMED_OUTPUT, ValueError("no JSON object in output"))

        try:
            decision = parse_decision(payload, [str(p.id) for p in context_products])
        except ValidationError as e:
            return self._degraded(log, ClassifierErrorKind.MALFORMED_OUTPUT, e)

        log.info(
            "Message classified",
            intent=decision.intent.value,
            confidence=decision.confidence,
            escalate=decision.requires_escalation,
            suggested=len(decision.suggested_products),
        )
        return ClassificationResult(decision=decision)

    @staticmethod
    def _degraded(log, kind: ClassifierErrorKind, error: Exception) -> ClassificationResult:
        log.warning("Classification degraded to fallback", error_kind=kind.value, error=str(error)[:300])
        return ClassificationResult(
            decision=Decision.fallback(),
            error=ClassifierError(kind=kind, message=str(error)),
        )
