"""
Unit tests for the intent classifier.

The language model is an AsyncMock; no database is involved.
"""

import json
import uuid
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from commerce_hub.core.interfaces.llm import LLMConnectionError, LLMRateLimitError, LLMTimeoutError
from commerce_hub.models.db import KnowledgeBase, Product
from commerce_hub.schemas.assistant import DEFAULT_REPLY, FALLBACK_REPLY, Intent
from commerce_hub.services.intent_classifier import (
    ClassifierErrorKind,
    IntentClassifier,
    clamp_confidence,
    parse_decision,
)

TENANT_ID = uuid.uuid4()


# ============================================================================
# FIXTURES
# ============================================================================


def make_product(name: str = "Laptop", **overrides) -> Product:
    fields = {
        "id": uuid.uuid4(),
        "tenant_id": TENANT_ID,
        "sku": f"SKU-{name.upper()}",
        "name": name,
        "description": f"A {name.lower()}",
        "price": Decimal("999.00"),
        "category": "electronics",
        "tags": [],
        "specifications": {},
    }
    fields.update(overrides)
    return Product(**fields)


def make_knowledge(title: str = "Returns") -> KnowledgeBase:
    return KnowledgeBase(id=uuid.uuid4(), tenant_id=TENANT_ID, title=title, content="30 day returns", tags=[])


@pytest.fixture
def llm():
    mock = AsyncMock()
    mock.generate_chat = AsyncMock()
    return mock


@pytest.fixture
def classifier(llm):
    return IntentClassifier(llm)


def answer(**payload) -> str:
    return json.dumps(payload)


# ============================================================================
# clamp_confidence / parse_decision
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,expected",
    [
        (1.7, 1.0),
        (-0.3, 0.0),
        (0.42, 0.42),
        ("0.8", 0.8),
        (None, 0.0),
        ("high", 0.0),
        (True, 0.0),
        (float("nan"), 0.0),
    ],
)
def test_clamp_confidence(raw, expected):
    assert clamp_confidence(raw) == pytest.approx(expected)


@pytest.mark.unit
def test_parse_decision_escalates_below_threshold():
    decision = parse_decision({"intent": "search", "confidence": 0.4, "requiresEscalation": False}, [])

    assert decision.confidence == pytest.approx(0.4)
    assert decision.requires_escalation is True


@pytest.mark.unit
def test_parse_decision_keeps_model_escalation_flag():
    decision = parse_decision({"intent": "handoff", "confidence": 0.9, "requiresEscalation": True}, [])

    assert decision.intent == Intent.HANDOFF
    assert decision.requires_escalation is True


@pytest.mark.unit
def test_parse_decision_maps_unknown_intent_and_blank_response():
    decision = parse_decision({"intent": "buy_everything", "confidence": 0.9, "response": "  "}, [])

    assert decision.intent == Intent.UNKNOWN
    assert decision.response == DEFAULT_REPLY
    assert decision.requires_escalation is False


@pytest.mark.unit
def test_parse_decision_filters_and_dedupes_suggestions():
    known = str(uuid.uuid4())
    decision = parse_decision(
        {"intent": "search", "confidence": 0.9, "suggestedProducts": [known, "made-up-id", known]},
        [known],
    )

    assert decision.suggested_products == [known]


@pytest.mark.unit
def test_parse_decision_drops_zero_price_range():
    decision = parse_decision(
        {
            "intent": "search",
            "confidence": 0.9,
            "entities": {"price_range": {"min": 0, "max": 0}, "categories": "laptops", "brand": "Acme"},
        },
        [],
    )

    assert decision.entities.price_range is None
    assert decision.entities.categories == ["laptops"]
    assert decision.entities.model_extra == {"brand": "Acme"}


# ============================================================================
# IntentClassifier.classify
# ============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_classify_returns_decision(classifier, llm):
    laptop = make_product("Laptop")
    llm.generate_chat.return_value = answer(
        intent="search",
        confidence=0.92,
        entities={"product_names": ["laptop"], "categories": ["electronics"]},
        response="We have a great laptop for you.",
        suggestedProducts=[str(laptop.id)],
        requiresEscalation=False,
    )

    result = await classifier.classify("Do you sell laptops?", TENANT_ID, [laptop], [make_knowledge()])

    assert not result.is_degraded
    assert result.decision.intent == Intent.SEARCH
    assert result.decision.confidence == pytest.approx(0.92)
    assert result.decision.suggested_products == [str(laptop.id)]
    assert result.decision.requires_escalation is False
    llm.generate_chat.assert_awaited_once()
    _, kwargs = llm.generate_chat.call_args
    assert kwargs["json_mode"] is True
    assert kwargs["temperature"] == pytest.approx(0.3)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_classify_clamps_confidence_above_one(classifier, llm):
    llm.generate_chat.return_value = answer(intent="kb_answer", confidence=1.7, response="Yes.")

    result = await classifier.classify("Do you ship abroad?", TENANT_ID, [], [])

    assert result.decision.confidence == 1.0
    assert result.decision.requires_escalation is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_classify_clamps_negative_confidence_and_escalates(classifier, llm):
    llm.generate_chat.return_value = answer(intent="search", confidence=-0.3, response="Hmm.")

    result = await classifier.classify("something", TENANT_ID, [], [])

    assert result.decision.confidence == 0.0
    assert result.decision.requires_escalation is True


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error,kind",
    [
        (LLMTimeoutError("timed out"), ClassifierErrorKind.TIMEOUT),
        (LLMRateLimitError("slow down"), ClassifierErrorKind.RATE_LIMITED),
        (LLMConnectionError("down"), ClassifierErrorKind.UNAVAILABLE),
        (RuntimeError("boom"), ClassifierErrorKind.UNAVAILABLE),
    ],
)
async def test_classify_degrades_on_model_failure(classifier, llm, error, kind):
    llm.generate_chat.side_effect = error

    result = await classifier.classify("hello", TENANT_ID, [make_product()], [])

    assert result.is_degraded
    assert result.error.kind == kind
    assert result.decision.intent == Intent.UNKNOWN
    assert result.decision.confidence == 0.0
    assert result.decision.response == FALLBACK_REPLY
    assert result.decision.requires_escalation is True
    assert result.decision.suggested_products == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_classify_degrades_on_malformed_output(classifier, llm):
    llm.generate_chat.return_value = "Sorry, I cannot answer in JSON today."

    result = await classifier.classify("hello", TENANT_ID, [], [])

    assert result.is_degraded
    assert result.error.kind == ClassifierErrorKind.MALFORMED_OUTPUT
    assert result.decision.response == FALLBACK_REPLY


@pytest.mark.unit
@pytest.mark.asyncio
async def test_classify_reads_json_inside_prose(classifier, llm):
    llm.generate_chat.return_value = 'Here you go:\n```json\n{"intent": "status", "confidence": 0.7}\n```'

    result = await classifier.classify("where is my order", TENANT_ID, [], [])

    assert not result.is_degraded
    assert result.decision.intent == Intent.STATUS


@pytest.mark.unit
@pytest.mark.asyncio
async def test_classify_sends_only_first_products_and_knowledge(llm):
    classifier = IntentClassifier(llm, max_products=2, max_knowledge=1)
    products = [make_product(f"Item{i}") for i in range(5)]
    knowledge = [make_knowledge(f"Entry{i}") for i in range(3)]
    llm.generate_chat.return_value = answer(
        intent="search",
        confidence=0.9,
        suggestedProducts=[str(products[0].id), str(products[4].id)],
    )

    result = await classifier.classify("items", TENANT_ID, products, knowledge)

    messages = llm.generate_chat.call_args.args[0]
    system_prompt = messages[0]["content"]
    assert "Item0" in system_prompt and "Item1" in system_prompt
    assert "Item2" not in system_prompt
    assert "Entry0" in system_prompt and "Entry1" not in system_prompt
    assert messages[1] == {"role": "user", "content": "items"}
    # products[4] was outside the context window
    assert result.decision.suggested_products == [str(products[0].id)]
