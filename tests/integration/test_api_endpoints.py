"""
Integration tests of the HTTP API against an in-process application with a
SQLite database and a fake language model.
"""

import json
import uuid
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from commerce_hub.core.interfaces.llm import LLMConnectionError, LLMGenerationError
from commerce_hub.models.db import Conversation, DemandTracking, Document, Order
from commerce_hub.schemas.assistant import FALLBACK_REPLY


async def count_rows(session_factory, model) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


# ============================================================================
# Health / middleware
# ============================================================================


@pytest.mark.integration
@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["environment"] == "test"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_correlation_id_header(client):
    response = await client.get("/api/tenants", headers={"X-Correlation-ID": "abc-123"})

    assert response.status_code == 200
    assert response.headers["X-Correlation-ID"] == "abc-123"


# ============================================================================
# Tenants
# ============================================================================


@pytest.mark.integration
@pytest.mark.asyncio
async def test_tenant_crud(client):
    created = await client.post("/api/tenants", json={"name": "Acme", "slug": "acme", "industry": "retail"})
    assert created.status_code == 201
    tenant = created.json()
    assert tenant["slug"] == "acme"
    assert tenant["isActive"] is True

    duplicate = await client.post("/api/tenants", json={"name": "Acme 2", "slug": "acme"})
    assert duplicate.status_code == 400
    assert duplicate.json()["code"] == "VALIDATION_ERROR"

    patched = await client.patch(f"/api/tenants/{tenant['id']}", json={"isActive": False})
    assert patched.status_code == 200
    assert patched.json()["isActive"] is False

    missing = await client.get(f"/api/tenants/{uuid.uuid4()}")
    assert missing.status_code == 404


@pytest.mark.integration
@pytest.mark.asyncio
async def test_request_validation_error(client):
    response = await client.post("/api/tenants", json={"name": "No slug"})

    assert response.status_code == 422
    body = response.json()
    assert body["error"] is True
    assert body["status_code"] == 422
    assert any("slug" in detail["field"] for detail in body["details"])


# ============================================================================
# Products / inventory
# ============================================================================


@pytest.mark.integration
@pytest.mark.asyncio
async def test_product_lifecycle(client, tenant_factory):
    tenant = await tenant_factory()
    tenant_id = str(tenant.id)

    created = await client.post(
        "/api/products",
        json={"tenantId": tenant_id, "sku": "LAP-1", "name": "Laptop", "price": "999.99", "category": "electronics"},
    )
    assert created.status_code == 201
    product_id = created.json()["id"]

    listed = await client.get("/api/products", params={"tenantId": tenant_id, "search": "lap"})
    assert [p["id"] for p in listed.json()] == [product_id]

    inventory = await client.get("/api/inventory", params={"tenantId": tenant_id})
    assert inventory.json()[0]["quantityAvailable"] == 0
    assert inventory.json()[0]["product"]["id"] == product_id

    restocked = await client.put(
        f"/api/inventory/{product_id}", params={"tenantId": tenant_id}, json={"quantityAvailable": 12}
    )
    assert restocked.status_code == 200
    assert restocked.json()["quantityAvailable"] == 12
    assert restocked.json()["lastRestocked"] is not None

    updated = await client.put(f"/api/products/{product_id}", params={"tenantId": tenant_id}, json={"name": "Laptop X"})
    assert updated.json()["name"] == "Laptop X"

    deleted = await client.delete(f"/api/products/{product_id}", params={"tenantId": tenant_id})
    assert deleted.status_code == 204
    gone = await client.get(f"/api/products/{product_id}", params={"tenantId": tenant_id})
    assert gone.status_code == 404


@pytest.mark.integration
@pytest.mark.asyncio
async def test_product_of_other_tenant_is_not_found(client, tenant_factory, product_factory):
    acme = await tenant_factory()
    globex = await tenant_factory()
    product = await product_factory(acme.id)

    response = await client.get(f"/api/products/{product.id}", params={"tenantId": str(globex.id)})

    assert response.status_code == 404
    assert response.json()["message"] == "Product not found"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_inventory_update_unknown_product(client, tenant_factory):
    tenant = await tenant_factory()

    response = await client.put(
        f"/api/inventory/{uuid.uuid4()}", params={"tenantId": str(tenant.id)}, json={"quantityAvailable": 1}
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Inventory not found"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_ai_search_falls_back_when_model_is_down(client, mock_llm, tenant_factory, product_factory):
    tenant = await tenant_factory()
    await product_factory(tenant.id, name="Gaming Laptop")
    await product_factory(tenant.id, name="Desk Lamp")
    mock_llm.generate_chat.side_effect = LLMConnectionError("offline")

    response = await client.post("/api/products/search", json={"tenantId": str(tenant.id), "query": "laptop"})

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Gaming Laptop"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_compare_needs_two_products(client, tenant_factory, product_factory):
    tenant = await tenant_factory()
    product = await product_factory(tenant.id)

    response = await client.post(
        "/api/products/compare", json={"tenantId": str(tenant.id), "productIds": [str(product.id)]}
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Need at least 2 products to compare"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_compare_model_failure_is_503(client, mock_llm, tenant_factory, product_factory):
    tenant = await tenant_factory()
    first = await product_factory(tenant.id)
    second = await product_factory(tenant.id)
    mock_llm.generate_chat.side_effect = LLMGenerationError("bad output")

    response = await client.post(
        "/api/products/compare",
        json={"tenantId": str(tenant.id), "productIds": [str(first.id), str(second.id)]},
    )

    assert response.status_code == 503
    assert response.json()["message"] == "Failed to generate product comparison"


# ============================================================================
# Chat
# ============================================================================


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_unknown_tenant_is_404(client, mock_llm):
    response = await client.post("/api/ai/chat", json={"message": "hi", "tenantId": str(uuid.uuid4())})

    assert response.status_code == 404
    mock_llm.generate_chat.assert_not_awaited()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_inactive_tenant_is_403(client, session_factory, tenant_factory):
    tenant = await tenant_factory(is_active=False)

    response = await client.post("/api/ai/chat", json={"message": "hi", "tenantId": str(tenant.id)})

    assert response.status_code == 403
    assert response.json()["message"] == "Tenant is disabled"
    assert await count_rows(session_factory, Conversation) == 0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_empty_message_is_rejected(client, tenant_factory):
    tenant = await tenant_factory()

    response = await client.post("/api/ai/chat", json={"message": "", "tenantId": str(tenant.id)})

    assert response.status_code == 422


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_success(client, session_factory, mock_llm, tenant_factory, product_factory):
    tenant = await tenant_factory()
    laptop = await product_factory(tenant.id, name="Laptop")
    mock_llm.generate_chat.return_value = json.dumps(
        {
            "intent": "search",
            "confidence": 0.9,
            "entities": {"product_names": ["laptop"]},
            "response": "Our Laptop is a great fit.",
            "suggestedProducts": [str(laptop.id), "not-a-real-id"],
            "requiresEscalation": False,
        }
    )

    response = await client.post(
        "/api/ai/chat", json={"message": "I need a laptop", "tenantId": str(tenant.id), "channel": "telegram"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body == {
        "response": "Our Laptop is a great fit.",
        "intent": "search",
        "confidence": 0.9,
        "suggestedProducts": [str(laptop.id)],
        "requiresEscalation": False,
    }
    assert await count_rows(session_factory, Conversation) == 1
    assert await count_rows(session_factory, DemandTracking) == 0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_degrades_when_model_is_down(client, session_factory, mock_llm, tenant_factory):
    tenant = await tenant_factory()
    mock_llm.generate_chat.side_effect = LLMConnectionError("offline")

    response = await client.post("/api/ai/chat", json={"message": "hello", "tenantId": str(tenant.id)})

    assert response.status_code == 200
    body = response.json()
    assert body["intent"] == "unknown"
    assert body["confidence"] == 0.0
    assert body["response"] == FALLBACK_REPLY
    assert body["requiresEscalation"] is True
    assert body["suggestedProducts"] == []
    assert await count_rows(session_factory, Conversation) == 1


@pytest.mark.integration
@pytest.mark.asyncio
async def test_repeated_unmatched_search_increments_demand(client, mock_llm, tenant_factory):
    tenant = await tenant_factory()
    mock_llm.generate_chat.return_value = json.dumps(
        {"intent": "search", "confidence": 0.8, "response": "Sorry, none in stock.", "suggestedProducts": []}
    )

    for _ in range(2):
        response = await client.post("/api/ai/chat", json={"message": "Red shoes", "tenantId": str(tenant.id)})
        assert response.status_code == 200

    demand = await client.get("/api/analytics/demand-tracking", params={"tenantId": str(tenant.id)})
    records = demand.json()
    assert len(records) == 1
    assert records[0]["query"] == "Red shoes"
    assert records[0]["searchCount"] == 2
    assert records[0]["noResultsCount"] == 2


# ============================================================================
# Documents / analytics
# ============================================================================


@pytest.mark.integration
@pytest.mark.asyncio
async def test_quote_generation(client, mock_llm, tenant_factory, product_factory):
    tenant = await tenant_factory()
    product = await product_factory(tenant.id, price=Decimal("50.00"))
    mock_llm.generate_chat.return_value = json.dumps({"title": "Quote", "terms": "Net 30"})

    response = await client.post(
        "/api/documents/quote",
        json={
            "tenantId": str(tenant.id),
            "customerName": "Jane",
            "customerId": "cust-9",
            "items": [{"productId": str(product.id), "quantity": 3}],
        },
    )

    assert response.status_code == 201
    document = response.json()
    assert document["type"] == "quote"
    assert document["documentNumber"].startswith("QT-")
    assert document["status"] == "generated"
    assert document["content"]["total"] == "150.00"
    assert document["content"]["customerId"] == "cust-9"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_quote_generation_failure_is_503_and_stores_nothing(
    client, session_factory, mock_llm, tenant_factory, product_factory
):
    tenant = await tenant_factory()
    product = await product_factory(tenant.id)
    mock_llm.generate_chat.side_effect = LLMConnectionError("offline")

    response = await client.post(
        "/api/documents/quote",
        json={"tenantId": str(tenant.id), "items": [{"productId": str(product.id), "quantity": 1}]},
    )

    assert response.status_code == 503
    assert response.json()["message"] == "Failed to generate quote content"
    assert await count_rows(session_factory, Document) == 0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_quote_unknown_product_is_404(client, tenant_factory):
    tenant = await tenant_factory()

    response = await client.post(
        "/api/documents/quote",
        json={"tenantId": str(tenant.id), "items": [{"productId": str(uuid.uuid4()), "quantity": 1}]},
    )

    assert response.status_code == 404


@pytest.mark.integration
@pytest.mark.asyncio
async def test_stats_default_accuracy(client):
    response = await client.get("/api/analytics/stats")

    assert response.status_code == 200
    assert response.json() == {
        "activeTenants": 0,
        "totalConversations": 0,
        "totalRevenue": 0.0,
        "aiAccuracy": 94.2,
    }


@pytest.mark.integration
@pytest.mark.asyncio
async def test_demand_insights_without_data(client, mock_llm, tenant_factory):
    tenant = await tenant_factory()

    response = await client.get("/api/analytics/demand-insights", params={"tenantId": str(tenant.id)})

    assert response.json() == {"insights": "No insights available."}
    mock_llm.generate_chat.assert_not_awaited()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_order_and_conversation_endpoints(client, tenant_factory):
    tenant = await tenant_factory()
    tenant_id = str(tenant.id)

    conversation = await client.post(
        "/api/conversations",
        json={"tenantId": tenant_id, "customerId": "cust-1", "messages": [{"role": "user", "content": "hi"}]},
    )
    assert conversation.status_code == 201
    assert conversation.json()["status"] == "active"

    order = await client.post(
        "/api/orders",
        json={
            "tenantId": tenant_id,
            "customerId": "cust-1",
            "items": [{"name": "Laptop", "quantity": 1, "price": "10.00"}],
            "totalAmount": "10.00",
            "conversationId": conversation.json()["id"],
        },
    )
    assert order.status_code == 201
    assert order.json()["orderNumber"].startswith("ORD-")

    updated = await client.put(
        f"/api/orders/{order.json()['id']}", params={"tenantId": tenant_id}, json={"status": "completed"}
    )
    assert updated.json()["status"] == "completed"

    mine = await client.get("/api/orders", params={"tenantId": tenant_id, "customerId": "cust-1"})
    assert [o["id"] for o in mine.json()] == [order.json()["id"]]

    stats = await client.get("/api/analytics/stats", params={"tenantId": tenant_id})
    assert stats.json()["totalRevenue"] == 10.0
    assert stats.json()["activeTenants"] == 1


# ============================================================================
# Partial updates and input limits
# ============================================================================


@pytest.mark.integration
@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"name": None}, {"price": None}, {"isActive": None}, {"sku": "X", "tags": None}])
async def test_product_update_rejects_null_for_required_fields(client, tenant_factory, product_factory, body):
    tenant = await tenant_factory()
    product = await product_factory(tenant.id, name="Laptop")

    response = await client.put(f"/api/products/{product.id}", params={"tenantId": str(tenant.id)}, json=body)

    assert response.status_code == 422
    assert response.json()["message"] == "Validation error"
    unchanged = await client.get(f"/api/products/{product.id}", params={"tenantId": str(tenant.id)})
    assert unchanged.json()["name"] == "Laptop"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_product_update_accepts_null_for_optional_fields(client, tenant_factory, product_factory):
    tenant = await tenant_factory()
    product = await product_factory(tenant.id, description="Old text")

    response = await client.put(
        f"/api/products/{product.id}", params={"tenantId": str(tenant.id)}, json={"description": None}
    )

    assert response.status_code == 200
    assert response.json()["description"] is None


@pytest.mark.integration
@pytest.mark.asyncio
async def test_tenant_patch_rejects_null_active_flag(client, tenant_factory):
    tenant = await tenant_factory()

    response = await client.patch(f"/api/tenants/{tenant.id}", json={"isActive": None})

    assert response.status_code == 422
    assert (await client.get(f"/api/tenants/{tenant.id}")).json()["isActive"] is True


@pytest.mark.integration
@pytest.mark.asyncio
async def test_inventory_update_rejects_null_quantity(client, tenant_factory, product_factory):
    tenant = await tenant_factory()
    product = await product_factory(tenant.id)

    response = await client.put(
        f"/api/inventory/{product.id}", params={"tenantId": str(tenant.id)}, json={"quantityAvailable": None}
    )

    assert response.status_code == 422


@pytest.mark.integration
@pytest.mark.asyncio
async def test_order_update_rejects_null_status(client, tenant_factory):
    tenant = await tenant_factory()
    tenant_id = str(tenant.id)
    order = await client.post(
        "/api/orders",
        json={"tenantId": tenant_id, "items": [{"name": "Pen", "price": "1.00"}], "totalAmount": "1.00"},
    )
    order_id = order.json()["id"]

    response = await client.put(f"/api/orders/{order_id}", params={"tenantId": tenant_id}, json={"status": None})

    assert response.status_code == 422
    current = await client.get(f"/api/orders/{order_id}", params={"tenantId": tenant_id})
    assert current.json()["status"] == "pending"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_order_cannot_reference_other_tenants_conversation(client, session_factory, tenant_factory):
    acme = await tenant_factory()
    globex = await tenant_factory()
    foreign = await client.post("/api/conversations", json={"tenantId": str(globex.id), "messages": []})

    response = await client.post(
        "/api/orders",
        json={
            "tenantId": str(acme.id),
            "items": [{"name": "Pen", "price": "1.00"}],
            "totalAmount": "1.00",
            "conversationId": foreign.json()["id"],
        },
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Conversation not found"
    assert await count_rows(session_factory, Order) == 0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_rejects_overlong_customer_id(client, session_factory, mock_llm, tenant_factory):
    tenant = await tenant_factory()

    response = await client.post(
        "/api/ai/chat", json={"message": "hi", "tenantId": str(tenant.id), "customerId": "c" * 256}
    )

    assert response.status_code == 422
    mock_llm.generate_chat.assert_not_awaited()
    assert await count_rows(session_factory, Conversation) == 0
