from fastapi import APIRouter

from commerce_hub.api.routes import (
    analytics,
    chat,
    conversations,
    documents,
    inventory,
    knowledge_base,
    orders,
    products,
    tenants,
)

api_router = APIRouter()

# All routes get the API_PREFIX (default /api) from the app factory
api_router.include_router(tenants.router)
api_router.include_router(products.router)
api_router.include_router(inventory.router)
api_router.include_router(orders.router)
api_router.include_router(conversations.router)
api_router.include_router(knowledge_base.router)
api_router.include_router(chat.router)
api_router.include_router(analytics.router)
api_router.include_router(documents.router)
