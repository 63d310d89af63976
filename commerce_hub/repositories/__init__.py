"""
Data access layer. All tenant-owned data is read and written through these
repositories, each bound to one AsyncSession.
"""

from commerce_hub.repositories.conversation_repository import ConversationRepository
from commerce_hub.repositories.demand_repository import DemandRepository, normalize_query
from commerce_hub.repositories.document_repository import DocumentRepository
from commerce_hub.repositories.knowledge_repository import KnowledgeRepository
from commerce_hub.repositories.order_repository import OrderRepository
from commerce_hub.repositories.product_repository import InventoryRepository, ProductRepository
from commerce_hub.repositories.tenant_repository import TenantRepository

__all__ = [
    "ConversationRepository",
    "DemandRepository",
    "DocumentRepository",
    "InventoryRepository",
    "KnowledgeRepository",
    "OrderRepository",
    "ProductRepository",
    "TenantRepository",
    "normalize_query",
]
