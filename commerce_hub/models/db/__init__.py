"""
Database models package
"""

from .base import Base, TimestampMixin
from .conversation import Conversation
from .demand_tracking import DemandTracking
from .document import Document
from .inventory import Inventory
from .knowledge_base import KnowledgeBase
from .order import Order
from .product import Product
from .tenant import Tenant

__all__ = [
    "Base",
    "TimestampMixin",
    "Tenant",
    "Product",
    "Inventory",
    "KnowledgeBase",
    "Conversation",
    "Order",
    "DemandTracking",
    "Document",
]
