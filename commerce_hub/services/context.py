"""
Serialization of catalog rows into the compact JSON the assistant prompts embed.
"""

import json
from typing import Any, Iterable

from commerce_hub.models.db import DemandTracking, KnowledgeBase, Product


def product_to_context(product: Product) -> dict[str, Any]:
    return {
        "id": str(product.id),
        "sku": product.sku,
        "name": product.name,
        "description": product.description,
        "price": str(product.price),
        "category": product.category,
        "tags": product.tags or [],
        "specifications": product.specifications or {},
    }


def knowledge_to_context(entry: KnowledgeBase) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "title": entry.title,
        "content": entry.content,
        "category": entry.category,
        "tags": entry.tags or [],
    }


def demand_to_context(record: DemandTracking) -> dict[str, Any]:
    return {
        "query": record.query,
        "category": record.category,
        "searchCount": record.search_count,
        "noResultsCount": record.no_results_count,
        "potentialRevenue": str(record.potential_revenue),
        "lastSearched": record.last_searched.isoformat() if record.last_searched else None,
    }


def to_json(rows: Iterable[dict[str, Any]], indent: int | None = None) -> str:
    return json.dumps(list(rows), ensure_ascii=False, indent=indent, default=str)
