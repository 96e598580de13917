"""
Client-side search and ordering of the product list.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List

from shared.product_types import parse_timestamp


class SortField(str, Enum):
    NAME = "name"
    PRICE = "price"
    CREATED_AT = "created_at"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def matches_search(product: Dict[str, Any], search_term: str) -> bool:
    """Case-insensitive substring match on name or description."""
    term = search_term.lower()
    if not term:
        return True
    name = (product.get("name") or "").lower()
    description = (product.get("description") or "").lower()
    return term in name or term in description


def sort_key(product: Dict[str, Any], sort_by: SortField) -> Any:
    if sort_by == SortField.PRICE:
        return float(product.get("price") or 0)
    if sort_by == SortField.CREATED_AT:
        return parse_timestamp(product.get("created_at"))
    return (product.get("name") or "").lower()


def filter_and_sort_products(
    products: Iterable[Dict[str, Any]],
    search_term: str = "",
    sort_by: SortField = SortField.CREATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
) -> List[Dict[str, Any]]:
    """
    Filter products by search term, then order them.

    Equal keys keep their input order in both directions.
    """
    sort_by = SortField(sort_by)
    sort_order = SortOrder(sort_order)

    filtered = [p for p in products if matches_search(p, search_term)]
    return sorted(
        filtered,
        key=lambda p: sort_key(p, sort_by),
        reverse=sort_order == SortOrder.DESC,
    )
