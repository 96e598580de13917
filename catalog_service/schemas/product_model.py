"""
Data model for catalog products.
"""

import uuid
from typing import Dict, Any, Optional

from shared.product_types import PRODUCT_PARTITION, utc_now_iso


def product_key(product_id: str) -> Dict[str, str]:
    """DynamoDB primary key for a product."""
    return {'PK': PRODUCT_PARTITION, 'SK': product_id}


def create_product(
    name: str,
    price: float,
    description: Optional[str] = None,
    image: Optional[str] = None,
    product_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Create a product dictionary.

    Args:
        name: Product name
        price: Product price
        description: Product description (defaults to empty)
        image: Public image URL (defaults to empty)
        product_id: Product ID (auto-generated if not provided)

    Returns:
        Product dictionary ready to be stored
    """
    now = utc_now_iso()
    product_id = product_id or str(uuid.uuid4())

    return {
        "id": product_id,
        "name": name,
        "price": float(price),
        "description": description or "",
        "image": image or "",
        "created_at": now,
        "updated_at": now,
        "PK": PRODUCT_PARTITION,
        "SK": product_id,
    }
