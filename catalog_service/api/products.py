"""
Product CRUD endpoint handlers.
"""

import os
import logging
from typing import Dict, Any

from catalog_service.api.dependencies import CatalogServices
from catalog_service.api.utils import get_path_parameter, get_request_body, create_response
from catalog_service.schemas.validation import validate_create_product, validate_update_product
from shared.error_handling import ValidationError, create_error_response, handle_exception
from shared.input_validation import sanitize_path_parameter

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))


def _product_id(event: Dict[str, Any]) -> str:
    is_valid, product_id, error = sanitize_path_parameter(get_path_parameter(event, 'id'), 'Product ID')
    if not is_valid:
        raise ValidationError(error)
    return product_id


def handle_create_product(event: Dict[str, Any], services: CatalogServices) -> Dict[str, Any]:
    """
    Handle POST /products - Create product.
    """
    logger.info("[CREATE-PRODUCT] Handling create product request")
    try:
        body = get_request_body(event)

        # Validate request
        request, error = validate_create_product(body)
        if error:
            return create_error_response(400, error)

        product = services.products.create(request)
        logger.info(f"[CREATE-PRODUCT] Created product {product['name']}, ID: {product['id'][:8]}")
        return create_response(201, product)

    except Exception as e:
        return handle_exception(e, "CREATE-PRODUCT")


def handle_get_products(event: Dict[str, Any], services: CatalogServices) -> Dict[str, Any]:
    """
    Handle GET /products - List every product.
    """
    logger.info("[GET-PRODUCTS] Handling list products request")
    try:
        products = services.products.list_all()
        logger.info(f"[GET-PRODUCTS] Listed {len(products)} products")

        return create_response(200, {
            'products': products,
            'count': len(products)
        })

    except Exception as e:
        return handle_exception(e, "GET-PRODUCTS")


def handle_get_product(event: Dict[str, Any], services: CatalogServices) -> Dict[str, Any]:
    """
    Handle GET /products/{id} - Get product.
    """
    logger.info("[GET-PRODUCT] Handling get single product request")
    try:
        product_id = _product_id(event)
        logger.info(f"[GET-PRODUCT] Product ID: {product_id}")

        product = services.products.require(product_id)
        return create_response(200, product)

    except Exception as e:
        return handle_exception(e, "GET-PRODUCT")


def handle_update_product(event: Dict[str, Any], services: CatalogServices) -> Dict[str, Any]:
    """
    Handle PUT /products/{id} - Partial update of a product.
    """
    logger.info("[UPDATE-PRODUCT] Handling update product request")
    try:
        product_id = _product_id(event)
        logger.info(f"[UPDATE-PRODUCT] Product ID: {product_id}")

        body = get_request_body(event)

        # Validate request
        request, error = validate_update_product(body)
        if error:
            return create_error_response(400, error)

        product = services.products.update(product_id, request)
        return create_response(200, product)

    except Exception as e:
        return handle_exception(e, "UPDATE-PRODUCT")


def handle_delete_product(event: Dict[str, Any], services: CatalogServices) -> Dict[str, Any]:
    """
    Handle DELETE /products/{id} - Delete product.
    """
    logger.info("[DELETE-PRODUCT] Handling delete product request")
    try:
        product_id = _product_id(event)
        logger.info(f"[DELETE-PRODUCT] Product ID: {product_id}")

        services.products.delete(product_id)
        return create_response(200, {'message': 'Product deleted successfully'})

    except Exception as e:
        return handle_exception(e, "DELETE-PRODUCT")
