"""
Main API handler - routes requests to appropriate endpoint handlers.
"""

import os
import logging
from typing import Dict, Any, Optional

from catalog_service.api.dependencies import CatalogServices, build_services
from catalog_service.api.utils import (
    create_response,
    get_http_method,
    get_request_path,
    handle_cors_preflight,
)
from catalog_service.api.products import (
    handle_create_product,
    handle_get_products,
    handle_get_product,
    handle_update_product,
    handle_delete_product
)
from catalog_service.api.uploads import handle_generate_presigned_url
from shared.logging_config import configure_logging

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))

RESOURCE = '/products'


def _resource_path(path: str) -> str:
    """Strip any stage prefix such as /dev from the request path."""
    index = path.find(RESOURCE)
    return path[index:] if index >= 0 else path


def _with_product_id(event: Dict[str, Any], product_id: str) -> Dict[str, Any]:
    """Fill pathParameters.id when the route was matched by a proxy integration."""
    path_params = dict(event.get('pathParameters') or {})
    path_params.setdefault('id', product_id)
    return {**event, 'pathParameters': path_params}


def route(event: Dict[str, Any], services: CatalogServices) -> Dict[str, Any]:
    """
    Dispatch one API Gateway event to its endpoint handler.

    Args:
        event: API Gateway event
        services: Product repository and upload service for this request

    Returns:
        API Gateway response
    """
    # Handle CORS preflight
    cors_response = handle_cors_preflight(event)
    if cors_response:
        return cors_response

    path = _resource_path(get_request_path(event))
    method = get_http_method(event)

    if path == RESOURCE and method == 'POST':
        return handle_create_product(event, services)

    elif path == RESOURCE and method == 'GET':
        return handle_get_products(event, services)

    elif path == f'{RESOURCE}/upload' and method == 'POST':
        return handle_generate_presigned_url(event, services)

    elif path.startswith(f'{RESOURCE}/') and path.count('/') == 2:
        product_event = _with_product_id(event, path.rsplit('/', 1)[-1])

        if method == 'GET':
            return handle_get_product(product_event, services)
        elif method == 'PUT':
            return handle_update_product(product_event, services)
        elif method == 'DELETE':
            return handle_delete_product(product_event, services)

    return create_response(404, {
        'error': 'Not found',
        'message': 'Invalid endpoint or method',
        'path': path,
        'method': method
    })


def handler(event: Dict[str, Any], context: Any, services: Optional[CatalogServices] = None) -> Dict[str, Any]:
    """
    Main Lambda handler for the Product Catalog API.

    AWS clients are built per invocation unless services are passed in.

    Args:
        event: API Gateway event
        context: Lambda context
        services: Optional pre-built services (tests, local runs)

    Returns:
        API Gateway response
    """
    logger.info(f"Request: {get_http_method(event)} {event.get('rawPath') or event.get('path')}")

    if services is None and get_http_method(event) != 'OPTIONS':
        services = build_services()

    return route(event, services)
