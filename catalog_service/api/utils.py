"""
Shared utility functions for the Product Catalog API.
"""

import os
import json
import logging
from typing import Dict, Any, Optional

from shared.error_handling import ValidationError, get_cors_headers

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))


def get_http_method(event: Dict[str, Any]) -> str:
    """HTTP method of an API Gateway event (HTTP API v2 or REST v1)."""
    http = (event.get('requestContext') or {}).get('http') or {}
    method = http.get('method') or event.get('httpMethod') or ''
    return method.upper()


def get_request_path(event: Dict[str, Any]) -> str:
    """Request path without trailing slash."""
    path = event.get('rawPath') or event.get('path') or ''
    return path.rstrip('/') or '/'


def get_path_parameter(event: Dict[str, Any], param_name: str) -> Optional[str]:
    """
    Extract path parameter from API Gateway event.

    Args:
        event: API Gateway event
        param_name: Parameter name

    Returns:
        Parameter value or None
    """
    path_params = event.get('pathParameters') or {}
    return path_params.get(param_name) or path_params.get(param_name.lower())


def get_request_body(event: Dict[str, Any], required: bool = True) -> Any:
    """
    Extract request body from API Gateway event.

    Args:
        event: API Gateway event
        required: Raise ValidationError when the body is absent

    Returns:
        Parsed request body (empty dict when optional and absent)
    """
    body = event.get('body')

    if body is None or body == '':
        if required:
            raise ValidationError("Request body is required")
        return {}

    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            raise ValidationError("Request body must be valid JSON")

    if body is None:
        if required:
            raise ValidationError("Request body is required")
        return {}

    return body


def create_response(
    status_code: int,
    body: Any,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Create standardized API Gateway response with CORS and security headers.

    Args:
        status_code: HTTP status code
        body: Response body
        headers: Optional additional headers

    Returns:
        API Gateway response
    """
    default_headers = get_cors_headers()

    if headers:
        default_headers.update(headers)

    return {
        'statusCode': status_code,
        'headers': default_headers,
        'body': json.dumps(body, default=str) if not isinstance(body, str) else body
    }


def handle_cors_preflight(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Handle CORS preflight OPTIONS request.

    Args:
        event: API Gateway event

    Returns:
        CORS response or None if not a preflight request
    """
    if get_http_method(event) == 'OPTIONS':
        return create_response(200, '')

    return None
