"""
Shared error handling utilities for the catalog API.

Services raise the exceptions defined here; API handlers turn them into
API Gateway responses with create_error_response / handle_exception.
"""

import json
import logging
import os
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))


class CatalogError(Exception):
    """Base class for errors raised by the catalog services."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(CatalogError):
    """Missing or malformed request input."""

    status_code = 400


class NotFoundError(CatalogError):
    """The referenced product does not exist."""

    status_code = 404


class UpstreamFailure(CatalogError):
    """A DynamoDB or S3 call failed. The upstream message is kept verbatim."""

    status_code = 500

    @classmethod
    def from_exception(cls, error: Exception) -> "UpstreamFailure":
        return cls(str(error))


def get_cors_headers() -> Dict[str, str]:
    """
    Get CORS headers with security headers.

    Any origin is allowed; the catalog has no authentication layer.
    """
    return {
        'Content-Type': 'application/json',
        'Access-Control-Allow-Origin': '*',
        'Access-Control-Allow-Methods': 'GET, POST, PUT, DELETE, OPTIONS',
        'Access-Control-Allow-Headers': 'Content-Type, X-Amz-Date, Authorization, X-Api-Key, X-Amz-Security-Token',
        # Security headers
        'X-Content-Type-Options': 'nosniff',
        'X-Frame-Options': 'DENY',
        'Referrer-Policy': 'strict-origin-when-cross-origin',
    }


def create_error_response(
    status_code: int,
    message: str,
    details: Optional[str] = None,
    log_error: Optional[Exception] = None
) -> Dict[str, Any]:
    """
    Create standardized error response.

    Args:
        status_code: HTTP status code
        message: User-facing error message, returned under "error"
        details: Optional upstream message, returned under "message"
        log_error: Optional exception to log server-side

    Returns:
        API Gateway response
    """
    if log_error is not None:
        logger.error(f"Error: {type(log_error).__name__}: {log_error}", exc_info=log_error)

    error_body = {'error': message}
    if details:
        error_body['message'] = details

    return {
        'statusCode': status_code,
        'headers': get_cors_headers(),
        'body': json.dumps(error_body)
    }


def handle_exception(e: Exception, context: str = "request") -> Dict[str, Any]:
    """
    Handle exception and return an error response.

    Catalog errors keep their own status code and message. Anything else is
    reported as a 500 carrying the exception text, matching UpstreamFailure.

    Args:
        e: Exception to handle
        context: Context where error occurred (for logging)

    Returns:
        API Gateway error response
    """
    if isinstance(e, (ValidationError, NotFoundError)):
        logger.warning(f"[{context}] {type(e).__name__}: {e.message}")
        return create_error_response(e.status_code, e.message)

    logger.error(f"[{context}] Failed: {type(e).__name__}: {e}")
    message = e.message if isinstance(e, CatalogError) else str(e)
    return create_error_response(500, message, log_error=e)
