"""
Image upload endpoint handler.
"""

import os
import logging
from typing import Dict, Any

from catalog_service.api.dependencies import CatalogServices
from catalog_service.api.utils import get_request_body, create_response
from catalog_service.schemas.validation import validate_presign_request
from shared.error_handling import ValidationError, create_error_response

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))


def handle_generate_presigned_url(event: Dict[str, Any], services: CatalogServices) -> Dict[str, Any]:
    """
    Handle POST /products/upload - Presigned S3 URL for a product image.

    Request body:
    - fileName: original file name (extension is kept)
    - fileType: image MIME type
    - contentLength: optional size in bytes (max 10MB)
    """
    logger.info("[PRESIGN-UPLOAD] Handling presigned URL request")
    try:
        body = get_request_body(event, required=False)

        request, error = validate_presign_request(body)
        if error:
            logger.warning(f"[PRESIGN-UPLOAD] Rejected: {error}")
            return create_error_response(400, error)

        descriptor = services.uploads.generate_upload_url(request)
        logger.info(f"[PRESIGN-UPLOAD] Issued upload URL for key: {descriptor['key']}")
        return create_response(200, descriptor)

    except ValidationError as e:
        return create_error_response(400, e.message)
    except Exception as e:
        return create_error_response(
            500,
            "Failed to generate presigned URL",
            details=str(e),
            log_error=e
        )
