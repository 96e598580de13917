"""
Image upload service: presigned S3 PUT URLs for product pictures.
"""

import os
import uuid
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from catalog_service.schemas.validation import PresignRequest
from shared.error_handling import UpstreamFailure
from shared.input_validation import get_file_extension
from shared.product_types import PresignedUpload, utc_now_iso

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))

LOG_PREFIX = "[UPLOAD-SERVICE]"

UPLOAD_PREFIX = "products"
DEFAULT_EXPIRES_IN = 900  # 15 minutes


class UploadService:
    """Signs direct-to-S3 uploads so clients never hold bucket credentials."""

    def __init__(self, s3_client: Any, bucket: str, expires_in: int = DEFAULT_EXPIRES_IN):
        self.s3 = s3_client
        self.bucket = bucket
        self.expires_in = expires_in

    def public_url(self, key: str) -> str:
        """Public read URL of an object in the bucket."""
        return f"https://{self.bucket}.s3.amazonaws.com/{key}"

    def build_key(self, file_name: str) -> str:
        """New object key under products/, keeping the original extension."""
        return f"{UPLOAD_PREFIX}/{uuid.uuid4()}.{get_file_extension(file_name)}"

    def generate_upload_url(self, request: PresignRequest) -> PresignedUpload:
        """
        Generate a presigned PUT URL for one image upload.

        Args:
            request: Validated presign request

        Returns:
            Upload descriptor for the client
        """
        key = self.build_key(request.file_name)
        unique_file_name = key.rsplit("/", 1)[-1]

        params = {
            "Bucket": self.bucket,
            "Key": key,
            "ContentType": request.file_type,
            # Traceability of the upload on the object itself
            "Metadata": {
                "original-name": request.file_name,
                "uploaded-at": utc_now_iso(),
            },
        }
        if request.content_length:
            params["ContentLength"] = request.content_length

        logger.info(f"{LOG_PREFIX} PRESIGN | Bucket: {self.bucket} | Key: {key}")
        try:
            presigned_url = self.s3.generate_presigned_url(
                ClientMethod="put_object",
                Params=params,
                ExpiresIn=self.expires_in,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{LOG_PREFIX} PRESIGN | Key: {key} | Error: {str(e)}")
            raise UpstreamFailure.from_exception(e) from e

        return {
            "presignedUrl": presigned_url,
            "key": key,
            "fileName": unique_file_name,
            "originalFileName": request.file_name,
            "fileType": request.file_type,
            "expiresIn": self.expires_in,
            "s3Url": self.public_url(key),
        }
