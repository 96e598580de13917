"""
Two-step product image upload: presign through the API, then PUT to S3.
"""

import logging
import mimetypes
import os
from dataclasses import dataclass
from typing import Callable, Optional

from catalog_client.api_service import ApiError, ApiService
from shared.input_validation import ALLOWED_IMAGE_TYPES, MAX_FILE_SIZE_BYTES

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))


@dataclass
class ImageFile:
    """A picked file: name, MIME type and bytes."""

    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: str) -> "ImageFile":
        content_type, _ = mimetypes.guess_type(path)
        with open(path, "rb") as f:
            data = f.read()
        return cls(name=os.path.basename(path), content_type=content_type or "application/octet-stream", data=data)


class ImageUploader:
    """
    Upload widget state.

    on_uploaded receives the public image URL after a successful upload, or
    an empty string when the image is removed.
    """

    def __init__(
        self,
        api: ApiService,
        on_uploaded: Callable[[str], None],
        alert: Callable[[str], None],
        current_image: Optional[str] = None,
    ):
        self.api = api
        self.on_uploaded = on_uploaded
        self.alert = alert
        self.current_image = current_image or None
        self.preview = self.current_image
        self.is_uploading = False
        self.progress = 0

    def select(self, file: ImageFile) -> bool:
        """
        Validate and upload a picked file.

        Returns:
            True if the image was uploaded
        """
        if file.content_type not in ALLOWED_IMAGE_TYPES:
            self.alert("Please select a valid image file (JPEG, PNG, GIF, or WebP)")
            return False

        if file.size > MAX_FILE_SIZE_BYTES:
            self.alert("File size must be less than 10MB")
            return False

        self.is_uploading = True
        self.progress = 0
        self.preview = file.name
        try:
            descriptor = self.api.generate_presigned_url(file.name, file.content_type, file.size)
            self.api.upload_image(descriptor["presignedUrl"], file.data, file.content_type)
            self.progress = 100
            self.current_image = descriptor["s3Url"]
            self.preview = self.current_image
            self.on_uploaded(descriptor["s3Url"])
            return True
        except ApiError as e:
            logger.error(f"Upload failed: {e.message}")
            self.alert("Failed to upload image. Please try again.")
            self.preview = self.current_image
            return False
        finally:
            self.is_uploading = False
            self.progress = 0

    def remove(self) -> None:
        self.preview = None
        self.current_image = None
        self.on_uploaded("")
