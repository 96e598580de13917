"""
HTTP client for the Product Catalog API.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import requests

from shared.config import load_settings
from shared.product_types import PresignedUpload

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))

DEFAULT_TIMEOUT = 30


class ApiError(Exception):
    """Any failed API call: non-2xx status or transport error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ApiService:
    """
    Thin wrapper over the catalog endpoints.

    Every non-2xx response becomes an ApiError carrying the server's "error"
    message when there is one. No retries.
    """

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = (base_url or load_settings().api_url).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, endpoint: str, payload: Any = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(
                method,
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"API request failed: {method} {url}: {e}")
            raise ApiError(str(e)) from e

        if not response.ok:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            message = None
            if isinstance(error_data, dict):
                message = error_data.get("error")
            message = message or f"HTTP error! status: {response.status_code}"
            logger.error(f"API request failed: {method} {url}: {message}")
            raise ApiError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ApiError("Invalid JSON in response", status_code=response.status_code) from e

    def get_products(self) -> Dict[str, List[Dict[str, Any]]]:
        return self._request("GET", "/products")

    def get_product(self, product_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/products/{product_id}")

    def create_product(self, product: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/products", product)

    def update_product(self, product_id: str, product: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/products/{product_id}", product)

    def delete_product(self, product_id: str) -> Dict[str, str]:
        return self._request("DELETE", f"/products/{product_id}")

    def generate_presigned_url(self, file_name: str, file_type: str, content_length: Optional[int] = None) -> PresignedUpload:
        """Ask the API for an upload descriptor."""
        payload: Dict[str, Any] = {"fileName": file_name, "fileType": file_type}
        if content_length is not None:
            payload["contentLength"] = content_length
        return self._request("POST", "/products/upload", payload)

    def upload_image(self, presigned_url: str, data: bytes, content_type: str) -> None:
        """PUT file bytes straight to S3 using a presigned URL."""
        try:
            response = self.session.put(
                presigned_url,
                data=data,
                headers={"Content-Type": content_type},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Image upload failed: {e}")
            raise ApiError(str(e)) from e

        if not response.ok:
            logger.error(f"Image upload failed with status {response.status_code}")
            raise ApiError(f"HTTP error! status: {response.status_code}", status_code=response.status_code)
