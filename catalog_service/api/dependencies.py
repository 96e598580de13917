"""
Service wiring for the catalog API.

Handlers receive a CatalogServices instance instead of reaching for
module-level clients.
"""

from dataclasses import dataclass
from typing import Optional

from catalog_service.services.product_service import ProductRepository
from catalog_service.services.upload_service import UploadService
from shared.aws_clients import create_aws_clients
from shared.config import Settings, load_settings


@dataclass
class CatalogServices:
    products: ProductRepository
    uploads: UploadService


def build_services(settings: Optional[Settings] = None) -> CatalogServices:
    """Create AWS clients for this invocation and wrap them in services."""
    settings = settings or load_settings()
    clients = create_aws_clients(settings)

    return CatalogServices(
        products=ProductRepository(clients.table),
        uploads=UploadService(clients.s3, settings.bucket_name, settings.upload_expires_in),
    )
