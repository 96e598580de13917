"""
Product business logic service.
"""

import os
import logging
from typing import Dict, Any, List, Optional

from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from catalog_service.schemas.product_model import create_product, product_key
from catalog_service.schemas.validation import CreateProductRequest, UpdateProductRequest
from shared.error_handling import NotFoundError, UpstreamFailure
from shared.product_types import PRODUCT_PARTITION, utc_now_iso
from shared.serialization import convert_decimals_to_native, convert_floats_to_decimal

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))

# Configure log format
LOG_PREFIX = "[PRODUCT-SERVICE]"

AWS_ERRORS = (ClientError, BotoCoreError)


class ProductRepository:
    """
    Product CRUD against a DynamoDB table.

    Every product lives under the fixed partition PRODUCT with its id as the
    sort key. The table handle is injected by the caller.
    """

    def __init__(self, table: Any):
        self.table = table

    def create(self, request: CreateProductRequest) -> Dict[str, Any]:
        """
        Create a new product.

        Args:
            request: Validated create request

        Returns:
            Created product
        """
        product = create_product(
            name=request.name,
            price=request.price,
            description=request.description,
            image=request.image,
        )

        item = convert_floats_to_decimal(product)
        try:
            self.table.put_item(Item=item)
        except AWS_ERRORS as e:
            logger.error(f"{LOG_PREFIX} CREATE | Name: {request.name} | Error: {str(e)}")
            raise UpstreamFailure.from_exception(e) from e

        logger.info(f"{LOG_PREFIX} CREATE | ID: {product['id'][:8]}... | Name: {product['name']}")
        # Same number representation as a later read of the item
        return convert_decimals_to_native(item)

    def get(self, product_id: str) -> Optional[Dict[str, Any]]:
        """
        Get product by ID.

        Args:
            product_id: Product ID

        Returns:
            Product or None if not found
        """
        try:
            response = self.table.get_item(Key=product_key(product_id))
        except AWS_ERRORS as e:
            logger.error(f"{LOG_PREFIX} GET | ID: {product_id[:8]}... | Error: {str(e)}")
            raise UpstreamFailure.from_exception(e) from e

        item = response.get('Item')
        if item:
            logger.debug(f"{LOG_PREFIX} GET | ID: {product_id[:8]}... | Found")
            return convert_decimals_to_native(item)

        logger.warning(f"{LOG_PREFIX} GET | ID: {product_id[:8]}... | Not found")
        return None

    def list_all(self) -> List[Dict[str, Any]]:
        """
        List every product in the catalog.

        Follows LastEvaluatedKey until the partition is exhausted. Order is
        whatever DynamoDB returns.

        Returns:
            List of products
        """
        products: List[Dict[str, Any]] = []
        query_kwargs: Dict[str, Any] = {
            'KeyConditionExpression': Key('PK').eq(PRODUCT_PARTITION),
        }

        try:
            while True:
                response = self.table.query(**query_kwargs)
                products.extend(response.get('Items', []))
                last_key = response.get('LastEvaluatedKey')
                if not last_key:
                    break
                query_kwargs['ExclusiveStartKey'] = last_key
        except AWS_ERRORS as e:
            logger.error(f"{LOG_PREFIX} LIST | Error: {str(e)}")
            raise UpstreamFailure.from_exception(e) from e

        logger.info(f"{LOG_PREFIX} LIST | Count: {len(products)}")
        return convert_decimals_to_native(products)

    def require(self, product_id: str) -> Dict[str, Any]:
        """Get a product or raise NotFoundError."""
        product = self.get(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def update(self, product_id: str, request: UpdateProductRequest) -> Dict[str, Any]:
        """
        Apply a partial update to a product.

        updated_at is refreshed even when no other field changes.

        Args:
            product_id: Product ID
            request: Validated update request

        Returns:
            Updated product
        """
        self.require(product_id)

        # Build update expression
        update_expr_parts = ["#updated_at = :updated_at"]
        expr_attr_names = {"#updated_at": "updated_at"}
        expr_attr_values: Dict[str, Any] = {":updated_at": utc_now_iso()}

        for field, value in request.changes.items():
            update_expr_parts.append(f"#{field} = :{field}")
            expr_attr_names[f"#{field}"] = field
            expr_attr_values[f":{field}"] = value

        try:
            response = self.table.update_item(
                Key=product_key(product_id),
                UpdateExpression=f"SET {', '.join(update_expr_parts)}",
                ExpressionAttributeNames=expr_attr_names,
                ExpressionAttributeValues=convert_floats_to_decimal(expr_attr_values),
                ReturnValues='ALL_NEW'
            )
        except AWS_ERRORS as e:
            logger.error(f"{LOG_PREFIX} UPDATE | ID: {product_id[:8]}... | Error: {str(e)}")
            raise UpstreamFailure.from_exception(e) from e

        updated_fields = list(request.changes.keys())
        logger.info(f"{LOG_PREFIX} UPDATE | ID: {product_id[:8]}... | Fields: {', '.join(updated_fields) or 'none'}")
        return convert_decimals_to_native(response.get('Attributes', {}))

    def delete(self, product_id: str) -> None:
        """
        Delete a product.

        The product image in S3 is left in place.

        Args:
            product_id: Product ID
        """
        self.require(product_id)

        try:
            self.table.delete_item(Key=product_key(product_id))
        except AWS_ERRORS as e:
            logger.error(f"{LOG_PREFIX} DELETE | ID: {product_id[:8]}... | Error: {str(e)}")
            raise UpstreamFailure.from_exception(e) from e

        logger.info(f"{LOG_PREFIX} DELETE | ID: {product_id[:8]}...")
