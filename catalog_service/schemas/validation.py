"""
Input validation for the product catalog API.

Each validator returns (request, error_message): a typed request when the
payload is acceptable, otherwise None and a message for the 400 response.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Tuple

from shared.input_validation import (
    MAX_DESCRIPTION_LENGTH,
    MAX_FILENAME_LENGTH,
    validate_file_size,
    validate_image_type,
    validate_string_input,
)


@dataclass(frozen=True)
class CreateProductRequest:
    name: str
    price: float
    description: str = ""
    image: str = ""


@dataclass(frozen=True)
class UpdateProductRequest:
    """Only the fields the client actually sent."""

    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PresignRequest:
    file_name: str
    file_type: str
    content_length: Optional[int] = None


def coerce_price(value: Any) -> Tuple[Optional[float], Optional[str]]:
    """Convert a number or numeric string to float."""
    if isinstance(value, bool) or value is None:
        return None, "price must be a number"
    try:
        price = float(value)
    except (ValueError, TypeError):
        return None, "price must be a number"
    if math.isnan(price) or math.isinf(price):
        return None, "price must be a number"
    return price, None


def _optional_text(data: Dict[str, Any], key: str, max_length: int) -> Tuple[str, Optional[str]]:
    value = data.get(key)
    if value is None:
        return "", None
    is_valid, error = validate_string_input(value, key, max_length=max_length)
    if not is_valid:
        return "", error
    return value, None


def validate_create_product(data: Any) -> Tuple[Optional[CreateProductRequest], Optional[str]]:
    """
    Validate create product request.

    Returns:
        (request, error_message)
    """
    if not isinstance(data, dict):
        return None, "Request body must be a JSON object"

    is_valid, error = validate_string_input(data.get("name"), "name", required=True)
    if not is_valid:
        return None, error

    if "price" not in data:
        return None, "price is required"
    price, error = coerce_price(data["price"])
    if error:
        return None, error
    if price <= 0:
        return None, "price must be greater than 0"

    description, error = _optional_text(data, "description", MAX_DESCRIPTION_LENGTH)
    if error:
        return None, error

    image, error = _optional_text(data, "image", MAX_DESCRIPTION_LENGTH)
    if error:
        return None, error

    return CreateProductRequest(
        name=data["name"],
        price=price,
        description=description,
        image=image,
    ), None


def validate_update_product(data: Any) -> Tuple[Optional[UpdateProductRequest], Optional[str]]:
    """
    Validate update product request.

    Fields absent from the body are left out of the result. An empty name is
    skipped; price is applied whenever the key is present, so 0 is allowed.

    Returns:
        (request, error_message)
    """
    if not isinstance(data, dict):
        return None, "Request body must be a JSON object"

    changes: Dict[str, Any] = {}

    if data.get("name"):
        is_valid, error = validate_string_input(data["name"], "name")
        if not is_valid:
            return None, error
        changes["name"] = data["name"]

    if "price" in data:
        price, error = coerce_price(data["price"])
        if error:
            return None, error
        if price < 0:
            return None, "price must not be negative"
        changes["price"] = price

    for key in ("description", "image"):
        if key in data:
            value, error = _optional_text(data, key, MAX_DESCRIPTION_LENGTH)
            if error:
                return None, error
            changes[key] = value

    return UpdateProductRequest(changes=changes), None


def validate_presign_request(data: Any) -> Tuple[Optional[PresignRequest], Optional[str]]:
    """
    Validate presigned upload URL request.

    Returns:
        (request, error_message)
    """
    if not isinstance(data, dict):
        return None, "Request body must be a JSON object"

    file_name = data.get("fileName")
    file_type = data.get("fileType")

    if not file_name or not file_type:
        return None, "fileName and fileType are required"

    is_valid, error = validate_string_input(file_name, "fileName", max_length=MAX_FILENAME_LENGTH)
    if not is_valid:
        return None, error

    is_valid, error = validate_image_type(file_type)
    if not is_valid:
        return None, error

    content_length = data.get("contentLength")
    if content_length is not None:
        is_valid, error = validate_file_size(content_length)
        if not is_valid:
            return None, error

    return PresignRequest(
        file_name=file_name,
        file_type=file_type,
        content_length=content_length,
    ), None
