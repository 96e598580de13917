"""
Shared input validation utilities.
"""

from typing import Any, Optional, Tuple
from urllib.parse import unquote


# Maximum lengths for various inputs
MAX_FILENAME_LENGTH = 255
MAX_STRING_LENGTH = 1000
MAX_DESCRIPTION_LENGTH = 5000

# Allowed image MIME types for product pictures
ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp")

# Maximum file size (10MB)
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024


def validate_string_input(value: Any, field_name: str, max_length: int = MAX_STRING_LENGTH, required: bool = False) -> Tuple[bool, Optional[str]]:
    """
    Generic string input validation.

    Args:
        value: String value to validate
        field_name: Name of the field (for error messages)
        max_length: Maximum allowed length
        required: Whether the field is required

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value is None or value == "":
        if required:
            return False, f"{field_name} is required"
        return True, None

    if not isinstance(value, str):
        return False, f"{field_name} must be a string"

    if required and not value.strip():
        return False, f"{field_name} is required"

    if len(value) > max_length:
        return False, f"{field_name} too long (max {max_length} characters)"

    # Check for null bytes
    if '\x00' in value:
        return False, f"{field_name} contains null bytes"

    return True, None


def validate_image_type(file_type: str) -> Tuple[bool, Optional[str]]:
    """
    Validate an image MIME type against the allow-list (case-insensitive).

    Args:
        file_type: MIME type reported by the client

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not file_type or not isinstance(file_type, str):
        return False, "File type is required"

    if file_type.strip().lower() not in ALLOWED_IMAGE_TYPES:
        return False, "Only image files are allowed (jpeg, jpg, png, gif, webp)"

    return True, None


def validate_file_size(file_size: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate file size.

    Args:
        file_size: File size in bytes

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(file_size, bool) or not isinstance(file_size, int):
        return False, "contentLength must be an integer"

    if file_size < 0:
        return False, "contentLength must not be negative"

    if file_size > MAX_FILE_SIZE_BYTES:
        return False, "File size must be less than 10MB"

    return True, None


def get_file_extension(filename: str) -> str:
    """
    Return the text after the last dot of a filename.

    A name without a dot is returned whole.
    """
    return filename.rsplit(".", 1)[-1]


def sanitize_path_parameter(param: Optional[str], param_name: str) -> Tuple[bool, Optional[str], Optional[str]]:
    """
    Sanitize path parameter to prevent path traversal.

    Args:
        param: Path parameter value
        param_name: Name of parameter (for error messages)

    Returns:
        Tuple of (is_valid, sanitized_value, error_message)
    """
    if not param:
        return False, None, f"{param_name} is required"

    decoded = unquote(param)

    # Check for path traversal
    if '..' in decoded or '/' in decoded or '\\' in decoded:
        return False, None, f"{param_name} contains invalid characters"

    # Check for null bytes
    if '\x00' in decoded:
        return False, None, f"{param_name} contains null bytes"

    return True, decoded, None
