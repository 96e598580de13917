"""
Shared product type helpers used by the service and the client.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional, TypedDict

logger = logging.getLogger(__name__)

PRODUCT_PARTITION = "PRODUCT"

# fromisoformat before 3.11 only takes 3 or 6 fractional digits
_FRACTION = re.compile(r"\.(\d+)")


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with microseconds and a Z suffix."""
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat(timespec="microseconds") + "Z"


def parse_timestamp(value: Optional[str]) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are taken as UTC. Fractional seconds of any precision are
    padded or truncated to microseconds. Missing or unparseable values sort
    first.
    """
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Unparseable timestamp {value!r}, treating it as the earliest time")
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class PresignedUpload(TypedDict):
    """Upload descriptor returned by POST /products/upload."""

    presignedUrl: str
    key: str
    fileName: str
    originalFileName: str
    fileType: str
    expiresIn: int
    s3Url: str
