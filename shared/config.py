"""
Environment-driven configuration shared by the catalog service and client.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read from the environment once per invocation."""

    table_name: str = "products"
    bucket_name: str = "product-images"
    region: str = "us-east-1"
    dynamodb_endpoint: Optional[str] = None
    aws_profile: Optional[str] = None
    is_lambda: bool = False
    upload_expires_in: int = 900
    api_url: str = "http://localhost:3000/dev"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Settings instance
    """
    env = os.environ if environ is None else environ

    return Settings(
        table_name=env.get("DYNAMODB_TABLE", "products"),
        bucket_name=env.get("S3_BUCKET", "product-images"),
        region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION", "us-east-1"),
        dynamodb_endpoint=env.get("DYNAMODB_ENDPOINT") or None,
        aws_profile=env.get("AWS_PROFILE") or env.get("AWS_DEFAULT_PROFILE") or None,
        is_lambda=bool(env.get("LAMBDA_TASK_ROOT")),
        upload_expires_in=int(env.get("UPLOAD_URL_EXPIRES_IN", "900")),
        api_url=env.get("CATALOG_API_URL", "http://localhost:3000/dev").rstrip("/"),
    )
