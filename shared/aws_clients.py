"""
AWS client construction.

Clients are built explicitly from Settings and passed to the services that
use them, so tests can hand in fakes instead.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any

import boto3
from botocore.config import Config

from shared.config import Settings

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))


@dataclass
class AwsClients:
    """DynamoDB table resource and S3 client for one invocation."""

    table: Any
    s3: Any


def create_session(settings: Settings) -> boto3.Session:
    """Create a boto3 session, using a named profile only outside Lambda."""
    if settings.aws_profile and not settings.is_lambda:
        # Use AWS profile (for local development only)
        logger.info(f"Using AWS profile: {settings.aws_profile} in region: {settings.region}")
        return boto3.Session(profile_name=settings.aws_profile, region_name=settings.region)

    # Use default AWS credentials (IAM role in Lambda, or env vars/credentials file locally)
    logger.debug(f"Using default AWS credentials in region: {settings.region}")
    return boto3.Session(region_name=settings.region)


def create_aws_clients(settings: Settings) -> AwsClients:
    """
    Create the DynamoDB table handle and S3 client described by settings.

    Args:
        settings: Runtime configuration

    Returns:
        AwsClients holding the product table and the S3 client
    """
    session = create_session(settings)

    if settings.dynamodb_endpoint:
        # Use DynamoDB Local
        logger.info(f"Using DynamoDB Local endpoint: {settings.dynamodb_endpoint}")
        dynamodb = session.resource("dynamodb", endpoint_url=settings.dynamodb_endpoint)
    else:
        dynamodb = session.resource("dynamodb")

    # SigV4 is required for presigned PUT URLs with metadata
    s3 = session.client("s3", config=Config(signature_version="s3v4"))

    return AwsClients(table=dynamodb.Table(settings.table_name), s3=s3)
