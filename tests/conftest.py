import copy
import json
from datetime import datetime, timedelta
from urllib.parse import urlparse

import boto3
import pytest
from botocore.config import Config
from botocore.exceptions import ClientError

from catalog_client.api_service import ApiService
from catalog_service.api.dependencies import CatalogServices
from catalog_service.api.handler import handler
from catalog_service.services.product_service import ProductRepository
from catalog_service.services.upload_service import UploadService

BUCKET = "test-product-images"


class FakeTable:
    """In-memory stand-in for the boto3 DynamoDB Table calls the repository makes."""

    def __init__(self, page_size=None):
        self.items = {}
        self.calls = []
        self.page_size = page_size

    @staticmethod
    def _key(key):
        return key["PK"], key["SK"]

    @property
    def writes(self):
        return [c for c in self.calls if c[0] in ("put_item", "update_item", "delete_item")]

    def put_item(self, Item):
        self.calls.append(("put_item", Item))
        self.items[self._key(Item)] = copy.deepcopy(Item)
        return {}

    def get_item(self, Key):
        self.calls.append(("get_item", Key))
        item = self.items.get(self._key(Key))
        return {"Item": copy.deepcopy(item)} if item else {}

    def update_item(self, Key, UpdateExpression, ExpressionAttributeNames, ExpressionAttributeValues, ReturnValues):
        self.calls.append(("update_item", Key))
        assert UpdateExpression.startswith("SET ")
        # Upsert, like DynamoDB without a condition expression
        item = self.items.setdefault(self._key(Key), dict(Key))
        for assignment in UpdateExpression[len("SET "):].split(", "):
            name, value = [part.strip() for part in assignment.split("=")]
            item[ExpressionAttributeNames[name]] = ExpressionAttributeValues[value]
        return {"Attributes": copy.deepcopy(item)}

    def delete_item(self, Key):
        self.calls.append(("delete_item", Key))
        self.items.pop(self._key(Key), None)
        return {}

    def query(self, KeyConditionExpression, ExclusiveStartKey=None):
        self.calls.append(("query", ExclusiveStartKey))
        expression = KeyConditionExpression.get_expression()
        attribute, value = expression["values"]
        matching = sorted(
            (item for item in self.items.values() if item.get(attribute.name) == value),
            key=lambda item: item["SK"],
        )
        if ExclusiveStartKey:
            matching = [item for item in matching if item["SK"] > ExclusiveStartKey["SK"]]

        if self.page_size and len(matching) > self.page_size:
            page = matching[:self.page_size]
            last = page[-1]
            return {
                "Items": copy.deepcopy(page),
                "LastEvaluatedKey": {"PK": last["PK"], "SK": last["SK"]},
            }
        return {"Items": copy.deepcopy(matching)}


class FailingTable:
    """Every call fails the way a throttled table does."""

    def __init__(self):
        self.calls = []

    def _fail(self, operation):
        self.calls.append(operation)
        raise ClientError(
            {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "Rate exceeded"}},
            operation,
        )

    def put_item(self, **kwargs):
        self._fail("PutItem")

    def get_item(self, **kwargs):
        self._fail("GetItem")

    def update_item(self, **kwargs):
        self._fail("UpdateItem")

    def delete_item(self, **kwargs):
        self._fail("DeleteItem")

    def query(self, **kwargs):
        self._fail("Query")


class FailingS3:
    def generate_presigned_url(self, **kwargs):
        raise ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Signing key unavailable"}},
            "PutObject",
        )


class FakeResponse:
    def __init__(self, status_code, body=""):
        self.status_code = status_code
        self.text = body

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        return json.loads(self.text)


class LambdaSession:
    """requests.Session stand-in that sends API calls straight to the Lambda handler."""

    def __init__(self, services, upload_status=200):
        self.services = services
        self.upload_status = upload_status
        self.uploads = []

    def request(self, method, url, json=None, headers=None, timeout=None):
        event = make_event(method, urlparse(url).path, body=json)
        response = handler(event, None, services=self.services)
        return FakeResponse(response["statusCode"], response["body"])

    def put(self, url, data=None, headers=None, timeout=None):
        self.uploads.append((url, data, headers))
        return FakeResponse(self.upload_status)


def make_event(method, path, body=None, path_params=None):
    """API Gateway HTTP API (v2) event."""
    event = {
        "rawPath": path,
        "requestContext": {"http": {"method": method}},
        "pathParameters": path_params,
        "headers": {"content-type": "application/json"},
    }
    if body is not None:
        event["body"] = body if isinstance(body, str) else json.dumps(body)
    return event


def body_of(response):
    return json.loads(response["body"])


@pytest.fixture
def table():
    return FakeTable()


@pytest.fixture
def s3_client(monkeypatch):
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_DEFAULT_PROFILE", raising=False)
    # Presigning is local; dummy credentials never leave the process
    return boto3.session.Session().client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        config=Config(signature_version="s3v4"),
    )


@pytest.fixture
def repository(table):
    return ProductRepository(table)


@pytest.fixture
def uploads(s3_client):
    return UploadService(s3_client, BUCKET)


@pytest.fixture
def services(repository, uploads):
    return CatalogServices(products=repository, uploads=uploads)


@pytest.fixture
def api(services):
    return ApiService(base_url="https://api.example.com/dev", session=LambdaSession(services))


@pytest.fixture
def clock(monkeypatch):
    """Deterministic, strictly increasing timestamps for product writes."""
    state = {"now": datetime(2024, 3, 1, 12, 0, 0)}

    def tick():
        state["now"] += timedelta(seconds=1)
        return state["now"].isoformat(timespec="microseconds") + "Z"

    monkeypatch.setattr("catalog_service.schemas.product_model.utc_now_iso", tick)
    monkeypatch.setattr("catalog_service.services.product_service.utc_now_iso", tick)
    return state
