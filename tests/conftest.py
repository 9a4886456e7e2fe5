"""
Pytest configuration and fixtures for image records tests.
Provides AWS mocking, the DynamoDB records table and record stores.
"""

import os

os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SECURITY_TOKEN", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("IMAGE_RECORDS_TABLE_NAME", "test-image-records")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "ImageRecords")
os.environ.pop("AWS_ENDPOINT_URL", None)

from collections.abc import Callable  # noqa: E402
from types import SimpleNamespace  # noqa: E402
from typing import Any  # noqa: E402

import boto3  # noqa: E402
import pytest  # noqa: E402
from moto import mock_aws  # noqa: E402

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter  # noqa: E402
from core.infrastructure.aws.dynamodb_record_store import DynamoDBRecordStore  # noqa: E402
from core.infrastructure.memory.memory_record_store import InMemoryRecordStore  # noqa: E402
from core.models.image import Image  # noqa: E402


class FakeClock:
    """Settable clock handed to record stores in place of the wall clock."""

    def __init__(self, now: int = 1_700_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def dynamodb_adapter(aws_mock) -> DynamoDBAdapter:
    """Adapter bound to a freshly created records table."""
    adapter = DynamoDBAdapter()
    adapter.create_table()
    return adapter


@pytest.fixture(scope="function")
def dynamodb_table(dynamodb_adapter):
    return dynamodb_adapter.table


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def dynamodb_store(dynamodb_adapter, clock) -> DynamoDBRecordStore:
    return DynamoDBRecordStore(dynamodb_adapter, clock=clock)


@pytest.fixture
def memory_store(clock) -> InMemoryRecordStore:
    return InMemoryRecordStore(clock=clock)


@pytest.fixture(params=["memory", "dynamodb"])
def record_store(request):
    """Every store implementation, for contract tests."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def sample_image() -> Image:
    return Image(
        filename="sunset.jpg",
        size=102400,
        mime="image/jpeg",
        width=1024,
        height=768,
    )


@pytest.fixture
def make_image() -> Callable[[int], Image]:
    """Factory for distinct sample images."""

    def _make(index: int) -> Image:
        return Image(
            filename=f"image_{index:02d}.png",
            size=1000 + index,
            mime="image/png",
            width=100 + index,
            height=200 + index,
        )

    return _make


@pytest.fixture
def insert_images(make_image, clock) -> Callable[..., list[str]]:
    """
    Insert `count` images into a store, one second apart.

    Usage:
        identifiers = insert_images(store, 25)

    Returns identifiers ordered oldest first.
    """

    def _insert(store: Any, count: int, *, start: int = 1_000) -> list[str]:
        identifiers: list[str] = []
        for index in range(count):
            clock.now = start + index
            image_identifier = f"img_{index:02d}"
            store.insert_image(image_identifier=image_identifier, image=make_image(index))
            identifiers.append(image_identifier)
        return identifiers

    return _insert


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )
