"""Thin DynamoDB adapter wrapping boto3 table operations."""

from typing import Any, Protocol, cast

import boto3
from botocore.exceptions import ClientError

from core.models.config import StoreConfig
from core.utils.constants import RECORD_KEY


class DynamoDBTable(Protocol):
    """Minimal DynamoDB Table protocol."""

    def put_item(self, *, Item: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def get_item(self, *, Key: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def delete_item(self, *, Key: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def update_item(self, *, Key: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def scan(self, **kwargs: Any) -> dict[str, Any]: ...


class DynamoDBAdapterProtocol(Protocol):
    """Operations the record store needs from an adapter."""

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]: ...

    def get_item(
        self,
        *,
        key: dict[str, Any],
        projection: tuple[str, dict[str, str]] | None = None,
    ) -> dict[str, Any]: ...

    def delete_item(
        self,
        *,
        key: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]: ...

    def update_item(
        self,
        *,
        key: dict[str, Any],
        update_expression: str,
        condition_expression: str | None = None,
        attribute_names: dict[str, str] | None = None,
        attribute_values: dict[str, Any] | None = None,
    ) -> dict[str, Any]: ...

    def scan(self, **kwargs: Any) -> dict[str, Any]: ...


class DynamoDBAdapter:
    """Low-level DynamoDB operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 DynamoDB resource
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, config: StoreConfig | None = None) -> None:
        """Initialize DynamoDB table from configuration (environment by default)."""
        self.config = config or StoreConfig.from_env()

        self.resource = boto3.resource(
            "dynamodb",
            endpoint_url=self.config.endpoint_url,
            region_name=self.config.region_name,
        )

        self.table: DynamoDBTable = cast(
            DynamoDBTable,
            self.resource.Table(self.config.table_name),
        )

    def create_table(self) -> bool:
        """Create the records table unless it already exists.

        Returns:
            True if the table was created, False if it already existed
        """
        try:
            table = self.resource.create_table(
                TableName=self.config.table_name,
                BillingMode="PAY_PER_REQUEST",
                KeySchema=[{"AttributeName": RECORD_KEY, "KeyType": "HASH"}],
                AttributeDefinitions=[
                    {"AttributeName": RECORD_KEY, "AttributeType": "S"},
                ],
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ResourceInUseException":
                return False
            raise

        table.wait_until_exists()
        self.table = cast(DynamoDBTable, table)
        return True

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]:
        """Insert item into DynamoDB.

        Raises boto3 exceptions - caught by domain implementation.
        """
        kwargs: dict[str, Any] = {"Item": item}

        if condition_expression:
            kwargs["ConditionExpression"] = condition_expression

        return self.table.put_item(**kwargs)

    def get_item(
        self,
        *,
        key: dict[str, Any],
        projection: tuple[str, dict[str, str]] | None = None,
    ) -> dict[str, Any]:
        """Retrieve item by key, optionally projected.

        Raises boto3 exceptions - caught by domain implementation.
        """
        kwargs: dict[str, Any] = {"Key": key, "ConsistentRead": True}

        if projection:
            kwargs["ProjectionExpression"], kwargs["ExpressionAttributeNames"] = projection

        return self.table.get_item(**kwargs)

    def delete_item(
        self,
        *,
        key: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]:
        """Delete item by key.

        Raises boto3 exceptions - caught by domain implementation.
        """
        kwargs: dict[str, Any] = {"Key": key}

        if condition_expression:
            kwargs["ConditionExpression"] = condition_expression

        return self.table.delete_item(**kwargs)

    def update_item(
        self,
        *,
        key: dict[str, Any],
        update_expression: str,
        condition_expression: str | None = None,
        attribute_names: dict[str, str] | None = None,
        attribute_values: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Update an item in place.

        Raises boto3 exceptions - caught by domain implementation.
        """
        kwargs: dict[str, Any] = {"Key": key, "UpdateExpression": update_expression}

        if condition_expression:
            kwargs["ConditionExpression"] = condition_expression
        if attribute_names:
            kwargs["ExpressionAttributeNames"] = attribute_names
        if attribute_values:
            kwargs["ExpressionAttributeValues"] = attribute_values

        return self.table.update_item(**kwargs)

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        """Execute DynamoDB scan.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self.table.scan(**kwargs)
