"""Conversion between plain Python values and DynamoDB resource values.

The boto3 resource layer rejects floats and hands numbers back as Decimal.
"""

from decimal import Decimal
from typing import Any


def to_dynamodb(value: Any) -> Any:
    """Convert floats (also nested ones) into Decimal."""
    if isinstance(value, bool):
        return value

    if isinstance(value, float):
        return Decimal(str(value))

    if isinstance(value, dict):
        return {key: to_dynamodb(item) for key, item in value.items()}

    if isinstance(value, (list, tuple)):
        return [to_dynamodb(item) for item in value]

    return value


def from_dynamodb(value: Any) -> Any:
    """Convert Decimal (also nested ones) back into int or float."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)

    if isinstance(value, dict):
        return {key: from_dynamodb(item) for key, item in value.items()}

    if isinstance(value, list):
        return [from_dynamodb(item) for item in value]

    return value
