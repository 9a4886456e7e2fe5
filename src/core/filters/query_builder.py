"""
Translation of listing queries into store queries.

`QueryBuilder.build` turns a `Query` into a backend-neutral `StoreQuery`
(filter, projection, ordering and page window). The DynamoDB helpers render
a `StoreQuery` into the native scan parameters.
"""

from typing import Any

from boto3.dynamodb.conditions import Attr, ConditionBase
from pydantic import BaseModel, ConfigDict, Field

from core.filters.offset_pagination import OffsetPagination
from core.models.errors import FilterError
from core.models.query import Query
from core.utils.constants import (
    CORE_LISTING_FIELDS,
    DEFAULT_OFFSET,
    METADATA_FIELD,
    MIN_LIMIT,
    SORT_FIELD,
)
from core.utils.dynamodb_types import to_dynamodb


class StoreQuery(BaseModel):
    """Backend-neutral description of one search against the store."""

    model_config = ConfigDict(frozen=True)

    added_after: int | None = Field(None, description="Exclusive lower bound on `added`")
    added_before: int | None = Field(None, description="Exclusive upper bound on `added`")
    metadata_query: dict[str, Any] = Field(default_factory=dict)
    fields: tuple[str, ...] = CORE_LISTING_FIELDS
    sort_field: str = SORT_FIELD
    descending: bool = True
    offset: int = Field(DEFAULT_OFFSET, ge=0)
    limit: int = Field(..., ge=MIN_LIMIT)


class QueryBuilder:
    """Deterministic, side-effect free query translation."""

    @staticmethod
    def build(query: Query) -> StoreQuery:
        """
        Translate a listing query.

        Rules:
        - `from_time` / `to_time` become strict bounds on the creation time
        - a non-empty metadata query is forwarded unchanged
        - core fields are always projected, metadata only on request
        - results are ordered by creation time, most recent first
        - page N skips `limit * (N - 1)` records

        Raises:
            FilterError: If a metadata query key is not a usable path
        """
        metadata_query = dict(query.metadata_query or {})

        for key in metadata_query:
            QueryBuilder.validate_metadata_key(key)

        fields = CORE_LISTING_FIELDS
        if query.return_metadata:
            fields = (*CORE_LISTING_FIELDS, METADATA_FIELD)

        return StoreQuery(
            added_after=query.from_time,
            added_before=query.to_time,
            metadata_query=metadata_query,
            fields=fields,
            offset=OffsetPagination.offset_for_page(query.page, query.limit),
            limit=query.limit,
        )

    @staticmethod
    def validate_metadata_key(key: str) -> None:
        """
        Check that a key names a metadata path both stores resolve alike.

        Keys are dot-separated segments. Blank segments and list indexing
        (`[` or `]`) are rejected.

        Raises:
            FilterError: If the key is not a usable path
        """
        segments = key.split(".")

        if any(not segment.strip() for segment in segments):
            raise FilterError(
                message="Metadata query keys must not be blank or have empty path segments",
                details={"key": key},
            )

        if "[" in key or "]" in key:
            raise FilterError(
                message="Metadata query keys must not index into lists",
                details={"key": key},
            )

    @staticmethod
    def dynamodb_filter(store_query: StoreQuery) -> ConditionBase | None:
        """Render the filter part as a boto3 condition, or None when unfiltered."""
        conditions: list[ConditionBase] = []

        if store_query.added_after is not None:
            conditions.append(Attr(store_query.sort_field).gt(store_query.added_after))

        if store_query.added_before is not None:
            conditions.append(Attr(store_query.sort_field).lt(store_query.added_before))

        # Dotted keys address nested metadata values
        for key, value in store_query.metadata_query.items():
            conditions.append(Attr(f"{METADATA_FIELD}.{key}").eq(to_dynamodb(value)))

        combined: ConditionBase | None = None
        for condition in conditions:
            combined = condition if combined is None else combined & condition

        return combined

    @staticmethod
    def dynamodb_projection(store_query: StoreQuery) -> tuple[str, dict[str, str]]:
        """
        Render the projection as an expression plus attribute name placeholders.

        Placeholders are required since `size` and friends are DynamoDB
        reserved words.
        """
        names = {f"#p{index}": field for index, field in enumerate(store_query.fields)}
        return ", ".join(names), names
