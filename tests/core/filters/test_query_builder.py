"""
Unit tests for QueryBuilder
"""

from decimal import Decimal

import pytest
from boto3.dynamodb.conditions import ConditionExpressionBuilder
from pydantic import ValidationError

from core.filters.query_builder import QueryBuilder, StoreQuery
from core.models.errors import FilterError
from core.models.query import Query
from core.utils.constants import CORE_LISTING_FIELDS


def render(condition) -> tuple[str, dict, dict]:
    built = ConditionExpressionBuilder().build_expression(condition)
    return (
        built.condition_expression,
        built.attribute_name_placeholders,
        built.attribute_value_placeholders,
    )


class TestBuild:
    def test_defaults(self) -> None:
        store_query = QueryBuilder.build(Query())

        assert store_query.added_after is None
        assert store_query.added_before is None
        assert store_query.metadata_query == {}
        assert store_query.fields == CORE_LISTING_FIELDS
        assert store_query.sort_field == "added"
        assert store_query.descending is True
        assert store_query.offset == 0
        assert store_query.limit == 20

    def test_time_range_is_forwarded(self) -> None:
        store_query = QueryBuilder.build(Query(from_time=100, to_time=200))

        assert store_query.added_after == 100
        assert store_query.added_before == 200

    def test_metadata_projected_only_on_request(self) -> None:
        without = QueryBuilder.build(Query())
        with_metadata = QueryBuilder.build(Query(return_metadata=True))

        assert "metadata" not in without.fields
        assert with_metadata.fields == (*CORE_LISTING_FIELDS, "metadata")

    def test_internal_key_never_projected(self) -> None:
        store_query = QueryBuilder.build(Query(return_metadata=True))

        assert "_id" not in store_query.fields

    @pytest.mark.parametrize(
        ("page", "limit", "offset"),
        [(1, 10, 0), (2, 10, 10), (3, 10, 20), (4, 25, 75)],
    )
    def test_page_offset(self, page: int, limit: int, offset: int) -> None:
        store_query = QueryBuilder.build(Query(page=page, limit=limit))

        assert store_query.offset == offset
        assert store_query.limit == limit

    def test_metadata_query_forwarded_unchanged(self) -> None:
        metadata_query = {"color": "red", "camera": {"make": "Nikon"}}

        store_query = QueryBuilder.build(Query(metadata_query=metadata_query))

        assert store_query.metadata_query == metadata_query

    @pytest.mark.parametrize("key", [" ", "", "a..b", "a.", ".a", "a. .b", "tags[0]", "x]y"])
    def test_unusable_metadata_key_rejected(self, key: str) -> None:
        with pytest.raises(FilterError) as exc_info:
            QueryBuilder.build(Query(metadata_query={key: "x"}))

        assert exc_info.value.details == {"key": key}

    @pytest.mark.parametrize("key", ["color", "camera.make", "with space", "a-b_c"])
    def test_usable_metadata_key_accepted(self, key: str) -> None:
        assert QueryBuilder.build(Query(metadata_query={key: "x"})).metadata_query == {key: "x"}


class TestStoreQuery:
    @pytest.mark.parametrize(("offset", "limit"), [(0, 0), (-1, 10)])
    def test_page_window_bounds_enforced(self, offset: int, limit: int) -> None:
        with pytest.raises(ValidationError):
            StoreQuery(offset=offset, limit=limit)


class TestDynamoDBFilter:
    def test_no_filter(self) -> None:
        assert QueryBuilder.dynamodb_filter(QueryBuilder.build(Query())) is None

    def test_from_only(self) -> None:
        expression, names, values = render(
            QueryBuilder.dynamodb_filter(QueryBuilder.build(Query(from_time=100)))
        )

        assert expression == "#n0 > :v0"
        assert names == {"#n0": "added"}
        assert values == {":v0": 100}

    def test_to_only(self) -> None:
        expression, names, values = render(
            QueryBuilder.dynamodb_filter(QueryBuilder.build(Query(to_time=200)))
        )

        assert expression == "#n0 < :v0"
        assert values == {":v0": 200}

    def test_range_and_metadata_are_conjoined(self) -> None:
        store_query = QueryBuilder.build(
            Query(from_time=100, to_time=200, metadata_query={"color": "red"})
        )

        expression, names, values = render(QueryBuilder.dynamodb_filter(store_query))

        assert expression.count(" AND ") == 2
        assert set(names.values()) == {"added", "metadata", "color"}
        assert set(values.values()) == {100, 200, "red"}

    def test_float_values_become_decimal(self) -> None:
        store_query = QueryBuilder.build(Query(metadata_query={"rating": 4.5}))

        _, _, values = render(QueryBuilder.dynamodb_filter(store_query))

        assert list(values.values()) == [Decimal("4.5")]


class TestDynamoDBProjection:
    def test_projection_uses_placeholders(self) -> None:
        expression, names = QueryBuilder.dynamodb_projection(QueryBuilder.build(Query()))

        assert expression == ", ".join(f"#p{i}" for i in range(len(CORE_LISTING_FIELDS)))
        assert list(names.values()) == list(CORE_LISTING_FIELDS)
