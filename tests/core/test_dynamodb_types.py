from decimal import Decimal

from core.utils.dynamodb_types import from_dynamodb, to_dynamodb


class TestToDynamoDB:
    def test_nested_floats_become_decimal(self) -> None:
        value = {"rating": 4.5, "scores": [1.25, 2], "camera": {"aperture": 2.8}}

        assert to_dynamodb(value) == {
            "rating": Decimal("4.5"),
            "scores": [Decimal("1.25"), 2],
            "camera": {"aperture": Decimal("2.8")},
        }

    def test_other_values_untouched(self) -> None:
        assert to_dynamodb({"flag": True, "name": "x", "count": 3, "none": None}) == {
            "flag": True,
            "name": "x",
            "count": 3,
            "none": None,
        }


class TestFromDynamoDB:
    def test_integral_decimal_becomes_int(self) -> None:
        result = from_dynamodb({"size": Decimal("1024")})

        assert result == {"size": 1024}
        assert type(result["size"]) is int

    def test_fractional_decimal_becomes_float(self) -> None:
        assert from_dynamodb([{"rating": Decimal("4.5")}]) == [{"rating": 4.5}]
