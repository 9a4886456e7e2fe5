"""Unit tests for request validation utilities."""

from core.utils.validators import sanitize_validation_errors


class TestSanitizeValidationErrors:
    """Tests for sanitize_validation_errors."""

    def test_sanitizes_integer_error(self) -> None:
        errors = [
            {
                "loc": ("limit",),
                "msg": "Input should be a valid integer, unable to parse string as an integer",
                "input": "abc",
                "url": "https://errors.pydantic.dev",
            }
        ]

        assert sanitize_validation_errors(errors) == [
            {"field": "limit", "message": "Must be a whole number"}
        ]

    def test_sanitizes_lower_bound(self) -> None:
        errors = [{"loc": ("page",), "msg": "Input should be greater than or equal to 1"}]

        assert sanitize_validation_errors(errors) == [
            {"field": "page", "message": "Must be a positive number"}
        ]

    def test_defaults_field_to_query(self) -> None:
        result = sanitize_validation_errors([{"msg": "Invalid value"}])

        assert result == [{"field": "query", "message": "Invalid value"}]

    def test_strips_value_error_prefix(self) -> None:
        result = sanitize_validation_errors([{"loc": ("to_time",), "msg": "Value error, bad"}])

        assert result == [{"field": "to_time", "message": "bad"}]
