"""Metadata-based filtering for image records."""

from typing import Any

_MISSING = object()


class MetadataMatchFilter:
    """Filter records by comparing their metadata against a metadata query.

    A record matches when every key of the query is present in its metadata
    with an equal value. Dotted keys (``"camera.make"``) address values of
    nested mappings, the same way the DynamoDB driver renders them as
    attribute paths.
    """

    @staticmethod
    def apply(
        items: list[dict[str, Any]],
        metadata_query: dict[str, Any],
        field_name: str = "metadata",
    ) -> list[dict[str, Any]]:
        """Apply the metadata query to items."""
        if not metadata_query:
            return items

        return [
            item
            for item in items
            if MetadataMatchFilter.matches(item.get(field_name) or {}, metadata_query)
        ]

    @staticmethod
    def matches(metadata: dict[str, Any], metadata_query: dict[str, Any]) -> bool:
        for key, expected in metadata_query.items():
            if MetadataMatchFilter._resolve(metadata, key) != expected:
                return False

        return True

    @staticmethod
    def _resolve(metadata: dict[str, Any], path: str) -> Any:
        value: Any = metadata

        for part in path.split("."):
            if not isinstance(value, dict) or part not in value:
                return _MISSING
            value = value[part]

        return value
