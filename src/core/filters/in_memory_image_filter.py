"""
Image filtering service for list operations.

Provides a coordination layer that applies a `StoreQuery` to in-memory
image record collections. This service does not perform data access and is
intended to operate on pre-fetched items.
"""

from aws_lambda_powertools import Logger

from core.filters.metadata_match_filter import MetadataMatchFilter
from core.filters.offset_pagination import OffsetPagination
from core.filters.query_builder import StoreQuery
from core.repositories.record_store import ImageItem
from core.utils.constants import RECORD_KEY

logger = Logger(UTC=True)


class InMemoryImageFilter:
    """
    Service responsible for filtering, ordering and paginating image records.

    This class orchestrates in-memory refinement strategies:
    - Creation time range (strict bounds)
    - Metadata matching
    - Ordering by creation time
    - Offset-based pagination
    - Field projection

    Stores that can filter natively only need `sort`, `paginate` and
    `project`; `apply` runs the whole pipeline.
    """

    def __init__(self) -> None:
        """Initialize filter components used for orchestration."""
        self._metadata_filter: MetadataMatchFilter = MetadataMatchFilter()
        self._pagination: OffsetPagination = OffsetPagination()

    def apply(self, items: list[ImageItem], store_query: StoreQuery) -> list[ImageItem]:
        """Run every step of the store query against the items."""
        items = self.filter_by_time_range(
            items,
            field_name=store_query.sort_field,
            after=store_query.added_after,
            before=store_query.added_before,
        )
        items = self._metadata_filter.apply(items, store_query.metadata_query)
        logger.debug("Images matched", extra={"matched": len(items)})
        items = self.sort(items, field_name=store_query.sort_field, descending=store_query.descending)
        items, _, _ = self.paginate(items, offset=store_query.offset, limit=store_query.limit)

        return self.project(items, fields=store_query.fields)

    @staticmethod
    def filter_by_time_range(
        items: list[ImageItem],
        *,
        field_name: str,
        after: int | None,
        before: int | None,
    ) -> list[ImageItem]:
        """Keep items whose timestamp lies strictly between the bounds."""
        if after is None and before is None:
            return items

        result: list[ImageItem] = []
        for item in items:
            value = item.get(field_name)
            if value is None:
                continue
            if after is not None and not value > after:
                continue
            if before is not None and not value < before:
                continue
            result.append(item)

        return result

    @staticmethod
    def sort(
        items: list[ImageItem],
        *,
        field_name: str,
        descending: bool = True,
    ) -> list[ImageItem]:
        """
        Order items by a timestamp field.

        Ties are broken by the record identifier so the order is total.
        """
        return sorted(
            items,
            key=lambda item: (item.get(field_name) or 0, item.get(RECORD_KEY) or ""),
            reverse=descending,
        )

    def paginate(
        self,
        items: list[ImageItem],
        *,
        offset: int,
        limit: int,
    ) -> tuple[list[ImageItem], int, bool]:
        """
        Apply offset-based pagination to a list of items.

        Bounds are enforced by `StoreQuery`.

        Returns:
            A tuple of (paginated_items, total_count, has_more)
        """
        return self._pagination.paginate(items, offset, limit)

    @staticmethod
    def project(items: list[ImageItem], *, fields: tuple[str, ...]) -> list[ImageItem]:
        """Keep only the requested fields, in the requested order."""
        return [{field: item[field] for field in fields if field in item} for item in items]
