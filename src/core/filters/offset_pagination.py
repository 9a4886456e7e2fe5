"""
Offset-based pagination utilities.
"""

from typing import Any

from core.utils.constants import (
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
)


class OffsetPagination:
    """
    Offset-based pagination helper.

    This class encapsulates all logic related to paginating a list of items
    using an offset and limit approach.

    Typical usage:
    1. Convert a page number into an offset
    2. Apply pagination to a list of items
    """

    @staticmethod
    def offset_for_page(page: int, limit: int) -> int:
        """
        Number of items to skip before the given page.

        Pages are numbered from 1. Page 1, and any page below it, skips
        nothing.

        Example:
            offset_for_page(page=3, limit=10)

            → 20
        """
        if page > 1:
            return limit * (page - 1)

        return DEFAULT_OFFSET

    @staticmethod
    def paginate(
        items: list[dict[str, Any]],
        offset: int = DEFAULT_OFFSET,
        limit: int = DEFAULT_LIMIT,
    ) -> tuple[list[dict[str, Any]], int, bool]:
        """
        Paginate a list of items using offset and limit.

        This method slices the provided list and returns:
        - The current page of items
        - The total number of items before pagination
        - A boolean indicating whether more items exist after this page

        Args:
            items: Full list of items to paginate
            offset: Number of items to skip from the start
            limit: Maximum number of items to include in the page

        Returns:
            A tuple containing:
            - paginated_items: List of items for the current page
            - total_count: Total number of items before pagination
            - has_more: True if more items exist beyond this page

        Example:
            items = [1, 2, 3, 4, 5]
            offset = 0
            limit = 2

            → ([1, 2], 5, True)
        """
        total_count = len(items)
        paginated_items = items[offset : offset + limit]
        has_more = offset + limit < total_count

        return paginated_items, total_count, has_more
