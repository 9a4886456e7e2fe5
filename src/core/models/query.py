"""Listing query value object."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.utils.constants import DEFAULT_LIMIT, DEFAULT_PAGE, MIN_LIMIT


class Query(BaseModel):
    """
    Pagination, time range and metadata filter of one listing request.

    The object is immutable and performs no I/O. `metadata_query` is opaque
    here; it is forwarded to the store as-is.
    """

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=DEFAULT_PAGE, ge=1, description="Page number, starting at 1")
    limit: int = Field(default=DEFAULT_LIMIT, ge=MIN_LIMIT, description="Records per page")
    return_metadata: bool = Field(
        default=False,
        description="Whether metadata is projected into the results",
    )
    from_time: int | None = Field(
        None,
        description="Only records added strictly after this unix timestamp",
    )
    to_time: int | None = Field(
        None,
        description="Only records added strictly before this unix timestamp",
    )
    metadata_query: dict[str, Any] | None = Field(
        None,
        description="Structured filter over the metadata mapping",
    )
