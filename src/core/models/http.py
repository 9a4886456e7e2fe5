"""Request and response models passed through event dispatch."""

from typing import Any

from pydantic import BaseModel, Field

from core.utils.constants import METHOD_GET


class Request(BaseModel):
    """Inbound request as seen by listeners."""

    method: str = Field(default=METHOD_GET, description="HTTP method")
    query_params: dict[str, str] = Field(default_factory=dict)
    path_params: dict[str, str] = Field(default_factory=dict)


class Response(BaseModel):
    """In-progress response that listeners populate."""

    status_code: int = 200
    headers: dict[str, str] = Field(default_factory=dict)
    body: Any = None
    last_modified: str | None = Field(
        None,
        description="HTTP date describing the freshness of the body",
    )
