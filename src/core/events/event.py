"""Shared context handed to every handler of a dispatch."""

from typing import TYPE_CHECKING, Any

from core.models.http import Request, Response
from core.models.image import Image, ImageFields
from core.models.query import Query

if TYPE_CHECKING:
    from core.events.event_manager import EventManager


class Event:
    """
    Mutable context of one request.

    Handlers communicate by reading and writing the named slots below,
    e.g. the images resource stores the `query` and the database listener
    writes the result list to `response.body`.
    """

    def __init__(
        self,
        *,
        manager: "EventManager",
        request: Request | None = None,
        response: Response | None = None,
    ) -> None:
        self.manager = manager
        self.request: Request = request or Request()
        self.response: Response = response or Response()

        # Topic currently being dispatched
        self.name: str | None = None

        self.query: Query | None = None
        self.image_identifier: str | None = None
        self.image: Image | None = None
        self.image_fields: ImageFields | None = None
        self.metadata: dict[str, Any] | None = None

    def __repr__(self) -> str:
        return f"Event(name={self.name!r}, method={self.request.method!r})"
