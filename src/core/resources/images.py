"""
Images resource

Lets clients list images. Recognized query parameters:

- page     => Page number. Defaults to 1
- limit    => Number of images per page. Defaults to 20
- metadata => Whether to include metadata per image (1, true, yes, on)
- query    => URL-decoded JSON object used as the metadata filter
- from     => Unix timestamp, only images added after it
- to       => Unix timestamp, only images added before it
"""

import hashlib
import json
from typing import Any

from aws_lambda_powertools import Logger

from core.events.event import Event
from core.events.event_manager import EventManager
from core.events.listener import Listener
from core.models.query import Query
from core.utils.constants import (
    HEADER_ETAG,
    METHOD_GET,
    METHOD_HEAD,
    TOPIC_DB_IMAGES_LOAD,
    TOPIC_IMAGES_GET,
    TOPIC_IMAGES_HEAD,
    TRUTHY_FLAG_VALUES,
)

logger = Logger(UTC=True)


class ImagesResource(Listener):
    """Listener serving listing requests for images."""

    ALLOWED_METHODS: tuple[str, ...] = (METHOD_GET, METHOD_HEAD)

    def attach(self, manager: EventManager) -> None:
        manager.attach(TOPIC_IMAGES_GET, self.get)
        manager.attach(TOPIC_IMAGES_HEAD, self.head)

    def get(self, event: Event) -> None:
        """
        Handle GET requests.

        Builds the query, lets the database listeners load the images, then
        derives the ETag from the response's last-modified marker and the
        returned set.

        Raises:
            pydantic.ValidationError: If a numeric parameter is invalid
        """
        event.query = self.build_query(event.request.query_params)
        event.manager.trigger(TOPIC_DB_IMAGES_LOAD, event)

        response = event.response
        response.headers[HEADER_ETAG] = self.etag(response.last_modified, response.body)

    def head(self, event: Event) -> None:
        """Handle HEAD requests: same as GET, without a body."""
        self.get(event)

        # Remove body from the response, but keep everything else
        event.response.body = None

    @staticmethod
    def build_query(params: dict[str, str]) -> Query:
        """Build a listing query from request parameters."""
        values: dict[str, Any] = {}

        if "page" in params:
            values["page"] = params["page"]

        if "limit" in params:
            values["limit"] = params["limit"]

        if "metadata" in params:
            values["return_metadata"] = str(params["metadata"]).strip().lower() in TRUTHY_FLAG_VALUES

        if "from" in params:
            values["from_time"] = params["from"]

        if "to" in params:
            values["to_time"] = params["to"]

        if "query" in params:
            metadata_query = ImagesResource.parse_metadata_query(params["query"])
            if metadata_query is not None:
                values["metadata_query"] = metadata_query

        return Query(**values)

    @staticmethod
    def parse_metadata_query(raw: str) -> dict[str, Any] | None:
        """Decode a JSON metadata filter; anything but a JSON object is dropped."""
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.debug("Ignoring undecodable metadata query", extra={"query": raw})
            return None

        if not isinstance(data, dict):
            logger.debug("Ignoring non-object metadata query", extra={"query": raw})
            return None

        return data

    @staticmethod
    def etag(last_modified: str | None, body: Any = None) -> str:
        """
        Quoted md5 hash of the last-modified marker.

        When a body is given, its canonical JSON is hashed along with the
        marker, so edits and removals inside the returned set change the tag
        even when the newest creation time does not.
        """
        digest = hashlib.md5((last_modified or "").encode("utf-8"))

        if body is not None:
            canonical = json.dumps(body, sort_keys=True, separators=(",", ":"), default=str)
            digest.update(canonical.encode("utf-8"))

        return f'"{digest.hexdigest()}"'
