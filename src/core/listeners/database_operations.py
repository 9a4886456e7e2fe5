"""Listener binding an image record store to the `db.*` topics."""

from typing import TypeVar

from aws_lambda_powertools import Logger

from core.events.event import Event
from core.events.event_manager import EventManager
from core.events.listener import Listener
from core.repositories.record_store import ImageRecordStore
from core.utils.constants import (
    SORT_FIELD,
    TOPIC_DB_IMAGE_DELETE,
    TOPIC_DB_IMAGE_INSERT,
    TOPIC_DB_IMAGE_LOAD,
    TOPIC_DB_IMAGES_LOAD,
    TOPIC_DB_METADATA_DELETE,
    TOPIC_DB_METADATA_LOAD,
    TOPIC_DB_METADATA_UPDATE,
)
from core.utils.time import http_date

T = TypeVar("T")

logger = Logger(UTC=True)


def _require(value: T | None, name: str) -> T:
    if value is None:
        raise ValueError(f"Missing '{name}' on event")
    return value


class DatabaseOperations(Listener):
    """
    Services database events with the configured store.

    The store is created once at startup and passed in; the listener keeps
    no state of its own. Store errors propagate unchanged.
    """

    def __init__(self, store: ImageRecordStore) -> None:
        self._store = store

    def attach(self, manager: EventManager) -> None:
        handlers = {
            TOPIC_DB_IMAGES_LOAD: self.load_images,
            TOPIC_DB_IMAGE_INSERT: self.insert_image,
            TOPIC_DB_IMAGE_DELETE: self.delete_image,
            TOPIC_DB_IMAGE_LOAD: self.load_image,
            TOPIC_DB_METADATA_UPDATE: self.update_metadata,
            TOPIC_DB_METADATA_DELETE: self.delete_metadata,
            TOPIC_DB_METADATA_LOAD: self.load_metadata,
        }

        for topic, handler in handlers.items():
            manager.attach(topic, handler)

    def load_images(self, event: Event) -> None:
        """
        Search the store and put the result list on the response.

        The response's last-modified marker is the newest creation time in
        the result, or the epoch when nothing matched.
        """
        query = _require(event.query, "query")
        images = self._store.search_images(query=query)

        newest = max((image.get(SORT_FIELD) or 0 for image in images), default=0)

        event.response.body = images
        event.response.last_modified = http_date(newest)

        logger.debug("Images loaded", extra={"count": len(images)})

    def insert_image(self, event: Event) -> None:
        self._store.insert_image(
            image_identifier=_require(event.image_identifier, "image_identifier"),
            image=_require(event.image, "image"),
        )

    def delete_image(self, event: Event) -> None:
        self._store.delete_image(image_identifier=_require(event.image_identifier, "image_identifier"))

    def load_image(self, event: Event) -> None:
        event.image_fields = self._store.load_image(
            image_identifier=_require(event.image_identifier, "image_identifier"),
        )

    def update_metadata(self, event: Event) -> None:
        self._store.replace_metadata(
            image_identifier=_require(event.image_identifier, "image_identifier"),
            metadata=_require(event.metadata, "metadata"),
        )

    def delete_metadata(self, event: Event) -> None:
        self._store.clear_metadata(image_identifier=_require(event.image_identifier, "image_identifier"))

    def load_metadata(self, event: Event) -> None:
        metadata = self._store.get_metadata(
            image_identifier=_require(event.image_identifier, "image_identifier"),
        )
        event.metadata = metadata
        event.response.body = metadata
