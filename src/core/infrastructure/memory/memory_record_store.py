"""In-memory implementation of ImageRecordStore.

Useful for local development and as a reference for the store contract.
Records live in a process-local dict guarded by a lock, so concurrent
inserts of the same identifier are rejected for all but one caller.
"""

import copy
import threading
from collections.abc import Callable

from aws_lambda_powertools import Logger

from core.filters.in_memory_image_filter import InMemoryImageFilter
from core.filters.query_builder import QueryBuilder
from core.models.errors import AlreadyExistsError, NotFoundError
from core.models.image import Image, ImageFields, ImageRecord
from core.models.query import Query
from core.repositories.record_store import ImageItem, ImageRecordStore, Metadata
from core.utils.constants import ERROR_CODE_IMAGE_NOT_FOUND, METADATA_FIELD
from core.utils.time import utc_now_timestamp

logger = Logger(UTC=True)


class InMemoryRecordStore(ImageRecordStore):
    """Dict-backed record storage."""

    def __init__(self, *, clock: Callable[[], int] = utc_now_timestamp) -> None:
        self._records: dict[str, ImageItem] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._filters = InMemoryImageFilter()

    def insert_image(self, *, image_identifier: str, image: Image) -> None:
        record = ImageRecord.create(
            image_identifier=image_identifier,
            image=image,
            added=self._clock(),
        )

        with self._lock:
            if image_identifier in self._records:
                raise AlreadyExistsError(
                    message="Image already exists",
                    details={"image_identifier": image_identifier},
                )
            self._records[image_identifier] = record.model_dump()

        logger.info("Image inserted", extra={"image_identifier": image_identifier})

    def delete_image(self, *, image_identifier: str) -> None:
        with self._lock:
            if self._records.pop(image_identifier, None) is None:
                raise NotFoundError(
                    message="Image not found",
                    error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                    details={"image_identifier": image_identifier},
                )

        logger.info("Image deleted", extra={"image_identifier": image_identifier})

    def replace_metadata(self, *, image_identifier: str, metadata: Metadata) -> None:
        with self._lock:
            record = self._records.get(image_identifier)
            if record is None:
                logger.warning(
                    "Metadata update for unknown image ignored",
                    extra={"image_identifier": image_identifier},
                )
                return
            record[METADATA_FIELD] = copy.deepcopy(dict(metadata))

        logger.info("Metadata replaced", extra={"image_identifier": image_identifier})

    def get_metadata(self, *, image_identifier: str) -> Metadata:
        with self._lock:
            record = self._records.get(image_identifier) or {}
            return copy.deepcopy(record.get(METADATA_FIELD) or {})

    def search_images(self, *, query: Query) -> list[ImageItem]:
        store_query = QueryBuilder.build(query)

        with self._lock:
            items = copy.deepcopy(list(self._records.values()))

        return self._filters.apply(items, store_query)

    def load_image(self, *, image_identifier: str) -> ImageFields:
        with self._lock:
            record = self._records.get(image_identifier)

            if record is None:
                raise NotFoundError(
                    message="Image not found",
                    error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                    details={"image_identifier": image_identifier},
                )

            return ImageFields(**record)
