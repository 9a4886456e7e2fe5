"""DynamoDB-backed implementation of ImageRecordStore."""

from collections.abc import Callable
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.filters.in_memory_image_filter import InMemoryImageFilter
from core.filters.query_builder import QueryBuilder
from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import (
    AlreadyExistsError,
    NotFoundError,
    StoreUnavailableError,
)
from core.models.image import Image, ImageFields, ImageRecord
from core.models.query import Query
from core.repositories.record_store import ImageItem, ImageRecordStore, Metadata
from core.utils.constants import (
    ERROR_CODE_IMAGE_DELETE_FAILED,
    ERROR_CODE_IMAGE_INSERT_FAILED,
    ERROR_CODE_IMAGE_LOAD_FAILED,
    ERROR_CODE_IMAGE_NOT_FOUND,
    ERROR_CODE_IMAGE_SEARCH_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_UPDATE_FAILED,
    IMAGE_LOAD_FIELDS,
    METADATA_FIELD,
    RECORD_KEY,
)
from core.utils.dynamodb_types import from_dynamodb, to_dynamodb
from core.utils.time import utc_now_timestamp

logger = Logger(UTC=True)

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def _is_conditional_check_failure(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") == CONDITIONAL_CHECK_FAILED


class DynamoDBRecordStore(ImageRecordStore):
    """DynamoDB-backed record storage with error handling.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.

    Listing uses a filtered scan; ordering and the page window are applied
    to the matching records once the scan completes.
    """

    def __init__(
        self,
        adapter: DynamoDBAdapterProtocol | None = None,
        *,
        clock: Callable[[], int] = utc_now_timestamp,
    ) -> None:
        """Initialize with DynamoDB adapter and the clock used for `added`."""
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter()
        self._clock = clock
        self._filters = InMemoryImageFilter()

    def insert_image(self, *, image_identifier: str, image: Image) -> None:
        """Insert a record, relying on a conditional put for uniqueness.

        Raises:
            AlreadyExistsError: If a record with this identifier exists
            StoreUnavailableError: If the insert fails
        """
        record = ImageRecord.create(
            image_identifier=image_identifier,
            image=image,
            added=self._clock(),
        )

        logger.debug("Inserting image", extra={"image_identifier": image_identifier})

        try:
            self._db.put_item(
                item=to_dynamodb(record.model_dump()),
                condition_expression=f"attribute_not_exists({RECORD_KEY})",
            )
            logger.info("Image inserted", extra={"image_identifier": image_identifier})

        except ClientError as exc:
            if _is_conditional_check_failure(exc):
                logger.warning("Image already exists", extra={"image_identifier": image_identifier})
                raise AlreadyExistsError(
                    message="Image already exists",
                    details={"image_identifier": image_identifier},
                ) from exc

            logger.error("DynamoDB put_item failed", extra={"image_identifier": image_identifier})
            raise StoreUnavailableError(
                message="Unable to save image data",
                error_code=ERROR_CODE_IMAGE_INSERT_FAILED,
                details={"image_identifier": image_identifier},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error inserting image")
            raise StoreUnavailableError(
                message="Unable to save image data",
                error_code=ERROR_CODE_IMAGE_INSERT_FAILED,
                details={"image_identifier": image_identifier},
            ) from exc

    def delete_image(self, *, image_identifier: str) -> None:
        """Delete one record.

        Raises:
            NotFoundError: If no record has this identifier
            StoreUnavailableError: If deletion fails
        """
        logger.debug("Deleting image", extra={"image_identifier": image_identifier})

        try:
            self._db.delete_item(
                key={RECORD_KEY: image_identifier},
                condition_expression=f"attribute_exists({RECORD_KEY})",
            )
            logger.info("Image deleted", extra={"image_identifier": image_identifier})

        except ClientError as exc:
            if _is_conditional_check_failure(exc):
                raise NotFoundError(
                    message="Image not found",
                    error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                    details={"image_identifier": image_identifier},
                ) from exc

            logger.error("DynamoDB delete_item failed", extra={"image_identifier": image_identifier})
            raise StoreUnavailableError(
                message="Unable to delete image data",
                error_code=ERROR_CODE_IMAGE_DELETE_FAILED,
                details={"image_identifier": image_identifier},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting image")
            raise StoreUnavailableError(
                message="Unable to delete image data",
                error_code=ERROR_CODE_IMAGE_DELETE_FAILED,
                details={"image_identifier": image_identifier},
            ) from exc

    def replace_metadata(self, *, image_identifier: str, metadata: Metadata) -> None:
        """Overwrite the metadata attribute as a whole.

        Raises:
            StoreUnavailableError: If the update fails
        """
        logger.debug("Replacing metadata", extra={"image_identifier": image_identifier})

        try:
            self._db.update_item(
                key={RECORD_KEY: image_identifier},
                update_expression="SET #metadata = :metadata",
                condition_expression="attribute_exists(#key)",
                attribute_names={"#metadata": METADATA_FIELD, "#key": RECORD_KEY},
                attribute_values={":metadata": to_dynamodb(dict(metadata))},
            )
            logger.info("Metadata replaced", extra={"image_identifier": image_identifier})

        except ClientError as exc:
            if _is_conditional_check_failure(exc):
                # Never create a record as a side effect of a metadata update
                logger.warning(
                    "Metadata update for unknown image ignored",
                    extra={"image_identifier": image_identifier},
                )
                return

            logger.error("DynamoDB update_item failed", extra={"image_identifier": image_identifier})
            raise StoreUnavailableError(
                message="Unable to edit image data",
                error_code=ERROR_CODE_METADATA_UPDATE_FAILED,
                details={"image_identifier": image_identifier},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error replacing metadata")
            raise StoreUnavailableError(
                message="Unable to edit image data",
                error_code=ERROR_CODE_METADATA_UPDATE_FAILED,
                details={"image_identifier": image_identifier},
            ) from exc

    def get_metadata(self, *, image_identifier: str) -> Metadata:
        """Fetch the metadata mapping of a record.

        Raises:
            StoreUnavailableError: If the fetch fails
        """
        logger.debug("Fetching metadata", extra={"image_identifier": image_identifier})

        try:
            response = self._db.get_item(
                key={RECORD_KEY: image_identifier},
                projection=("#metadata", {"#metadata": METADATA_FIELD}),
            )

        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"image_identifier": image_identifier})
            raise StoreUnavailableError(
                message="Unable to fetch image metadata",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"image_identifier": image_identifier},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error fetching metadata")
            raise StoreUnavailableError(
                message="Unable to fetch image metadata",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"image_identifier": image_identifier},
            ) from exc

        item = response.get("Item") or {}
        metadata: Metadata = from_dynamodb(item.get(METADATA_FIELD) or {})
        return metadata

    def search_images(self, *, query: Query) -> list[ImageItem]:
        """Search for records matching the query.

        NOTE:
        - Time range and metadata filtering are performed at the DynamoDB level.
        - The scan is followed through every page before ordering, since
          DynamoDB scans return items in no particular order.

        Raises:
            FilterError: If the metadata query cannot be used
            StoreUnavailableError: If the scan fails
        """
        store_query = QueryBuilder.build(query)

        logger.debug(
            "Searching images",
            extra={
                "page": query.page,
                "limit": query.limit,
                "from_time": query.from_time,
                "to_time": query.to_time,
                "has_metadata_query": bool(store_query.metadata_query),
            },
        )

        projection_expression, attribute_names = QueryBuilder.dynamodb_projection(store_query)
        scan_kwargs: dict[str, Any] = {
            "ProjectionExpression": projection_expression,
            "ExpressionAttributeNames": attribute_names,
            "ConsistentRead": True,
        }

        filter_expression = QueryBuilder.dynamodb_filter(store_query)
        if filter_expression is not None:
            scan_kwargs["FilterExpression"] = filter_expression

        items: list[ImageItem] = []
        last_evaluated_key: dict[str, Any] | None = None

        try:
            while True:
                if last_evaluated_key:
                    scan_kwargs["ExclusiveStartKey"] = last_evaluated_key

                response = self._db.scan(**scan_kwargs)
                page_items = response.get("Items", [])

                if not isinstance(page_items, list):
                    raise StoreUnavailableError(
                        message="Invalid scan response from DynamoDB",
                        error_code=ERROR_CODE_IMAGE_SEARCH_FAILED,
                    )

                items.extend(from_dynamodb(page_items))

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    break

        except ClientError as exc:
            logger.error("DynamoDB scan failed")
            raise StoreUnavailableError(
                message="Unable to search for images",
                error_code=ERROR_CODE_IMAGE_SEARCH_FAILED,
            ) from exc

        except StoreUnavailableError:
            raise

        except Exception as exc:
            logger.exception("Unexpected error searching images")
            raise StoreUnavailableError(
                message="Unable to search for images",
                error_code=ERROR_CODE_IMAGE_SEARCH_FAILED,
            ) from exc

        items = self._filters.sort(
            items,
            field_name=store_query.sort_field,
            descending=store_query.descending,
        )
        page_items, total_count, _ = self._filters.paginate(
            items,
            offset=store_query.offset,
            limit=store_query.limit,
        )

        logger.info(
            "Images searched",
            extra={"matched": total_count, "count": len(page_items)},
        )

        return self._filters.project(page_items, fields=store_query.fields)

    def load_image(self, *, image_identifier: str) -> ImageFields:
        """Load the core fields of one record.

        Raises:
            NotFoundError: If no record has this identifier
            StoreUnavailableError: If the fetch fails
        """
        logger.debug("Loading image", extra={"image_identifier": image_identifier})

        names = {f"#f{index}": field for index, field in enumerate(IMAGE_LOAD_FIELDS)}

        try:
            response = self._db.get_item(
                key={RECORD_KEY: image_identifier},
                projection=(", ".join(names), names),
            )

        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"image_identifier": image_identifier})
            raise StoreUnavailableError(
                message="Unable to fetch image data",
                error_code=ERROR_CODE_IMAGE_LOAD_FAILED,
                details={"image_identifier": image_identifier},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error loading image")
            raise StoreUnavailableError(
                message="Unable to fetch image data",
                error_code=ERROR_CODE_IMAGE_LOAD_FAILED,
                details={"image_identifier": image_identifier},
            ) from exc

        item = response.get("Item")

        if not item:
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"image_identifier": image_identifier},
            )

        try:
            return ImageFields(**from_dynamodb(item))
        except ValueError as exc:
            logger.error("Invalid image record format", extra={"image_identifier": image_identifier})
            raise StoreUnavailableError(
                message="Invalid image record format",
                error_code=ERROR_CODE_IMAGE_LOAD_FAILED,
                details={"image_identifier": image_identifier},
            ) from exc
