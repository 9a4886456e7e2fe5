"""Abstract contract for image record persistence."""

from abc import ABC, abstractmethod
from typing import Any

from core.models.errors import MetadataRemovalError, StoreUnavailableError
from core.models.image import Image, ImageFields
from core.models.query import Query

Metadata = dict[str, Any]
ImageItem = dict[str, Any]


class ImageRecordStore(ABC):
    """Contract for storing, loading and searching image records.

    Implementations could be DynamoDB, PostgreSQL, MongoDB, an in-memory map,
    etc. Listeners depend on this interface, not the implementation.

    Implementations must never let a backend-specific exception escape:
    every fault is raised as one of the errors in `core.models.errors`,
    chained to the original exception.
    """

    @abstractmethod
    def insert_image(self, *, image_identifier: str, image: Image) -> None:
        """Insert a new image record with empty metadata.

        The check for an existing record and the write are a single atomic
        operation of the store.

        Raises:
            AlreadyExistsError: If a record with this identifier exists
            StoreUnavailableError: If the insert fails for other reasons
        """

    @abstractmethod
    def delete_image(self, *, image_identifier: str) -> None:
        """Delete exactly one image record.

        Raises:
            NotFoundError: If no record has this identifier
            StoreUnavailableError: If deletion fails
        """

    @abstractmethod
    def replace_metadata(self, *, image_identifier: str, metadata: Metadata) -> None:
        """Replace the whole metadata mapping of a record.

        The new mapping is not merged with the previous one. Replacing the
        metadata of a missing record does nothing.

        Raises:
            StoreUnavailableError: If the update fails
        """

    @abstractmethod
    def get_metadata(self, *, image_identifier: str) -> Metadata:
        """Fetch the metadata of a record.

        Returns:
            The metadata mapping, empty if none is set

        Raises:
            StoreUnavailableError: If the fetch fails
        """

    def clear_metadata(self, *, image_identifier: str) -> None:
        """Remove all metadata of a record.

        Raises:
            MetadataRemovalError: If the metadata could not be replaced
        """
        try:
            self.replace_metadata(image_identifier=image_identifier, metadata={})
        except StoreUnavailableError as exc:
            raise MetadataRemovalError(details={"image_identifier": image_identifier}) from exc

    @abstractmethod
    def search_images(self, *, query: Query) -> list[ImageItem]:
        """Search for image records.

        Returns:
            Projected records, most recently added first

        Raises:
            FilterError: If the metadata query cannot be used
            StoreUnavailableError: If the search fails
        """

    @abstractmethod
    def load_image(self, *, image_identifier: str) -> ImageFields:
        """Load the core fields of one image.

        Raises:
            NotFoundError: If no record has this identifier
            StoreUnavailableError: If the fetch fails
        """
