"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_INVALID_FILTER = "INVALID_FILTER"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"

# Conflict Errors
ERROR_CODE_IMAGE_ALREADY_EXISTS = "IMAGE_ALREADY_EXISTS"

# Store Errors
ERROR_CODE_STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
ERROR_CODE_IMAGE_INSERT_FAILED = "IMAGE_INSERT_FAILED"
ERROR_CODE_IMAGE_DELETE_FAILED = "IMAGE_DELETE_FAILED"
ERROR_CODE_IMAGE_LOAD_FAILED = "IMAGE_LOAD_FAILED"
ERROR_CODE_IMAGE_SEARCH_FAILED = "IMAGE_SEARCH_FAILED"
ERROR_CODE_METADATA_UPDATE_FAILED = "METADATA_UPDATE_FAILED"
ERROR_CODE_METADATA_FETCH_FAILED = "METADATA_FETCH_FAILED"
ERROR_CODE_METADATA_REMOVE_FAILED = "METADATA_REMOVE_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# Pagination Defaults
# ============================================================================

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MIN_LIMIT = 1
DEFAULT_OFFSET = 0

# ============================================================================
# Record Layout
# ============================================================================

# Partition key of the records table
RECORD_KEY = "image_identifier"

# Fields every listing result carries, in output order
CORE_LISTING_FIELDS: Final[tuple[str, ...]] = (
    "added",
    "image_identifier",
    "mime",
    "filename",
    "size",
    "width",
    "height",
)

METADATA_FIELD = "metadata"
SORT_FIELD = "added"

# Fields returned when a single image is loaded
IMAGE_LOAD_FIELDS: Final[tuple[str, ...]] = ("filename", "size", "width", "height", "mime")

# Values of the `metadata` listing flag that enable metadata projection
TRUTHY_FLAG_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})

# ============================================================================
# Event Topics
# ============================================================================

TOPIC_IMAGES_GET = "images.get"
TOPIC_IMAGES_HEAD = "images.head"

TOPIC_DB_IMAGES_LOAD = "db.images.load"
TOPIC_DB_IMAGE_INSERT = "db.image.insert"
TOPIC_DB_IMAGE_DELETE = "db.image.delete"
TOPIC_DB_IMAGE_LOAD = "db.image.load"
TOPIC_DB_METADATA_UPDATE = "db.metadata.update"
TOPIC_DB_METADATA_DELETE = "db.metadata.delete"
TOPIC_DB_METADATA_LOAD = "db.metadata.load"

# ============================================================================
# HTTP
# ============================================================================

METHOD_GET = "GET"
METHOD_HEAD = "HEAD"

HEADER_ETAG = "ETag"
HEADER_LAST_MODIFIED = "Last-Modified"

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,HEAD,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length,ETag,Last-Modified"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMAGE_RECORDS_TABLE_NAME = "IMAGE_RECORDS_TABLE_NAME"

DEFAULT_AWS_REGION = "us-east-1"
DEFAULT_TABLE_NAME = "images"
LOCALSTACK_URL = "http://localhost:4566"
