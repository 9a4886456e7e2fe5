"""
Lambda handler responsible for listing images with optional filtering and pagination.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.events.event import Event
from core.events.event_manager import EventManager
from core.infrastructure.aws.dynamodb_record_store import DynamoDBRecordStore
from core.listeners.database_operations import DatabaseOperations
from core.models.http import Request
from core.repositories.record_store import ImageRecordStore
from core.resources.images import ImagesResource
from core.utils.constants import (
    METHOD_GET,
    METHOD_HEAD,
    TOPIC_IMAGES_GET,
    TOPIC_IMAGES_HEAD,
)
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()

TOPICS_BY_METHOD: dict[str, str] = {
    METHOD_GET: TOPIC_IMAGES_GET,
    METHOD_HEAD: TOPIC_IMAGES_HEAD,
}

# Created on first use and reused by warm invocations
_store: ImageRecordStore | None = None


def get_store() -> ImageRecordStore:
    """Return the record store of this container, creating it from the environment."""
    global _store

    if _store is None:
        _store = DynamoDBRecordStore()

    return _store


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle requests to list images.

    Supports:
    - Filtering by creation time (`from`, `to`) and metadata (`query`)
    - Page-based pagination (`page`, `limit`)
    - Optional metadata projection (`metadata`)
    - HEAD requests, answered with headers only

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received image list request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_params": event.get("queryStringParameters"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    method = (event.get("httpMethod") or METHOD_GET).upper()
    topic = TOPICS_BY_METHOD.get(method)

    if topic is None:
        return ResponseBuilder.method_not_allowed(
            f"Method {method} is not allowed, use one of {', '.join(ImagesResource.ALLOWED_METHODS)}",
        )

    request = Request(
        method=method,
        query_params=event.get("queryStringParameters") or {},
        path_params=event.get("pathParameters") or {},
    )

    manager = EventManager()
    ImagesResource().attach(manager)
    DatabaseOperations(get_store()).attach(manager)

    dispatch = manager.trigger(topic, Event(manager=manager, request=request))

    logger.info(
        "Images listed successfully",
        extra={"count": len(dispatch.response.body or []), "method": method},
    )

    return ResponseBuilder.from_response(dispatch.response)
