"""Image Records Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Image record metadata store with event-driven listing on AWS Lambda and DynamoDB"
)

__all__ = ["handlers", "core"]
