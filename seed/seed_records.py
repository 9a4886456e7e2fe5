#!/usr/bin/env python3
"""
Seed script to populate the image records table.

Creates the table when it does not exist yet, then inserts sample records
through the DynamoDB record store. Each record is added one second after
the previous one, so listings have a stable order.

Run:
    PYTHONPATH=src python seed/seed_records.py \
      --endpoint-url http://localhost:4566 \
      --count 25
"""

import argparse
import itertools
import sys
import uuid

from aws_lambda_powertools import Logger

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter
from core.infrastructure.aws.dynamodb_record_store import DynamoDBRecordStore
from core.models.config import StoreConfig
from core.models.image import Image
from core.models.query import Query
from core.utils.constants import DEFAULT_TABLE_NAME, LOCALSTACK_URL
from core.utils.time import utc_now_timestamp

logger = Logger(service="seed")

SAMPLE_MIME_TYPES = ("image/jpeg", "image/png", "image/gif")
SAMPLE_TAGS = ("nature", "city", "portrait")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed image records into DynamoDB")

    parser.add_argument(
        "--endpoint-url",
        default=LOCALSTACK_URL,
        help="DynamoDB endpoint (defaults to LocalStack)",
    )
    parser.add_argument(
        "--table-name",
        default=DEFAULT_TABLE_NAME,
        help="Name of the records table",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=25,
        help="Number of records to seed",
    )

    return parser.parse_args()


def sample_image(index: int) -> Image:
    mime = SAMPLE_MIME_TYPES[index % len(SAMPLE_MIME_TYPES)]
    extension = mime.split("/")[1].replace("jpeg", "jpg")

    return Image(
        filename=f"sample_{index:03d}.{extension}",
        size=1024 * (index + 1),
        mime=mime,
        width=640 + index,
        height=480 + index,
    )


def seed_records() -> None:
    try:
        args = parse_args()

        adapter = DynamoDBAdapter(
            StoreConfig(table_name=args.table_name, endpoint_url=args.endpoint_url),
        )

        if adapter.create_table():
            logger.info("Created records table", extra={"table_name": args.table_name})

        start = utc_now_timestamp() - args.count
        clock = itertools.count(start)
        store = DynamoDBRecordStore(adapter, clock=lambda: next(clock))

        logger.info("Starting seeding process", extra={"count": args.count})

        for index in range(args.count):
            image_identifier = uuid.uuid4().hex
            store.insert_image(image_identifier=image_identifier, image=sample_image(index))
            store.replace_metadata(
                image_identifier=image_identifier,
                metadata={"tag": SAMPLE_TAGS[index % len(SAMPLE_TAGS)], "index": index},
            )

            logger.info("Seeded record", extra={"image_identifier": image_identifier})

        logger.info("Seeding completed")

        newest = store.search_images(query=Query(limit=5, return_metadata=True))
        logger.info("Most recent records", extra={"records": newest})

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_records()
