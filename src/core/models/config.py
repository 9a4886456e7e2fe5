"""Store configuration."""

import os

from pydantic import BaseModel, Field, StrictStr

from core.utils.constants import (
    DEFAULT_AWS_REGION,
    DEFAULT_TABLE_NAME,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_IMAGE_RECORDS_TABLE_NAME,
)


class StoreConfig(BaseModel):
    """Location of the record store.

    Values are only type-checked; the table is not looked up until the
    store is first used.
    """

    table_name: StrictStr = Field(default=DEFAULT_TABLE_NAME, min_length=1)
    region_name: StrictStr = Field(default=DEFAULT_AWS_REGION, min_length=1)
    endpoint_url: StrictStr | None = Field(
        None,
        description="Custom endpoint, e.g. LocalStack",
    )

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Read the configuration from the environment, defaulting absent values."""
        values: dict[str, str] = {}

        table_name = os.getenv(ENV_IMAGE_RECORDS_TABLE_NAME)
        if table_name:
            values["table_name"] = table_name

        region_name = os.getenv(ENV_AWS_REGION)
        if region_name:
            values["region_name"] = region_name

        endpoint_url = os.getenv(ENV_AWS_ENDPOINT_URL)
        if endpoint_url:
            values["endpoint_url"] = endpoint_url

        return cls(**values)
