"""Lambda handler that seeds the bonus claims table with sample rows.

Invoked through the CDK custom resource provider framework. Rows are written
with put_item on the composite key, so running the seed again overwrites the
same rows instead of adding new ones. The returned PhysicalResourceId is the
SeedToken property: CloudFormation calls Update again only when it changes.
"""

import json
import logging
import os
from datetime import UTC, datetime

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger()
logger.setLevel(logging.INFO)


class SeedInvocationError(Exception):
    """Raised when sample rows cannot be written.

    The custom resource fails and only the seed stack rolls back; the table
    is left in place and the next deploy retries the seed.
    """

    pass


def seed_items(table_name: str, items: list[dict[str, str]]) -> int:
    """
    Write the sample rows, stamping each with the current time.

    Args:
        table_name: DynamoDB table to write to
        items: Rows with PK, SK and status

    Returns:
        Number of rows written

    Raises:
        SeedInvocationError: If a write fails
    """
    table = boto3.resource("dynamodb").Table(table_name)
    for item in items:
        try:
            table.put_item(
                Item={
                    **item,
                    "timestamp": datetime.now(UTC).isoformat(),
                }
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            logger.error("Failed to seed %s/%s: %s", item.get("PK"), item.get("SK"), error_code)
            raise SeedInvocationError(
                f"Failed to seed {item.get('PK')}/{item.get('SK')} into {table_name}: {error_code}"
            ) from e

    logger.info("Seeded %d items into %s", len(items), table_name)
    return len(items)


def handler(event: dict, context) -> dict:
    """Custom resource event handler (Create, Update, Delete)."""
    request_type = event["RequestType"]
    props = event.get("ResourceProperties", {})

    if request_type == "Delete":
        # Seeded rows go away with the table (or stay with it on RETAIN)
        return {"PhysicalResourceId": event.get("PhysicalResourceId", props.get("SeedToken", ""))}

    table_name = props.get("TableName") or os.environ.get("TABLE_NAME")
    if not table_name:
        raise SeedInvocationError("TABLE_NAME is not set")

    items = json.loads(props.get("Items", "[]"))
    count = seed_items(table_name, items)

    return {
        "PhysicalResourceId": props["SeedToken"],
        "Data": {"ItemCount": count},
    }
