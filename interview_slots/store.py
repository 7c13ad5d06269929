import logging
from collections import Counter
from contextlib import contextmanager
from typing import Iterable

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from interview_slots.config import SeedConfig
from interview_slots.errors import DuplicateSlotError, PersistenceError, StoreConnectionError

logger = logging.getLogger(__name__)

KEY_ATTRIBUTE = "slotNumber"


class SlotStore:
    """Interview slot table: wipe everything, then write one batch."""

    def __init__(self, table, zone=None):
        self.table = table
        self.zone = zone

    def clear(self) -> int:
        try:
            keys = self._scan_keys()
            with self.table.batch_writer() as batch:
                for key in keys:
                    batch.delete_item(Key=key)
        except (ClientError, BotoCoreError) as e:
            raise PersistenceError(f"Could not clear {self.table.name}: {e}") from e
        logger.info("Deleted %d existing slots from %s", len(keys), self.table.name)
        return len(keys)

    def bulk_insert(self, slots: Iterable) -> int:
        slots = list(slots)
        counts = Counter(slot.slot_number for slot in slots)
        duplicates = [number for number, seen in counts.items() if seen > 1]
        if duplicates:
            raise DuplicateSlotError(duplicates)

        try:
            with self.table.batch_writer() as batch:
                for slot in slots:
                    batch.put_item(Item=slot.to_item(self.zone))
        except (ClientError, BotoCoreError) as e:
            # batch_writer flushes every 25 items, so earlier chunks may already be stored
            self._discard(slots)
            raise PersistenceError(f"Batch insert into {self.table.name} failed: {e}") from e
        logger.info("Inserted %d slots into %s", len(slots), self.table.name)
        return len(slots)

    def _discard(self, slots):
        try:
            with self.table.batch_writer() as batch:
                for slot in slots:
                    batch.delete_item(Key={KEY_ATTRIBUTE: slot.slot_number})
        except (ClientError, BotoCoreError) as e:
            logger.error("Could not roll back partial batch in %s: %s", self.table.name, e)
            return
        logger.info("Rolled back %d slots from failed batch", len(slots))

    def _scan_keys(self):
        result = self.table.scan(ProjectionExpression=KEY_ATTRIBUTE)
        items = result.get("Items", [])

        while "LastEvaluatedKey" in result:
            result = self.table.scan(
                ProjectionExpression=KEY_ATTRIBUTE,
                ExclusiveStartKey=result["LastEvaluatedKey"],
            )
            items.extend(result.get("Items", []))

        return [{KEY_ATTRIBUTE: item[KEY_ATTRIBUTE]} for item in items]


def connect_table(config: SeedConfig):
    dynamodb = boto3.resource("dynamodb", region_name=config.region, endpoint_url=config.endpoint_url)
    return dynamodb.Table(config.table_name)


@contextmanager
def open_store(config: SeedConfig, table=None):
    """
    Yield a SlotStore for the configured table and close its client on exit.

    The table is described up front so an unreachable or missing table fails
    here, before any slots are generated.
    """
    try:
        if table is None:
            table = connect_table(config)
    except BotoCoreError as e:
        raise StoreConnectionError(f"Could not create DynamoDB client: {e}") from e

    try:
        try:
            table.load()
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            raise StoreConnectionError(f"Table {config.table_name} unavailable ({code}): {e}") from e
        except BotoCoreError as e:
            raise StoreConnectionError(f"Could not reach DynamoDB: {e}") from e
        logger.info("Database connected: %s", config.table_name)

        yield SlotStore(table, zone=config.zone)
    finally:
        table.meta.client.close()
        logger.info("Connection closed")
