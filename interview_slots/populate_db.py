import logging
import sys
from datetime import datetime
from typing import List

from interview_slots.cache import invalidate_free_slots
from interview_slots.config import SeedConfig
from interview_slots.errors import ConfigError, PersistenceError, StoreConnectionError
from interview_slots.slots import Slot, generate_slots
from interview_slots.store import SlotStore, open_store

logger = logging.getLogger(__name__)


def seed_slots(config: SeedConfig, store: SlotStore) -> List[Slot]:
    # clear first: only one batch may ever be live in the table
    store.clear()
    print("Cleared existing slots")

    slots = generate_slots(config)
    if len(slots) < config.target_slot_count:
        logger.warning(
            "Range only fits %d of %d requested slots", len(slots), config.target_slot_count
        )
    store.bulk_insert(slots)
    return slots


def format_local(instant: datetime, config: SeedConfig) -> str:
    """en-IN style, e.g. 13/2/2026, 9:00:00 pm."""
    local = instant.astimezone(config.zone)
    hour = local.hour % 12 or 12
    suffix = "am" if local.hour < 12 else "pm"
    return f"{local.day}/{local.month}/{local.year}, {hour}:{local:%M:%S} {suffix}"


def print_summary(slots: List[Slot], config: SeedConfig):
    print(f"Successfully created {len(slots)} slots")
    print(
        f"Max capacity (slots * {config.max_bookings_per_slot}): "
        f"{len(slots) * config.max_bookings_per_slot}"
    )
    if not slots:
        print("No slots generated")
        return
    print("First slot:", format_local(slots[0].start_time, config))
    print("Last slot:", format_local(slots[-1].end_time, config))


def main(environ=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = SeedConfig.from_env(environ)
    except ConfigError as e:
        logger.error("Invalid seeding configuration: %s", e)
        return 2

    try:
        with open_store(config) as store:
            slots = seed_slots(config, store)
    except StoreConnectionError as e:
        logger.error("%s", e)
        return 1
    except PersistenceError as e:
        print(f"Error seeding slots: {e}")
        logger.error("Seeding aborted", exc_info=e)
        return 1

    invalidate_free_slots(config)
    print_summary(slots, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
