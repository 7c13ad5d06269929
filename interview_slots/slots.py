from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Tuple

from interview_slots.config import SeedConfig

FREE = "free"
FULL = "full"


@dataclass(frozen=True)
class Slot:
    """
    One bookable interview window.

    Seeding always writes FREE with booked_count 0; the booking subsystem moves
    a slot to FULL once booked_count reaches the per-slot capacity.
    """
    slot_number: int
    start_time: datetime
    end_time: datetime
    booked_count: int = 0
    status: str = FREE

    def to_item(self, zone=None) -> dict:
        """DynamoDB item; timestamps are ISO-8601 strings in `zone` (UTC if omitted)."""
        zone = zone or timezone.utc
        return {
            "slotNumber": self.slot_number,
            "bookedCount": self.booked_count,
            "startTime": self.start_time.astimezone(zone).isoformat(),
            "endTime": self.end_time.astimezone(zone).isoformat(),
            "status": self.status,
        }


def next_day(day: date) -> date:
    return day + timedelta(days=1)


def daily_window(day: date, config: SeedConfig) -> Tuple[datetime, datetime]:
    zone = config.zone
    start = datetime.combine(day, time(config.daily_start_hour), tzinfo=zone)
    end_day = next_day(day) if config.crosses_midnight else day
    end = datetime.combine(end_day, time(config.daily_end_hour), tzinfo=zone)
    # step in absolute time so zone offsets never shift the grid
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def slots_for_day(day: date, config: SeedConfig, first_number: int, limit: int) -> List[Slot]:
    """
    Walk one day's window in fixed steps.

    Steps that start before range_start are skipped; the first step that would
    end past the window or past range_end ends the day. At most `limit` slots.
    """
    window_start, window_end = daily_window(day, config)
    range_start = config.range_start.astimezone(timezone.utc)
    range_end = config.range_end.astimezone(timezone.utc)
    step = config.slot_duration

    slots = []
    current = window_start
    while current < window_end and len(slots) < limit:
        following = current + step
        if following > window_end or following > range_end:
            break
        if current >= range_start:
            slots.append(Slot(first_number + len(slots), current, following))
        current = following
    return slots


def generate_slots(config: SeedConfig) -> List[Slot]:
    """
    Build the full batch, day by day, until the target is met or the range runs out.

    A range too short for the target gives a short batch, not an error.
    """
    range_end = config.range_end.astimezone(timezone.utc)
    slots: List[Slot] = []

    day = config.range_start.astimezone(config.zone).date()
    while len(slots) < config.target_slot_count:
        window_start, _ = daily_window(day, config)
        if window_start >= range_end:
            break
        slots.extend(
            slots_for_day(day, config, len(slots) + 1, config.target_slot_count - len(slots))
        )
        day = next_day(day)
    return slots
