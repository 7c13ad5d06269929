import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from interview_slots.errors import ConfigError

DEFAULT_RANGE_START = "2026-02-13T21:00:00+05:30"
DEFAULT_RANGE_END = "2026-02-27T01:00:00+05:30"


@dataclass(frozen=True)
class SeedConfig:
    """
    Parameters for one seeding run.

    Attributes:
        range_start: first instant a slot may start at (inclusive)
        range_end: last instant a slot may end at (exclusive bound of the range)
        daily_start_hour / daily_end_hour: active window, local hours 0-23.
            An end hour at or below the start hour means the window crosses midnight.
        slot_duration_minutes: length of every slot
        max_bookings_per_slot: informational, used for the capacity summary
        target_slot_count: generation stops once this many slots exist
        timezone: zone the daily hours are evaluated in
    """
    range_start: datetime
    range_end: datetime
    daily_start_hour: int = 21
    daily_end_hour: int = 1
    slot_duration_minutes: int = 20
    max_bookings_per_slot: int = 3
    target_slot_count: int = 504
    timezone: str = "Asia/Kolkata"
    region: str = "us-east-1"
    table_name: str = "InterviewSlots"
    endpoint_url: Optional[str] = None
    redis_host: Optional[str] = None
    redis_port: int = 6379

    def __post_init__(self):
        for name in ("range_start", "range_end"):
            value = getattr(self, name)
            if value.tzinfo is None or value.utcoffset() is None:
                raise ConfigError(f"{name} must carry a UTC offset, got {value.isoformat()}")
        if self.range_end <= self.range_start:
            raise ConfigError(
                f"range_end ({self.range_end.isoformat()}) must be after "
                f"range_start ({self.range_start.isoformat()})"
            )

        for name in ("daily_start_hour", "daily_end_hour"):
            hour = getattr(self, name)
            if not 0 <= hour <= 23:
                raise ConfigError(f"{name} must be between 0 and 23, got {hour}")

        for name in ("slot_duration_minutes", "max_bookings_per_slot", "target_slot_count"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")

        if self.window_minutes < self.slot_duration_minutes:
            raise ConfigError(
                f"Daily window of {self.window_minutes} minutes cannot fit one "
                f"{self.slot_duration_minutes}-minute slot"
            )

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown time zone: {self.timezone}") from e

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def slot_duration(self) -> timedelta:
        return timedelta(minutes=self.slot_duration_minutes)

    @property
    def crosses_midnight(self) -> bool:
        return self.daily_end_hour <= self.daily_start_hour

    @property
    def window_minutes(self) -> int:
        hours = self.daily_end_hour - self.daily_start_hour
        if self.crosses_midnight:
            hours += 24
        return hours * 60

    @property
    def slots_per_day(self) -> int:
        """Full slots one daily window holds, e.g. 21:00-01:00 at 20 min -> 12."""
        return self.window_minutes // self.slot_duration_minutes

    @classmethod
    def from_env(cls, environ=None) -> "SeedConfig":
        if environ is None:
            if os.path.exists(".env"):
                load_dotenv()
            environ = os.environ

        def _get(key, default=None):
            value = environ.get(key)
            return default if value in (None, "") else value

        return cls(
            range_start=_parse_instant("RANGE_START", _get("RANGE_START", DEFAULT_RANGE_START)),
            range_end=_parse_instant("RANGE_END", _get("RANGE_END", DEFAULT_RANGE_END)),
            daily_start_hour=_parse_int("DAILY_START_HOUR", _get("DAILY_START_HOUR", "21")),
            daily_end_hour=_parse_int("DAILY_END_HOUR", _get("DAILY_END_HOUR", "1")),
            slot_duration_minutes=_parse_int("SLOT_DURATION_MINS", _get("SLOT_DURATION_MINS", "20")),
            max_bookings_per_slot=_parse_int("MAX_BOOKINGS_PER_SLOT", _get("MAX_BOOKINGS_PER_SLOT", "3")),
            target_slot_count=_parse_int("TOTAL_SLOTS_REQUIRED", _get("TOTAL_SLOTS_REQUIRED", "504")),
            timezone=_get("SLOT_TIMEZONE", "Asia/Kolkata"),
            region=_get("AWS_REGION", "us-east-1"),
            table_name=_get("TABLE_NAME", "InterviewSlots"),
            endpoint_url=_get("DYNAMODB_ENDPOINT"),
            redis_host=_get("REDIS_HOST"),
            redis_port=_parse_int("REDIS_PORT", _get("REDIS_PORT", "6379")),
        )


def _parse_int(key: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from e


def _parse_instant(key: str, raw: str) -> datetime:
    try:
        return datetime.fromisoformat(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be an ISO-8601 timestamp, got {raw!r}") from e
