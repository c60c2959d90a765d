from datetime import datetime
from typing import Final
from zoneinfo import ZoneInfo

from .errors import DayOutOfRange, NotReleased, YearOutOfRange

FIRST_YEAR: Final = 2015

RELEASE_MONTH: Final = 12
RELEASE_HOUR: Final = 0
RELEASE_TZ: Final = ZoneInfo("America/New_York")

# starting from 2025 there are only 12 days - https://adventofcode.com/2025/about#faq_num_days
SHORT_CALENDAR_YEAR: Final = 2025


def current_time() -> datetime:
    return datetime.now(RELEASE_TZ)


def last_day(year: int) -> int:
    return 12 if year >= SHORT_CALENDAR_YEAR else 25


def release_instant(year: int, day: int) -> datetime:
    return datetime(year, RELEASE_MONTH, day, RELEASE_HOUR, tzinfo=RELEASE_TZ)


def is_released(now: datetime, year: int, day: int) -> bool:
    return now >= release_instant(year, day)


def check_released(now: datetime, year: int, day: int) -> None:
    release = release_instant(year, day)
    if now < release:
        raise NotReleased(day, release)


def validate_year(today: datetime, year: int) -> None:
    # NOTE: this assumes that AoC will be available each year
    if not FIRST_YEAR <= year <= today.year:
        raise YearOutOfRange(year, today.year)


def validate_day(year: int, day: int) -> None:
    last = last_day(year)
    if not 1 <= day <= last:
        raise DayOutOfRange(day, last)
