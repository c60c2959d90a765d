"""Download Advent of Code puzzle inputs for a project at build time.

For every ``src/dayXX.*`` file under the project root the matching input is
fetched into ``input/dayXX.txt``. Inputs that already exist are never fetched
again, days that are not released yet are skipped with a warning, and a day
whose fetch fails leaves no file behind so the next build retries it::

    from aoc_input_build import download_inputs

    result = download_inputs(".", token=os.environ["AOC_TOKEN"], year=2024)
    if not result.ok:
        sys.exit(1)
"""

import enum
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import ExitStack
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

import requests

from . import release
from .days import ensure_cache_dir, list_cached, list_days, write_input
from .errors import (
    DayOutOfRange,
    InputBuildError,
    NotReleased,
    report,
)
from .fetch import fetch_input

logger = logging.getLogger(__name__)


class DayStatus(enum.Enum):
    CACHED = "cached"
    OUT_OF_RANGE = "out of range"
    NOT_RELEASED = "not released"
    SAVED = "saved"
    FAILED = "failed"


@dataclass
class RunReport:
    year: int
    days: dict[int, DayStatus] = field(default_factory=dict)
    fatal: Optional[InputBuildError] = None

    @property
    def ok(self) -> bool:
        return self.fatal is None

    def with_status(self, status: DayStatus) -> list[int]:
        return sorted(d for d, s in self.days.items() if s is status)

    def summary(self) -> str:
        counts = ", ".join(
            f"{len(self.with_status(s))} {s.value}" for s in DayStatus
        )
        return f"AoC {self.year}: {counts}"


def _admit(today: datetime, year: int, day: int) -> Optional[DayStatus]:
    try:
        release.validate_day(year, day)
        release.check_released(today, year, day)
    except DayOutOfRange as err:
        report(err)
        return DayStatus.OUT_OF_RANGE
    except NotReleased as err:
        report(err)
        return DayStatus.NOT_RELEASED
    return None


def download_inputs(
    root: Path | str,
    token: str,
    year: int,
    *,
    now: Optional[datetime] = None,
    session: Optional[requests.Session] = None,
    jobs: int = 1,
) -> RunReport:
    """Download input files for ``year``'s Advent of Code into ``root/input``.

    ``token`` is the AoC cookie called ``session``. ``now`` defaults to the
    current time and only exists so the release gate can be pinned.

    Every problem is logged; the returned report is not ``ok`` only when a
    fatal condition (year out of range, unreadable source or cache directory)
    stopped the run.
    """
    today = now or release.current_time()
    result = RunReport(year)

    try:
        release.validate_year(today, year)
        declared = list_days(root)
        cache_dir = ensure_cache_dir(root)
        # snapshot taken once, before any fetch starts
        cached = list_cached(cache_dir)
    except InputBuildError as err:
        report(err)
        result.fatal = err
        return result

    pending = []
    for day in sorted(declared):
        if day in cached:
            result.days[day] = DayStatus.CACHED
            continue

        status = _admit(today, year, day)
        if status is not None:
            result.days[day] = status
        else:
            pending.append(day)

    # an injected session is shared as is; otherwise every thread gets its own
    local = threading.local()
    owned: list[requests.Session] = []

    def get_session() -> requests.Session:
        if session is not None:
            return session
        s = getattr(local, "session", None)
        if s is None:
            s = local.session = requests.Session()
            owned.append(s)
        return s

    def close_sessions() -> None:
        for s in owned:
            s.close()

    def fetch_and_save(day: int) -> DayStatus:
        try:
            content = fetch_input(token, year, day, session=get_session())
            path = write_input(cache_dir, day, content)
        except InputBuildError as err:
            report(err)
            return DayStatus.FAILED
        logger.info("Saved day %s input to %s", day, path)
        return DayStatus.SAVED

    with ExitStack() as stack:
        # registered first so it runs after the pool has shut down
        stack.callback(close_sessions)

        if jobs > 1 and len(pending) > 1:
            pool = stack.enter_context(
                ThreadPoolExecutor(max_workers=min(jobs, len(pending)))
            )
            # each day is submitted exactly once, so no two workers share a file
            statuses = pool.map(fetch_and_save, pending)
        else:
            statuses = map(fetch_and_save, pending)

        for day, status in zip(pending, statuses):
            result.days[day] = status

    logger.info("%s", result.summary())
    return result


__all__ = ["DayStatus", "RunReport", "download_inputs"]
