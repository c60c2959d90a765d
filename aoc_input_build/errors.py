import logging
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


class InputBuildError(Exception):
    """Base for everything the fetcher reports instead of crashing on."""

    __slots__ = ("fatal",)

    # skipped days override this with WARNING
    severity = logging.ERROR

    def __init__(self, fatal: bool) -> None:
        super().__init__()
        self.fatal = fatal


class FileSystemError(InputBuildError):
    __slots__ = "path", "cause"

    def __init__(self, path: Path | str, cause: OSError, fatal: bool = True) -> None:
        super().__init__(fatal)
        self.path = str(path)
        self.cause = cause

    def __str__(self) -> str:
        return f"IO error: '{self.cause}' when accessing '{self.path}'"


class RequestFailed(InputBuildError):
    __slots__ = "url", "cause"

    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(False)
        self.url = url
        self.cause = cause

    def __str__(self) -> str:
        return f"HTTP error: '{self.cause}' when fetching '{self.url}'"


class NotReleased(InputBuildError):
    __slots__ = "day", "release"

    severity = logging.WARNING

    def __init__(self, day: int, release: datetime) -> None:
        super().__init__(False)
        self.day = day
        self.release = release

    def __str__(self) -> str:
        local = self.release.astimezone()
        return (
            f"trying to access day {self.day} input before it is ready on "
            f"{local:%Y-%m-%d %H:%M %Z}"
        )


class YearOutOfRange(InputBuildError):
    __slots__ = "year", "last_year"

    def __init__(self, year: int, last_year: int) -> None:
        super().__init__(True)
        self.year = year
        self.last_year = last_year

    def __str__(self) -> str:
        return (
            f"AoC for provided year '{self.year}' does not exist. "
            f"AoC exists for years 2015 to {self.last_year}."
        )


class DayOutOfRange(InputBuildError):
    __slots__ = "day", "last_day"

    severity = logging.WARNING

    def __init__(self, day: int, last_day: int) -> None:
        super().__init__(False)
        self.day = day
        self.last_day = last_day

    def __str__(self) -> str:
        return (
            f"Detected a day with number '{self.day}' out of valid range "
            f"1-{self.last_day}, skipping"
        )


def report(err: InputBuildError) -> bool:
    """Emit ``err`` on the diagnostic channel and return whether it is fatal.

    Fatal conditions and failed days go out at ERROR, skipped days at WARNING.
    """
    logger.log(err.severity, "%s", err)
    return err.fatal
