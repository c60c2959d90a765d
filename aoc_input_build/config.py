import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .release import current_time


class ConfigError(Exception):
    __slots__ = ()


@dataclass(frozen=True)
class Settings:
    root: Path
    token: Optional[str]
    year: int
    jobs: int = 1


def _get_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def load_settings(
    root: Path | str = ".",
    *,
    token: Optional[str] = None,
    year: Optional[int] = None,
    jobs: Optional[int] = None,
) -> Settings:
    """Read ``AOC_TOKEN``, ``AOC_YEAR`` and ``AOC_JOBS``.

    A ``.env`` file in ``root`` is loaded first but never overrides variables
    that are already set in the environment. Explicit arguments win over both,
    and the matching variable is not parsed at all.
    """
    root = Path(root)
    load_dotenv(root / ".env", override=False)

    if jobs is None:
        jobs = _get_int_env("AOC_JOBS", 1)
    if jobs < 1:
        raise ConfigError(f"number of jobs must be at least 1, got {jobs}")

    if year is None:
        year = _get_int_env("AOC_YEAR", current_time().year)

    return Settings(
        root=root,
        token=token or os.getenv("AOC_TOKEN") or None,
        year=year,
        jobs=jobs,
    )
