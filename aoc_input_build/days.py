import errno
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Final, Iterable

from .errors import FileSystemError

SOURCE_DIR_NAME: Final = "src"
DOWNLOAD_DIR_NAME: Final = "input"
INPUT_SUFFIX: Final = ".txt"

DAY_PATTERN: Final = re.compile(r"^day([0-2][0-9])$")

# os.link fails with these on filesystems without hard links (FAT, some network mounts)
NO_LINK_ERRNOS: Final = frozenset(
    {errno.EPERM, errno.ENOTSUP, errno.EOPNOTSUPP, errno.ENOSYS, errno.EXDEV}
)

logger = logging.getLogger(__name__)


def day_stem(day: int) -> str:
    return f"day{day:02}"


def input_path(cache_dir: Path, day: int) -> Path:
    return cache_dir / f"{day_stem(day)}{INPUT_SUFFIX}"


def _parse_stems(entries: Iterable[os.DirEntry[str]]) -> set[int]:
    days = set()
    for entry in entries:
        stem = os.path.splitext(entry.name)[0]
        m = DAY_PATTERN.match(stem)
        if m:
            days.add(int(m.group(1)))
    return days


def _scan(directory: Path, files_only: bool) -> set[int]:
    try:
        with os.scandir(directory) as it:
            entries = [e for e in it if not files_only or e.is_file()]
    except OSError as e:
        raise FileSystemError(directory, e) from e
    return _parse_stems(entries)


def list_days(root: Path | str) -> set[int]:
    """Days the project declares, from ``<root>/src/dayXX.*``."""
    days = _scan(Path(root) / SOURCE_DIR_NAME, files_only=True)
    logger.debug("Declared days: %s", sorted(days))
    return days


def ensure_cache_dir(root: Path | str) -> Path:
    download_dir = Path(root) / DOWNLOAD_DIR_NAME
    if not download_dir.exists():
        try:
            download_dir.mkdir()
        except OSError as e:
            raise FileSystemError(download_dir, e) from e
    return download_dir


def list_cached(cache_dir: Path) -> set[int]:
    # any entry for a day counts, its age and content are irrelevant
    days = _scan(cache_dir, files_only=False)
    logger.debug("Cached days: %s", sorted(days))
    return days


def _create_exclusive(target: Path, content: str) -> None:
    f = open(target, "x", encoding="utf-8", newline="")
    try:
        with f:
            f.write(content)
    except OSError:
        target.unlink(missing_ok=True)
        raise


def write_input(cache_dir: Path, day: int, content: str) -> Path:
    """Store a fetched input as ``dayXX.txt``.

    The text goes to a temporary file next to the target first and is then
    hard-linked into place, so a failed write never leaves a partial input
    behind and an existing input is never replaced. Where the filesystem has
    no hard links the target is created exclusively and removed again if the
    write fails.
    """
    target = input_path(cache_dir, day)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{day_stem(day)}.", suffix=".part", dir=cache_dir
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        try:
            os.link(tmp_name, target)
        except OSError as e:
            if e.errno not in NO_LINK_ERRNOS:
                raise
            logger.debug("Cannot hard-link in %s (%s), writing %s directly", cache_dir, e, target)
            _create_exclusive(target, content)
    except OSError as e:
        raise FileSystemError(target, e, fatal=False) from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("Could not remove temporary file %s: %s", tmp_name, e)
    return target
