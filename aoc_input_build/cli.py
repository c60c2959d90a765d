# NOTE: build hooks call this through fetch.py at the repository root
# any changes to the CLI api should be reflected there

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import download_inputs
from .config import ConfigError, load_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        "aoc-input-build",
        description="Download Advent of Code inputs for every src/dayXX file of a project.",
    )
    parser.add_argument(
        "--root",
        "-r",
        default=".",
        help="project root containing src/ and input/, defaults to the current directory",
    )
    parser.add_argument(
        "--year", "-y", type=int, help="AoC year, defaults to $AOC_YEAR or the current year"
    )
    parser.add_argument(
        "--token", "-t", help="value of the AoC 'session' cookie, defaults to $AOC_TOKEN"
    )
    parser.add_argument(
        "--jobs", "-j", type=int, help="number of days to fetch in parallel, defaults to $AOC_JOBS or 1"
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true")
    verbosity.add_argument(
        "--quiet", "-q", action="store_true", help="only report warnings and errors"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parsed = build_parser().parse_args(argv)

    if parsed.verbose:
        level = logging.DEBUG
    elif parsed.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    try:
        settings = load_settings(
            parsed.root, token=parsed.token, year=parsed.year, jobs=parsed.jobs
        )
    except ConfigError as e:
        logger.error("%s", e)
        return 2

    if not settings.token:
        logger.error("no AoC session token, pass --token or set AOC_TOKEN")
        return 2

    result = download_inputs(
        settings.root, settings.token, settings.year, jobs=settings.jobs
    )
    return 0 if result.ok else 1


def run() -> None:
    sys.exit(main())
