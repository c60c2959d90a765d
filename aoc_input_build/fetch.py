import logging
from typing import Final, Optional

import requests

from .errors import RequestFailed

AOC_URL: Final = "https://adventofcode.com"
AOC_USER_AGENT: Final = "aoc-input-build/0.1.0 (build-time Advent of Code input fetcher)"

logger = logging.getLogger(__name__)


def format_token(token: str) -> str:
    """Cookie header value for a session token, pasted with or without ``session=``.

    Raises ``UnicodeEncodeError`` for tokens that cannot go into an HTTP
    header (headers are sent as Latin-1).
    """
    token = token.strip()
    if not token.startswith("session="):
        token = f"session={token}"
    token.encode("latin-1")
    return token


def input_url(year: int, day: int) -> str:
    return f"{AOC_URL}/{year}/day/{day}/input"


def fetch_input(
    token: str, year: int, day: int, session: Optional[requests.Session] = None
) -> str:
    url = input_url(year, day)
    logger.info("Fetching input for day %s", day)

    try:
        headers = {"User-Agent": AOC_USER_AGENT, "Cookie": format_token(token)}
        r = (session or requests).get(url, headers=headers)
        r.raise_for_status()
        # require utf8 response
        return r.content.decode("utf8")
    except (requests.RequestException, UnicodeError) as e:
        raise RequestFailed(url, e) from e
