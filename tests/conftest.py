from __future__ import annotations

from datetime import datetime
import threading
from pathlib import Path

import pytest
import requests

from aoc_input_build.release import RELEASE_TZ


class FakeResponse:
    def __init__(self, url: str, status_code: int = 200, content: bytes = b"") -> None:
        self.url = url
        self.status_code = status_code
        self.content = content

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}", response=self)


class FakeSession:
    """Stands in for ``requests.Session``; answers per URL, records every call."""

    def __init__(self) -> None:
        self.routes: dict[str, object] = {}
        self.calls: list[tuple[str, dict]] = []
        self.threads: set[int] = set()
        self.closed = False

    def add(self, url: str, status_code: int = 200, content: bytes = b"") -> None:
        self.routes[url] = FakeResponse(url, status_code, content)

    def fail(self, url: str, exc: Exception) -> None:
        self.routes[url] = exc

    def get(self, url: str, headers: dict | None = None) -> FakeResponse:
        self.calls.append((url, dict(headers or {})))
        self.threads.add(threading.get_ident())
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(url, 404)
        if isinstance(route, Exception):
            raise route
        return route

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def december_10() -> datetime:
    return datetime(2024, 12, 10, 12, 0, tzinfo=RELEASE_TZ)


@pytest.fixture
def project(tmp_path: Path):
    def make(*names: str) -> Path:
        src = tmp_path / "src"
        src.mkdir(exist_ok=True)
        for name in names:
            (src / name).write_text("fn main() {}\n")
        return tmp_path

    return make


@pytest.fixture
def created_sessions(monkeypatch, session) -> list[FakeSession]:
    """Sessions opened by the code under test; they answer like ``session``."""
    created = []

    def make() -> FakeSession:
        s = FakeSession()
        s.routes = session.routes
        created.append(s)
        return s

    monkeypatch.setattr(requests, "Session", make)
    return created
