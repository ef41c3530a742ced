"""Pytest fixtures shared across the redditor test suite."""

from __future__ import annotations

import os
from io import StringIO
from typing import Any, Callable, Iterable

import pytest
from rich.console import Console

from redditor.config import FeedQuery, SortMode
from redditor.logging_conf import configure_logging
from redditor.ui import FeedPrinter


@pytest.fixture(scope="session", autouse=True)
def _isolated_home(tmp_path_factory: pytest.TempPathFactory) -> Iterable[None]:
    home = tmp_path_factory.mktemp("redditor-home")
    previous = os.environ.get("REDDITOR_HOME")
    os.environ["REDDITOR_HOME"] = str(home)
    configure_logging()
    yield
    if previous is None:
        os.environ.pop("REDDITOR_HOME", None)
    else:
        os.environ["REDDITOR_HOME"] = previous


def make_post(
    title: str,
    permalink: str | None = None,
    created_utc: Any = 1700000000.0,
    name: str | None = None,
) -> dict[str, Any]:
    slug = title.lower().replace(" ", "_")
    data: dict[str, Any] = {
        "title": title,
        "permalink": permalink or f"/r/testsub/comments/{slug}/",
        "created_utc": created_utc,
    }
    if name is not None:
        data["name"] = name
    return {"kind": "t3", "data": data}


def make_listing(*posts: dict[str, Any]) -> dict[str, Any]:
    return {"kind": "Listing", "data": {"children": list(posts)}}


class StubFetch:
    """Return queued listing documents; queued exceptions are raised instead."""

    def __init__(self, responses: Iterable[Any]) -> None:
        self.responses = list(responses)
        self.queries: list[FeedQuery] = []
        self.closed = False

    def __call__(self, query: FeedQuery) -> Any:
        self.queries.append(query)
        if not self.responses:
            raise AssertionError("no more listings queued")
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


class RecordingPrinter(FeedPrinter):
    """FeedPrinter writing into in-memory buffers."""

    def __init__(self) -> None:
        super().__init__(
            console=Console(file=StringIO(), soft_wrap=True),
            error_console=Console(file=StringIO(), soft_wrap=True),
        )

    @property
    def output(self) -> str:
        return self.console.file.getvalue()

    @property
    def errors(self) -> str:
        return self.error_console.file.getvalue()

    @property
    def lines(self) -> list[str]:
        return self.output.splitlines()


@pytest.fixture
def post() -> Callable[..., dict[str, Any]]:
    return make_post


@pytest.fixture
def listing() -> Callable[..., dict[str, Any]]:
    return make_listing


@pytest.fixture
def stub_fetch() -> Callable[..., StubFetch]:
    return StubFetch


@pytest.fixture
def printer() -> RecordingPrinter:
    return RecordingPrinter()


@pytest.fixture
def sample_query() -> FeedQuery:
    return FeedQuery(subreddit="testsub", sort=SortMode.NEW)
