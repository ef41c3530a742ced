from __future__ import annotations

from datetime import datetime

import pytest

from redditor.config import IdentityKey
from redditor.engine.parser import (
    TIMESTAMP_FORMAT,
    format_created,
    parse_created,
    parse_listing,
    unwrap_title,
)
from redditor.errors import FieldError


def test_parse_listing_keeps_upstream_order(listing, post) -> None:
    document = listing(post("Second"), post("First"), post("Third"))
    items = parse_listing(document)
    assert [item.title for item in items] == ["Second", "First", "Third"]


def test_item_url_and_label(listing, post) -> None:
    document = listing(post("Hello", permalink="/r/testsub/comments/abc/hello/"))
    item = parse_listing(document)[0]
    assert item.url == "https://www.reddit.com/r/testsub/comments/abc/hello/"
    expected = datetime.fromtimestamp(1700000000).strftime(TIMESTAMP_FORMAT)
    assert item.created_label == expected


def test_unwrap_title_strips_only_outer_quotes() -> None:
    assert unwrap_title('"Hello World"') == "Hello World"
    assert unwrap_title('Say "hi" now') == 'Say "hi" now'
    assert unwrap_title('""quoted""') == '"quoted"'
    assert unwrap_title('"') == '"'


def test_unwrap_title_rejects_non_strings() -> None:
    with pytest.raises(FieldError) as excinfo:
        unwrap_title(42)
    assert excinfo.value.field == "title"


def test_quoted_title_in_listing(listing, post) -> None:
    items = parse_listing(listing(post('"Hello World"')))
    assert items[0].title == "Hello World"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1700000000.0", 1700000000),
        (1700000000.0, 1700000000),
        (1700000000, 1700000000),
    ],
)
def test_parse_created_accepts_epoch_seconds(raw, expected) -> None:
    assert parse_created(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "soon",
        "",
        "1700000000.5",
        1700000000.25,
        True,
        None,
        [1],
        "1_700_000_000",
        "+1700000000",
        " 1700000000 ",
        "-1700000000",
    ],
)
def test_parse_created_rejects_other_values(raw) -> None:
    with pytest.raises(FieldError) as excinfo:
        parse_created(raw)
    assert excinfo.value.field == "created_utc"


def test_format_created_uses_day_month_year() -> None:
    moment = datetime(2023, 11, 14, 22, 13, 20)
    assert format_created(moment) == "14 November, 2023 22:13:20"


def test_missing_children_is_fatal() -> None:
    with pytest.raises(FieldError) as excinfo:
        parse_listing({"data": {}})
    assert excinfo.value.field == "data.children"
    with pytest.raises(FieldError):
        parse_listing({"error": 404})
    with pytest.raises(FieldError):
        parse_listing([])


@pytest.mark.parametrize("missing", ["title", "permalink", "created_utc"])
def test_missing_field_is_fatal(listing, post, missing) -> None:
    entry = post("Broken")
    del entry["data"][missing]
    with pytest.raises(FieldError) as excinfo:
        parse_listing(listing(post("Fine"), entry))
    assert excinfo.value.field == missing


def test_identity_prefers_post_id_when_requested(listing, post) -> None:
    with_id, without_id = parse_listing(
        listing(post("Same", name="t3_abc"), post("Same"))
    )
    assert with_id.identity() == "Same"
    assert with_id.identity(IdentityKey.ID) == "t3_abc"
    assert without_id.identity(IdentityKey.ID) == "Same"


def test_identity_falls_back_to_short_id(listing) -> None:
    document = listing(
        {"data": {"title": "T", "permalink": "/p/", "created_utc": 1.0, "id": "xyz"}}
    )
    assert parse_listing(document)[0].post_id == "xyz"
