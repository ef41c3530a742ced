"""Turn a raw subreddit listing document into an ordered item snapshot."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..config import REDDIT_BASE_URL, IdentityKey
from ..errors import FieldError

TIMESTAMP_FORMAT = "%d %B, %Y %H:%M:%S"


@dataclass(slots=True)
class Item:
    """One post taken from a listing snapshot."""

    title: str
    permalink: str
    created_at: datetime
    post_id: str | None = None

    @property
    def url(self) -> str:
        return REDDIT_BASE_URL + self.permalink

    @property
    def created_label(self) -> str:
        return format_created(self.created_at)

    def identity(self, key: IdentityKey = IdentityKey.TITLE) -> str:
        if key is IdentityKey.ID and self.post_id:
            return self.post_id
        return self.title


def unwrap_title(value: Any) -> str:
    """Return the title text without one pair of surrounding double quotes.

    Quotes inside the title are kept as they are.
    """

    if not isinstance(value, str):
        raise FieldError("title", f"expected a string, got {type(value).__name__}")
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def parse_created(value: Any) -> int:
    """Parse an epoch-seconds ``created_utc`` value such as ``1700000000.0``."""

    if isinstance(value, bool) or value is None:
        raise FieldError("created_utc", f"not a timestamp: {value!r}")
    # Work on the JSON text form so floats and strings behave the same way.
    text = value if isinstance(value, str) else json.dumps(value)
    if text.endswith(".0"):
        text = text[: -len(".0")]
    # Plain epoch digits only; int() would also take signs, underscores and padding.
    if not (text.isascii() and text.isdigit()):
        raise FieldError("created_utc", f"not a timestamp: {value!r}")
    return int(text)


def format_created(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)


def _to_local(epoch: int) -> datetime:
    try:
        return datetime.fromtimestamp(epoch).astimezone()
    except (OverflowError, OSError, ValueError) as exc:
        raise FieldError("created_utc", f"timestamp out of range: {epoch}") from exc


def parse_entry(entry: Any) -> Item:
    data = entry.get("data") if isinstance(entry, dict) else None
    if not isinstance(data, dict):
        raise FieldError("data", "listing entry has no data object")
    for field in ("title", "permalink", "created_utc"):
        if field not in data:
            raise FieldError(field, "missing from listing entry")
    permalink = data["permalink"]
    if not isinstance(permalink, str):
        raise FieldError("permalink", f"expected a string, got {type(permalink).__name__}")
    post_id = data.get("name") or data.get("id")
    return Item(
        title=unwrap_title(data["title"]),
        permalink=unwrap_title(permalink),
        created_at=_to_local(parse_created(data["created_utc"])),
        post_id=str(post_id) if post_id else None,
    )


def parse_listing(document: Any) -> list[Item]:
    """Return the listing's items in the order the upstream sent them."""

    data = document.get("data") if isinstance(document, dict) else None
    children = data.get("children") if isinstance(data, dict) else None
    if not isinstance(children, list):
        raise FieldError("data.children", "listing has no children array")
    return [parse_entry(entry) for entry in children]


__all__ = [
    "Item",
    "TIMESTAMP_FORMAT",
    "format_created",
    "parse_created",
    "parse_entry",
    "parse_listing",
    "unwrap_title",
]
