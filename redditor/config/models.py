"""Pydantic models used across the redditor configuration flow."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

REDDIT_BASE_URL = "https://www.reddit.com"
DEFAULT_PAGE_SIZE = 10


class SortMode(str, Enum):
    """Listing orders offered by the subreddit endpoints."""

    HOT = "hot"
    NEW = "new"
    TOP = "top"


class IdentityKey(str, Enum):
    """Field used to decide whether two posts are the same item."""

    TITLE = "title"
    ID = "id"


class FeedQuery(BaseModel):
    """Which listing to poll. Built once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    subreddit: str
    sort: SortMode = SortMode.HOT
    limit: int = DEFAULT_PAGE_SIZE

    @field_validator("subreddit", mode="before")
    @classmethod
    def _normalise_subreddit(cls, value: Any) -> str:
        text = str(value or "").strip().lstrip("/")
        if text.lower().startswith("r/"):
            text = text[2:]
        text = text.strip("/")
        if not text:
            raise ValueError("subreddit cannot be empty")
        return text

    @field_validator("limit")
    @classmethod
    def _validate_limit(cls, value: int) -> int:
        if not 1 <= value <= 100:
            raise ValueError("limit must be between 1 and 100")
        return value

    def url(self, base_url: str = REDDIT_BASE_URL) -> str:
        return f"{base_url.rstrip('/')}/r/{self.subreddit}/{self.sort.value}.json"

    def params(self) -> dict[str, int]:
        return {"limit": self.limit}


class RetryConfig(BaseModel):
    """Bounded retry policy for the fetch boundary.

    ``attempts`` counts retries on top of the first request, so the default
    of zero keeps the fail-fast behaviour.
    """

    attempts: int = 0
    backoff_factor: float = 2.0
    max_backoff: float = 60.0

    @model_validator(mode="after")
    def _validate_values(self) -> "RetryConfig":
        if self.attempts < 0:
            raise ValueError("attempts must be >= 0")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be >= 1")
        if self.max_backoff < 0:
            raise ValueError("max_backoff must be >= 0")
        return self

    def delay_for(self, retry_number: int) -> float:
        """Return the pause before the given 1-based retry."""

        return min(self.backoff_factor**retry_number, self.max_backoff)


class WatchConfig(BaseModel):
    """Everything needed to start a watch session."""

    subreddit: str | None = None
    sort: SortMode = SortMode.HOT
    interval: int = Field(default=10, description="Seconds to sleep between cycles.")
    identity: IdentityKey = IdentityKey.TITLE
    seen_capacity: int | None = None
    retry: RetryConfig = Field(default_factory=RetryConfig)

    @field_validator("interval")
    @classmethod
    def _validate_interval(cls, value: int) -> int:
        if value < 1:
            raise ValueError("interval must be at least one second")
        return value

    @field_validator("seen_capacity")
    @classmethod
    def _validate_capacity(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("seen_capacity must be positive when set")
        return value

    def build_query(self) -> FeedQuery:
        if not self.subreddit:
            raise ValueError("A subreddit name is required")
        return FeedQuery(subreddit=self.subreddit, sort=self.sort)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "FeedQuery",
    "IdentityKey",
    "REDDIT_BASE_URL",
    "RetryConfig",
    "SortMode",
    "WatchConfig",
]
