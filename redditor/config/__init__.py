"""Configuration package exports."""

from .loader import ConfigLocator, load_watch_config
from .models import (
    DEFAULT_PAGE_SIZE,
    REDDIT_BASE_URL,
    FeedQuery,
    IdentityKey,
    RetryConfig,
    SortMode,
    WatchConfig,
)

__all__ = [
    "ConfigLocator",
    "DEFAULT_PAGE_SIZE",
    "FeedQuery",
    "IdentityKey",
    "REDDIT_BASE_URL",
    "RetryConfig",
    "SortMode",
    "WatchConfig",
    "load_watch_config",
]
