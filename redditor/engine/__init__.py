"""Engine components: fetch → parse → dedup."""

from .dedup import SeenSet
from .fetcher import FeedFetcher
from .parser import Item, parse_listing

__all__ = [
    "FeedFetcher",
    "Item",
    "SeenSet",
    "parse_listing",
]
