"""User-facing output helpers."""

from .display import FeedPrinter

__all__ = ["FeedPrinter"]
