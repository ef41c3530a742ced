"""Terminal output for the watch loop."""

from __future__ import annotations

from rich.console import Console

from ..config import FeedQuery
from ..engine.parser import Item


class FeedPrinter:
    """Print items and status lines verbatim to stdout.

    Titles come from user content, so Rich markup, highlighting and wrapping
    are disabled for every line.
    """

    def __init__(self, console: Console | None = None, error_console: Console | None = None) -> None:
        self.console = console or Console(soft_wrap=True)
        self.error_console = error_console or Console(stderr=True, soft_wrap=True)

    def _line(self, text: str = "") -> None:
        self.console.print(text, markup=False, highlight=False, emoji=False)

    def header(self, query: FeedQuery) -> None:
        self._line(f"Showing posts from r/{query.subreddit} sorted by {query.sort.value} ...")
        self._line()

    def item(self, item: Item) -> None:
        self._line(item.title)
        self._line(item.url)
        self._line(item.created_label)
        self._line()

    def banner(self, interval: int) -> None:
        self._line(f"Checking for new posts every {interval} seconds...")
        self._line()

    def status(self, found_new: bool, interval: int) -> None:
        if found_new:
            self._line(f"Found the above new posts, checking again in {interval} seconds...")
        else:
            self._line(f"No new posts found, checking again in {interval} seconds...")

    def error(self, exc: BaseException) -> None:
        self.error_console.print(f"Error: {exc}", style="red", markup=False, highlight=False)


__all__ = ["FeedPrinter"]
