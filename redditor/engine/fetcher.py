"""HTTP fetching of subreddit listings."""

from __future__ import annotations

import time
from typing import Any, Callable

import httpx
import structlog

from ..config import REDDIT_BASE_URL, FeedQuery, RetryConfig
from ..errors import FetchError
from ..logging_conf import configure_logging

DEFAULT_USER_AGENT = "redditor/0.1 (command line subreddit watcher)"


class FeedFetcher:
    """Fetch a listing document, optionally retrying with capped backoff."""

    def __init__(
        self,
        retry: RetryConfig | None = None,
        *,
        base_url: str = REDDIT_BASE_URL,
        timeout: float = 15.0,
        user_agent: str = DEFAULT_USER_AGENT,
        sleep: Callable[[float], None] = time.sleep,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.retry = retry or RetryConfig()
        self.base_url = base_url
        self.sleep = sleep
        self.logger = logger or configure_logging().bind(component="fetcher")
        # reddit throttles requests carrying a generic client User-Agent
        self._client = httpx.Client(
            follow_redirects=True,
            timeout=timeout,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
        )

    def __enter__(self) -> "FeedFetcher":
        return self

    def __exit__(self, *_exc_info: Any) -> None:
        self.close()

    def __call__(self, query: FeedQuery) -> dict:
        return self.fetch(query)

    def close(self) -> None:
        self._client.close()

    def fetch(self, query: FeedQuery) -> dict:
        url = query.url(self.base_url)
        retry_number = 0
        while True:
            try:
                return self._fetch_once(url, query.params())
            except FetchError as exc:
                if retry_number >= self.retry.attempts:
                    self.logger.error(
                        "fetch_failed",
                        url=url,
                        attempts=retry_number + 1,
                        error=str(exc),
                    )
                    raise
                retry_number += 1
                delay = self.retry.delay_for(retry_number)
                self.logger.warning(
                    "fetch_retry",
                    url=url,
                    retry=retry_number,
                    delay=delay,
                    error=str(exc),
                )
                self.sleep(delay)

    # ------------------------------------------------------------------
    def _fetch_once(self, url: str, params: dict[str, Any]) -> dict:
        try:
            response = self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise FetchError(f"Request to {url} failed: {exc}", url=url) from exc
        if not response.is_success:
            raise FetchError(
                f"Unexpected status {response.status_code} from {url}",
                url=url,
                status_code=response.status_code,
            )
        try:
            document = response.json()
        except ValueError as exc:
            raise FetchError(f"Response from {url} is not valid JSON", url=url) from exc
        if not isinstance(document, dict):
            raise FetchError(f"Response from {url} is not a JSON object", url=url)
        self.logger.debug("fetch_ok", url=url, status=response.status_code)
        return document


__all__ = ["DEFAULT_USER_AGENT", "FeedFetcher"]
