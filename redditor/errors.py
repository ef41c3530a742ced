"""Exceptions raised while fetching and reading a listing."""

from __future__ import annotations


class RedditorError(Exception):
    """Base class for failures that end a watch session."""


class FetchError(RedditorError):
    """The listing could not be retrieved or decoded."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FieldError(RedditorError):
    """An expected listing field is absent or cannot be parsed."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


__all__ = ["FetchError", "FieldError", "RedditorError"]
