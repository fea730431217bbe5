"""Internal machinery: HTTP transport."""

from .http import (
    HttpClient,
    HttpError,
)

__all__ = ["HttpClient", "HttpError"]
