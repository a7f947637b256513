"""Immutable description of one HTTP call to the storage service."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import quote, urlencode


class HttpMethod(str, Enum):
    """HTTP methods used by the storage API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"


@dataclass(frozen=True)
class PendingRequest:
    """Snapshot of a request that has been built but not sent.

    Header names are stored lower-cased; use :meth:`header` for lookups.
    """

    method: HttpMethod
    base_url: str
    path_segments: tuple[str, ...]
    headers: dict[str, str] = field(default_factory=dict)
    query: tuple[tuple[str, str], ...] = ()
    body: bytes | None = None

    @property
    def path(self) -> str:
        """Percent-encoded path relative to the base URL, with a leading slash."""
        return "/" + "/".join(quote(segment, safe="") for segment in self.path_segments)

    @property
    def url(self) -> str:
        """Absolute URL including the query string."""
        url = self.location
        if self.query:
            url = f"{url}?{urlencode(self.query)}"
        return url

    @property
    def location(self) -> str:
        """Absolute URL without the query string, safe to log."""
        return self.base_url.rstrip("/") + self.path

    def header(self, name: str) -> str | None:
        """Return a header value regardless of the case of ``name``."""
        return self.headers.get(name.lower())

    def describe(self) -> str:
        """Return a log-safe one-line description."""
        size = len(self.body) if self.body is not None else 0
        return f"{self.method.value} {self.location} ({size} bytes)"
