"""Endpoint resolution.

The storage service is always the server that served the page, so every
request URL is derived from the page's current location.
"""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from .types import Host, Scheme

# Characters encodeURIComponent leaves alone on top of quote()'s own safe set
_URI_COMPONENT_SAFE = "!~*'()"


def percent_encode(name: str) -> str:
    """Percent-encode a file name for use as a single path segment.

    Matches encodeURIComponent: "/", "?", "#", "&" and friends are escaped,
    so the result always stays one segment. Reversible with
    ``urllib.parse.unquote``.
    """
    return quote(name, safe=_URI_COMPONENT_SAFE)


class PageLocation(BaseModel):
    """Scheme and host of the page the client is attached to."""

    scheme: Scheme
    host: Host

    @classmethod
    def from_url(cls, url: str) -> PageLocation:
        """Build a location from any URL on the origin.

        Path, query and fragment are ignored. Default ports are dropped
        from the host, as a browser does.

        Raises:
            ValueError: If the URL has no scheme or host
        """
        parsed = httpx.URL(str(url))
        if not parsed.scheme or not parsed.host:
            raise ValueError(f"Not an absolute URL: {url!r}")
        return cls(scheme=parsed.scheme, host=parsed.netloc.decode("ascii"))

    @property
    def origin(self) -> str:
        return f"{self.scheme}://{self.host}"


class EndpointResolver:
    """Derives the storage service base address from the page location.

    The location source is consulted on every call and never memoized, so a
    client that navigates to another origin immediately talks to it.
    """

    def __init__(self, location_source: Callable[[], PageLocation]):
        self._location_source = location_source

    def resolve(self) -> str:
        """Return ``<scheme>://<host>/`` for the current location."""
        location = self._location_source()
        return f"{location.origin}/"

    def url_for(self, file_id: str) -> str:
        """URL of a stored file. The identifier is inserted as given."""
        return self.resolve() + file_id

    def upload_url(self, name: str) -> str:
        """URL an upload of ``name`` is sent to."""
        return self.resolve() + percent_encode(name)
