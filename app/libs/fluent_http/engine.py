import logging
from typing import Any

import httpx

from .request import Request
from .transport import HttpxTransport

logger = logging.getLogger(__name__)


class HttpEngine:
    """Factory for :class:`Request` objects sharing a set of default headers.

    Default headers are read when a request is sent, so ``add_header`` and
    ``remove_header`` also affect requests made earlier but not sent yet. The
    map is not locked: changing it while requests are in flight from other
    threads is up to the caller to coordinate.
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._default_headers: dict[str, str] = {}
        self._transport = HttpxTransport(client)

    @property
    def default_headers(self) -> dict[str, str]:
        return dict(self._default_headers)

    def make(self, url: str) -> Request:
        return Request(url, self._transport, self._default_headers)

    def add_header(self, key: str, value: str) -> None:
        """Add a default header, replacing the value if the key is already set."""
        self._default_headers[key] = value

    def remove_header(self, key: str) -> None:
        if self._default_headers.pop(key, None) is not None:
            logger.debug(f"removed default header {key}")

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> "HttpEngine":
        await self._transport.__aenter__()
        return self

    async def __aexit__(self, *_args: Any) -> None:
        await self.close()
