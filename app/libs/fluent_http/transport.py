"""httpx-backed transport.

:class:`HttpxTransport` starts requests on an ``httpx.AsyncClient`` and hands
back a :class:`TransportOperation`, a handle on the running transfer. The
handle buffers the whole body, counts bytes as they arrive and records how the
transfer ended as a :class:`TransportResult`:

- ``SUCCESS``: a response with a non-error status was fully read.
- ``PROTOCOL_ERROR``: the server answered with a 4xx/5xx status.
- ``CONNECTION_ERROR``: no usable response (DNS, refused, timeout, abort).
- ``DATA_PROCESSING_ERROR``: the body could not be decoded.
"""

import asyncio
import logging
import time
from enum import StrEnum
from typing import Any

import httpx

from configs import app_config

logger = logging.getLogger(__name__)


class TransportResult(StrEnum):
    IN_PROGRESS = "in_progress"
    SUCCESS = "success"
    CONNECTION_ERROR = "connection_error"
    PROTOCOL_ERROR = "protocol_error"
    DATA_PROCESSING_ERROR = "data_processing_error"


class TransportOperation:
    def __init__(self, client: httpx.AsyncClient, request: httpx.Request, timeout: float | None = None):
        self._client = client
        self.request = request
        # deadline for the whole transfer; httpx only limits each phase
        self.timeout = timeout
        self.result = TransportResult.IN_PROGRESS
        self.error: str | None = None
        self.latency_ms = 0
        self._response: httpx.Response | None = None
        self._buffer = bytearray()
        self._task: asyncio.Task | None = None
        self._start_time = 0.0

    def start(self) -> "TransportOperation":
        self._start_time = time.time()
        self._task = asyncio.create_task(self._run())
        return self

    async def _run(self) -> None:
        try:
            async with asyncio.timeout(self.timeout):
                await self._receive()
        except asyncio.CancelledError:
            self._finish(TransportResult.CONNECTION_ERROR, "Request aborted")
            raise
        except TimeoutError:
            self._finish(TransportResult.CONNECTION_ERROR, f"Request timed out after {self.timeout}s")
        except httpx.DecodingError as e:
            self._finish(TransportResult.DATA_PROCESSING_ERROR, str(e) or type(e).__name__)
        except httpx.RequestError as e:
            # TimeoutException, NetworkError, ProtocolError, TooManyRedirects...
            self._finish(TransportResult.CONNECTION_ERROR, str(e) or type(e).__name__)

    async def _receive(self) -> None:
        response = await self._client.send(self.request, stream=True)
        self._response = response
        try:
            async for chunk in response.aiter_bytes():
                self._buffer.extend(chunk)
        finally:
            await response.aclose()

        if response.is_error:
            self._finish(
                TransportResult.PROTOCOL_ERROR,
                f"{response.http_version} {response.status_code} {response.reason_phrase}",
            )
        else:
            self._finish(TransportResult.SUCCESS)

    def _finish(self, result: TransportResult, error: str | None = None) -> None:
        self.result = result
        self.error = error
        self.latency_ms = int((time.time() - self._start_time) * 1000)

    @property
    def url(self) -> str:
        return str(self.request.url)

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    @property
    def exception(self) -> BaseException | None:
        """Exception that escaped the transfer, other than an abort."""
        if not self.done or self._task.cancelled():
            return None
        return self._task.exception()

    @property
    def headers_received(self) -> bool:
        return self._response is not None

    @property
    def status_code(self) -> int:
        """HTTP status, 0 when no complete response arrived (a timeout or abort mid-body included)."""
        if self._response is None or self.result == TransportResult.CONNECTION_ERROR:
            return 0
        return self._response.status_code

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._response.headers) if self._response is not None else {}

    def get_response_header(self, name: str) -> str | None:
        if self._response is None:
            return None
        return self._response.headers.get(name)

    @property
    def downloaded_bytes(self) -> int:
        return len(self._buffer)

    @property
    def content(self) -> bytes:
        return bytes(self._buffer)

    @property
    def text(self) -> str:
        encoding = self._response.encoding if self._response is not None else None
        return self.content.decode(encoding or "utf-8", errors="replace")

    def abort(self) -> None:
        if self._task is not None and not self._task.done():
            logger.debug(f"aborting {self.request.method} {self.url}")
            self._task.cancel()

    async def wait(self, timeout: float | None = None) -> bool:
        """Suspend until the transfer ends or ``timeout`` seconds pass.

        Returns True once the operation is done.
        """
        if self._task is None:
            raise RuntimeError("operation has not been started")
        done, _ = await asyncio.wait({self._task}, timeout=timeout)
        return bool(done)


class HttpxTransport:
    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client
        # an injected client belongs to the caller and is left open on close()
        self._owns_client = client is None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": app_config.HTTP_USER_AGENT},
                follow_redirects=app_config.HTTP_FOLLOW_REDIRECTS,
            )
        return self._client

    async def close(self) -> None:
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        self._ensure_client()
        return self

    async def __aexit__(self, *_args: Any) -> None:
        await self.close()

    def start(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        payload: bytes | None,
        timeout: float,
    ) -> TransportOperation:
        client = self._ensure_client()
        request = client.build_request(
            method=method,
            url=url,
            headers=headers,
            content=payload,
            timeout=timeout,
        )
        return TransportOperation(client, request, timeout).start()
