import asyncio
import logging

import httpx

from configs import app_config
from extensions.ext_logging import trace_id_generator, trace_id_var

from .cancellation import CancellationToken
from .errors import HttpRequestError, HttpResponseError, RequestCancelledError, UnexpectedTransportStateError
from .models import HttpMethod, ProgressSnapshot
from .transport import HttpxTransport, TransportOperation, TransportResult
from .types import HttpErrorHandler, ProgressCallback

logger = logging.getLogger(__name__)

_FAILED_RESULTS = (
    TransportResult.CONNECTION_ERROR,
    TransportResult.PROTOCOL_ERROR,
    TransportResult.DATA_PROCESSING_ERROR,
)


def parse_content_length(value: str | None) -> int:
    """Content-Length as a non-negative int, 0 when missing or malformed."""
    if value is None:
        return 0
    try:
        total = int(value)
    except ValueError:
        return 0
    return total if total >= 0 else 0


def read_progress(operation: TransportOperation) -> ProgressSnapshot | None:
    # nothing to report until the response headers are in
    if not operation.headers_received:
        return None
    return ProgressSnapshot(
        bytes_downloaded=operation.downloaded_bytes,
        total_bytes=parse_content_length(operation.get_response_header("Content-Length")),
    )


def classify(
    operation: TransportOperation,
    error_handler: HttpErrorHandler | None = None,
) -> TransportOperation:
    """Return the finished operation on success, raise the matching failure otherwise."""
    method = operation.request.method
    if operation.result == TransportResult.SUCCESS:
        logger.info(
            f"<- {operation.status_code} {method} {operation.url} "
            f"({operation.latency_ms}ms, {operation.downloaded_bytes} bytes)"
        )
        return operation

    if operation.result in _FAILED_RESULTS:
        logger.warning(
            f"<- {method} {operation.url} failed: {operation.result} "
            f"status={operation.status_code} error={operation.error}"
        )
        if error_handler is not None:
            raise error_handler.handle_error(operation)
        raise HttpResponseError(operation.status_code, operation.text, reason=operation.error)

    raise UnexpectedTransportStateError(
        f"Unexpected transport result {operation.result} for {method} {operation.url}"
    ) from operation.exception


async def _poll_progress(
    operation: TransportOperation,
    progress_callback: ProgressCallback,
    interval: float,
) -> None:
    while not operation.done:
        snapshot = read_progress(operation)
        if snapshot is not None:
            progress_callback(snapshot)
        await operation.wait(interval)


async def dispatch(
    transport: HttpxTransport,
    method: HttpMethod,
    url: str,
    timeout: float | None = None,
    payload: str | None = None,
    headers: dict[str, str] | None = None,
    error_handler: HttpErrorHandler | None = None,
    progress_callback: ProgressCallback | None = None,
    cancellation_token: CancellationToken | None = None,
) -> TransportOperation:
    """Run one request to a terminal state.

    Returns the finished operation holding the buffered body. Raises
    ``RequestCancelledError`` if ``cancellation_token`` was cancelled while the
    request ran (this wins over whatever the transport reported), otherwise
    the failure built by :func:`classify`.
    """
    trace_token = trace_id_var.set(trace_id_var.get() or trace_id_generator())
    try:
        body = payload.encode("utf-8") if payload else None
        effective_timeout = timeout or app_config.HTTP_DEFAULT_TIMEOUT

        logger.debug(f"-> {method} {url} timeout={effective_timeout}s payload={len(body or b'')} bytes")
        if cancellation_token is not None and cancellation_token.is_cancelled():
            logger.info(f"<- {method} {url} canceled before start")
            raise RequestCancelledError(url)

        try:
            operation = transport.start(method, url, headers or {}, body, effective_timeout)
        except httpx.InvalidURL as e:
            raise HttpRequestError(f"Invalid URL {url!r}: {e}") from e

        unregister = None
        if cancellation_token is not None:
            # cancel() may be called from another thread; the abort must run on this loop
            loop = asyncio.get_running_loop()
            unregister = cancellation_token.register(lambda: loop.call_soon_threadsafe(operation.abort))
        try:
            if progress_callback is None:
                await operation.wait()
            else:
                await _poll_progress(operation, progress_callback, app_config.HTTP_PROGRESS_POLL_INTERVAL)
        finally:
            if unregister is not None:
                unregister()
            if not operation.done:
                operation.abort()

        if cancellation_token is not None and cancellation_token.is_cancelled():
            logger.info(f"<- {method} {url} canceled")
            raise RequestCancelledError(url)

        classify(operation, error_handler)

        if progress_callback is not None:
            progress_callback(read_progress(operation))
        return operation
    finally:
        trace_id_var.reset(trace_token)
