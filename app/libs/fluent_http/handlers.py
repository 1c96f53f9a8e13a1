from typing import TYPE_CHECKING, Protocol, TypeVar

from .dispatcher import dispatch
from .errors import UnsupportedMethodError
from .models import ByteResponse, HttpMethod, ProgressByteResponse, ProgressSnapshot, StringResponse
from .transport import TransportOperation
from .types import ProgressCallback

if TYPE_CHECKING:
    from .request import Request

T_co = TypeVar("T_co", covariant=True)


class OutputHandler(Protocol[T_co]):
    async def send(self) -> T_co: ...


class _BaseOutputHandler:
    def __init__(self, request: "Request"):
        self._request = request

    def _payload(self) -> str | None:
        request = self._request
        if request.method == HttpMethod.GET:
            return None
        if request.method == HttpMethod.POST:
            if request.transformer is None:
                return None
            return request.transformer(request.body)
        raise UnsupportedMethodError(request.method)

    async def _dispatch(self, progress_callback: ProgressCallback | None = None) -> TransportOperation:
        request = self._request
        payload = self._payload()
        return await dispatch(
            request.transport,
            request.method,
            request.url,
            timeout=request.timeout,
            payload=payload,
            headers=request.get_all_headers(),
            error_handler=request.error_handler,
            progress_callback=progress_callback,
            cancellation_token=request.cancellation_token,
        )


class StringOutputHandler(_BaseOutputHandler):
    async def send(self) -> StringResponse:
        operation = await self._dispatch()
        return StringResponse(operation.text)


class ByteOutputHandler(_BaseOutputHandler):
    async def send(self) -> ByteResponse:
        operation = await self._dispatch()
        return ByteResponse(operation.content)


class ProgressByteOutputHandler(_BaseOutputHandler):
    """Byte output that reports download progress to the request's progress callback.

    ``total_bytes`` of the response is the total from the last snapshot (0 if
    none was emitted); ``downloaded_bytes`` is always the buffered length.
    """

    async def send(self) -> ProgressByteResponse:
        total_bytes = 0

        def on_progress(snapshot: ProgressSnapshot) -> None:
            nonlocal total_bytes
            total_bytes = snapshot.total_bytes
            if self._request.progress_callback is not None:
                self._request.progress_callback(snapshot)

        operation = await self._dispatch(on_progress)
        return ProgressByteResponse(operation.content, total_bytes)
