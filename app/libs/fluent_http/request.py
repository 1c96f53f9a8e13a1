from collections.abc import Mapping
from typing import Any

from .cancellation import CancellationToken
from .errors import DuplicateHeaderError
from .handlers import ByteOutputHandler, ProgressByteOutputHandler, StringOutputHandler
from .models import HttpMethod, StringResponse
from .transport import HttpxTransport
from .types import HttpErrorHandler, ProgressCallback, Transformer


class Request:
    """A request being built.

    Setters return the request itself so calls can be chained::

        response = await (
            engine.make("https://api.example.com/items")
            .set_method(HttpMethod.POST)
            .set_body({"id": 1})
            .set_transformer(json_transformer)
            .send()
        )

    Nothing is validated until a handler sends the request, and each
    ``send()`` reads the state the request has at that moment.
    """

    def __init__(
        self,
        url: str,
        transport: HttpxTransport,
        default_headers: Mapping[str, str] | None = None,
    ):
        self._url = url
        self.transport = transport
        self._default_headers = default_headers
        self.method = HttpMethod.GET
        self.headers: dict[str, str] = {}
        self.body: Any = None
        self.transformer: Transformer | None = None
        self.error_handler: HttpErrorHandler | None = None
        self.timeout: float | None = None
        self.cancellation_token: CancellationToken | None = None
        self.progress_callback: ProgressCallback | None = None

    @property
    def url(self) -> str:
        return self._url

    def set_method(self, method: HttpMethod) -> "Request":
        self.method = method
        return self

    def set_header(self, key: str, value: str) -> "Request":
        if key in self.headers:
            raise DuplicateHeaderError(key)
        self.headers[key] = value
        return self

    def set_headers(self, headers: Mapping[str, str]) -> "Request":
        for key, value in headers.items():
            self.set_header(key, value)
        return self

    def set_body(self, body: Any) -> "Request":
        self.body = body
        return self

    def set_transformer(self, transformer: Transformer) -> "Request":
        self.transformer = transformer
        return self

    def set_error_handler(self, error_handler: HttpErrorHandler) -> "Request":
        self.error_handler = error_handler
        return self

    def set_timeout(self, timeout: float) -> "Request":
        """Timeout in seconds; 0 falls back to HTTP_DEFAULT_TIMEOUT."""
        self.timeout = timeout
        return self

    def set_cancellation_token(self, cancellation_token: CancellationToken) -> "Request":
        self.cancellation_token = cancellation_token
        return self

    def set_progress_callback(self, progress_callback: ProgressCallback) -> "Request":
        self.progress_callback = progress_callback
        return self

    def get_all_headers(self) -> dict[str, str]:
        merged = dict(self._default_headers or {})
        merged.update(self.headers)
        return merged

    def set_string_output(self) -> StringOutputHandler:
        return StringOutputHandler(self)

    def set_byte_output(self) -> ByteOutputHandler:
        return ByteOutputHandler(self)

    def set_progress_byte_output(self) -> ProgressByteOutputHandler:
        return ProgressByteOutputHandler(self)

    async def send(self) -> StringResponse:
        return await self.set_string_output().send()
