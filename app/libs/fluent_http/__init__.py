"""Fluent HTTP request builder.

Usage::

    from extensions.ext_logging import init_logging
    from libs.fluent_http import HttpEngine

    init_logging()
    async with HttpEngine() as engine:
        engine.add_header("Authorization", "Bearer token")
        response = await engine.make("https://api.example.com/items").send()
"""

from .cancellation import CancellationToken
from .engine import HttpEngine
from .errors import (
    DuplicateHeaderError,
    HttpRequestError,
    HttpResponseError,
    RequestCancelledError,
    UnexpectedTransportStateError,
    UnsupportedMethodError,
)
from .handlers import ByteOutputHandler, OutputHandler, ProgressByteOutputHandler, StringOutputHandler
from .models import ByteResponse, HttpMethod, ProgressByteResponse, ProgressSnapshot, StringResponse
from .request import Request
from .transformers import form_encoded_transformer, json_transformer, to_dictionary
from .transport import HttpxTransport, TransportOperation, TransportResult
from .types import HttpErrorHandler, ProgressCallback, Transformer

__all__ = [
    "HttpEngine",
    "Request",
    "HttpMethod",
    "OutputHandler",
    "StringOutputHandler",
    "ByteOutputHandler",
    "ProgressByteOutputHandler",
    "StringResponse",
    "ByteResponse",
    "ProgressByteResponse",
    "ProgressSnapshot",
    "CancellationToken",
    "HttpxTransport",
    "TransportOperation",
    "TransportResult",
    "HttpErrorHandler",
    "ProgressCallback",
    "Transformer",
    "HttpRequestError",
    "HttpResponseError",
    "UnexpectedTransportStateError",
    "RequestCancelledError",
    "UnsupportedMethodError",
    "DuplicateHeaderError",
    "json_transformer",
    "form_encoded_transformer",
    "to_dictionary",
]
