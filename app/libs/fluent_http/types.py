from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .models import ProgressSnapshot
    from .transport import TransportOperation

Transformer = Callable[[Any], str | None]
ProgressCallback = Callable[["ProgressSnapshot"], None]


class HttpErrorHandler(Protocol):
    def handle_error(self, operation: "TransportOperation") -> Exception:
        """Build the exception raised for a failed operation.

        ``operation`` is the finished transport handle and exposes the status
        code, headers, buffered body and the underlying transport error.
        """
        ...
