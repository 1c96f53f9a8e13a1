from http import HTTPStatus


class HttpRequestError(Exception):
    """A dispatch failed at the transport level (connection, protocol, data processing)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class HttpResponseError(HttpRequestError):
    """Default failure for a dispatch: status code plus the raw response text.

    ``status_code`` is 0 when no response was received (connection refused,
    timeout, aborted transfer); ``reason`` then says what went wrong.
    """

    def __init__(self, status_code: int, content: str | None, reason: str | None = None):
        message = f"Request failed with status code {status_code}. Response: {content}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.status_code = status_code
        self.content = content
        self.reason = reason

    @property
    def http_status(self) -> HTTPStatus | None:
        try:
            return HTTPStatus(self.status_code)
        except ValueError:
            return None


class UnexpectedTransportStateError(HttpRequestError):
    pass


class RequestCancelledError(Exception):
    def __init__(self, url: str):
        super().__init__(f"Request to {url} was canceled.")
        self.url = url


class UnsupportedMethodError(RuntimeError):
    def __init__(self, method: object):
        super().__init__(f"Invalid HTTP method: {method!r}")
        self.method = method


class DuplicateHeaderError(ValueError):
    def __init__(self, key: str):
        super().__init__(f"Header {key!r} has already been set on this request")
        self.key = key
