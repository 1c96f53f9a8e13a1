"""Cooperative cancellation for in-flight dispatches.

A :class:`CancellationToken` is handed to a request with
``Request.set_cancellation_token``. The dispatcher registers an abort callback
on it while the transport operation is running, so calling :meth:`cancel`
from another task or thread stops the transfer and makes ``send()`` raise
:class:`~libs.fluent_http.errors.RequestCancelledError`.
"""

from __future__ import annotations

import threading
from collections.abc import Callable


class CancellationToken:
    """Thread-safe cancellation token.

    Examples:
        >>> token = CancellationToken()
        >>> unregister = token.register(lambda: print("aborted"))
        >>> token.cancel()
        aborted
        >>> token.is_cancelled()
        True
    """

    def __init__(self) -> None:
        self._is_cancelled = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []

    def cancel(self) -> None:
        """Signal that cancellation has been requested and run registered callbacks once."""
        with self._lock:
            if self._is_cancelled.is_set():
                return
            self._is_cancelled.set()
            callbacks = self._callbacks[:]
            self._callbacks.clear()

        for callback in callbacks:
            callback()

    def is_cancelled(self) -> bool:
        return self._is_cancelled.is_set()

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run ``callback`` when the token is cancelled.

        Callbacks run on the thread that calls :meth:`cancel`. If cancellation
        was already requested the callback runs immediately.
        Returns a function that removes the registration; calling it after the
        callback has fired is a no-op.
        """
        with self._lock:
            if not self._is_cancelled.is_set():
                self._callbacks.append(callback)
                registered = True
            else:
                registered = False

        if not registered:
            callback()

        def unregister() -> None:
            with self._lock:
                try:
                    self._callbacks.remove(callback)
                except ValueError:
                    # already fired or removed
                    pass

        return unregister
