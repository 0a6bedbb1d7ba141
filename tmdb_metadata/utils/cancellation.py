"""Caller-driven cancellation for blocking TMDb calls."""

from __future__ import annotations

import threading
from typing import Callable


class OperationCancelled(RuntimeError):
    """Raised when a caller cancels an in-flight resolution."""


class CancellationToken:
    """
    Thread-safe cancellation flag shared between a caller and the pipeline.

    Callbacks registered with `register()` run once, on the cancelling thread,
    so the transport can close sockets and unblock an in-flight request.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: dict[int, Callable[[], None]] = {}
        self._next_handle = 0

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks = list(self._callbacks.values())
            self._callbacks.clear()
        for callback in callbacks:
            callback()

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register `callback` to run on cancel; returns a function that unregisters it."""
        with self._lock:
            if not self._event.is_set():
                handle = self._next_handle
                self._next_handle += 1
                self._callbacks[handle] = callback

                def _unregister() -> None:
                    with self._lock:
                        self._callbacks.pop(handle, None)

                return _unregister
        callback()
        return lambda: None

    def wait(self, timeout: float) -> bool:
        """Sleep up to `timeout` seconds; returns True if cancelled meanwhile."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled("Operation cancelled by caller.")


def raise_if_cancelled(token: CancellationToken | None) -> None:
    if token is not None:
        token.raise_if_cancelled()
