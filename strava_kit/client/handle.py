"""Cancellable handle for an in-flight call."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future
from typing import Any, Callable, Optional

from ..errors import StravaAPIError, StravaCancelledError
from .configuration import WORKER_DISPATCH, CallbackDispatch

LOGGER = logging.getLogger(__name__)

__all__ = ["Completion", "RequestHandle"]

# completion(value, error): error is None exactly when the call succeeded.
Completion = Callable[[Any, Optional[StravaAPIError]], None]


class RequestHandle:
    """Resolves exactly once to a value or a :class:`StravaAPIError`.

    ``result()`` returns the value or raises the error; ``error()`` returns
    the error without raising. Cancelling delivers
    :class:`StravaCancelledError`; a transport result arriving afterwards is
    discarded.
    """

    def __init__(
        self,
        context: str,
        callback: Optional[Completion] = None,
        dispatch: CallbackDispatch = WORKER_DISPATCH,
    ) -> None:
        self.context = context
        self._future: Future = Future()
        self._lock = threading.Lock()
        self._callback = callback
        self._dispatch = dispatch
        self._transport_future: Optional[Future] = None

    # --- Caller side ----------------------------------------------------
    @property
    def future(self) -> Future:
        return self._future

    def done(self) -> bool:
        return self._future.done()

    def cancelled(self) -> bool:
        return self.done() and isinstance(self._future.exception(), StravaCancelledError)

    def result(self, timeout: Optional[float] = None) -> Any:
        return self._future.result(timeout)

    def error(self, timeout: Optional[float] = None) -> Optional[StravaAPIError]:
        return self._future.exception(timeout)  # type: ignore[return-value]

    def add_done_callback(self, fn: Callable[["RequestHandle"], None]) -> None:
        self._future.add_done_callback(lambda _future: fn(self))

    def cancel(self) -> bool:
        """Cancel the call; False when it already resolved."""

        with self._lock:
            transport_future = self._transport_future
        if transport_future is not None:
            transport_future.cancel()
        resolved = self.resolve(error=StravaCancelledError(f"{self.context} cancelled"))
        if resolved:
            LOGGER.info("%s cancelled by caller", self.context)
        return resolved

    # --- Requestor side -------------------------------------------------
    def attach(self, transport_future: Future) -> None:
        with self._lock:
            self._transport_future = transport_future

    def resolve(
        self, value: Any = None, error: Optional[StravaAPIError] = None
    ) -> bool:
        """Settle the handle; returns False when it was already settled."""

        with self._lock:
            if self._future.done():
                return False
            if error is not None:
                self._future.set_exception(error)
            else:
                self._future.set_result(value)
        self._notify(value, error)
        return True

    def _notify(self, value: Any, error: Optional[StravaAPIError]) -> None:
        if self._callback is None:
            return
        if isinstance(self._dispatch, Executor):
            self._dispatch.submit(self._invoke, value, error)
        else:
            self._invoke(value, error)

    def _invoke(self, value: Any, error: Optional[StravaAPIError]) -> None:
        if self._callback is None:
            return
        try:
            self._callback(None if error is not None else value, error)
        except Exception:
            LOGGER.exception("Completion callback for %s failed", self.context)
