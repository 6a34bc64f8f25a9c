"""Issue envelopes on a worker pool and normalise their outcome."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Type, TypeVar

from ..config import STRAVA_MAX_WORKERS
from ..errors import (
    InvalidResponseError,
    NoResponseError,
    StravaAPIError,
    StravaUndefinedError,
)
from ..models import Record
from ..utils import mask_params
from .configuration import ConfigSnapshot, StravaConfig
from .envelope import RequestEnvelope
from .handle import Completion, RequestHandle
from .rate_limit import RateLimitMonitor
from .response_handling import normalize_response
from .transport import TransportRequest

LOGGER = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)

# Post-processing applied to a decoded body; raises StravaAPIError to fail.
Transform = Callable[[Any], Any]

__all__ = [
    "Requestor",
    "Transform",
    "expect_mapping",
    "expect_record",
    "expect_records",
]


def expect_mapping(data: Any) -> Any:
    """Transform accepting only a JSON object body."""

    if not isinstance(data, dict):
        raise InvalidResponseError("Response is not a JSON object")
    return data


def expect_record(cls: Type[R]) -> Transform:
    """Transform decoding the body into ``cls`` or failing as invalid."""

    def transform(data: Any) -> R:
        record = cls.from_dict(data)
        if record is None:
            raise InvalidResponseError(f"Response is not a valid {cls.__name__}")
        return record

    return transform


def expect_records(cls: Type[R]) -> Transform:
    """Transform decoding a list body into records of ``cls``."""

    def transform(data: Any) -> List[R]:
        records = cls.from_list(data)
        if records is None:
            raise InvalidResponseError(f"Response is not a list of {cls.__name__}")
        return records

    return transform


class Requestor:
    """Runs each envelope independently; no queueing or ordering between calls."""

    def __init__(
        self,
        config: StravaConfig,
        *,
        monitor: Optional[RateLimitMonitor] = None,
        max_workers: int = STRAVA_MAX_WORKERS,
    ) -> None:
        self.config = config
        self.monitor = monitor or RateLimitMonitor()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="strava"
        )

    def request(
        self,
        envelope: RequestEnvelope,
        callback: Optional[Completion] = None,
        transform: Optional[Transform] = None,
    ) -> RequestHandle:
        snapshot = self.config.snapshot()
        handle = RequestHandle(envelope.context, callback, snapshot.callback_dispatch)
        if snapshot.debug:
            LOGGER.info(
                "Method: %s, Path: %s, Authenticated: %s, Params: %s",
                envelope.method.value,
                envelope.resolved_path,
                envelope.authenticated,
                mask_params(envelope.params),
            )
        try:
            transport_request = envelope.build(snapshot)
        except StravaAPIError as exc:
            LOGGER.warning("%s not sent: %s", envelope.context, exc.reason)
            handle.resolve(error=exc)
            return handle
        handle.attach(
            self._executor.submit(
                self._perform, handle, transport_request, snapshot, transform
            )
        )
        return handle

    def failed(
        self, context: str, error: StravaAPIError, callback: Optional[Completion] = None
    ) -> RequestHandle:
        """Return a handle already resolved with ``error``."""

        handle = RequestHandle(context, callback, self.config.callback_dispatch)
        LOGGER.warning("%s not sent: %s", context, error.reason)
        handle.resolve(error=error)
        return handle

    def _perform(
        self,
        handle: RequestHandle,
        request: TransportRequest,
        snapshot: ConfigSnapshot,
        transform: Optional[Transform],
    ) -> None:
        if handle.done():
            return
        context = handle.context
        try:
            response = snapshot.transport.send(request)
        except StravaAPIError as exc:
            handle.resolve(error=exc)
            return
        except Exception as exc:
            LOGGER.exception("%s transport failure", context)
            error = NoResponseError(f"{context} transport failure: {exc}")
            error.__cause__ = exc
            handle.resolve(error=error)
            return

        self.monitor.after_response(response.headers, response.status)
        if snapshot.debug:
            LOGGER.info("%s -> %s", context, response.status)

        try:
            value = normalize_response(response, context)
            if transform is not None:
                value = transform(value)
        except StravaAPIError as exc:
            handle.resolve(error=exc)
        except Exception as exc:
            LOGGER.exception("%s response handling failed", context)
            error = StravaUndefinedError(f"{context} response handling failed: {exc}")
            error.__cause__ = exc
            handle.resolve(error=error)
        else:
            handle.resolve(value=value)

    def close(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
