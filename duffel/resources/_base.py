from __future__ import annotations

from typing import Any, TypeVar

from duffel.executor import AsyncExecutor, Executor
from duffel.request import RequestBuilder

T = TypeVar("T")


def require_id(value: str, prefix: str, name: str = "id") -> None:
    """Reject empty IDs and IDs of the wrong resource kind before any I/O."""
    if not value:
        raise ValueError(f"{name} is required")
    if not value.startswith(prefix):
        raise ValueError(f"{name} should begin with {prefix!r}, got {value[:4]!r}")


class Resource:
    """Mixin base: resource methods build requests through :meth:`request`.

    On :class:`~duffel.client.Duffel` the terminals return values directly;
    on :class:`~duffel.client.AsyncDuffel` they return awaitables, and list
    methods return async iterators.
    """

    _executor: Executor | AsyncExecutor

    def request(self, result_type: type[T]) -> RequestBuilder[T]:
        return RequestBuilder(self._executor, result_type)

    def _failed_iter(self, exc: BaseException) -> Any:
        return self._executor.failed_iter(exc)
