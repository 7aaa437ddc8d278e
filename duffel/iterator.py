"""Lazy cursor-following iteration over paginated list endpoints.

Both flavours share one state machine:

    READY -> FETCHING -> HOLDING -> (FETCHING ...) -> EXHAUSTED
                 \\-> FAILED

A page is fetched only once every item of the previous page has been
handed out, and the last page is drained before the iterator reports it
is done.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, Iterator, AsyncIterator, TypeVar

from pydantic import BaseModel

from duffel.request import RequestSpec

if TYPE_CHECKING:
    from duffel.executor import AsyncExecutor, Executor

T = TypeVar("T")

logger = logging.getLogger(__name__)


class IterState(str, Enum):
    READY = "ready"
    FETCHING = "fetching"
    HOLDING = "holding"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class PageMeta(BaseModel):
    after: str | None = None
    before: str | None = None
    limit: int | None = None


class Page(BaseModel, Generic[T]):
    """One decoded page of a list endpoint."""

    data: list[T]
    meta: PageMeta = PageMeta()


class _Cursor(Generic[T]):
    """State shared by the sync and async iterators."""

    def __init__(self, spec: RequestSpec | None, item_type: type[T], limit: int | None) -> None:
        self._spec = spec
        self._item_type = item_type
        self._limit = limit
        self._buffer: deque[T] = deque()
        self._after: str | None = None
        self._more_pages = True
        self._current: T | None = None
        self._err: BaseException | None = None
        self._state = IterState.READY
        self.pages_fetched = 0

    @property
    def state(self) -> IterState:
        return self._state

    @property
    def current(self) -> T | None:
        """The item returned by the last successful ``next()``."""
        return self._current

    @property
    def err(self) -> BaseException | None:
        """The failure that stopped iteration, if any."""
        return self._err

    def close(self) -> None:
        """Stop early; buffered items are discarded."""
        if self._state is not IterState.FAILED:
            self._buffer.clear()
            self._more_pages = False
            self._current = None
            self._state = IterState.EXHAUSTED

    def _take(self) -> bool | None:
        """Pop the next item if one is available without I/O.

        Returns True/False when the answer is known, None when a page has
        to be fetched first.
        """
        if self._state in (IterState.EXHAUSTED, IterState.FAILED):
            return False
        if self._buffer:
            self._current = self._buffer.popleft()
            self._state = IterState.HOLDING
            return True
        if not self._more_pages:
            self._current = None
            self._state = IterState.EXHAUSTED
            return False
        return None

    def _page_spec(self) -> RequestSpec:
        assert self._spec is not None
        extra: dict[str, str] = {}
        if self._after:
            extra["after"] = self._after
        if self._limit is not None:
            extra["limit"] = str(self._limit)
        return self._spec.with_params(**extra)

    def _accept(self, page: Page[T]) -> None:
        self.pages_fetched += 1
        self._buffer.extend(page.data)
        self._after = page.meta.after or None
        self._more_pages = self._after is not None
        self._state = IterState.HOLDING
        logger.debug(
            "Fetched page %d with %d items (more=%s)",
            self.pages_fetched, len(page.data), self._more_pages,
        )

    def _fail(self, exc: BaseException) -> None:
        self._buffer.clear()
        self._current = None
        self._err = exc
        self._state = IterState.FAILED


class Iter(_Cursor[T]):
    """Synchronous page iterator.

    Use either the explicit contract::

        while it.next():
            handle(it.current)
        if it.err:
            raise it.err

    or plain ``for item in it``, which raises the stored error at the end.
    """

    def __init__(
        self,
        executor: Executor | None,
        spec: RequestSpec | None,
        item_type: type[T],
        limit: int | None = None,
    ) -> None:
        super().__init__(spec, item_type, limit)
        self._executor = executor

    @classmethod
    def failed(cls, exc: BaseException) -> Iter[Any]:
        it: Iter[Any] = cls(None, None, object)
        it._fail(exc)
        return it

    def next(self) -> bool:
        while True:
            ready = self._take()
            if ready is not None:
                return ready
            self._state = IterState.FETCHING
            try:
                page = self._executor.page(self._page_spec(), self._item_type)
            except Exception as exc:
                self._fail(exc)
                return False
            self._accept(page)

    def __iter__(self) -> Iterator[T]:
        while self.next():
            yield self._current  # type: ignore[misc]
        if self._err is not None:
            raise self._err

    def collect(self) -> list[T]:
        """Drain the iterator into a list, raising if any page failed."""
        return list(self)


class AsyncIter(_Cursor[T]):
    """Asynchronous page iterator; ``await it.next()`` or ``async for``."""

    def __init__(
        self,
        executor: AsyncExecutor | None,
        spec: RequestSpec | None,
        item_type: type[T],
        limit: int | None = None,
    ) -> None:
        super().__init__(spec, item_type, limit)
        self._executor = executor

    @classmethod
    def failed(cls, exc: BaseException) -> AsyncIter[Any]:
        it: AsyncIter[Any] = cls(None, None, object)
        it._fail(exc)
        return it

    async def next(self) -> bool:
        while True:
            ready = self._take()
            if ready is not None:
                return ready
            self._state = IterState.FETCHING
            try:
                page = await self._executor.page(self._page_spec(), self._item_type)
            except asyncio.CancelledError as exc:
                self._fail(exc)
                raise
            except Exception as exc:
                self._fail(exc)
                return False
            self._accept(page)

    async def __aiter__(self) -> AsyncIterator[T]:
        while await self.next():
            yield self._current  # type: ignore[misc]
        if self._err is not None:
            raise self._err

    async def collect(self) -> list[T]:
        return [item async for item in self]
