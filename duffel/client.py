"""Sync and async Duffel clients."""

from __future__ import annotations

from typing import Any

import httpx

from duffel.config import Credentials
from duffel.executor import AsyncExecutor, Executor
from duffel.ratelimit import RateLimit, RateLimiter
from duffel.resources import (
    LoyaltyProgrammesMixin,
    OfferRequestsMixin,
    OffersMixin,
    OrderCancellationsMixin,
    OrderChangesMixin,
    OrdersMixin,
    PaymentCardsMixin,
)


class _ResourceMethods(
    OfferRequestsMixin,
    OffersMixin,
    OrdersMixin,
    OrderCancellationsMixin,
    OrderChangesMixin,
    LoyaltyProgrammesMixin,
    PaymentCardsMixin,
):
    credentials: Credentials
    limiter: RateLimiter

    @property
    def rate_limit(self) -> RateLimit | None:
        """The rate-limit window reported by the most recent response."""
        return self.limiter.state


# ---------------------------------------------------------------------------
# Sync client
# ---------------------------------------------------------------------------


class Duffel(_ResourceMethods):
    """Synchronous client (backed by ``httpx.Client``).

    Arguments left as ``None`` fall back to the ``DUFFEL_*`` settings.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        host: str | None = None,
        version: str | None = None,
        debug: bool | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        _transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.credentials = Credentials.resolve(
            token,
            host=host,
            version=version,
            debug=debug,
            user_agent=user_agent,
            timeout=timeout,
        )
        kwargs: dict[str, Any] = {"timeout": self.credentials.timeout}
        if _transport is not None:
            kwargs["transport"] = _transport
        self._client = httpx.Client(**kwargs)
        self.limiter = RateLimiter()
        self._executor = Executor(self.credentials, self._client, self.limiter)

    # -- context manager -----------------------------------------------------

    def __enter__(self) -> Duffel:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------


class AsyncDuffel(_ResourceMethods):
    """Async client (backed by ``httpx.AsyncClient``).

    Single-result methods return awaitables; list methods return
    :class:`~duffel.iterator.AsyncIter` for ``async for``.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        host: str | None = None,
        version: str | None = None,
        debug: bool | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        _transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.credentials = Credentials.resolve(
            token,
            host=host,
            version=version,
            debug=debug,
            user_agent=user_agent,
            timeout=timeout,
        )
        kwargs: dict[str, Any] = {"timeout": self.credentials.timeout}
        if _transport is not None:
            kwargs["transport"] = _transport
        self._client = httpx.AsyncClient(**kwargs)
        self.limiter = RateLimiter()
        self._executor = AsyncExecutor(self.credentials, self._client, self.limiter)

    # -- context manager -----------------------------------------------------

    async def __aenter__(self) -> AsyncDuffel:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()
