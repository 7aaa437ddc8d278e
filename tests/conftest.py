from __future__ import annotations

import logging
from typing import Callable

import httpx
import pytest

from duffel import AsyncDuffel, Duffel

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_client():
    """Build a sync client whose HTTP traffic goes to *handler*."""
    clients: list[Duffel] = []

    def _make(handler: Handler, **kwargs) -> Duffel:
        kwargs.setdefault("token", "duffel_test_123")
        client = Duffel(_transport=httpx.MockTransport(handler), **kwargs)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
async def make_async_client():
    clients: list[AsyncDuffel] = []

    def _make(handler, **kwargs) -> AsyncDuffel:
        kwargs.setdefault("token", "duffel_test_123")
        client = AsyncDuffel(_transport=httpx.MockTransport(handler), **kwargs)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.close()


@pytest.fixture(autouse=True)
def _reset_duffel_logger():
    """Undo handlers/levels that setup_logging() may install during a test."""
    logger = logging.getLogger("duffel")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
