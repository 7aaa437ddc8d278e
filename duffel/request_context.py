"""Per-call correlation ID carried through logging via contextvars."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

call_id_var: ContextVar[str] = ContextVar("duffel_call_id", default="")


def new_call_id() -> str:
    """Return a short hex ID identifying one outgoing API call."""
    return uuid.uuid4().hex[:16]


def get_call_id() -> str:
    return call_id_var.get()


@contextmanager
def bind_call_id(call_id: str | None = None) -> Iterator[str]:
    """Set the call ID for the duration of the block and restore it after."""
    cid = call_id or new_call_id()
    token = call_id_var.set(cid)
    try:
        yield cid
    finally:
        call_id_var.reset(token)
