"""Client-side tracking of the server-advertised request budget."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Mapping

logger = logging.getLogger(__name__)

# The three HTTP-date forms; %d accepts both "02" and "2".
HEADER_TIME_FORMATS: tuple[str, ...] = (
    "%a, %d %b %Y %H:%M:%S GMT",
    "%a, %d %b %Y %H:%M:%S %Z",
    "%A, %d-%b-%y %H:%M:%S GMT",
    "%a %b %d %H:%M:%S %Y",
)


def parse_http_date(value: str | None) -> datetime | None:
    """Parse an HTTP-date header value into an aware UTC datetime."""
    if not value:
        return None
    value = value.strip()
    for fmt in HEADER_TIME_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    return None


@dataclass(frozen=True)
class RateLimit:
    """Rate-limit window as last reported by the server."""

    limit: int
    remaining: int
    reset_at: datetime
    period: timedelta

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimit | None:
        """Parse ``Ratelimit-*`` and ``Date`` headers, returning *None* if any is unusable."""
        try:
            limit = int(headers.get("ratelimit-limit", ""))
            remaining = int(headers.get("ratelimit-remaining", ""))
        except ValueError:
            return None

        reset_at = parse_http_date(headers.get("ratelimit-reset"))
        if reset_at is None:
            return None

        date = parse_http_date(headers.get("date"))
        if date is None:
            return None

        return cls(
            limit=limit,
            remaining=remaining,
            reset_at=reset_at,
            period=reset_at - date,
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RateLimiter:
    """Advisory limiter shared by every call made through one client.

    Reads and writes of the window are serialised by a lock, but two
    callers can still both see ``remaining == 1`` and both proceed. The
    server remains the authority; this only avoids obvious 429s.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._state: RateLimit | None = None

    @property
    def state(self) -> RateLimit | None:
        with self._lock:
            return self._state

    def set_state(self, state: RateLimit | None) -> None:
        with self._lock:
            self._state = state

    def delay(self) -> float:
        """Seconds to wait before the next call may be sent (0 if none)."""
        with self._lock:
            state = self._state
        if state is None or state.remaining > 0:
            return 0.0
        # A reset time already in the past means stale headers: go ahead.
        wait = (state.reset_at - self._clock()).total_seconds()
        return max(wait, 0.0)

    def wait(self) -> None:
        """Block the calling thread until the window allows another call."""
        wait = self.delay()
        if wait > 0:
            logger.info("Rate limit exhausted, sleeping %.2fs until reset", wait)
            time.sleep(wait)

    async def await_clearance(self) -> None:
        """Async counterpart of :meth:`wait`."""
        wait = self.delay()
        if wait > 0:
            logger.info("Rate limit exhausted, sleeping %.2fs until reset", wait)
            await asyncio.sleep(wait)

    def update(self, headers: Mapping[str, str]) -> RateLimit | None:
        """Refresh state from response headers; bad headers keep the old state."""
        parsed = RateLimit.from_headers(headers)
        with self._lock:
            if parsed is None:
                if "ratelimit-reset" in headers:
                    logger.debug(
                        "Ignoring unparseable rate-limit headers (reset=%r)",
                        headers.get("ratelimit-reset"),
                    )
                return self._state
            self._state = parsed
            return parsed
