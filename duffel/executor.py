"""Send built requests and turn responses into values or exceptions."""

from __future__ import annotations

import asyncio
import json
import logging
from functools import lru_cache
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from duffel.config import Credentials
from duffel.errors import DecodeError, NetworkError, decode_error
from duffel.iterator import AsyncIter, Iter, Page
from duffel.ratelimit import RateLimiter
from duffel.request import RequestSpec
from duffel.request_context import bind_call_id

T = TypeVar("T")

logger = logging.getLogger(__name__)

_BODY_LOG_LIMIT = 4096


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def _to_request(client: httpx.Client | httpx.AsyncClient, spec: RequestSpec) -> httpx.Request:
    return client.build_request(
        spec.method,
        spec.url,
        params=spec.params or None,
        json=spec.json,
        headers=spec.headers,
    )


def _log_request(credentials: Credentials, request: httpx.Request) -> None:
    extra = {"http_method": request.method, "http_path": request.url.path}
    logger.debug("%s %s", request.method, request.url, extra=extra)
    if credentials.debug:
        body = request.content.decode("utf-8", errors="replace")
        logger.info(
            "Request: %s %s %s",
            request.method,
            request.url,
            body[:_BODY_LOG_LIMIT],
            extra=extra,
        )


def _log_response(credentials: Credentials, response: httpx.Response) -> None:
    extra = {
        "http_method": response.request.method,
        "http_path": response.request.url.path,
        "http_status": response.status_code,
    }
    logger.debug(
        "%s %s -> %d",
        response.request.method,
        response.request.url,
        response.status_code,
        extra=extra,
    )
    if credentials.debug:
        logger.info(
            "Response: %d %s",
            response.status_code,
            response.text[:_BODY_LOG_LIMIT],
            extra=extra,
        )


def _network_error(spec: RequestSpec, exc: httpx.RequestError) -> NetworkError:
    logger.warning("%s %s failed: %s", spec.method, spec.url, exc)
    return NetworkError(str(exc) or type(exc).__name__, method=spec.method, url=spec.url)


def _decoding_error(spec: RequestSpec, exc: httpx.DecodingError) -> DecodeError:
    logger.warning("%s %s returned an undecodable body: %s", spec.method, spec.url, exc)
    return DecodeError(str(exc) or type(exc).__name__, status_code=None, body="")


def _check(response: httpx.Response, limiter: RateLimiter, *, parse: bool = True) -> Any:
    """Update the limiter, raise for error envelopes, return the parsed body.

    A 2xx body is returned as parsed JSON (``None`` when empty). With
    ``parse=False`` a 2xx body is ignored and ``None`` returned.
    """
    state = limiter.update(response.headers)
    raw = response.content
    request_id = response.headers.get("x-request-id")

    if not response.is_success:
        raise decode_error(
            response.status_code, raw, request_id=request_id, rate_limit=state
        )

    if not parse or not raw.strip():
        return None
    try:
        body = json.loads(raw)
    except ValueError as exc:
        raise DecodeError(
            f"invalid JSON ({exc})", status_code=response.status_code, body=response.text
        ) from exc

    if isinstance(body, dict) and "errors" in body and "data" not in body:
        raise decode_error(
            response.status_code, body, request_id=request_id, rate_limit=state
        )
    return body


def _decode(response: httpx.Response, body: Any, target: Any) -> Any:
    if not isinstance(body, dict) or "data" not in body:
        raise DecodeError(
            "response has no 'data' field",
            status_code=response.status_code,
            body=response.text,
        )
    try:
        return _adapter(target).validate_python(body["data"])
    except PydanticValidationError as exc:
        raise DecodeError(
            str(exc), status_code=response.status_code, body=response.text
        ) from exc


def _decode_page(response: httpx.Response, body: Any, item_type: Any) -> Page:
    if not isinstance(body, dict) or "data" not in body:
        raise DecodeError(
            "response has no 'data' field",
            status_code=response.status_code,
            body=response.text,
        )
    try:
        return _adapter(Page[item_type]).validate_python(body)
    except PydanticValidationError as exc:
        raise DecodeError(
            str(exc), status_code=response.status_code, body=response.text
        ) from exc


class Executor:
    """Runs requests on an ``httpx.Client`` behind the client's rate limiter."""

    def __init__(
        self,
        credentials: Credentials,
        http: httpx.Client,
        limiter: RateLimiter | None = None,
    ) -> None:
        self.credentials = credentials
        self.http = http
        self.limiter = limiter or RateLimiter()

    def send(self, spec: RequestSpec, *, parse: bool = True) -> tuple[httpx.Response, Any]:
        with bind_call_id():
            self.limiter.wait()
            request = _to_request(self.http, spec)
            _log_request(self.credentials, request)
            try:
                response = self.http.send(request)
            except httpx.DecodingError as exc:
                raise _decoding_error(spec, exc) from exc
            except httpx.RequestError as exc:
                raise _network_error(spec, exc) from exc
            _log_response(self.credentials, response)
            return response, _check(response, self.limiter, parse=parse)

    def single(self, spec: RequestSpec, result_type: type[T]) -> T:
        response, body = self.send(spec)
        return _decode(response, body, result_type)

    def slice(self, spec: RequestSpec, result_type: type[T]) -> list[T]:
        response, body = self.send(spec)
        return _decode(response, body, list[result_type])

    def empty(self, spec: RequestSpec) -> None:
        self.send(spec, parse=False)

    def page(self, spec: RequestSpec, item_type: type[T]) -> Page[T]:
        response, body = self.send(spec)
        return _decode_page(response, body, item_type)

    def iter(self, spec: RequestSpec, item_type: type[T], limit: int | None = None) -> Iter[T]:
        return Iter(self, spec, item_type, limit)

    def failed_iter(self, exc: BaseException) -> Iter[Any]:
        return Iter.failed(exc)


class AsyncExecutor:
    """Async twin of :class:`Executor`, backed by ``httpx.AsyncClient``.

    Task cancellation propagates as ``asyncio.CancelledError``; a call
    cancelled mid-flight leaves no state behind apart from what the limiter
    already recorded from earlier responses.
    """

    def __init__(
        self,
        credentials: Credentials,
        http: httpx.AsyncClient,
        limiter: RateLimiter | None = None,
    ) -> None:
        self.credentials = credentials
        self.http = http
        self.limiter = limiter or RateLimiter()

    async def send(
        self, spec: RequestSpec, *, parse: bool = True
    ) -> tuple[httpx.Response, Any]:
        with bind_call_id():
            await self.limiter.await_clearance()
            request = _to_request(self.http, spec)
            _log_request(self.credentials, request)
            try:
                response = await self.http.send(request)
            except httpx.DecodingError as exc:
                raise _decoding_error(spec, exc) from exc
            except httpx.RequestError as exc:
                raise _network_error(spec, exc) from exc
            except asyncio.CancelledError:
                logger.debug("%s %s cancelled", spec.method, spec.url)
                raise
            _log_response(self.credentials, response)
            return response, _check(response, self.limiter, parse=parse)

    async def single(self, spec: RequestSpec, result_type: type[T]) -> T:
        response, body = await self.send(spec)
        return _decode(response, body, result_type)

    async def slice(self, spec: RequestSpec, result_type: type[T]) -> list[T]:
        response, body = await self.send(spec)
        return _decode(response, body, list[result_type])

    async def empty(self, spec: RequestSpec) -> None:
        await self.send(spec, parse=False)

    async def page(self, spec: RequestSpec, item_type: type[T]) -> Page[T]:
        response, body = await self.send(spec)
        return _decode_page(response, body, item_type)

    def iter(
        self, spec: RequestSpec, item_type: type[T], limit: int | None = None
    ) -> AsyncIter[T]:
        return AsyncIter(self, spec, item_type, limit)

    def failed_iter(self, exc: BaseException) -> AsyncIter[Any]:
        return AsyncIter.failed(exc)
