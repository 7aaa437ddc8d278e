"""Request building: verb, path, query and JSON body for one API call.

Nothing here performs I/O. A :class:`RequestBuilder` produces an immutable
:class:`RequestSpec` and hands it to the executor it was created with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar, runtime_checkable
from urllib.parse import quote

from pydantic import BaseModel

from duffel.config import Credentials

if TYPE_CHECKING:
    from duffel.executor import AsyncExecutor, Executor

T = TypeVar("T")

Query = dict[str, "str | list[str]"]

_QUERY_METHODS = frozenset({"GET", "DELETE"})


@runtime_checkable
class ParamEncoder(Protocol):
    """Anything that can write itself into a query mapping."""

    def encode(self, query: Query) -> None: ...


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class QueryParams(BaseModel):
    """Base for list/filter parameter models.

    Set fields are written by alias: lists as repeated keys, nested models
    as ``name[key]``, ``None`` fields skipped.
    """

    def encode(self, query: Query) -> None:
        dumped = self.model_dump(by_alias=True, exclude_none=True, exclude_defaults=True)
        for name, value in dumped.items():
            _write(query, name, value)


def _write(query: Query, name: str, value: Any) -> None:
    if isinstance(value, dict):
        for key, inner in value.items():
            if inner is not None:
                _write(query, f"{name}[{key}]", inner)
    elif isinstance(value, (list, tuple)):
        query[name] = [_format_value(v) for v in value]
    else:
        query[name] = _format_value(value)


def encode_query(*payloads: Any) -> Query:
    """Merge the query contribution of each payload, later ones winning."""
    query: Query = {}
    for payload in payloads:
        if payload is None or isinstance(payload, str):
            continue
        if isinstance(payload, ParamEncoder):
            payload.encode(query)
    return query


def serialize_body(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(payload, dict):
        return {k: serialize_body(v) for k, v in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [serialize_body(v) for v in payload]
    return payload


@dataclass(frozen=True)
class RequestSpec:
    """A fully built request; safe to inspect or send more than once."""

    method: str
    url: str
    params: Query = field(default_factory=dict)
    json: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    def with_params(self, **extra: str) -> RequestSpec:
        params = dict(self.params)
        params.update(extra)
        return RequestSpec(self.method, self.url, params, self.json, self.headers)


def build_headers(credentials: Credentials, *, has_body: bool) -> dict[str, str]:
    headers = {
        "Authorization": f"Bearer {credentials.token}",
        "Accept": "application/json",
        "Accept-Encoding": "gzip",
        "Duffel-Version": credentials.version,
        "User-Agent": credentials.user_agent_header,
    }
    if has_body:
        headers["Content-Type"] = "application/json"
    return headers


class RequestBuilder(Generic[T]):
    """Fluent builder bound to one executor and one result type.

    Resource methods chain ``get/post/patch/delete`` with the optional
    ``body``, ``with_param(s)`` and ``with_limit`` setters, then finish with
    ``single()``, ``slice()``, ``empty()`` or ``iter()``. On an async client
    the first three return awaitables and ``iter()`` an async iterator.
    """

    def __init__(
        self,
        executor: Executor | AsyncExecutor,
        result_type: type[T],
    ) -> None:
        self._executor = executor
        self._result_type = result_type
        self._method = "GET"
        self._path = ""
        self._body: Any = None
        self._params: list[Any] = []
        self._extra: Query = {}
        self._limit: int | None = None

    # -- verbs ---------------------------------------------------------------

    def _route(self, method: str, path: str, args: tuple[Any, ...]) -> RequestBuilder[T]:
        if args:
            path = path % tuple(quote(str(a), safe="") for a in args)
        self._method = method
        self._path = path
        return self

    def get(self, path: str, *args: Any) -> RequestBuilder[T]:
        return self._route("GET", path, args)

    def post(self, path: str, *args: Any, body: Any = None) -> RequestBuilder[T]:
        self._route("POST", path, args)
        return self.body(body)

    def patch(self, path: str, *args: Any, body: Any = None) -> RequestBuilder[T]:
        self._route("PATCH", path, args)
        return self.body(body)

    def delete(self, path: str, *args: Any) -> RequestBuilder[T]:
        return self._route("DELETE", path, args)

    # -- modifiers -----------------------------------------------------------

    def body(self, payload: Any) -> RequestBuilder[T]:
        self._body = payload
        return self

    def with_param(self, name: str, value: Any) -> RequestBuilder[T]:
        if isinstance(value, (list, tuple)):
            self._extra[name] = [_format_value(v) for v in value]
        else:
            self._extra[name] = _format_value(value)
        return self

    def with_params(self, *payloads: Any) -> RequestBuilder[T]:
        self._params.extend(p for p in payloads if p is not None)
        return self

    def with_limit(self, limit: int | None) -> RequestBuilder[T]:
        """Page size sent as ``limit`` when iterating."""
        if limit is not None and not 1 <= limit <= 200:
            raise ValueError("limit must be between 1 and 200")
        self._limit = limit
        return self

    # -- build ---------------------------------------------------------------

    def build(self) -> RequestSpec:
        if not self._path:
            raise ValueError("no path set; call get/post/patch/delete first")
        credentials = self._executor.credentials

        params: Query = dict(self._extra)
        params.update(encode_query(*self._params))

        payload = None
        if self._method in _QUERY_METHODS:
            params.update(encode_query(self._body))
        elif self._body is not None:
            payload = {"data": serialize_body(self._body)}

        return RequestSpec(
            method=self._method,
            url=credentials.host + self._path,
            params=params,
            json=payload,
            headers=build_headers(credentials, has_body=payload is not None),
        )

    # -- terminals -----------------------------------------------------------

    def single(self):
        return self._executor.single(self.build(), self._result_type)

    def slice(self):
        return self._executor.slice(self.build(), self._result_type)

    def empty(self):
        return self._executor.empty(self.build())

    def iter(self):
        return self._executor.iter(self.build(), self._result_type, limit=self._limit)
