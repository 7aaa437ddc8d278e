"""Typed sync and async clients for the Duffel flight-booking API."""

from __future__ import annotations

from duffel.client import AsyncDuffel, Duffel
from duffel.config import Credentials, Settings, settings
from duffel.errors import (
    AirlineError,
    APIError,
    AuthenticationError,
    AuthorizationError,
    DecodeError,
    DuffelError,
    ErrorCategory,
    ErrorCode,
    ErrorType,
    NetworkError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from duffel.iterator import AsyncIter, Iter, IterState
from duffel.logging_config import setup_logging
from duffel.ratelimit import RateLimit
from duffel.request import QueryParams, RequestBuilder, RequestSpec

__all__ = [
    "APIError",
    "AirlineError",
    "AsyncDuffel",
    "AsyncIter",
    "AuthenticationError",
    "AuthorizationError",
    "Credentials",
    "DecodeError",
    "Duffel",
    "DuffelError",
    "ErrorCategory",
    "ErrorCode",
    "ErrorType",
    "Iter",
    "IterState",
    "NetworkError",
    "QueryParams",
    "RateLimit",
    "RateLimitError",
    "RequestBuilder",
    "RequestSpec",
    "ServerError",
    "Settings",
    "ValidationError",
    "settings",
    "setup_logging",
]
