# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Result and metadata types returned by the request pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from consul_api.errors import ConsulError
    from consul_api.transport import TransportResponse

__all__ = [
    "DecodedBody",
    "QueryMeta",
    "QueryResponse",
    "RequestResponse",
    "ValuedWriteStringResponse",
    "WriteMeta",
    "WriteResponse",
]


@dataclass(frozen=True, slots=True)
class RequestResponse:
    """Outcome of executing one request.

    *duration* is populated even when *err* is set.

    Attributes:
        duration: Wall-clock time spent in the transport call.
        response: The raw transport response, or ``None``.
        err: The first error seen, or ``None``.

    """

    duration: timedelta
    response: TransportResponse | None = None
    err: ConsulError | None = None


@dataclass(frozen=True, slots=True)
class DecodedBody:
    """A decoded JSON body, or the error that prevented decoding."""

    decoded: Any = None
    err: ConsulError | None = None


@dataclass(frozen=True)
class QueryMeta:
    """Metadata for a read request, taken from timing and response headers.

    Absent headers leave the corresponding field at its zero value.

    Attributes:
        request_time: Time spent in the transport call.
        request_url: The URI that was requested.
        last_index: ``X-Consul-Index``, for blocking queries.
        last_content_hash: ``X-Consul-ContentHash``, for hash-based blocking.
        known_leader: ``X-Consul-KnownLeader``.
        last_contact: ``X-Consul-LastContact``, time since the serving
            server last heard from the leader.
        address_translation_enabled: ``X-Consul-Translate-Addresses``.
        cache_hit: ``X-Cache`` was ``HIT``.
        cache_age: ``Age`` of a cached result.

    """

    request_time: timedelta = field(default_factory=timedelta)
    request_url: str = ""
    last_index: int = 0
    last_content_hash: str = ""
    known_leader: bool = False
    last_contact: timedelta = field(default_factory=timedelta)
    address_translation_enabled: bool = False
    cache_hit: bool = False
    cache_age: timedelta = field(default_factory=timedelta)


@dataclass(frozen=True)
class WriteMeta:
    """Metadata for a mutating request."""

    request_time: timedelta = field(default_factory=timedelta)
    request_url: str = ""


@dataclass(frozen=True)
class WriteResponse:
    """Result of a write whose body is not decoded."""

    write_meta: WriteMeta | None = None
    err: ConsulError | None = None


@dataclass(frozen=True)
class ValuedWriteStringResponse:
    """Result of a write whose decoded body is returned to the caller."""

    value: Any = ""
    write_meta: WriteMeta | None = None
    err: ConsulError | None = None


@dataclass(frozen=True)
class QueryResponse:
    """Result of a read: decoded body plus query metadata."""

    value: Any = None
    query_meta: QueryMeta | None = None
    err: ConsulError | None = None
