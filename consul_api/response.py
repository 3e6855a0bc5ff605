# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Response classification and decoding.

``require_status`` enforces the expected status code, ``decode_body`` parses
JSON bodies, and ``build_query_meta`` / ``build_write_meta`` turn timing and
response headers into metadata.  None of these raise; failures come back as
error values on the result.

Logger ``consul_api.http.response``: classification failures are logged at
DEBUG level.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from datetime import timedelta
from http import HTTPStatus
from typing import NoReturn

from consul_api._debug import fmt_body_preview, http_response_logger
from consul_api._parse import parse_bool, parse_leading_int
from consul_api.errors import DecodeError, ShapeError, StatusError
from consul_api.results import DecodedBody, QueryMeta, RequestResponse, WriteMeta
from consul_api.transport import TransportResponse
from consul_api.values import HeaderValues

__all__ = [
    "ADDRESS_TRANSLATION_HEADER",
    "CACHE_AGE_HEADER",
    "CACHE_HIT_HEADER",
    "CONTENT_HASH_HEADER",
    "INDEX_HEADER",
    "KNOWN_LEADER_HEADER",
    "LAST_CONTACT_HEADER",
    "build_query_meta",
    "build_write_meta",
    "decode_body",
    "require_ok",
    "require_status",
]

INDEX_HEADER = "X-Consul-Index"
CONTENT_HASH_HEADER = "X-Consul-ContentHash"
KNOWN_LEADER_HEADER = "X-Consul-KnownLeader"
LAST_CONTACT_HEADER = "X-Consul-LastContact"
ADDRESS_TRANSLATION_HEADER = "X-Consul-Translate-Addresses"
CACHE_AGE_HEADER = "Age"
CACHE_HIT_HEADER = "X-Cache"


# ---------------------------------------------------------------------------
# Status classification
# ---------------------------------------------------------------------------


def require_status(result: RequestResponse, status_code: int) -> RequestResponse:
    """Require *result* to carry a response with *status_code*.

    Results that already hold an error, or hold no response at all, pass
    through untouched.  A matching status returns *result* itself.

    Args:
        result: Output of the transport invoker.
        status_code: The status code the caller expects.

    Returns:
        *result*, or a copy whose ``err`` is a ``StatusError`` or
        ``ShapeError``.

    """
    if result.err is not None or result.response is None:
        return result

    response = result.response
    if not isinstance(response, TransportResponse):
        return dataclasses.replace(result, err=ShapeError(type(response).__name__))

    actual = response.status_code
    if actual == status_code:
        return result

    if http_response_logger.isEnabledFor(logging.DEBUG):
        http_response_logger.debug(
            "Unexpected status: expected=%d, actual=%d, body=%r",
            status_code,
            actual,
            fmt_body_preview(response.content),
        )
    return dataclasses.replace(result, err=StatusError(status_code, actual, response.reason_phrase))


def require_ok(result: RequestResponse) -> RequestResponse:
    """Shorthand for ``require_status(result, 200)``."""
    return require_status(result, int(HTTPStatus.OK))


# ---------------------------------------------------------------------------
# Body decoding
# ---------------------------------------------------------------------------


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"Invalid JSON constant: {name}")


def decode_body(raw: bytes | str) -> DecodedBody:
    """Parse *raw* as JSON.

    An empty body is not valid JSON and yields a ``DecodeError``, as do the
    non-standard ``NaN``/``Infinity`` literals and nesting too deep to parse.
    """
    try:
        return DecodedBody(json.loads(raw, parse_constant=_reject_constant), None)
    except (ValueError, RecursionError) as exc:
        http_response_logger.debug("Body decode failed: %s", exc)
        return DecodedBody(None, DecodeError(str(exc)))


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


def _header_bool(headers: HeaderValues, name: str) -> bool:
    return parse_bool(headers.line(name)) is True


def _header_int(headers: HeaderValues, name: str) -> int:
    line = headers.line(name)
    if not line:
        return 0
    value = parse_leading_int(line)
    return 0 if value is None else value


def build_query_meta(duration: timedelta, response: TransportResponse, uri: str) -> QueryMeta:
    """Build query metadata from timing and the agent's response headers.

    Args:
        duration: Time spent in the transport call.
        response: The response whose headers are read.
        uri: The requested URI.

    Returns:
        A ``QueryMeta``; missing or unparseable headers leave zero values.

    """
    headers = HeaderValues.from_response_headers(response.headers)
    return QueryMeta(
        request_time=duration,
        request_url=str(uri),
        last_index=_header_int(headers, INDEX_HEADER),
        last_content_hash=headers.line(CONTENT_HASH_HEADER),
        known_leader=_header_bool(headers, KNOWN_LEADER_HEADER),
        last_contact=timedelta(milliseconds=_header_int(headers, LAST_CONTACT_HEADER)),
        address_translation_enabled=_header_bool(headers, ADDRESS_TRANSLATION_HEADER),
        cache_hit=headers.line(CACHE_HIT_HEADER).upper() == "HIT",
        cache_age=timedelta(seconds=_header_int(headers, CACHE_AGE_HEADER)),
    )


def build_write_meta(duration: timedelta, uri: str | None = None) -> WriteMeta:
    """Build write metadata from timing (and optionally the requested URI)."""
    return WriteMeta(request_time=duration, request_url="" if uri is None else str(uri))
