# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Base client composing the request pipeline into call patterns.

Endpoint façades subclass :class:`BaseClient` and call its underscore
methods: ``_put`` / ``_put_no_resp`` / ``_put_str_resp`` / ``_delete`` for
writes and ``_query`` for reads.  Each pattern runs build → execute →
require-OK → (decode) → metadata and stops at the first error.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from consul_api.config import Config
from consul_api.errors import ConsulError
from consul_api.options import QueryOptions, WriteOptions
from consul_api.request import Request
from consul_api.response import (
    build_query_meta,
    build_write_meta,
    decode_body,
    require_ok,
    require_status,
)
from consul_api.results import (
    DecodedBody,
    QueryMeta,
    QueryResponse,
    RequestResponse,
    ValuedWriteStringResponse,
    WriteMeta,
    WriteResponse,
)
from consul_api.transport import TransportResponse, execute

__all__ = ["BaseClient"]


class BaseClient:
    """Holds a private copy of the config and runs requests against it."""

    __slots__ = ("_config",)

    def __init__(self, config: Config) -> None:
        """Clone and validate *config*.

        Raises:
            ValueError: If the config's address or scheme is empty.

        """
        self._config = config.clone()
        self._config.validate()

    @property
    def config(self) -> Config:
        """This client's private config copy."""
        return self._config

    # -- building blocks ----------------------------------------------------

    def _write_request(self, path: str, body: Any, opts: WriteOptions | None, *, method: str = "PUT") -> Request:
        r = Request(method, path, self._config, body)
        r.apply_write_options(opts)
        return r

    def _query_request(self, path: str, opts: QueryOptions | None, body: Any = None) -> Request:
        r = Request("GET", path, self._config, body)
        r.apply_query_options(opts)
        return r

    def _do(self, request: Request) -> RequestResponse:
        return execute(request)

    def _require_status(self, result: RequestResponse, status_code: int) -> RequestResponse:
        return require_status(result, status_code)

    def _require_ok(self, result: RequestResponse) -> RequestResponse:
        return require_ok(result)

    def _decode_body(self, response: TransportResponse) -> DecodedBody:
        return decode_body(response.content)

    def _build_query_meta(self, duration: timedelta, response: TransportResponse, uri: str) -> QueryMeta:
        return build_query_meta(duration, response, uri)

    def _build_write_meta(self, duration: timedelta, uri: str | None = None) -> WriteMeta:
        return build_write_meta(duration, uri)

    # -- composite call patterns --------------------------------------------

    def _put(self, path: str, body: Any, opts: WriteOptions | None = None) -> WriteResponse:
        """PUT *body* to *path*; the response body is not decoded."""
        r = self._write_request(path, body, opts)
        resp = self._require_ok(self._do(r))
        return WriteResponse(self._build_write_meta(resp.duration, r.uri), resp.err)

    def _put_no_resp(self, path: str, body: Any, opts: WriteOptions | None = None) -> ConsulError | None:
        """PUT *body* to *path* and return only the error, if any."""
        return self._require_ok(self._do(self._write_request(path, body, opts))).err

    def _put_str_resp(self, path: str, body: Any, opts: WriteOptions | None = None) -> ValuedWriteStringResponse:
        """PUT *body* to *path* and return the decoded response body."""
        r = self._write_request(path, body, opts)
        resp = self._require_ok(self._do(r))
        if resp.err is not None:
            return ValuedWriteStringResponse("", None, resp.err)
        if resp.response is None:
            return ValuedWriteStringResponse("", self._build_write_meta(resp.duration, r.uri), None)

        decoded = self._decode_body(resp.response)
        if decoded.err is not None:
            return ValuedWriteStringResponse("", None, decoded.err)

        return ValuedWriteStringResponse(decoded.decoded, self._build_write_meta(resp.duration, r.uri), None)

    def _delete(self, path: str, opts: WriteOptions | None = None) -> WriteResponse:
        """DELETE *path*; the response body is not decoded."""
        r = self._write_request(path, None, opts, method="DELETE")
        resp = self._require_ok(self._do(r))
        return WriteResponse(self._build_write_meta(resp.duration, r.uri), resp.err)

    def _query(self, path: str, opts: QueryOptions | None = None) -> QueryResponse:
        """GET *path* and return the decoded body with query metadata."""
        r = self._query_request(path, opts)
        resp = self._require_ok(self._do(r))
        if resp.err is not None or resp.response is None:
            return QueryResponse(None, QueryMeta(request_time=resp.duration, request_url=r.uri), resp.err)

        decoded = self._decode_body(resp.response)
        if decoded.err is not None:
            return QueryResponse(None, QueryMeta(request_time=resp.duration, request_url=r.uri), decoded.err)

        return QueryResponse(decoded.decoded, self._build_query_meta(resp.duration, resp.response, r.uri), None)

