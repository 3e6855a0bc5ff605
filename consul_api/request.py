# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Request descriptor: one fully assembled, not-yet-sent HTTP call.

A ``Request`` seeds its query params and headers from the client config,
encodes an optional body, and lets per-call options overlay the defaults.
The URI is computed lazily and cached until options are applied again.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Mapping
from datetime import timedelta
from io import BytesIO
from types import TracebackType
from typing import TYPE_CHECKING, Any

from consul_api._debug import fmt_headers, http_request_logger
from consul_api._parse import format_milliseconds
from consul_api.values import HeaderValues, Params

if TYPE_CHECKING:
    from consul_api.config import Config
    from consul_api.options import QueryOptions, WriteOptions

__all__ = ["CACHE_CONTROL_HEADER", "TOKEN_HEADER", "Request", "encode_body"]

TOKEN_HEADER = "X-Consul-Token"
CACHE_CONTROL_HEADER = "Cache-Control"

_PATH_TRAILING = " \t\n\r\0\x0b&?"
_PATH_LEADING = " \t\n\r\0\x0b/"


def encode_body(body: Any, json_options: Mapping[str, Any] | None = None) -> bytes:
    """Encode a request body value according to its kind.

    - ``bool`` → ``b"true"`` / ``b"false"``
    - ``int`` / ``float`` → decimal string
    - ``str`` → UTF-8, verbatim
    - ``bytes`` / ``bytearray`` → verbatim
    - mapping, list, tuple → JSON
    - dataclass instance → JSON of its fields
    - anything else → empty body

    Args:
        body: The value to encode.
        json_options: Keyword arguments forwarded to ``json.dumps``.

    Returns:
        The encoded body bytes.

    """
    opts = dict(json_options or {})
    # bool first: it is an int subclass
    if isinstance(body, bool):
        return b"true" if body else b"false"
    if isinstance(body, int | float):
        return str(body).encode()
    if isinstance(body, str):
        return body.encode()
    if isinstance(body, bytes | bytearray):
        return bytes(body)
    if isinstance(body, Mapping | list | tuple):
        return json.dumps(body, **opts).encode()
    if dataclasses.is_dataclass(body) and not isinstance(body, type):
        return json.dumps(dataclasses.asdict(body), **opts).encode()
    return b""


def _overlay_param(params: Params, key: str, value: str | None) -> None:
    """Set *key* when *value* is non-empty, clear it when ``""``, skip ``None``."""
    if value is None:
        return
    if value:
        params.set(key, value)
    else:
        params.remove(key)


def _overlay_token(header: HeaderValues, token: str | None) -> None:
    if token is None:
        return
    if token:
        header[TOKEN_HEADER] = token
    else:
        header.pop(TOKEN_HEADER, None)


class Request:
    """Transport-ready description of a single HTTP call.

    Attributes:
        method: Upper-cased HTTP method.
        path: Request path as given by the caller.
        header: Request headers (case-insensitive).
        params: Query parameters in insertion order.
        timeout: Per-call timeout for the transport to honour, or ``None``.

    """

    __slots__ = ("_body", "_body_size", "_config", "_uri", "header", "method", "params", "path", "timeout")

    def __init__(self, method: str, path: str, config: Config, body: Any = None) -> None:
        """Seed params and headers from *config* and encode *body*.

        Args:
            method: HTTP method, any case.
            path: Path relative to the agent root, e.g. ``v1/kv/foo``.
            config: Client config supplying defaults.
            body: Optional body value; ``None`` sends no body.

        """
        self._config = config
        self.method = method.upper()
        self.path = path
        self.header = HeaderValues()
        self.params = Params()
        self.timeout: timedelta | None = None
        self._uri: str | None = None
        self._body: BytesIO | None = None
        self._body_size = 0

        if config.datacenter:
            self.params.set("dc", config.datacenter)
        if config.namespace:
            self.params.set("ns", config.namespace)
        if config.wait_time:
            self.params.set("wait", format_milliseconds(config.wait_time))
        if config.token:
            self.header[TOKEN_HEADER] = config.token

        if body is not None:
            encoded = encode_body(body, config.json_encode_options)
            self._body = BytesIO(encoded)
            self._body_size = len(encoded)

    @property
    def config(self) -> Config:
        """The config this request was built from."""
        return self._config

    @property
    def body(self) -> bytes | None:
        """The encoded body, or ``None`` when the request carries none.

        Raises:
            ValueError: If the request has been closed.

        """
        if self._body is None:
            return None
        return self._body.getvalue()

    def apply_write_options(self, opts: WriteOptions | None) -> None:
        """Overlay the fields *opts* sets onto this request."""
        if opts is None:
            return
        _overlay_param(self.params, "ns", opts.namespace)
        _overlay_param(self.params, "dc", opts.datacenter)
        _overlay_token(self.header, opts.token)
        if opts.relay_factor:
            self.params.set("relay-factor", str(opts.relay_factor))
        if opts.timeout is not None:
            self.timeout = opts.timeout
        self._uri = None

    def apply_query_options(self, opts: QueryOptions | None) -> None:
        """Overlay the fields *opts* sets onto this request."""
        if opts is None:
            return
        _overlay_param(self.params, "ns", opts.namespace)
        _overlay_param(self.params, "partition", opts.partition)
        _overlay_param(self.params, "dc", opts.datacenter)
        if opts.allow_stale:
            self.params.set("stale", "")
        if opts.require_consistent:
            self.params.set("consistent", "")
        if opts.wait_index:
            self.params.set("index", str(opts.wait_index))
        _overlay_param(self.params, "hash", opts.wait_hash)
        if opts.wait_time:
            self.params.set("wait", format_milliseconds(opts.wait_time))
        _overlay_token(self.header, opts.token)
        _overlay_param(self.params, "near", opts.near)
        _overlay_param(self.params, "filter", opts.filter)
        if opts.node_meta:
            self.params.remove("node-meta")
            for key, value in opts.node_meta.items():
                self.params.add("node-meta", f"{key}:{value}")
        if opts.relay_factor:
            self.params.set("relay-factor", str(opts.relay_factor))
        if opts.local_only:
            self.params.set("local-only", "true")
        if opts.connect:
            self.params.set("connect", "true")
        if opts.use_cache and not opts.require_consistent:
            self.params.set("cached", "")
            directives: list[str] = []
            if opts.max_age is not None:
                directives.append(f"max-age={int(opts.max_age.total_seconds())}")
            if opts.stale_if_error is not None:
                directives.append(f"stale-if-error={int(opts.stale_if_error.total_seconds())}")
            if directives:
                self.header[CACHE_CONTROL_HEADER] = ", ".join(directives)
        if opts.timeout is not None:
            self.timeout = opts.timeout
        self._uri = None

    def filter_query(self, expr: str = "") -> None:
        """Set the ``filter`` param when *expr* is non-empty."""
        if not expr:
            return
        self.params.set("filter", expr)
        self._uri = None

    @property
    def uri(self) -> str:
        """``{scheme}://{address}/{path}[?{query}]``, cached until options change."""
        if self._uri is None:
            path = self.path.rstrip(_PATH_TRAILING).lstrip(_PATH_LEADING)
            uri = f"{self._config.scheme}://{self._config.address}/{path}"
            if len(self.params) > 0:
                uri = f"{uri}?{self.params.encode()}"
            self._uri = uri
            if http_request_logger.isEnabledFor(logging.DEBUG):
                http_request_logger.debug(
                    "Built request: %s %s headers=%s body_size=%d",
                    self.method,
                    uri,
                    fmt_headers(self.header),
                    self._body_size,
                )
        return self._uri

    def close(self) -> None:
        """Release the body buffer."""
        if self._body is not None:
            self._body.close()

    def __enter__(self) -> Request:
        """Enter the context."""
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context, releasing the body buffer."""
        self.close()

    def __repr__(self) -> str:
        """Describe the request without building or caching its URI."""
        target = self._uri if self._uri is not None else self.path
        return f"Request({self.method} {target})"
