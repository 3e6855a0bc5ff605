# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Transport protocol, the httpx-backed transport, and the request invoker.

A transport is anything with a ``send`` method returning an object that
satisfies :class:`TransportResponse`.  ``httpx.Response`` satisfies it as-is.

Logger ``consul_api.http.request``: sends and transport failures are
logged at DEBUG level.
"""

from __future__ import annotations

import logging
import ssl
import time
from collections.abc import Mapping
from datetime import timedelta
from types import TracebackType
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx

from consul_api._debug import fmt_headers, http_request_logger
from consul_api.errors import TransportError
from consul_api.results import RequestResponse

if TYPE_CHECKING:
    from consul_api.config import Config
    from consul_api.request import Request

__all__ = ["HttpxTransport", "Transport", "TransportResponse", "execute"]


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class TransportResponse(Protocol):
    """What the pipeline reads from a transport's response."""

    @property
    def status_code(self) -> int:
        """HTTP status code."""
        ...

    @property
    def reason_phrase(self) -> str:
        """HTTP reason phrase."""
        ...

    @property
    def headers(self) -> Any:
        """Response headers: a mapping, or ``httpx.Headers``."""
        ...

    @property
    def content(self) -> bytes:
        """The full response body."""
        ...


@runtime_checkable
class Transport(Protocol):
    """Send-one-request capability."""

    def send(
        self,
        method: str,
        uri: str,
        headers: Mapping[str, str],
        body: bytes | None,
        *,
        timeout: timedelta | None = None,
    ) -> TransportResponse:
        """Send a request and return its response, raising on failure."""
        ...


# ---------------------------------------------------------------------------
# HttpxTransport
# ---------------------------------------------------------------------------


class HttpxTransport:
    """Transport backed by a synchronous ``httpx.Client``.

    The transport owns the client it creates and closes it in :meth:`close`;
    a client passed in by the caller is left open.
    """

    __slots__ = ("_client", "_own_client")

    def __init__(self, client: httpx.Client | None = None) -> None:
        """Initialize with an optional pre-built ``httpx.Client``."""
        self._own_client = client is None
        self._client = client if client is not None else httpx.Client()

    @classmethod
    def from_config(cls, config: Config) -> HttpxTransport:
        """Create a transport honouring the TLS and basic-auth settings of *config*."""
        verify: ssl.SSLContext | bool
        if config.insecure_skip_verify:
            verify = False
        else:
            verify = ssl.create_default_context(cafile=config.ca_file or None)
            if config.cert_file:
                verify.load_cert_chain(config.cert_file, config.key_file or None)
        auth: tuple[str, str] | None = None
        if config.http_auth is not None:
            auth = (config.http_auth.username, config.http_auth.password)
        return cls(httpx.Client(verify=verify, auth=auth))

    @property
    def client(self) -> httpx.Client:
        """The underlying ``httpx.Client``."""
        return self._client

    def send(
        self,
        method: str,
        uri: str,
        headers: Mapping[str, str],
        body: bytes | None,
        *,
        timeout: timedelta | None = None,
    ) -> httpx.Response:
        """Send a request through httpx.

        Args:
            method: HTTP method.
            uri: Absolute request URI.
            headers: Request headers.
            body: Request body, or ``None``.
            timeout: Per-call timeout; the client default applies when ``None``.

        Returns:
            The ``httpx.Response`` with its body read.

        Raises:
            httpx.HTTPError: On connection failures and timeouts.

        """
        if timeout is None:
            return self._client.request(method, uri, headers=dict(headers), content=body)
        return self._client.request(
            method,
            uri,
            headers=dict(headers),
            content=body,
            timeout=timeout.total_seconds(),
        )

    def close(self) -> None:
        """Close the client if this transport created it."""
        if self._own_client:
            self._client.close()

    def __enter__(self) -> HttpxTransport:
        """Enter the context."""
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context."""
        self.close()


# ---------------------------------------------------------------------------
# Invoker
# ---------------------------------------------------------------------------


def execute(request: Request) -> RequestResponse:
    """Send *request* through its config's transport and time the call.

    Any failure, including a missing transport, becomes a ``TransportError``
    in the returned result.  The request's body buffer is closed before this
    returns.

    Args:
        request: The request to send; consumed by this call.

    Returns:
        A ``RequestResponse`` whose ``duration`` is always set.

    """
    transport = request.config.transport
    uri = request.uri
    start = time.perf_counter()
    try:
        if transport is None:
            raise RuntimeError("Unable to execute query as no transport has been defined.")
        if http_request_logger.isEnabledFor(logging.DEBUG):
            http_request_logger.debug("Sending %s %s headers=%s", request.method, uri, fmt_headers(request.header))
        response = transport.send(request.method, uri, request.header, request.body, timeout=request.timeout)
    except Exception as exc:
        duration = timedelta(seconds=time.perf_counter() - start)
        http_request_logger.debug("Transport failure on %s %s: %s", request.method, uri, exc)
        return RequestResponse(duration, None, TransportError(uri, str(exc)))
    finally:
        request.close()
    duration = timedelta(seconds=time.perf_counter() - start)
    return RequestResponse(duration, response, None)
