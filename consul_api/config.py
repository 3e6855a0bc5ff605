# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Client connection settings.

``Config`` is a plain mutable dataclass; clients take a :meth:`Config.clone`
at construction so later mutation of the caller's object never reaches an
existing client.

Environment variables understood by :meth:`Config.from_env`:

- ``CONSUL_HTTP_ADDR``: ``host:port``, optionally prefixed with
  ``http://`` or ``https://``
- ``CONSUL_HTTP_TOKEN``: ACL token
- ``CONSUL_HTTP_AUTH``: ``user`` or ``user:password`` for HTTP basic auth
- ``CONSUL_HTTP_SSL``: boolean, switches the scheme to ``https``
- ``CONSUL_HTTP_SSL_VERIFY``: boolean, ``false`` disables TLS verification
- ``CONSUL_CACERT`` / ``CONSUL_CLIENT_CERT`` / ``CONSUL_CLIENT_KEY``
- ``CONSUL_NAMESPACE``

Logger ``consul_api.config``: unparseable booleans are logged at WARNING.
"""

from __future__ import annotations

import copy
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any

from consul_api._parse import parse_bool
from consul_api.transport import HttpxTransport, Transport

__all__ = [
    "DEFAULT_ADDRESS",
    "DEFAULT_SCHEME",
    "Config",
    "HttpBasicAuth",
    "default_config",
]

_logger = logging.getLogger("consul_api.config")

DEFAULT_ADDRESS = "127.0.0.1:8500"
DEFAULT_SCHEME = "http"

HTTP_ADDR_ENV = "CONSUL_HTTP_ADDR"
HTTP_TOKEN_ENV = "CONSUL_HTTP_TOKEN"
HTTP_AUTH_ENV = "CONSUL_HTTP_AUTH"
HTTP_SSL_ENV = "CONSUL_HTTP_SSL"
HTTP_SSL_VERIFY_ENV = "CONSUL_HTTP_SSL_VERIFY"
CA_FILE_ENV = "CONSUL_CACERT"
CLIENT_CERT_ENV = "CONSUL_CLIENT_CERT"
CLIENT_KEY_ENV = "CONSUL_CLIENT_KEY"
NAMESPACE_ENV = "CONSUL_NAMESPACE"


@dataclass(frozen=True)
class HttpBasicAuth:
    """HTTP basic-auth credentials sent with every request.

    Attributes:
        username: Basic-auth user name.
        password: Basic-auth password (may be empty).

    """

    username: str
    password: str = field(default="", repr=False)


@dataclass
class Config:
    """Connection settings shared by every request a client builds.

    Attributes:
        address: Agent ``host:port``.
        scheme: URI scheme, ``http`` or ``https``.
        datacenter: Default datacenter (``dc`` param) when non-empty.
        namespace: Default namespace (``ns`` param) when non-empty.
        token: Default ACL token (``X-Consul-Token``) when non-empty.
        wait_time: Default blocking-query wait (``wait`` param) when non-zero.
        json_encode_options: Keyword arguments forwarded to ``json.dumps``
            when encoding structured request bodies.
        http_auth: Optional basic-auth credentials.
        insecure_skip_verify: Disable TLS certificate verification.
        ca_file: CA bundle used to verify the agent.
        cert_file: Client certificate for mutual TLS.
        key_file: Private key for *cert_file*.
        transport: Pluggable transport; ``None`` means requests fail with
            ``TransportError``.

    """

    address: str = DEFAULT_ADDRESS
    scheme: str = DEFAULT_SCHEME
    datacenter: str = ""
    namespace: str = ""
    token: str = field(default="", repr=False)
    wait_time: timedelta = field(default_factory=timedelta)
    json_encode_options: dict[str, Any] = field(default_factory=dict)
    http_auth: HttpBasicAuth | None = None
    insecure_skip_verify: bool = False
    ca_file: str = ""
    cert_file: str = ""
    key_file: str = ""
    transport: Transport | None = field(default=None, compare=False)

    def clone(self) -> Config:
        """Return a value copy of this config.

        Mutable members are deep-copied; the transport handle is shared since
        it owns live connections.
        """
        return replace(self, json_encode_options=copy.deepcopy(self.json_encode_options))

    def validate(self) -> None:
        """Check the settings a request URI depends on.

        Raises:
            ValueError: If *address* or *scheme* is empty.

        """
        if not self.address:
            raise ValueError("address must be non-empty")
        if not self.scheme:
            raise ValueError("scheme must be non-empty")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build a config from ``CONSUL_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            A config with no transport attached.

        """
        env = os.environ if environ is None else environ
        config = cls()

        addr = env.get(HTTP_ADDR_ENV, "")
        if addr:
            if addr.startswith("https://"):
                config.scheme = "https"
                addr = addr[len("https://") :]
            elif addr.startswith("http://"):
                addr = addr[len("http://") :]
            config.address = addr

        config.token = env.get(HTTP_TOKEN_ENV, "")
        config.namespace = env.get(NAMESPACE_ENV, "")

        auth = env.get(HTTP_AUTH_ENV, "")
        if auth:
            username, _, password = auth.partition(":")
            config.http_auth = HttpBasicAuth(username, password)

        ssl = _env_bool(env, HTTP_SSL_ENV)
        if ssl:
            config.scheme = "https"

        verify = _env_bool(env, HTTP_SSL_VERIFY_ENV)
        if verify is not None:
            config.insecure_skip_verify = not verify

        config.ca_file = env.get(CA_FILE_ENV, "")
        config.cert_file = env.get(CLIENT_CERT_ENV, "")
        config.key_file = env.get(CLIENT_KEY_ENV, "")
        return config


def _env_bool(env: Mapping[str, str], name: str) -> bool | None:
    """Read a boolean environment variable, warning when it does not parse."""
    raw = env.get(name, "")
    if not raw:
        return None
    value = parse_bool(raw)
    if value is None:
        _logger.warning("Could not parse %s=%r as a boolean, ignoring", name, raw)
    return value


def default_config(environ: Mapping[str, str] | None = None) -> Config:
    """Return :meth:`Config.from_env` with an ``HttpxTransport`` attached."""
    config = Config.from_env(environ)
    config.transport = HttpxTransport.from_config(config)
    return config
