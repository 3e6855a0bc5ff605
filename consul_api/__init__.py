# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Client library for the Consul agent HTTP API.

The request pipeline builds a ``Request`` from a ``Config`` plus per-call
``QueryOptions`` / ``WriteOptions``, sends it through a pluggable transport
(``HttpxTransport`` by default), checks the status code, and decodes the
JSON body and metadata headers into result objects.  Errors are returned as
values on the result (``err``) rather than raised.
"""

from consul_api.client import BaseClient
from consul_api.config import Config, HttpBasicAuth, default_config
from consul_api.errors import ConsulError, DecodeError, ShapeError, StatusError, TransportError
from consul_api.options import QueryOptions, WriteOptions
from consul_api.request import Request, encode_body
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
from consul_api.status import StatusClient
from consul_api.transport import HttpxTransport, Transport, TransportResponse, execute
from consul_api.values import HeaderValues, Params

__all__ = [
    "BaseClient",
    "Config",
    "ConsulError",
    "DecodeError",
    "DecodedBody",
    "HeaderValues",
    "HttpBasicAuth",
    "HttpxTransport",
    "Params",
    "QueryMeta",
    "QueryOptions",
    "QueryResponse",
    "Request",
    "RequestResponse",
    "ShapeError",
    "StatusClient",
    "StatusError",
    "Transport",
    "TransportError",
    "TransportResponse",
    "ValuedWriteStringResponse",
    "WriteMeta",
    "WriteOptions",
    "WriteResponse",
    "build_query_meta",
    "build_write_meta",
    "decode_body",
    "default_config",
    "encode_body",
    "execute",
    "require_ok",
    "require_status",
]
