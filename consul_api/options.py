# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Per-call overrides for read (query) and mutating (write) operations.

Fields left at ``None`` (or ``False`` for flags) never override the client
config.  A string field explicitly set to ``""`` clears the config default
for that call.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta

__all__ = ["QueryOptions", "WriteOptions"]


@dataclass(frozen=True)
class WriteOptions:
    """Overrides for a mutating request.

    Attributes:
        namespace: ``ns`` param.
        datacenter: ``dc`` param.
        token: ``X-Consul-Token`` header.
        relay_factor: ``relay-factor`` param (write fan-out hint).
        timeout: Per-call timeout recorded for the transport.

    Raises:
        ValueError: If *relay_factor* is negative.

    """

    namespace: str | None = None
    datacenter: str | None = None
    token: str | None = field(default=None, repr=False)
    relay_factor: int | None = None
    timeout: timedelta | None = None

    def __post_init__(self) -> None:
        """Validate option values."""
        if self.relay_factor is not None and self.relay_factor < 0:
            raise ValueError(f"relay_factor must be >= 0, got {self.relay_factor}")


@dataclass(frozen=True)
class QueryOptions:
    """Overrides for a read request.

    Attributes:
        namespace: ``ns`` param.
        partition: ``partition`` param.
        datacenter: ``dc`` param.
        allow_stale: Add the ``stale`` flag; any server may answer.
        require_consistent: Add the ``consistent`` flag.
        use_cache: Add the ``cached`` flag (agent-side cache).
        max_age: ``Cache-Control: max-age`` for cached reads.
        stale_if_error: ``Cache-Control: stale-if-error`` for cached reads.
        wait_index: ``index`` param for blocking queries.
        wait_hash: ``hash`` param for hash-based blocking queries.
        wait_time: ``wait`` param, rendered in milliseconds.
        token: ``X-Consul-Token`` header.
        near: ``near`` param for distance sorting.
        filter: ``filter`` expression.
        node_meta: ``node-meta`` params, one ``key:value`` per entry.
        relay_factor: ``relay-factor`` param.
        local_only: ``local-only`` param.
        connect: ``connect`` param.
        timeout: Per-call timeout recorded for the transport.

    Raises:
        ValueError: If both *allow_stale* and *require_consistent* are set,
            or a numeric field is negative.

    """

    namespace: str | None = None
    partition: str | None = None
    datacenter: str | None = None
    allow_stale: bool = False
    require_consistent: bool = False
    use_cache: bool = False
    max_age: timedelta | None = None
    stale_if_error: timedelta | None = None
    wait_index: int | None = None
    wait_hash: str | None = None
    wait_time: timedelta | None = None
    token: str | None = field(default=None, repr=False)
    near: str | None = None
    filter: str | None = None
    node_meta: Mapping[str, str] = field(default_factory=dict)
    relay_factor: int | None = None
    local_only: bool = False
    connect: bool = False
    timeout: timedelta | None = None

    def __post_init__(self) -> None:
        """Validate option values."""
        if self.allow_stale and self.require_consistent:
            raise ValueError("allow_stale and require_consistent are mutually exclusive")
        if self.wait_index is not None and self.wait_index < 0:
            raise ValueError(f"wait_index must be >= 0, got {self.wait_index}")
        if self.relay_factor is not None and self.relay_factor < 0:
            raise ValueError(f"relay_factor must be >= 0, got {self.relay_factor}")
