# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Status endpoints: the current Raft leader and peer set."""

from __future__ import annotations

from consul_api.client import BaseClient
from consul_api.options import QueryOptions
from consul_api.results import QueryResponse

__all__ = ["StatusClient"]


class StatusClient(BaseClient):
    """Client for ``/v1/status``."""

    __slots__ = ()

    def leader(self, opts: QueryOptions | None = None) -> QueryResponse:
        """Return the ``host:port`` of the current leader (``""`` when there is none)."""
        return self._query("v1/status/leader", opts)

    def peers(self, opts: QueryOptions | None = None) -> QueryResponse:
        """Return the ``host:port`` of every Raft peer."""
        return self._query("v1/status/peers", opts)
