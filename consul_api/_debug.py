# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Debug logging for the HTTP request pipeline.

Provides logger instances under the ``consul_api.http.*`` hierarchy and
formatting helpers for headers.  Enabling
``logging.getLogger("consul_api.http").setLevel(logging.DEBUG)`` shows every
request as it is built, sent, and classified.

All formatting helpers return ``str`` and never log directly.
They are meant to be called inside ``isEnabledFor`` guards.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

# ---------------------------------------------------------------------------
# Logger hierarchy: consul_api.http.*
# ---------------------------------------------------------------------------

http_request_logger = logging.getLogger("consul_api.http.request")
"""Request building and sending."""

http_response_logger = logging.getLogger("consul_api.http.response")
"""Response classification and decoding."""

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

_REDACTED_HEADERS: frozenset[str] = frozenset({"x-consul-token", "authorization"})
_MAX_VALUE_LEN = 80
"""Maximum length for individual header values in fmt_headers."""


def fmt_headers(headers: Mapping[str, str]) -> str:
    """Format headers compactly, redacting credentials.

    Returns:
        ``"{X-Consul-Token='<redacted>', Accept='application/json'}"``
        or ``"{}"`` when there are no headers.

    """
    parts: list[str] = []
    for name, value in headers.items():
        if name.lower() in _REDACTED_HEADERS:
            value = "<redacted>"
        elif len(value) > _MAX_VALUE_LEN:
            value = value[:_MAX_VALUE_LEN] + "..."
        parts.append(f"{name}={value!r}")
    return "{" + ", ".join(parts) + "}"


def fmt_body_preview(content: bytes) -> str:
    """Return a truncated, decoded preview of a body."""
    return content[:200].decode(errors="replace") if content else ""
