# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""String parsing helpers shared by config loading and response decoding."""

from __future__ import annotations

import re
from datetime import timedelta

_TRUE_STRINGS: frozenset[str] = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS: frozenset[str] = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_bool(value: str) -> bool | None:
    """Parse a boolean string the way the agent writes them.

    Accepts ``1/t/T/TRUE/true/True`` and ``0/f/F/FALSE/false/False``.

    Returns:
        The parsed value, or ``None`` when *value* is not a boolean string.

    """
    if value in _TRUE_STRINGS:
        return True
    if value in _FALSE_STRINGS:
        return False
    return None


def parse_leading_int(value: str) -> int | None:
    """Parse the leading decimal integer of *value*, ignoring any suffix.

    ``"42"`` and ``"42s"`` both yield ``42``; ``"abc"`` yields ``None``.
    """
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def format_milliseconds(duration: timedelta) -> str:
    """Render a duration as an integer millisecond count with an ``ms`` suffix."""
    return f"{duration // timedelta(milliseconds=1)}ms"
