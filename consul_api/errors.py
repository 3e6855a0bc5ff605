# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Error values produced by the request pipeline.

Pipeline stages never raise these across stage boundaries; they are carried
inside result objects (``err`` attributes) so callers observe at most one
terminal error per call.  Every kind is still an ``Exception`` subclass, so a
caller may ``raise resp.err`` when exception flow suits them better.
"""

from __future__ import annotations

__all__ = ["ConsulError", "DecodeError", "ShapeError", "StatusError", "TransportError"]


class ConsulError(Exception):
    """Base class for pipeline errors.

    Attributes:
        message: Human-readable description of the failure.

    """

    def __init__(self, message: str) -> None:
        """Initialize with a message."""
        self.message = message
        super().__init__(message)


class TransportError(ConsulError):
    """No transport was configured, or the transport call failed.

    Attributes:
        uri: The URI of the request that failed.
        cause_message: Message of the underlying failure.

    """

    def __init__(self, uri: str, cause_message: str) -> None:
        """Initialize with the failing URI and the underlying message."""
        self.uri = uri
        self.cause_message = cause_message
        super().__init__(f'Error seen while executing "{uri}".  Message: "{cause_message}"')


class StatusError(ConsulError):
    """A response arrived with a status code other than the expected one.

    Attributes:
        expected: The status code the caller required.
        actual: The status code the agent returned.
        reason: The response's reason phrase.

    """

    def __init__(self, expected: int, actual: int, reason: str) -> None:
        """Initialize with the expected and actual codes and the reason phrase."""
        self.expected = expected
        self.actual = actual
        self.reason = reason
        super().__init__(f"Non-{expected} response seen.  Response code: {actual}.  Message: {reason}")


class ShapeError(ConsulError):
    """The transport handed back something that is not a response object."""

    def __init__(self, type_name: str) -> None:
        """Initialize with the name of the unexpected type."""
        self.type_name = type_name
        super().__init__(f"Expected response to satisfy TransportResponse, {type_name} seen.")


class DecodeError(ConsulError):
    """The response body could not be parsed as JSON."""

    def __init__(self, detail: str) -> None:
        """Initialize with the parser's diagnostic."""
        self.detail = detail
        super().__init__(f"Unable to parse response as JSON.  Message: {detail}")
