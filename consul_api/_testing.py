# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""In-process fake agent for tests.

Provides ``ScriptedAgent``, a Falcon WSGI app answering scripted responses
and recording every request it receives, and ``FalconTransport`` which
sends requests to it via ``falcon.testing.TestClient`` without a real HTTP
server.

Requires ``pip install consul-api[test]``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any
from urllib.parse import urlsplit

import falcon
import falcon.testing

from consul_api.values import HeaderValues

__all__ = ["AgentTestResponse", "FalconTransport", "RecordedRequest", "ScriptedAgent", "make_test_transport"]


@dataclass(frozen=True)
class RecordedRequest:
    """A request as the fake agent received it."""

    method: str
    path: str
    query_string: str
    headers: HeaderValues
    body: bytes


@dataclass(frozen=True)
class _ScriptedReply:
    status: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)


class AgentTestResponse:
    """Minimal response object matching what the pipeline reads from ``httpx.Response``."""

    __slots__ = ("content", "headers", "reason_phrase", "status_code")

    def __init__(self, status_code: int, reason_phrase: str, content: bytes, headers: HeaderValues) -> None:
        """Store the response fields."""
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.content = content
        self.headers = headers


class ScriptedAgent:
    """Falcon app that replays scripted replies keyed by ``(method, path)``.

    Unscripted requests get ``404 Not Found``.
    """

    def __init__(self) -> None:
        """Create the app with a catch-all sink."""
        self._replies: dict[tuple[str, str], _ScriptedReply] = {}
        self.requests: list[RecordedRequest] = []
        self.app = falcon.App()
        self.app.add_sink(self._sink, prefix="/")

    def respond(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        body: Any = b"",
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Script the reply for *method* on *path*.

        Args:
            method: HTTP method, any case.
            path: Request path, with or without the leading ``/``.
            status: Status code to answer with.
            body: ``bytes``/``str`` sent verbatim; anything else as JSON.
            headers: Extra response headers.

        """
        if isinstance(body, str):
            raw = body.encode()
        elif isinstance(body, bytes):
            raw = body
        else:
            raw = json.dumps(body).encode()
        key = (method.upper(), "/" + path.lstrip("/"))
        self._replies[key] = _ScriptedReply(status, raw, dict(headers or {}))

    def _sink(self, req: falcon.Request, resp: falcon.Response, **_kwargs: Any) -> None:
        self.requests.append(
            RecordedRequest(
                method=req.method,
                path=req.path,
                query_string=req.query_string,
                headers=HeaderValues(req.headers),
                body=req.bounded_stream.read(),
            )
        )
        reply = self._replies.get((req.method, req.path))
        if reply is None:
            resp.status = falcon.code_to_http_status(404)
            resp.data = b"not found"
            return
        resp.status = falcon.code_to_http_status(reply.status)
        resp.data = reply.body
        for name, value in reply.headers.items():
            resp.set_header(name, value)


class FalconTransport:
    """Transport that calls a Falcon WSGI app directly via ``falcon.testing.TestClient``."""

    __slots__ = ("_client",)

    def __init__(self, app: falcon.App[falcon.Request, falcon.Response]) -> None:
        """Wrap *app* in a test client."""
        self._client = falcon.testing.TestClient(app)

    def send(
        self,
        method: str,
        uri: str,
        headers: Mapping[str, str],
        body: bytes | None,
        *,
        timeout: timedelta | None = None,
    ) -> AgentTestResponse:
        """Simulate the request against the app; *timeout* is ignored."""
        parts = urlsplit(uri)
        result = self._client.simulate_request(
            method,
            parts.path,
            query_string=parts.query or None,
            headers=dict(headers),
            body=body,
        )
        _, _, reason = result.status.partition(" ")
        return AgentTestResponse(
            result.status_code,
            reason,
            result.content,
            HeaderValues(result.headers.items()),
        )


def make_test_transport(agent: ScriptedAgent) -> FalconTransport:
    """Create a transport talking to *agent* in-process."""
    return FalconTransport(agent.app)
