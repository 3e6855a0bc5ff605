# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Tests for consul_api.transport: the invoker and HttpxTransport."""

from __future__ import annotations

import json
from datetime import timedelta

import httpx
import pytest

from consul_api import Config, HttpxTransport, Request, TransportError, execute
from consul_api._testing import ScriptedAgent, make_test_transport
from consul_api.transport import Transport, TransportResponse

from ._support import FailingTransport, RecordingTransport, make_response

# ---------------------------------------------------------------------------
# execute()
# ---------------------------------------------------------------------------


class TestExecute:
    """Tests for the transport invoker."""

    def test_success(self) -> None:
        """A successful send yields the response and no error."""
        transport = RecordingTransport(make_response(200, b"[]"))
        r = Request("GET", "v1/kv/a", Config(transport=transport))
        result = execute(r)
        assert result.err is None
        assert result.response is transport.response
        assert result.duration >= timedelta(0)

    def test_passes_request_to_transport(self) -> None:
        """Method, URI, headers, body, and timeout reach the transport."""
        transport = RecordingTransport()
        r = Request("put", "v1/kv/a", Config(token="tok", transport=transport), {"a": 1})
        r.timeout = timedelta(seconds=3)
        execute(r)
        (call,) = transport.calls
        assert call == {
            "method": "PUT",
            "uri": "http://127.0.0.1:8500/v1/kv/a",
            "headers": {"X-Consul-Token": "tok"},
            "body": b'{"a": 1}',
            "timeout": timedelta(seconds=3),
        }

    def test_no_transport(self) -> None:
        """A missing transport is a TransportError naming the URI."""
        r = Request("GET", "v1/kv/a", Config())
        result = execute(r)
        assert result.response is None
        assert isinstance(result.err, TransportError)
        assert result.err.uri == "http://127.0.0.1:8500/v1/kv/a"
        assert "no transport has been defined" in result.err.message
        assert result.duration >= timedelta(0)

    def test_transport_failure(self) -> None:
        """An exception from the transport becomes a TransportError."""
        transport = FailingTransport(httpx.ConnectError("Connection refused"))
        r = Request("GET", "v1/status/leader", Config(transport=transport))
        result = execute(r)
        assert result.response is None
        assert isinstance(result.err, TransportError)
        assert result.err.cause_message == "Connection refused"
        assert "http://127.0.0.1:8500/v1/status/leader" in str(result.err)
        assert "Connection refused" in str(result.err)
        assert isinstance(result.duration, timedelta)

    def test_body_released_on_success(self) -> None:
        """The body buffer is closed after a send."""
        r = Request("PUT", "v1/kv/a", Config(transport=RecordingTransport()), "v")
        execute(r)
        with pytest.raises(ValueError):
            _ = r.body

    def test_body_released_on_failure(self) -> None:
        """The body buffer is closed after a failed send."""
        r = Request("PUT", "v1/kv/a", Config(transport=FailingTransport(RuntimeError("boom"))), "v")
        execute(r)
        with pytest.raises(ValueError):
            _ = r.body


# ---------------------------------------------------------------------------
# HttpxTransport
# ---------------------------------------------------------------------------


class TestHttpxTransport:
    """Tests for the httpx-backed transport using httpx.MockTransport."""

    def test_satisfies_protocol(self) -> None:
        """HttpxTransport is a Transport."""
        with HttpxTransport() as transport:
            assert isinstance(transport, Transport)

    def test_round_trip(self) -> None:
        """Requests reach httpx and the response satisfies TransportResponse."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True}, headers={"X-Consul-Index": "9"})

        transport = HttpxTransport(httpx.Client(transport=httpx.MockTransport(handler)))
        resp = transport.send("PUT", "http://agent:8500/v1/kv/a?dc=dc1", {"X-Consul-Token": "t"}, b"body")
        assert isinstance(resp, TransportResponse)
        assert resp.status_code == 200
        assert resp.reason_phrase == "OK"
        assert json.loads(resp.content) == {"ok": True}
        assert resp.headers["x-consul-index"] == "9"
        (request,) = seen
        assert request.method == "PUT"
        assert str(request.url) == "http://agent:8500/v1/kv/a?dc=dc1"
        assert request.headers["X-Consul-Token"] == "t"
        assert request.content == b"body"

    def test_timeout_forwarded(self) -> None:
        """A per-call timeout reaches httpx."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        transport = HttpxTransport(httpx.Client(transport=httpx.MockTransport(handler)))
        transport.send("GET", "http://agent:8500/v1/agent/self", {}, None, timeout=timedelta(seconds=2.5))
        assert seen[0].extensions["timeout"]["read"] == 2.5

    def test_connect_error_through_execute(self) -> None:
        """httpx connection errors become TransportErrors."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        transport = HttpxTransport(httpx.Client(transport=httpx.MockTransport(handler)))
        result = execute(Request("GET", "v1/agent/self", Config(transport=transport)))
        assert isinstance(result.err, TransportError)
        assert "Connection refused" in result.err.message

    def test_close_leaves_caller_client_open(self) -> None:
        """A client supplied by the caller is not closed."""
        client = httpx.Client()
        HttpxTransport(client).close()
        assert not client.is_closed
        client.close()

    def test_close_owned_client(self) -> None:
        """A client created by the transport is closed with it."""
        transport = HttpxTransport()
        transport.close()
        assert transport.client.is_closed

    def test_from_config_insecure(self) -> None:
        """from_config builds a working transport with verification disabled."""
        with HttpxTransport.from_config(Config(insecure_skip_verify=True)) as transport:
            assert transport.client.auth is None


# ---------------------------------------------------------------------------
# FalconTransport
# ---------------------------------------------------------------------------


class TestFalconTransport:
    """Tests for the in-process fake agent transport."""

    def test_scripted_reply(self, agent: ScriptedAgent) -> None:
        """Scripted replies come back with status, reason, headers, and body."""
        agent.respond("GET", "/v1/status/leader", body="10.0.0.1:8300", headers={"X-Consul-Index": "3"})
        resp = make_test_transport(agent).send("GET", "http://agent.test:8500/v1/status/leader?dc=dc1", {}, None)
        assert resp.status_code == 200
        assert resp.reason_phrase == "OK"
        assert resp.content == b"10.0.0.1:8300"
        assert resp.headers.line("x-consul-index") == "3"
        (recorded,) = agent.requests
        assert recorded.path == "/v1/status/leader"
        assert recorded.query_string == "dc=dc1"

    def test_unscripted_is_404(self, agent: ScriptedAgent) -> None:
        """Unscripted paths answer 404 Not Found."""
        resp = make_test_transport(agent).send("GET", "http://agent.test:8500/v1/nope", {}, None)
        assert resp.status_code == 404
        assert resp.reason_phrase == "Not Found"
