# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Tests for consul_api.config: Config, cloning, and environment loading."""

from __future__ import annotations

import logging
from datetime import timedelta

import httpx
import pytest

from consul_api import Config, HttpBasicAuth, HttpxTransport, default_config

from ._support import RecordingTransport

# ---------------------------------------------------------------------------
# Defaults, clone, validate
# ---------------------------------------------------------------------------


class TestConfig:
    """Tests for the Config dataclass."""

    def test_defaults(self) -> None:
        """Default config points at the local agent with nothing else set."""
        cfg = Config()
        assert cfg.address == "127.0.0.1:8500"
        assert cfg.scheme == "http"
        assert cfg.datacenter == ""
        assert cfg.namespace == ""
        assert cfg.token == ""
        assert cfg.wait_time == timedelta(0)
        assert cfg.json_encode_options == {}
        assert cfg.http_auth is None
        assert cfg.transport is None

    def test_clone_is_independent(self) -> None:
        """Mutating the original after cloning does not reach the clone."""
        cfg = Config(datacenter="dc1", json_encode_options={"separators": [",", ":"]})
        clone = cfg.clone()
        cfg.datacenter = "dc2"
        cfg.json_encode_options["separators"].append("!")
        cfg.json_encode_options["sort_keys"] = True
        assert clone.datacenter == "dc1"
        assert clone.json_encode_options == {"separators": [",", ":"]}

    def test_clone_shares_transport(self) -> None:
        """The transport handle is shared, not copied."""
        transport = RecordingTransport()
        clone = Config(transport=transport).clone()
        assert clone.transport is transport

    def test_token_not_in_repr(self) -> None:
        """The token is kept out of repr()."""
        assert "s3cret" not in repr(Config(token="s3cret"))

    def test_validate_ok(self) -> None:
        """A default config validates."""
        Config().validate()

    def test_validate_empty_address(self) -> None:
        """Empty address is rejected."""
        with pytest.raises(ValueError, match="address"):
            Config(address="").validate()

    def test_validate_empty_scheme(self) -> None:
        """Empty scheme is rejected."""
        with pytest.raises(ValueError, match="scheme"):
            Config(scheme="").validate()


# ---------------------------------------------------------------------------
# from_env / default_config
# ---------------------------------------------------------------------------


class TestFromEnv:
    """Tests for Config.from_env."""

    def test_empty_environment(self) -> None:
        """No variables yields the defaults."""
        cfg = Config.from_env({})
        assert cfg == Config()

    def test_plain_address(self) -> None:
        """A bare host:port is used as-is."""
        cfg = Config.from_env({"CONSUL_HTTP_ADDR": "10.0.0.5:8500"})
        assert cfg.address == "10.0.0.5:8500"
        assert cfg.scheme == "http"

    def test_https_prefix(self) -> None:
        """An https:// prefix switches the scheme and is stripped."""
        cfg = Config.from_env({"CONSUL_HTTP_ADDR": "https://consul.example.com:8501"})
        assert cfg.address == "consul.example.com:8501"
        assert cfg.scheme == "https"

    def test_http_prefix(self) -> None:
        """An http:// prefix is stripped."""
        cfg = Config.from_env({"CONSUL_HTTP_ADDR": "http://consul:8500"})
        assert cfg.address == "consul:8500"
        assert cfg.scheme == "http"

    def test_token_and_namespace(self) -> None:
        """Token and namespace are read."""
        cfg = Config.from_env({"CONSUL_HTTP_TOKEN": "tok", "CONSUL_NAMESPACE": "team"})
        assert cfg.token == "tok"
        assert cfg.namespace == "team"

    def test_basic_auth_with_password(self) -> None:
        """user:password splits on the first colon."""
        cfg = Config.from_env({"CONSUL_HTTP_AUTH": "alice:pa:ss"})
        assert cfg.http_auth == HttpBasicAuth("alice", "pa:ss")

    def test_basic_auth_without_password(self) -> None:
        """A bare user gets an empty password."""
        cfg = Config.from_env({"CONSUL_HTTP_AUTH": "alice"})
        assert cfg.http_auth == HttpBasicAuth("alice", "")

    def test_ssl_switches_scheme(self) -> None:
        """CONSUL_HTTP_SSL=true selects https."""
        assert Config.from_env({"CONSUL_HTTP_SSL": "true"}).scheme == "https"
        assert Config.from_env({"CONSUL_HTTP_SSL": "false"}).scheme == "http"

    def test_ssl_verify(self) -> None:
        """CONSUL_HTTP_SSL_VERIFY=false disables verification."""
        assert Config.from_env({"CONSUL_HTTP_SSL_VERIFY": "false"}).insecure_skip_verify is True
        assert Config.from_env({"CONSUL_HTTP_SSL_VERIFY": "1"}).insecure_skip_verify is False

    def test_tls_files(self) -> None:
        """CA, certificate, and key paths are read."""
        cfg = Config.from_env(
            {"CONSUL_CACERT": "/ca.pem", "CONSUL_CLIENT_CERT": "/cert.pem", "CONSUL_CLIENT_KEY": "/key.pem"}
        )
        assert (cfg.ca_file, cfg.cert_file, cfg.key_file) == ("/ca.pem", "/cert.pem", "/key.pem")

    def test_bad_bool_warns_and_is_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        """An unparseable boolean is logged and leaves the default."""
        with caplog.at_level(logging.WARNING, logger="consul_api.config"):
            cfg = Config.from_env({"CONSUL_HTTP_SSL": "maybe"})
        assert cfg.scheme == "http"
        assert any("CONSUL_HTTP_SSL" in r.getMessage() for r in caplog.records)

    def test_default_config_attaches_httpx_transport(self) -> None:
        """default_config() wires an HttpxTransport honouring basic auth."""
        cfg = default_config({"CONSUL_HTTP_AUTH": "alice:secret"})
        assert isinstance(cfg.transport, HttpxTransport)
        assert isinstance(cfg.transport.client.auth, httpx.BasicAuth)
        cfg.transport.close()
