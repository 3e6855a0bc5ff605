# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Shared test fixtures for consul-api tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from consul_api import BaseClient, Config
from consul_api._testing import ScriptedAgent, make_test_transport

from ._support import TEST_ADDRESS


@pytest.fixture
def agent() -> ScriptedAgent:
    """Fresh scripted fake agent."""
    return ScriptedAgent()


@pytest.fixture
def make_config(agent: ScriptedAgent) -> Callable[..., Config]:
    """Factory for configs wired to the fake agent."""

    def factory(**kwargs: object) -> Config:
        kwargs.setdefault("address", TEST_ADDRESS)
        return Config(transport=make_test_transport(agent), **kwargs)  # type: ignore[arg-type]

    return factory


@pytest.fixture
def client(make_config: Callable[..., Config]) -> BaseClient:
    """Base client talking to the fake agent."""
    return BaseClient(make_config())
