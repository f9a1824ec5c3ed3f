from __future__ import annotations

import logging

import pytest
from hypothesis import settings
from pytest_httpserver.pytest_plugin import PluginHTTPServer

from netresource import NetresourceConfig, RequestsTransport

from .utils import free_port

# Register Hypothesis profile. Could be used as
# `pytest test --hypothesis-profile <profile-name>`
settings.register_profile("CI", max_examples=2000)

logging.getLogger("netresource").setLevel(logging.DEBUG)


@pytest.fixture
def httpserver():
    # A fresh server per test, so slow handlers can't leak into other tests
    server = PluginHTTPServer(host="127.0.0.1", port=0)
    server.start()
    yield server
    if server.is_running():
        server.stop()


@pytest.fixture
def config():
    return NetresourceConfig()


@pytest.fixture
def transport(config):
    transport = RequestsTransport(config)
    yield transport
    transport.shutdown()


@pytest.fixture
def unreachable_url():
    # Nothing listens on a port that was just released
    return f"http://127.0.0.1:{free_port()}/people"
