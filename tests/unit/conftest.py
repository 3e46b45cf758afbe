"""
Shared fixtures for the unit tests.

Async tests are marked with @pytest.mark.asyncio and build their own
worlds with init(), so every world lives on the test's event loop.
"""

import pytest

from mercury_p2p.env import Env
from mercury_p2p.logging import LoggingConfig
from mercury_p2p.tracing import TraceRecorder


@pytest.fixture(autouse=True)
def configure_log_level():
    config = LoggingConfig()
    config.update(log_level="error")
    yield
    config.update(log_level="error")


@pytest.fixture
def env() -> Env:
    return Env(MERCURY_P2P_LOG_LEVEL="error")


@pytest.fixture
def env_factory():
    def create_env(**overrides) -> Env:
        values = {"MERCURY_P2P_LOG_LEVEL": "error"}
        values.update(overrides)
        return Env(**values)

    return create_env


@pytest.fixture
def recorder() -> TraceRecorder:
    return TraceRecorder()
