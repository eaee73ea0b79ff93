"""Shared pytest fixtures for the Qdrant SDK test suite.

Provides mocked low-level gRPC clients, a test configuration, and an
isolated environment so a developer's ``.env`` never leaks into unit tests.
"""

from typing import Any

import pytest

from qdrant_sdk.common.config import QdrantSdkConfig, get_config
from tests.utils.mocks import create_async_mock_grpc_client, create_mock_grpc_client

_SDK_ENV_VARS = (
    "QDRANT_GRPC_URL",
    "QDRANT_API_KEY",
    "QDRANT_CERTIFICATE_THUMBPRINT",
    "QDRANT_GRPC_TIMEOUT",
    "LOG_LEVEL",
)


# ========== Test Environment Setup ==========


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Any:
    """Clear SDK environment variables and the cached config for every test."""
    for name in _SDK_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()


# ========== Configuration Fixtures ==========


@pytest.fixture
def test_config() -> QdrantSdkConfig:
    """Provide a configuration pointing at a test server.

    Returns:
        QdrantSdkConfig: Configuration instance for testing.
    """
    return QdrantSdkConfig(
        _env_file=None,
        qdrant_grpc_url="http://test-vectors:6334",
        qdrant_grpc_timeout=5,
        log_level="DEBUG",
    )


# ========== Mock Service Fixtures ==========


@pytest.fixture
def mock_grpc_client(mocker: Any) -> Any:
    """Mock low-level sync gRPC client for unit tests.

    Args:
        mocker: pytest-mock fixture.

    Returns:
        Mock with ``qdrant``, ``collections``, ``points`` and ``snapshots`` stubs.
    """
    return create_mock_grpc_client(mocker)


@pytest.fixture
def mock_async_grpc_client(mocker: Any) -> Any:
    """Mock low-level async gRPC client for unit tests.

    Args:
        mocker: pytest-mock fixture.

    Returns:
        Mock whose stub methods are AsyncMocks.
    """
    return create_async_mock_grpc_client(mocker)

