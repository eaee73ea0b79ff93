"""Tests for the health CLI command."""

from typing import Any

import pytest
from qdrant_client import grpc as qdrant_grpc
from typer.testing import CliRunner

from apps.cli.main import app
from qdrant_sdk import QdrantException


@pytest.fixture
def async_client(mocker: Any) -> Any:
    """Patch the async client factory used by the health command."""
    get_async_client = mocker.patch("apps.cli.qdrant_sdk_cli.commands.health.get_async_client")
    client = mocker.MagicMock()
    client.health = mocker.AsyncMock()
    get_async_client.return_value.__aenter__.return_value = client
    return client


@pytest.mark.unit
class TestHealthCommand:
    """Test the health command."""

    def test_prints_server_version(self, cli_runner: CliRunner, async_client: Any) -> None:
        """Title and version of a healthy server are shown."""
        async_client.health.return_value = qdrant_grpc.HealthCheckReply(
            title="qdrant - vector search engine", version="1.14.0", commit="abc123"
        )

        result = cli_runner.invoke(app, ["health"])

        assert result.exit_code == 0
        assert "Qdrant Health" in result.stdout
        assert "1.14.0" in result.stdout
        assert "abc123" in result.stdout

    def test_unreachable_server_exits_1(self, cli_runner: CliRunner, async_client: Any) -> None:
        """A failed health check exits 1 with the address."""
        async_client.health.side_effect = QdrantException(
            "health failed: connection refused", status_code="UNAVAILABLE"
        )

        result = cli_runner.invoke(app, ["--url", "http://down:6334", "health"])

        assert result.exit_code == 1
        assert "Qdrant unavailable at http://down:6334" in result.stdout
