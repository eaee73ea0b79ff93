"""Tests for the low-level stub clients."""

from typing import Any

import pytest
from qdrant_client import grpc as qdrant_grpc

from qdrant_sdk.transport import Address, AsyncQdrantGrpcClient, ClientConfiguration, QdrantGrpcClient


@pytest.mark.unit
class TestQdrantGrpcClient:
    """Test the sync stub bundle."""

    @pytest.fixture
    def channel(self, mocker: Any) -> Any:
        return mocker.MagicMock()

    def test_exposes_service_stubs(self, channel: Any) -> None:
        """One stub per Qdrant service is built on the channel."""
        client = QdrantGrpcClient(channel)

        assert isinstance(client.qdrant, qdrant_grpc.QdrantStub)
        assert isinstance(client.collections, qdrant_grpc.CollectionsStub)
        assert isinstance(client.points, qdrant_grpc.PointsStub)
        assert isinstance(client.snapshots, qdrant_grpc.SnapshotsStub)

    def test_borrowed_channel_is_not_closed(self, channel: Any) -> None:
        """A caller-provided channel stays open."""
        client = QdrantGrpcClient(channel)

        client.close()

        assert client.closed
        channel.close.assert_not_called()

    def test_owned_channel_closed_once(self, channel: Any) -> None:
        """An owned channel is closed exactly once."""
        with QdrantGrpcClient(channel, owns_channel=True) as client:
            pass
        client.close()

        channel.close.assert_called_once()

    def test_for_host_builds_address(self, mocker: Any) -> None:
        """for_host passes an Address and owns the channel."""
        create = mocker.patch("qdrant_sdk.transport.grpc_client.create_channel")
        configuration = ClientConfiguration(api_key="secret")

        client = QdrantGrpcClient.for_host("qdrant", 7334, True, configuration)

        create.assert_called_once_with(Address("qdrant", 7334, True), configuration, None)
        client.close()
        create.return_value.close.assert_called_once()

    def test_for_address(self, mocker: Any) -> None:
        """for_address forwards the raw address string."""
        create = mocker.patch("qdrant_sdk.transport.grpc_client.create_channel")

        QdrantGrpcClient.for_address("http://localhost:6334")

        create.assert_called_once_with("http://localhost:6334", None, None)


@pytest.mark.unit
class TestAsyncQdrantGrpcClient:
    """Test the aio stub bundle."""

    async def test_owned_channel_closed_on_exit(self, mocker: Any) -> None:
        """Leaving the async context awaits channel.close once."""
        channel = mocker.MagicMock()
        channel.close = mocker.AsyncMock()

        async with AsyncQdrantGrpcClient(channel, owns_channel=True) as client:
            assert isinstance(client.points, qdrant_grpc.PointsStub)
        await client.close()

        channel.close.assert_awaited_once()

    def test_for_address(self, mocker: Any) -> None:
        """for_address uses the async channel factory."""
        create = mocker.patch("qdrant_sdk.transport.grpc_client.create_async_channel")

        AsyncQdrantGrpcClient.for_address("localhost:6334")

        create.assert_called_once_with("localhost:6334", None, None)
