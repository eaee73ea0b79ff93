"""Low-level gRPC clients exposing the generated Qdrant service stubs."""

from types import TracebackType

import grpc
from qdrant_client import grpc as qdrant_grpc

from qdrant_sdk.common.logging import get_logger
from qdrant_sdk.transport.channel import (
    DEFAULT_PORT,
    Address,
    ChannelOptions,
    ClientConfiguration,
    create_async_channel,
    create_channel,
)

logger = get_logger(__name__)


class QdrantGrpcClient:
    """Bundle of the four Qdrant service stubs over one sync channel.

    A client built from an existing channel leaves closing it to the caller;
    ``for_address`` and ``for_host`` create a channel the client owns.

    Attributes:
        qdrant: ``QdrantStub`` (health check).
        collections: ``CollectionsStub``.
        points: ``PointsStub``.
        snapshots: ``SnapshotsStub``.

    Example:
        >>> with QdrantGrpcClient.for_address("http://localhost:6334") as client:
        ...     reply = client.qdrant.HealthCheck(qdrant_grpc.HealthCheckRequest())
    """

    def __init__(self, channel: grpc.Channel, *, owns_channel: bool = False) -> None:
        self.channel = channel
        self._owns_channel = owns_channel
        self._closed = False

        self.qdrant = qdrant_grpc.QdrantStub(channel)
        self.collections = qdrant_grpc.CollectionsStub(channel)
        self.points = qdrant_grpc.PointsStub(channel)
        self.snapshots = qdrant_grpc.SnapshotsStub(channel)

    @classmethod
    def for_address(
        cls,
        address: str,
        configuration: ClientConfiguration | None = None,
        options: ChannelOptions | None = None,
    ) -> "QdrantGrpcClient":
        """Create a client owning a new channel to ``address``."""
        return cls(create_channel(address, configuration, options), owns_channel=True)

    @classmethod
    def for_host(
        cls,
        host: str = "localhost",
        port: int = DEFAULT_PORT,
        https: bool = False,
        configuration: ClientConfiguration | None = None,
        options: ChannelOptions | None = None,
    ) -> "QdrantGrpcClient":
        """Create a client owning a new channel to ``host:port``."""
        address = Address(host=host, port=port, secure=https)
        return cls(create_channel(address, configuration, options), owns_channel=True)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Close the channel if this client owns it. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        if self._owns_channel:
            self.channel.close()
            logger.debug("Closed gRPC channel")

    def __enter__(self) -> "QdrantGrpcClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


class AsyncQdrantGrpcClient:
    """``grpc.aio`` counterpart of ``QdrantGrpcClient``; stub calls return awaitables."""

    def __init__(self, channel: grpc.aio.Channel, *, owns_channel: bool = False) -> None:
        self.channel = channel
        self._owns_channel = owns_channel
        self._closed = False

        self.qdrant = qdrant_grpc.QdrantStub(channel)
        self.collections = qdrant_grpc.CollectionsStub(channel)
        self.points = qdrant_grpc.PointsStub(channel)
        self.snapshots = qdrant_grpc.SnapshotsStub(channel)

    @classmethod
    def for_address(
        cls,
        address: str,
        configuration: ClientConfiguration | None = None,
        options: ChannelOptions | None = None,
    ) -> "AsyncQdrantGrpcClient":
        return cls(create_async_channel(address, configuration, options), owns_channel=True)

    @classmethod
    def for_host(
        cls,
        host: str = "localhost",
        port: int = DEFAULT_PORT,
        https: bool = False,
        configuration: ClientConfiguration | None = None,
        options: ChannelOptions | None = None,
    ) -> "AsyncQdrantGrpcClient":
        address = Address(host=host, port=port, secure=https)
        return cls(create_async_channel(address, configuration, options), owns_channel=True)

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        """Close the channel if this client owns it. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        if self._owns_channel:
            await self.channel.close()
            logger.debug("Closed async gRPC channel")

    async def __aenter__(self) -> "AsyncQdrantGrpcClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()


__all__ = ["AsyncQdrantGrpcClient", "QdrantGrpcClient"]
