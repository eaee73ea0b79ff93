"""Helper functions for constructing common test doubles."""

from typing import Any

import grpc

_SERVICES = ("qdrant", "collections", "points", "snapshots")


class FakeRpcError(grpc.RpcError):
    """RpcError carrying a status code and details, as raised by a failed call."""

    def __init__(self, code: grpc.StatusCode, details: str) -> None:
        super().__init__(details)
        self._code = code
        self._details = details

    def code(self) -> grpc.StatusCode:
        return self._code

    def details(self) -> str:
        return self._details


def create_mock_grpc_client(mocker: Any) -> Any:
    """Create a mocked QdrantGrpcClient; each stub method is a MagicMock."""

    client = mocker.MagicMock()
    for service in _SERVICES:
        setattr(client, service, mocker.MagicMock())
    return client


def create_async_mock_grpc_client(mocker: Any) -> Any:
    """Create a mocked AsyncQdrantGrpcClient; stub methods and close are awaitable."""

    client = mocker.MagicMock()
    for service in _SERVICES:
        setattr(client, service, mocker.AsyncMock())
    client.close = mocker.AsyncMock()
    return client
