"""Unit tests for the AsyncQdrantClient facade."""

from typing import Any

import grpc
import pytest
from qdrant_client import grpc as qdrant_grpc

from qdrant_sdk import AsyncQdrantClient, QdrantException
from qdrant_sdk.conversions import vector_params
from tests.utils.mocks import FakeRpcError


@pytest.fixture
def client(mock_async_grpc_client: Any) -> AsyncQdrantClient:
    return AsyncQdrantClient(grpc_client=mock_async_grpc_client, grpc_timeout=5)


@pytest.mark.unit
class TestAsyncClient:
    """Test the async facade against awaitable stubs."""

    @pytest.mark.asyncio
    async def test_list_collections(
        self, client: AsyncQdrantClient, mock_async_grpc_client: Any
    ) -> None:
        """Awaited responses are unwrapped and the deadline is applied."""
        mock_async_grpc_client.collections.List.return_value = (
            qdrant_grpc.ListCollectionsResponse(
                collections=[qdrant_grpc.CollectionDescription(name="docs")]
            )
        )

        assert await client.list_collections() == ["docs"]
        assert mock_async_grpc_client.collections.List.await_args.kwargs == {"timeout": 5.0}

    @pytest.mark.asyncio
    async def test_rpc_error_becomes_qdrant_exception(
        self, client: AsyncQdrantClient, mock_async_grpc_client: Any
    ) -> None:
        """A failed call raises QdrantException carrying the status code."""
        error = FakeRpcError(grpc.StatusCode.DEADLINE_EXCEEDED, "Deadline Exceeded")
        mock_async_grpc_client.points.Search.side_effect = error

        with pytest.raises(QdrantException) as exc_info:
            await client.search("docs", [0.1, 0.2])

        assert exc_info.value.status_code == "DEADLINE_EXCEEDED"
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_create_collection_false_result(
        self, client: AsyncQdrantClient, mock_async_grpc_client: Any
    ) -> None:
        """A false result is an error."""
        mock_async_grpc_client.collections.Create.return_value = (
            qdrant_grpc.CollectionOperationResponse(result=False)
        )

        with pytest.raises(QdrantException, match="could not be created"):
            await client.create_collection("docs", vector_params(4))

    @pytest.mark.asyncio
    async def test_recreate_collection(
        self, client: AsyncQdrantClient, mock_async_grpc_client: Any
    ) -> None:
        """Recreate awaits the delete and the create."""
        ok = qdrant_grpc.CollectionOperationResponse(result=True)
        mock_async_grpc_client.collections.Delete.return_value = ok
        mock_async_grpc_client.collections.Create.return_value = ok

        await client.recreate_collection("docs", vector_params(4))

        mock_async_grpc_client.collections.Delete.assert_awaited_once()
        mock_async_grpc_client.collections.Create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_upsert_and_count(
        self, client: AsyncQdrantClient, mock_async_grpc_client: Any
    ) -> None:
        """Writes return the UpdateResult; counts are unwrapped."""
        mock_async_grpc_client.points.Upsert.return_value = qdrant_grpc.PointsOperationResponse(
            result=qdrant_grpc.UpdateResult(status=qdrant_grpc.UpdateStatus.Completed)
        )
        mock_async_grpc_client.points.Count.return_value = qdrant_grpc.CountResponse(
            result=qdrant_grpc.CountResult(count=3)
        )

        result = await client.upsert("docs", [(1, [0.1, 0.2])], wait=False)

        assert result.status == qdrant_grpc.UpdateStatus.Completed
        assert mock_async_grpc_client.points.Upsert.await_args.args[0].wait is False
        assert await client.count("docs") == 3

    @pytest.mark.asyncio
    async def test_scroll_last_page(
        self, client: AsyncQdrantClient, mock_async_grpc_client: Any
    ) -> None:
        """Without a next page offset, None is returned."""
        mock_async_grpc_client.points.Scroll.return_value = qdrant_grpc.ScrollResponse(
            result=[qdrant_grpc.RetrievedPoint(id=qdrant_grpc.PointId(num=1))]
        )

        points, next_offset = await client.scroll("docs")

        assert len(points) == 1
        assert next_offset is None

    @pytest.mark.asyncio
    async def test_query_groups(
        self, client: AsyncQdrantClient, mock_async_grpc_client: Any
    ) -> None:
        """Groups are unwrapped from the groups result."""
        mock_async_grpc_client.points.QueryGroups.return_value = (
            qdrant_grpc.QueryGroupsResponse(
                result=qdrant_grpc.GroupsResult(
                    groups=[qdrant_grpc.PointGroup(), qdrant_grpc.PointGroup()]
                )
            )
        )

        groups = await client.query_groups("docs", "doc_id", [0.1])

        assert len(groups) == 2

    @pytest.mark.asyncio
    async def test_snapshots_and_health(
        self, client: AsyncQdrantClient, mock_async_grpc_client: Any
    ) -> None:
        """Snapshot and health replies are returned."""
        mock_async_grpc_client.snapshots.Create.return_value = (
            qdrant_grpc.CreateSnapshotResponse(
                snapshot_description=qdrant_grpc.SnapshotDescription(name="docs.snapshot")
            )
        )
        mock_async_grpc_client.qdrant.HealthCheck.return_value = qdrant_grpc.HealthCheckReply(
            version="1.14.0"
        )

        assert (await client.create_snapshot("docs")).name == "docs.snapshot"
        assert (await client.health()).version == "1.14.0"

    @pytest.mark.asyncio
    async def test_async_context_closes_owned_client(self, mock_async_grpc_client: Any) -> None:
        """Leaving the context closes an owned low-level client once."""
        async with AsyncQdrantClient(
            grpc_client=mock_async_grpc_client, owns_grpc_client=True
        ) as client:
            pass
        await client.close()

        mock_async_grpc_client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_borrowed_client_left_open(self, mock_async_grpc_client: Any) -> None:
        """A caller-provided low-level client is not closed."""
        async with AsyncQdrantClient(grpc_client=mock_async_grpc_client):
            pass

        mock_async_grpc_client.close.assert_not_awaited()

    def test_from_config(self, mocker: Any, test_config: Any) -> None:
        """Settings supply the address and deadline."""
        for_address = mocker.patch(
            "qdrant_sdk.client.async_client.AsyncQdrantGrpcClient.for_address"
        )

        client = AsyncQdrantClient.from_config(test_config)

        assert for_address.call_args.args[0] == "http://test-vectors:6334"
        assert client.grpc_timeout == 5.0
