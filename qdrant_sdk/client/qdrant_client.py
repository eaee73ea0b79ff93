"""Synchronous Qdrant client facade.

Provides:
- One method per Qdrant RPC with the usual defaults filled in
- Conversion of native Python arguments into request messages
- Client-wide gRPC deadline applied to every call
- ``QdrantException`` for every failed call, with the gRPC status attached

All operations use JSON structured logging and correlation ID tracking.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from types import TracebackType
from typing import Any, TypeVar

import grpc
from qdrant_client import grpc as qdrant_grpc

from qdrant_sdk.client import requests
from qdrant_sdk.client.base import BaseQdrantClient, GrpcTimeoutLike
from qdrant_sdk.common.config import QdrantSdkConfig, get_config
from qdrant_sdk.common.logging import get_logger
from qdrant_sdk.conversions import PointIdLike, SelectorLike, ShardKeyLike
from qdrant_sdk.transport import DEFAULT_PORT, ClientConfiguration, QdrantGrpcClient

logger = get_logger(__name__)

R = TypeVar("R")


class QdrantClient(BaseQdrantClient):
    """Client for the Qdrant gRPC API.

    Keyword options of each method are those of the matching builder in
    ``qdrant_sdk.client.requests`` (named in the method's docstring).

    Example:
        >>> from qdrant_sdk.conversions import point_struct, vector_params
        >>> with QdrantClient("localhost") as client:
        ...     client.create_collection("docs", vector_params(4))
        ...     client.upsert("docs", [point_struct(1, [0.1, 0.2, 0.3, 0.4], {"tag": "a"})])
        ...     hits = client.search("docs", [0.1, 0.2, 0.3, 0.4], limit=3)
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = DEFAULT_PORT,
        https: bool = False,
        api_key: str | None = None,
        certificate_thumbprint: str | None = None,
        grpc_timeout: GrpcTimeoutLike | None = None,
        *,
        grpc_client: QdrantGrpcClient | None = None,
        owns_grpc_client: bool = False,
        channel_options: list[tuple[str, Any]] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            host: Qdrant host name.
            port: gRPC port (default 6334).
            https: Use TLS.
            api_key: Sent as the ``api-key`` header on every call.
            certificate_thumbprint: SHA-256 thumbprint the server certificate must match.
            grpc_timeout: Deadline for every call, in seconds or as a ``timedelta``.
            grpc_client: Existing low-level client to use instead of connecting;
                the caller keeps ownership unless ``owns_grpc_client`` is set.
            channel_options: Extra gRPC channel options.

        Raises:
            CertificateValidationError: If certificate pinning fails.
        """
        super().__init__(grpc_timeout)

        if grpc_client is None:
            configuration = ClientConfiguration(
                api_key=api_key, certificate_thumbprint=certificate_thumbprint
            )
            grpc_client = QdrantGrpcClient.for_host(
                host, port, https, configuration, channel_options
            )
            owns_grpc_client = True

        self._grpc_client = grpc_client
        self._owns_grpc_client = owns_grpc_client
        self._closed = False

        logger.info(
            "Qdrant client initialized",
            extra={"grpc_timeout": self.grpc_timeout, "owns_grpc_client": owns_grpc_client},
        )

    @classmethod
    def from_address(
        cls,
        address: str,
        api_key: str | None = None,
        certificate_thumbprint: str | None = None,
        grpc_timeout: GrpcTimeoutLike | None = None,
        channel_options: list[tuple[str, Any]] | None = None,
    ) -> "QdrantClient":
        """Connect to an address such as ``https://qdrant.example.com:6334``."""
        configuration = ClientConfiguration(
            api_key=api_key, certificate_thumbprint=certificate_thumbprint
        )
        grpc_client = QdrantGrpcClient.for_address(address, configuration, channel_options)
        return cls(grpc_timeout=grpc_timeout, grpc_client=grpc_client, owns_grpc_client=True)

    @classmethod
    def from_config(cls, config: QdrantSdkConfig | None = None) -> "QdrantClient":
        """Connect using ``QdrantSdkConfig`` (environment and ``.env``)."""
        config = config or get_config()
        api_key = config.qdrant_api_key.get_secret_value() if config.qdrant_api_key else None
        return cls.from_address(
            config.qdrant_grpc_url,
            api_key=api_key,
            certificate_thumbprint=config.qdrant_certificate_thumbprint,
            grpc_timeout=config.grpc_timeout,
        )

    @property
    def grpc_client(self) -> QdrantGrpcClient:
        return self._grpc_client

    def _call(
        self,
        operation: str,
        rpc: Callable[..., R],
        request: Any,
        collection_name: str | None = None,
    ) -> R:
        self._log_call(operation, collection_name)
        try:
            return rpc(request, timeout=self._grpc_timeout)
        except grpc.RpcError as e:
            raise self._operation_failed(operation, collection_name, e) from e

    # ========== Collections ==========

    def create_collection(self, collection_name: str, vectors: Any = None, **options: Any) -> None:
        """Create a collection. Options: ``requests.create_collection``.

        Raises:
            QdrantException: If the call fails or the server reports no change.
        """
        request = requests.create_collection(collection_name, vectors, **options)
        response = self._call(
            "create_collection", self._grpc_client.collections.Create, request, collection_name
        )
        self._ensure(response.result, f"Collection '{collection_name}' could not be created")

    def recreate_collection(self, collection_name: str, vectors: Any = None, **options: Any) -> None:
        """Delete the collection, then create it again. Options as for ``create_collection``."""
        self.delete_collection(collection_name, timeout=options.get("timeout"))
        self.create_collection(collection_name, vectors, **options)

    def get_collection_info(self, collection_name: str) -> qdrant_grpc.CollectionInfo:
        request = requests.get_collection_info(collection_name)
        response = self._call(
            "get_collection_info", self._grpc_client.collections.Get, request, collection_name
        )
        return response.result

    def list_collections(self) -> list[str]:
        """Names of all collections."""
        response = self._call(
            "list_collections", self._grpc_client.collections.List, requests.list_collections()
        )
        return [description.name for description in response.collections]

    def collection_exists(self, collection_name: str) -> bool:
        request = requests.collection_exists(collection_name)
        response = self._call(
            "collection_exists",
            self._grpc_client.collections.CollectionExists,
            request,
            collection_name,
        )
        return response.result.exists

    def delete_collection(self, collection_name: str, timeout: Any = None) -> None:
        """Delete a collection.

        Raises:
            QdrantException: If the call fails or the collection was not deleted.
        """
        request = requests.delete_collection(collection_name, timeout)
        response = self._call(
            "delete_collection", self._grpc_client.collections.Delete, request, collection_name
        )
        self._ensure(response.result, f"Collection '{collection_name}' could not be deleted")

    def update_collection(self, collection_name: str, vectors: Any = None, **options: Any) -> None:
        """Update collection parameters. Options: ``requests.update_collection``."""
        request = requests.update_collection(collection_name, vectors, **options)
        response = self._call(
            "update_collection", self._grpc_client.collections.Update, request, collection_name
        )
        self._ensure(response.result, f"Collection '{collection_name}' could not be updated")

    # ========== Aliases ==========

    def create_alias(self, alias_name: str, collection_name: str, timeout: Any = None) -> None:
        self.update_aliases([requests.create_alias_operation(alias_name, collection_name)], timeout)

    def rename_alias(self, old_alias_name: str, new_alias_name: str, timeout: Any = None) -> None:
        self.update_aliases([requests.rename_alias_operation(old_alias_name, new_alias_name)], timeout)

    def delete_alias(self, alias_name: str, timeout: Any = None) -> None:
        self.update_aliases([requests.delete_alias_operation(alias_name)], timeout)

    def update_aliases(
        self, operations: Iterable[qdrant_grpc.AliasOperations], timeout: Any = None
    ) -> None:
        """Apply alias operations atomically.

        Raises:
            QdrantException: If the call fails or the server reports no change.
        """
        request = requests.change_aliases(operations, timeout)
        response = self._call(
            "update_aliases", self._grpc_client.collections.UpdateAliases, request
        )
        self._ensure(response.result, "Alias update operation(s) could not be performed.")

    def list_collection_aliases(self, collection_name: str) -> list[str]:
        """Alias names pointing at ``collection_name``."""
        request = requests.list_collection_aliases(collection_name)
        response = self._call(
            "list_collection_aliases",
            self._grpc_client.collections.ListCollectionAliases,
            request,
            collection_name,
        )
        return [alias.alias_name for alias in response.aliases]

    def list_aliases(self) -> list[qdrant_grpc.AliasDescription]:
        response = self._call(
            "list_aliases", self._grpc_client.collections.ListAliases, requests.list_aliases()
        )
        return list(response.aliases)

    # ========== Cluster ==========

    def create_shard_key(self, collection_name: str, key: ShardKeyLike, **options: Any) -> bool:
        """Create a shard key. Options: ``requests.create_shard_key``."""
        request = requests.create_shard_key(collection_name, key, **options)
        response = self._call(
            "create_shard_key",
            self._grpc_client.collections.CreateShardKey,
            request,
            collection_name,
        )
        return response.result

    def delete_shard_key(self, collection_name: str, key: ShardKeyLike, timeout: Any = None) -> bool:
        request = requests.delete_shard_key(collection_name, key, timeout)
        response = self._call(
            "delete_shard_key",
            self._grpc_client.collections.DeleteShardKey,
            request,
            collection_name,
        )
        return response.result

    # ========== Points: writes ==========

    def upsert(
        self, collection_name: str, points: Iterable[Any], **options: Any
    ) -> qdrant_grpc.UpdateResult:
        """Insert or update points. Options: ``requests.upsert_points``."""
        request = requests.upsert_points(collection_name, points, **options)
        response = self._call("upsert", self._grpc_client.points.Upsert, request, collection_name)
        return response.result

    def delete(
        self, collection_name: str, selector: SelectorLike, **options: Any
    ) -> qdrant_grpc.UpdateResult:
        """Delete points by ids, a filter or a condition. Options: ``requests.delete_points``."""
        request = requests.delete_points(collection_name, selector, **options)
        response = self._call("delete", self._grpc_client.points.Delete, request, collection_name)
        return response.result

    def retrieve(
        self, collection_name: str, ids: Iterable[PointIdLike], **options: Any
    ) -> list[qdrant_grpc.RetrievedPoint]:
        """Fetch points by id. Options: ``requests.get_points``."""
        request = requests.get_points(collection_name, ids, **options)
        response = self._call("retrieve", self._grpc_client.points.Get, request, collection_name)
        return list(response.result)

    def update_vectors(
        self, collection_name: str, points: Iterable[Any], **options: Any
    ) -> qdrant_grpc.UpdateResult:
        """Options: ``requests.update_point_vectors``."""
        request = requests.update_point_vectors(collection_name, points, **options)
        response = self._call(
            "update_vectors", self._grpc_client.points.UpdateVectors, request, collection_name
        )
        return response.result

    def delete_vectors(
        self,
        collection_name: str,
        vector_names: Sequence[str],
        selector: SelectorLike,
        **options: Any,
    ) -> qdrant_grpc.UpdateResult:
        """Options: ``requests.delete_point_vectors``."""
        request = requests.delete_point_vectors(collection_name, vector_names, selector, **options)
        response = self._call(
            "delete_vectors", self._grpc_client.points.DeleteVectors, request, collection_name
        )
        return response.result

    def set_payload(
        self,
        collection_name: str,
        payload: Mapping[str, Any],
        selector: SelectorLike | None = None,
        **options: Any,
    ) -> qdrant_grpc.UpdateResult:
        """Merge ``payload`` into the selected points. Options: ``requests.set_payload_points``."""
        request = requests.set_payload_points(collection_name, payload, selector, **options)
        response = self._call(
            "set_payload", self._grpc_client.points.SetPayload, request, collection_name
        )
        return response.result

    def overwrite_payload(
        self,
        collection_name: str,
        payload: Mapping[str, Any],
        selector: SelectorLike | None = None,
        **options: Any,
    ) -> qdrant_grpc.UpdateResult:
        """Replace the whole payload of the selected points."""
        request = requests.set_payload_points(collection_name, payload, selector, **options)
        response = self._call(
            "overwrite_payload", self._grpc_client.points.OverwritePayload, request, collection_name
        )
        return response.result

    def delete_payload(
        self,
        collection_name: str,
        keys: Sequence[str],
        selector: SelectorLike | None = None,
        **options: Any,
    ) -> qdrant_grpc.UpdateResult:
        request = requests.delete_payload_points(collection_name, keys, selector, **options)
        response = self._call(
            "delete_payload", self._grpc_client.points.DeletePayload, request, collection_name
        )
        return response.result

    def clear_payload(
        self, collection_name: str, selector: SelectorLike | None = None, **options: Any
    ) -> qdrant_grpc.UpdateResult:
        request = requests.clear_payload_points(collection_name, selector, **options)
        response = self._call(
            "clear_payload", self._grpc_client.points.ClearPayload, request, collection_name
        )
        return response.result

    def create_payload_index(
        self,
        collection_name: str,
        field_name: str,
        schema_type: int | str = "keyword",
        **options: Any,
    ) -> qdrant_grpc.UpdateResult:
        """Index a payload field. Options: ``requests.create_field_index``."""
        request = requests.create_field_index(collection_name, field_name, schema_type, **options)
        response = self._call(
            "create_payload_index",
            self._grpc_client.points.CreateFieldIndex,
            request,
            collection_name,
        )
        return response.result

    def delete_payload_index(
        self, collection_name: str, field_name: str, **options: Any
    ) -> qdrant_grpc.UpdateResult:
        request = requests.delete_field_index(collection_name, field_name, **options)
        response = self._call(
            "delete_payload_index",
            self._grpc_client.points.DeleteFieldIndex,
            request,
            collection_name,
        )
        return response.result

    def update_batch(
        self,
        collection_name: str,
        operations: Iterable[qdrant_grpc.PointsUpdateOperation],
        **options: Any,
    ) -> list[qdrant_grpc.UpdateResult]:
        """Apply several point operations in one call."""
        request = requests.update_batch_points(collection_name, operations, **options)
        response = self._call(
            "update_batch", self._grpc_client.points.UpdateBatch, request, collection_name
        )
        return list(response.result)

    # ========== Points: search ==========

    def search(
        self, collection_name: str, query_vector: Sequence[float], **options: Any
    ) -> list[qdrant_grpc.ScoredPoint]:
        """Nearest-neighbour search. Options: ``requests.search_points``."""
        request = requests.search_points(collection_name, query_vector, **options)
        response = self._call("search", self._grpc_client.points.Search, request, collection_name)
        return list(response.result)

    def search_batch(
        self,
        collection_name: str,
        searches: Iterable[qdrant_grpc.SearchPoints],
        **options: Any,
    ) -> list[qdrant_grpc.BatchResult]:
        request = requests.search_batch_points(collection_name, searches, **options)
        response = self._call(
            "search_batch", self._grpc_client.points.SearchBatch, request, collection_name
        )
        return list(response.result)

    def search_groups(
        self,
        collection_name: str,
        query_vector: Sequence[float],
        group_by: str,
        **options: Any,
    ) -> list[qdrant_grpc.PointGroup]:
        """Search grouped by a payload field. Options: ``requests.search_point_groups``."""
        request = requests.search_point_groups(collection_name, query_vector, group_by, **options)
        response = self._call(
            "search_groups", self._grpc_client.points.SearchGroups, request, collection_name
        )
        return list(response.result.groups)

    def scroll(
        self, collection_name: str, **options: Any
    ) -> tuple[list[qdrant_grpc.RetrievedPoint], qdrant_grpc.PointId | None]:
        """Page through points. Options: ``requests.scroll_points``.

        Returns:
            The points of this page and the offset of the next page (None on the last page).
        """
        request = requests.scroll_points(collection_name, **options)
        response = self._call("scroll", self._grpc_client.points.Scroll, request, collection_name)
        next_offset = response.next_page_offset if response.HasField("next_page_offset") else None
        return list(response.result), next_offset

    def recommend(
        self,
        collection_name: str,
        positive: Iterable[PointIdLike] = (),
        negative: Iterable[PointIdLike] = (),
        **options: Any,
    ) -> list[qdrant_grpc.ScoredPoint]:
        """Options: ``requests.recommend_points``."""
        request = requests.recommend_points(collection_name, positive, negative, **options)
        response = self._call(
            "recommend", self._grpc_client.points.Recommend, request, collection_name
        )
        return list(response.result)

    def recommend_batch(
        self,
        collection_name: str,
        recommendations: Iterable[qdrant_grpc.RecommendPoints],
        **options: Any,
    ) -> list[qdrant_grpc.BatchResult]:
        request = requests.recommend_batch_points(collection_name, recommendations, **options)
        response = self._call(
            "recommend_batch", self._grpc_client.points.RecommendBatch, request, collection_name
        )
        return list(response.result)

    def recommend_groups(
        self,
        collection_name: str,
        group_by: str,
        positive: Iterable[PointIdLike] = (),
        negative: Iterable[PointIdLike] = (),
        **options: Any,
    ) -> list[qdrant_grpc.PointGroup]:
        """Options: ``requests.recommend_point_groups``."""
        request = requests.recommend_point_groups(
            collection_name, group_by, positive, negative, **options
        )
        response = self._call(
            "recommend_groups", self._grpc_client.points.RecommendGroups, request, collection_name
        )
        return list(response.result.groups)

    def discover(
        self,
        collection_name: str,
        target: Any = None,
        context: Iterable[Any] = (),
        **options: Any,
    ) -> list[qdrant_grpc.ScoredPoint]:
        """Options: ``requests.discover_points``."""
        request = requests.discover_points(collection_name, target, context, **options)
        response = self._call(
            "discover", self._grpc_client.points.Discover, request, collection_name
        )
        return list(response.result)

    def discover_batch(
        self,
        collection_name: str,
        discoveries: Iterable[qdrant_grpc.DiscoverPoints],
        **options: Any,
    ) -> list[qdrant_grpc.BatchResult]:
        request = requests.discover_batch_points(collection_name, discoveries, **options)
        response = self._call(
            "discover_batch", self._grpc_client.points.DiscoverBatch, request, collection_name
        )
        return list(response.result)

    def count(self, collection_name: str, **options: Any) -> int:
        """Number of points matching an optional filter. Options: ``requests.count_points``."""
        request = requests.count_points(collection_name, **options)
        response = self._call("count", self._grpc_client.points.Count, request, collection_name)
        return response.result.count

    # ========== Points: universal query ==========

    def query(
        self, collection_name: str, query_value: Any = None, **options: Any
    ) -> list[qdrant_grpc.ScoredPoint]:
        """Universal query. Options: ``requests.query_points``."""
        request = requests.query_points(collection_name, query_value, **options)
        response = self._call("query", self._grpc_client.points.Query, request, collection_name)
        return list(response.result)

    def query_batch(
        self,
        collection_name: str,
        queries: Iterable[qdrant_grpc.QueryPoints],
        **options: Any,
    ) -> list[qdrant_grpc.BatchResult]:
        request = requests.query_batch_points(collection_name, queries, **options)
        response = self._call(
            "query_batch", self._grpc_client.points.QueryBatch, request, collection_name
        )
        return list(response.result)

    def query_groups(
        self,
        collection_name: str,
        group_by: str,
        query_value: Any = None,
        **options: Any,
    ) -> list[qdrant_grpc.PointGroup]:
        """Options: ``requests.query_point_groups``."""
        request = requests.query_point_groups(collection_name, group_by, query_value, **options)
        response = self._call(
            "query_groups", self._grpc_client.points.QueryGroups, request, collection_name
        )
        return list(response.result.groups)

    def facet(self, collection_name: str, key: str, **options: Any) -> list[qdrant_grpc.FacetHit]:
        """Count points per value of a payload key. Options: ``requests.facet_counts``."""
        request = requests.facet_counts(collection_name, key, **options)
        response = self._call("facet", self._grpc_client.points.Facet, request, collection_name)
        return list(response.hits)

    def search_matrix_pairs(self, collection_name: str, **options: Any) -> qdrant_grpc.SearchMatrixPairs:
        """Distance matrix as pairs. Options: ``requests.search_matrix_points``."""
        request = requests.search_matrix_points(collection_name, **options)
        response = self._call(
            "search_matrix_pairs",
            self._grpc_client.points.SearchMatrixPairs,
            request,
            collection_name,
        )
        return response.result

    def search_matrix_offsets(
        self, collection_name: str, **options: Any
    ) -> qdrant_grpc.SearchMatrixOffsets:
        """Distance matrix as offsets. Options: ``requests.search_matrix_points``."""
        request = requests.search_matrix_points(collection_name, **options)
        response = self._call(
            "search_matrix_offsets",
            self._grpc_client.points.SearchMatrixOffsets,
            request,
            collection_name,
        )
        return response.result

    # ========== Snapshots ==========

    def create_snapshot(self, collection_name: str) -> qdrant_grpc.SnapshotDescription:
        request = requests.create_snapshot(collection_name)
        response = self._call(
            "create_snapshot", self._grpc_client.snapshots.Create, request, collection_name
        )
        return response.snapshot_description

    def list_snapshots(self, collection_name: str) -> list[qdrant_grpc.SnapshotDescription]:
        request = requests.list_snapshots(collection_name)
        response = self._call(
            "list_snapshots", self._grpc_client.snapshots.List, request, collection_name
        )
        return list(response.snapshot_descriptions)

    def delete_snapshot(self, collection_name: str, snapshot_name: str) -> None:
        request = requests.delete_snapshot(collection_name, snapshot_name)
        self._call("delete_snapshot", self._grpc_client.snapshots.Delete, request, collection_name)

    def create_full_snapshot(self) -> qdrant_grpc.SnapshotDescription:
        """Snapshot of the whole storage."""
        response = self._call(
            "create_full_snapshot",
            self._grpc_client.snapshots.CreateFull,
            requests.create_full_snapshot(),
        )
        return response.snapshot_description

    def list_full_snapshots(self) -> list[qdrant_grpc.SnapshotDescription]:
        response = self._call(
            "list_full_snapshots",
            self._grpc_client.snapshots.ListFull,
            requests.list_full_snapshots(),
        )
        return list(response.snapshot_descriptions)

    def delete_full_snapshot(self, snapshot_name: str) -> None:
        self._call(
            "delete_full_snapshot",
            self._grpc_client.snapshots.DeleteFull,
            requests.delete_full_snapshot(snapshot_name),
        )

    # ========== Service ==========

    def health(self) -> qdrant_grpc.HealthCheckReply:
        """Server title, version and commit."""
        return self._call("health", self._grpc_client.qdrant.HealthCheck, requests.health_check())

    # ========== Lifecycle ==========

    def close(self) -> None:
        """Close the low-level client if this client created it."""
        if self._closed:
            return
        self._closed = True
        if self._owns_grpc_client:
            self._grpc_client.close()
            logger.info("Qdrant client closed")

    def __enter__(self) -> "QdrantClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["QdrantClient"]
