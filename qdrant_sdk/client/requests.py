"""Request builders shared by the sync and async facades.

Each builder takes native values, fills in the default for every argument the
caller leaves out, and returns the request message for exactly one RPC.
Optional arguments left as None are not set on the message, so the server
applies its own defaults.

Common argument conversions:
    query_filter: ``Filter`` or a single ``Condition``.
    selector: ids, a single id, a ``Filter`` or a ``Condition``.
    with_payload / with_vectors: bool or a list of field / vector names.
    ordering: a ``WriteOrderingType`` value.
    read_consistency: a ``ReadConsistencyType`` value or a ``ReadConsistency`` message.
    shard_key_selector: one shard key (int or str) or several.
    timeout: server-side wait, in whole seconds or as a ``timedelta``.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import timedelta
from typing import Any, TypeAlias, TypeVar

from qdrant_client import grpc as qdrant_grpc

from qdrant_sdk.conversions import (
    PointIdLike,
    SelectorLike,
    ShardKeyLike,
    field_type,
    point_id,
    point_ids,
    point_struct,
    point_vectors,
    points_selector,
    query,
    read_consistency,
    shard_key,
    shard_key_selector,
    sparse_indices as to_sparse_indices,
    sparse_vector_config,
    to_filter,
    to_payload,
    vector,
    vectors_config,
    vectors_config_diff,
    with_payload,
    with_vectors,
    write_ordering,
)

T = TypeVar("T")

TimeoutLike: TypeAlias = float | int | timedelta
FilterLike: TypeAlias = qdrant_grpc.Filter | qdrant_grpc.Condition
ShardKeySelectorLike: TypeAlias = ShardKeyLike | Iterable[ShardKeyLike] | qdrant_grpc.ShardKeySelector
ReadConsistencyLike: TypeAlias = int | qdrant_grpc.ReadConsistency
PayloadSelectorLike: TypeAlias = bool | Sequence[str] | qdrant_grpc.WithPayloadSelector
VectorsSelectorLike: TypeAlias = bool | Sequence[str] | qdrant_grpc.WithVectorsSelector

DEFAULT_LIMIT = 10


def convert_timeout(timeout: TimeoutLike | None) -> int | None:
    """Convert a server-side timeout into whole seconds.

    Raises:
        ValueError: If the timeout has a sub-second component or is negative.
    """
    if timeout is None:
        return None
    seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)
    if not seconds.is_integer():
        raise ValueError("Sub-second components in timeout are not supported")
    if seconds < 0:
        raise ValueError(f"Timeout must not be negative, got {seconds}")
    return int(seconds)


def _optional(**fields: Any) -> dict[str, Any]:
    return {name: value for name, value in fields.items() if value is not None}


def _maybe(convert: Callable[[Any], T], value: Any) -> T | None:
    return None if value is None else convert(value)


def _read_options(
    read_consistency_value: ReadConsistencyLike | None,
    shard_keys: ShardKeySelectorLike | None,
    timeout: TimeoutLike | None,
) -> dict[str, Any]:
    return _optional(
        read_consistency=read_consistency(read_consistency_value),
        shard_key_selector=_maybe(shard_key_selector, shard_keys),
        timeout=convert_timeout(timeout),
    )


def _write_options(
    ordering: int | qdrant_grpc.WriteOrdering | None,
    shard_keys: ShardKeySelectorLike | None,
) -> dict[str, Any]:
    return _optional(
        ordering=write_ordering(ordering),
        shard_key_selector=_maybe(shard_key_selector, shard_keys),
    )


def _stamp(message: T, collection_name: str) -> T:
    """Copy of a batched request carrying the batch's collection name."""
    stamped = type(message)()
    stamped.CopyFrom(message)
    stamped.collection_name = collection_name
    return stamped


# ========== Collections ==========


def create_collection(
    collection_name: str,
    vectors: Any = None,
    *,
    shard_number: int = 1,
    replication_factor: int = 1,
    write_consistency_factor: int = 1,
    on_disk_payload: bool = False,
    hnsw_config: qdrant_grpc.HnswConfigDiff | None = None,
    optimizers_config: qdrant_grpc.OptimizersConfigDiff | None = None,
    wal_config: qdrant_grpc.WalConfigDiff | None = None,
    quantization_config: qdrant_grpc.QuantizationConfig | None = None,
    sharding_method: int | None = None,
    sparse_vectors_config: Any = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.CreateCollection:
    """Build a ``CreateCollection`` request.

    Args:
        collection_name: Name of the new collection.
        vectors: ``VectorParams`` for one unnamed vector, or a mapping of
            vector name to ``VectorParams``. May be omitted for sparse-only
            collections.
    """
    return qdrant_grpc.CreateCollection(
        collection_name=collection_name,
        shard_number=shard_number,
        replication_factor=replication_factor,
        write_consistency_factor=write_consistency_factor,
        on_disk_payload=on_disk_payload,
        **_optional(
            vectors_config=_maybe(vectors_config, vectors),
            hnsw_config=hnsw_config,
            optimizers_config=optimizers_config,
            wal_config=wal_config,
            quantization_config=quantization_config,
            sharding_method=sharding_method,
            sparse_vectors_config=_maybe(sparse_vector_config, sparse_vectors_config),
            timeout=convert_timeout(timeout),
        ),
    )


def update_collection(
    collection_name: str,
    vectors: Any = None,
    *,
    optimizers_config: qdrant_grpc.OptimizersConfigDiff | None = None,
    collection_params: qdrant_grpc.CollectionParamsDiff | None = None,
    hnsw_config: qdrant_grpc.HnswConfigDiff | None = None,
    quantization_config: qdrant_grpc.QuantizationConfigDiff | None = None,
    sparse_vectors_config: Any = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.UpdateCollection:
    return qdrant_grpc.UpdateCollection(
        collection_name=collection_name,
        **_optional(
            vectors_config=_maybe(vectors_config_diff, vectors),
            optimizers_config=optimizers_config,
            params=collection_params,
            hnsw_config=hnsw_config,
            quantization_config=quantization_config,
            sparse_vectors_config=_maybe(sparse_vector_config, sparse_vectors_config),
            timeout=convert_timeout(timeout),
        ),
    )


def delete_collection(
    collection_name: str, timeout: TimeoutLike | None = None
) -> qdrant_grpc.DeleteCollection:
    return qdrant_grpc.DeleteCollection(
        collection_name=collection_name, **_optional(timeout=convert_timeout(timeout))
    )


def get_collection_info(collection_name: str) -> qdrant_grpc.GetCollectionInfoRequest:
    return qdrant_grpc.GetCollectionInfoRequest(collection_name=collection_name)


def list_collections() -> qdrant_grpc.ListCollectionsRequest:
    return qdrant_grpc.ListCollectionsRequest()


def collection_exists(collection_name: str) -> qdrant_grpc.CollectionExistsRequest:
    return qdrant_grpc.CollectionExistsRequest(collection_name=collection_name)


# ========== Aliases ==========


def create_alias_operation(alias_name: str, collection_name: str) -> qdrant_grpc.AliasOperations:
    return qdrant_grpc.AliasOperations(
        create_alias=qdrant_grpc.CreateAlias(
            alias_name=alias_name, collection_name=collection_name
        )
    )


def rename_alias_operation(old_alias_name: str, new_alias_name: str) -> qdrant_grpc.AliasOperations:
    return qdrant_grpc.AliasOperations(
        rename_alias=qdrant_grpc.RenameAlias(
            old_alias_name=old_alias_name, new_alias_name=new_alias_name
        )
    )


def delete_alias_operation(alias_name: str) -> qdrant_grpc.AliasOperations:
    return qdrant_grpc.AliasOperations(
        delete_alias=qdrant_grpc.DeleteAlias(alias_name=alias_name)
    )


def change_aliases(
    actions: Iterable[qdrant_grpc.AliasOperations],
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.ChangeAliases:
    """Apply several alias operations atomically."""
    return qdrant_grpc.ChangeAliases(
        actions=list(actions), **_optional(timeout=convert_timeout(timeout))
    )


def list_collection_aliases(collection_name: str) -> qdrant_grpc.ListCollectionAliasesRequest:
    return qdrant_grpc.ListCollectionAliasesRequest(collection_name=collection_name)


def list_aliases() -> qdrant_grpc.ListAliasesRequest:
    return qdrant_grpc.ListAliasesRequest()


# ========== Cluster ==========


def create_shard_key(
    collection_name: str,
    key: ShardKeyLike,
    *,
    shards_number: int | None = None,
    replication_factor: int | None = None,
    placement: Iterable[int] | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.CreateShardKeyRequest:
    request = qdrant_grpc.CreateShardKey(
        shard_key=shard_key(key),
        **_optional(
            shards_number=shards_number,
            replication_factor=replication_factor,
            placement=_maybe(list, placement),
        ),
    )
    return qdrant_grpc.CreateShardKeyRequest(
        collection_name=collection_name,
        request=request,
        **_optional(timeout=convert_timeout(timeout)),
    )


def delete_shard_key(
    collection_name: str,
    key: ShardKeyLike,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.DeleteShardKeyRequest:
    return qdrant_grpc.DeleteShardKeyRequest(
        collection_name=collection_name,
        request=qdrant_grpc.DeleteShardKey(shard_key=shard_key(key)),
        **_optional(timeout=convert_timeout(timeout)),
    )


# ========== Points: writes ==========


def _point(value: qdrant_grpc.PointStruct | tuple) -> qdrant_grpc.PointStruct:
    if isinstance(value, qdrant_grpc.PointStruct):
        return value
    return point_struct(*value)


def upsert_points(
    collection_name: str,
    points: Iterable[qdrant_grpc.PointStruct | tuple],
    *,
    wait: bool = True,
    ordering: int | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
) -> qdrant_grpc.UpsertPoints:
    """Build an ``UpsertPoints`` request.

    Args:
        points: ``PointStruct`` messages or ``(id, vector[, payload])`` tuples.
    """
    return qdrant_grpc.UpsertPoints(
        collection_name=collection_name,
        wait=wait,
        points=[_point(p) for p in points],
        **_write_options(ordering, shard_key_selector),
    )


def delete_points(
    collection_name: str,
    selector: SelectorLike,
    *,
    wait: bool = True,
    ordering: int | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
) -> qdrant_grpc.DeletePoints:
    return qdrant_grpc.DeletePoints(
        collection_name=collection_name,
        wait=wait,
        points=points_selector(selector),
        **_write_options(ordering, shard_key_selector),
    )


def get_points(
    collection_name: str,
    ids: Iterable[PointIdLike],
    *,
    with_payload: PayloadSelectorLike = True,
    with_vectors: VectorsSelectorLike = False,
    read_consistency: ReadConsistencyLike | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.GetPoints:
    return qdrant_grpc.GetPoints(
        collection_name=collection_name,
        ids=point_ids(ids),
        with_payload=_with_payload(with_payload),
        with_vectors=_with_vectors(with_vectors),
        **_read_options(read_consistency, shard_key_selector, timeout),
    )


def update_point_vectors(
    collection_name: str,
    points: Iterable[qdrant_grpc.PointVectors | tuple[PointIdLike, Any]],
    *,
    wait: bool = True,
    ordering: int | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
) -> qdrant_grpc.UpdatePointVectors:
    """Build an ``UpdatePointVectors`` request from ``PointVectors`` or ``(id, vectors)`` pairs."""
    return qdrant_grpc.UpdatePointVectors(
        collection_name=collection_name,
        wait=wait,
        points=[
            p if isinstance(p, qdrant_grpc.PointVectors) else point_vectors(*p) for p in points
        ],
        **_write_options(ordering, shard_key_selector),
    )


def delete_point_vectors(
    collection_name: str,
    vector_names: Sequence[str],
    selector: SelectorLike,
    *,
    wait: bool = True,
    ordering: int | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
) -> qdrant_grpc.DeletePointVectors:
    return qdrant_grpc.DeletePointVectors(
        collection_name=collection_name,
        wait=wait,
        points_selector=points_selector(selector),
        vectors=qdrant_grpc.VectorsSelector(names=list(vector_names)),
        **_write_options(ordering, shard_key_selector),
    )


def set_payload_points(
    collection_name: str,
    payload: Mapping[str, Any],
    selector: SelectorLike | None = None,
    *,
    key: str | None = None,
    wait: bool = True,
    ordering: int | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
) -> qdrant_grpc.SetPayloadPoints:
    """Build a ``SetPayloadPoints`` request (used for both set and overwrite).

    Args:
        payload: Native mapping converted with ``to_payload``.
        selector: Points to modify; omitted means every point.
        key: Nested payload path to assign under instead of the root.
    """
    return qdrant_grpc.SetPayloadPoints(
        collection_name=collection_name,
        wait=wait,
        payload=to_payload(payload),
        **_optional(points_selector=_maybe(points_selector, selector), key=key),
        **_write_options(ordering, shard_key_selector),
    )


def delete_payload_points(
    collection_name: str,
    keys: Sequence[str],
    selector: SelectorLike | None = None,
    *,
    wait: bool = True,
    ordering: int | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
) -> qdrant_grpc.DeletePayloadPoints:
    return qdrant_grpc.DeletePayloadPoints(
        collection_name=collection_name,
        wait=wait,
        keys=list(keys),
        **_optional(points_selector=_maybe(points_selector, selector)),
        **_write_options(ordering, shard_key_selector),
    )


def clear_payload_points(
    collection_name: str,
    selector: SelectorLike | None = None,
    *,
    wait: bool = True,
    ordering: int | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
) -> qdrant_grpc.ClearPayloadPoints:
    return qdrant_grpc.ClearPayloadPoints(
        collection_name=collection_name,
        wait=wait,
        **_optional(points=_maybe(points_selector, selector)),
        **_write_options(ordering, shard_key_selector),
    )


def create_field_index(
    collection_name: str,
    field_name: str,
    schema_type: int | str = "keyword",
    *,
    index_params: qdrant_grpc.PayloadIndexParams | None = None,
    wait: bool = True,
    ordering: int | None = None,
) -> qdrant_grpc.CreateFieldIndexCollection:
    """Build a ``CreateFieldIndexCollection`` request.

    Raises:
        ValueError: If ``schema_type`` has no index field type.
    """
    return qdrant_grpc.CreateFieldIndexCollection(
        collection_name=collection_name,
        field_name=field_name,
        field_type=field_type(schema_type),
        wait=wait,
        **_optional(field_index_params=index_params, ordering=write_ordering(ordering)),
    )


def delete_field_index(
    collection_name: str,
    field_name: str,
    *,
    wait: bool = True,
    ordering: int | None = None,
) -> qdrant_grpc.DeleteFieldIndexCollection:
    return qdrant_grpc.DeleteFieldIndexCollection(
        collection_name=collection_name,
        field_name=field_name,
        wait=wait,
        **_optional(ordering=write_ordering(ordering)),
    )


def update_batch_points(
    collection_name: str,
    operations: Iterable[qdrant_grpc.PointsUpdateOperation],
    *,
    wait: bool = True,
    ordering: int | None = None,
) -> qdrant_grpc.UpdateBatchPoints:
    return qdrant_grpc.UpdateBatchPoints(
        collection_name=collection_name,
        wait=wait,
        operations=list(operations),
        **_optional(ordering=write_ordering(ordering)),
    )


# ========== Points: reads ==========


def _with_payload(value: PayloadSelectorLike) -> qdrant_grpc.WithPayloadSelector:
    return with_payload(value)


def _with_vectors(value: VectorsSelectorLike) -> qdrant_grpc.WithVectorsSelector:
    return with_vectors(value)


def _dense_values(value: Sequence[float]) -> list[float]:
    if hasattr(value, "tolist"):
        value = value.tolist()
    return [float(v) for v in value]


def search_points(
    collection_name: str,
    query_vector: Sequence[float],
    *,
    query_filter: FilterLike | None = None,
    params: qdrant_grpc.SearchParams | None = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    with_payload: PayloadSelectorLike = True,
    with_vectors: VectorsSelectorLike = False,
    score_threshold: float | None = None,
    vector_name: str | None = None,
    sparse_indices: Sequence[int] | None = None,
    read_consistency: ReadConsistencyLike | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.SearchPoints:
    """Build a ``SearchPoints`` request.

    Args:
        query_vector: Dense query vector, or the values of a sparse vector when
            ``sparse_indices`` is given.
    """
    return qdrant_grpc.SearchPoints(
        collection_name=collection_name,
        vector=_dense_values(query_vector),
        limit=limit,
        offset=offset,
        with_payload=_with_payload(with_payload),
        with_vectors=_with_vectors(with_vectors),
        **_optional(
            filter=_maybe(to_filter, query_filter),
            params=params,
            score_threshold=score_threshold,
            vector_name=vector_name,
            sparse_indices=_maybe(to_sparse_indices, sparse_indices),
        ),
        **_read_options(read_consistency, shard_key_selector, timeout),
    )


def search_batch_points(
    collection_name: str,
    searches: Iterable[qdrant_grpc.SearchPoints],
    *,
    read_consistency: ReadConsistencyLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.SearchBatchPoints:
    return qdrant_grpc.SearchBatchPoints(
        collection_name=collection_name,
        search_points=[_stamp(s, collection_name) for s in searches],
        **_read_options(read_consistency, None, timeout),
    )


def search_point_groups(
    collection_name: str,
    query_vector: Sequence[float],
    group_by: str,
    *,
    query_filter: FilterLike | None = None,
    params: qdrant_grpc.SearchParams | None = None,
    limit: int = DEFAULT_LIMIT,
    group_size: int = 1,
    with_payload: PayloadSelectorLike = True,
    with_vectors: VectorsSelectorLike = False,
    score_threshold: float | None = None,
    vector_name: str | None = None,
    with_lookup: qdrant_grpc.WithLookup | None = None,
    sparse_indices: Sequence[int] | None = None,
    read_consistency: ReadConsistencyLike | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.SearchPointGroups:
    return qdrant_grpc.SearchPointGroups(
        collection_name=collection_name,
        vector=_dense_values(query_vector),
        group_by=group_by,
        limit=limit,
        group_size=group_size,
        with_payload=_with_payload(with_payload),
        with_vectors=_with_vectors(with_vectors),
        **_optional(
            filter=_maybe(to_filter, query_filter),
            params=params,
            score_threshold=score_threshold,
            vector_name=vector_name,
            with_lookup=with_lookup,
            sparse_indices=_maybe(to_sparse_indices, sparse_indices),
        ),
        **_read_options(read_consistency, shard_key_selector, timeout),
    )


def scroll_points(
    collection_name: str,
    *,
    query_filter: FilterLike | None = None,
    limit: int = DEFAULT_LIMIT,
    offset: PointIdLike | None = None,
    with_payload: PayloadSelectorLike = True,
    with_vectors: VectorsSelectorLike = False,
    order_by: qdrant_grpc.OrderBy | str | None = None,
    read_consistency: ReadConsistencyLike | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.ScrollPoints:
    """Build a ``ScrollPoints`` request.

    Args:
        offset: Id of the first point of the page (``next_page_offset`` of the
            previous page).
        order_by: Payload key (or ``OrderBy``) to order the scan by.
    """
    if isinstance(order_by, str):
        order_by = qdrant_grpc.OrderBy(key=order_by)
    return qdrant_grpc.ScrollPoints(
        collection_name=collection_name,
        limit=limit,
        with_payload=_with_payload(with_payload),
        with_vectors=_with_vectors(with_vectors),
        **_optional(
            filter=_maybe(to_filter, query_filter),
            offset=_maybe(point_id, offset),
            order_by=order_by,
        ),
        **_read_options(read_consistency, shard_key_selector, timeout),
    )


def recommend_points(
    collection_name: str,
    positive: Iterable[PointIdLike] = (),
    negative: Iterable[PointIdLike] = (),
    *,
    positive_vectors: Iterable[Any] = (),
    negative_vectors: Iterable[Any] = (),
    strategy: int | None = None,
    query_filter: FilterLike | None = None,
    params: qdrant_grpc.SearchParams | None = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    with_payload: PayloadSelectorLike = True,
    with_vectors: VectorsSelectorLike = False,
    score_threshold: float | None = None,
    using: str | None = None,
    lookup_from: qdrant_grpc.LookupLocation | None = None,
    read_consistency: ReadConsistencyLike | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.RecommendPoints:
    """Build a ``RecommendPoints`` request from example point ids and/or vectors."""
    return qdrant_grpc.RecommendPoints(
        collection_name=collection_name,
        positive=point_ids(positive),
        negative=point_ids(negative),
        positive_vectors=[vector(v) for v in positive_vectors],
        negative_vectors=[vector(v) for v in negative_vectors],
        limit=limit,
        offset=offset,
        with_payload=_with_payload(with_payload),
        with_vectors=_with_vectors(with_vectors),
        **_optional(
            strategy=strategy,
            filter=_maybe(to_filter, query_filter),
            params=params,
            score_threshold=score_threshold,
            using=using,
            lookup_from=lookup_from,
        ),
        **_read_options(read_consistency, shard_key_selector, timeout),
    )


def recommend_batch_points(
    collection_name: str,
    recommendations: Iterable[qdrant_grpc.RecommendPoints],
    *,
    read_consistency: ReadConsistencyLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.RecommendBatchPoints:
    return qdrant_grpc.RecommendBatchPoints(
        collection_name=collection_name,
        recommend_points=[_stamp(r, collection_name) for r in recommendations],
        **_read_options(read_consistency, None, timeout),
    )


def recommend_point_groups(
    collection_name: str,
    group_by: str,
    positive: Iterable[PointIdLike] = (),
    negative: Iterable[PointIdLike] = (),
    *,
    positive_vectors: Iterable[Any] = (),
    negative_vectors: Iterable[Any] = (),
    strategy: int | None = None,
    query_filter: FilterLike | None = None,
    params: qdrant_grpc.SearchParams | None = None,
    limit: int = DEFAULT_LIMIT,
    group_size: int = 1,
    with_payload: PayloadSelectorLike = True,
    with_vectors: VectorsSelectorLike = False,
    score_threshold: float | None = None,
    using: str | None = None,
    lookup_from: qdrant_grpc.LookupLocation | None = None,
    with_lookup: qdrant_grpc.WithLookup | None = None,
    read_consistency: ReadConsistencyLike | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.RecommendPointGroups:
    return qdrant_grpc.RecommendPointGroups(
        collection_name=collection_name,
        group_by=group_by,
        positive=point_ids(positive),
        negative=point_ids(negative),
        positive_vectors=[vector(v) for v in positive_vectors],
        negative_vectors=[vector(v) for v in negative_vectors],
        limit=limit,
        group_size=group_size,
        with_payload=_with_payload(with_payload),
        with_vectors=_with_vectors(with_vectors),
        **_optional(
            strategy=strategy,
            filter=_maybe(to_filter, query_filter),
            params=params,
            score_threshold=score_threshold,
            using=using,
            lookup_from=lookup_from,
            with_lookup=with_lookup,
        ),
        **_read_options(read_consistency, shard_key_selector, timeout),
    )


def vector_example(value: Any) -> qdrant_grpc.VectorExample:
    """A discovery example: a point id (int, UUID or UUID string) or a vector."""
    if isinstance(value, qdrant_grpc.VectorExample):
        return value
    if isinstance(value, qdrant_grpc.Vector):
        return qdrant_grpc.VectorExample(vector=value)
    try:
        return qdrant_grpc.VectorExample(id=point_id(value))
    except TypeError:
        return qdrant_grpc.VectorExample(vector=vector(value))


def context_example_pair(positive: Any, negative: Any) -> qdrant_grpc.ContextExamplePair:
    return qdrant_grpc.ContextExamplePair(
        positive=vector_example(positive), negative=vector_example(negative)
    )


def _target(value: Any) -> qdrant_grpc.TargetVector:
    if isinstance(value, qdrant_grpc.TargetVector):
        return value
    return qdrant_grpc.TargetVector(single=vector_example(value))


def _context(pairs: Iterable[Any]) -> list[qdrant_grpc.ContextExamplePair]:
    return [
        pair if isinstance(pair, qdrant_grpc.ContextExamplePair) else context_example_pair(*pair)
        for pair in pairs
    ]


def discover_points(
    collection_name: str,
    target: Any = None,
    context: Iterable[Any] = (),
    *,
    query_filter: FilterLike | None = None,
    params: qdrant_grpc.SearchParams | None = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    with_payload: PayloadSelectorLike = True,
    with_vectors: VectorsSelectorLike = False,
    using: str | None = None,
    lookup_from: qdrant_grpc.LookupLocation | None = None,
    read_consistency: ReadConsistencyLike | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.DiscoverPoints:
    """Build a ``DiscoverPoints`` request.

    Args:
        target: Point id or vector to discover around; omit for a context-only search.
        context: ``ContextExamplePair`` messages or ``(positive, negative)`` pairs.
    """
    return qdrant_grpc.DiscoverPoints(
        collection_name=collection_name,
        context=_context(context),
        limit=limit,
        offset=offset,
        with_payload=_with_payload(with_payload),
        with_vectors=_with_vectors(with_vectors),
        **_optional(
            target=_maybe(_target, target),
            filter=_maybe(to_filter, query_filter),
            params=params,
            using=using,
            lookup_from=lookup_from,
        ),
        **_read_options(read_consistency, shard_key_selector, timeout),
    )


def discover_batch_points(
    collection_name: str,
    discoveries: Iterable[qdrant_grpc.DiscoverPoints],
    *,
    read_consistency: ReadConsistencyLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.DiscoverBatchPoints:
    return qdrant_grpc.DiscoverBatchPoints(
        collection_name=collection_name,
        discover_points=[_stamp(d, collection_name) for d in discoveries],
        **_read_options(read_consistency, None, timeout),
    )


def count_points(
    collection_name: str,
    *,
    query_filter: FilterLike | None = None,
    exact: bool = True,
    read_consistency: ReadConsistencyLike | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.CountPoints:
    return qdrant_grpc.CountPoints(
        collection_name=collection_name,
        exact=exact,
        **_optional(filter=_maybe(to_filter, query_filter)),
        **_read_options(read_consistency, shard_key_selector, timeout),
    )


# ========== Universal query ==========


def query_points(
    collection_name: str,
    query_value: Any = None,
    *,
    prefetch: Iterable[qdrant_grpc.PrefetchQuery] = (),
    using: str | None = None,
    query_filter: FilterLike | None = None,
    params: qdrant_grpc.SearchParams | None = None,
    score_threshold: float | None = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    with_payload: PayloadSelectorLike = True,
    with_vectors: VectorsSelectorLike = False,
    lookup_from: qdrant_grpc.LookupLocation | None = None,
    read_consistency: ReadConsistencyLike | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.QueryPoints:
    """Build a ``QueryPoints`` request.

    Args:
        query_value: Anything ``conversions.query`` accepts; omit to return
            points in id order (or the prefetch results).
        prefetch: Sub-queries whose results the main query re-scores.
    """
    return qdrant_grpc.QueryPoints(
        collection_name=collection_name,
        prefetch=list(prefetch),
        limit=limit,
        offset=offset,
        with_payload=_with_payload(with_payload),
        with_vectors=_with_vectors(with_vectors),
        **_optional(
            query=_maybe(query, query_value),
            using=using,
            filter=_maybe(to_filter, query_filter),
            params=params,
            score_threshold=score_threshold,
            lookup_from=lookup_from,
        ),
        **_read_options(read_consistency, shard_key_selector, timeout),
    )


def query_batch_points(
    collection_name: str,
    queries: Iterable[qdrant_grpc.QueryPoints],
    *,
    read_consistency: ReadConsistencyLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.QueryBatchPoints:
    return qdrant_grpc.QueryBatchPoints(
        collection_name=collection_name,
        query_points=[_stamp(q, collection_name) for q in queries],
        **_read_options(read_consistency, None, timeout),
    )


def query_point_groups(
    collection_name: str,
    group_by: str,
    query_value: Any = None,
    *,
    prefetch: Iterable[qdrant_grpc.PrefetchQuery] = (),
    using: str | None = None,
    query_filter: FilterLike | None = None,
    params: qdrant_grpc.SearchParams | None = None,
    score_threshold: float | None = None,
    limit: int = DEFAULT_LIMIT,
    group_size: int = 1,
    with_payload: PayloadSelectorLike = True,
    with_vectors: VectorsSelectorLike = False,
    lookup_from: qdrant_grpc.LookupLocation | None = None,
    with_lookup: qdrant_grpc.WithLookup | None = None,
    read_consistency: ReadConsistencyLike | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.QueryPointGroups:
    return qdrant_grpc.QueryPointGroups(
        collection_name=collection_name,
        group_by=group_by,
        prefetch=list(prefetch),
        limit=limit,
        group_size=group_size,
        with_payload=_with_payload(with_payload),
        with_vectors=_with_vectors(with_vectors),
        **_optional(
            query=_maybe(query, query_value),
            using=using,
            filter=_maybe(to_filter, query_filter),
            params=params,
            score_threshold=score_threshold,
            lookup_from=lookup_from,
            with_lookup=with_lookup,
        ),
        **_read_options(read_consistency, shard_key_selector, timeout),
    )


def facet_counts(
    collection_name: str,
    key: str,
    *,
    query_filter: FilterLike | None = None,
    limit: int = DEFAULT_LIMIT,
    exact: bool = False,
    read_consistency: ReadConsistencyLike | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.FacetCounts:
    """Build a ``FacetCounts`` request counting points per value of ``key``."""
    return qdrant_grpc.FacetCounts(
        collection_name=collection_name,
        key=key,
        limit=limit,
        exact=exact,
        **_optional(filter=_maybe(to_filter, query_filter)),
        **_read_options(read_consistency, shard_key_selector, timeout),
    )


def search_matrix_points(
    collection_name: str,
    *,
    query_filter: FilterLike | None = None,
    sample: int = 10,
    limit: int = 3,
    using: str | None = None,
    read_consistency: ReadConsistencyLike | None = None,
    shard_key_selector: ShardKeySelectorLike | None = None,
    timeout: TimeoutLike | None = None,
) -> qdrant_grpc.SearchMatrixPoints:
    """Build a ``SearchMatrixPoints`` request: ``limit`` neighbours for each of ``sample`` points."""
    return qdrant_grpc.SearchMatrixPoints(
        collection_name=collection_name,
        sample=sample,
        limit=limit,
        **_optional(filter=_maybe(to_filter, query_filter), using=using),
        **_read_options(read_consistency, shard_key_selector, timeout),
    )


# ========== Snapshots & service ==========


def create_snapshot(collection_name: str) -> qdrant_grpc.CreateSnapshotRequest:
    return qdrant_grpc.CreateSnapshotRequest(collection_name=collection_name)


def list_snapshots(collection_name: str) -> qdrant_grpc.ListSnapshotsRequest:
    return qdrant_grpc.ListSnapshotsRequest(collection_name=collection_name)


def delete_snapshot(collection_name: str, snapshot_name: str) -> qdrant_grpc.DeleteSnapshotRequest:
    return qdrant_grpc.DeleteSnapshotRequest(
        collection_name=collection_name, snapshot_name=snapshot_name
    )


def create_full_snapshot() -> qdrant_grpc.CreateFullSnapshotRequest:
    return qdrant_grpc.CreateFullSnapshotRequest()


def list_full_snapshots() -> qdrant_grpc.ListFullSnapshotsRequest:
    return qdrant_grpc.ListFullSnapshotsRequest()


def delete_full_snapshot(snapshot_name: str) -> qdrant_grpc.DeleteFullSnapshotRequest:
    return qdrant_grpc.DeleteFullSnapshotRequest(snapshot_name=snapshot_name)


def health_check() -> qdrant_grpc.HealthCheckRequest:
    return qdrant_grpc.HealthCheckRequest()
