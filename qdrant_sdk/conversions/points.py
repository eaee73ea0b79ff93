"""Point addressing and read/write option conversions.

Covers point ids, points selectors, shard keys, payload/vector selectors,
write ordering and read consistency.
"""

import uuid
from collections.abc import Iterable, Sequence
from typing import TypeAlias

from qdrant_client import grpc as qdrant_grpc

PointIdLike: TypeAlias = int | str | uuid.UUID | qdrant_grpc.PointId
ShardKeyLike: TypeAlias = int | str | qdrant_grpc.ShardKey
SelectorLike: TypeAlias = (
    PointIdLike
    | Iterable[PointIdLike]
    | qdrant_grpc.Filter
    | qdrant_grpc.Condition
    | qdrant_grpc.PointsSelector
)


def point_id(value: PointIdLike) -> qdrant_grpc.PointId:
    """Convert an int, UUID or UUID string into a ``PointId``.

    Raises:
        ValueError: If an integer id is negative or a string is not a valid UUID.
        TypeError: If the value cannot identify a point.
    """
    if isinstance(value, qdrant_grpc.PointId):
        return value
    if isinstance(value, bool):
        raise TypeError("Point id must be an unsigned integer or a UUID, got bool")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Point id must be non-negative, got {value}")
        return qdrant_grpc.PointId(num=value)
    if isinstance(value, uuid.UUID):
        return qdrant_grpc.PointId(uuid=str(value))
    if isinstance(value, str):
        return qdrant_grpc.PointId(uuid=str(uuid.UUID(value)))
    raise TypeError(f"Unsupported point id type: {type(value).__name__}")


def point_ids(values: Iterable[PointIdLike]) -> list[qdrant_grpc.PointId]:
    """Convert several point ids at once."""
    return [point_id(value) for value in values]


def points_selector(value: SelectorLike) -> qdrant_grpc.PointsSelector:
    """Build a ``PointsSelector`` from ids, a single id, a filter or a condition."""
    # Import here to avoid circular dependency
    from qdrant_sdk.conversions.conditions import to_filter

    if isinstance(value, qdrant_grpc.PointsSelector):
        return value
    if isinstance(value, qdrant_grpc.Filter):
        return qdrant_grpc.PointsSelector(filter=value)
    if isinstance(value, qdrant_grpc.Condition):
        return qdrant_grpc.PointsSelector(filter=to_filter(value))
    if isinstance(value, int | str | uuid.UUID | qdrant_grpc.PointId):
        ids = [point_id(value)]
    else:
        ids = point_ids(value)
    return qdrant_grpc.PointsSelector(points=qdrant_grpc.PointsIdsList(ids=ids))


def shard_key(value: ShardKeyLike) -> qdrant_grpc.ShardKey:
    """Convert an int (``number``) or str (``keyword``) into a ``ShardKey``."""
    if isinstance(value, qdrant_grpc.ShardKey):
        return value
    if isinstance(value, bool):
        raise TypeError("Shard key must be an unsigned integer or a string, got bool")
    if isinstance(value, int):
        return qdrant_grpc.ShardKey(number=value)
    if isinstance(value, str):
        return qdrant_grpc.ShardKey(keyword=value)
    raise TypeError(f"Unsupported shard key type: {type(value).__name__}")


def shard_key_selector(
    value: ShardKeyLike | Iterable[ShardKeyLike] | qdrant_grpc.ShardKeySelector,
) -> qdrant_grpc.ShardKeySelector:
    """Build a ``ShardKeySelector`` from one shard key or several."""
    if isinstance(value, qdrant_grpc.ShardKeySelector):
        return value
    if isinstance(value, int | str | qdrant_grpc.ShardKey):
        keys = [shard_key(value)]
    else:
        keys = [shard_key(key) for key in value]
    return qdrant_grpc.ShardKeySelector(shard_keys=keys)


def with_payload(
    value: bool | Sequence[str] | qdrant_grpc.WithPayloadSelector,
) -> qdrant_grpc.WithPayloadSelector:
    """Select payload for returned points: all/none (bool) or only the named fields."""
    if isinstance(value, qdrant_grpc.WithPayloadSelector):
        return value
    if isinstance(value, bool):
        return qdrant_grpc.WithPayloadSelector(enable=value)
    if isinstance(value, str):
        value = [value]
    return qdrant_grpc.WithPayloadSelector(
        include=qdrant_grpc.PayloadIncludeSelector(fields=list(value))
    )


def exclude_payload(fields: Sequence[str]) -> qdrant_grpc.WithPayloadSelector:
    """Return every payload field except the named ones."""
    return qdrant_grpc.WithPayloadSelector(
        exclude=qdrant_grpc.PayloadExcludeSelector(fields=list(fields))
    )


def with_vectors(
    value: bool | Sequence[str] | qdrant_grpc.WithVectorsSelector,
) -> qdrant_grpc.WithVectorsSelector:
    """Select vectors for returned points: all/none (bool) or only the named vectors."""
    if isinstance(value, qdrant_grpc.WithVectorsSelector):
        return value
    if isinstance(value, bool):
        return qdrant_grpc.WithVectorsSelector(enable=value)
    if isinstance(value, str):
        value = [value]
    return qdrant_grpc.WithVectorsSelector(
        include=qdrant_grpc.VectorsSelector(names=list(value))
    )


def write_ordering(
    value: int | qdrant_grpc.WriteOrdering | None,
) -> qdrant_grpc.WriteOrdering | None:
    """Wrap a ``WriteOrderingType`` value into a ``WriteOrdering`` message."""
    if value is None or isinstance(value, qdrant_grpc.WriteOrdering):
        return value
    return qdrant_grpc.WriteOrdering(type=value)


def read_consistency(
    value: int | qdrant_grpc.ReadConsistency | None,
    *,
    factor: int | None = None,
) -> qdrant_grpc.ReadConsistency | None:
    """Build a ``ReadConsistency`` from a ``ReadConsistencyType`` or a replica factor.

    Enum values are plain ints in the generated code, so a replica count must be
    passed with ``factor=``.

    Example:
        >>> read_consistency(qdrant_grpc.ReadConsistencyType.Majority)
        >>> read_consistency(None, factor=2)
    """
    if factor is not None:
        if factor < 1:
            raise ValueError(f"Read consistency factor must be positive, got {factor}")
        return qdrant_grpc.ReadConsistency(factor=factor)
    if value is None or isinstance(value, qdrant_grpc.ReadConsistency):
        return value
    return qdrant_grpc.ReadConsistency(type=value)


__all__ = [
    "PointIdLike",
    "SelectorLike",
    "ShardKeyLike",
    "exclude_payload",
    "point_id",
    "point_ids",
    "points_selector",
    "read_consistency",
    "shard_key",
    "shard_key_selector",
    "with_payload",
    "with_vectors",
    "write_ordering",
]
