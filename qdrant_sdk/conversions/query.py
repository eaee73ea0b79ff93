"""Universal query API conversions."""

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from google.protobuf.timestamp_pb2 import Timestamp
from qdrant_client import grpc as qdrant_grpc

from qdrant_sdk.conversions.conditions import to_filter
from qdrant_sdk.conversions.expressions import formula
from qdrant_sdk.conversions.vectors import vector_input

_QUERY_VARIANTS: dict[type, str] = {
    qdrant_grpc.RecommendInput: "recommend",
    qdrant_grpc.DiscoverInput: "discover",
    qdrant_grpc.ContextInput: "context",
    qdrant_grpc.OrderBy: "order_by",
    qdrant_grpc.Formula: "formula",
}


def query(
    value: Any = None,
    *,
    fusion: int | None = None,
    sample: int | None = None,
) -> qdrant_grpc.Query:
    """Convert a value into a ``Query``.

    Recommend/discover/context inputs, ``OrderBy`` and ``Formula`` messages map
    to their own variants and a bare ``Expression`` becomes a formula; anything
    ``vector_input`` accepts (vectors, point ids) becomes a nearest-neighbour
    query. ``Fusion`` and ``Sample`` are enums, i.e. plain ints, so they are
    passed by keyword.

    Example:
        >>> query([0.2, 0.1, 0.9]).WhichOneof("variant")
        'nearest'
        >>> query(fusion=qdrant_grpc.Fusion.RRF).WhichOneof("variant")
        'fusion'
    """
    if fusion is not None:
        return qdrant_grpc.Query(fusion=fusion)
    if sample is not None:
        return qdrant_grpc.Query(sample=sample)
    if value is None:
        raise ValueError("A query value, fusion or sample is required")
    if isinstance(value, qdrant_grpc.Query):
        return value
    variant = _QUERY_VARIANTS.get(type(value))
    if variant is not None:
        return qdrant_grpc.Query(**{variant: value})
    if isinstance(value, qdrant_grpc.Expression):
        return qdrant_grpc.Query(formula=formula(value))
    return qdrant_grpc.Query(nearest=vector_input(value))


def start_from(value: str | float | int | datetime | Timestamp | qdrant_grpc.StartFrom) -> qdrant_grpc.StartFrom:
    """Starting value for an order-by scan.

    Strings are RFC 3339 datetimes, floats and ints select the numeric
    variants, and ``datetime``/``Timestamp`` select ``timestamp``.
    """
    if isinstance(value, qdrant_grpc.StartFrom):
        return value
    if isinstance(value, str):
        return qdrant_grpc.StartFrom(datetime=value)
    if isinstance(value, Timestamp):
        return qdrant_grpc.StartFrom(timestamp=value)
    if isinstance(value, datetime):
        ts = Timestamp()
        ts.FromDatetime(value)
        return qdrant_grpc.StartFrom(timestamp=ts)
    if isinstance(value, bool):
        raise TypeError("Order-by start value cannot be a bool")
    if isinstance(value, int):
        return qdrant_grpc.StartFrom(integer=value)
    if isinstance(value, float):
        return qdrant_grpc.StartFrom(float=value)
    raise TypeError(f"Unsupported order-by start value type: {type(value).__name__}")


def order_by(
    key: str | qdrant_grpc.OrderBy,
    direction: int | None = None,
    start: Any = None,
) -> qdrant_grpc.OrderBy:
    """Order results by a payload key, optionally with a ``Direction`` and a start value."""
    if isinstance(key, qdrant_grpc.OrderBy):
        return key
    message = qdrant_grpc.OrderBy(key=key)
    if direction is not None:
        message.direction = direction
    if start is not None:
        message.start_from.CopyFrom(start_from(start))
    return message


def order_by_query(key: str) -> qdrant_grpc.Query:
    """Query that orders points by ``key`` instead of by similarity."""
    return qdrant_grpc.Query(order_by=qdrant_grpc.OrderBy(key=key))


def recommend_input(
    positive: Iterable[Any] = (),
    negative: Iterable[Any] = (),
    strategy: int | None = None,
) -> qdrant_grpc.RecommendInput:
    """Recommendation query input from positive/negative examples (ids or vectors)."""
    message = qdrant_grpc.RecommendInput(
        positive=[vector_input(item) for item in positive],
        negative=[vector_input(item) for item in negative],
    )
    if strategy is not None:
        message.strategy = strategy
    return message


def context_pair(positive: Any, negative: Any) -> qdrant_grpc.ContextInputPair:
    return qdrant_grpc.ContextInputPair(
        positive=vector_input(positive), negative=vector_input(negative)
    )


def context_input(
    pairs: Iterable[qdrant_grpc.ContextInputPair | tuple[Any, Any]],
) -> qdrant_grpc.ContextInput:
    """Context query input from ``(positive, negative)`` pairs."""
    return qdrant_grpc.ContextInput(
        pairs=[
            pair if isinstance(pair, qdrant_grpc.ContextInputPair) else context_pair(*pair)
            for pair in pairs
        ]
    )


def discover_input(
    target: Any,
    context: qdrant_grpc.ContextInput | Iterable[Any],
) -> qdrant_grpc.DiscoverInput:
    """Discovery query input: a target plus context pairs."""
    if not isinstance(context, qdrant_grpc.ContextInput):
        context = context_input(context)
    return qdrant_grpc.DiscoverInput(target=vector_input(target), context=context)


def prefetch(
    query_value: Any = None,
    *,
    prefetch: Iterable[qdrant_grpc.PrefetchQuery] = (),
    using: str | None = None,
    query_filter: qdrant_grpc.Filter | qdrant_grpc.Condition | None = None,
    params: qdrant_grpc.SearchParams | None = None,
    score_threshold: float | None = None,
    limit: int | None = None,
    lookup_from: qdrant_grpc.LookupLocation | None = None,
) -> qdrant_grpc.PrefetchQuery:
    """Build a ``PrefetchQuery`` stage for hybrid and multi-stage queries."""
    message = qdrant_grpc.PrefetchQuery(prefetch=list(prefetch))
    if query_value is not None:
        message.query.CopyFrom(query(query_value))
    if using is not None:
        message.using = using
    if query_filter is not None:
        message.filter.CopyFrom(to_filter(query_filter))
    if params is not None:
        message.params.CopyFrom(params)
    if score_threshold is not None:
        message.score_threshold = score_threshold
    if limit is not None:
        message.limit = limit
    if lookup_from is not None:
        message.lookup_from.CopyFrom(lookup_from)
    return message


__all__ = [
    "context_input",
    "context_pair",
    "discover_input",
    "order_by",
    "order_by_query",
    "prefetch",
    "query",
    "recommend_input",
    "start_from",
]
