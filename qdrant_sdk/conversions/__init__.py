"""Conversions from native Python values to Qdrant gRPC messages.

Every function returns messages from ``qdrant_client.grpc``; values that are
already the target message type pass through unchanged.
"""

from qdrant_sdk.conversions.collections import (
    field_type,
    vector_params,
    vectors_config,
    vectors_config_diff,
)
from qdrant_sdk.conversions.conditions import (
    and_conditions,
    and_filters,
    datetime_range,
    filter_condition,
    geo_bounding_box,
    geo_line_string,
    geo_polygon,
    geo_radius,
    has_id,
    has_vector,
    is_empty,
    is_null,
    match,
    match_except,
    match_keyword,
    match_phrase,
    match_text,
    nested,
    not_condition,
    or_conditions,
    or_filters,
    range,  # noqa: A004
    range_condition,
    to_filter,
    values_count,
)
from qdrant_sdk.conversions.expressions import (
    ExpressionLike,
    abs_,
    datetime_expression,
    datetime_key,
    div,
    exp,
    exp_decay,
    expression,
    formula,
    gauss_decay,
    geo_distance,
    lin_decay,
    ln,
    log10,
    mult,
    neg,
    pow_,
    sqrt,
    sum_,
)
from qdrant_sdk.conversions.points import (
    PointIdLike,
    SelectorLike,
    ShardKeyLike,
    exclude_payload,
    point_id,
    point_ids,
    points_selector,
    read_consistency,
    shard_key,
    shard_key_selector,
    with_payload,
    with_vectors,
    write_ordering,
)
from qdrant_sdk.conversions.query import (
    context_input,
    context_pair,
    discover_input,
    order_by,
    order_by_query,
    prefetch,
    query,
    recommend_input,
    start_from,
)
from qdrant_sdk.conversions.values import from_payload, from_value, to_payload, to_struct, to_value
from qdrant_sdk.conversions.vectors import (
    VectorLike,
    get_dense_vector,
    get_multi_vector,
    get_sparse_vector,
    point_struct,
    point_vectors,
    sparse_indices,
    sparse_vector_config,
    vector,
    vector_input,
    vectors,
)

__all__ = [
    "ExpressionLike",
    "PointIdLike",
    "SelectorLike",
    "ShardKeyLike",
    "VectorLike",
    "abs_",
    "and_conditions",
    "and_filters",
    "context_input",
    "context_pair",
    "datetime_expression",
    "datetime_key",
    "datetime_range",
    "discover_input",
    "div",
    "exclude_payload",
    "exp",
    "exp_decay",
    "expression",
    "field_type",
    "filter_condition",
    "formula",
    "from_payload",
    "from_value",
    "gauss_decay",
    "geo_bounding_box",
    "geo_distance",
    "geo_line_string",
    "geo_polygon",
    "geo_radius",
    "get_dense_vector",
    "get_multi_vector",
    "get_sparse_vector",
    "has_id",
    "has_vector",
    "is_empty",
    "is_null",
    "lin_decay",
    "ln",
    "log10",
    "match",
    "match_except",
    "match_keyword",
    "match_phrase",
    "match_text",
    "mult",
    "nested",
    "neg",
    "not_condition",
    "or_conditions",
    "or_filters",
    "order_by",
    "order_by_query",
    "point_id",
    "point_ids",
    "point_struct",
    "point_vectors",
    "points_selector",
    "pow_",
    "prefetch",
    "query",
    "range_condition",
    "read_consistency",
    "recommend_input",
    "shard_key",
    "shard_key_selector",
    "sparse_indices",
    "sparse_vector_config",
    "sqrt",
    "start_from",
    "sum_",
    "to_filter",
    "to_payload",
    "to_struct",
    "to_value",
    "values_count",
    "vector",
    "vector_input",
    "vector_params",
    "vectors",
    "vectors_config",
    "vectors_config_diff",
    "with_payload",
    "with_vectors",
    "write_ordering",
]
