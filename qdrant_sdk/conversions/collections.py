"""Collection configuration conversions."""

from collections.abc import Mapping
from typing import Any

from qdrant_client import grpc as qdrant_grpc

_FIELD_TYPES: dict[str, int] = {
    "keyword": qdrant_grpc.FieldType.FieldTypeKeyword,
    "integer": qdrant_grpc.FieldType.FieldTypeInteger,
    "float": qdrant_grpc.FieldType.FieldTypeFloat,
    "bool": qdrant_grpc.FieldType.FieldTypeBool,
    "geo": qdrant_grpc.FieldType.FieldTypeGeo,
    "text": qdrant_grpc.FieldType.FieldTypeText,
    "datetime": qdrant_grpc.FieldType.FieldTypeDatetime,
    "uuid": qdrant_grpc.FieldType.FieldTypeUuid,
}

_SCHEMA_NAMES: dict[int, str] = {
    qdrant_grpc.PayloadSchemaType.Keyword: "keyword",
    qdrant_grpc.PayloadSchemaType.Integer: "integer",
    qdrant_grpc.PayloadSchemaType.Float: "float",
    qdrant_grpc.PayloadSchemaType.Bool: "bool",
    qdrant_grpc.PayloadSchemaType.Geo: "geo",
    qdrant_grpc.PayloadSchemaType.Text: "text",
    qdrant_grpc.PayloadSchemaType.Datetime: "datetime",
    qdrant_grpc.PayloadSchemaType.Uuid: "uuid",
}


def field_type(schema_type: int | str) -> int:
    """Map a ``PayloadSchemaType`` (or its name) onto the index ``FieldType``.

    Raises:
        ValueError: If the schema type has no payload index field type.
    """
    if isinstance(schema_type, str):
        name = schema_type.lower()
    else:
        name = _SCHEMA_NAMES.get(schema_type, "")
    try:
        return _FIELD_TYPES[name]
    except KeyError:
        raise ValueError(f"Invalid payload schema type: {schema_type!r}") from None


def vector_params(
    size: int,
    distance: int = qdrant_grpc.Distance.Cosine,
    **optional: Any,
) -> qdrant_grpc.VectorParams:
    """Build ``VectorParams``; optional fields left as None are not set.

    Example:
        >>> vector_params(384, qdrant_grpc.Distance.Dot, on_disk=True)
    """
    if size <= 0:
        raise ValueError(f"Vector size must be positive, got {size}")
    fields = {name: value for name, value in optional.items() if value is not None}
    return qdrant_grpc.VectorParams(size=size, distance=distance, **fields)


def vectors_config(
    config: qdrant_grpc.VectorParams
    | Mapping[str, qdrant_grpc.VectorParams]
    | qdrant_grpc.VectorParamsMap
    | qdrant_grpc.VectorsConfig,
) -> qdrant_grpc.VectorsConfig:
    """Single unnamed vector params, or a name -> params mapping for named vectors."""
    if isinstance(config, qdrant_grpc.VectorsConfig):
        return config
    if isinstance(config, qdrant_grpc.VectorParams):
        return qdrant_grpc.VectorsConfig(params=config)
    if isinstance(config, qdrant_grpc.VectorParamsMap):
        return qdrant_grpc.VectorsConfig(params_map=config)
    if isinstance(config, Mapping):
        return qdrant_grpc.VectorsConfig(params_map=qdrant_grpc.VectorParamsMap(map=dict(config)))
    raise TypeError(f"Unsupported vectors config type: {type(config).__name__}")


def vectors_config_diff(
    config: qdrant_grpc.VectorParamsDiff
    | Mapping[str, qdrant_grpc.VectorParamsDiff]
    | qdrant_grpc.VectorParamsDiffMap
    | qdrant_grpc.VectorsConfigDiff,
) -> qdrant_grpc.VectorsConfigDiff:
    """Same shapes as ``vectors_config`` for collection updates."""
    if isinstance(config, qdrant_grpc.VectorsConfigDiff):
        return config
    if isinstance(config, qdrant_grpc.VectorParamsDiff):
        return qdrant_grpc.VectorsConfigDiff(params=config)
    if isinstance(config, qdrant_grpc.VectorParamsDiffMap):
        return qdrant_grpc.VectorsConfigDiff(params_map=config)
    if isinstance(config, Mapping):
        return qdrant_grpc.VectorsConfigDiff(
            params_map=qdrant_grpc.VectorParamsDiffMap(map=dict(config))
        )
    raise TypeError(f"Unsupported vectors config diff type: {type(config).__name__}")


__all__ = ["field_type", "vector_params", "vectors_config", "vectors_config_diff"]
