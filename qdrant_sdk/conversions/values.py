"""Payload value conversions.

Maps native Python values onto the JSON-like ``Value``/``Struct``/``ListValue``
messages used for point payloads, and back again when reading responses.
"""

from collections.abc import Mapping
from typing import Any

from qdrant_client import grpc as qdrant_grpc


def to_value(obj: Any) -> qdrant_grpc.Value:
    """Convert a native value into a payload ``Value``.

    Args:
        obj: None, bool, int, float, str, a mapping, a list/tuple, or a ``Value``.

    Returns:
        qdrant_grpc.Value: The matching variant of the ``kind`` oneof.

    Raises:
        TypeError: If the value (or a nested value) has no payload representation.

    Example:
        >>> to_value({"city": "Berlin", "tags": ["a", "b"]}).WhichOneof("kind")
        'struct_value'
    """
    if isinstance(obj, qdrant_grpc.Value):
        return obj
    if obj is None:
        return qdrant_grpc.Value(null_value=qdrant_grpc.NullValue.NULL_VALUE)
    # bool is a subclass of int
    if isinstance(obj, bool):
        return qdrant_grpc.Value(bool_value=obj)
    if isinstance(obj, int):
        return qdrant_grpc.Value(integer_value=obj)
    if isinstance(obj, float):
        return qdrant_grpc.Value(double_value=obj)
    if isinstance(obj, str):
        return qdrant_grpc.Value(string_value=obj)
    if isinstance(obj, Mapping):
        return qdrant_grpc.Value(struct_value=to_struct(obj))
    if isinstance(obj, list | tuple):
        return qdrant_grpc.Value(
            list_value=qdrant_grpc.ListValue(values=[to_value(item) for item in obj])
        )
    raise TypeError(f"Unsupported payload value type: {type(obj).__name__}")


def to_struct(mapping: Mapping[str, Any]) -> qdrant_grpc.Struct:
    """Convert a mapping into a ``Struct`` message."""
    return qdrant_grpc.Struct(fields=to_payload(mapping))


def to_payload(mapping: Mapping[str, Any]) -> dict[str, qdrant_grpc.Value]:
    """Convert a mapping into the ``map<string, Value>`` used by payload requests."""
    payload: dict[str, qdrant_grpc.Value] = {}
    for key, value in mapping.items():
        if not isinstance(key, str):
            raise TypeError(f"Payload keys must be strings, got {type(key).__name__}")
        payload[key] = to_value(value)
    return payload


def from_value(value: qdrant_grpc.Value) -> Any:
    """Convert a payload ``Value`` back into a native Python value."""
    kind = value.WhichOneof("kind")
    if kind is None or kind == "null_value":
        return None
    if kind == "struct_value":
        return from_payload(value.struct_value.fields)
    if kind == "list_value":
        return [from_value(item) for item in value.list_value.values]
    return getattr(value, kind)


def from_payload(payload: Mapping[str, qdrant_grpc.Value]) -> dict[str, Any]:
    """Convert a payload map from a response into a plain dict."""
    return {key: from_value(value) for key, value in payload.items()}


__all__ = ["from_payload", "from_value", "to_payload", "to_struct", "to_value"]
