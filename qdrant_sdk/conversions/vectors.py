"""Vector conversions.

Shapes accepted wherever a vector is expected:

- ``[0.1, 0.2, ...]``                    dense vector
- ``([0.5, 0.7], [3, 10])``              sparse vector as (values, indices)
- ``[(0.5, 3), (0.7, 10)]``              sparse vector as (value, index) tuples
- ``[[0.1, 0.2], [0.3, 0.4]]``           multi-dense vector (rows are lists)
- ``Document`` / ``Image`` / ``InferenceObject`` messages for server-side inference

Anything exposing ``tolist()`` (numpy arrays) is converted first.
"""

import uuid
from collections.abc import Iterable, Mapping, Sequence
from numbers import Integral, Real
from typing import Any, TypeAlias

from qdrant_client import grpc as qdrant_grpc

from qdrant_sdk.conversions.points import PointIdLike, point_id
from qdrant_sdk.conversions.values import to_payload

VectorLike: TypeAlias = Any


def _as_list(value: Any) -> Any:
    if hasattr(value, "tolist"):
        return value.tolist()
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _dense(values: Iterable[float]) -> qdrant_grpc.DenseVector:
    return qdrant_grpc.DenseVector(data=[float(v) for v in values])


def _sparse(values: Sequence[float], indices: Sequence[int]) -> qdrant_grpc.SparseVector:
    if len(values) != len(indices):
        raise ValueError(
            f"Sparse vector values and indices differ in length: {len(values)} != {len(indices)}"
        )
    for index in indices:
        if not isinstance(index, Integral) or isinstance(index, bool):
            raise TypeError(f"Sparse vector indices must be integers, got {index!r}")
    return qdrant_grpc.SparseVector(
        values=[float(v) for v in values], indices=[int(i) for i in indices]
    )


def _classify(value: Any) -> tuple[str, Any]:
    """Return the oneof field name and message for a vector-like value."""
    if isinstance(value, qdrant_grpc.Document):
        return "document", value
    if isinstance(value, qdrant_grpc.Image):
        return "image", value
    if isinstance(value, qdrant_grpc.InferenceObject):
        return "object", value
    if isinstance(value, qdrant_grpc.DenseVector):
        return "dense", value
    if isinstance(value, qdrant_grpc.SparseVector):
        return "sparse", value
    if isinstance(value, qdrant_grpc.MultiDenseVector):
        return "multi_dense", value

    value = _as_list(value)
    if isinstance(value, tuple) and len(value) == 2 and not _is_number(value[0]):
        values, indices = (_as_list(part) for part in value)
        return "sparse", _sparse(values, indices)
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        if not value or _is_number(value[0]):
            return "dense", _dense(value)
        first = value[0]
        if isinstance(first, tuple):
            return "sparse", _sparse([v for v, _ in value], [i for _, i in value])
        return "multi_dense", qdrant_grpc.MultiDenseVector(
            vectors=[_dense(_as_list(row)) for row in value]
        )
    raise TypeError(f"Unsupported vector type: {type(value).__name__}")


def vector(value: VectorLike) -> qdrant_grpc.Vector:
    """Convert a vector-like value into a ``Vector`` message.

    Example:
        >>> vector([0.1, 0.2]).WhichOneof("vector")
        'dense'
        >>> vector(([0.5], [7])).WhichOneof("vector")
        'sparse'
    """
    if isinstance(value, qdrant_grpc.Vector):
        return value
    field, message = _classify(value)
    return qdrant_grpc.Vector(**{field: message})


def vectors(value: VectorLike | Mapping[str, VectorLike] | tuple[str, VectorLike]) -> qdrant_grpc.Vectors:
    """Convert the vectors of one point into a ``Vectors`` message.

    A mapping (or a single ``(name, vector)`` tuple) produces named vectors; any
    other vector-like value produces the collection's unnamed default vector.
    """
    if isinstance(value, qdrant_grpc.Vectors):
        return value
    if isinstance(value, Mapping):
        return qdrant_grpc.Vectors(
            vectors=qdrant_grpc.NamedVectors(
                vectors={name: vector(item) for name, item in value.items()}
            )
        )
    if isinstance(value, tuple) and len(value) == 2 and isinstance(value[0], str):
        name, item = value
        return qdrant_grpc.Vectors(
            vectors=qdrant_grpc.NamedVectors(vectors={name: vector(item)})
        )
    return qdrant_grpc.Vectors(vector=vector(value))


def vector_input(value: VectorLike | PointIdLike) -> qdrant_grpc.VectorInput:
    """Convert a vector-like value or a point id into a ``VectorInput`` for queries.

    Strings are point ids and must be valid UUIDs.
    """
    if isinstance(value, qdrant_grpc.VectorInput):
        return value
    if isinstance(value, int | str | uuid.UUID | qdrant_grpc.PointId) and not isinstance(value, bool):
        return qdrant_grpc.VectorInput(id=point_id(value))
    if isinstance(value, qdrant_grpc.Vector):
        field = value.WhichOneof("vector")
        if field is None:
            raise ValueError("Vector has no variant set")
        return qdrant_grpc.VectorInput(**{field: getattr(value, field)})
    field, message = _classify(value)
    return qdrant_grpc.VectorInput(**{field: message})


def sparse_indices(indices: Sequence[int] | qdrant_grpc.SparseIndices) -> qdrant_grpc.SparseIndices:
    """Wrap integer indices into ``SparseIndices``."""
    if isinstance(indices, qdrant_grpc.SparseIndices):
        return indices
    return qdrant_grpc.SparseIndices(data=[int(i) for i in _as_list(indices)])


def sparse_vector_config(
    configs: Mapping[str, qdrant_grpc.SparseVectorParams]
    | Iterable[tuple[str, qdrant_grpc.SparseVectorParams]]
    | qdrant_grpc.SparseVectorConfig,
) -> qdrant_grpc.SparseVectorConfig:
    """Build a ``SparseVectorConfig`` from name -> params pairs."""
    if isinstance(configs, qdrant_grpc.SparseVectorConfig):
        return configs
    return qdrant_grpc.SparseVectorConfig(map=dict(configs))


def point_struct(
    id: PointIdLike,  # noqa: A002
    vector: Any = None,
    payload: Mapping[str, Any] | None = None,
) -> qdrant_grpc.PointStruct:
    """Build a ``PointStruct`` for upserts.

    Example:
        >>> point_struct(1, [0.05, 0.61], {"city": "Berlin"})
    """
    fields: dict[str, Any] = {"id": point_id(id)}
    if vector is not None:
        fields["vectors"] = vectors(vector)
    if payload is not None:
        fields["payload"] = to_payload(payload)
    return qdrant_grpc.PointStruct(**fields)


def point_vectors(id: PointIdLike, vector: Any) -> qdrant_grpc.PointVectors:  # noqa: A002
    """Vectors to set on an existing point."""
    return qdrant_grpc.PointVectors(id=point_id(id), vectors=vectors(vector))


# ========== Readers ==========
# Servers before the oneof layout return a flat ``data`` list, with ``indices``
# for sparse vectors and ``vectors_count`` for multi-vectors.


def get_dense_vector(output: Any) -> qdrant_grpc.DenseVector | None:
    """Read a dense vector from a ``VectorOutput`` (or ``Vector``) message."""
    if len(output.data) > 0:
        return qdrant_grpc.DenseVector(data=list(output.data))
    if output.WhichOneof("vector") == "dense":
        return output.dense
    return None


def get_sparse_vector(output: Any) -> qdrant_grpc.SparseVector | None:
    """Read a sparse vector from a ``VectorOutput`` (or ``Vector``) message."""
    if len(output.data) > 0:
        if not output.HasField("indices"):
            return None
        return qdrant_grpc.SparseVector(
            values=list(output.data), indices=list(output.indices.data)
        )
    if output.WhichOneof("vector") == "sparse":
        return output.sparse
    return None


def get_multi_vector(output: Any) -> qdrant_grpc.MultiDenseVector | None:
    """Read a multi-dense vector from a ``VectorOutput`` (or ``Vector``) message."""
    if len(output.data) > 0:
        vectors_count = output.vectors_count
        if vectors_count == 0:
            return None
        data = list(output.data)
        size = len(data) // vectors_count
        return qdrant_grpc.MultiDenseVector(
            vectors=[
                qdrant_grpc.DenseVector(data=data[i * size : (i + 1) * size])
                for i in range(vectors_count)
            ]
        )
    if output.WhichOneof("vector") == "multi_dense":
        return output.multi_dense
    return None


__all__ = [
    "VectorLike",
    "get_dense_vector",
    "get_multi_vector",
    "get_sparse_vector",
    "point_struct",
    "point_vectors",
    "sparse_indices",
    "sparse_vector_config",
    "vector",
    "vector_input",
    "vectors",
]
