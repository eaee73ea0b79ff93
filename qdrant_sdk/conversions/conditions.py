"""Filter conditions and the combinators that compose them.

Conditions are plain ``Condition`` messages; combine them with
``and_conditions``, ``or_conditions`` and ``not_condition``, and whole filters
with ``and_filters`` and ``or_filters``. None of the combinators mutate their
arguments.

Example:
    >>> city = match_keyword("city", "London")
    >>> cheap = range_condition("price", lte=100)
    >>> flt = to_filter(and_conditions(city, not_condition(cheap)))
"""

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import TypeAlias

from google.protobuf.timestamp_pb2 import Timestamp
from qdrant_client import grpc as qdrant_grpc

from qdrant_sdk.conversions.points import PointIdLike, point_ids

GeoLineLike: TypeAlias = qdrant_grpc.GeoLineString | Sequence[tuple[float, float]]
TimestampLike: TypeAlias = datetime | Timestamp


def _field(key: str, **kwargs: object) -> qdrant_grpc.Condition:
    return qdrant_grpc.Condition(field=qdrant_grpc.FieldCondition(key=key, **kwargs))


def _bounds(**bounds: object) -> dict[str, object]:
    return {name: value for name, value in bounds.items() if value is not None}


def _timestamp(value: TimestampLike | None) -> Timestamp | None:
    if value is None or isinstance(value, Timestamp):
        return value
    ts = Timestamp()
    ts.FromDatetime(value)
    return ts


def _is_filter(condition: qdrant_grpc.Condition) -> bool:
    return condition.WhichOneof("condition_one_of") == "filter"


# ========== Builders ==========


def has_id(ids: PointIdLike | Iterable[PointIdLike]) -> qdrant_grpc.Condition:
    """Match points whose id is one of ``ids`` (a single id is accepted)."""
    if isinstance(ids, int | str) or not isinstance(ids, Iterable):
        ids = [ids]
    return qdrant_grpc.Condition(has_id=qdrant_grpc.HasIdCondition(has_id=point_ids(ids)))


def is_empty(key: str) -> qdrant_grpc.Condition:
    """Match points where the payload field is missing, null or an empty list."""
    return qdrant_grpc.Condition(is_empty=qdrant_grpc.IsEmptyCondition(key=key))


def is_null(key: str) -> qdrant_grpc.Condition:
    """Match points where the payload field is explicitly null."""
    return qdrant_grpc.Condition(is_null=qdrant_grpc.IsNullCondition(key=key))


def has_vector(name: str) -> qdrant_grpc.Condition:
    """Match points that carry the named vector."""
    return qdrant_grpc.Condition(has_vector=qdrant_grpc.HasVectorCondition(has_vector=name))


def match_keyword(key: str, keyword: str) -> qdrant_grpc.Condition:
    return _field(key, match=qdrant_grpc.Match(keyword=keyword))


def match_text(key: str, text: str) -> qdrant_grpc.Condition:
    """Full-text match; requires a text index on the field."""
    return _field(key, match=qdrant_grpc.Match(text=text))


def match_phrase(key: str, phrase: str) -> qdrant_grpc.Condition:
    return _field(key, match=qdrant_grpc.Match(phrase=phrase))


def match(key: str, value: bool | int | str | Sequence[str] | Sequence[int]) -> qdrant_grpc.Condition:
    """Exact match on a payload field.

    A bool, int or str matches that single value; a list of strings or of ints
    matches any of its members.

    Raises:
        ValueError: If a list is empty, so its element type cannot be inferred.
        TypeError: For any other value type.
    """
    if isinstance(value, bool):
        return _field(key, match=qdrant_grpc.Match(boolean=value))
    if isinstance(value, int):
        return _field(key, match=qdrant_grpc.Match(integer=value))
    if isinstance(value, str):
        return match_keyword(key, value)
    values = list(value)
    if not values:
        raise ValueError(f"Cannot infer match type for field '{key}' from an empty list")
    if all(isinstance(v, str) for v in values):
        return _field(key, match=qdrant_grpc.Match(keywords=qdrant_grpc.RepeatedStrings(strings=values)))
    if all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        return _field(key, match=qdrant_grpc.Match(integers=qdrant_grpc.RepeatedIntegers(integers=values)))
    raise TypeError(f"Match values for field '{key}' must be all strings or all integers")


def match_except(key: str, values: Sequence[str] | Sequence[int]) -> qdrant_grpc.Condition:
    """Match points whose field value is none of ``values``."""
    values = list(values)
    if not values:
        raise ValueError(f"Cannot infer match type for field '{key}' from an empty list")
    if all(isinstance(v, str) for v in values):
        return _field(
            key, match=qdrant_grpc.Match(except_keywords=qdrant_grpc.RepeatedStrings(strings=values))
        )
    if all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        return _field(
            key, match=qdrant_grpc.Match(except_integers=qdrant_grpc.RepeatedIntegers(integers=values))
        )
    raise TypeError(f"Match values for field '{key}' must be all strings or all integers")


def nested(key: str, condition: qdrant_grpc.Condition | qdrant_grpc.Filter) -> qdrant_grpc.Condition:
    """Apply a condition (or filter) to each element of an array of objects."""
    if isinstance(condition, qdrant_grpc.Condition):
        condition = qdrant_grpc.Filter(must=[condition])
    return qdrant_grpc.Condition(nested=qdrant_grpc.NestedCondition(key=key, filter=condition))


def range_condition(
    key: str,
    *,
    lt: float | None = None,
    gt: float | None = None,
    gte: float | None = None,
    lte: float | None = None,
) -> qdrant_grpc.Condition:
    """Numeric range condition; unset bounds are open."""
    return _field(key, range=qdrant_grpc.Range(**_bounds(lt=lt, gt=gt, gte=gte, lte=lte)))


# Short name matching the condition's field; not exported by ``import *``.
range = range_condition  # noqa: A001


def datetime_range(
    key: str,
    *,
    lt: TimestampLike | None = None,
    gt: TimestampLike | None = None,
    gte: TimestampLike | None = None,
    lte: TimestampLike | None = None,
) -> qdrant_grpc.Condition:
    """Datetime range condition over an RFC 3339 payload field."""
    bounds = _bounds(lt=_timestamp(lt), gt=_timestamp(gt), gte=_timestamp(gte), lte=_timestamp(lte))
    return _field(key, datetime_range=qdrant_grpc.DatetimeRange(**bounds))


def geo_radius(key: str, latitude: float, longitude: float, radius: float) -> qdrant_grpc.Condition:
    """Match geo points within ``radius`` meters of the centre."""
    return _field(
        key,
        geo_radius=qdrant_grpc.GeoRadius(
            center=qdrant_grpc.GeoPoint(lat=latitude, lon=longitude), radius=radius
        ),
    )


def geo_bounding_box(
    key: str,
    top_left_latitude: float,
    top_left_longitude: float,
    bottom_right_latitude: float,
    bottom_right_longitude: float,
) -> qdrant_grpc.Condition:
    return _field(
        key,
        geo_bounding_box=qdrant_grpc.GeoBoundingBox(
            top_left=qdrant_grpc.GeoPoint(lat=top_left_latitude, lon=top_left_longitude),
            bottom_right=qdrant_grpc.GeoPoint(lat=bottom_right_latitude, lon=bottom_right_longitude),
        ),
    )


def geo_line_string(points: GeoLineLike) -> qdrant_grpc.GeoLineString:
    """Build a ``GeoLineString`` from ``(latitude, longitude)`` pairs."""
    if isinstance(points, qdrant_grpc.GeoLineString):
        return points
    return qdrant_grpc.GeoLineString(
        points=[qdrant_grpc.GeoPoint(lat=lat, lon=lon) for lat, lon in points]
    )


def geo_polygon(
    key: str,
    exterior: GeoLineLike,
    interiors: Iterable[GeoLineLike] | None = None,
) -> qdrant_grpc.Condition:
    """Match geo points inside a polygon, excluding any interior rings."""
    polygon = qdrant_grpc.GeoPolygon(exterior=geo_line_string(exterior))
    if interiors is not None:
        polygon.interiors.extend(geo_line_string(ring) for ring in interiors)
    return _field(key, geo_polygon=polygon)


def values_count(
    key: str,
    *,
    lt: int | None = None,
    gt: int | None = None,
    gte: int | None = None,
    lte: int | None = None,
) -> qdrant_grpc.Condition:
    """Condition on the number of values stored in a payload field."""
    return _field(key, values_count=qdrant_grpc.ValuesCount(**_bounds(lt=lt, gt=gt, gte=gte, lte=lte)))


def filter_condition(flt: qdrant_grpc.Filter) -> qdrant_grpc.Condition:
    """Wrap a whole filter as a condition."""
    return qdrant_grpc.Condition(filter=flt)


# ========== Combinators ==========


def to_filter(condition: qdrant_grpc.Condition | qdrant_grpc.Filter) -> qdrant_grpc.Filter:
    """Turn a condition into a filter, unwrapping filter-conditions."""
    if isinstance(condition, qdrant_grpc.Filter):
        return condition
    if _is_filter(condition):
        return condition.filter
    return qdrant_grpc.Filter(must=[condition])


def and_conditions(left: qdrant_grpc.Condition, right: qdrant_grpc.Condition) -> qdrant_grpc.Condition:
    """Both conditions must hold.

    A filter-condition without ``should`` clauses absorbs the other side into a
    copy of its ``must`` list, which keeps chained conjunctions flat.
    """
    left_is_filter = _is_filter(left)
    right_is_filter = _is_filter(right)

    if left_is_filter and right_is_filter:
        return filter_condition(and_filters(left.filter, right.filter))

    if left_is_filter and len(left.filter.should) == 0:
        combined = qdrant_grpc.Condition()
        combined.CopyFrom(left)
        combined.filter.must.append(right)
        return combined

    if right_is_filter and len(right.filter.should) == 0:
        combined = qdrant_grpc.Condition()
        combined.CopyFrom(right)
        combined.filter.must.append(left)
        return combined

    return filter_condition(qdrant_grpc.Filter(must=[left, right]))


def or_conditions(left: qdrant_grpc.Condition, right: qdrant_grpc.Condition) -> qdrant_grpc.Condition:
    """At least one of the conditions must hold."""
    return filter_condition(qdrant_grpc.Filter(should=[left, right]))


def not_condition(condition: qdrant_grpc.Condition) -> qdrant_grpc.Condition:
    """Negate a condition.

    A filter holding only ``must`` clauses flips them to ``must_not`` (and the
    reverse); anything else is wrapped in ``must_not``.
    """
    if _is_filter(condition):
        flt = condition.filter
        if len(flt.should) == 0 and len(flt.must_not) == 0:
            return filter_condition(qdrant_grpc.Filter(must_not=list(flt.must)))
        if len(flt.should) == 0 and len(flt.must) == 0:
            return filter_condition(qdrant_grpc.Filter(must=list(flt.must_not)))
    return filter_condition(qdrant_grpc.Filter(must_not=[condition]))


def and_filters(left: qdrant_grpc.Filter, right: qdrant_grpc.Filter) -> qdrant_grpc.Filter:
    """Both filters must match."""
    if len(left.should) == 0 and len(right.should) == 0:
        return qdrant_grpc.Filter(
            must=[*left.must, *right.must],
            must_not=[*left.must_not, *right.must_not],
        )
    return qdrant_grpc.Filter(must=[filter_condition(left), filter_condition(right)])


def or_filters(left: qdrant_grpc.Filter, right: qdrant_grpc.Filter) -> qdrant_grpc.Filter:
    """Either filter must match."""
    return qdrant_grpc.Filter(should=[filter_condition(left), filter_condition(right)])


__all__ = [
    "and_conditions",
    "and_filters",
    "datetime_range",
    "filter_condition",
    "geo_bounding_box",
    "geo_line_string",
    "geo_polygon",
    "geo_radius",
    "has_id",
    "has_vector",
    "is_empty",
    "is_null",
    "match",
    "match_except",
    "match_keyword",
    "match_phrase",
    "match_text",
    "nested",
    "not_condition",
    "or_conditions",
    "or_filters",
    "range_condition",
    "to_filter",
    "values_count",
]
