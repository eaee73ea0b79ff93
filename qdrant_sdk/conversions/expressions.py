"""Score-boosting formula expressions.

A formula rescores prefetched points with an arithmetic expression over the
prefetch score, payload values and conditions::

    >>> boosted = formula(
    ...     sum_("$score", mult(0.5, match("tag", "featured"))),
    ...     defaults={"tag": None},
    ... )

``expression`` converts the building blocks: numbers become constants, strings
are variables (a payload key, or ``$score`` / ``$score[i]`` for prefetch
scores), conditions evaluate to 1.0 or 0.0. Helpers whose names would shadow a
builtin carry a trailing underscore.
"""

from collections.abc import Mapping
from datetime import datetime
from numbers import Real
from typing import Any, TypeAlias

from qdrant_client import grpc as qdrant_grpc

from qdrant_sdk.conversions.values import to_payload

ExpressionLike: TypeAlias = (
    float
    | str
    | qdrant_grpc.Expression
    | qdrant_grpc.Condition
    | qdrant_grpc.GeoDistance
    | qdrant_grpc.MultExpression
    | qdrant_grpc.SumExpression
    | qdrant_grpc.DivExpression
    | qdrant_grpc.PowExpression
)

_EXPRESSION_VARIANTS: dict[type, str] = {
    qdrant_grpc.Condition: "condition",
    qdrant_grpc.GeoDistance: "geo_distance",
    qdrant_grpc.MultExpression: "mult",
    qdrant_grpc.SumExpression: "sum",
    qdrant_grpc.DivExpression: "div",
    qdrant_grpc.PowExpression: "pow",
}


def expression(value: ExpressionLike) -> qdrant_grpc.Expression:
    """Convert a number, variable name or sub-expression message into an ``Expression``.

    Raises:
        TypeError: For bools and unsupported types.
    """
    if isinstance(value, qdrant_grpc.Expression):
        return value
    if isinstance(value, bool):
        raise TypeError("Expression constant cannot be a bool; use a condition instead")
    if isinstance(value, Real):
        return qdrant_grpc.Expression(constant=float(value))
    if isinstance(value, str):
        return qdrant_grpc.Expression(variable=value)
    variant = _EXPRESSION_VARIANTS.get(type(value))
    if variant is None:
        raise TypeError(f"Unsupported expression type: {type(value).__name__}")
    return qdrant_grpc.Expression(**{variant: value})


def datetime_expression(value: str | datetime) -> qdrant_grpc.Expression:
    """Constant date-time; ``datetime`` objects are rendered as ISO 8601."""
    if isinstance(value, datetime):
        value = value.isoformat()
    return qdrant_grpc.Expression(datetime=value)


def datetime_key(key: str) -> qdrant_grpc.Expression:
    """Reference a payload key holding date-time values."""
    return qdrant_grpc.Expression(datetime_key=key)


def geo_distance(
    origin: tuple[float, float] | qdrant_grpc.GeoPoint, to: str
) -> qdrant_grpc.Expression:
    """Distance in meters from ``origin`` (``(lat, lon)``) to the geo point stored at ``to``."""
    if not isinstance(origin, qdrant_grpc.GeoPoint):
        lat, lon = origin
        origin = qdrant_grpc.GeoPoint(lat=lat, lon=lon)
    return qdrant_grpc.Expression(geo_distance=qdrant_grpc.GeoDistance(origin=origin, to=to))


def mult(*values: ExpressionLike) -> qdrant_grpc.Expression:
    return qdrant_grpc.Expression(
        mult=qdrant_grpc.MultExpression(mult=[expression(v) for v in values])
    )


def sum_(*values: ExpressionLike) -> qdrant_grpc.Expression:
    return qdrant_grpc.Expression(
        sum=qdrant_grpc.SumExpression(sum=[expression(v) for v in values])
    )


def div(
    left: ExpressionLike, right: ExpressionLike, by_zero_default: float | None = None
) -> qdrant_grpc.Expression:
    """``left / right``; ``by_zero_default`` replaces the result when ``right`` is zero."""
    message = qdrant_grpc.DivExpression(left=expression(left), right=expression(right))
    if by_zero_default is not None:
        message.by_zero_default = by_zero_default
    return qdrant_grpc.Expression(div=message)


def pow_(base: ExpressionLike, exponent: ExpressionLike) -> qdrant_grpc.Expression:
    return qdrant_grpc.Expression(
        pow=qdrant_grpc.PowExpression(base=expression(base), exponent=expression(exponent))
    )


def neg(value: ExpressionLike) -> qdrant_grpc.Expression:
    return qdrant_grpc.Expression(neg=expression(value))


def abs_(value: ExpressionLike) -> qdrant_grpc.Expression:
    return qdrant_grpc.Expression(abs=expression(value))


def sqrt(value: ExpressionLike) -> qdrant_grpc.Expression:
    return qdrant_grpc.Expression(sqrt=expression(value))


def exp(value: ExpressionLike) -> qdrant_grpc.Expression:
    return qdrant_grpc.Expression(exp=expression(value))


def log10(value: ExpressionLike) -> qdrant_grpc.Expression:
    return qdrant_grpc.Expression(log10=expression(value))


def ln(value: ExpressionLike) -> qdrant_grpc.Expression:
    return qdrant_grpc.Expression(ln=expression(value))


def _decay(
    x: ExpressionLike | qdrant_grpc.DecayParamsExpression,
    target: ExpressionLike | None,
    scale: float | None,
    midpoint: float | None,
) -> qdrant_grpc.DecayParamsExpression:
    if isinstance(x, qdrant_grpc.DecayParamsExpression):
        return x
    message = qdrant_grpc.DecayParamsExpression(x=expression(x))
    if target is not None:
        message.target.CopyFrom(expression(target))
    if scale is not None:
        message.scale = scale
    if midpoint is not None:
        message.midpoint = midpoint
    return message


def exp_decay(
    x: ExpressionLike | qdrant_grpc.DecayParamsExpression,
    *,
    target: ExpressionLike | None = None,
    scale: float | None = None,
    midpoint: float | None = None,
) -> qdrant_grpc.Expression:
    """Exponential decay of ``x`` around ``target``.

    ``scale`` is the distance from ``target`` at which the result drops to
    ``midpoint``. Unset parameters take the server defaults.
    """
    return qdrant_grpc.Expression(exp_decay=_decay(x, target, scale, midpoint))


def gauss_decay(
    x: ExpressionLike | qdrant_grpc.DecayParamsExpression,
    *,
    target: ExpressionLike | None = None,
    scale: float | None = None,
    midpoint: float | None = None,
) -> qdrant_grpc.Expression:
    """Gaussian decay of ``x``; parameters as for ``exp_decay``."""
    return qdrant_grpc.Expression(gauss_decay=_decay(x, target, scale, midpoint))


def lin_decay(
    x: ExpressionLike | qdrant_grpc.DecayParamsExpression,
    *,
    target: ExpressionLike | None = None,
    scale: float | None = None,
    midpoint: float | None = None,
) -> qdrant_grpc.Expression:
    """Linear decay of ``x``; parameters as for ``exp_decay``."""
    return qdrant_grpc.Expression(lin_decay=_decay(x, target, scale, midpoint))


def formula(
    value: ExpressionLike, defaults: Mapping[str, Any] | None = None
) -> qdrant_grpc.Formula:
    """Wrap an expression into a ``Formula`` for ``query``.

    ``defaults`` supplies values for variables missing from a point's payload.
    """
    return qdrant_grpc.Formula(
        expression=expression(value), defaults=to_payload(defaults) if defaults else {}
    )


__all__ = [
    "ExpressionLike",
    "abs_",
    "datetime_expression",
    "datetime_key",
    "div",
    "exp",
    "exp_decay",
    "expression",
    "formula",
    "gauss_decay",
    "geo_distance",
    "lin_decay",
    "ln",
    "log10",
    "mult",
    "neg",
    "pow_",
    "sqrt",
    "sum_",
]
