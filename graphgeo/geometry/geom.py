"""Vector and angle helpers for the drawing plane.

All functions work on the ``x``/``y`` projection of their inputs. Degenerate
inputs (zero vectors, coincident segment extremities) are rejected with
``ValueError``; callers are expected to guard them with :func:`almost_equal`.
"""

from __future__ import annotations

import math
from typing import Union

from .coordinates import Coordinates, CoordinatesLike, as_coordinates


EPSILON = 1e-4

_TWO_PI = 2.0 * math.pi


def almost_equal(
    a: Union[float, CoordinatesLike],
    b: Union[float, CoordinatesLike],
    tolerance: float = EPSILON,
) -> bool:
    """Return ``True`` when ``a`` and ``b`` differ by at most ``tolerance``.

    Scalars are compared directly. Vectors are compared component-wise and
    never match when their dimensions differ.
    """

    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return abs(float(a) - float(b)) <= tolerance
    va = as_coordinates(a)  # type: ignore[arg-type]
    vb = as_coordinates(b)  # type: ignore[arg-type]
    if va.dim != vb.dim:
        return False
    return all(abs(ca - cb) <= tolerance for ca, cb in zip(va, vb))


def magnitude(vector: CoordinatesLike) -> float:
    v = as_coordinates(vector)
    return math.hypot(v.x, v.y)


def distance(a: CoordinatesLike, b: CoordinatesLike) -> float:
    pa = as_coordinates(a)
    pb = as_coordinates(b)
    return math.hypot(pa.x - pb.x, pa.y - pb.y)


def dot_product(a: CoordinatesLike, b: CoordinatesLike) -> float:
    va = as_coordinates(a)
    vb = as_coordinates(b)
    return va.x * vb.x + va.y * vb.y


def angle(vector: CoordinatesLike) -> float:
    """Signed angle of ``vector`` from the positive x axis, in ``(-pi, pi]``."""

    v = as_coordinates(vector)
    if v.x == 0.0 and v.y == 0.0:
        raise ValueError("The angle of the zero vector is undefined")
    return math.atan2(v.y, v.x)


def pos_normalize_radians_angle(angle_in_radians: float) -> float:
    """Map an angle into ``[0, 2*pi)``."""

    rounds = math.floor(angle_in_radians / _TWO_PI)
    normalized = angle_in_radians - _TWO_PI * rounds
    # Rounding can land exactly on 2*pi for tiny negative inputs.
    if normalized >= _TWO_PI:
        normalized -= _TWO_PI
    return normalized


def normalize_radians_angle(angle_in_radians: float) -> float:
    """Map an angle into ``[-pi, pi)``."""

    normalized = pos_normalize_radians_angle(angle_in_radians)
    if normalized >= math.pi:
        normalized -= _TWO_PI
    return normalized


def angle_diff(first: float, second: float) -> float:
    return abs(normalize_radians_angle(first - second))


def radians_to_degrees(radians: float) -> float:
    return radians * 180.0 / math.pi


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def unit_vector(angle_in_radians: float) -> Coordinates:
    return Coordinates(math.cos(angle_in_radians), math.sin(angle_in_radians))


def mid_point(a: CoordinatesLike, b: CoordinatesLike) -> Coordinates:
    return (as_coordinates(a) + as_coordinates(b)) / 2.0


def in_between_point(a: CoordinatesLike, b: CoordinatesLike, ratio: float) -> Coordinates:
    pa = as_coordinates(a)
    return pa + (as_coordinates(b) - pa) * ratio


def _segment_parameter(point: Coordinates, a: Coordinates, b: Coordinates) -> float:
    dx = b.x - a.x
    dy = b.y - a.y
    length_sq = dx * dx + dy * dy
    return ((point.x - a.x) * dx + (point.y - a.y) * dy) / length_sq


def _check_distinct(a: Coordinates, b: Coordinates) -> None:
    if almost_equal(a.restrict(2), b.restrict(2)):
        raise ValueError("The segment is not defined as its extremities coincide")


def point_on_line_projection(
    point: CoordinatesLike, line_a: CoordinatesLike, line_b: CoordinatesLike
) -> Coordinates:
    """Orthogonal projection of ``point`` on the line through ``line_a`` and ``line_b``."""

    p = as_coordinates(point)
    a = as_coordinates(line_a)
    b = as_coordinates(line_b)
    _check_distinct(a, b)
    t = _segment_parameter(p, a, b)
    return Coordinates(a.x + t * (b.x - a.x), a.y + t * (b.y - a.y))


def closest_segment_point(
    point: CoordinatesLike, segment_a: CoordinatesLike, segment_b: CoordinatesLike
) -> Coordinates:
    """Point of segment ``[segment_a, segment_b]`` closest to ``point``.

    This is the orthogonal projection clamped to the segment extremities.
    Raises ``ValueError`` when the extremities coincide.
    """

    p = as_coordinates(point)
    a = as_coordinates(segment_a)
    b = as_coordinates(segment_b)
    _check_distinct(a, b)
    t = min(1.0, max(0.0, _segment_parameter(p, a, b)))
    return Coordinates(a.x + t * (b.x - a.x), a.y + t * (b.y - a.y))


def point_to_segment_distance(
    point: CoordinatesLike, segment_a: CoordinatesLike, segment_b: CoordinatesLike
) -> float:
    a = as_coordinates(segment_a)
    b = as_coordinates(segment_b)
    if almost_equal(a.restrict(2), b.restrict(2)):
        return distance(point, a)
    return distance(point, closest_segment_point(point, a, b))


def is_point_in_segment(
    point: CoordinatesLike, segment_a: CoordinatesLike, segment_b: CoordinatesLike
) -> bool:
    p = as_coordinates(point).restrict(2)
    a = as_coordinates(segment_a).restrict(2)
    b = as_coordinates(segment_b).restrict(2)
    if almost_equal(a, b):
        return almost_equal(p, a)
    return almost_equal(point_to_segment_distance(p, a, b), 0.0)


__all__ = [
    "EPSILON",
    "almost_equal",
    "angle",
    "angle_diff",
    "closest_segment_point",
    "degrees_to_radians",
    "distance",
    "dot_product",
    "in_between_point",
    "is_point_in_segment",
    "magnitude",
    "mid_point",
    "normalize_radians_angle",
    "point_on_line_projection",
    "point_to_segment_distance",
    "pos_normalize_radians_angle",
    "radians_to_degrees",
    "unit_vector",
]
