"""Approximate glyph boundaries and glyph distances.

The distances below use the straight line between the two reference points
as the ray direction. They are exact for circular glyphs and for rays
aligned with the axes, and approximations otherwise.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Optional

from ..errors import UnsupportedShapeError
from ..geometry import (
    Coordinates,
    CoordinatesLike,
    almost_equal,
    angle,
    as_coordinates,
    distance,
    magnitude,
    pos_normalize_radians_angle,
)
from ..graph import Edge, Node, NodeShape
from ..logging_utils import apply_debug_logging
from .attributes import LayoutAttributes, LayoutSource, resolve_layout
from .edges import closest_edge_point

logger = logging.getLogger(__name__)

_HALF_PI = math.pi / 2.0


def _rectangle_radius(half_w: float, half_h: float, angle_in_radians: float) -> float:
    folded = pos_normalize_radians_angle(angle_in_radians)
    if folded > math.pi:
        folded -= math.pi
    if folded > _HALF_PI:
        folded = math.pi - folded
    # Below the diagonal the ray leaves through a vertical side.
    if folded == 0.0 or folded < math.atan2(half_h, half_w):
        x = half_w
        y = half_w * math.tan(folded)
    else:
        x = half_h / math.tan(folded)
        y = half_h
    return math.sqrt(x * x + y * y)


def _ellipse_radius(half_w: float, half_h: float, angle_in_radians: float) -> float:
    x = half_w * math.cos(angle_in_radians)
    y = half_h * math.sin(angle_in_radians)
    return math.sqrt(x * x + y * y)


def glyph_radius_at_angle(shape: Any, size: Optional[CoordinatesLike], angle_in_radians: float) -> float:
    """Distance from the glyph center to its boundary along ``angle_in_radians``.

    ``size`` is the full width and height of the glyph. A missing or zero
    size gives a radius of 0 and a negative one raises ``ValueError``, like
    :meth:`Box.from_center`. Shapes other than rectangle and ellipse raise
    :class:`UnsupportedShapeError`.
    """

    if shape not in (NodeShape.rectangle, NodeShape.ellipse):
        raise UnsupportedShapeError(shape)
    if size is None:
        return 0.0
    size = as_coordinates(size)
    if size.x < 0 or size.y < 0:
        raise ValueError(f"Glyph size must be non-negative, got {size!r}")
    half_w = size.x / 2.0
    half_h = size.y / 2.0
    if half_w == 0.0 and half_h == 0.0:
        return 0.0
    if shape == NodeShape.rectangle:
        return _rectangle_radius(half_w, half_h, angle_in_radians)
    return _ellipse_radius(half_w, half_h, angle_in_radians)


def node_glyph_radius_at_angle(node: Node, angle_in_radians: float, source: LayoutSource) -> float:
    attrs = resolve_layout(source)
    return glyph_radius_at_angle(attrs.node_shape(node), attrs.size(node), angle_in_radians)


def _ray_angle(origin: Coordinates, point: Coordinates) -> float:
    # Coincident points have no direction; fall back to the x axis.
    if almost_equal(origin.restrict(2), point.restrict(2)):
        return 0.0
    return angle(point - origin)


def point_to_glyph_distance(point: CoordinatesLike, node: Node, source: LayoutSource) -> float:
    """Approximate distance between ``point`` and the glyph of ``node``.

    Negative values mean the point lies inside the glyph.
    """

    attrs = resolve_layout(source)
    point = as_coordinates(point)
    center = attrs.position(node)
    ray = _ray_angle(center, point)
    return distance(point, center) - node_glyph_radius_at_angle(node, ray, attrs)


def glyph_to_glyph_distance(a: Node, b: Node, source: LayoutSource) -> float:
    """Approximate distance between the glyphs of two nodes."""

    attrs = resolve_layout(source)
    pos_a = attrs.position(a)
    pos_b = attrs.position(b)
    angle_a = angle_b = 0.0
    if not almost_equal(pos_a.restrict(2), pos_b.restrict(2)):
        angle_a = angle(pos_b - pos_a)
        angle_b = angle_a + math.pi
    return (
        distance(pos_a, pos_b)
        - node_glyph_radius_at_angle(a, angle_a, attrs)
        - node_glyph_radius_at_angle(b, angle_b, attrs)
    )


def point_to_edge_glyph_distance(point: CoordinatesLike, edge: Edge, source: LayoutSource) -> float:
    """Distance between ``point`` and the edge polyline, minus half the edge width."""

    attrs = resolve_layout(source)
    closest = closest_edge_point(point, edge, attrs)
    return distance(point, closest) - attrs.edge_width(edge) / 2.0


def glyph_reference_points(node: Node, source: LayoutSource) -> List[Coordinates]:
    """Box corners for rectangles, axis extrema for ellipses."""

    attrs = resolve_layout(source)
    pos = attrs.position(node)
    size = attrs.size(node)
    half_w = size.x / 2.0
    half_h = size.y / 2.0
    shape = attrs.node_shape(node)
    if shape == NodeShape.rectangle:
        return [
            Coordinates(pos.x + half_w, pos.y + half_h),
            Coordinates(pos.x - half_w, pos.y + half_h),
            Coordinates(pos.x - half_w, pos.y - half_h),
            Coordinates(pos.x + half_w, pos.y - half_h),
        ]
    if shape == NodeShape.ellipse:
        return [
            Coordinates(pos.x + half_w, pos.y),
            Coordinates(pos.x - half_w, pos.y),
            Coordinates(pos.x, pos.y - half_h),
            Coordinates(pos.x, pos.y + half_h),
        ]
    raise UnsupportedShapeError(shape)


def node_to_edge_glyph_distance(node: Node, edge: Edge, source: LayoutSource) -> float:
    """Approximate distance between the glyph of ``node`` and that of ``edge``.

    For each reference point of the node glyph the closest edge point is
    found; the distance from the node center to that edge point, minus the
    glyph radius along the same ray and half the edge width, is minimised.
    """

    attrs: LayoutAttributes = resolve_layout(source)
    center = attrs.position(node)
    half_width = attrs.edge_width(edge) / 2.0
    best = math.inf
    for corner in glyph_reference_points(node, attrs):
        closest = closest_edge_point(corner, edge, attrs)
        ray = _ray_angle(center, closest)
        candidate = magnitude(closest - center) - node_glyph_radius_at_angle(node, ray, attrs)
        best = min(best, candidate - half_width)
    return best


__all__ = [
    "glyph_radius_at_angle",
    "glyph_reference_points",
    "glyph_to_glyph_distance",
    "node_glyph_radius_at_angle",
    "node_to_edge_glyph_distance",
    "point_to_edge_glyph_distance",
    "point_to_glyph_distance",
]


apply_debug_logging(globals(), logger=logger)
