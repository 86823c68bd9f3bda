"""Coordinates, boxes and plane geometry helpers."""

from .box import Box
from .coordinates import Coordinates, CoordinatesLike, as_coordinates
from .geom import (
    EPSILON,
    almost_equal,
    angle,
    angle_diff,
    closest_segment_point,
    degrees_to_radians,
    distance,
    dot_product,
    in_between_point,
    is_point_in_segment,
    magnitude,
    mid_point,
    normalize_radians_angle,
    point_on_line_projection,
    point_to_segment_distance,
    pos_normalize_radians_angle,
    radians_to_degrees,
    unit_vector,
)

__all__ = [
    "Box",
    "Coordinates",
    "CoordinatesLike",
    "EPSILON",
    "almost_equal",
    "angle",
    "angle_diff",
    "as_coordinates",
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
