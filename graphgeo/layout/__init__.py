"""Geometry of a graph drawing: polylines, boxes, glyphs and overlap."""

from .attributes import ElementLookup, LayoutAttributes, LayoutSource, resolve_layout
from .edges import closest_edge_point, edge_box, edge_length, edge_points, graph_box, node_box
from .glyphs import (
    glyph_radius_at_angle,
    glyph_reference_points,
    glyph_to_glyph_distance,
    node_glyph_radius_at_angle,
    node_to_edge_glyph_distance,
    point_to_edge_glyph_distance,
    point_to_glyph_distance,
)
from .overlap import do_nodes_overlap, overlapping_node_pairs

__all__ = [
    "ElementLookup",
    "LayoutAttributes",
    "LayoutSource",
    "closest_edge_point",
    "do_nodes_overlap",
    "edge_box",
    "edge_length",
    "edge_points",
    "glyph_radius_at_angle",
    "glyph_reference_points",
    "glyph_to_glyph_distance",
    "graph_box",
    "node_box",
    "node_glyph_radius_at_angle",
    "node_to_edge_glyph_distance",
    "overlapping_node_pairs",
    "point_to_edge_glyph_distance",
    "point_to_glyph_distance",
    "resolve_layout",
]
