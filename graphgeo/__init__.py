from .config import GeometryConfig, get_geometry_config, set_geometry_config
from .errors import GraphGeoError, MissingAttributeError, UnsupportedShapeError
from .events import EventSource, Subscription
from .geometry import Box, Coordinates, as_coordinates
from .graph import (
    AttributeChange,
    Edge,
    EdgeShape,
    Graph,
    GraphEvent,
    Node,
    NodeShape,
    StdAttribute,
)
from .layout import (
    LayoutAttributes,
    closest_edge_point,
    do_nodes_overlap,
    edge_box,
    edge_length,
    edge_points,
    glyph_radius_at_angle,
    glyph_to_glyph_distance,
    graph_box,
    node_box,
    node_to_edge_glyph_distance,
    overlapping_node_pairs,
    point_to_edge_glyph_distance,
    point_to_glyph_distance,
)
from .locator import BucketGrid, BucketGridLocator, ElementLocator, LocatorOptions, idx_of

__all__ = [
    'AttributeChange',
    'Box',
    'BucketGrid',
    'BucketGridLocator',
    'Coordinates',
    'Edge',
    'EdgeShape',
    'ElementLocator',
    'EventSource',
    'GeometryConfig',
    'Graph',
    'GraphEvent',
    'GraphGeoError',
    'LayoutAttributes',
    'LocatorOptions',
    'MissingAttributeError',
    'Node',
    'NodeShape',
    'StdAttribute',
    'Subscription',
    'UnsupportedShapeError',
    'as_coordinates',
    'closest_edge_point',
    'do_nodes_overlap',
    'edge_box',
    'edge_length',
    'edge_points',
    'get_geometry_config',
    'glyph_radius_at_angle',
    'glyph_to_glyph_distance',
    'graph_box',
    'idx_of',
    'node_box',
    'node_to_edge_glyph_distance',
    'overlapping_node_pairs',
    'point_to_edge_glyph_distance',
    'point_to_glyph_distance',
    'set_geometry_config',
]
