"""Edge polylines and node/edge/graph bounding boxes."""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from ..errors import UnsupportedShapeError
from ..geometry import Box, Coordinates, CoordinatesLike, almost_equal, as_coordinates, closest_segment_point, distance
from ..graph import Edge, EdgeShape, Graph, Node
from ..logging_utils import apply_debug_logging
from .attributes import LayoutAttributes, LayoutSource, resolve_layout

logger = logging.getLogger(__name__)


def edge_points(edge: Edge, source: LayoutSource) -> List[Coordinates]:
    """Polyline vertices: source position, control points, target position."""

    attrs = resolve_layout(source)
    points = [attrs.position(edge.source)]
    points.extend(attrs.control_points(edge))
    points.append(attrs.position(edge.target))
    return points


def _polyline(edge: Edge, attrs: LayoutAttributes) -> List[Coordinates]:
    shape = attrs.edge_shape(edge)
    if shape != EdgeShape.polyline:
        raise UnsupportedShapeError(shape)
    return edge_points(edge, attrs)


def edge_length(edge: Edge, source: LayoutSource) -> float:
    """Length of the edge polyline in the drawing plane."""

    points = _polyline(edge, resolve_layout(source))
    return math.fsum(distance(a, b) for a, b in zip(points, points[1:]))


def closest_edge_point(point: CoordinatesLike, edge: Edge, source: LayoutSource) -> Coordinates:
    """Point of the edge polyline closest to ``point``.

    Zero-length segments are skipped. On ties the segment found first wins.
    When every segment is degenerate the first polyline vertex is returned.
    """

    point = as_coordinates(point)
    points = _polyline(edge, resolve_layout(source))
    best: Optional[Coordinates] = None
    best_distance = math.inf
    for a, b in zip(points, points[1:]):
        if almost_equal(a.restrict(2), b.restrict(2)):
            continue
        candidate = closest_segment_point(point, a, b)
        candidate_distance = distance(candidate, point)
        if candidate_distance < best_distance:
            best = candidate
            best_distance = candidate_distance
    if best is None:
        return points[0].restrict(2)
    return best


def node_box(node: Node, source: LayoutSource) -> Box:
    attrs = resolve_layout(source)
    return Box.from_center(attrs.position(node), attrs.size(node))


def edge_box(edge: Edge, source: LayoutSource) -> Box:
    """Bounding box of the polyline, grown by half the edge width.

    The box ignores the glyphs of the extremity nodes. Edges that are not
    polylines raise :class:`UnsupportedShapeError`.
    """

    attrs = resolve_layout(source)
    return Box.bounding_box(_polyline(edge, attrs), attrs.edge_width(edge) / 2.0)


def graph_box(graph: Graph, source: Optional[LayoutSource] = None) -> Optional[Box]:
    """Union of every node and edge box; ``None`` for an empty graph."""

    attrs = resolve_layout(graph if source is None else source)
    boxes = [node_box(node, attrs) for node in graph.nodes()]
    boxes.extend(edge_box(edge, attrs) for edge in graph.edges())
    if not boxes:
        return None
    box = Box.combine_all(boxes)
    logger.info(
        "Computed graph box over %d nodes and %d edges: %.6g x %.6g",
        graph.node_count(),
        graph.edge_count(),
        box.width,
        box.height,
    )
    return box


__all__ = [
    "closest_edge_point",
    "edge_box",
    "edge_length",
    "edge_points",
    "graph_box",
    "node_box",
]


apply_debug_logging(globals(), logger=logger, skip={"edge_points"})
