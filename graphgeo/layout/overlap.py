"""Pairwise node overlap detection."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..graph import Graph, Node
from .attributes import LayoutSource, resolve_layout
from .edges import node_box

logger = logging.getLogger(__name__)


def _node_boxes(graph: Graph, source: Optional[LayoutSource]):
    attrs = resolve_layout(graph if source is None else source)
    nodes = sorted(graph.nodes())
    return nodes, [node_box(node, attrs) for node in nodes]


def do_nodes_overlap(graph: Graph, source: Optional[LayoutSource] = None) -> bool:
    """Return ``True`` as soon as two node boxes intersect.

    Each unordered pair is tested once. Quadratic in the number of nodes.
    """

    nodes, boxes = _node_boxes(graph, source)
    for i, box in enumerate(boxes):
        for j in range(i + 1, len(boxes)):
            if box.intersects(boxes[j]):
                logger.debug("Nodes %r and %r overlap", nodes[i], nodes[j])
                return True
    return False


def overlapping_node_pairs(graph: Graph, source: Optional[LayoutSource] = None) -> List[Tuple[Node, Node]]:
    """Every pair ``(a, b)`` with ``a < b`` whose node boxes intersect."""

    nodes, boxes = _node_boxes(graph, source)
    pairs: List[Tuple[Node, Node]] = []
    for i, box in enumerate(boxes):
        for j in range(i + 1, len(boxes)):
            if box.intersects(boxes[j]):
                pairs.append((nodes[i], nodes[j]))
    logger.info("Found %d overlapping node pairs among %d nodes", len(pairs), len(nodes))
    return pairs


__all__ = ["do_nodes_overlap", "overlapping_node_pairs"]
