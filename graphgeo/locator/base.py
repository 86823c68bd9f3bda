"""Common query surface of the element locators."""

from __future__ import annotations

import logging
import numbers
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Optional, Sequence, Set, Union

import numpy as np

from ..geometry import Box, Coordinates, CoordinatesLike, as_coordinates
from ..graph import Edge, Graph, Node
from ..layout import LayoutAttributes, node_box

logger = logging.getLogger(__name__)

NodePredicate = Callable[[Node], bool]
EdgePredicate = Callable[[Edge], bool]
QueryTarget = Union[Node, Edge, CoordinatesLike, Sequence[CoordinatesLike]]


def _is_point(value: Any) -> bool:
    if isinstance(value, Coordinates):
        return True
    if isinstance(value, np.ndarray):
        return value.ndim == 1
    if isinstance(value, (list, tuple)):
        return bool(value) and all(isinstance(item, numbers.Real) for item in value)
    return False


def _check_filters(kind: str, consider: Optional[Callable], exclude: Optional[Callable]) -> None:
    if consider is not None and exclude is not None:
        raise ValueError(f"Cannot both consider and exclude {kind}; pass at most one predicate")


class ElementLocator(ABC):
    """Answers "which nodes or edges are near this?" for a graph.

    Subclasses only implement the two box queries. The proximity queries
    reduce every target to a box and delegate to them. Results are broad
    phase: every element whose box meets the query box is returned, plus
    possibly a few more, never fewer.
    """

    def __init__(
        self,
        graph: Graph,
        *,
        consider_nodes: Optional[NodePredicate] = None,
        exclude_nodes: Optional[NodePredicate] = None,
        consider_edges: Optional[EdgePredicate] = None,
        exclude_edges: Optional[EdgePredicate] = None,
    ) -> None:
        _check_filters("nodes", consider_nodes, exclude_nodes)
        _check_filters("edges", consider_edges, exclude_edges)
        self.graph = graph
        self._consider_nodes = consider_nodes
        self._exclude_nodes = exclude_nodes
        self._consider_edges = consider_edges
        self._exclude_edges = exclude_edges

    @property
    @abstractmethod
    def layout(self) -> LayoutAttributes:
        """Attributes used to place the elements."""

    @abstractmethod
    def get_nodes_in_box(self, box: Box) -> Set[Node]:
        """Nodes whose box may intersect ``box``."""

    @abstractmethod
    def get_edges_in_box(self, box: Box) -> Set[Edge]:
        """Edges whose box may intersect ``box``."""

    @abstractmethod
    def rebuild(self) -> None:
        """Recompute the index from the current graph state."""

    def close(self) -> None:
        """Release the resources held by the locator. Idempotent."""

    def __enter__(self) -> "ElementLocator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- filtering ------------------------------------------------------------

    def should_consider(self, element: Union[Node, Edge]) -> bool:
        """Whether ``element`` belongs to the graph and passes the filters."""

        if not self.graph.has(element):
            return False
        if isinstance(element, Node):
            consider, exclude = self._consider_nodes, self._exclude_nodes
        else:
            consider, exclude = self._consider_edges, self._exclude_edges
        if consider is not None:
            return bool(consider(element))
        if exclude is not None:
            return not exclude(element)
        return True

    def _filtered(self, elements: Iterable[Any]) -> Set[Any]:
        return {element for element in elements if self.should_consider(element)}

    # -- proximity queries ----------------------------------------------------

    def _query_box(self, target: QueryTarget, radius: float) -> Box:
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")
        attrs = self.layout
        if isinstance(target, Node):
            return node_box(target, attrs).expand((radius, radius))
        if isinstance(target, Edge):
            # Only the extremities are used; control points are ignored.
            ends = [attrs.position(target.source), attrs.position(target.target)]
            return Box.bounding_box(ends, radius)
        if _is_point(target):
            return Box.bounding_box([as_coordinates(target)], radius)
        points = list(target)
        if not points:
            raise ValueError("Cannot query around an empty polyline")
        return Box.bounding_box(points, radius)

    def get_close_nodes(self, target: QueryTarget, radius: float) -> Set[Node]:
        """Nodes possibly within ``radius`` of ``target``.

        ``target`` is a point, a polyline (sequence of points), an edge or a
        node. A node target is never part of its own result.
        """

        found = self.get_nodes_in_box(self._query_box(target, radius))
        if isinstance(target, Node):
            found.discard(target)
        return found

    def get_close_edges(self, target: QueryTarget, radius: float) -> Set[Edge]:
        """Edges possibly within ``radius`` of ``target``.

        An edge target is never part of its own result.
        """

        found = self.get_edges_in_box(self._query_box(target, radius))
        if isinstance(target, Edge):
            found.discard(target)
        return found

    def get_nodes_partially_in_box(self, box: Box) -> Set[Node]:
        return self.get_nodes_in_box(box)

    def get_nodes_fully_in_box(self, box: Box) -> Set[Node]:
        # Broad phase as well: the grid cannot tell partial from full containment.
        return self.get_nodes_in_box(box)


__all__ = ["EdgePredicate", "ElementLocator", "NodePredicate", "QueryTarget"]
