"""In-memory host graph: nodes, edges, attributes and change events."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Literal, Optional, Set, Union

from ..events import EventSource, Subscription
from .attributes import EdgeAttribute, NodeAttribute
from .elements import Edge, Element, Node

logger = logging.getLogger(__name__)


class StdAttribute(str, Enum):
    """Well-known attribute keys read by the layout geometry."""

    node_position = "node_position"
    node_size = "node_size"
    node_shape = "node_shape"
    edge_points = "edge_points"
    edge_width = "edge_width"
    edge_shape = "edge_shape"


class NodeShape(str, Enum):
    rectangle = "rectangle"
    ellipse = "ellipse"


class EdgeShape(str, Enum):
    polyline = "polyline"


AttributeKey = Union[str, StdAttribute]
GraphEventKind = Literal["added", "removed"]


@dataclass(frozen=True)
class GraphEvent:
    kind: GraphEventKind
    element: Element


def _attr_key(key: AttributeKey) -> str:
    if isinstance(key, StdAttribute):
        return key.value
    return str(key)


class Graph:
    """A directed multigraph with node and edge attributes.

    Element insertions and removals are published through :meth:`subscribe`;
    attribute writes are published by the attributes themselves.
    """

    def __init__(self) -> None:
        self._nodes: Dict[Node, None] = {}
        self._edges: Dict[str, Edge] = {}
        self._incident: Dict[Node, Dict[Edge, None]] = {}
        self._node_attributes: Dict[str, NodeAttribute[Any]] = {}
        self._edge_attributes: Dict[str, EdgeAttribute[Any]] = {}
        self._events: EventSource[GraphEvent] = EventSource("graph")
        self._node_ids = itertools.count()
        self._edge_ids = itertools.count()

    # -- elements -----------------------------------------------------------

    def nodes(self) -> List[Node]:
        return list(self._nodes)

    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def has(self, element: Element) -> bool:
        if isinstance(element, Node):
            return element in self._nodes
        return element.id in self._edges

    def __contains__(self, element: object) -> bool:
        return isinstance(element, (Node, Edge)) and self.has(element)

    def get_node(self, node_id: str) -> Node:
        node = Node(node_id)
        if node not in self._nodes:
            raise KeyError(f"Unknown node '{node_id}'")
        return node

    def new_node(self, node_id: Optional[str] = None) -> Node:
        if node_id is None:
            node_id = self._fresh_id("n", self._node_ids, lambda i: Node(i) in self._nodes)
        node = Node(node_id)
        if node in self._nodes:
            raise ValueError(f"A node with id '{node_id}' already exists")
        self._insert(node)
        return node

    def new_edge(self, source: Node, target: Node, edge_id: Optional[str] = None) -> Edge:
        if edge_id is None:
            edge_id = self._fresh_id("e", self._edge_ids, lambda i: i in self._edges)
        elif edge_id in self._edges:
            raise ValueError(f"An edge with id '{edge_id}' already exists")
        edge = Edge(edge_id, source, target)
        self._insert(edge)
        return edge

    def add(self, element: Element) -> None:
        """Insert a previously created element, for instance one removed earlier."""

        if self.has(element):
            raise ValueError(f"{element!r} is already in the graph")
        self._insert(element)

    def remove(self, element: Element) -> None:
        """Remove ``element``; removing a node removes its incident edges first."""

        if not self.has(element):
            raise KeyError(f"{element!r} is not in the graph")
        if isinstance(element, Node):
            for edge in list(self._incident[element]):
                self._remove_edge(edge)
            del self._incident[element]
            del self._nodes[element]
            for attribute in self._node_attributes.values():
                attribute._forget((element,))
            logger.debug("Removed %r", element)
            self._events.emit(GraphEvent("removed", element))
        else:
            self._remove_edge(element)

    def in_out_edges(self, node: Node) -> List[Edge]:
        return list(self._incident.get(node, ()))

    def in_edges(self, node: Node) -> List[Edge]:
        return [edge for edge in self._incident.get(node, ()) if edge.target == node]

    def out_edges(self, node: Node) -> List[Edge]:
        return [edge for edge in self._incident.get(node, ()) if edge.source == node]

    def degree(self, node: Node) -> int:
        return len(self._incident.get(node, ()))

    def _fresh_id(self, prefix: str, counter: "itertools.count[int]", taken: Callable[[str], bool]) -> str:
        while True:
            candidate = f"{prefix}{next(counter)}"
            if not taken(candidate):
                return candidate

    def _insert(self, element: Element) -> None:
        if isinstance(element, Node):
            self._nodes[element] = None
            self._incident[element] = {}
        else:
            for end in (element.source, element.target):
                if end not in self._nodes:
                    raise ValueError(f"{element!r} references {end!r}, which is not in the graph")
            self._edges[element.id] = element
            self._incident[element.source][element] = None
            self._incident[element.target][element] = None
        logger.debug("Added %r", element)
        self._events.emit(GraphEvent("added", element))

    def _remove_edge(self, edge: Edge) -> None:
        del self._edges[edge.id]
        self._incident[edge.source].pop(edge, None)
        self._incident[edge.target].pop(edge, None)
        for attribute in self._edge_attributes.values():
            attribute._forget((edge,))
        logger.debug("Removed %r", edge)
        self._events.emit(GraphEvent("removed", edge))

    # -- events -------------------------------------------------------------

    def subscribe(self, listener: Callable[[GraphEvent], None]) -> Subscription:
        """Register ``listener`` for element insertions and removals."""

        return self._events.subscribe(listener)

    @property
    def subscriber_count(self) -> int:
        return len(self._events)

    # -- attributes ---------------------------------------------------------

    def has_node_attribute(self, key: AttributeKey) -> bool:
        return _attr_key(key) in self._node_attributes

    def has_edge_attribute(self, key: AttributeKey) -> bool:
        return _attr_key(key) in self._edge_attributes

    def node_attribute(self, key: AttributeKey) -> NodeAttribute[Any]:
        try:
            return self._node_attributes[_attr_key(key)]
        except KeyError as exc:
            raise KeyError(f"Unknown node attribute '{_attr_key(key)}'") from exc

    def edge_attribute(self, key: AttributeKey) -> EdgeAttribute[Any]:
        try:
            return self._edge_attributes[_attr_key(key)]
        except KeyError as exc:
            raise KeyError(f"Unknown edge attribute '{_attr_key(key)}'") from exc

    def new_node_attribute(self, key: AttributeKey, default: Any) -> NodeAttribute[Any]:
        name = _attr_key(key)
        if name in self._node_attributes:
            raise ValueError(f"The node attribute '{name}' already exists")
        attribute: NodeAttribute[Any] = NodeAttribute(name, default)
        self._node_attributes[name] = attribute
        return attribute

    def new_edge_attribute(self, key: AttributeKey, default: Any) -> EdgeAttribute[Any]:
        name = _attr_key(key)
        if name in self._edge_attributes:
            raise ValueError(f"The edge attribute '{name}' already exists")
        attribute: EdgeAttribute[Any] = EdgeAttribute(name, default)
        self._edge_attributes[name] = attribute
        return attribute

    def remove_node_attribute(self, key: AttributeKey) -> None:
        self._node_attributes.pop(_attr_key(key), None)

    def remove_edge_attribute(self, key: AttributeKey) -> None:
        self._edge_attributes.pop(_attr_key(key), None)

    def node_attributes(self) -> Dict[str, NodeAttribute[Any]]:
        return dict(self._node_attributes)

    def edge_attributes(self) -> Dict[str, EdgeAttribute[Any]]:
        return dict(self._edge_attributes)

    def remove_all(self, elements: Iterable[Element]) -> None:
        pending: Set[Element] = set(elements)
        # Edges first so that removing a node never removes a pending edge twice.
        for element in sorted(pending, key=lambda e: isinstance(e, Node)):
            if self.has(element):
                self.remove(element)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self._edges)})"


__all__ = [
    "AttributeKey",
    "EdgeShape",
    "Graph",
    "GraphEvent",
    "GraphEventKind",
    "NodeShape",
    "StdAttribute",
]
