"""Element locator backed by two bucket grids, one for nodes and one for edges."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Set, Tuple

from ..config import get_geometry_config
from ..events import Subscription
from ..geometry import Box
from ..graph import AttributeChange, Edge, Graph, GraphEvent, Node
from ..layout import ElementLookup, LayoutAttributes, edge_box, node_box
from .base import EdgePredicate, ElementLocator, NodePredicate
from .bucket_grid import BucketGrid, idx_of

logger = logging.getLogger(__name__)


@dataclass
class LocatorOptions:
    """Tuning knobs of :class:`BucketGridLocator`.

    ``cell_size=None`` derives the cell size from the graph box. At most one
    of ``consider_*`` and ``exclude_*`` may be given per element kind.
    """

    cell_size: Optional[float] = None
    consider_nodes: Optional[NodePredicate] = None
    exclude_nodes: Optional[NodePredicate] = None
    consider_edges: Optional[EdgePredicate] = None
    exclude_edges: Optional[EdgePredicate] = None
    auto_sync: bool = False

    def __post_init__(self) -> None:
        if self.cell_size is not None and self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.consider_nodes is not None and self.exclude_nodes is not None:
            raise ValueError("consider_nodes and exclude_nodes are mutually exclusive")
        if self.consider_edges is not None and self.exclude_edges is not None:
            raise ValueError("consider_edges and exclude_edges are mutually exclusive")


def default_cell_size(graph: Graph, attrs: Optional[LayoutAttributes] = None) -> float:
    """A hundredth of the largest graph dimension, bounded below by the configured minimum.

    Nodes without a position, and edges touching one, do not contribute.
    """

    config = get_geometry_config()
    attrs = attrs or LayoutAttributes.from_graph(graph)
    boxes = [node_box(node, attrs) for node in graph.nodes() if attrs.has_position(node)]
    boxes.extend(
        edge_box(edge, attrs)
        for edge in graph.edges()
        if attrs.has_position(edge.source) and attrs.has_position(edge.target)
    )
    if not boxes:
        return config.min_cell_size
    return max(config.min_cell_size, Box.combine_all(boxes).max_dim() / config.cell_size_divisor)


class BucketGridLocator(ElementLocator):
    """Locator indexing node and edge boxes into uniform grids.

    With ``auto_sync`` the locator follows element insertions and removals
    and the writes to the attributes it reads, so queries always reflect
    the current layout. Call :meth:`close` (or use the locator as a context
    manager) to detach it from the graph.
    """

    def __init__(
        self,
        graph: Graph,
        options: Optional[LocatorOptions] = None,
        *,
        positions: Optional[ElementLookup] = None,
        sizes: Optional[ElementLookup] = None,
        edge_points: Optional[ElementLookup] = None,
        edge_widths: Optional[ElementLookup] = None,
    ) -> None:
        options = options or LocatorOptions()
        super().__init__(
            graph,
            consider_nodes=options.consider_nodes,
            exclude_nodes=options.exclude_nodes,
            consider_edges=options.consider_edges,
            exclude_edges=options.exclude_edges,
        )
        self.options = options
        self._attrs = LayoutAttributes.from_graph(
            graph,
            positions=positions,
            sizes=sizes,
            edge_points=edge_points,
            edge_widths=edge_widths,
        )
        self._cell_size = options.cell_size if options.cell_size is not None else default_cell_size(graph, self._attrs)
        self._node_grid: BucketGrid[Node] = BucketGrid()
        self._edge_grid: BucketGrid[Edge] = BucketGrid()
        self._subscriptions: List[Subscription] = []
        self._closed = False

        self._build()
        if options.auto_sync:
            self._subscribe()

    # -- properties -----------------------------------------------------------

    @property
    def layout(self) -> LayoutAttributes:
        return self._attrs

    @property
    def cell_size(self) -> float:
        return self._cell_size

    @property
    def auto_sync(self) -> bool:
        return self.options.auto_sync

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def indexed_nodes(self) -> Set[Node]:
        return self._node_grid.elements()

    @property
    def indexed_edges(self) -> Set[Edge]:
        return self._edge_grid.elements()

    def idx_of(self, coord: float) -> int:
        return idx_of(coord, self._cell_size)

    def _cell_range(self, box: Box) -> Tuple[int, int, int, int]:
        return self.idx_of(box.left), self.idx_of(box.bottom), self.idx_of(box.right), self.idx_of(box.top)

    # -- index maintenance ----------------------------------------------------

    def _build(self) -> None:
        self._node_grid.clear()
        self._edge_grid.clear()
        for node in self.graph.nodes():
            self._update_node(node)
        for edge in self.graph.edges():
            self._update_edge(edge)
        logger.info(
            "Indexed %d nodes and %d edges with cell size %.6g",
            len(self._node_grid),
            len(self._edge_grid),
            self._cell_size,
        )

    def rebuild(self) -> None:
        """Recompute both grids; a synchronised locator is already current."""

        if self.options.auto_sync and not self._closed:
            logger.debug("Skipping rebuild of an auto-synchronised locator")
            return
        self._build()

    def _update_node(self, node: Node) -> None:
        self._node_grid.remove(node)
        if not self.should_consider(node):
            return
        if not self._attrs.has_position(node):
            logger.debug("Node %r has no position yet, left out of the index", node)
            return
        self._node_grid.add(node, *self._cell_range(node_box(node, self._attrs)))

    def _update_edge(self, edge: Edge) -> None:
        self._edge_grid.remove(edge)
        if not self.should_consider(edge):
            return
        if not (self._attrs.has_position(edge.source) and self._attrs.has_position(edge.target)):
            logger.debug("Edge %r has an unplaced endpoint, left out of the index", edge)
            return
        self._edge_grid.add(edge, *self._cell_range(edge_box(edge, self._attrs)))

    def _update(self, element: Any) -> None:
        if isinstance(element, Node):
            self._update_node(element)
        else:
            self._update_edge(element)

    def _remove(self, element: Any) -> None:
        if isinstance(element, Node):
            self._node_grid.remove(element)
        else:
            self._edge_grid.remove(element)

    # -- auto-sync ------------------------------------------------------------

    def _subscribe(self) -> None:
        if not hasattr(self._attrs.positions, "subscribe"):
            raise ValueError("auto_sync requires an observable position attribute")
        self._subscriptions.append(self.graph.subscribe(self._on_graph_event))
        self._subscriptions.append(self._attrs.positions.subscribe(self._on_position_change))
        observed = (
            (self._attrs.sizes, self._on_size_change),
            (self._attrs.edge_points, self._on_edge_change),
            (self._attrs.edge_widths, self._on_edge_change),
        )
        for attribute, handler in observed:
            if attribute is None:
                continue
            if hasattr(attribute, "subscribe"):
                self._subscriptions.append(attribute.subscribe(handler))
            else:
                logger.warning("Attribute %r is not observable; its changes will not be tracked", attribute)
        logger.info("Locator subscribed to %d event sources", len(self._subscriptions))

    def _on_graph_event(self, event: GraphEvent) -> None:
        if event.kind == "added":
            self._update(event.element)
        else:
            self._remove(event.element)

    def _on_position_change(self, change: AttributeChange) -> None:
        if change.affects_all:
            self._build()
            return
        for node in change.elements or ():
            if not self.graph.has(node):
                continue
            self._update_node(node)
            for edge in self.graph.in_out_edges(node):
                self._update_edge(edge)

    def _on_size_change(self, change: AttributeChange) -> None:
        nodes = self.graph.nodes() if change.affects_all else change.elements or ()
        for node in nodes:
            self._update_node(node)

    def _on_edge_change(self, change: AttributeChange) -> None:
        edges = self.graph.edges() if change.affects_all else change.elements or ()
        for edge in edges:
            self._update_edge(edge)

    def close(self) -> None:
        """Dispose every subscription. Safe to call several times."""

        if self._closed:
            return
        for subscription in self._subscriptions:
            subscription.dispose()
        logger.info("Closed locator, released %d subscriptions", len(self._subscriptions))
        self._subscriptions.clear()
        self._closed = True

    # -- queries --------------------------------------------------------------

    def get_nodes_in_box(self, box: Box) -> Set[Node]:
        return self._filtered(self._node_grid.get(*self._cell_range(box)))

    def get_edges_in_box(self, box: Box) -> Set[Edge]:
        return self._filtered(self._edge_grid.get(*self._cell_range(box)))

    def __repr__(self) -> str:
        return (
            f"BucketGridLocator(cell_size={self._cell_size:.6g}, nodes={len(self._node_grid)}, "
            f"edges={len(self._edge_grid)}, auto_sync={self.options.auto_sync}, closed={self._closed})"
        )


__all__ = ["BucketGridLocator", "LocatorOptions", "default_cell_size"]
