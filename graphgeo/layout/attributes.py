"""Attribute bundles read by the layout geometry.

Every geometry function accepts either a :class:`~graphgeo.graph.Graph`, in
which case its standard attributes are used, or an explicit
:class:`LayoutAttributes`. The latter allows "what-if" queries against an
alternative set of positions or sizes without touching the graph.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, List, Optional, Protocol, Sequence, Union

from ..errors import MissingAttributeError
from ..geometry import Coordinates, as_coordinates
from ..graph import Edge, EdgeShape, Graph, Node, NodeShape, StdAttribute

_ZERO = Coordinates(0.0, 0.0)


class ElementLookup(Protocol):
    """Anything offering ``get(element)``: graph attributes, dicts."""

    def get(self, element: Any) -> Any:  # pragma: no cover - protocol
        ...


@dataclass(frozen=True)
class LayoutAttributes:
    """Explicit attribute maps; only ``positions`` is mandatory."""

    positions: ElementLookup
    sizes: Optional[ElementLookup] = None
    node_shapes: Optional[ElementLookup] = None
    edge_points: Optional[ElementLookup] = None
    edge_widths: Optional[ElementLookup] = None
    edge_shapes: Optional[ElementLookup] = None

    @classmethod
    def from_graph(cls, graph: Graph, **overrides: Optional[ElementLookup]) -> "LayoutAttributes":
        """Collect the standard attributes of ``graph``.

        Keyword ``overrides`` replace individual attributes. Raises
        :class:`MissingAttributeError` when no position attribute is available.
        """

        unknown = set(overrides) - set(cls.__dataclass_fields__)
        if unknown:
            raise TypeError(f"Unknown layout attributes: {sorted(unknown)}")

        positions = overrides.get("positions")
        if positions is None:
            if not graph.has_node_attribute(StdAttribute.node_position):
                raise MissingAttributeError(StdAttribute.node_position.value)
            positions = graph.node_attribute(StdAttribute.node_position)

        def pick(name: str, key: StdAttribute, node_level: bool) -> Optional[ElementLookup]:
            value = overrides.get(name)
            if value is not None:
                return value
            if node_level:
                return graph.node_attribute(key) if graph.has_node_attribute(key) else None
            return graph.edge_attribute(key) if graph.has_edge_attribute(key) else None

        return cls(
            positions=positions,
            sizes=pick("sizes", StdAttribute.node_size, True),
            node_shapes=pick("node_shapes", StdAttribute.node_shape, True),
            edge_points=pick("edge_points", StdAttribute.edge_points, False),
            edge_widths=pick("edge_widths", StdAttribute.edge_width, False),
            edge_shapes=pick("edge_shapes", StdAttribute.edge_shape, False),
        )

    def with_overrides(self, **overrides: Optional[ElementLookup]) -> "LayoutAttributes":
        return replace(self, **overrides)

    def has_position(self, node: Node) -> bool:
        return self.positions.get(node) is not None

    def position(self, node: Node) -> Coordinates:
        value = self.positions.get(node)
        if value is None:
            raise KeyError(f"No position defined for {node!r}")
        return as_coordinates(value)

    def size(self, node: Node) -> Coordinates:
        value = _lookup(self.sizes, node)
        return _ZERO if value is None else as_coordinates(value)

    def node_shape(self, node: Node) -> Any:
        return _coerce_enum(NodeShape, _lookup(self.node_shapes, node), NodeShape.rectangle)

    def control_points(self, edge: Edge) -> List[Coordinates]:
        value: Optional[Sequence[Any]] = _lookup(self.edge_points, edge)
        if not value:
            return []
        return [as_coordinates(point) for point in value]

    def edge_width(self, edge: Edge) -> float:
        value = _lookup(self.edge_widths, edge)
        return 0.0 if value is None else float(value)

    def edge_shape(self, edge: Edge) -> Any:
        return _coerce_enum(EdgeShape, _lookup(self.edge_shapes, edge), EdgeShape.polyline)


LayoutSource = Union[Graph, LayoutAttributes]


def _lookup(mapping: Optional[ElementLookup], element: Any) -> Any:
    if mapping is None:
        return None
    return mapping.get(element)


def _coerce_enum(enum_cls: Any, value: Any, default: Any) -> Any:
    # Unknown values are passed through so the caller can reject them explicitly.
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        return value


def resolve_layout(source: LayoutSource) -> LayoutAttributes:
    if isinstance(source, LayoutAttributes):
        return source
    if isinstance(source, Graph):
        return LayoutAttributes.from_graph(source)
    raise TypeError(f"Expected a Graph or LayoutAttributes, got {type(source).__name__}")


__all__ = ["ElementLookup", "LayoutAttributes", "LayoutSource", "resolve_layout"]
