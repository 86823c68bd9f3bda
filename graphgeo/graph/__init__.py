"""Host graph model consumed by the layout geometry and the locators."""

from .attributes import AttributeChange, EdgeAttribute, ElementAttribute, NodeAttribute
from .elements import Edge, Element, Node
from .graph import AttributeKey, EdgeShape, Graph, GraphEvent, NodeShape, StdAttribute

__all__ = [
    "AttributeChange",
    "AttributeKey",
    "Edge",
    "EdgeAttribute",
    "EdgeShape",
    "Element",
    "ElementAttribute",
    "Graph",
    "GraphEvent",
    "Node",
    "NodeAttribute",
    "NodeShape",
    "StdAttribute",
]
