"""Node and edge identities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, order=True)
class Node:
    """A graph node. Nodes compare and sort by ``id``."""

    id: str

    def __repr__(self) -> str:
        return f"Node({self.id!r})"


@dataclass(frozen=True, order=True)
class Edge:
    """A directed graph edge. Edges compare and sort by ``id`` only."""

    id: str
    source: Node = field(compare=False)
    target: Node = field(compare=False)

    def other_end(self, node: Node) -> Node:
        if node == self.source:
            return self.target
        if node == self.target:
            return self.source
        raise ValueError(f"{node!r} is not an extremity of {self!r}")

    def __repr__(self) -> str:
        return f"Edge({self.id!r}: {self.source.id!r}->{self.target.id!r})"


Element = Union[Node, Edge]


__all__ = ["Edge", "Element", "Node"]
