"""Exception hierarchy shared across graphgeo modules."""

from __future__ import annotations

from typing import Optional


class GraphGeoError(Exception):
    """Base class for errors raised by graphgeo."""


class MissingAttributeError(GraphGeoError, RuntimeError):
    """Raised when the graph lacks an attribute required by a computation."""

    def __init__(self, attribute: str, message: Optional[str] = None):
        super().__init__(message or f"The graph attribute '{attribute}' is not defined")
        self.attribute = attribute


class UnsupportedShapeError(GraphGeoError, NotImplementedError):
    """Raised for node or edge shapes without a geometric model."""

    def __init__(self, shape: object):
        super().__init__(f"The shape {shape!r} is not supported yet")
        self.shape = shape


__all__ = [
    "GraphGeoError",
    "MissingAttributeError",
    "UnsupportedShapeError",
]
