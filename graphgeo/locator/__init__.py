"""Spatial indexes answering proximity queries over nodes and edges."""

from .base import EdgePredicate, ElementLocator, NodePredicate, QueryTarget
from .bucket_grid import BucketGrid, BucketQuadrant, Cell, idx_of
from .bucket_locator import BucketGridLocator, LocatorOptions, default_cell_size

__all__ = [
    "BucketGrid",
    "BucketGridLocator",
    "BucketQuadrant",
    "Cell",
    "EdgePredicate",
    "ElementLocator",
    "LocatorOptions",
    "NodePredicate",
    "QueryTarget",
    "default_cell_size",
    "idx_of",
]
