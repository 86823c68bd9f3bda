"""Process-wide defaults for the locator heuristics."""

from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass
class GeometryConfig:
    """Defaults used when a locator derives its own cell size."""

    min_cell_size: float = 1.0
    cell_size_divisor: float = 100.0

    def __post_init__(self) -> None:
        if self.min_cell_size <= 0:
            raise ValueError("min_cell_size must be positive")
        if self.cell_size_divisor <= 0:
            raise ValueError("cell_size_divisor must be positive")


_GEOMETRY_CONFIG = GeometryConfig()


def get_geometry_config() -> GeometryConfig:
    return copy.deepcopy(_GEOMETRY_CONFIG)


def set_geometry_config(config: GeometryConfig) -> None:
    global _GEOMETRY_CONFIG
    _GEOMETRY_CONFIG = copy.deepcopy(config)


__all__ = ["GeometryConfig", "get_geometry_config", "set_geometry_config"]
