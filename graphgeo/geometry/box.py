"""Axis-aligned boxes in the drawing plane (``y`` grows upwards)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .coordinates import Coordinates, CoordinatesLike, as_coordinates


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle with ``left <= right`` and ``bottom <= top``."""

    left: float
    bottom: float
    right: float
    top: float

    def __post_init__(self) -> None:
        for name in ("left", "bottom", "right", "top"):
            object.__setattr__(self, name, float(getattr(self, name)))
        if self.left > self.right or self.bottom > self.top:
            raise ValueError(
                f"Invalid box extremes: left={self.left}, right={self.right}, "
                f"bottom={self.bottom}, top={self.top}"
            )

    @classmethod
    def from_center(cls, center: CoordinatesLike, size: CoordinatesLike) -> "Box":
        center = as_coordinates(center)
        size = as_coordinates(size)
        half_w = size.x / 2.0
        half_h = size.y / 2.0
        return cls(center.x - half_w, center.y - half_h, center.x + half_w, center.y + half_h)

    @classmethod
    def bounding_box(
        cls,
        points: Iterable[CoordinatesLike],
        x_margin: float = 0.0,
        y_margin: Optional[float] = None,
    ) -> "Box":
        """Smallest box containing ``points``, grown by the given margins."""

        if y_margin is None:
            y_margin = x_margin
        left = bottom = math.inf
        right = top = -math.inf
        for raw in points:
            point = as_coordinates(raw)
            left = min(left, point.x - x_margin)
            bottom = min(bottom, point.y - y_margin)
            right = max(right, point.x + x_margin)
            top = max(top, point.y + y_margin)
        if left == math.inf:
            raise ValueError("Cannot compute the bounding box of no points")
        return cls(left, bottom, right, top)

    @classmethod
    def combine_all(cls, boxes: Iterable["Box"]) -> "Box":
        """Union of ``boxes``; raises ``ValueError`` when there are none."""

        left = bottom = math.inf
        right = top = -math.inf
        for box in boxes:
            left = min(left, box.left)
            bottom = min(bottom, box.bottom)
            right = max(right, box.right)
            top = max(top, box.top)
        if left == math.inf:
            raise ValueError("Cannot combine an empty collection of boxes")
        return cls(left, bottom, right, top)

    @classmethod
    def intersect_all(cls, boxes: Iterable["Box"]) -> Optional["Box"]:
        left = bottom = -math.inf
        right = top = math.inf
        for box in boxes:
            left = max(left, box.left)
            bottom = max(bottom, box.bottom)
            right = min(right, box.right)
            top = min(top, box.top)
        if left <= right and bottom <= top:
            return cls(left, bottom, right, top)
        return None

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    def max_dim(self) -> float:
        return max(self.width, self.height)

    def min_dim(self) -> float:
        return min(self.width, self.height)

    def center(self) -> Coordinates:
        return Coordinates((self.left + self.right) / 2.0, (self.bottom + self.top) / 2.0)

    def size(self) -> Coordinates:
        return Coordinates(self.width, self.height)

    def bottom_left(self) -> Coordinates:
        return Coordinates(self.left, self.bottom)

    def bottom_right(self) -> Coordinates:
        return Coordinates(self.right, self.bottom)

    def top_left(self) -> Coordinates:
        return Coordinates(self.left, self.top)

    def top_right(self) -> Coordinates:
        return Coordinates(self.right, self.top)

    def expand(self, margins: CoordinatesLike) -> "Box":
        margins = as_coordinates(margins)
        return Box(
            self.left - margins.x,
            self.bottom - margins.y,
            self.right + margins.x,
            self.top + margins.y,
        )

    def shift(self, movement: CoordinatesLike) -> "Box":
        movement = as_coordinates(movement)
        return Box(
            self.left + movement.x,
            self.bottom + movement.y,
            self.right + movement.x,
            self.top + movement.y,
        )

    def scale(self, factors: CoordinatesLike) -> "Box":
        factors = as_coordinates(factors)
        xs = sorted((self.left * factors.x, self.right * factors.x))
        ys = sorted((self.bottom * factors.y, self.top * factors.y))
        return Box(xs[0], ys[0], xs[1], ys[1])

    def combine(self, other: "Box") -> "Box":
        return Box.combine_all((self, other))

    def intersect(self, other: "Box") -> Optional["Box"]:
        return Box.intersect_all((self, other))

    def intersects(self, other: "Box") -> bool:
        # Touching boxes share a border and count as intersecting.
        return (
            self.left <= other.right
            and other.left <= self.right
            and self.bottom <= other.top
            and other.bottom <= self.top
        )

    def contains(self, point: CoordinatesLike) -> bool:
        point = as_coordinates(point)
        return self.left <= point.x <= self.right and self.bottom <= point.y <= self.top

    def contains_all(self, points: Iterable[CoordinatesLike]) -> bool:
        return all(self.contains(point) for point in points)

    def __geometry_repr__(self) -> str:
        return f"Box[l={self.left:.6g}, b={self.bottom:.6g}, r={self.right:.6g}, t={self.top:.6g}]"


__all__ = ["Box"]
