"""Uniform grid of buckets over the whole (signed) integer plane.

The grid is split in four quadrants by the sign of the cell indexes, so each
quadrant only ever sees non-negative indexes. A reverse index remembers the
cells occupied by every element, which makes removal proportional to the
element's footprint instead of the grid size.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, FrozenSet, Generic, Hashable, Iterable, Iterator, Optional, Set, Tuple, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Hashable)
Cell = Tuple[int, int]
QuadrantKey = Tuple[bool, bool]

_EMPTY: FrozenSet = frozenset()


def idx_of(coord: float, cell_size: float) -> int:
    """Index of the cell containing ``coord``; cell ``i`` spans ``[i*size, (i+1)*size)``."""

    if cell_size <= 0:
        raise ValueError(f"cell_size must be positive, got {cell_size}")
    return math.floor(coord / cell_size)


class BucketQuadrant(Generic[E]):
    """Sparse buckets addressed by non-negative index pairs."""

    def __init__(self) -> None:
        self._buckets: Dict[Cell, Set[E]] = {}

    @staticmethod
    def _check(i: int, j: int) -> None:
        if i < 0 or j < 0:
            raise ValueError(f"Quadrant indexes must be non-negative, got ({i}, {j})")

    def get(self, i: int, j: int) -> FrozenSet[E]:
        self._check(i, j)
        bucket = self._buckets.get((i, j))
        return frozenset(bucket) if bucket else _EMPTY

    def add_all(self, elements: Iterable[E], i: int, j: int) -> None:
        self._check(i, j)
        bucket = self._buckets.setdefault((i, j), set())
        bucket.update(elements)

    def remove_all(self, elements: Iterable[E], i: int, j: int) -> None:
        self._check(i, j)
        bucket = self._buckets.get((i, j))
        if bucket is None:
            return
        bucket.difference_update(elements)
        if not bucket:
            del self._buckets[(i, j)]

    def occupied(self) -> Iterator[Tuple[Cell, Set[E]]]:
        return iter(self._buckets.items())

    def clear(self) -> None:
        self._buckets.clear()

    def __len__(self) -> int:
        return len(self._buckets)


def _to_quadrant(ix: int, iy: int) -> Tuple[QuadrantKey, int, int]:
    # Negative indexes are mirrored and shifted by one so that 0 is used.
    return (ix >= 0, iy >= 0), (ix if ix >= 0 else -ix - 1), (iy if iy >= 0 else -iy - 1)


def _from_quadrant(key: QuadrantKey, i: int, j: int) -> Cell:
    return (i if key[0] else -i - 1), (j if key[1] else -j - 1)


def _normalize_range(ix1: int, iy1: int, ix2: Optional[int], iy2: Optional[int]) -> Tuple[int, int, int, int]:
    if (ix2 is None) != (iy2 is None):
        raise TypeError("Both ix2 and iy2 must be given for a range")
    if ix2 is None or iy2 is None:
        return ix1, iy1, ix1, iy1
    if ix1 > ix2 or iy1 > iy2:
        raise ValueError(f"Invalid cell range ({ix1}, {iy1})-({ix2}, {iy2}): first corner must not exceed the second")
    return ix1, iy1, ix2, iy2


class BucketGrid(Generic[E]):
    """Grid of buckets with both positive and negative indexes."""

    def __init__(self) -> None:
        self._quadrants: Dict[QuadrantKey, BucketQuadrant[E]] = {
            (True, True): BucketQuadrant(),
            (True, False): BucketQuadrant(),
            (False, True): BucketQuadrant(),
            (False, False): BucketQuadrant(),
        }
        self._cells: Dict[E, Set[Cell]] = {}

    def add(self, element: E, ix1: int, iy1: int, ix2: Optional[int] = None, iy2: Optional[int] = None) -> None:
        """Insert ``element`` in cell ``(ix1, iy1)`` or in the inclusive range up to ``(ix2, iy2)``."""

        self.add_all((element,), ix1, iy1, ix2, iy2)

    def add_all(
        self,
        elements: Iterable[E],
        ix1: int,
        iy1: int,
        ix2: Optional[int] = None,
        iy2: Optional[int] = None,
    ) -> None:
        ix1, iy1, ix2, iy2 = _normalize_range(ix1, iy1, ix2, iy2)
        batch = list(elements)
        if not batch:
            return
        for ix in range(ix1, ix2 + 1):
            for iy in range(iy1, iy2 + 1):
                key, i, j = _to_quadrant(ix, iy)
                self._quadrants[key].add_all(batch, i, j)
                for element in batch:
                    self._cells.setdefault(element, set()).add((ix, iy))

    def get(self, ix1: int, iy1: int, ix2: Optional[int] = None, iy2: Optional[int] = None) -> Set[E]:
        """De-duplicated elements of one cell or of an inclusive cell range."""

        ix1, iy1, ix2, iy2 = _normalize_range(ix1, iy1, ix2, iy2)
        found: Set[E] = set()
        span = (ix2 - ix1 + 1) * (iy2 - iy1 + 1)
        if span > self.occupied_cell_count():
            # Sparse grid, wide query: scan the occupied buckets instead.
            for key, quadrant in self._quadrants.items():
                for (i, j), bucket in quadrant.occupied():
                    ix, iy = _from_quadrant(key, i, j)
                    if ix1 <= ix <= ix2 and iy1 <= iy <= iy2:
                        found.update(bucket)
            return found
        for ix in range(ix1, ix2 + 1):
            for iy in range(iy1, iy2 + 1):
                key, i, j = _to_quadrant(ix, iy)
                found.update(self._quadrants[key].get(i, j))
        return found

    def remove(self, element: E) -> None:
        """Remove ``element`` from every cell it occupies; absent elements are ignored."""

        cells = self._cells.pop(element, None)
        if not cells:
            return
        for ix, iy in cells:
            key, i, j = _to_quadrant(ix, iy)
            self._quadrants[key].remove_all((element,), i, j)

    def remove_all(self, elements: Iterable[E]) -> None:
        for element in elements:
            self.remove(element)

    def cells_of(self, element: E) -> FrozenSet[Cell]:
        return frozenset(self._cells.get(element, ()))

    def elements(self) -> Set[E]:
        return set(self._cells)

    def occupied_cell_count(self) -> int:
        return sum(len(quadrant) for quadrant in self._quadrants.values())

    def clear(self) -> None:
        for quadrant in self._quadrants.values():
            quadrant.clear()
        self._cells.clear()

    def __contains__(self, element: object) -> bool:
        return element in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"BucketGrid(elements={len(self._cells)}, cells={self.occupied_cell_count()})"


__all__ = ["BucketGrid", "BucketQuadrant", "Cell", "idx_of"]
