"""Immutable coordinate vectors."""

from __future__ import annotations

import numbers
from typing import Iterator, Sequence, Tuple, Union

import numpy as np

CoordinatesLike = Union["Coordinates", Sequence[float], np.ndarray]


class Coordinates:
    """A fixed-dimension vector of real numbers.

    Components past the stored dimension read as ``0.0``, so a 3D point is
    handled by 2D code through its ``x``/``y`` projection. Arithmetic between
    vectors of different dimension pads the shorter one with zeros.
    """

    __slots__ = ("_values",)

    def __init__(self, *values: Union[float, CoordinatesLike]) -> None:
        if len(values) == 1 and not isinstance(values[0], numbers.Real):
            source = values[0]
            if isinstance(source, Coordinates):
                array = source._values
            else:
                array = np.array(source, dtype=float).reshape(-1)
        else:
            array = np.array(values, dtype=float).reshape(-1)
        if array.size == 0:
            raise ValueError("Coordinates need at least one component")
        if array.flags.writeable:
            array.flags.writeable = False
        self._values = array

    @classmethod
    def _wrap(cls, array: np.ndarray) -> "Coordinates":
        obj = cls.__new__(cls)
        array.flags.writeable = False
        obj._values = array
        return obj

    @property
    def dim(self) -> int:
        return int(self._values.size)

    def get(self, index: int) -> float:
        if index < 0:
            raise IndexError("Negative coordinate index")
        if index >= self._values.size:
            return 0.0
        return float(self._values[index])

    @property
    def x(self) -> float:
        return self.get(0)

    @property
    def y(self) -> float:
        return self.get(1)

    @property
    def z(self) -> float:
        return self.get(2)

    def as_array(self) -> np.ndarray:
        return self._values.copy()

    def to_tuple(self) -> Tuple[float, ...]:
        return tuple(float(v) for v in self._values)

    def restrict(self, dim: int) -> "Coordinates":
        """Return the first ``dim`` components, padding with zeros."""

        return Coordinates._wrap(self._padded(dim)[:dim].copy())

    def _padded(self, dim: int) -> np.ndarray:
        if self._values.size >= dim:
            return self._values
        out = np.zeros(dim, dtype=float)
        out[: self._values.size] = self._values
        return out

    def _binary(self, other: CoordinatesLike, op) -> "Coordinates":
        other = as_coordinates(other)
        dim = max(self.dim, other.dim)
        return Coordinates._wrap(op(self._padded(dim), other._padded(dim)))

    def __add__(self, other: CoordinatesLike) -> "Coordinates":
        return self._binary(other, np.add)

    def __radd__(self, other: CoordinatesLike) -> "Coordinates":
        return as_coordinates(other) + self

    def __sub__(self, other: CoordinatesLike) -> "Coordinates":
        return self._binary(other, np.subtract)

    def __rsub__(self, other: CoordinatesLike) -> "Coordinates":
        return as_coordinates(other) - self

    def __mul__(self, factor: float) -> "Coordinates":
        if not isinstance(factor, numbers.Real):
            return NotImplemented
        return Coordinates._wrap(self._values * float(factor))

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Coordinates":
        if not isinstance(divisor, numbers.Real):
            return NotImplemented
        return Coordinates._wrap(self._values / float(divisor))

    def __neg__(self) -> "Coordinates":
        return Coordinates._wrap(-self._values)

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self._values)

    def __len__(self) -> int:
        return self.dim

    def __getitem__(self, index: int) -> float:
        return float(self._values[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coordinates):
            return NotImplemented
        return self.dim == other.dim and bool(np.array_equal(self._values, other._values))

    def __hash__(self) -> int:
        return hash(self.to_tuple())

    def __repr__(self) -> str:
        return "Coordinates(" + ", ".join(f"{v:g}" for v in self.to_tuple()) + ")"

    def __geometry_repr__(self) -> str:
        return "(" + ", ".join(f"{v:.6g}" for v in self.to_tuple()) + ")"


def as_coordinates(value: CoordinatesLike) -> Coordinates:
    """Coerce tuples, lists and arrays into :class:`Coordinates`."""

    if isinstance(value, Coordinates):
        return value
    return Coordinates(value)


__all__ = ["Coordinates", "CoordinatesLike", "as_coordinates"]
