"""Per-element attributes with a default value and change notifications."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Generic, Iterable, Iterator, Mapping, Optional, Tuple, TypeVar

from ..events import EventSource, Subscription
from .elements import Edge, Node


K = TypeVar("K", Node, Edge)
T = TypeVar("T")


@dataclass(frozen=True)
class AttributeChange(Generic[K]):
    """Notification payload; ``elements`` is ``None`` when every value may have changed."""

    attribute: "ElementAttribute"
    elements: Optional[Tuple[K, ...]]

    @property
    def affects_all(self) -> bool:
        return self.elements is None


class ElementAttribute(Generic[K, T]):
    """Values keyed by element, falling back to a default.

    Every write publishes an :class:`AttributeChange` synchronously, so
    subscribers have processed the change by the time the write returns.
    """

    def __init__(self, name: str, default: T) -> None:
        self.name = name
        self._default = default
        self._values: Dict[K, T] = {}
        self._changes: EventSource[AttributeChange[K]] = EventSource(f"attribute:{name}")

    @property
    def default(self) -> T:
        return self._default

    def get(self, element: K) -> T:
        return self._values.get(element, self._default)

    def __getitem__(self, element: K) -> T:
        return self.get(element)

    def __setitem__(self, element: K, value: T) -> None:
        self.set(element, value)

    def __contains__(self, element: object) -> bool:
        return element in self._values

    def __iter__(self) -> Iterator[K]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def is_default(self, element: K) -> bool:
        return element not in self._values

    def set(self, element: K, value: T) -> None:
        self._values[element] = value
        self._changes.emit(AttributeChange(self, (element,)))

    def update(self, values: Mapping[K, T]) -> None:
        """Set several values at once, publishing a single change."""

        if not values:
            return
        self._values.update(values)
        self._changes.emit(AttributeChange(self, tuple(values)))

    def set_default(self, value: T) -> None:
        self._default = value
        self._changes.emit(AttributeChange(self, None))

    def reset(self, element: K) -> None:
        if element in self._values:
            del self._values[element]
            self._changes.emit(AttributeChange(self, (element,)))

    def subscribe(self, listener: Callable[[AttributeChange[K]], None]) -> Subscription:
        return self._changes.subscribe(listener)

    @property
    def subscriber_count(self) -> int:
        return len(self._changes)

    def _forget(self, elements: Iterable[K]) -> None:
        # Used by the graph when elements leave it; no notification.
        for element in elements:
            self._values.pop(element, None)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, default={self._default!r}, values={len(self._values)})"


class NodeAttribute(ElementAttribute[Node, T]):
    pass


class EdgeAttribute(ElementAttribute[Edge, T]):
    pass


__all__ = ["AttributeChange", "EdgeAttribute", "ElementAttribute", "NodeAttribute"]
