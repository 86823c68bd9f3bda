"""Minimal synchronous publish/subscribe used by the graph model."""

from __future__ import annotations

import logging
from typing import Callable, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Disposer handle returned by :meth:`EventSource.subscribe`.

    ``dispose`` may be called any number of times; only the first call
    detaches the listener.
    """

    def __init__(self, source: "EventSource", listener: Callable) -> None:
        self._source: Optional[EventSource] = source
        self._listener = listener

    @property
    def active(self) -> bool:
        return self._source is not None

    def dispose(self) -> None:
        source = self._source
        if source is None:
            return
        self._source = None
        source._detach(self._listener)

    __call__ = dispose


class EventSource(Generic[T]):
    """Ordered list of listeners notified synchronously on ``emit``."""

    def __init__(self, name: str = "event") -> None:
        self.name = name
        self._listeners: List[Callable[[T], None]] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Callable[[T], None]) -> Subscription:
        self._listeners.append(listener)
        logger.debug("Subscribed listener to %s (%d total)", self.name, len(self._listeners))
        return Subscription(self, listener)

    def _detach(self, listener: Callable[[T], None]) -> None:
        for idx, existing in enumerate(self._listeners):
            if existing is listener:
                del self._listeners[idx]
                logger.debug("Detached listener from %s (%d left)", self.name, len(self._listeners))
                return

    def emit(self, payload: T) -> None:
        # Copy so listeners may dispose themselves while being notified.
        for listener in list(self._listeners):
            listener(payload)


__all__ = ["EventSource", "Subscription"]
