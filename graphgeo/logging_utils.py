"""DEBUG-level call tracing for the public layout functions."""

from __future__ import annotations

import inspect
import logging
import reprlib
import time
from functools import wraps
from itertools import islice
from typing import Any, Callable, Dict, Iterable, Iterator, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxdict = 10
_repr.maxlist = 10
_repr.maxtuple = 10
_repr.maxset = 10

_BRACKETS: Dict[type, str] = {tuple: "()", set: "{}", frozenset: "{}", list: "[]"}


def _summarize_array(value: np.ndarray, max_items: int) -> str:
    size = int(value.size)
    parts = [f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"]
    if 0 < size <= max_items:
        parts.append(f"values={_repr.repr(value.tolist())}")
    elif size > max_items:
        parts.append(f"min={float(value.min()):.6g}")
        parts.append(f"max={float(value.max()):.6g}")
    return ", ".join(parts)


def _join_limited(rendered: Iterator[str], total: int, limit: int) -> str:
    shown = list(islice(rendered, limit))
    if total > limit:
        shown.append(f"... ({total} items)")
    return ", ".join(shown)


def _safe_repr(value: Any, *, max_items: int = 5, max_length: int = 400) -> str:
    geometry_repr = getattr(value, "__geometry_repr__", None)
    if geometry_repr is not None:
        return geometry_repr()

    if isinstance(value, np.ndarray):
        return _summarize_array(value, max_items)

    if isinstance(value, dict):
        pairs = (f"{_safe_repr(key)}: {_safe_repr(val)}" for key, val in value.items())
        return "{" + _join_limited(pairs, len(value), max_items) + "}"

    for kind, brackets in _BRACKETS.items():
        if isinstance(value, kind):
            body = _join_limited(map(_safe_repr, value), len(value), max_items)
            return brackets[0] + body + brackets[1]

    try:
        rendered = _repr.repr(value)
    except Exception as exc:  # pragma: no cover - broken third-party __repr__
        rendered = f"<repr-error {exc!r}>"
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _describe_call(label: str, args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    rendered = [_safe_repr(arg) for arg in args]
    rendered.extend(f"{key}={_safe_repr(value)}" for key, value in kwargs.items())
    return f"{label}({', '.join(rendered)})"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Decorator tracing each call at DEBUG level.

    The entry line shows the call with its rendered arguments. The exit line
    carries the elapsed time and, with ``log_result``, the returned value.
    Exceptions are logged with their traceback and propagate unchanged.
    Nothing is rendered while DEBUG is disabled for ``logger``.
    """

    def decorator(func: F) -> F:
        if hasattr(func, "_traced_by"):
            return func

        label = name or getattr(func, "__qualname__", None) or getattr(func, "__name__", "<callable>")

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)

            logger.debug("Entering %s", _describe_call(label, args, kwargs))
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                elapsed_ms = (time.perf_counter() - started) * 1000.0
                logger.debug("%s raised %s after %.3f ms", label, type(exc).__name__, elapsed_ms, exc_info=True)
                raise

            elapsed_ms = (time.perf_counter() - started) * 1000.0
            outcome = f" -> {_safe_repr(result)}" if log_result else ""
            logger.debug("Exiting %s after %.3f ms%s", label, elapsed_ms, outcome)
            return result

        wrapper._traced_by = logger  # type: ignore[attr-defined]
        return cast(F, wrapper)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Wrap the public module-level functions of ``namespace`` with DEBUG tracing.

    Private helpers (leading underscore) and anything listed in ``skip`` are
    left untouched, so hot inner loops do not pay for the wrapper.
    """

    module_name = namespace.get("__name__")
    if not isinstance(module_name, str):  # pragma: no cover - exec'd namespaces
        module_name = None
    logger = logger or logging.getLogger(module_name or __name__)
    skip_set: Set[str] = set(skip or [])

    for name, value in list(namespace.items()):
        if name in skip_set or name.startswith("_"):
            continue
        if inspect.isfunction(value) and getattr(value, "__module__", None) == module_name:
            namespace[name] = debug_log_call(logger, name=name)(value)


__all__ = ["apply_debug_logging", "debug_log_call"]
