from __future__ import annotations
from functools import wraps
from typing import Any, Callable, Dict, Iterable, List, Mapping, Sequence, TypeVar

from toolz import get_in as _get_in

A = TypeVar("A")
B = TypeVar("B")


def try_or(default: B, *errors: type[BaseException]) -> Callable[[Callable[[A], B]], Callable[[A], B]]:
    """Return `default` instead of raising one of `errors` (ValueError/TypeError if none given)."""
    catch = errors or (ValueError, TypeError)

    def _wrap(fn: Callable[[A], B]) -> Callable[[A], B]:
        @wraps(fn)
        def _inner(x: A) -> B:
            try:
                return fn(x)
            except catch:
                return default
        return _inner
    return _wrap


def get_in(path: Sequence[Any], d: Any, default: Any = None) -> Any:
    """Nested lookup that tolerates non-mapping intermediates."""
    return _get_in(list(path), d, default=default)


def has_in(path: Sequence[Any], d: Any) -> bool:
    sentinel = object()
    return get_in(path, d, sentinel) is not sentinel


def fit_length(seq: Iterable[A], n: int, fill: Callable[[int], A]) -> List[A]:
    """Truncate to `n` items or pad with `fill(index)` until the length is `n`."""
    items = list(seq)[:max(n, 0)]
    return items + [fill(i) for i in range(len(items), n)]


def compact(d: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None."""
    return {k: v for k, v in d.items() if v is not None}
