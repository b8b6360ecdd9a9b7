"""Per-field merge functions applied by the graph executor.

Each reducer is a pure function `(previous, update) -> merged`. Nodes only
return the fields they touched; the executor folds each returned field into
the accumulated state through the reducer registered for that field.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence, TypeVar

T = TypeVar("T")

Reducer = Callable[[Any, Any], Any]


def append(previous: Sequence[T] | None, update: Sequence[T] | None) -> list[T]:
    """Concatenate sequences. Never reorders or drops existing items."""
    merged = list(previous or [])
    if update:
        merged.extend(update)
    return merged


def replace_if_present(previous: T | None, update: T | None) -> T | None:
    """Last write wins, except that None leaves the previous value in place."""
    return previous if update is None else update


def shallow_merge(
    previous: Mapping[str, Any] | None, update: Mapping[str, Any] | None
) -> dict[str, Any]:
    """Top-level key merge; later keys win."""
    merged = dict(previous or {})
    if update:
        merged.update(update)
    return merged


def first_wins(previous: T | None, update: T | None) -> T | None:
    """Keep the first non-empty value ever written."""
    return previous if previous else update


__all__ = [
    "Reducer",
    "append",
    "first_wins",
    "replace_if_present",
    "shallow_merge",
]
