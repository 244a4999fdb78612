"""Lockstep iteration over the two slots of a :class:`FallbackPair`.

``iter(FallbackPair(primary, secondary))`` walks both collections position
by position and yields a ``FallbackPair`` of the i-th elements. Iteration
runs to the longer side; the exhausted side contributes ``None``.

Examples:
    >>> from fallback import FallbackPair
    >>> pair = FallbackPair([3, 2, 1], [1, 1, 4, 5, 1, 4])
    >>> [item.fallback() for item in pair]
    [3, 2, 1, 5, 1, 4]
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from fallback.pair import FallbackPair

A = TypeVar("A")

_EXHAUSTED = object()


class FallbackIter(Generic[A]):
    """
    Iterator yielding ``FallbackPair`` items from two fused iterators.

    A side that is absent from the start behaves like an empty iterator.
    Once a side is exhausted it is never advanced again, and once both
    are exhausted the iterator stays exhausted. ``None`` elements inside a
    collection are positions like any other.
    """

    __slots__ = ("_primary", "_secondary")

    def __init__(self, primary: Iterator[A] | None, secondary: Iterator[A] | None):
        self._primary = primary
        self._secondary = secondary

    def __iter__(self) -> FallbackIter[A]:
        return self

    def __next__(self) -> FallbackPair[A]:
        primary, self._primary = _step(self._primary)
        secondary, self._secondary = _step(self._secondary)
        if primary is _EXHAUSTED and secondary is _EXHAUSTED:
            raise StopIteration
        return FallbackPair(
            None if primary is _EXHAUSTED else primary,
            None if secondary is _EXHAUSTED else secondary,
        )


def _step(it: Iterator[Any] | None) -> tuple[Any, Iterator[Any] | None]:
    # Fuse: a drained iterator is dropped and never advanced again.
    if it is None:
        return _EXHAUSTED, None
    item = next(it, _EXHAUSTED)
    if item is _EXHAUSTED:
        return _EXHAUSTED, None
    return item, it


__all__ = [
    "FallbackIter",
]
