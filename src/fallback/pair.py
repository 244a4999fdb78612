"""
Fallback pair for resolving a primary value against a secondary one.

Provides a typed FallbackPair[T] holding two optional slots, a *primary*
value and a *secondary* value, and combinators that collapse the pair into a
single optional: the primary wins when present, otherwise the secondary,
otherwise ``None``.

The typical source of a pair is layered data: a user-specific value and a
default/base value. A transformation may also *reject* the primary (by
returning ``None``) so the secondary is used instead, which is what
:meth:`FallbackPair.and_then` is for.

Manifesto:
    - **Absence is a value:** ``None`` means "not present", never an error
    - **Immutable:** Combinators return new pairs or plain optionals
    - **Primary first:** Every resolution tries the primary slot before the
      secondary and stops at the first present result
    - **Fail fast on contracts:** Capability checks raise before resolving

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                    FallbackPair[T]                           │
        │              primary: T | None, secondary: T | None          │
        ├─────────────────┬─────────────────┬─────────────────────────┤
        │  Inspection     │  Resolution     │  Transformation          │
        │ • is_some()     │ • fallback()    │ • map()                  │
        │ • as_ref()      │ • and_then()    │ • flatten()              │
        │ • unzip()       │ • and_any()     │ • iter() → FallbackIter  │
        │                 │ • and_any_str() │ • spec() → companion     │
        │                 │ • to_optional() │                          │
        └─────────────────┴─────────────────┴─────────────────────────┘

Examples:
    Parsing with fallback to a base value:

    >>> from fallback.pair import FallbackPair
    >>> def parse_int(s):
    ...     return int(s) if s.isdigit() else None
    >>> FallbackPair("hello", "123").and_then(parse_int)
    123

    Mapping, then rejecting short strings:

    >>> pair = FallbackPair(123, 123456).map(str)
    >>> pair.and_then(lambda s: s if len(s) > 3 else None)
    '123456'

    Plain resolution:

    >>> FallbackPair(None, 100).to_optional()
    100
    >>> FallbackPair(None, None).is_some()
    False

Guardrails:
    ❌ DON'T: Store ``None`` as a meaningful value in a slot
    ✅ DO: Treat ``None`` as "absent" everywhere

    ❌ DON'T: Expect ``and_then`` to call ``f`` on the secondary when the
       primary already produced a result
    ✅ DO: Put side effects you always need outside the transform

Tags:
    fallback, optional, layered-config, functional-programming, immutable
"""

from __future__ import annotations

from collections import UserString
from collections.abc import Callable, Iterator, Sized
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from fallback.errors import CapabilityError, DerivationError

if TYPE_CHECKING:
    from fallback.iteration import FallbackIter

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")


@dataclass(frozen=True)
class FallbackPair(Generic[T]):
    """
    Two optional values where the primary takes precedence.

    Both slots are independent: any of the four occupancy patterns (both
    present, only primary, only secondary, neither) is legal. The pair is a
    frozen dataclass, so it compares by its two slots and is hashable when
    both slot values are.

    Examples:
        >>> pair = FallbackPair(None, "base")
        >>> pair.fallback()
        'base'
        >>> pair.map(str.upper)
        FallbackPair(None, 'BASE')
        >>> FallbackPair(*pair.unzip()) == pair
        True
    """

    primary: T | None = None
    secondary: T | None = None

    def is_some(self) -> bool:
        """Return ``False`` only if both slots are absent."""
        return self.primary is not None or self.secondary is not None

    def __bool__(self) -> bool:
        return self.is_some()

    def as_ref(self) -> FallbackPair[T]:
        """Return a read-only view sharing the same slot values."""
        return FallbackPair(self.primary, self.secondary)

    def and_then(self, f: Callable[[T], V | None]) -> V | None:
        """
        Resolve through ``f``, falling back when ``f`` rejects the primary.

        ``f`` is applied to the primary if present; a non-``None`` result is
        returned immediately. Otherwise ``f`` is applied to the secondary if
        present. ``f`` runs at most twice, primary first.

        Examples:
            >>> FallbackPair(-1, 5).and_then(lambda x: x if x > 0 else None)
            5
            >>> FallbackPair(-1, -5).and_then(lambda x: x if x > 0 else None) is None
            True
        """
        if self.primary is not None:
            result = f(self.primary)
            if result is not None:
                return result
        if self.secondary is not None:
            return f(self.secondary)
        return None

    def fallback(self) -> T | None:
        """Return the primary if present, else the secondary, else ``None``."""
        if self.primary is not None:
            return self.primary
        return self.secondary

    def to_optional(self) -> T | None:
        """Convert to a plain optional; same rule as :meth:`fallback`."""
        return self.fallback()

    def map(self, f: Callable[[T], V]) -> FallbackPair[V]:
        """Apply ``f`` to each present slot, keeping the occupancy pattern."""
        return FallbackPair(
            f(self.primary) if self.primary is not None else None,
            f(self.secondary) if self.secondary is not None else None,
        )

    def unzip(self) -> tuple[T | None, T | None]:
        """Return ``(primary, secondary)``, dropping the fallback semantics."""
        return self.primary, self.secondary

    def flatten(self: FallbackPair[U | None]) -> FallbackPair[U]:
        """
        Collapse ``FallbackPair[U | None]`` into ``FallbackPair[U]``.

        ``Optional[Optional[U]]`` is ``Optional[U]`` in Python, so a present
        outer slot holding an absent inner value is already ``None``. The
        result is a new pair with each slot flattened independently.
        """
        return FallbackPair(self.primary, self.secondary)

    def and_any(self) -> T | None:
        """
        Resolve, treating an empty container as absent.

        Every present slot must support ``len()``.

        Raises:
            CapabilityError: If a present slot has no length.

        Examples:
            >>> FallbackPair([], [1, 1, 4, 5, 1, 4]).and_any()
            [1, 1, 4, 5, 1, 4]
            >>> FallbackPair([], ()).and_any() is None
            True
        """
        self._require(Sized, "and_any", "a length")
        return self.and_then(_non_empty)

    def and_any_str(self) -> T | None:
        """
        Resolve, treating an empty string as absent.

        Every present slot must be a string view (``str`` or ``UserString``).

        Raises:
            CapabilityError: If a present slot is not a string view.
        """
        self._require((str, UserString), "and_any_str", "a string view")
        return self.and_then(_non_empty)

    def spec(self, record_type: type | None = None) -> Any:
        """
        Derive the fieldwise companion of a pair of records.

        ``record_type`` may be omitted when at least one slot is present;
        it is then taken from the present record (primary first).
        """
        from fallback.derive import derive

        if record_type is None:
            present = self.fallback()
            if present is None:
                raise DerivationError(
                    "Cannot infer the record type of an empty pair; pass record_type"
                ).with_context(operation="spec")
            record_type = type(present)
        return derive(self, record_type)

    def __iter__(self) -> FallbackIter[Any]:
        """
        Iterate both slots in lockstep, yielding pairs of elements.

        Raises:
            CapabilityError: If a present slot is not iterable.
        """
        from fallback.iteration import FallbackIter

        # both slots are checked before the iterator exists
        return FallbackIter(
            _iter_slot(self.primary, "primary"),
            _iter_slot(self.secondary, "secondary"),
        )

    def _require(self, capability: Any, operation: str, what: str) -> None:
        for slot, value in (("primary", self.primary), ("secondary", self.secondary)):
            if value is not None and not isinstance(value, capability):
                raise CapabilityError(
                    f"{operation}() requires {what}, got {type(value).__name__} in {slot} slot"
                ).with_context(operation=operation, value_type=type(value).__name__, slot=slot)

    def __repr__(self) -> str:
        return f"FallbackPair({self.primary!r}, {self.secondary!r})"


def _non_empty(value: Any) -> Any:
    return value if len(value) else None


def _iter_slot(value: Any, slot: str) -> Iterator[Any] | None:
    if value is None:
        return None
    try:
        return iter(value)
    except TypeError as exc:
        raise CapabilityError(
            f"iter() requires iteration, got {type(value).__name__} in {slot} slot",
            cause=exc,
        ).with_context(operation="iter", value_type=type(value).__name__, slot=slot) from exc


__all__ = [
    "FallbackPair",
]
