"""
Fieldwise derivation of fallback companions for record types.

Given a record type ``R`` with fields ``f1: T1 ... fn: Tn``, this module
generates a companion type whose fields are ``FallbackPair[T1] ...
FallbackPair[Tn]`` and converts a ``FallbackPair[R]`` into it. Each field can
then fall back independently, so a record need not be accepted or rejected
wholesale.

Supported record types are dataclasses, ``typing.NamedTuple`` classes and
pydantic models. The companion is a frozen dataclass named
``<prefix><RecordName>`` (prefix from :class:`~fallback.settings.CompanionSettings`,
``Fallback`` by default), generated once per record type and cached.

Manifesto:
    - **Structure-preserving:** No field is renamed, reordered or dropped
    - **Total:** Every occupancy pattern of the outer pair converts
    - **Value-blind:** Field values are copied into slots, never inspected
    - **Generated once:** The companion is tied to the record's current fields

Architecture:
    ::

        @fallback_spec                     FallbackPair[Foo]
        class Foo:                         (Foo(1, "x"), None)
            data1: int                            │
            data2: str                            ▼ derive()
                 │                         FallbackFoo(
                 ▼ companion_type()            data1=FallbackPair(1, None),
        class FallbackFoo:                     data2=FallbackPair("x", None),
            data1: FallbackPair[int]       )
            data2: FallbackPair[str]

Examples:
    >>> from dataclasses import dataclass
    >>> from fallback import FallbackPair, derive, fallback_spec
    >>> @fallback_spec
    ... @dataclass
    ... class Foo:
    ...     data1: int
    ...     data2: str
    >>> spec = derive(FallbackPair(Foo(1, ""), Foo(2, "base")), Foo)
    >>> spec.data1.fallback(), spec.data2.and_any_str()
    (1, 'base')
    >>> type(spec).__name__
    'FallbackFoo'

Guardrails:
    ❌ DON'T: Cache a companion across changes to the record's fields
    ✅ DO: Call clear_companion_cache() after redefining a record type

Tags:
    fallback, derivation, code-generation, dataclasses, pydantic, records
"""

from __future__ import annotations

import dataclasses
import threading
import typing
from typing import Any, TypeVar

from pydantic import BaseModel

from fallback.errors import DerivationError
from fallback.logging import get_logger
from fallback.pair import FallbackPair
from fallback.settings import get_companion_settings

R = TypeVar("R")

logger = get_logger(__name__)

_companions: dict[type, type] = {}
_companions_lock = threading.Lock()


def record_fields(record_type: type) -> tuple[tuple[str, Any], ...]:
    """
    Return the ordered ``(name, annotation)`` schema of a record type.

    Raises:
        DerivationError: If ``record_type`` is not a dataclass, NamedTuple
            or pydantic model class.
    """
    if not isinstance(record_type, type):
        raise DerivationError(
            f"Expected a record class, got {type(record_type).__name__} instance"
        ).with_context(operation="record_fields", value_type=type(record_type).__name__)

    if dataclasses.is_dataclass(record_type):
        hints = _type_hints(record_type)
        return tuple(
            (f.name, hints.get(f.name, f.type)) for f in dataclasses.fields(record_type)
        )

    if issubclass(record_type, tuple) and hasattr(record_type, "_fields"):
        hints = _type_hints(record_type)
        return tuple((name, hints.get(name, Any)) for name in record_type._fields)

    if issubclass(record_type, BaseModel):
        return tuple(
            (name, info.annotation) for name, info in record_type.model_fields.items()
        )

    raise DerivationError(
        f"{record_type.__name__} is not a dataclass, NamedTuple or pydantic model"
    ).with_context(operation="record_fields", value_type=record_type.__name__)


def _type_hints(record_type: type) -> dict[str, Any]:
    # Unresolvable forward references fall back to the raw annotations.
    try:
        return typing.get_type_hints(record_type)
    except (NameError, TypeError) as exc:
        logger.debug(
            "annotations.unresolved", record=record_type.__qualname__, error=str(exc)
        )
        return {}


def companion_type(record_type: type) -> type:
    """
    Return the companion type of ``record_type``, generating it on first use.

    The companion is a frozen dataclass with one ``FallbackPair`` field per
    record field, in declaration order. ``__fallback_record__`` points back
    at the record type and ``__fallback_fields__`` lists the field names.
    """
    companion = _companions.get(record_type)
    if companion is not None:
        return companion

    with _companions_lock:
        # another thread may have generated it while we waited
        companion = _companions.get(record_type)
        if companion is None:
            companion = _generate(record_type)
            _companions[record_type] = companion
    return companion


def _generate(record_type: type) -> type:
    schema = record_fields(record_type)
    prefix = get_companion_settings().companion_prefix
    name = f"{prefix}{record_type.__name__}"

    companion = dataclasses.make_dataclass(
        name,
        [(field_name, FallbackPair[annotation]) for field_name, annotation in schema],
        frozen=True,
        namespace={
            "__doc__": f"Fieldwise fallback companion of {record_type.__qualname__}.",
            "__fallback_record__": record_type,
            "__fallback_fields__": tuple(field_name for field_name, _ in schema),
        },
    )
    companion.__module__ = record_type.__module__

    logger.debug(
        "companion.generated",
        record=record_type.__qualname__,
        companion=name,
        fields=len(schema),
    )
    return companion


def fallback_spec(record_type: type[R]) -> type[R]:
    """
    Class decorator generating the companion type eagerly.

    The record class is returned unchanged apart from a
    ``__fallback_spec__`` attribute holding its companion.

    Usage:
        @fallback_spec
        @dataclass
        class Profile:
            name: str
            tags: list[str]

        Profile.__fallback_spec__   # FallbackProfile
    """
    companion = companion_type(record_type)
    setattr(record_type, "__fallback_spec__", companion)
    return record_type


def derive(pair: FallbackPair[R], record_type: type[R]) -> Any:
    """
    Convert a pair of records into its fieldwise companion.

    An absent record contributes ``None`` to every field. Defined for all
    four occupancy patterns of ``pair``.

    Examples:
        >>> from typing import NamedTuple
        >>> class R(NamedTuple):
        ...     a: int
        ...     b: str
        >>> spec = derive(FallbackPair(None, R(2, "y")), R)
        >>> spec.a, spec.b
        (FallbackPair(None, 2), FallbackPair(None, 'y'))
    """
    companion = companion_type(record_type)
    primary, secondary = pair.unzip()
    return companion(
        **{
            name: FallbackPair(
                getattr(primary, name) if primary is not None else None,
                getattr(secondary, name) if secondary is not None else None,
            )
            for name in companion.__fallback_fields__
        }
    )


def clear_companion_cache() -> None:
    """Drop generated companions (primarily for testing)."""
    with _companions_lock:
        _companions.clear()


__all__ = [
    "record_fields",
    "companion_type",
    "fallback_spec",
    "derive",
    "clear_companion_cache",
]
