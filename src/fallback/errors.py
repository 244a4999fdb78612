"""
Structured error types for the fallback package.

Absence is never an error here: an empty slot is modelled as ``None`` and
flows through every combinator. The errors below cover the remaining
contract violations, namely a slot value that lacks a capability an
operation needs, a type that cannot be treated as a record, and invalid
settings.

Manifesto:
    - **Absence is a value:** ``None`` slots are normal, never raised
    - **Fail fast on contracts:** A missing capability raises at call time
    - **Rich context:** Errors carry the operation, field and offending type
    - **Stdlib compatible:** Capability and derivation errors are TypeErrors

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────┐
        │                    FallbackError                         │
        │          (category, context, cause)                      │
        ├──────────────────┬──────────────────┬───────────────────┤
        │ CapabilityError  │ DerivationError  │ ConfigError       │
        │ (+ TypeError)    │ (+ TypeError)    │                   │
        │                  │                  │ InvalidConfigError│
        └──────────────────┴──────────────────┴───────────────────┘

Examples:
    >>> from fallback.errors import CapabilityError
    >>> err = CapabilityError("value has no length").with_context(
    ...     operation="and_any", value_type="int"
    ... )
    >>> err.to_dict()["context"]
    {'operation': 'and_any', 'value_type': 'int'}
    >>> isinstance(err, TypeError)
    True

Tags:
    errors, error-hierarchy, capability, derivation, fallback
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification in logs."""

    CAPABILITY = "CAPABILITY"
    DERIVATION = "DERIVATION"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to a :class:`FallbackError`.

    Examples:
        >>> ErrorContext(operation="derive", field_name="a").to_dict()
        {'operation': 'derive', 'field_name': 'a'}
    """

    operation: str | None = None
    field_name: str | None = None
    value_type: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["operation", "field_name", "value_type"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class FallbackError(Exception):
    """
    Base exception for all fallback package errors.

    Subclasses set ``default_category``; instances may override it.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> FallbackError:
        """
        Add context to this error (fluent API).

        Usage:
            raise DerivationError("not a record").with_context(
                operation="companion_type", value_type="int"
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONTRACT ERRORS
# =============================================================================


class CapabilityError(FallbackError, TypeError):
    """
    A slot value lacks the capability an operation requires.

    Raised by ``and_any`` (needs ``len()``), ``and_any_str`` (needs a string
    view) and iteration (needs ``iter()``).
    """

    default_category = ErrorCategory.CAPABILITY


class DerivationError(FallbackError, TypeError):
    """A type cannot be treated as a record, or the record type is unknown."""

    default_category = ErrorCategory.DERIVATION


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(FallbackError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "FallbackError",
    "CapabilityError",
    "DerivationError",
    "ConfigError",
    "InvalidConfigError",
]
