"""Fallback -- resolve a primary value against a secondary one.

Manifesto:
    Layered data is everywhere: a user setting over a default, an override
    over a base record, a localized string over the fallback language.
    ``FallbackPair`` captures "the primary if present, otherwise the
    secondary" once, with combinators that let a transformation reject the
    primary and fall through, and a derivation that applies the same rule
    field by field to whole records.

Architecture::

    Layer 1 -- Types & Errors
        pair.py            FallbackPair[T] and its combinators
        iteration.py       FallbackIter, lockstep iteration of two collections
        errors.py          FallbackError hierarchy (CapabilityError, ...)

    Layer 2 -- Records
        derive.py          Fieldwise companion generation + derive()

    Layer 3 -- Cross-Cutting Concerns
        logging.py         Structured logging (structlog)
        settings.py        FallbackSettings, CompanionSettings (pydantic-settings)

Examples:
    >>> from fallback import FallbackPair
    >>> FallbackPair(None, 100).to_optional()
    100
    >>> FallbackPair("", "Hello world!").and_any_str()
    'Hello world!'
"""

from fallback.derive import (
    clear_companion_cache,
    companion_type,
    derive,
    fallback_spec,
    record_fields,
)
from fallback.errors import (
    CapabilityError,
    ConfigError,
    DerivationError,
    ErrorCategory,
    ErrorContext,
    FallbackError,
    InvalidConfigError,
)
from fallback.iteration import FallbackIter
from fallback.pair import FallbackPair
from fallback.settings import (
    CompanionSettings,
    FallbackSettings,
    clear_settings_cache,
    get_companion_settings,
    get_settings,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "FallbackPair",
    "FallbackIter",
    # Derivation
    "fallback_spec",
    "companion_type",
    "record_fields",
    "derive",
    "clear_companion_cache",
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "FallbackError",
    "CapabilityError",
    "DerivationError",
    "ConfigError",
    "InvalidConfigError",
    # Settings
    "CompanionSettings",
    "FallbackSettings",
    "get_companion_settings",
    "get_settings",
    "clear_settings_cache",
]
