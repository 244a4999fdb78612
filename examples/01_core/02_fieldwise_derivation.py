#!/usr/bin/env python3
"""Fieldwise Derivation -- Fall Back Per Field, Not Per Record.

A user profile is often only partly filled in. Rather than accepting or
rejecting the whole user record, ``derive`` pairs each field with the
same field of a default record so every field can fall back on its own::

    @fallback_spec
    @dataclass
    class Profile:
        name: str
        theme: str
        tags: list[str]

    spec = FallbackPair(user, defaults).spec()
    spec.theme.and_any_str()      # user's theme, or the default if blank

Run this example:
    python examples/01_core/02_fieldwise_derivation.py

See Also:
    - :mod:`fallback.derive` -- companion generation and derive()
    - :mod:`fallback.settings` -- FALLBACK_COMPANION_PREFIX
"""
from dataclasses import dataclass

from fallback import FallbackPair, derive, fallback_spec
from fallback.logging import configure_from_settings, get_logger
from fallback.settings import get_settings


@fallback_spec
@dataclass(frozen=True)
class Profile:
    name: str
    theme: str
    tags: list[str]


def main():
    configure_from_settings(get_settings())
    log = get_logger("examples.fieldwise")

    print("=" * 60)
    print("Fieldwise Derivation Examples")
    print("=" * 60)

    defaults = Profile(name="anonymous", theme="light", tags=["general"])
    user = Profile(name="alice", theme="", tags=[])

    # === 1. Companion type ===
    print("\n[1] Companion Type")
    print(f"  {Profile.__name__} -> {Profile.__fallback_spec__.__name__}")

    # === 2. Per-field resolution ===
    print("\n[2] Per-field Resolution")
    spec = derive(FallbackPair(user, defaults), Profile)
    print(f"  name:  {spec.name.and_any_str()!r}")
    print(f"  theme: {spec.theme.and_any_str()!r}")
    print(f"  tags:  {spec.tags.and_any()!r}")

    # === 3. Missing user record ===
    print("\n[3] No User Record")
    spec = FallbackPair(None, defaults).spec(Profile)
    print(f"  name primary: {spec.name.primary!r}, resolved: {spec.name.fallback()!r}")

    log.info("example.complete", fields=len(Profile.__fallback_spec__.__fallback_fields__))

    print("\n" + "=" * 60)
    print("[OK] Fieldwise Derivation Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
