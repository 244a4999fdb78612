#!/usr/bin/env python3
"""Fallback Pair -- Prefer a Primary Value, Fall Back to a Secondary One.

================================================================================
WHAT IS A FALLBACK PAIR?
================================================================================

A ``FallbackPair`` holds two optional values::

    FallbackPair(primary, secondary)

Resolution always tries the primary first, then the secondary::

    FallbackPair("user", "base").fallback()   # 'user'
    FallbackPair(None, "base").fallback()     # 'base'
    FallbackPair(None, None).fallback()       # None

A transformation can *reject* the primary by returning ``None``, in which
case the secondary is tried::

    FallbackPair("abc", "42").and_then(parse_int)   # 42


================================================================================
EXAMPLE USAGE
================================================================================

Run this example:
    python examples/01_core/01_fallback_pair.py

See Also:
    - :mod:`fallback.pair` -- FallbackPair and its combinators
    - :mod:`fallback.iteration` -- lockstep iteration
"""
from fallback import FallbackPair


def parse_int(s: str) -> int | None:
    """Return an int, or None when the string is not a number."""
    return int(s) if s.strip().isdigit() else None


def main():
    print("=" * 60)
    print("Fallback Pair Examples")
    print("=" * 60)

    # === 1. Plain resolution ===
    print("\n[1] Plain Resolution")

    for pair in [FallbackPair("user", "base"), FallbackPair(None, "base"), FallbackPair(None, None)]:
        print(f"  {pair}.fallback() -> {pair.fallback()!r}   is_some={pair.is_some()}")

    # === 2. Rejecting the primary ===
    print("\n[2] and_then: a bad primary falls through")

    port = FallbackPair("eighty", "8080").and_then(parse_int)
    print(f"  port: {port}")

    # === 3. map keeps occupancy ===
    print("\n[3] map")

    lengths = FallbackPair("hello", None).map(len)
    print(f"  FallbackPair('hello', None).map(len): {lengths}")

    # === 4. Empty counts as missing ===
    print("\n[4] and_any / and_any_str")

    print(f"  ([], [1, 2]).and_any(): {FallbackPair([], [1, 2]).and_any()}")
    print(f"  ('', 'Hello world!').and_any_str(): {FallbackPair('', 'Hello world!').and_any_str()!r}")

    # === 5. Lockstep iteration ===
    print("\n[5] Lockstep Iteration")

    user_ranks = [3, 2, 1]
    default_ranks = [1, 1, 4, 5, 1, 4]
    merged = [item.fallback() for item in FallbackPair(user_ranks, default_ranks)]
    print(f"  user={user_ranks} default={default_ranks}")
    print(f"  merged: {merged}")

    print("\n" + "=" * 60)
    print("[OK] Fallback Pair Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
