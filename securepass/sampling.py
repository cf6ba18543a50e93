"""
Uniform sampling over a charset.

Every random character in the package, initial draws and balancer
replacements alike, goes through draw_char().
"""

from __future__ import annotations

import random

# Process-wide default source. Callers pass their own for reproducibility.
_SYSTEM_RANDOM = random.SystemRandom()


def resolve_rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else _SYSTEM_RANDOM


def draw_char(charset: str, rng: random.Random) -> str:
    """Pick one character, uniform over charset positions."""
    if not charset:
        raise ValueError("Cannot draw from an empty charset.")
    return charset[rng.randrange(len(charset))]


def sample_chars(charset: str, count: int, rng: random.Random) -> list[str]:
    return [draw_char(charset, rng) for _ in range(count)]


def generate_random_password(
    charset: str,
    length: int,
    rng: random.Random | None = None,
) -> str:
    """
    Draw `length` independent characters from `charset`.

    No class balancing is done here; see securepass.balancer.
    """
    if length <= 0:
        raise ValueError(f"Password length must be positive, got {length}.")
    return "".join(sample_chars(charset, length, resolve_rng(rng)))
