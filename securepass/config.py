"""
Configuration for password generation and the optional quantum random source.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import TooShortError

# Anything shorter is rejected outright rather than generated weak.
MIN_PASSWORD_LENGTH = 10

# Minimum for balanced class-based generation: the shortest length at which
# a password covering every class reaches Strong.
BALANCED_MIN_LENGTH = 13

DEFAULT_PASSWORD_LENGTH = BALANCED_MIN_LENGTH


@dataclass(frozen=True)
class GenerationConfig:
    # Desired password length in characters.
    length: int = DEFAULT_PASSWORD_LENGTH

    # Lowercase letters are always part of the charset.
    include_uppercase: bool = True
    include_numbers: bool = True
    include_special_chars: bool = True

    # Repair the drawn password until every enabled class is present.
    # Ignored when a phrase is given.
    with_balancing: bool = True

    # When set, the charset is this phrase with whitespace removed.
    phrase: str | None = None

    @property
    def minimum_length(self) -> int:
        """
        BALANCED_MIN_LENGTH when the balancer will run (balancing on, no
        phrase), MIN_PASSWORD_LENGTH otherwise.
        """
        if self.with_balancing and self.phrase is None:
            return BALANCED_MIN_LENGTH
        return MIN_PASSWORD_LENGTH

    def validate(self) -> None:
        """Raise TooShortError when length is below minimum_length."""
        if self.length < self.minimum_length:
            raise TooShortError(self.length, self.minimum_length)


@dataclass
class QuantumSourceConfig:
    # Number of qubits to prepare in superposition per circuit run.
    # Each qubit gives one raw bit.
    # NOTE: Keep this <= backend limit (often 20–29 for local simulators).
    num_qubits: int = 16

    # How many rounds of SHA-256 mixing to apply to each refill.
    # 0 serves the raw measured bits.
    entropy_rounds: int = 2

    # Independent circuit runs XOR-combined into one refill.
    quantum_streams: int = 2


# Default configuration instances you can import elsewhere
DEFAULT_CONFIG = GenerationConfig()
DEFAULT_QUANTUM_CONFIG = QuantumSourceConfig()
