"""
Exception hierarchy for password generation and strength checks.
"""

from __future__ import annotations


class SecurePassError(Exception):
    """Generic securepass error."""


class ConfigError(SecurePassError, ValueError):
    """The generation config cannot produce a password."""


class TooShortError(ConfigError):
    """Requested length is below the minimum acceptable length."""

    def __init__(self, length: int, minimum: int) -> None:
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"Password length {length} is below the minimum of {minimum}; "
            "shorter passwords are considered weak."
        )


class EmptyCharsetError(ConfigError):
    """No character classes enabled and no usable phrase given."""


class EmptyInputError(SecurePassError, ValueError):
    """Strength was requested for a zero-length password."""


class DictionaryLoadError(SecurePassError):
    """The common-word list could not be read."""
