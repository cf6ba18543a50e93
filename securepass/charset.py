"""
Character classes and charset construction.

The four classes (lower, upper, digit, special) are plain ASCII sets. A
character outside all of them still counts toward length but never toward
class coverage or alphabet size.
"""

from __future__ import annotations

import enum
import string
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from .errors import EmptyCharsetError

if TYPE_CHECKING:
    from .config import GenerationConfig

LOWERCASE_CHARSET = string.ascii_lowercase
UPPERCASE_CHARSET = string.ascii_uppercase
NUMBERS = string.digits
SPECIAL_CHARSET = "!@#$%^&*?(){}[]<>-_=+"


class CharClass(enum.Enum):
    LOWER = "lower"
    UPPER = "upper"
    DIGIT = "digit"
    SPECIAL = "special"

    @property
    def chars(self) -> str:
        return CLASS_CHARSETS[self]


CLASS_CHARSETS: dict[CharClass, str] = {
    CharClass.LOWER: LOWERCASE_CHARSET,
    CharClass.UPPER: UPPERCASE_CHARSET,
    CharClass.DIGIT: NUMBERS,
    CharClass.SPECIAL: SPECIAL_CHARSET,
}

_CLASS_OF: dict[str, CharClass] = {
    ch: cls for cls, chars in CLASS_CHARSETS.items() for ch in chars
}


@dataclass(frozen=True)
class CompositionFlags:
    has_lower: bool = False
    has_upper: bool = False
    has_digit: bool = False
    has_special: bool = False

    def classes(self) -> frozenset[CharClass]:
        present = []
        if self.has_lower:
            present.append(CharClass.LOWER)
        if self.has_upper:
            present.append(CharClass.UPPER)
        if self.has_digit:
            present.append(CharClass.DIGIT)
        if self.has_special:
            present.append(CharClass.SPECIAL)
        return frozenset(present)

    def covers(self, required: Iterable[CharClass]) -> bool:
        return set(required) <= self.classes()


def char_class(ch: str) -> CharClass | None:
    """Return the class of a single character, or None if it has none."""
    return _CLASS_OF.get(ch)


def class_counts(chars: Iterable[str]) -> Counter:
    """Count characters per class. Unclassified characters are skipped."""
    counts: Counter = Counter()
    for ch in chars:
        cls = _CLASS_OF.get(ch)
        if cls is not None:
            counts[cls] += 1
    return counts


def composition(password: Iterable[str]) -> CompositionFlags:
    """Compute fresh composition flags for a password or candidate buffer."""
    present = class_counts(password)
    return CompositionFlags(
        has_lower=CharClass.LOWER in present,
        has_upper=CharClass.UPPER in present,
        has_digit=CharClass.DIGIT in present,
        has_special=CharClass.SPECIAL in present,
    )


def enabled_classes(config: GenerationConfig) -> tuple[CharClass, ...]:
    """Classes the config asks for, in charset order. Lowercase is always on."""
    classes = [CharClass.LOWER]
    if config.include_uppercase:
        classes.append(CharClass.UPPER)
    if config.include_numbers:
        classes.append(CharClass.DIGIT)
    if config.include_special_chars:
        classes.append(CharClass.SPECIAL)
    return tuple(classes)


def class_charset(config: GenerationConfig) -> str:
    """Alphabet of the enabled classes, ignoring any phrase."""
    return "".join(cls.chars for cls in enabled_classes(config))


def remove_whitespace(text: str) -> str:
    return "".join(text.split())


def build_charset(config: GenerationConfig) -> str:
    """
    Derive the working alphabet for one generation call.

    - With a phrase: the phrase minus whitespace. Repeated characters are
      kept, so they are proportionally more likely to be drawn.
    - Without: lowercase, then uppercase, digits and specials as enabled.

    Raises EmptyCharsetError if nothing is left to draw from.
    """
    if config.phrase is not None:
        charset = remove_whitespace(config.phrase)
    else:
        charset = class_charset(config)

    if not charset:
        raise EmptyCharsetError(
            "No characters to draw from: the phrase is empty or whitespace only."
        )
    return charset
