"""
Password strength evaluation.

Two scoring models are available; an evaluator applies exactly one.

Entropy model (default):
    entropy = L * log2(R), where L is the password length and R sums the
    sizes of the character classes actually present in the password. Below
    ENTROPY_FLOOR the verdict is Weak. Above it, each tier reached adds a
    point, and a known dictionary word costs a point while entropy stays
    under DICTIONARY_SAFETY_MARGIN.

Rule-count model:
    Dictionary words are stripped first. Score = length tier of the stripped
    password + one point per class left in the stripped password + length
    tier of the original password.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from functools import lru_cache

from .charset import CLASS_CHARSETS, class_counts
from .dictionary import (
    DictionaryProvider,
    default_dictionary,
    reset_default_dictionary,
)
from .errors import EmptyInputError

ENTROPY_FLOOR = 40.0
ENTROPY_TIERS = (60.0, 82.0, 100.0)
DICTIONARY_SAFETY_MARGIN = 85.0
ENTROPY_STRONG_SCORE = 2
ENTROPY_MEDIUM_SCORE = 1

# (minimum length, bonus) in descending order of length.
LENGTH_TIERS = ((12, 2), (8, 1))
RULE_STRONG_SCORE = 7
RULE_MEDIUM_SCORE = 6


class StrengthVerdict(enum.IntEnum):
    WEAK = 0
    MEDIUM = 1
    STRONG = 2

    def __str__(self) -> str:
        return self.name.capitalize()


class ScoringModel(enum.Enum):
    ENTROPY = "entropy"
    RULE_COUNT = "rule-count"


@dataclass(frozen=True)
class StrengthReport:
    verdict: StrengthVerdict
    score: int
    entropy: float
    # First dictionary word found in the password, if any.
    dictionary_word: str | None = None
    # True when that word actually lowered the score.
    penalized: bool = False


def calculate_entropy(password: str) -> float:
    """
    Coarse entropy estimate in bits: length * log2(effective alphabet size).

    Returns 0.0 for an empty password or one with no classified characters.
    """
    present = class_counts(password)
    alphabet_size = sum(len(CLASS_CHARSETS[cls]) for cls in present)
    if not password or alphabet_size == 0:
        return 0.0
    return len(password) * math.log2(alphabet_size)


def length_tier(length: int) -> int:
    for minimum, bonus in LENGTH_TIERS:
        if length >= minimum:
            return bonus
    return 0


class StrengthEvaluator:
    """
    Scores passwords against a fixed snapshot of a dictionary.

    The word list is copied at construction, so evaluate() depends only on
    its argument.
    """

    def __init__(
        self,
        dictionary: DictionaryProvider | None = None,
        model: ScoringModel = ScoringModel.ENTROPY,
    ) -> None:
        provider = dictionary if dictionary is not None else default_dictionary()
        self.words: tuple[str, ...] = tuple(w for w in provider.words() if w)
        self.model = model

    # --- public API ---

    def evaluate(self, password: str) -> StrengthReport:
        if not password:
            raise EmptyInputError("Cannot rate the strength of an empty password.")
        if self.model is ScoringModel.RULE_COUNT:
            return self._rule_count(password)
        return self._entropy(password)

    def check_strength(self, password: str) -> StrengthVerdict:
        return self.evaluate(password).verdict

    def find_dictionary_word(self, password: str) -> str | None:
        """Linear scan; a word matches anywhere as a contiguous substring."""
        for word in self.words:
            if word in password:
                return word
        return None

    # --- models ---

    def _entropy(self, password: str) -> StrengthReport:
        entropy = calculate_entropy(password)
        word = self.find_dictionary_word(password)

        if entropy < ENTROPY_FLOOR:
            return StrengthReport(StrengthVerdict.WEAK, 0, entropy, word, False)

        score = sum(1 for tier in ENTROPY_TIERS if entropy >= tier)
        penalized = word is not None and entropy < DICTIONARY_SAFETY_MARGIN
        if penalized:
            score -= 1

        if score >= ENTROPY_STRONG_SCORE:
            verdict = StrengthVerdict.STRONG
        elif score >= ENTROPY_MEDIUM_SCORE:
            verdict = StrengthVerdict.MEDIUM
        else:
            verdict = StrengthVerdict.WEAK
        return StrengthReport(verdict, score, entropy, word, penalized)

    def _rule_count(self, password: str) -> StrengthReport:
        first_word = None
        stripped = password
        for word in self.words:
            if word in stripped:
                first_word = first_word or word
                stripped = stripped.replace(word, "")

        score = (
            length_tier(len(stripped))
            + len(class_counts(stripped))
            + length_tier(len(password))
        )
        if score >= RULE_STRONG_SCORE:
            verdict = StrengthVerdict.STRONG
        elif score >= RULE_MEDIUM_SCORE:
            verdict = StrengthVerdict.MEDIUM
        else:
            verdict = StrengthVerdict.WEAK
        return StrengthReport(
            verdict,
            score,
            calculate_entropy(password),
            first_word,
            first_word is not None,
        )


@lru_cache(maxsize=None)
def default_evaluator() -> StrengthEvaluator:
    return StrengthEvaluator()


def reset_default_evaluator() -> None:
    """
    Drop the process-wide evaluator and its dictionary, including a recorded
    load failure. The next default use reads the word list again.
    """
    default_evaluator.cache_clear()
    reset_default_dictionary()


def check_strength(
    password: str,
    evaluator: StrengthEvaluator | None = None,
) -> StrengthVerdict:
    """
    Classify a password as Weak, Medium or Strong.

    Uses the entropy model and the process-wide dictionary unless an
    evaluator is passed. Raises EmptyInputError for "".
    """
    return (evaluator or default_evaluator()).check_strength(password)
