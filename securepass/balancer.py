"""
Balancing: repair a drawn password until every enabled character class is
present and no dictionary word drags its verdict down.

Each pass does one replacement per missing class, always at a "donor"
position: a character whose class is either not required or appears more
than once. A class that is covered therefore stays covered, and the first
pass already covers everything. Later passes only break dictionary words,
and the total number of passes is capped.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Sequence

from .charset import (
    CharClass,
    char_class,
    class_charset,
    class_counts,
    enabled_classes,
)
from .config import DEFAULT_CONFIG, GenerationConfig
from .sampling import draw_char, resolve_rng, sample_chars
from .strength import StrengthEvaluator, StrengthReport, default_evaluator

logger = logging.getLogger(__name__)

PASSES_PER_CLASS = 4

# Replacement order when breaking up a dictionary word: classes least
# likely to appear inside common words first.
WORD_BREAK_PREFERENCE = (
    CharClass.SPECIAL,
    CharClass.DIGIT,
    CharClass.UPPER,
    CharClass.LOWER,
)


@dataclass
class BalanceOutcome:
    password: str
    passes: int
    replacements: int
    report: StrengthReport
    # False only when the pass cap was hit with a penalty still in place.
    converged: bool


class Balancer:
    def __init__(
        self,
        config: GenerationConfig | None = None,
        evaluator: StrengthEvaluator | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.evaluator = evaluator or default_evaluator()
        self.rng = resolve_rng(rng)
        self.required = enabled_classes(self.config)

    @property
    def max_passes(self) -> int:
        return PASSES_PER_CLASS * len(self.required)

    # --- public API ---

    def balance(self, candidate: list[str]) -> BalanceOutcome:
        """
        Mutate `candidate` in place and report how it went.

        A candidate shorter than the configured length (or than the number
        of required classes) is padded first with characters from the
        enabled classes.
        """
        self._pad(candidate)

        replacements = 0
        for passes in range(1, self.max_passes + 1):
            replacements += self._cover_missing(candidate)
            report = self.evaluator.evaluate("".join(candidate))
            if not report.penalized:
                logger.debug(
                    "Balanced in %d pass(es), %d replacement(s)", passes, replacements
                )
                return BalanceOutcome(
                    "".join(candidate), passes, replacements, report, True
                )
            self._break_word(candidate, report.dictionary_word)
            replacements += 1

        report = self.evaluator.evaluate("".join(candidate))
        if report.penalized:
            logger.warning(
                "Balancing stopped after %d passes; dictionary word %r remains",
                self.max_passes,
                report.dictionary_word,
            )
        return BalanceOutcome(
            "".join(candidate),
            self.max_passes,
            replacements,
            report,
            not report.penalized,
        )

    # --- steps ---

    def _pad(self, candidate: list[str]) -> None:
        target = max(self.config.length, len(self.required))
        missing = target - len(candidate)
        if missing > 0:
            candidate.extend(sample_chars(class_charset(self.config), missing, self.rng))

    def _cover_missing(self, candidate: list[str]) -> int:
        present = class_counts(candidate)
        missing = [cls for cls in self.required if cls not in present]
        touched: set[int] = set()

        for cls in missing:
            untouched = (i for i in range(len(candidate)) if i not in touched)
            donors = self._donor_positions(candidate, untouched)
            pos = self.rng.choice(donors)
            candidate[pos] = draw_char(cls.chars, self.rng)
            touched.add(pos)

        return len(missing)

    def _break_word(self, candidate: list[str], word: str | None) -> None:
        start = "".join(candidate).find(word) if word else -1
        if start < 0:
            return
        span = range(start, start + len(word))
        donors = self._donor_positions(candidate, span)

        if donors:
            pos = self.rng.choice(donors)
            current = char_class(candidate[pos])
            cls = next(
                (
                    c
                    for c in WORD_BREAK_PREFERENCE
                    if c in self.required and c is not current
                ),
                current or CharClass.LOWER,
            )
        else:
            # Every character of the word is the sole one of its class.
            pos = self.rng.choice(span)
            cls = char_class(candidate[pos]) or CharClass.LOWER

        choices = cls.chars.replace(candidate[pos], "")
        candidate[pos] = draw_char(choices, self.rng)

    def _donor_positions(
        self, candidate: Sequence[str], positions: Iterable[int]
    ) -> list[int]:
        counts = class_counts(candidate)
        donors = []
        for pos in positions:
            cls = char_class(candidate[pos])
            if cls not in self.required or counts[cls] > 1:
                donors.append(pos)
        return donors


def balance_password(
    password: str | list[str],
    config: GenerationConfig | None = None,
    *,
    rng: random.Random | None = None,
    evaluator: StrengthEvaluator | None = None,
) -> str:
    """
    Balance a password against `config` (DEFAULT_CONFIG if omitted).

    A list is balanced in place; a string is copied first.
    """
    candidate = password if isinstance(password, list) else list(password)
    return Balancer(config, evaluator, rng).balance(candidate).password
