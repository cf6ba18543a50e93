"""Unit tests for securepass.strength — entropy, verdicts, dictionary malus."""
from __future__ import annotations

import math

import pytest

from securepass.dictionary import StaticDictionary
from securepass.errors import EmptyInputError
from securepass.strength import (
    ScoringModel,
    StrengthEvaluator,
    StrengthVerdict,
    calculate_entropy,
    check_strength,
    length_tier,
)


# ---------------------------------------------------------------------------
# Entropy
# ---------------------------------------------------------------------------


class TestCalculateEntropy:
    def test_empty_is_zero(self) -> None:
        assert calculate_entropy("") == 0.0

    def test_unclassified_only_is_zero(self) -> None:
        assert calculate_entropy("   ") == 0.0

    def test_lowercase_only(self) -> None:
        assert calculate_entropy("abc") == pytest.approx(3 * math.log2(26))

    def test_alphabet_sums_present_classes(self) -> None:
        assert calculate_entropy("aB3!") == pytest.approx(4 * math.log2(83))
        assert calculate_entropy("a3") == pytest.approx(2 * math.log2(36))

    def test_unclassified_characters_count_toward_length(self) -> None:
        assert calculate_entropy("ab ~") == pytest.approx(4 * math.log2(26))


# ---------------------------------------------------------------------------
# Verdicts with the bundled dictionary
# ---------------------------------------------------------------------------


class TestCheckStrength:
    def test_strong(self) -> None:
        assert check_strength("!QEa4Kta2}wg1") is StrengthVerdict.STRONG

    def test_medium(self) -> None:
        assert check_strength("Medium333!@") is StrengthVerdict.MEDIUM

    def test_weak(self) -> None:
        assert check_strength("weakpassword") is StrengthVerdict.WEAK

    def test_empty_password_raises(self) -> None:
        with pytest.raises(EmptyInputError):
            check_strength("")

    def test_empty_input_error_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            check_strength("")

    def test_explicit_evaluator(self, plain_evaluator: StrengthEvaluator) -> None:
        assert check_strength("Xk7!", plain_evaluator) is StrengthVerdict.WEAK


class TestVerdictOrdering:
    def test_ordering(self) -> None:
        assert StrengthVerdict.WEAK < StrengthVerdict.MEDIUM < StrengthVerdict.STRONG

    def test_display_name(self) -> None:
        assert str(StrengthVerdict.STRONG) == "Strong"


# ---------------------------------------------------------------------------
# Entropy model
# ---------------------------------------------------------------------------


class TestEntropyModel:
    def test_below_floor_is_weak(self, plain_evaluator: StrengthEvaluator) -> None:
        report = plain_evaluator.evaluate("abcdefgh")
        assert report.entropy < 40
        assert report.verdict is StrengthVerdict.WEAK

    @pytest.mark.parametrize("length", [12, 16, 24])
    def test_more_classes_never_score_lower(
        self, plain_evaluator: StrengthEvaluator, length: int
    ) -> None:
        mixed = ("Xk7!" * 8)[:length]
        lower = "q" * length
        mixed_report = plain_evaluator.evaluate(mixed)
        lower_report = plain_evaluator.evaluate(lower)
        assert mixed_report.score >= lower_report.score
        assert mixed_report.verdict >= lower_report.verdict

    def test_twelve_mixed_beats_twelve_lower(
        self, plain_evaluator: StrengthEvaluator
    ) -> None:
        assert plain_evaluator.check_strength("Xk7!pQ2#mZ9$") is StrengthVerdict.MEDIUM
        assert plain_evaluator.check_strength("qwfpgjluyars") is StrengthVerdict.WEAK

    def test_very_long_password_scores_three(
        self, plain_evaluator: StrengthEvaluator
    ) -> None:
        report = plain_evaluator.evaluate("Xk7!" * 5)
        assert report.entropy >= 100
        assert report.score == 3
        assert report.verdict is StrengthVerdict.STRONG


class TestDictionaryPenalty:
    def test_word_demotes_strong_to_medium(
        self,
        plain_evaluator: StrengthEvaluator,
        dragon_evaluator: StrengthEvaluator,
    ) -> None:
        password = "Xk7!dragon#Q2"
        assert plain_evaluator.check_strength(password) is StrengthVerdict.STRONG
        report = dragon_evaluator.evaluate(password)
        assert report.verdict is StrengthVerdict.MEDIUM
        assert report.dictionary_word == "dragon"
        assert report.penalized

    def test_same_password_with_word_removed_is_not_demoted(
        self, dragon_evaluator: StrengthEvaluator
    ) -> None:
        with_word = dragon_evaluator.evaluate("Xk7!dragon#Q2")
        without_word = dragon_evaluator.evaluate("Xk7!bqzvwy#Q2")
        assert without_word.verdict is StrengthVerdict.STRONG
        assert with_word.verdict == without_word.verdict - 1

    def test_word_demotes_medium_to_weak(
        self, dragon_evaluator: StrengthEvaluator
    ) -> None:
        assert dragon_evaluator.check_strength("Xk7!dragon#") is StrengthVerdict.WEAK
        assert dragon_evaluator.check_strength("Xk7!bqzvwy#") is StrengthVerdict.MEDIUM

    def test_no_penalty_above_safety_margin(
        self, dragon_evaluator: StrengthEvaluator
    ) -> None:
        report = dragon_evaluator.evaluate("Xk7!dragon#Q2z")
        assert report.entropy >= 85
        assert report.dictionary_word == "dragon"
        assert not report.penalized
        assert report.verdict is StrengthVerdict.STRONG

    def test_no_penalty_below_floor(self, dragon_evaluator: StrengthEvaluator) -> None:
        report = dragon_evaluator.evaluate("dragon")
        assert report.verdict is StrengthVerdict.WEAK
        assert not report.penalized

    def test_match_is_case_sensitive_substring(
        self, dragon_evaluator: StrengthEvaluator
    ) -> None:
        assert dragon_evaluator.find_dictionary_word("xxDRAGONxx") is None
        assert dragon_evaluator.find_dictionary_word("snapdragons") == "dragon"

    def test_first_word_in_list_order_wins(self) -> None:
        evaluator = StrengthEvaluator(StaticDictionary(["qwerty", "qwertyuiop"]))
        assert evaluator.find_dictionary_word("qwertyuiop") == "qwerty"


# ---------------------------------------------------------------------------
# Rule-count model
# ---------------------------------------------------------------------------


class TestRuleCountModel:
    @pytest.fixture()
    def rules(self) -> StrengthEvaluator:
        return StrengthEvaluator(StaticDictionary(), model=ScoringModel.RULE_COUNT)

    @pytest.mark.parametrize("length, tier", [(0, 0), (7, 0), (8, 1), (11, 1), (12, 2), (40, 2)])
    def test_length_tiers(self, length: int, tier: int) -> None:
        assert length_tier(length) == tier

    def test_verdicts(self, rules: StrengthEvaluator) -> None:
        assert rules.check_strength("!QEa4Kta2}wg1") is StrengthVerdict.STRONG
        assert rules.check_strength("Medium333!@") is StrengthVerdict.MEDIUM
        assert rules.check_strength("weakpassword") is StrengthVerdict.WEAK

    def test_scores(self, rules: StrengthEvaluator) -> None:
        assert rules.evaluate("!QEa4Kta2}wg1").score == 8
        assert rules.evaluate("Medium333!@").score == 6
        assert rules.evaluate("weakpassword").score == 5

    def test_stripped_length_for_classes_original_for_tier(self) -> None:
        rules = StrengthEvaluator(
            StaticDictionary(["dragon"]), model=ScoringModel.RULE_COUNT
        )
        report = rules.evaluate("Xk7!dragon#Q2")
        # "Xk7!#Q2": tier 0, four classes; original length 13: tier 2.
        assert report.score == 6
        assert report.verdict is StrengthVerdict.MEDIUM
        assert report.penalized
        assert report.dictionary_word == "dragon"

    def test_stripping_can_remove_a_class(self) -> None:
        rules = StrengthEvaluator(
            StaticDictionary(["password"]), model=ScoringModel.RULE_COUNT
        )
        report = rules.evaluate("weakpassword")
        assert report.score == 0 + 1 + 2
        assert report.verdict is StrengthVerdict.WEAK

    def test_empty_password_raises(self, rules: StrengthEvaluator) -> None:
        with pytest.raises(EmptyInputError):
            rules.evaluate("")
