"""Shared test fixtures for securepass.

Seeded random sources and in-memory dictionaries keep every test
deterministic and independent of the bundled word list unless a test asks
for it explicitly.
"""
from __future__ import annotations

import random

import pytest

from securepass.dictionary import StaticDictionary
from securepass.strength import StrengthEvaluator, reset_default_evaluator


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(20240613)


@pytest.fixture()
def plain_evaluator() -> StrengthEvaluator:
    """Entropy-model evaluator with no dictionary words at all."""
    return StrengthEvaluator(StaticDictionary())


@pytest.fixture()
def dragon_evaluator() -> StrengthEvaluator:
    return StrengthEvaluator(StaticDictionary(["dragon"]))


@pytest.fixture()
def fresh_defaults():
    """Reset the process-wide evaluator and dictionary around a test."""
    reset_default_evaluator()
    yield
    reset_default_evaluator()
