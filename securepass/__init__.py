"""
Password generation and strength evaluation.
"""

import logging

from .balancer import BalanceOutcome, Balancer, balance_password
from .charset import CharClass, CompositionFlags, build_charset, composition
from .config import (
    BALANCED_MIN_LENGTH,
    DEFAULT_CONFIG,
    DEFAULT_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
    GenerationConfig,
    QuantumSourceConfig,
)
from .dictionary import (
    DictionaryProvider,
    StaticDictionary,
    WordListDictionary,
    default_dictionary,
    load_dictionary,
    reset_default_dictionary,
)
from .errors import (
    ConfigError,
    DictionaryLoadError,
    EmptyCharsetError,
    EmptyInputError,
    SecurePassError,
    TooShortError,
)
from .generator import GenerationMeta, generate_password, generate_password_with_meta
from .sampling import generate_random_password
from .strength import (
    ScoringModel,
    StrengthEvaluator,
    StrengthReport,
    StrengthVerdict,
    calculate_entropy,
    check_strength,
    reset_default_evaluator,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BalanceOutcome",
    "Balancer",
    "balance_password",
    "CharClass",
    "CompositionFlags",
    "build_charset",
    "composition",
    "BALANCED_MIN_LENGTH",
    "DEFAULT_CONFIG",
    "DEFAULT_PASSWORD_LENGTH",
    "MIN_PASSWORD_LENGTH",
    "GenerationConfig",
    "QuantumSourceConfig",
    "DictionaryProvider",
    "StaticDictionary",
    "WordListDictionary",
    "default_dictionary",
    "load_dictionary",
    "reset_default_dictionary",
    "ConfigError",
    "DictionaryLoadError",
    "EmptyCharsetError",
    "EmptyInputError",
    "SecurePassError",
    "TooShortError",
    "GenerationMeta",
    "generate_password",
    "generate_password_with_meta",
    "generate_random_password",
    "ScoringModel",
    "StrengthEvaluator",
    "StrengthReport",
    "StrengthVerdict",
    "calculate_entropy",
    "check_strength",
    "reset_default_evaluator",
]
