"""
High-level generation pipeline.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from .balancer import BalanceOutcome, Balancer
from .charset import build_charset
from .config import DEFAULT_CONFIG, GenerationConfig
from .sampling import resolve_rng, sample_chars
from .strength import StrengthEvaluator, calculate_entropy

logger = logging.getLogger(__name__)


@dataclass
class GenerationMeta:
    """
    Full result of one password generation.
    """
    # Final password
    password: str

    # Alphabet the initial draw used (phrase-derived or class-based)
    charset: str

    # Composition-based estimate for the final password
    entropy_bits: float

    # Balancing details, None when balancing did not run
    balance: BalanceOutcome | None

    config: GenerationConfig


def generate_password_with_meta(
    config: GenerationConfig | None = None,
    *,
    rng: random.Random | None = None,
    evaluator: StrengthEvaluator | None = None,
) -> GenerationMeta:
    """
    High-level generation pipeline with metadata:

    - Validate the config (TooShortError below the minimum length).
    - Build the charset (EmptyCharsetError if nothing is left).
    - Draw `length` characters uniformly from it.
    - Balance, unless disabled or the charset came from a phrase.
    """
    cfg = config or DEFAULT_CONFIG
    cfg.validate()
    source = resolve_rng(rng)

    charset = build_charset(cfg)
    candidate = sample_chars(charset, cfg.length, source)
    logger.debug("Drew %d characters from a %d-character charset", cfg.length, len(charset))

    outcome = None
    if cfg.with_balancing and cfg.phrase is None:
        outcome = Balancer(cfg, evaluator, source).balance(candidate)
    elif cfg.with_balancing:
        logger.debug("Skipping balancing for a phrase-derived charset")

    password = "".join(candidate)
    return GenerationMeta(
        password=password,
        charset=charset,
        entropy_bits=calculate_entropy(password),
        balance=outcome,
        config=cfg,
    )


def generate_password(
    config: GenerationConfig | None = None,
    *,
    rng: random.Random | None = None,
    evaluator: StrengthEvaluator | None = None,
) -> str:
    """
    Generate a password for `config` (DEFAULT_CONFIG if omitted).

    Raises ConfigError for configs that cannot produce an acceptable
    password; never returns an error message in place of a password.
    """
    meta = generate_password_with_meta(config, rng=rng, evaluator=evaluator)
    return meta.password
