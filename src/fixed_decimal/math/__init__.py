"""
Math modules для fixed-decimal

Примитивы округления и степеней десяти с гарантией воспроизводимости.
"""

from src.fixed_decimal.math.rounding import (
    # Constants
    HALF_UNIT,
    INT64_MAX,
    INT64_MIN,
    PRE_ROUND_EXTRA_DIGITS,
    # Powers of ten
    pow10,
    scale_factor,
    # Rounding
    round_half_away_from_zero,
    round_to_precision,
    rounding_bias,
    truncate_to_precision,
    # Validation
    is_valid_float,
    validate_finite,
    validate_int64,
    validate_precision,
)

__all__ = [
    # Rounding — Constants
    "HALF_UNIT",
    "INT64_MAX",
    "INT64_MIN",
    "PRE_ROUND_EXTRA_DIGITS",
    # Rounding — Powers of ten
    "pow10",
    "scale_factor",
    # Rounding — Functions
    "round_half_away_from_zero",
    "round_to_precision",
    "rounding_bias",
    "truncate_to_precision",
    # Rounding — Validation
    "is_valid_float",
    "validate_finite",
    "validate_int64",
    "validate_precision",
]
