"""
Domain models and value objects.

Contains the fixed-precision Decimal value type and its error types.
"""

from src.fixed_decimal.domain.decimal_value import (
    CANONICAL_DECIMAL_POINT,
    DEFAULT_DECIMAL_POINT,
    DEFAULT_THOUSAND_SEPARATOR,
    THOUSANDS_GROUP_SIZE,
    Decimal,
    DecimalDivisionByZero,
    DecimalError,
    DecodeError,
)

__all__ = [
    # Display constants
    "CANONICAL_DECIMAL_POINT",
    "DEFAULT_DECIMAL_POINT",
    "DEFAULT_THOUSAND_SEPARATOR",
    "THOUSANDS_GROUP_SIZE",
    # Decimal model
    "Decimal",
    # Exceptions
    "DecimalError",
    "DecodeError",
    "DecimalDivisionByZero",
]
