"""
Contract Validation Module

Модуль для валидации JSON контракта fixed-decimal.
"""

from .validators import (
    DECIMAL_AMOUNT_SCHEMA,
    ValidationError,
    load_schema,
    validate_decimal_amount,
)

__all__ = [
    # Constants
    "DECIMAL_AMOUNT_SCHEMA",
    # Exceptions
    "ValidationError",
    # Functions
    "load_schema",
    "validate_decimal_amount",
]
