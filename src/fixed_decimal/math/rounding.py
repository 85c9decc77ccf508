"""
Rounding — Float & Rounding Primitives for Fixed-Precision Decimals

Модуль содержит примитивы, на которых построено разложение числа на
целую и дробную части:
- Степени десяти (положительные и отрицательные) с детерминированным расчётом
- Округление half-away-from-zero (0.5 → от нуля, а не к чётному)
- Отсечение (truncate) до заданного количества знаков
- Смещение округления (rounding bias) со знаком значения
- Валидация precision и конечности float

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. 10^-n всегда вычисляется как 1 / 10^n (одинаковый результат на всех путях)
2. Округление никогда не использует banker's rounding
3. NaN/Inf никогда не попадают в дробную часть (ValueError)
4. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# ГРАНИЦЫ И КОНСТАНТЫ
# =============================================================================

# Диапазон signed 64-bit для whole и fraction
INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

# Половина единицы младшего разряда (порог half-away-from-zero)
HALF_UNIT: Final[float] = 0.5

# Дополнительные знаки для предварительного округления float-входа
# (подавляет двоичный шум вида ...4999999 / ...5000001)
PRE_ROUND_EXTRA_DIGITS: Final[int] = 2


# =============================================================================
# СТЕПЕНИ ДЕСЯТИ
# =============================================================================


def pow10(exponent: int) -> float:
    """
    Степень десяти как float.

    Для exponent >= 0 возвращает корректно округлённое 10^n.
    Для exponent < 0 возвращает 1 / 10^|n| (одно деление, одно округление).

    Args:
        exponent: Показатель степени (может быть отрицательным)

    Returns:
        10^exponent как float

    Examples:
        >>> pow10(2)
        100.0
        >>> pow10(-3)
        0.001
        >>> pow10(0)
        1.0
    """
    if exponent >= 0:
        return float(10**exponent)
    return 1.0 / float(10**-exponent)


def scale_factor(precision: int) -> int:
    """Целочисленный множитель 10^precision."""
    validate_precision(precision)
    return 10**precision


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_half_away_from_zero(value: float) -> float:
    """
    Округление до целого: половина округляется от нуля.

    В отличие от builtin round() (banker's rounding) значение 2.5 даёт 3.0,
    а -2.5 даёт -3.0.

    Дробный остаток value - trunc(value) вычисляется точно, поэтому
    значения вроде 0.49999999999999994 не переходят через порог.

    Args:
        value: Конечное значение float

    Returns:
        Округлённое значение (float с нулевой дробной частью)

    Examples:
        >>> round_half_away_from_zero(2.5)
        3.0
        >>> round_half_away_from_zero(-2.5)
        -3.0
        >>> round_half_away_from_zero(6749.999999999998)
        6750.0
    """
    validate_finite(value, "value")

    truncated = float(math.trunc(value))
    if abs(value - truncated) >= HALF_UNIT:
        truncated += math.copysign(1.0, value)
    return truncated


def round_to_precision(value: float, precision: int) -> float:
    """
    Округление float до precision знаков (half-away-from-zero).

    Args:
        value: Конечное значение float
        precision: Количество знаков после запятой

    Returns:
        Округлённое значение

    Examples:
        >>> round_to_precision(0.67499999999999982, 4)
        0.675
    """
    validate_precision(precision)
    scaled = round_half_away_from_zero(value * pow10(precision))
    return scaled * pow10(-precision)


def truncate_to_precision(value: float, precision: int) -> float:
    """
    Отсечение float до precision знаков (округление к нулю).

    Args:
        value: Конечное значение float
        precision: Количество знаков после запятой

    Returns:
        Значение без разрядов младше 10^-precision

    Examples:
        >>> truncate_to_precision(3.3333333, 2)
        3.33
        >>> truncate_to_precision(-3.3399999, 2)
        -3.33
    """
    validate_precision(precision)
    validate_finite(value, "value")

    scaled = value * pow10(precision)
    scaled = float(math.trunc(scaled))
    return scaled * pow10(-precision)


def rounding_bias(negative: bool, precision: int) -> float:
    """
    Смещение для округления дробной части до precision знаков.

    Равно 5 * 10^-(precision+1) со знаком значения: после добавления
    смещения и отсечения половина младшего разряда уходит от нуля.

    Args:
        negative: True если округляемое значение отрицательное
        precision: Целевое количество знаков

    Returns:
        Знаковое смещение

    Examples:
        >>> rounding_bias(False, 2)
        0.005
        >>> rounding_bias(True, 2)
        -0.005
    """
    validate_precision(precision)
    sign = -1.0 if negative else 1.0
    return sign * (5 * pow10(-(precision + 1)))


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Returns:
        True если значение конечное
    """
    return math.isfinite(value)


def validate_finite(value: float, name: str) -> None:
    """
    Валидация, что значение конечное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value равно NaN или Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a finite float (not NaN/Inf), got {value}")


def validate_precision(precision: int) -> None:
    """
    Валидация precision: неотрицательное целое.

    Raises:
        ValueError: Если precision отрицательный или не int
    """
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise ValueError(f"precision must be an int, got {type(precision).__name__}")

    if precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")


def validate_int64(value: int, name: str) -> None:
    """
    Валидация, что значение помещается в signed 64-bit.

    Raises:
        ValueError: Если value вне [INT64_MIN, INT64_MAX]
    """
    if value < INT64_MIN or value > INT64_MAX:
        raise ValueError(f"{name} must fit in a signed 64-bit integer, got {value}")
