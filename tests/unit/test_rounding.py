"""
Тесты для модуля Rounding

Проверяет:
1. Степени десяти (положительные и отрицательные)
2. Округление half-away-from-zero
3. Округление и отсечение до precision знаков
4. Знаковое смещение округления
5. Валидацию precision, int64 и конечности float
"""

import math

import pytest

from src.fixed_decimal.math.rounding import (
    HALF_UNIT,
    INT64_MAX,
    INT64_MIN,
    is_valid_float,
    pow10,
    round_half_away_from_zero,
    round_to_precision,
    rounding_bias,
    scale_factor,
    truncate_to_precision,
    validate_finite,
    validate_int64,
    validate_precision,
)

# =============================================================================
# ТЕСТЫ СТЕПЕНЕЙ ДЕСЯТИ
# =============================================================================


class TestPow10:
    """Тесты для pow10 и scale_factor"""

    def test_non_negative_exponents(self) -> None:
        """Неотрицательные показатели дают точные степени"""
        assert pow10(0) == 1.0
        assert pow10(2) == 100.0
        assert pow10(14) == 1e14

    def test_negative_exponents_are_reciprocals(self) -> None:
        """Отрицательные показатели вычисляются как 1 / 10^n"""
        assert pow10(-1) == 1.0 / 10.0
        assert pow10(-3) == 0.001
        assert pow10(-14) == 1.0 / 1e14

    def test_scale_factor_is_exact_int(self) -> None:
        """scale_factor возвращает int без потери точности"""
        assert scale_factor(0) == 1
        assert scale_factor(3) == 1000
        assert scale_factor(18) == 10**18
        assert isinstance(scale_factor(18), int)

    def test_scale_factor_rejects_negative_precision(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            scale_factor(-1)


# =============================================================================
# ТЕСТЫ ОКРУГЛЕНИЯ
# =============================================================================


class TestRoundHalfAwayFromZero:
    """Тесты для round_half_away_from_zero"""

    def test_half_rounds_away_from_zero(self) -> None:
        """Половина округляется от нуля (не к чётному)"""
        assert round_half_away_from_zero(2.5) == 3.0
        assert round_half_away_from_zero(-2.5) == -3.0
        assert round_half_away_from_zero(0.5) == 1.0
        assert round_half_away_from_zero(-0.5) == -1.0

    def test_differs_from_builtin_round(self) -> None:
        """builtin round() использует banker's rounding"""
        assert round(2.5) == 2
        assert round_half_away_from_zero(2.5) == 3.0

    def test_below_half_rounds_toward_zero(self) -> None:
        assert round_half_away_from_zero(2.4999) == 2.0
        assert round_half_away_from_zero(-2.4999) == -2.0

    def test_largest_double_below_half(self) -> None:
        """0.49999999999999994 не переходит через порог"""
        assert round_half_away_from_zero(0.49999999999999994) == 0.0

    def test_float_noise_near_integer(self) -> None:
        """Двоичный шум вида ...9999998 округляется до целого"""
        assert round_half_away_from_zero(6749.999999999998) == 6750.0

    def test_integral_values_unchanged(self) -> None:
        assert round_half_away_from_zero(7.0) == 7.0
        assert round_half_away_from_zero(-7.0) == -7.0
        assert round_half_away_from_zero(0.0) == 0.0

    def test_non_finite_raises(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            round_half_away_from_zero(float("nan"))
        with pytest.raises(ValueError, match="finite"):
            round_half_away_from_zero(float("inf"))

    def test_half_unit_constant(self) -> None:
        assert HALF_UNIT == 0.5


class TestRoundToPrecision:
    """Тесты для round_to_precision"""

    def test_suppresses_binary_noise(self) -> None:
        """Дробная часть 2.675 (хранится как 0.67499999...) становится 0.675"""
        fraction_part, _ = math.modf(2.675)
        assert fraction_part < 0.675
        assert round_to_precision(fraction_part, 4) == 0.675

    def test_rounds_half_away(self) -> None:
        assert round_to_precision(0.125, 2) == pytest.approx(0.13)
        assert round_to_precision(-0.125, 2) == pytest.approx(-0.13)

    def test_negative_precision_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            round_to_precision(1.0, -1)


class TestTruncateToPrecision:
    """Тесты для truncate_to_precision"""

    def test_truncates_toward_zero(self) -> None:
        assert truncate_to_precision(3.3333333, 2) == pytest.approx(3.33)
        assert truncate_to_precision(3.169, 2) == pytest.approx(3.16)
        assert truncate_to_precision(-3.339, 2) == pytest.approx(-3.33)

    def test_zero_precision(self) -> None:
        assert truncate_to_precision(4.9, 0) == 4.0
        assert truncate_to_precision(-4.9, 0) == -4.0

    def test_non_finite_raises(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            truncate_to_precision(float("inf"), 2)


class TestRoundingBias:
    """Тесты для rounding_bias"""

    def test_positive_bias(self) -> None:
        assert rounding_bias(False, 2) == pytest.approx(0.005)
        assert rounding_bias(False, 0) == pytest.approx(0.5)

    def test_negative_bias(self) -> None:
        assert rounding_bias(True, 2) == pytest.approx(-0.005)
        assert rounding_bias(True, 4) == pytest.approx(-0.00005)

    def test_sign_matches_value(self) -> None:
        assert rounding_bias(False, 3) > 0
        assert rounding_bias(True, 3) < 0


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidation:
    """Тесты для validate_* и is_valid_float"""

    def test_is_valid_float(self) -> None:
        assert is_valid_float(1.0)
        assert is_valid_float(-0.0)
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("-inf"))

    def test_validate_finite(self) -> None:
        validate_finite(123.45, "amount")
        with pytest.raises(ValueError, match="amount must be a finite float"):
            validate_finite(float("nan"), "amount")

    def test_validate_precision_accepts_non_negative_int(self) -> None:
        validate_precision(0)
        validate_precision(14)

    def test_validate_precision_rejects_invalid(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            validate_precision(-1)
        with pytest.raises(ValueError, match="must be an int"):
            validate_precision(2.0)
        with pytest.raises(ValueError, match="must be an int"):
            validate_precision(True)

    def test_validate_int64_bounds(self) -> None:
        validate_int64(INT64_MAX, "amount")
        validate_int64(INT64_MIN, "amount")
        with pytest.raises(ValueError, match="signed 64-bit"):
            validate_int64(INT64_MAX + 1, "amount")
        with pytest.raises(ValueError, match="signed 64-bit"):
            validate_int64(INT64_MIN - 1, "amount")
