"""
Decimal — Fixed-Precision Decimal Value Type

Pydantic модель значения с фиксированной точностью:
    value = whole + fraction × 10^-precision

Модуль обеспечивает:
- Построение из scaled integer (12345, precision=2 → 123.45) и из float
- Округление half-away-from-zero на обоих путях построения
- Конверсию в int / float / строку (каноническую и форматированную)
- Арифметику через float с precision = max(precision операндов)
- Разбиение суммы на n частей без потери остатка
- JSON interop: значение сериализуется как голое число

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. 0 <= |fraction| < 10^precision
2. Знак fraction совпадает со знаком whole (или один из них равен нулю)
3. whole, fraction, precision неизменяемы (frozen); меняются только
   display-атрибуты decimal_point и thousand_separator
4. Инварианты проверяются при создании и при каждом присваивании
5. Деление на ноль → DecimalDivisionByZero (NaN/Inf никогда не попадают в Decimal)
"""

import json
import logging
import math
import re
from typing import Final, Optional, Union

from pydantic import BaseModel, Field, model_validator

from src.fixed_decimal.contracts.validators import ValidationError, validate_decimal_amount
from src.fixed_decimal.math.rounding import (
    INT64_MAX,
    INT64_MIN,
    PRE_ROUND_EXTRA_DIGITS,
    is_valid_float,
    pow10,
    round_to_precision,
    rounding_bias,
    scale_factor,
    truncate_to_precision,
    validate_finite,
    validate_int64,
    validate_precision,
)

logger = logging.getLogger(__name__)

# =============================================================================
# DISPLAY-ПАРАМЕТРЫ
# =============================================================================

# Разделитель дробной части для форматированного вывода
DEFAULT_DECIMAL_POINT: Final[str] = ","

# Разделитель групп разрядов целой части
DEFAULT_THOUSAND_SEPARATOR: Final[str] = "."

# Разделитель канонической строки (не зависит от display-настроек)
CANONICAL_DECIMAL_POINT: Final[str] = "."

# Размер группы разрядов
THOUSANDS_GROUP_SIZE: Final[int] = 3

# JSON числа вне [1e-6, 1e21) пишутся в экспоненциальной форме, внутри — цифрами
JSON_PLAIN_MIN: Final[float] = 1e-6
JSON_PLAIN_MAX: Final[float] = 1e21


# =============================================================================
# EXCEPTIONS
# =============================================================================


class DecimalError(Exception):
    """Базовая ошибка fixed-decimal."""

    pass


class DecodeError(DecimalError, ValueError):
    """
    JSON payload не является валидным числовым литералом.

    Получатель from_json при этом не изменяется.
    """

    pass


class DecimalDivisionByZero(DecimalError, ZeroDivisionError):
    """
    Деление на нулевое значение.

    Единая политика для divide, divide_by_int, divide_by_float, оператора /
    и split(0): ошибка вместо распространения Inf/NaN.
    """

    pass


Operand = Union["Decimal", int, float]


# =============================================================================
# DECIMAL MODEL
# =============================================================================


class Decimal(BaseModel):
    """
    Значение с фиксированной точностью.

    Числовые поля frozen: арифметика всегда возвращает новый экземпляр.
    validate_assignment=True перепроверяет инварианты при изменении
    display-атрибутов, поэтому некорректное состояние не может появиться
    и после создания.

    Equality и hash учитывают только (whole, fraction, precision).
    """

    # Числовое значение
    whole: int = Field(
        ..., ge=INT64_MIN, le=INT64_MAX, frozen=True, description="Целая часть (со знаком)"
    )
    fraction: int = Field(
        ...,
        ge=INT64_MIN,
        le=INT64_MAX,
        frozen=True,
        description="Дробная часть × 10^precision (знак совпадает с whole)",
    )
    precision: int = Field(..., ge=0, frozen=True, description="Количество дробных знаков")

    # Отображение
    decimal_point: str = Field(
        DEFAULT_DECIMAL_POINT,
        min_length=1,
        max_length=1,
        description="Разделитель дробной части в форматированной строке",
    )
    thousand_separator: str = Field(
        DEFAULT_THOUSAND_SEPARATOR,
        min_length=1,
        max_length=1,
        description="Разделитель групп разрядов в форматированной строке",
    )

    model_config = {"validate_assignment": True, "strict": True}

    @model_validator(mode="after")
    def validate_parts(self) -> "Decimal":
        """
        Проверка инвариантов whole/fraction.

        - |fraction| < 10^precision
        - fraction и whole не имеют противоположных знаков
        """
        limit = 10**self.precision
        if abs(self.fraction) >= limit:
            raise ValueError(
                f"fraction {self.fraction} out of range for precision {self.precision} "
                f"(|fraction| must be < {limit})"
            )
        if (self.whole > 0 and self.fraction < 0) or (self.whole < 0 and self.fraction > 0):
            raise ValueError(
                f"whole {self.whole} and fraction {self.fraction} have opposite signs"
            )
        return self

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_scaled_integer(cls, amount: int, precision: int) -> "Decimal":
        """
        Создание из целого, равного значению × 10^precision.

        Args:
            amount: Scaled integer (например, 12345 для 123.45 при precision=2)
            precision: Количество дробных знаков

        Returns:
            Новый Decimal

        Raises:
            ValueError: Если precision отрицательный или amount вне int64

        Examples:
            >>> Decimal.from_scaled_integer(12345, 2).to_display_string()
            '123.45'
        """
        validate_precision(precision)
        validate_int64(amount, "amount")

        float_amount = float(amount) * pow10(-precision)
        fraction_part, whole_part = math.modf(float_amount)
        return cls._from_parts(whole_part, fraction_part, precision)

    @classmethod
    def from_float(cls, amount: float, precision: int) -> "Decimal":
        """
        Создание из float с округлением до precision знаков.

        Дробная часть сначала округляется до precision + 2 знаков, чтобы
        подавить двоичный шум (2.675 хранится как 2.67499999...), затем
        округляется half-away-from-zero до precision знаков.

        Args:
            amount: Конечное значение float
            precision: Количество дробных знаков

        Returns:
            Новый Decimal

        Raises:
            ValueError: Если amount равно NaN/Inf или precision отрицательный

        Examples:
            >>> d = Decimal.from_float(2.675, 2)
            >>> (d.whole, d.fraction)
            (2, 68)
        """
        validate_precision(precision)
        amount = float(amount)
        validate_finite(amount, "amount")

        fraction_part, whole_part = math.modf(amount)
        fraction_part = round_to_precision(fraction_part, precision + PRE_ROUND_EXTRA_DIGITS)
        return cls._from_parts(whole_part, fraction_part, precision)

    @classmethod
    def _from_parts(cls, whole_part: float, fraction_part: float, precision: int) -> "Decimal":
        negative = whole_part < 0 or fraction_part < 0
        bias = rounding_bias(negative, precision)
        fraction = int((fraction_part + bias) * pow10(precision))
        whole = int(whole_part)

        # Перенос: округление дробной части до единицы (0.9963 → 1.00)
        limit = 10**precision
        if fraction >= limit:
            whole, fraction = whole + 1, fraction - limit
        elif fraction <= -limit:
            whole, fraction = whole - 1, fraction + limit

        return cls(whole=whole, fraction=fraction, precision=precision)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_int(self) -> int:
        """
        Scaled integer: whole × 10^precision + fraction.

        Точная обратная операция для from_scaled_integer.
        """
        return self.whole * scale_factor(self.precision) + self.fraction

    def to_float(self) -> float:
        """
        Значение как float: whole + fraction × 10^-precision.

        Для больших значений или высокой precision возможна ошибка
        представления float.
        """
        return float(self.whole) + float(self.fraction) * pow10(-self.precision)

    def is_zero(self) -> bool:
        return self.whole == 0 and self.fraction == 0

    def is_negative(self) -> bool:
        """Отрицательное значение, включая случай whole == 0, fraction < 0."""
        return self.whole < 0 or (self.whole == 0 and self.fraction < 0)

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    def to_display_string(self) -> str:
        """
        Каноническая строка '<whole>.<fraction>'.

        Дробная часть дополняется нулями слева до precision знаков.
        Разделитель всегда '.', независимо от decimal_point.

        Examples:
            >>> Decimal(whole=0, fraction=-18, precision=2).to_display_string()
            '-0.18'
        """
        return self._render(str(abs(self.whole)), CANONICAL_DECIMAL_POINT)

    def to_formatted_string(self) -> str:
        """
        Строка с разделителями групп разрядов и decimal_point.

        Examples:
            >>> Decimal.from_scaled_integer(38948737383, 4).to_formatted_string()
            '3.894.873,7383'
        """
        grouped = _group_digits(str(abs(self.whole)), self.thousand_separator)
        return self._render(grouped, self.decimal_point)

    def _render(self, whole_digits: str, point: str) -> str:
        sign = "-" if self.is_negative() else ""
        if self.precision == 0:
            return f"{sign}{whole_digits}"
        return f"{sign}{whole_digits}{point}{abs(self.fraction):0{self.precision}d}"

    def set_decimal_point(self, decimal_point: str) -> "Decimal":
        """Установка разделителя дробной части (builder-style)."""
        self.decimal_point = decimal_point
        return self

    def set_thousand_separator(self, thousand_separator: str) -> "Decimal":
        """Установка разделителя групп разрядов (builder-style)."""
        self.thousand_separator = thousand_separator
        return self

    # -------------------------------------------------------------------------
    # Arithmetic (Decimal operand)
    # -------------------------------------------------------------------------

    def add(self, other: "Decimal") -> "Decimal":
        """Сумма; precision результата = max(precision операндов)."""
        total = self.to_float() + other.to_float()
        return Decimal.from_float(total, max(self.precision, other.precision))

    def subtract(self, other: "Decimal") -> "Decimal":
        """Разность; precision результата = max(precision операндов)."""
        difference = self.to_float() - other.to_float()
        return Decimal.from_float(difference, max(self.precision, other.precision))

    def multiply(self, other: "Decimal") -> "Decimal":
        """Произведение; precision результата = max(precision операндов)."""
        product = self.to_float() * other.to_float()
        return Decimal.from_float(product, max(self.precision, other.precision))

    def divide(self, other: "Decimal") -> "Decimal":
        """
        Частное; precision результата = max(precision операндов).

        Raises:
            DecimalDivisionByZero: Если делитель равен нулю
        """
        if other.is_zero():
            logger.debug("Rejected division of %s by zero decimal", self)
            raise DecimalDivisionByZero(f"Cannot divide {self} by zero")

        quotient = self.to_float() / other.to_float()
        return Decimal.from_float(quotient, max(self.precision, other.precision))

    # -------------------------------------------------------------------------
    # Arithmetic (int operand)
    # -------------------------------------------------------------------------

    def add_int(self, value: int) -> "Decimal":
        return self.add(Decimal.from_scaled_integer(value, 0))

    def subtract_int(self, value: int) -> "Decimal":
        return self.subtract(Decimal.from_scaled_integer(value, 0))

    def multiply_by_int(self, value: int) -> "Decimal":
        return self.multiply(Decimal.from_scaled_integer(value, 0))

    def divide_by_int(self, value: int) -> "Decimal":
        return self.divide(Decimal.from_scaled_integer(value, 0))

    # -------------------------------------------------------------------------
    # Arithmetic (float operand)
    # -------------------------------------------------------------------------

    def add_float(self, value: float) -> "Decimal":
        """Сумма с float, предварительно округлённым до self.precision."""
        return self.add(Decimal.from_float(value, self.precision))

    def subtract_float(self, value: float) -> "Decimal":
        """Разность с float, предварительно округлённым до self.precision."""
        return self.subtract(Decimal.from_float(value, self.precision))

    def multiply_float(self, value: float) -> "Decimal":
        """
        Произведение на float без предварительного округления множителя.

        Результат округляется до self.precision.
        """
        product = self.to_float() * value
        return Decimal.from_float(product, self.precision)

    def divide_by_float(self, value: float) -> "Decimal":
        """
        Частное от деления на float без предварительного округления делителя.

        Raises:
            DecimalDivisionByZero: Если value == 0.0
            ValueError: Если value равно NaN/Inf
        """
        validate_finite(value, "value")
        if value == 0:
            logger.debug("Rejected division of %s by zero float", self)
            raise DecimalDivisionByZero(f"Cannot divide {self} by zero")

        quotient = self.to_float() / value
        return Decimal.from_float(quotient, self.precision)

    # -------------------------------------------------------------------------
    # Split
    # -------------------------------------------------------------------------

    def split(self, parts: int) -> list["Decimal"]:
        """
        Разбиение значения на parts частей.

        Каждая часть получает частное, отсечённое до precision знаков;
        весь остаток добавляется к первой части. Сумма scaled integer
        частей в точности равна исходному scaled integer.

        Args:
            parts: Количество частей (> 0)

        Returns:
            Список из parts значений

        Raises:
            DecimalDivisionByZero: Если parts == 0
            ValueError: Если parts отрицательный

        Examples:
            >>> [str(p) for p in Decimal.from_float(10.0, 2).split(3)]
            ['3.34', '3.33', '3.33']
        """
        if isinstance(parts, bool) or not isinstance(parts, int):
            raise ValueError(f"parts must be an int, got {type(parts).__name__}")
        if parts == 0:
            logger.debug("Rejected split of %s into zero parts", self)
            raise DecimalDivisionByZero(f"Cannot split {self} into zero parts")
        if parts < 0:
            raise ValueError(f"parts must be positive, got {parts}")

        value = self.to_float()
        share = truncate_to_precision(value / parts, self.precision)

        result = []
        allocated = 0.0
        for _ in range(parts):
            result.append(Decimal.from_float(share, self.precision))
            allocated += share

        remainder = value - allocated
        result[0] = result[0].add_float(remainder)
        return result

    # -------------------------------------------------------------------------
    # JSON
    # -------------------------------------------------------------------------

    def to_json(self) -> bytes:
        """
        JSON-представление: голое число (b'123.45', а не b'"123.45"').

        Значения в [1e-6, 1e21) пишутся цифрами без экспоненты
        (b'12345678901234568', b'0.00001'), целые без ".0".
        """
        return _format_json_number(self.to_float()).encode("utf-8")

    def from_json(self, data: Union[bytes, str]) -> "Decimal":
        """
        Декодирование JSON числа в новый Decimal с precision получателя.

        Precision и display-разделители берутся у self; payload содержит
        только число. self не изменяется.

        Args:
            data: JSON документ (bytes или str)

        Returns:
            Новый Decimal

        Raises:
            DecodeError: Если data не является конечным JSON числом
        """
        try:
            payload = json.loads(data, parse_constant=_reject_constant)
        except (ValueError, TypeError) as e:
            logger.debug("Rejected decimal JSON payload %r: %s", data, e)
            raise DecodeError(f"Invalid decimal JSON payload {data!r}: {e}") from e

        try:
            validate_decimal_amount(payload)
        except ValidationError as e:
            logger.debug("Decimal JSON payload %r is not a number: %s", data, e.message)
            raise DecodeError(f"Decimal JSON payload must be a number, got {data!r}") from e

        try:
            amount = float(payload)
        except OverflowError as e:
            raise DecodeError(f"Decimal JSON payload out of float range: {data!r}") from e
        if not is_valid_float(amount):
            raise DecodeError(f"Decimal JSON payload out of float range: {data!r}")

        decoded = Decimal.from_float(amount, self.precision)
        return decoded.set_decimal_point(self.decimal_point).set_thousand_separator(
            self.thousand_separator
        )

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return self.to_display_string()

    def __float__(self) -> float:
        return self.to_float()

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return (self.whole, self.fraction, self.precision) == (
            other.whole,
            other.fraction,
            other.precision,
        )

    def __hash__(self) -> int:
        return hash((self.whole, self.fraction, self.precision))

    def __neg__(self) -> "Decimal":
        return Decimal(
            whole=-self.whole,
            fraction=-self.fraction,
            precision=self.precision,
            decimal_point=self.decimal_point,
            thousand_separator=self.thousand_separator,
        )

    def __abs__(self) -> "Decimal":
        if self.is_negative():
            return -self
        return self.model_copy()

    def _coerce(self, other: object) -> Optional["Decimal"]:
        # int → precision 0, float → precision self (как add_int / add_float)
        if isinstance(other, Decimal):
            return other
        if isinstance(other, bool):
            return None
        if isinstance(other, int):
            return Decimal.from_scaled_integer(other, 0)
        if isinstance(other, float):
            return Decimal.from_float(other, self.precision)
        return None

    def __add__(self, other: Operand) -> "Decimal":
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self.add(operand)

    def __radd__(self, other: Operand) -> "Decimal":
        return self.__add__(other)

    def __sub__(self, other: Operand) -> "Decimal":
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self.subtract(operand)

    def __rsub__(self, other: Operand) -> "Decimal":
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return operand.subtract(self)

    def __mul__(self, other: Operand) -> "Decimal":
        if isinstance(other, float):
            return self.multiply_float(other)
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self.multiply(operand)

    def __rmul__(self, other: Operand) -> "Decimal":
        return self.__mul__(other)

    def __truediv__(self, other: Operand) -> "Decimal":
        if isinstance(other, float):
            return self.divide_by_float(other)
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self.divide(operand)

    def __rtruediv__(self, other: Operand) -> "Decimal":
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return operand.divide(self)


# =============================================================================
# HELPERS
# =============================================================================


def _group_digits(digits: str, separator: str) -> str:
    """
    Вставка separator перед каждой группой из трёх цифр справа налево.

    Examples:
        >>> _group_digits("3894873", ".")
        '3.894.873'
        >>> _group_digits("24", ".")
        '24'
    """
    groups = []
    while len(digits) > THOUSANDS_GROUP_SIZE:
        groups.append(digits[-THOUSANDS_GROUP_SIZE:])
        digits = digits[:-THOUSANDS_GROUP_SIZE]
    groups.append(digits)
    return separator.join(reversed(groups))


def _reject_constant(token: str) -> float:
    raise ValueError(f"non-finite JSON constant {token} is not a decimal")


def _format_json_number(value: float) -> str:
    """
    Кратчайшее представление float в JSON.

    Внутри [JSON_PLAIN_MIN, JSON_PLAIN_MAX) — цифры без экспоненты,
    вне диапазона — экспонента без ведущего нуля в показателе.

    Examples:
        >>> _format_json_number(1.2345678901234568e16)
        '12345678901234568'
        >>> _format_json_number(35.0)
        '35'
        >>> _format_json_number(1e-7)
        '1e-7'
    """
    text = repr(value)
    magnitude = abs(value)
    if magnitude != 0 and (magnitude < JSON_PLAIN_MIN or magnitude >= JSON_PLAIN_MAX):
        return re.sub(r"e-0(\d)$", r"e-\1", text)

    if "e" not in text:
        return text[:-2] if text.endswith(".0") else text

    mantissa, exponent = text.split("e")
    sign = ""
    if mantissa.startswith("-"):
        sign, mantissa = "-", mantissa[1:]
    head, _, tail = mantissa.partition(".")
    digits = head + tail
    point = len(head) + int(exponent)

    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return f"{sign}{digits}{'0' * (point - len(digits))}"
    return f"{sign}{digits[:point]}.{digits[point:]}"
