"""
Numerical Safeguards — проверки входов перед кодированием

Модуль отвечает за границы допустимых значений для всех конструкторов:
- Классификация float (NaN/Inf)
- Проверка float перед спуском по дереву Штерна–Броко
- Проверка целых чисел и bit pattern по ширине контейнера
- Исключения, общие для всего пакета

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ни один конструктор не начинает работу с битами до валидации входа
2. NaN/Inf никогда не доходят до кросс-умножения
3. Нарушение domain всегда FractionDomainViolation (ValueError), без panic
"""

import math
from typing import Final

# =============================================================================
# EXCEPTIONS
# =============================================================================


class FractionDomainViolation(ValueError):
    """
    Значение вне представимого диапазона.

    Возникает при:
    - отрицательном, NaN или бесконечном float
    - целом числе больше ширины контейнера
    - bit pattern шире контейнера
    - narrowing с потерей точности через точный entry point
    """
    pass


class FractionPreconditionViolation(Exception):
    """
    Ошибка программиста: нарушено предусловие операции.

    Пример: invert() для нуля. Для каждой такой операции существует
    checked-альтернатива, возвращающая None.
    """
    pass


# =============================================================================
# КЛАССИФИКАЦИЯ FLOAT
# =============================================================================

# Минимально допустимое значение для беззнакового кодирования
UNSIGNED_FLOOR: Final[float] = 0.0


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf

    Examples:
        >>> is_valid_float(1.5)
        True
        >>> is_valid_float(float('nan'))
        False
    """
    return math.isfinite(value)


def is_negative_zero(value: float) -> bool:
    """Проверка на -0.0 (знаковый бит при нулевой величине)."""
    return value == 0.0 and math.copysign(1.0, value) < 0


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_encodable_float(value: float, name: str = "value", signed: bool = False) -> float:
    """
    Валидация float перед спуском по дереву.

    Беззнаковое семейство не имеет представления для Inf/NaN и
    отрицательных чисел. Знаковый вариант снимает только ограничение знака.

    Args:
        value: Исходное значение (int допускается, приводится к float)
        name: Имя параметра (для сообщения об ошибке)
        signed: Разрешить отрицательные значения

    Returns:
        value, приведённый к float

    Raises:
        FractionDomainViolation: NaN, Inf, или value < 0 при signed=False
    """
    try:
        value = float(value)
    except OverflowError as e:
        raise FractionDomainViolation(f"{name} is too large to be a float: {value}") from e

    if math.isnan(value):
        raise FractionDomainViolation(f"{name} must not be NaN")

    if math.isinf(value):
        raise FractionDomainViolation(f"{name} must be finite, got {value}")

    if not signed and value < UNSIGNED_FLOOR:
        raise FractionDomainViolation(f"{name} must be non-negative, got {value}")

    return value


def validate_int_in_range(value: int, name: str, min_value: int, max_value: int) -> int:
    """
    Валидация целого числа в диапазоне [min_value, max_value].

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        min_value: Минимальное допустимое значение
        max_value: Максимальное допустимое значение

    Returns:
        value без изменений

    Raises:
        FractionDomainViolation: Если value не int или вне диапазона
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise FractionDomainViolation(f"{name} must be an integer, got {value!r}")

    if value < min_value:
        raise FractionDomainViolation(f"{name} must be >= {min_value}, got {value}")

    if value > max_value:
        raise FractionDomainViolation(f"{name} must be <= {max_value}, got {value}")

    return value


def validate_bits_fit(bits: int, width: int) -> int:
    """
    Валидация bit pattern: неотрицательный и помещается в width бит.

    Args:
        bits: Bit pattern
        width: Ширина контейнера в битах

    Returns:
        bits без изменений

    Raises:
        FractionDomainViolation: Если bits < 0 или bits >= 2**width
    """
    return validate_int_in_range(bits, f"bits (u{width})", 0, (1 << width) - 1)
