"""
Stern–Brocot — кодирование, декодирование и сравнение узлов

Модуль реализует общий для всех ширин алгоритм:
- Decoder: bit pattern → точная пара (numerator, denominator)
- Encoder: целое 0..W → узел n/1
- Encoder: float / Fraction → ближайший по направлению узел глубины ≤ W-1
- Comparator: беззнаковый (порядок целых) и знаковый (для IFrac8)

Границы спуска (канонические для дерева Штерна–Броко):
    lower = 0/1, mid = 1/1, upper = 1/0

    бит 0: upper := mid; mid := mediant(lower, mid)
    бит 1: lower := mid; mid := mediant(mid, upper)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Декодирование не выполняет деления и всегда точно
2. decode(encode_int(n)) == (n, 1) для 0 ≤ n ≤ W
3. Спуск кодировщика зеркально повторяет поддержку границ декодера
4. Кодировщик: чистая функция без побочных эффектов (кроме DEBUG-логов)
"""

import logging
import math
from fractions import Fraction
from typing import Callable, Final, NamedTuple, Optional, Union

from btree_fraction.core.math.bit_layout import WidthSpec, compose_bits, depth_of
from btree_fraction.core.math.numerical_safeguards import (
    FractionDomainViolation,
    validate_encodable_float,
    validate_int_in_range,
)

LOG = logging.getLogger(__name__)

# Золотое сечение как float (для справки и сравнения с точной константой)
GOLDEN_RATIO_FLOAT: Final[float] = (1.0 + math.sqrt(5.0)) / 2.0

# Знак (mid - target) для текущего mid = num/den: -1, 0 или 1
OrderFn = Callable[[int, int], int]


class FractionPair(NamedTuple):
    """Точная пара (numerator, denominator). Сравнивается как обычный tuple."""

    numerator: int
    denominator: int


# =============================================================================
# DECODER
# =============================================================================


def decode_bits(bits: int, spec: WidthSpec) -> FractionPair:
    """
    Декодирование bit pattern в (numerator, denominator).

    Глубина 0 обрабатывается отдельно: bit pattern равен 0 или корню,
    результат (0, 1) или (1, 1).

    Числитель и знаменатель растут не быстрее чисел Фибоначчи
    и помещаются в W бит для любой глубины ≤ W-1.

    Args:
        bits: Bit pattern (валидированный по ширине)
        spec: Параметры ширины

    Returns:
        FractionPair(numerator, denominator)

    Examples:
        >>> decode_bits(0b1010_1010, get_width_spec(8))
        FractionPair(numerator=21, denominator=13)
    """
    depth = depth_of(bits, spec)

    if depth == 0:
        return FractionPair(bits >> spec.max_depth, 1)

    lower_num, lower_den = 0, 1
    mid_num, mid_den = 1, 1
    upper_num, upper_den = 1, 0

    for step in range(depth):
        if bits & spec.bit_at_depth(step):
            lower_num, lower_den = mid_num, mid_den
            mid_num, mid_den = mid_num + upper_num, mid_den + upper_den
        else:
            upper_num, upper_den = mid_num, mid_den
            mid_num, mid_den = mid_num + lower_num, mid_den + lower_den

    return FractionPair(mid_num, mid_den)


# =============================================================================
# ENCODER: ЦЕЛЫЕ
# =============================================================================


def encode_int(value: int, spec: WidthSpec) -> int:
    """
    Кодирование целого n в узел n/1.

    Узел n/1 достигается n-1 шагами "вверх" от корня:
    ALL_ONES << (W - n), marker на бите W-n.

    Args:
        value: Целое 0..W
        spec: Параметры ширины

    Returns:
        Bit pattern узла

    Raises:
        FractionDomainViolation: Если value < 0 или value > W
    """
    validate_int_in_range(value, "value", 0, spec.width)

    if value == 0:
        return 0

    return (spec.all_ones << (spec.width - value)) & spec.all_ones


# =============================================================================
# ENCODER: СПУСК ПО ДЕРЕВУ
# =============================================================================


def _descend(order_of: OrderFn, spec: WidthSpec, target: object) -> int:
    """
    Бинарный спуск к целевому значению, не глубже W-1.

    На каждом шаге mid сравнивается с целью:
    - mid == v: остановка, текущий узел точный
    - mid > v: шаг к lower (бит 0), узел запоминается как последнее
      пересечение сверху
    - mid < v: шаг к upper (бит 1), узел запоминается как последнее
      пересечение снизу

    После исчерпания глубины финальное сравнение mid с целью выбирает
    узел последнего пересечения в том же направлении. Это направленное
    округление ("последнее пересечённое направление"), а не округление
    к ближайшему.
    """
    lower_num, lower_den = 0, 1
    mid_num, mid_den = 1, 1
    upper_num, upper_den = 1, 0

    path = 0
    depth = 0
    last_upper: Optional[tuple[int, int]] = None
    last_lower: Optional[tuple[int, int]] = None

    while depth < spec.max_depth:
        order = order_of(mid_num, mid_den)
        if order == 0:
            break

        if order > 0:
            LOG.debug("%d/%d < %s < %d/%d", lower_num, lower_den, target, mid_num, mid_den)
            upper_num, upper_den = mid_num, mid_den
            mid_num, mid_den = mid_num + lower_num, mid_den + lower_den
            depth += 1
            last_upper = (path, depth)
        else:
            LOG.debug("%d/%d < %s < %d/%d", mid_num, mid_den, target, upper_num, upper_den)
            lower_num, lower_den = mid_num, mid_den
            mid_num, mid_den = mid_num + upper_num, mid_den + upper_den
            path |= spec.bit_at_depth(depth)
            depth += 1
            last_lower = (path, depth)

    order = order_of(mid_num, mid_den)
    if order > 0 and last_upper is not None:
        path, depth = last_upper
    elif order < 0 and last_lower is not None:
        path, depth = last_lower

    LOG.debug("%s resolved at depth %d (final order %d)", target, depth, order)
    return compose_bits(path, depth, spec)


def _float_order(value: float) -> OrderFn:
    """Сравнение mid с float через кросс-умножение: num vs value * den."""

    def order_of(num: int, den: int) -> int:
        scaled = value * den
        if num > scaled:
            return 1
        if num < scaled:
            return -1
        return 0

    return order_of


def _rational_order(value: Fraction) -> OrderFn:
    """Точное сравнение mid с Fraction: num * q vs p * den."""
    p, q = value.numerator, value.denominator

    def order_of(num: int, den: int) -> int:
        diff = num * q - p * den
        return (diff > 0) - (diff < 0)

    return order_of


def _golden_ratio_order(num: int, den: int) -> int:
    """
    Точное сравнение num/den с (1 + √5) / 2 в целых числах.

    num/den > φ  ⇔  2·num - den > den·√5  ⇔  2·num - den > 0 и (2·num - den)² > 5·den²
    Равенство невозможно (φ иррационально).
    """
    lhs = 2 * num - den
    if lhs <= 0:
        return -1
    return 1 if lhs * lhs > 5 * den * den else -1


def encode_float(value: float, spec: WidthSpec) -> int:
    """
    Кодирование конечного неотрицательного float.

    Args:
        value: Значение (0.0 и -0.0 дают ноль)
        spec: Параметры ширины

    Returns:
        Bit pattern узла глубины ≤ W-1

    Raises:
        FractionDomainViolation: Если value < 0, NaN или Inf

    Examples:
        >>> decode_bits(encode_float(1.618, get_width_spec(8)), get_width_spec(8))
        FractionPair(numerator=21, denominator=13)
    """
    value = validate_encodable_float(value)

    if value == 0.0:
        return 0

    return _descend(_float_order(value), spec, value)


def encode_rational(value: Union[Fraction, int], spec: WidthSpec) -> int:
    """
    Кодирование точного рационального числа.

    Тот же спуск, что и для float, но сравнения выполняются
    в целых числах без округления.

    Raises:
        FractionDomainViolation: Если value < 0
    """
    value = Fraction(value)

    if value < 0:
        raise FractionDomainViolation(f"value must be non-negative, got {value}")

    if value == 0:
        return 0

    return _descend(_rational_order(value), spec, value)


def encode_golden_ratio(spec: WidthSpec) -> int:
    """Узел для точного золотого сечения (чередующийся путь 1010...)."""
    return _descend(_golden_ratio_order, spec, "phi")


# =============================================================================
# COMPARATOR
# =============================================================================


def compare_bits(lhs: int, rhs: int) -> int:
    """
    Беззнаковое сравнение: порядок bit pattern совпадает с порядком значений.

    Returns:
        -1, 0 или 1
    """
    return (lhs > rhs) - (lhs < rhs)


def compare_signed_bits(lhs: int, rhs: int, magnitude_spec: WidthSpec) -> int:
    """
    Знаковое сравнение: знаковый бит сразу над полем величины.

    - отрицательное < неотрицательного
    - оба неотрицательные: беззнаковый порядок величин
    - оба отрицательные: обратный порядок величин

    Returns:
        -1, 0 или 1
    """
    sign_bit = magnitude_spec.sign_bit
    lhs_negative = bool(lhs & sign_bit)
    rhs_negative = bool(rhs & sign_bit)

    if lhs_negative != rhs_negative:
        return -1 if lhs_negative else 1

    order = compare_bits(lhs & magnitude_spec.all_ones, rhs & magnitude_spec.all_ones)
    return -order if lhs_negative else order
