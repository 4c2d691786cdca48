"""
Navigation — навигация по дереву и инверсия без декодирования

Все операции работают только с позицией marker t = trailing_zeros(bits):
- parent / left_child / right_child / children / sibling
- invert (отражение дерева относительно корня 1/1)
- widen / narrow / narrow_lossy (перенос между ширинами)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ни одна операция не декодирует numerator/denominator
2. Частичные операции возвращают None, а не бросают исключения
3. invert_bits(invert_bits(x)) == x для любого x != 0
4. widen_bits точен и тотален; narrow_bits точен или отказывает
"""

import logging
from typing import Optional

from btree_fraction.core.math.bit_layout import WidthSpec, trailing_zeros
from btree_fraction.core.math.numerical_safeguards import FractionDomainViolation

LOG = logging.getLogger(__name__)


# =============================================================================
# ДЕРЕВО
# =============================================================================


def parent_bits(bits: int, spec: WidthSpec) -> Optional[int]:
    """
    Родитель узла: последнее решение пути отбрасывается,
    marker поднимается на бит t+1.

    Returns:
        Bit pattern родителя или None для нуля и корня
    """
    t = trailing_zeros(bits, spec)
    if t >= spec.max_depth:
        return None

    return (bits & ~((1 << (t + 2)) - 1)) | (1 << (t + 1))


def left_child_bits(bits: int, spec: WidthSpec) -> Optional[int]:
    """Левый потомок: marker опускается на t-1, бит t становится 0."""
    if bits == 0 or bits & 1:
        return None

    t = trailing_zeros(bits, spec)
    return (bits & ~(1 << t)) | (1 << (t - 1))


def right_child_bits(bits: int, spec: WidthSpec) -> Optional[int]:
    """Правый потомок: marker опускается на t-1, бит t остаётся 1."""
    if bits == 0 or bits & 1:
        return None

    t = trailing_zeros(bits, spec)
    return bits | (1 << (t - 1))


def children_bits(bits: int, spec: WidthSpec) -> Optional[tuple[int, int]]:
    """Пара (left, right) или None для нуля и листа."""
    if bits == 0 or bits & 1:
        return None

    t = trailing_zeros(bits, spec)
    right = bits | (1 << (t - 1))
    return right & ~(1 << t), right


def sibling_bits(bits: int, spec: WidthSpec) -> Optional[int]:
    """
    Второй потомок того же родителя: инверсия бита пути
    непосредственно над marker.

    Returns:
        Bit pattern или None для нуля и корня
    """
    t = trailing_zeros(bits, spec)
    if t >= spec.max_depth:
        return None

    return bits ^ (1 << (t + 1))


# =============================================================================
# ИНВЕРСИЯ
# =============================================================================


def invert_bits(bits: int, spec: WidthSpec) -> int:
    """
    Обратная дробь a/b → b/a.

    Дерево Штерна–Броко симметрично относительно 1/1: замена всех
    решений "к lower" на "к upper" и наоборот переводит a/b в b/a.
    Инвертируются все биты выше marker, сам marker не меняется.

    Для нуля маска пуста и результат равен нулю (unchecked-семантика;
    проверки нуля выполняют вызывающие entry points).
    """
    t = trailing_zeros(bits, spec)
    mask = (spec.all_ones << (t + 1)) & spec.all_ones
    return bits ^ mask


# =============================================================================
# ПЕРЕНОС МЕЖДУ ШИРИНАМИ
# =============================================================================


def widen_bits(bits: int, source: WidthSpec, target: WidthSpec) -> int:
    """
    Точное расширение: сдвиг влево на W_target - W_source.

    Marker сдвигается на ту же величину, глубина (W-1) - t сохраняется.

    Raises:
        FractionDomainViolation: Если target уже source
    """
    if target.width < source.width:
        raise FractionDomainViolation(
            f"cannot widen u{source.width} into narrower u{target.width}"
        )
    return bits << (target.width - source.width)


def narrow_bits(bits: int, source: WidthSpec, target: WidthSpec) -> int:
    """
    Точное сужение: допустимо только если глубина ≤ W_target - 1,
    то есть младшие W_source - W_target бит нулевые.

    Raises:
        FractionDomainViolation: При потере точности или если target шире source
    """
    if target.width > source.width:
        raise FractionDomainViolation(
            f"cannot narrow u{source.width} into wider u{target.width}"
        )

    shift = source.width - target.width
    if bits & ((1 << shift) - 1):
        raise FractionDomainViolation(
            f"bits {bits:#x} need more than {target.max_depth} levels of depth "
            f"and do not fit u{target.width} without precision loss"
        )
    return bits >> shift


def narrow_bits_lossy(bits: int, source: WidthSpec, target: WidthSpec) -> int:
    """
    Сужение с усечением: если точное невозможно, путь обрезается
    до максимальной глубины target, marker ставится на бит 0.

    Результат: предок исходного узла на глубине W_target - 1.
    """
    if target.width > source.width:
        raise FractionDomainViolation(
            f"cannot narrow u{source.width} into wider u{target.width}"
        )

    shift = source.width - target.width
    if not bits & ((1 << shift) - 1):
        return bits >> shift

    truncated = (bits >> shift) | 1
    LOG.debug(
        "truncated u%d %#x to u%d %#x", source.width, bits, target.width, truncated
    )
    return truncated
