"""
UFrac — беззнаковые дроби фиксированной ширины (8/16/32/64 бит)

Immutable Pydantic модели поверх общего алгоритма из core.math.
Единственное поле bits, он же каноническая сериализованная форма:
два экземпляра с равными bits равны как значения, и наоборот.

Порядок экземпляров одной ширины совпадает с порядком целых чисел bits,
что совпадает с порядком рациональных значений.
"""

import math
from fractions import Fraction
from typing import Any, ClassVar, Dict, Optional, Type, TypeVar, Union

from pydantic import BaseModel, Field

from btree_fraction.core.contracts.validators import validate_fraction_payload
from btree_fraction.core.math.bit_layout import (
    WidthSpec,
    depth_of,
    get_width_spec,
    is_leaf_bits,
    to_binary_string,
)
from btree_fraction.core.math.navigation import (
    children_bits,
    invert_bits,
    left_child_bits,
    narrow_bits,
    narrow_bits_lossy,
    parent_bits,
    right_child_bits,
    sibling_bits,
    widen_bits,
)
from btree_fraction.core.math.numerical_safeguards import (
    FractionDomainViolation,
    FractionPreconditionViolation,
    validate_bits_fit,
)
from btree_fraction.core.math.stern_brocot import (
    FractionPair,
    compare_bits,
    decode_bits,
    encode_float,
    encode_golden_ratio,
    encode_int,
    encode_rational,
)

UFracT = TypeVar("UFracT", bound="UFrac")


# =============================================================================
# BASE MODEL
# =============================================================================


class UFrac(BaseModel):
    """
    Беззнаковая дробь как узел дерева Штерна–Броко глубины ≤ W-1.

    Базовый класс семейства; ширина задаётся подклассом через SPEC.
    Immutable модель (frozen=True): все операции возвращают новый экземпляр.
    """

    SPEC: ClassVar[WidthSpec]

    # Именованные константы (устанавливаются для каждой ширины)
    ZERO: ClassVar["UFrac"]
    ONE: ClassVar["UFrac"]
    MIN: ClassVar["UFrac"]
    MAX: ClassVar["UFrac"]
    GOLDEN_RATIO: ClassVar["UFrac"]
    E: ClassVar["UFrac"]
    PI: ClassVar["UFrac"]

    bits: int = Field(..., ge=0, description="Bit pattern: путь + marker")

    model_config = {"frozen": True}

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_bits(cls: Type[UFracT], bits: int) -> UFracT:
        """
        Экземпляр из сырого bit pattern.

        Raises:
            FractionDomainViolation: Если bits не помещается в W бит
        """
        return cls(bits=validate_bits_fit(bits, cls.SPEC.width))

    @classmethod
    def from_int(cls: Type[UFracT], value: int) -> UFracT:
        """
        Целое 0..W как узел n/1.

        Raises:
            FractionDomainViolation: Если value < 0 или value > W
        """
        return cls(bits=encode_int(value, cls.SPEC))

    @classmethod
    def from_float(cls: Type[UFracT], value: float) -> UFracT:
        """
        Приближение конечного неотрицательного float.

        Округление направленное (последнее пересечённое направление),
        не к ближайшему значению.

        Raises:
            FractionDomainViolation: Если value < 0, NaN или Inf
        """
        return cls(bits=encode_float(value, cls.SPEC))

    @classmethod
    def from_rational(cls: Type[UFracT], value: Union[Fraction, int]) -> UFracT:
        """Приближение точного рационального числа (сравнения без округления)."""
        return cls(bits=encode_rational(value, cls.SPEC))

    @classmethod
    def from_payload(cls: Type[UFracT], data: Dict[str, Any]) -> UFracT:
        """
        Экземпляр из JSON payload {"bits": n} после проверки схемы.

        Raises:
            jsonschema.ValidationError: Если payload не соответствует схеме
        """
        validate_fraction_payload(data, cls)
        return cls.model_validate(data)

    # -------------------------------------------------------------------------
    # Преобразования наружу
    # -------------------------------------------------------------------------

    def to_bits(self) -> int:
        return self.bits

    def to_fraction(self) -> FractionPair:
        """Точная пара (numerator, denominator); без деления."""
        return decode_bits(self.bits, self.SPEC)

    def to_rational(self) -> Fraction:
        numerator, denominator = self.to_fraction()
        return Fraction(numerator, denominator)

    def to_payload(self) -> Dict[str, Any]:
        """Сериализованная форма: {"bits": n}."""
        return self.model_dump()

    def to_binary(self) -> str:
        """Двоичная строка фиксированной ширины."""
        return to_binary_string(self.bits, self.SPEC.width)

    def __float__(self) -> float:
        numerator, denominator = self.to_fraction()
        return numerator / denominator

    def __str__(self) -> str:
        numerator, denominator = self.to_fraction()
        return f"{numerator}/{denominator}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(0b{self.to_binary()})"

    # -------------------------------------------------------------------------
    # Сравнение (только одинаковая ширина)
    # -------------------------------------------------------------------------

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return compare_bits(self.bits, other.bits) < 0

    def __le__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return compare_bits(self.bits, other.bits) <= 0

    def __gt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return compare_bits(self.bits, other.bits) > 0

    def __ge__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return compare_bits(self.bits, other.bits) >= 0

    # -------------------------------------------------------------------------
    # Структура дерева
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.bits == 0

    def depth(self) -> int:
        """Глубина узла 0..W-1 (для нуля и корня 0)."""
        return depth_of(self.bits, self.SPEC)

    def is_leaf(self) -> bool:
        """Максимальная глубина: потомки не представимы."""
        return is_leaf_bits(self.bits)

    def parent(self: UFracT) -> Optional[UFracT]:
        """Родитель; None для нуля и корня."""
        bits = parent_bits(self.bits, self.SPEC)
        return None if bits is None else type(self)(bits=bits)

    def left_child(self: UFracT) -> Optional[UFracT]:
        """Левый потомок; None для нуля и листа."""
        bits = left_child_bits(self.bits, self.SPEC)
        return None if bits is None else type(self)(bits=bits)

    def right_child(self: UFracT) -> Optional[UFracT]:
        """Правый потомок; None для нуля и листа."""
        bits = right_child_bits(self.bits, self.SPEC)
        return None if bits is None else type(self)(bits=bits)

    def children(self: UFracT) -> Optional[tuple[UFracT, UFracT]]:
        """(left_child, right_child); None для нуля и листа."""
        pair = children_bits(self.bits, self.SPEC)
        if pair is None:
            return None
        return type(self)(bits=pair[0]), type(self)(bits=pair[1])

    def sibling(self: UFracT) -> Optional[UFracT]:
        """Второй потомок того же родителя; None для нуля и корня."""
        bits = sibling_bits(self.bits, self.SPEC)
        return None if bits is None else type(self)(bits=bits)

    # -------------------------------------------------------------------------
    # Инверсия
    # -------------------------------------------------------------------------

    def invert(self: UFracT) -> UFracT:
        """
        Обратная дробь a/b → b/a.

        invert(invert(x)) == x для любого ненулевого x.

        Raises:
            FractionPreconditionViolation: Если self равен нулю
        """
        if self.bits == 0:
            raise FractionPreconditionViolation(f"cannot invert 0/1 ({type(self).__name__})")
        return self.invert_unchecked()

    def try_invert(self: UFracT) -> Optional[UFracT]:
        """Обратная дробь или None для нуля."""
        if self.bits == 0:
            return None
        return self.invert_unchecked()

    def invert_unchecked(self: UFracT) -> UFracT:
        """Обратная дробь; для нуля возвращает ноль (соглашение, не математика)."""
        return type(self)(bits=invert_bits(self.bits, self.SPEC))

    # -------------------------------------------------------------------------
    # Перенос между ширинами
    # -------------------------------------------------------------------------

    def widen(self, target: Type[UFracT]) -> UFracT:
        """
        Точное расширение в более широкий тип (или тот же).

        Raises:
            FractionDomainViolation: Если target уже текущего типа
        """
        return target(bits=widen_bits(self.bits, self.SPEC, target.SPEC))

    def narrow(self, target: Type[UFracT]) -> UFracT:
        """
        Точное сужение; отказ при потере точности.

        Raises:
            FractionDomainViolation: Если глубина больше target.SPEC.max_depth
        """
        return target(bits=narrow_bits(self.bits, self.SPEC, target.SPEC))

    def try_narrow(self, target: Type[UFracT]) -> Optional[UFracT]:
        """Точное сужение или None при потере точности."""
        try:
            return self.narrow(target)
        except FractionDomainViolation:
            return None

    def narrow_lossy(self, target: Type[UFracT]) -> UFracT:
        """Сужение с усечением пути до максимальной глубины target."""
        return target(bits=narrow_bits_lossy(self.bits, self.SPEC, target.SPEC))


# =============================================================================
# ШИРИНЫ
# =============================================================================


class UFrac8(UFrac):
    """8 бит: значения от 1/8 до 8, глубина ≤ 7."""

    SPEC: ClassVar[WidthSpec] = get_width_spec(8)

    bits: int = Field(..., ge=0, le=0xFF, description="Bit pattern: путь + marker")


class UFrac16(UFrac):
    """16 бит: значения от 1/16 до 16, глубина ≤ 15."""

    SPEC: ClassVar[WidthSpec] = get_width_spec(16)

    bits: int = Field(..., ge=0, le=0xFFFF, description="Bit pattern: путь + marker")


class UFrac32(UFrac):
    """32 бита: значения от 1/32 до 32, глубина ≤ 31."""

    SPEC: ClassVar[WidthSpec] = get_width_spec(32)

    bits: int = Field(..., ge=0, le=0xFFFF_FFFF, description="Bit pattern: путь + marker")


class UFrac64(UFrac):
    """64 бита: значения от 1/64 до 64, глубина ≤ 63."""

    SPEC: ClassVar[WidthSpec] = get_width_spec(64)

    bits: int = Field(
        ..., ge=0, le=0xFFFF_FFFF_FFFF_FFFF, description="Bit pattern: путь + marker"
    )


def _install_constants(cls: Type[UFrac]) -> None:
    """Именованные константы ширины; GOLDEN_RATIO вычисляется точно, E и PI из float."""
    spec = cls.SPEC
    cls.ZERO = cls(bits=0)
    cls.ONE = cls(bits=spec.root_bits)
    cls.MIN = cls(bits=1)
    cls.MAX = cls(bits=spec.all_ones)
    cls.GOLDEN_RATIO = cls(bits=encode_golden_ratio(spec))
    cls.E = cls.from_float(math.e)
    cls.PI = cls.from_float(math.pi)


UFRAC_TYPES: tuple[Type[UFrac], ...] = (UFrac8, UFrac16, UFrac32, UFrac64)

for _cls in UFRAC_TYPES:
    _install_constants(_cls)
