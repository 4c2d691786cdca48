"""
IFrac8 — знаковая 8-битная дробь

Раскладка:

    0bSPPP_PPPM
      ^ ^^^^^^^
      | 7-битная величина (та же раскладка, что у UFrac, на 1 бит уже)
      знак (0 = неотрицательное)

Величина: от 1/7 до 7, глубина ≤ 6. Кодирование, декодирование,
навигация и инверсия работают с полем величины, знак сохраняется.

Pattern 0x80 ("отрицательный ноль") при создании сворачивается в 0x00,
чтобы равенство bits оставалось равенством значений.
"""

import math
from fractions import Fraction
from typing import Any, ClassVar, Dict, Final, Optional, Union

from pydantic import BaseModel, Field, field_validator

from btree_fraction.core.contracts.validators import validate_fraction_payload
from btree_fraction.core.math.bit_layout import (
    IFRAC8_MAGNITUDE_WIDTH,
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
    parent_bits,
    right_child_bits,
    sibling_bits,
)
from btree_fraction.core.math.numerical_safeguards import (
    validate_bits_fit,
    validate_encodable_float,
    validate_int_in_range,
)
from btree_fraction.core.math.stern_brocot import (
    FractionPair,
    compare_signed_bits,
    decode_bits,
    encode_float,
    encode_golden_ratio,
    encode_int,
    encode_rational,
)

# Знаковый бит сразу над полем величины
SIGN_BIT: Final[int] = get_width_spec(IFRAC8_MAGNITUDE_WIDTH).sign_bit

# Полная ширина контейнера
IFRAC8_WIDTH: Final[int] = IFRAC8_MAGNITUDE_WIDTH + 1


class IFrac8(BaseModel):
    """
    Знаковая дробь: знаковый бит + 7-битная величина.

    Сравнение: отрицательные меньше неотрицательных, среди отрицательных
    порядок величин обратный.
    """

    SPEC: ClassVar[WidthSpec] = get_width_spec(IFRAC8_MAGNITUDE_WIDTH)

    ZERO: ClassVar["IFrac8"]
    ONE: ClassVar["IFrac8"]
    MIN: ClassVar["IFrac8"]
    MAX: ClassVar["IFrac8"]
    GOLDEN_RATIO: ClassVar["IFrac8"]
    E: ClassVar["IFrac8"]
    PI: ClassVar["IFrac8"]

    bits: int = Field(..., ge=0, le=0xFF, description="Знак + bit pattern величины")

    model_config = {"frozen": True}

    @field_validator("bits")
    @classmethod
    def fold_negative_zero(cls, v: int) -> int:
        """0x80 и 0x00 обозначают одно значение, канонический вид 0x00."""
        return 0 if v == SIGN_BIT else v

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def _signed(cls, magnitude: int, negative: bool) -> "IFrac8":
        if negative and magnitude:
            return cls(bits=SIGN_BIT | magnitude)
        return cls(bits=magnitude)

    @classmethod
    def from_bits(cls, bits: int) -> "IFrac8":
        """
        Raises:
            FractionDomainViolation: Если bits не помещается в 8 бит
        """
        return cls(bits=validate_bits_fit(bits, IFRAC8_WIDTH))

    @classmethod
    def from_int(cls, value: int) -> "IFrac8":
        """
        Целое -7..7.

        Raises:
            FractionDomainViolation: Если |value| > 7
        """
        limit = cls.SPEC.width
        validate_int_in_range(value, "value", -limit, limit)
        return cls._signed(encode_int(abs(value), cls.SPEC), value < 0)

    @classmethod
    def from_float(cls, value: float) -> "IFrac8":
        """
        Приближение конечного float любого знака.

        Raises:
            FractionDomainViolation: Если value NaN или Inf
        """
        value = validate_encodable_float(value, signed=True)
        return cls._signed(encode_float(abs(value), cls.SPEC), value < 0)

    @classmethod
    def from_rational(cls, value: Union[Fraction, int]) -> "IFrac8":
        value = Fraction(value)
        return cls._signed(encode_rational(abs(value), cls.SPEC), value < 0)

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "IFrac8":
        validate_fraction_payload(data, cls)
        return cls.model_validate(data)

    # -------------------------------------------------------------------------
    # Знак и величина
    # -------------------------------------------------------------------------

    def magnitude_bits(self) -> int:
        return self.bits & self.SPEC.all_ones

    def is_negative(self) -> bool:
        return bool(self.bits & SIGN_BIT)

    def is_non_negative(self) -> bool:
        return not self.is_negative()

    def is_zero(self) -> bool:
        return self.bits == 0

    def _with_magnitude(self, magnitude: int) -> "IFrac8":
        return self._signed(magnitude, self.is_negative())

    def __abs__(self) -> "IFrac8":
        return type(self)(bits=self.magnitude_bits())

    def __neg__(self) -> "IFrac8":
        return self._signed(self.magnitude_bits(), not self.is_negative())

    # -------------------------------------------------------------------------
    # Преобразования наружу
    # -------------------------------------------------------------------------

    def to_bits(self) -> int:
        return self.bits

    def to_fraction(self) -> FractionPair:
        """Знаковый numerator, положительный denominator."""
        numerator, denominator = decode_bits(self.magnitude_bits(), self.SPEC)
        return FractionPair(-numerator if self.is_negative() else numerator, denominator)

    def to_rational(self) -> Fraction:
        numerator, denominator = self.to_fraction()
        return Fraction(numerator, denominator)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()

    def to_binary(self) -> str:
        return to_binary_string(self.bits, IFRAC8_WIDTH)

    def __float__(self) -> float:
        numerator, denominator = self.to_fraction()
        return numerator / denominator

    def __str__(self) -> str:
        numerator, denominator = self.to_fraction()
        return f"{numerator}/{denominator}"

    def __repr__(self) -> str:
        return f"IFrac8(0b{self.to_binary()})"

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def _compare(self, other: "IFrac8") -> int:
        return compare_signed_bits(self.bits, other.bits, self.SPEC)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, IFrac8):
            return NotImplemented
        return self._compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, IFrac8):
            return NotImplemented
        return self._compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, IFrac8):
            return NotImplemented
        return self._compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, IFrac8):
            return NotImplemented
        return self._compare(other) >= 0

    # -------------------------------------------------------------------------
    # Структура дерева (по величине, знак сохраняется)
    # -------------------------------------------------------------------------

    def depth(self) -> int:
        return depth_of(self.magnitude_bits(), self.SPEC)

    def is_leaf(self) -> bool:
        return is_leaf_bits(self.magnitude_bits())

    def parent(self) -> Optional["IFrac8"]:
        bits = parent_bits(self.magnitude_bits(), self.SPEC)
        return None if bits is None else self._with_magnitude(bits)

    def left_child(self) -> Optional["IFrac8"]:
        bits = left_child_bits(self.magnitude_bits(), self.SPEC)
        return None if bits is None else self._with_magnitude(bits)

    def right_child(self) -> Optional["IFrac8"]:
        bits = right_child_bits(self.magnitude_bits(), self.SPEC)
        return None if bits is None else self._with_magnitude(bits)

    def children(self) -> Optional[tuple["IFrac8", "IFrac8"]]:
        pair = children_bits(self.magnitude_bits(), self.SPEC)
        if pair is None:
            return None
        return self._with_magnitude(pair[0]), self._with_magnitude(pair[1])

    def sibling(self) -> Optional["IFrac8"]:
        bits = sibling_bits(self.magnitude_bits(), self.SPEC)
        return None if bits is None else self._with_magnitude(bits)

    # -------------------------------------------------------------------------
    # Инверсия
    # -------------------------------------------------------------------------

    def invert(self) -> "IFrac8":
        """
        Обратная дробь с сохранением знака.

        Соглашение: invert(ZERO) == MAX. Кодировка не имеет бесконечности,
        поэтому это не точная обратная величина.
        """
        if self.bits == 0:
            return self.MAX
        return self._with_magnitude(invert_bits(self.magnitude_bits(), self.SPEC))

    def try_invert(self) -> Optional["IFrac8"]:
        """Обратная дробь или None для нуля."""
        if self.bits == 0:
            return None
        return self.invert()


IFrac8.ZERO = IFrac8(bits=0)
IFrac8.ONE = IFrac8(bits=IFrac8.SPEC.root_bits)
IFrac8.MIN = IFrac8(bits=1)
IFrac8.MAX = IFrac8(bits=IFrac8.SPEC.all_ones)
IFrac8.GOLDEN_RATIO = IFrac8(bits=encode_golden_ratio(IFrac8.SPEC))
IFrac8.E = IFrac8.from_float(math.e)
IFrac8.PI = IFrac8.from_float(math.pi)
