"""
Bit Layout — параметризация кодировки по ширине контейнера

Каноническая раскладка (одна для всех ширин):

    0bPPPP_M000
      ^^^^ ^
      path marker (младший установленный бит)

- Все нули: значение 0 (не узел дерева)
- Marker на позиции t: глубина узла = (W - 1) - t
- Marker на бите W-1: корень 1/1
- Marker на бите 0: лист максимальной глубины W-1
- Биты выше marker (от старшего): 0 = к нижней границе, 1 = к верхней
- Биты ниже marker всегда нули

Поскольку path хранится от старшего бита, а marker лежит в младших
битах, обычное беззнаковое сравнение bit pattern совпадает с порядком
рациональных чисел (in-order обход дерева).
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Final

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Ширины беззнакового семейства
SUPPORTED_WIDTHS: Final[tuple[int, ...]] = (8, 16, 32, 64)

# Ширина поля величины IFrac8 (8 бит минус знаковый бит)
IFRAC8_MAGNITUDE_WIDTH: Final[int] = 7

# Минимальная ширина: корень + хотя бы один уровень
MIN_WIDTH: Final[int] = 2


# =============================================================================
# WIDTH SPEC
# =============================================================================


@dataclass(frozen=True)
class WidthSpec:
    """Конфигурация раскладки для ширины W.

    Все производные маски вычисляются один раз при создании.
    """

    width: int
    all_ones: int = field(init=False)
    max_depth: int = field(init=False)
    root_bits: int = field(init=False)
    sign_bit: int = field(init=False)

    def __post_init__(self) -> None:
        if self.width < MIN_WIDTH:
            raise ValueError(f"width must be >= {MIN_WIDTH}, got {self.width}")
        # frozen dataclass: производные поля через object.__setattr__
        object.__setattr__(self, "all_ones", (1 << self.width) - 1)
        object.__setattr__(self, "max_depth", self.width - 1)
        object.__setattr__(self, "root_bits", 1 << (self.width - 1))
        # Знаковый бит сразу над полем (для знакового варианта)
        object.__setattr__(self, "sign_bit", 1 << self.width)

    def bit_at_depth(self, depth: int) -> int:
        """
        Маска бита с позицией W-1-depth.

        Это одновременно marker узла глубины depth и бит пути, который
        записывается шагом спуска из узла глубины depth.
        """
        return 1 << (self.width - 1 - depth)


@lru_cache(maxsize=None)
def get_width_spec(width: int) -> WidthSpec:
    """Кэшированный WidthSpec для ширины."""
    return WidthSpec(width)


# =============================================================================
# БИТОВЫЕ ПРИМИТИВЫ
# =============================================================================


def trailing_zeros(bits: int, spec: WidthSpec) -> int:
    """
    Количество младших нулевых бит (позиция marker).

    Для нуля возвращает spec.width (как trailing_zeros у целого фиксированной ширины).

    Examples:
        >>> trailing_zeros(0b1000_0000, get_width_spec(8))
        7
        >>> trailing_zeros(0, get_width_spec(8))
        8
    """
    if bits == 0:
        return spec.width
    return (bits & -bits).bit_length() - 1


def depth_of(bits: int, spec: WidthSpec) -> int:
    """
    Глубина узла (precision): 0..W-1.

    Для нуля и для корня 1/1 возвращает 0.
    """
    return max(spec.max_depth - trailing_zeros(bits, spec), 0)


def is_leaf_bits(bits: int) -> bool:
    """Узел максимальной глубины: marker на бите 0. Ноль листом не является."""
    return bits & 1 != 0


def compose_bits(path: int, depth: int, spec: WidthSpec) -> int:
    """Сборка bit pattern из битов пути и глубины (установка marker)."""
    return path | spec.bit_at_depth(depth)


def to_binary_string(bits: int, width: int) -> str:
    """Двоичное представление фиксированной ширины (debug-форма)."""
    return format(bits, f"0{width}b")
