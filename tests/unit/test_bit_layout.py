"""
Тесты для модуля Bit Layout

Проверяет:
1. Производные поля WidthSpec и его валидацию
2. Позицию marker (trailing_zeros) и глубину узла
3. Сборку bit pattern и двоичную форму
"""

import dataclasses

import pytest

from btree_fraction.core.math.bit_layout import (
    IFRAC8_MAGNITUDE_WIDTH,
    SUPPORTED_WIDTHS,
    WidthSpec,
    compose_bits,
    depth_of,
    get_width_spec,
    is_leaf_bits,
    to_binary_string,
    trailing_zeros,
)


@pytest.fixture
def spec8() -> WidthSpec:
    return get_width_spec(8)


# =============================================================================
# WIDTH SPEC
# =============================================================================


class TestWidthSpec:
    """Тесты для WidthSpec"""

    def test_derived_fields_8(self, spec8: WidthSpec) -> None:
        assert spec8.width == 8
        assert spec8.all_ones == 0xFF
        assert spec8.max_depth == 7
        assert spec8.root_bits == 0x80
        assert spec8.sign_bit == 0x100

    def test_magnitude_width_7(self) -> None:
        """Поле величины IFrac8: корень 0x40, знаковый бит 0x80"""
        spec = get_width_spec(IFRAC8_MAGNITUDE_WIDTH)
        assert spec.all_ones == 0x7F
        assert spec.root_bits == 0x40
        assert spec.sign_bit == 0x80

    @pytest.mark.parametrize("width", SUPPORTED_WIDTHS)
    def test_root_is_msb(self, width: int) -> None:
        spec = get_width_spec(width)
        assert spec.root_bits == 1 << (width - 1)
        assert spec.all_ones.bit_length() == width

    @pytest.mark.parametrize("width", [0, 1, -8])
    def test_too_narrow_rejected(self, width: int) -> None:
        with pytest.raises(ValueError, match="width must be >= 2"):
            WidthSpec(width)

    def test_frozen(self, spec8: WidthSpec) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            spec8.width = 16  # type: ignore[misc]

    def test_cached(self) -> None:
        assert get_width_spec(16) is get_width_spec(16)

    def test_bit_at_depth(self, spec8: WidthSpec) -> None:
        """Глубина 0 даёт старший бит, глубина W-1 даёт бит 0"""
        assert spec8.bit_at_depth(0) == 0x80
        assert spec8.bit_at_depth(1) == 0x40
        assert spec8.bit_at_depth(7) == 0x01


# =============================================================================
# MARKER И ГЛУБИНА
# =============================================================================


class TestMarker:
    """Тесты для trailing_zeros / depth_of / is_leaf_bits"""

    @pytest.mark.parametrize(
        "bits,expected",
        [(0x80, 7), (0x40, 6), (0xAA, 1), (0x01, 0), (0xFF, 0)],
    )
    def test_trailing_zeros(self, spec8: WidthSpec, bits: int, expected: int) -> None:
        assert trailing_zeros(bits, spec8) == expected

    def test_trailing_zeros_of_zero_is_width(self, spec8: WidthSpec) -> None:
        assert trailing_zeros(0, spec8) == 8
        assert trailing_zeros(0, get_width_spec(64)) == 64

    @pytest.mark.parametrize(
        "bits,expected",
        [(0x00, 0), (0x80, 0), (0x40, 1), (0xC0, 1), (0xAA, 6), (0x01, 7)],
    )
    def test_depth(self, spec8: WidthSpec, bits: int, expected: int) -> None:
        assert depth_of(bits, spec8) == expected

    def test_leaf_iff_bit_zero_set(self) -> None:
        assert is_leaf_bits(0x01)
        assert is_leaf_bits(0xFF)
        assert not is_leaf_bits(0x00)
        assert not is_leaf_bits(0xAA)

    def test_depth_64_leaf(self) -> None:
        assert depth_of(1, get_width_spec(64)) == 63


# =============================================================================
# СБОРКА И ФОРМАТИРОВАНИЕ
# =============================================================================


class TestComposeAndFormat:
    """Тесты для compose_bits / to_binary_string"""

    def test_compose_root(self, spec8: WidthSpec) -> None:
        assert compose_bits(0, 0, spec8) == 0x80

    def test_compose_sets_marker_below_path(self, spec8: WidthSpec) -> None:
        assert compose_bits(0xA8, 6, spec8) == 0xAA
        assert compose_bits(0xFE, 7, spec8) == 0xFF

    def test_binary_zero_padded(self) -> None:
        assert to_binary_string(5, 8) == "00000101"
        assert to_binary_string(0xAA, 8) == "10101010"
        assert len(to_binary_string(1, 64)) == 64
