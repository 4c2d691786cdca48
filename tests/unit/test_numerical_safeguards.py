"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Распознавание NaN/Inf и -0.0
2. Валидацию float перед кодированием (беззнаковый и знаковый режим)
3. Валидацию целых в диапазоне
4. Валидацию ширины bit pattern
5. Иерархию исключений
"""

import math

import pytest

from btree_fraction.core.math.numerical_safeguards import (
    UNSIGNED_FLOOR,
    FractionDomainViolation,
    FractionPreconditionViolation,
    is_negative_zero,
    is_valid_float,
    validate_bits_fit,
    validate_encodable_float,
    validate_int_in_range,
)

# =============================================================================
# ТЕСТЫ РАСПОЗНАВАНИЯ FLOAT
# =============================================================================


class TestIsValidFloat:
    """Тесты для is_valid_float"""

    def test_finite_values_valid(self) -> None:
        """Конечные значения валидны"""
        assert is_valid_float(0.0)
        assert is_valid_float(-1.5)
        assert is_valid_float(1e300)

    def test_nan_invalid(self) -> None:
        assert not is_valid_float(float("nan"))

    def test_inf_invalid(self) -> None:
        """+Inf и -Inf невалидны"""
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))


class TestIsNegativeZero:
    """Тесты для is_negative_zero"""

    def test_negative_zero_detected(self) -> None:
        assert is_negative_zero(-0.0)

    def test_positive_zero_not_negative(self) -> None:
        assert not is_negative_zero(0.0)

    def test_nonzero_values_not_negative_zero(self) -> None:
        assert not is_negative_zero(-1e-300)
        assert not is_negative_zero(1.0)


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ FLOAT
# =============================================================================


class TestValidateEncodableFloat:
    """Тесты для validate_encodable_float"""

    def test_positive_value_passes(self) -> None:
        assert validate_encodable_float(1.618) == 1.618

    def test_zero_passes(self) -> None:
        """0.0 и -0.0 допустимы (ноль кодируется отдельно)"""
        assert validate_encodable_float(0.0) == 0.0
        assert validate_encodable_float(-0.0) == 0.0

    def test_int_converted_to_float(self) -> None:
        result = validate_encodable_float(3)
        assert result == 3.0
        assert isinstance(result, float)

    def test_negative_rejected_when_unsigned(self) -> None:
        with pytest.raises(FractionDomainViolation, match="non-negative"):
            validate_encodable_float(-0.5)

    def test_negative_allowed_when_signed(self) -> None:
        assert validate_encodable_float(-0.5, signed=True) == -0.5

    @pytest.mark.parametrize("signed", [False, True])
    def test_nan_rejected(self, signed: bool) -> None:
        with pytest.raises(FractionDomainViolation, match="NaN"):
            validate_encodable_float(float("nan"), signed=signed)

    @pytest.mark.parametrize("value", [math.inf, -math.inf])
    def test_inf_rejected(self, value: float) -> None:
        """Бесконечность не кодируется ни в одном режиме"""
        with pytest.raises(FractionDomainViolation, match="finite"):
            validate_encodable_float(value, signed=True)

    def test_huge_int_rejected(self) -> None:
        """Целое, не помещающееся в float, нарушает домен"""
        with pytest.raises(FractionDomainViolation, match="too large"):
            validate_encodable_float(10**400)

    def test_custom_name_in_message(self) -> None:
        with pytest.raises(FractionDomainViolation, match="ratio"):
            validate_encodable_float(-1.0, name="ratio")

    def test_unsigned_floor_is_zero(self) -> None:
        assert UNSIGNED_FLOOR == 0.0


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ ЦЕЛЫХ
# =============================================================================


class TestValidateIntInRange:
    """Тесты для validate_int_in_range"""

    def test_bounds_inclusive(self) -> None:
        assert validate_int_in_range(0, "n", 0, 8) == 0
        assert validate_int_in_range(8, "n", 0, 8) == 8

    def test_below_min_rejected(self) -> None:
        with pytest.raises(FractionDomainViolation, match=">= 0"):
            validate_int_in_range(-1, "n", 0, 8)

    def test_above_max_rejected(self) -> None:
        with pytest.raises(FractionDomainViolation, match="<= 8"):
            validate_int_in_range(9, "n", 0, 8)

    def test_bool_rejected(self) -> None:
        """bool является подклассом int, но не целым значением дроби"""
        with pytest.raises(FractionDomainViolation, match="integer"):
            validate_int_in_range(True, "n", 0, 8)

    def test_float_rejected(self) -> None:
        with pytest.raises(FractionDomainViolation, match="integer"):
            validate_int_in_range(2.0, "n", 0, 8)


class TestValidateBitsFit:
    """Тесты для validate_bits_fit"""

    def test_full_range_accepted(self) -> None:
        assert validate_bits_fit(0, 8) == 0
        assert validate_bits_fit(0xFF, 8) == 0xFF
        assert validate_bits_fit(0xFFFF_FFFF_FFFF_FFFF, 64) == 0xFFFF_FFFF_FFFF_FFFF

    def test_too_wide_rejected(self) -> None:
        with pytest.raises(FractionDomainViolation, match="u8"):
            validate_bits_fit(0x100, 8)

    def test_negative_rejected(self) -> None:
        with pytest.raises(FractionDomainViolation):
            validate_bits_fit(-1, 16)


# =============================================================================
# ТЕСТЫ ИСКЛЮЧЕНИЙ
# =============================================================================


class TestExceptionHierarchy:
    """Иерархия исключений"""

    def test_domain_violation_is_value_error(self) -> None:
        assert issubclass(FractionDomainViolation, ValueError)

    def test_precondition_violation_is_not_value_error(self) -> None:
        """Нарушение предусловия: ошибка программиста, а не значения"""
        assert issubclass(FractionPreconditionViolation, Exception)
        assert not issubclass(FractionPreconditionViolation, ValueError)
