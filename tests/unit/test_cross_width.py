"""
Тесты переноса значений между ширинами (widen / narrow / narrow_lossy)

Проверяет:
1. Точное и тотальное расширение
2. Точное сужение и отказ при потере точности
3. Сужение с усечением до предка
"""

import pytest

from btree_fraction.core.domain import UFRAC_TYPES, UFrac8, UFrac16, UFrac32, UFrac64
from btree_fraction.core.math.numerical_safeguards import FractionDomainViolation


class TestWiden:
    """widen"""

    def test_one_widened_to_16(self) -> None:
        assert UFrac8.ONE.widen(UFrac16) == UFrac16.ONE

    @pytest.mark.parametrize("target", UFRAC_TYPES)
    def test_widen_preserves_every_8bit_value(self, target: type) -> None:
        for bits in range(256):
            x = UFrac8.from_bits(bits)
            assert x.widen(target).to_fraction() == x.to_fraction()

    def test_widen_to_same_width_is_identity(self) -> None:
        assert UFrac32.PI.widen(UFrac32) == UFrac32.PI

    def test_widen_into_narrower_rejected(self) -> None:
        with pytest.raises(FractionDomainViolation):
            UFrac16.ONE.widen(UFrac8)

    def test_golden_ratio_survives_widening(self) -> None:
        assert UFrac8.from_float(1.618).widen(UFrac64).to_fraction() == (21, 13)


class TestNarrow:
    """narrow / try_narrow"""

    def test_one_round_trip(self) -> None:
        assert UFrac8.ONE.widen(UFrac16).narrow(UFrac8) == UFrac8.ONE

    def test_round_trip_every_8bit_value(self) -> None:
        for bits in range(256):
            x = UFrac8.from_bits(bits)
            assert x.widen(UFrac64).narrow(UFrac8) == x

    def test_shallow_value_narrows(self) -> None:
        assert UFrac16.from_int(8).narrow(UFrac8) == UFrac8.MAX

    def test_deep_value_rejected(self) -> None:
        """16/1 требует глубины 15: в 8 бит не помещается"""
        with pytest.raises(FractionDomainViolation):
            UFrac16.MAX.narrow(UFrac8)

    def test_narrow_into_wider_rejected(self) -> None:
        with pytest.raises(FractionDomainViolation):
            UFrac8.ONE.narrow(UFrac16)

    def test_try_narrow(self) -> None:
        assert UFrac16.MIN.try_narrow(UFrac8) is None
        assert UFrac16.ONE.try_narrow(UFrac8) == UFrac8.ONE


class TestNarrowLossy:
    """narrow_lossy"""

    def test_exact_when_possible(self) -> None:
        assert UFrac64.ONE.narrow_lossy(UFrac8) == UFrac8.ONE

    def test_truncates_to_leaf(self) -> None:
        assert UFrac16.MAX.narrow_lossy(UFrac8) == UFrac8.MAX
        assert UFrac16.MIN.narrow_lossy(UFrac8) == UFrac8.MIN

    def test_result_is_ancestor(self) -> None:
        """Усечённое значение является предком исходного узла"""
        x = UFrac64.PI
        truncated = x.narrow_lossy(UFrac8).widen(UFrac64)
        ancestor = x
        while ancestor.depth() > truncated.depth():
            ancestor = ancestor.parent()
        assert ancestor == truncated
