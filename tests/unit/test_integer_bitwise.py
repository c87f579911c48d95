"""
Тесты для побитовых операций BigZ

Все операции определены над бесконечным дополнительным кодом, поэтому
эталоном служат побитовые операторы int (та же семантика).

Проверяет:
1. not/and/or/xor и производные (nand, nor, eqv, and_c1/2, or_c1/2)
2. test_bit и bit_count, включая отрицательные значения
3. Арифметический сдвиг ash (округление к минус бесконечности)
"""

import pytest

from exactnum.core.math.errors import NumberDomainError
from exactnum.core.math.integer import BigZ


def z(value: int) -> BigZ:
    return BigZ.from_int(value)


OPERANDS = [0, 1, -1, 10, -10, 2**32 - 1, -(2**32), 2**32, 0x123456789ABCDEF0123, -(3**60)]

MASK_OPERATIONS = {
    "and_": lambda x, y: x & y,
    "or_": lambda x, y: x | y,
    "xor": lambda x, y: x ^ y,
    "nand": lambda x, y: ~(x & y),
    "nor": lambda x, y: ~(x | y),
    "eqv": lambda x, y: ~(x ^ y),
    "and_c1": lambda x, y: ~x & y,
    "and_c2": lambda x, y: x & ~y,
    "or_c1": lambda x, y: ~x | y,
    "or_c2": lambda x, y: x | ~y,
}


# =============================================================================
# ЛОГИЧЕСКИЕ ОПЕРАЦИИ
# =============================================================================


class TestLogicalOperations:
    """Тесты логических операций над дополнительным кодом"""

    def test_known_values(self) -> None:
        """a = 10: not(10) = -11"""
        assert z(10).not_() == -11
        assert z(-11).not_() == 10
        assert z(0).not_() == -1
        assert z(-1).and_(5) == 5
        assert z(-2).or_(1) == -1

    @pytest.mark.parametrize("name", sorted(MASK_OPERATIONS))
    @pytest.mark.parametrize("x", OPERANDS)
    @pytest.mark.parametrize("y", OPERANDS)
    def test_matches_int(self, name: str, x: int, y: int) -> None:
        """Результат совпадает с операторами int"""
        result = getattr(z(x), name)(z(y))
        assert result == MASK_OPERATIONS[name](x, y)

    @pytest.mark.parametrize("x", OPERANDS)
    def test_not_matches_int(self, x: int) -> None:
        """~a == -(a + 1)"""
        assert z(x).not_() == ~x
        assert ~z(x) == ~x

    def test_operators(self) -> None:
        """Операторы &, |, ^ и отражённые варианты"""
        a = z(0b1100)
        assert a & 0b1010 == 0b1000
        assert a | 0b1010 == 0b1110
        assert a ^ 0b1010 == 0b0110
        assert 0b1010 & a == 0b1000
        assert -1 ^ a == ~0b1100


# =============================================================================
# БИТОВЫЕ ЗАПРОСЫ
# =============================================================================


class TestBitQueries:
    """Тесты test_bit и bit_count"""

    def test_known_values(self) -> None:
        """a = 10: биты 0,1,3 = 0,1,1; bit_count = 2"""
        a = z(10)
        assert not a.test_bit(0)
        assert a.test_bit(1)
        assert a.test_bit(3)
        assert a.bit_count() == 2

    @pytest.mark.parametrize("x", OPERANDS)
    def test_test_bit_matches_int(self, x: int) -> None:
        """Биты дополнительного кода, включая знаковое расширение"""
        a = z(x)
        for index in (0, 1, 5, 31, 32, 33, 63, 64, 100, 300):
            assert a.test_bit(index) == bool((x >> index) & 1)

    @pytest.mark.parametrize("x", OPERANDS)
    def test_bit_count(self, x: int) -> None:
        """Для a < 0 считаются нулевые биты: bit_count(~a)"""
        expected = bin(x).count("1") if x >= 0 else bin(~x).count("1")
        assert z(x).bit_count() == expected

    def test_negative_index_rejected(self) -> None:
        """Индекс бита неотрицателен"""
        with pytest.raises(NumberDomainError):
            z(1).test_bit(-1)


# =============================================================================
# СДВИГ
# =============================================================================


class TestArithmeticShift:
    """Тесты ash"""

    def test_known_values(self) -> None:
        """ash(3,3)=24, ash(3,-1)=1, ash(3,-3)=0"""
        assert z(3).ash(3) == 24
        assert z(3).ash(-1) == 1
        assert z(3).ash(-3) == 0

    def test_negative_rounds_down(self) -> None:
        """Сдвиг вправо отрицательных округляет к минус бесконечности"""
        assert z(-3).ash(-1) == -2
        assert z(-4).ash(-1) == -2
        assert z(-1).ash(-100) == -1

    @pytest.mark.parametrize("x", OPERANDS)
    @pytest.mark.parametrize("shift", [0, 1, 7, 31, 32, 33, 64, 95])
    def test_matches_int(self, x: int, shift: int) -> None:
        """ash совпадает с << и >> для int"""
        assert z(x).ash(shift) == x << shift
        assert z(x).ash(-shift) == x >> shift

    def test_shift_operators(self) -> None:
        """<< и >> через ash"""
        assert z(-5) << 2 == -20
        assert z(-5) >> 1 == -3
        with pytest.raises(ValueError):
            z(1) << -1
