"""
Тесты для модели BigZ: конструирование, строки, сравнение, арифметика

Проверяет:
1. Каноническую форму и валидацию Pydantic
2. Immutability (frozen=True)
3. Разбор и запись строк во всех основаниях 2..36, режимы ParseMode
4. Запись в буфер вызывающего
5. Сравнение и арифметику со знаком
6. pow, mod_exp, gcd/lcm, sqrt
7. Генерацию случайных значений и ограничения ресурсов
"""

import math

import pytest
from pydantic import ValidationError

import exactnum
from exactnum.core.math import natural
from exactnum.core.math.errors import (
    NumberDomainError,
    NumberParseError,
    NumberResourceError,
)
from exactnum.core.math.integer import (
    ENGINE_VERSION,
    ONE,
    ZERO,
    BigZ,
    CompareResult,
    ParseMode,
    Sign,
    version,
)
from exactnum.core.math.random_state import RandomState


def z(value: int) -> BigZ:
    return BigZ.from_int(value)


# =============================================================================
# МОДЕЛЬ И ИНВАРИАНТЫ
# =============================================================================


class TestBigZModel:
    """Тесты канонической формы"""

    def test_zero_has_zero_sign_and_no_digits(self) -> None:
        """Ноль: sign ZERO, пустая magnitude"""
        assert z(0).sign == Sign.ZERO
        assert z(0).digits == ()
        assert z(0) == ZERO

    def test_sign_and_magnitude(self) -> None:
        """Знак хранится отдельно от magnitude"""
        value = z(-(2**40))
        assert value.sign == Sign.MINUS
        assert value.digits == (0, 256)

    def test_direct_construction_validates(self) -> None:
        """Конструктор модели проверяет каноническую форму"""
        assert BigZ(sign=Sign.PLUS, digits=(5,)) == 5

        with pytest.raises(ValidationError, match="zero digit"):
            BigZ(sign=Sign.PLUS, digits=(5, 0))

        with pytest.raises(ValidationError, match="inconsistent"):
            BigZ(sign=Sign.ZERO, digits=(1,))

        with pytest.raises(ValidationError, match="inconsistent"):
            BigZ(sign=Sign.MINUS, digits=())

        with pytest.raises(ValidationError, match="out of range"):
            BigZ(sign=Sign.PLUS, digits=(2**32,))

    def test_immutable(self) -> None:
        """BigZ должен быть immutable (frozen=True)"""
        value = z(7)
        with pytest.raises(ValidationError):
            value.sign = Sign.MINUS  # type: ignore

    def test_equality_and_hash(self) -> None:
        """Равные значения равны и хешируются одинаково"""
        assert z(10**30) == z(10**30)
        assert hash(z(10**30)) == hash(z(10**30))
        assert z(5) == 5
        assert z(5) != 6
        assert len({z(1), z(1), z(2)}) == 2

    def test_hash_matches_int(self) -> None:
        """Хеш совпадает с int: BigZ и int взаимозаменяемы как ключи"""
        for value in (0, 5, -5, 2**32, -(10**40)):
            assert hash(z(value)) == hash(value)
        assert {5: "x"}[z(5)] == "x"
        assert {z(-7): "y"}[-7] == "y"
        assert len({z(5), 5}) == 1

    def test_queries(self) -> None:
        """Знак, длина, число цифр, конверсии"""
        assert z(-3).signum() == -1
        assert z(0).signum() == 0
        assert z(0).num_digits() == 1
        assert z(2**64).num_digits() == 3
        assert z(255).length() == 8
        assert z(-(10**25)).to_int() == -(10**25)
        assert int(z(42)) == 42
        assert float(z(-2)) == -2.0
        assert not z(0)
        assert z(-1)

    def test_to_float_overflow_is_infinite(self) -> None:
        """Слишком большая magnitude даёт ±inf"""
        assert z(10**400).to_float() == math.inf
        assert z(-(10**400)).to_float() == -math.inf

    def test_create(self) -> None:
        """create проверяет ёмкость и возвращает ноль"""
        assert BigZ.create(4) == ZERO
        with pytest.raises(NumberDomainError):
            BigZ.create(-1)
        with pytest.raises(NumberResourceError):
            BigZ.create(natural.MAX_DIGITS + 1)

    def test_version(self) -> None:
        """Версия ядра"""
        assert version() == ENGINE_VERSION
        assert ENGINE_VERSION == exactnum.__version__


# =============================================================================
# СТРОКИ
# =============================================================================


class TestBigZStrings:
    """Тесты разбора и записи строк"""

    @pytest.mark.parametrize("base", range(2, 37))
    def test_round_trip_all_bases(self, base: int) -> None:
        """from_string(to_string(n, b), b) == n"""
        for value in (0, 1, -1, base - 1, 2**32, -(3**150), 10**60 + 17):
            text = z(value).to_string(base)
            assert BigZ.from_string(text, base) == value

    def test_known_representations(self) -> None:
        """Цифры 0-9, затем A-Z"""
        assert z(255).to_string(16) == "FF"
        assert z(-255).to_string(16) == "-FF"
        assert z(35).to_string(36) == "Z"
        assert z(5).to_string(2) == "101"
        assert str(z(-12345)) == "-12345"
        assert repr(z(7)) == "BigZ(7)"

    def test_force_sign(self) -> None:
        """force_sign добавляет '+' положительным, ноль без знака"""
        assert z(5).to_string(force_sign=True) == "+5"
        assert z(-5).to_string(force_sign=True) == "-5"
        assert z(0).to_string(force_sign=True) == "0"

    def test_parse_accepts_sign_and_case(self) -> None:
        """Знак и любой регистр букв"""
        assert BigZ.from_string("+42") == 42
        assert BigZ.from_string("-ff", 16) == -255
        assert BigZ.from_string("Ff", 16) == 255
        assert BigZ.from_string("-0") == ZERO

    def test_parse_big_value(self) -> None:
        """Разбор числа из многих цифр"""
        text = "123456789" * 10
        assert BigZ.from_string(text) == int(text)

    @pytest.mark.parametrize(
        "text, base",
        [
            ("", 10),
            ("+", 10),
            ("-", 10),
            ("12a", 10),
            ("102", 2),
            ("G", 16),
            ("1 2", 10),
            ("--1", 10),
        ],
    )
    def test_parse_errors(self, text: str, base: int) -> None:
        """Некорректные записи отклоняются"""
        with pytest.raises(NumberParseError):
            BigZ.from_string(text, base)

    @pytest.mark.parametrize("base", [0, 1, 37, -10])
    def test_invalid_base(self, base: int) -> None:
        """Основание вне 2..36"""
        with pytest.raises(NumberParseError, match="base must be"):
            BigZ.from_string("1", base)
        with pytest.raises(NumberParseError, match="base must be"):
            z(1).to_string(base)

    def test_parse_modes(self) -> None:
        """Режимы окончания записи"""
        assert BigZ.from_string("12 34", mode=ParseMode.UNTIL_SPACE) == 12
        assert BigZ.from_string("12\tjunk", mode=ParseMode.UNTIL_SPACE) == 12
        assert BigZ.from_string("-12/34", mode=ParseMode.UNTIL_SLASH) == -12

        with pytest.raises(NumberParseError):
            BigZ.from_string("12 34", mode=ParseMode.UNTIL_END)
        with pytest.raises(NumberParseError):
            BigZ.from_string("12/34", mode=ParseMode.UNTIL_SPACE)
        with pytest.raises(NumberParseError):
            BigZ.from_string(" 12", mode=ParseMode.UNTIL_SPACE)

    def test_parse_mode_by_value(self) -> None:
        """Режим можно передать строковым значением"""
        assert BigZ.from_string("12 34", mode="until_space") == 12
        assert BigZ.from_string("-12/34", mode="until_slash") == -12
        with pytest.raises(ValueError):
            BigZ.from_string("12", mode="until_comma")

    def test_buffer_write(self) -> None:
        """Запись в буфер только при достаточном размере"""
        buffer = bytearray(b"......")
        result = z(-123).to_string_buffer(buffer)
        assert result.written
        assert result.length == 4
        assert buffer == bytearray(b"-123..")

        small = bytearray(3)
        result = z(-123).to_string_buffer(small)
        assert not result.written
        assert result.length == 4
        assert small == bytearray(3)

    def test_buffer_exact_size(self) -> None:
        """Буфер ровно по длине строки"""
        buffer = bytearray(2)
        result = z(255).to_string_buffer(buffer, base=16)
        assert result.written
        assert buffer == bytearray(b"FF")


# =============================================================================
# СРАВНЕНИЕ И АРИФМЕТИКА
# =============================================================================


VALUES = [0, 1, -1, 7, -7, 2**32, -(2**32), 3**80, -(5**60), 2**64 - 1]


class TestBigZArithmetic:
    """Тесты сравнения и арифметики со знаком"""

    @pytest.mark.parametrize("x", VALUES)
    @pytest.mark.parametrize("y", VALUES)
    def test_matches_int(self, x: int, y: int) -> None:
        """add/subtract/multiply/compare совпадают с int"""
        a, b = z(x), z(y)
        assert a.add(b) == x + y
        assert a.subtract(b) == x - y
        assert a.multiply(b) == x * y

        expected = CompareResult.LT if x < y else CompareResult.GT if x > y else CompareResult.EQ
        assert a.compare(b) is expected

    def test_operators(self) -> None:
        """Операторы Python и смешанные операнды int"""
        a = z(10)
        assert a + 5 == 15
        assert 5 + a == 15
        assert a - 15 == -5
        assert 3 - a == -7
        assert a * -2 == -20
        assert -a == -10
        assert abs(z(-10)) == 10
        assert +a is a
        assert a < 11 and a <= 10 and a > 9 and a >= 10
        assert sorted([z(3), z(-1), z(2)]) == [-1, 2, 3]

    def test_big_product_exact(self) -> None:
        """(10**20)**2 точно: 41 цифра"""
        square = z(10**20) * z(10**20)
        text = square.to_string()
        assert text == "1" + "0" * 40
        assert len(text) == 41

    def test_results_are_new_values(self) -> None:
        """Операции не мутируют операнды"""
        a = z(100)
        b = z(-3)
        a.add(b)
        a.multiply(b)
        a.divide(b)
        assert a == 100 and b == -3

    def test_constants(self) -> None:
        """ZERO и ONE"""
        assert ONE == 1
        assert ONE.add(ZERO) is ONE
        assert ZERO.add(ONE) is ONE

    def test_unsupported_operand(self) -> None:
        """Нечисловой операнд"""
        with pytest.raises(TypeError):
            z(1) + "1"  # type: ignore
        with pytest.raises(TypeError):
            z(1).add(1.5)  # type: ignore


# =============================================================================
# СТЕПЕНИ, ДЕЛИТЕЛИ, КОРЕНЬ
# =============================================================================


class TestBigZPowers:
    """Тесты pow, mod_exp, gcd, lcm, sqrt"""

    def test_pow(self) -> None:
        """Возведение в степень"""
        assert z(2).pow(100) == 2**100
        assert z(-3).pow(5) == -243
        assert z(-3).pow(4) == 81
        assert z(0).pow(0) == 1
        assert z(0).pow(5) == 0
        assert z(7) ** 3 == 343
        assert z(2).pow(z(10)) == 1024

    def test_pow_negative_exponent(self) -> None:
        """Отрицательная степень вне области определения"""
        with pytest.raises(NumberDomainError):
            z(2).pow(-1)

    def test_mod_exp(self) -> None:
        """Модульное возведение в степень"""
        assert z(3).mod_exp(5, 7) == 5
        assert z(5).mod_exp(3, 13) == 8
        assert z(4).mod_exp(0, 7) == 1
        assert z(4).mod_exp(3, 1) == 0
        assert z(-2).mod_exp(3, 5) == pow(-2, 3, 5)
        assert pow(z(3), 5, 7) == 5

    def test_mod_exp_big(self) -> None:
        """mod_exp совпадает с pow(int) на больших значениях"""
        base, exponent, modulus = 3**100 + 1, 2**70 + 3, 10**30 + 57
        assert z(base).mod_exp(exponent, modulus) == pow(base, exponent, modulus)

    def test_mod_exp_domain(self) -> None:
        """Модуль должен быть положительным, степень неотрицательной"""
        with pytest.raises(NumberDomainError):
            z(3).mod_exp(5, 0)
        with pytest.raises(NumberDomainError):
            z(3).mod_exp(5, -7)
        with pytest.raises(NumberDomainError):
            z(3).mod_exp(-1, 7)

    def test_gcd_lcm(self) -> None:
        """gcd(120,48)=24, lcm(24,5)=120"""
        assert z(120).gcd(48) == 24
        assert z(-120).gcd(48) == 24
        assert z(0).gcd(-9) == 9
        assert z(0).gcd(0) == 0
        assert z(24).lcm(5) == 120
        assert z(-4).lcm(6) == 12
        assert z(0).lcm(5) == 0

    def test_gcd_big(self) -> None:
        """gcd больших значений"""
        a = 2**100 * 3**20
        b = 2**60 * 5**30 * 3**7
        assert z(a).gcd(b) == math.gcd(a, b)

    def test_sqrt(self) -> None:
        """Целый квадратный корень"""
        assert z(0).sqrt() == 0
        assert z(15).sqrt() == 3
        assert z(16).sqrt() == 4
        assert z(10**40).sqrt() == 10**20
        with pytest.raises(NumberDomainError):
            z(-4).sqrt()

    def test_parity(self) -> None:
        """Чётность, включая отрицательные"""
        assert z(0).is_even()
        assert z(-3).is_odd()
        assert z(2**64).is_even()


# =============================================================================
# СЛУЧАЙНЫЕ ЗНАЧЕНИЯ
# =============================================================================


class TestBigZRandom:
    """Тесты генерации случайных BigZ"""

    def test_values_below_bound(self) -> None:
        """Все значения в [0, bound)"""
        state = RandomState(seed=7)
        bound = z(10**20 + 3)
        for _ in range(200):
            value = BigZ.random(bound, state)
            assert ZERO <= value < bound

    def test_small_bound_covers_range(self) -> None:
        """При малой границе встречаются все значения"""
        state = RandomState(seed=1)
        seen = {BigZ.random(5, state).to_int() for _ in range(300)}
        assert seen == {0, 1, 2, 3, 4}

    def test_same_seed_same_sequence(self) -> None:
        """Один seed воспроизводит последовательность"""
        bound = z(2**100)
        first = [BigZ.random(bound, RandomState(seed=42)) for _ in range(3)]
        state = RandomState(seed=42)
        again = BigZ.random(bound, state)
        assert again == first[0]

    def test_bound_one_yields_zero(self) -> None:
        """bound == 1 всегда даёт 0"""
        assert BigZ.random(1, RandomState()) == ZERO

    def test_non_positive_bound(self) -> None:
        """bound <= 0 вне области определения"""
        with pytest.raises(NumberDomainError):
            BigZ.random(0, RandomState())
        with pytest.raises(NumberDomainError):
            BigZ.random(-5, RandomState())
