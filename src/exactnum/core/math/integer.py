"""
Integer — Знаковое целое произвольной точности (BigZ)

Immutable Pydantic модель: знак хранится отдельно от magnitude, magnitude —
нормализованный кортеж цифр по основанию 2**32 (см. natural).

Модуль обеспечивает:
- Конструирование из int, из строки в основании 2..36, буфера заданной ёмкости
- Сравнение, сложение, вычитание, умножение, смену знака, модуль
- Семейство деления: div/truncate/floor/ceiling/round, mod/rem
- pow, mod_exp, gcd/lcm, целый sqrt
- Побитовые операции над бесконечным дополнительным кодом (two's complement)
- Арифметический сдвиг ash, test_bit, bit_count, чётность
- Запись в строку (в т.ч. в буфер вызывающего) и генерацию случайных BigZ

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. sign == ZERO  <=>  digits == ()
2. Старшая цифра digits никогда не равна нулю
3. Ни одна операция не мутирует операнды: результат всегда новое значение
4. Деление на ноль в любом члене семейства → NumberZeroDivisionError
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Final, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from exactnum import __version__
from exactnum.core.math import natural
from exactnum.core.math.errors import (
    NumberDomainError,
    NumberParseError,
    NumberZeroDivisionError,
)
from exactnum.core.math.random_state import RandomState

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

ENGINE_VERSION: Final[str] = __version__

# Допустимые основания строковой записи
MIN_BASE: Final[int] = 2
MAX_BASE: Final[int] = 36

# Символ цифры → значение (регистр букв не важен)
_DIGIT_VALUES: Final[dict[str, int]] = {
    **{char: value for value, char in enumerate(natural.DIGIT_CHARS)},
    **{char.lower(): value for value, char in enumerate(natural.DIGIT_CHARS)},
}


# =============================================================================
# ENUMS
# =============================================================================


class Sign(int, Enum):
    """Знак BigZ."""

    MINUS = -1
    ZERO = 0
    PLUS = 1


class CompareResult(int, Enum):
    """
    Результат трёхзначного сравнения.

    ERROR возвращается только rational-слоем, когда операнд не определён.
    """

    LT = -1
    EQ = 0
    GT = 1
    ERROR = 100


class ParseMode(str, Enum):
    """
    Где заканчивается запись целого в строке.

    UNTIL_END   — любой лишний символ является ошибкой
    UNTIL_SPACE — запись заканчивается на первом пробельном символе
    UNTIL_SLASH — запись заканчивается на первом '/' (числитель дроби)
    """

    UNTIL_END = "until_end"
    UNTIL_SPACE = "until_space"
    UNTIL_SLASH = "until_slash"


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class BufferWriteResult:
    """Результат записи строки в буфер вызывающего."""

    # True если строка записана (буфер достаточного размера)
    written: bool

    # Требуемая длина в байтах (сообщается всегда)
    length: int


def write_to_buffer(text: str, buffer: bytearray) -> BufferWriteResult:
    """
    Запись ASCII-строки в начало буфера без выхода за его пределы.

    Args:
        text: строка для записи
        buffer: буфер вызывающего (размер не меняется)

    Returns:
        BufferWriteResult; при нехватке места буфер не трогается
    """
    encoded = text.encode("ascii")
    if len(buffer) < len(encoded):
        return BufferWriteResult(written=False, length=len(encoded))

    buffer[: len(encoded)] = encoded
    return BufferWriteResult(written=True, length=len(encoded))


def validate_base(base: int) -> None:
    """
    Проверка основания системы счисления.

    Raises:
        NumberParseError: если base вне [MIN_BASE, MAX_BASE]
    """
    if not MIN_BASE <= base <= MAX_BASE:
        raise NumberParseError(f"base must be in [{MIN_BASE}, {MAX_BASE}], got {base}")


# =============================================================================
# BIGZ MODEL
# =============================================================================


class BigZ(BaseModel):
    """
    Целое произвольной точности.

    Immutable модель (frozen=True). Равенство структурное: в каноническом
    представлении одинаковые значения имеют одинаковые поля.

    Examples:
        >>> BigZ.from_int(10**20) * BigZ.from_int(10**20)
        BigZ(100000000000000000000000000000000000000000)
        >>> BigZ.from_string("-ff", 16)
        BigZ(-255)
    """

    sign: Sign = Field(..., description="Знак числа")
    digits: tuple[int, ...] = Field(
        default=(), description="Magnitude: цифры по основанию 2**32, младшая первой"
    )

    model_config = {"frozen": True}

    @field_validator("digits")
    @classmethod
    def validate_digits(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Каждая цифра в [0, 2**32), без старших нулей."""
        for digit in v:
            if not 0 <= digit < natural.DIGIT_BASE:
                raise ValueError(f"digit {digit} out of range [0, 2**{natural.DIGIT_BITS})")
        if v and v[-1] == 0:
            raise ValueError("digits must not end with a zero digit")
        return v

    @model_validator(mode="after")
    def validate_sign(self) -> "BigZ":
        """sign == ZERO тогда и только тогда, когда magnitude пуста."""
        if (self.sign == Sign.ZERO) != (not self.digits):
            raise ValueError(
                f"sign {self.sign.name} inconsistent with magnitude of {len(self.digits)} digits"
            )
        return self

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def _from_parts(cls, negative: bool, digits: natural.Digits) -> "BigZ":
        # digits уже нормализованы natural-слоем
        if not digits:
            return cls.model_construct(sign=Sign.ZERO, digits=())
        return cls.model_construct(sign=Sign.MINUS if negative else Sign.PLUS, digits=digits)

    @classmethod
    def from_int(cls, value: int) -> "BigZ":
        """Конструирование из Python int любой величины."""
        return cls._from_parts(value < 0, natural.from_int(abs(value)))

    @classmethod
    def create(cls, size: int) -> "BigZ":
        """
        Нулевое значение с ёмкостью size цифр.

        Ёмкость проверяется на допустимость; само значение всегда ноль,
        поскольку BigZ неизменяем.

        Raises:
            NumberDomainError: если size < 0
            NumberResourceError: если size > MAX_DIGITS
        """
        if size < 0:
            raise NumberDomainError(f"size must be non-negative, got {size}")
        natural.check_size(size)
        return cls._from_parts(False, natural.ZERO)

    @classmethod
    def from_string(
        cls,
        text: str,
        base: int = 10,
        mode: ParseMode = ParseMode.UNTIL_END,
    ) -> "BigZ":
        """
        Разбор записи [+|-]digits в системе счисления base.

        Args:
            text: строка с числом (без ведущих пробелов)
            base: основание 2..36, цифры 0-9 затем A-Z/a-z
            mode: где заканчивается запись (ParseMode или его строковое значение)

        Returns:
            BigZ

        Raises:
            NumberParseError: пустая строка, нет цифр, неверная цифра,
                              лишние символы (UNTIL_END), base вне 2..36
        """
        validate_base(base)
        mode = ParseMode(mode)
        if not text:
            raise NumberParseError("empty numeral")

        position = 0
        negative = False
        if text[0] in "+-":
            negative = text[0] == "-"
            position = 1

        values = []
        while position < len(text):
            char = text[position]
            if mode is ParseMode.UNTIL_SPACE and char.isspace():
                break
            if mode is ParseMode.UNTIL_SLASH and char == "/":
                break
            value = _DIGIT_VALUES.get(char)
            if value is None or value >= base:
                raise NumberParseError(
                    f"invalid digit {char!r} for base {base} at position {position} in {text!r}"
                )
            values.append(value)
            position += 1

        if not values:
            raise NumberParseError(f"numeral has no digits: {text!r}")

        return cls._from_parts(negative, natural.from_digit_values(values, base))

    @classmethod
    def random(cls, bound: "BigZ | int", state: RandomState) -> "BigZ":
        """
        Равномерно распределённое значение в [0, bound).

        Rejection sampling: берутся bit_length(bound) случайных бит,
        кандидаты >= bound отбрасываются (вероятность отказа < 1/2).

        Raises:
            NumberDomainError: если bound <= 0
        """
        bound = _coerce(bound)
        if bound.sign != Sign.PLUS:
            raise NumberDomainError(f"random bound must be positive, got {bound}")

        bits = natural.bit_length(bound.digits)
        attempts = 1
        while True:
            candidate = state.random_digits(bits)
            if natural.compare(candidate, bound.digits) < 0:
                logger.debug("random below %d-bit bound after %d attempt(s)", bits, attempts)
                return cls._from_parts(False, candidate)
            attempts += 1

    # -------------------------------------------------------------------------
    # Запросы
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.sign == Sign.ZERO

    def is_even(self) -> bool:
        """Чётность по младшей цифре; ноль чётный."""
        return not natural.is_odd(self.digits)

    def is_odd(self) -> bool:
        return natural.is_odd(self.digits)

    def signum(self) -> int:
        """-1, 0 или 1."""
        return int(self.sign)

    def num_digits(self) -> int:
        """Число используемых цифр (не меньше 1, как у нулевого буфера)."""
        return max(1, len(self.digits))

    def length(self) -> int:
        """Число значащих бит magnitude; 0 для нуля."""
        return natural.bit_length(self.digits)

    def to_int(self) -> int:
        return int(self.sign) * natural.to_int(self.digits)

    def to_float(self) -> float:
        """
        Ближайший float.

        Returns:
            float; ±inf если magnitude вне диапазона float (без исключения)
        """
        try:
            return float(self.to_int())
        except OverflowError:
            return math.copysign(math.inf, int(self.sign))

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare(self, other: "BigZ | int") -> CompareResult:
        """
        Трёхзначное сравнение.

        Разные знаки решают сразу (MINUS < ZERO < PLUS); при равных знаках
        сравниваются magnitude от старшей цифры, для отрицательных — обратно.
        """
        other = _coerce(other)
        if self.sign != other.sign:
            return CompareResult.LT if self.sign < other.sign else CompareResult.GT

        result = natural.compare(self.digits, other.digits)
        if self.sign == Sign.MINUS:
            result = -result
        return CompareResult(result)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def negate(self) -> "BigZ":
        return BigZ._from_parts(self.sign == Sign.PLUS, self.digits)

    def abs(self) -> "BigZ":
        return BigZ._from_parts(False, self.digits)

    def add(self, other: "BigZ | int") -> "BigZ":
        """Сумма со знаком: одинаковые знаки складывают magnitude, разные вычитают."""
        other = _coerce(other)
        if other.is_zero():
            return self
        if self.is_zero():
            return other

        if self.sign == other.sign:
            return BigZ._from_parts(self.sign == Sign.MINUS, natural.add(self.digits, other.digits))

        order = natural.compare(self.digits, other.digits)
        if order == 0:
            return ZERO
        if order > 0:
            return BigZ._from_parts(
                self.sign == Sign.MINUS, natural.subtract(self.digits, other.digits)
            )
        return BigZ._from_parts(
            other.sign == Sign.MINUS, natural.subtract(other.digits, self.digits)
        )

    def subtract(self, other: "BigZ | int") -> "BigZ":
        return self.add(_coerce(other).negate())

    def multiply(self, other: "BigZ | int") -> "BigZ":
        other = _coerce(other)
        return BigZ._from_parts(
            self.sign != other.sign, natural.multiply(self.digits, other.digits)
        )

    # -------------------------------------------------------------------------
    # Семейство деления
    # -------------------------------------------------------------------------

    def divide(self, other: "BigZ | int") -> tuple["BigZ", "BigZ"]:
        """
        Деление с усечением к нулю.

        Returns:
            (quotient, remainder): self = quotient * other + remainder,
            0 <= |remainder| < |other|, знак remainder = знак self

        Raises:
            NumberZeroDivisionError: если other == 0
        """
        other = _coerce(other)
        if other.is_zero():
            raise NumberZeroDivisionError(f"division of {self} by zero")

        quotient, remainder = natural.divmod_(self.digits, other.digits)
        return (
            BigZ._from_parts(self.sign != other.sign, quotient),
            BigZ._from_parts(self.sign == Sign.MINUS, remainder),
        )

    def truncate(self, other: "BigZ | int") -> "BigZ":
        """Частное, округлённое к нулю."""
        quotient, _ = self.divide(other)
        return quotient

    def div(self, other: "BigZ | int") -> "BigZ":
        """Синоним truncate."""
        return self.truncate(other)

    def floor(self, other: "BigZ | int") -> "BigZ":
        """Частное, округлённое к минус бесконечности."""
        other = _coerce(other)
        quotient, remainder = self.divide(other)
        if not remainder.is_zero() and self.sign != other.sign:
            return quotient.subtract(ONE)
        return quotient

    def ceiling(self, other: "BigZ | int") -> "BigZ":
        """Частное, округлённое к плюс бесконечности."""
        other = _coerce(other)
        quotient, remainder = self.divide(other)
        if not remainder.is_zero() and self.sign == other.sign:
            return quotient.add(ONE)
        return quotient

    def round(self, other: "BigZ | int") -> "BigZ":
        """
        Частное, округлённое к ближайшему целому (half-to-even).

        2|r| сравнивается с |other|: больше — шаг от нуля, меньше — усечённое
        частное, ровно половина — чётный из двух кандидатов.

        Examples:
            >>> BigZ.from_int(25).round(10), BigZ.from_int(35).round(10)
            (BigZ(2), BigZ(4))
        """
        other = _coerce(other)
        quotient, remainder = self.divide(other)
        if remainder.is_zero():
            return quotient

        twice = natural.shift_left(remainder.digits, 1)
        order = natural.compare(twice, other.digits)
        if order > 0 or (order == 0 and quotient.is_odd()):
            step = MINUS_ONE if self.sign != other.sign else ONE
            return quotient.add(step)
        return quotient

    def rem(self, other: "BigZ | int") -> "BigZ":
        """Остаток со знаком делимого (усечённое деление)."""
        _, remainder = self.divide(other)
        return remainder

    def mod(self, other: "BigZ | int") -> "BigZ":
        """Остаток со знаком делителя (неотрицателен при other > 0)."""
        other = _coerce(other)
        _, remainder = self.divide(other)
        if not remainder.is_zero() and remainder.sign != other.sign:
            return remainder.add(other)
        return remainder

    # -------------------------------------------------------------------------
    # Степени, делители, корень
    # -------------------------------------------------------------------------

    def pow(self, exponent: "int | BigZ") -> "BigZ":
        """
        self ** exponent возведением в квадрат.

        Raises:
            NumberDomainError: если exponent < 0
        """
        if isinstance(exponent, BigZ):
            exponent = exponent.to_int()
        if exponent < 0:
            raise NumberDomainError(f"exponent must be non-negative, got {exponent}")

        result = natural.ONE
        base = self.digits
        remaining = exponent
        while remaining:
            if remaining & 1:
                result = natural.multiply(result, base)
            remaining >>= 1
            if remaining:
                base = natural.multiply(base, base)

        negative = self.sign == Sign.MINUS and exponent & 1 == 1
        return BigZ._from_parts(negative, result)

    def mod_exp(self, exponent: "BigZ | int", modulus: "BigZ | int") -> "BigZ":
        """
        self ** exponent mod modulus (square-and-multiply).

        После каждого умножения magnitude приводится по модулю, поэтому
        промежуточные значения не превышают modulus**2.

        Returns:
            BigZ в [0, modulus)

        Raises:
            NumberDomainError: если exponent < 0 или modulus <= 0
        """
        exponent = _coerce(exponent)
        modulus = _coerce(modulus)
        if exponent.sign == Sign.MINUS:
            raise NumberDomainError(f"exponent must be non-negative, got {exponent}")
        if modulus.sign != Sign.PLUS:
            raise NumberDomainError(f"modulus must be positive, got {modulus}")

        m = modulus.digits
        base = self.mod(modulus).digits
        _, result = natural.divmod_(natural.ONE, m)

        for index in range(natural.bit_length(exponent.digits)):
            if natural.test_bit(exponent.digits, index):
                _, result = natural.divmod_(natural.multiply(result, base), m)
            _, base = natural.divmod_(natural.multiply(base, base), m)

        return BigZ._from_parts(False, result)

    def gcd(self, other: "BigZ | int") -> "BigZ":
        """Наибольший общий делитель (алгоритм Евклида), всегда >= 0."""
        a = self.digits
        b = _coerce(other).digits
        while b:
            _, remainder = natural.divmod_(a, b)
            a, b = b, remainder
        return BigZ._from_parts(False, a)

    def lcm(self, other: "BigZ | int") -> "BigZ":
        """|a * b| / gcd(a, b); 0 если один из аргументов 0."""
        other = _coerce(other)
        if self.is_zero() or other.is_zero():
            return ZERO

        divisor = self.gcd(other)
        reduced, _ = natural.divmod_(self.digits, divisor.digits)
        return BigZ._from_parts(False, natural.multiply(reduced, other.digits))

    def sqrt(self) -> "BigZ":
        """
        floor(sqrt(self)).

        Raises:
            NumberDomainError: если self < 0
        """
        if self.sign == Sign.MINUS:
            raise NumberDomainError(f"square root of negative number {self}")
        return BigZ._from_parts(False, natural.isqrt(self.digits))

    # -------------------------------------------------------------------------
    # Побитовые операции (бесконечный дополнительный код)
    # -------------------------------------------------------------------------

    def _bitwise(self, other: "BigZ | int", op: Callable[[int, int], int]) -> "BigZ":
        other = _coerce(other)
        width = max(len(self.digits), len(other.digits))
        left, left_fill = _twos_complement(self, width)
        right, right_fill = _twos_complement(other, width)

        digits = [op(x, y) & natural.DIGIT_MASK for x, y in zip(left, right)]
        fill = op(left_fill, right_fill) & natural.DIGIT_MASK
        return _from_twos_complement(digits, fill)

    def not_(self) -> "BigZ":
        """~a == -(a + 1)."""
        return self.add(ONE).negate()

    def and_(self, other: "BigZ | int") -> "BigZ":
        return self._bitwise(other, lambda x, y: x & y)

    def or_(self, other: "BigZ | int") -> "BigZ":
        return self._bitwise(other, lambda x, y: x | y)

    def xor(self, other: "BigZ | int") -> "BigZ":
        return self._bitwise(other, lambda x, y: x ^ y)

    def nand(self, other: "BigZ | int") -> "BigZ":
        return self._bitwise(other, lambda x, y: ~(x & y))

    def nor(self, other: "BigZ | int") -> "BigZ":
        return self._bitwise(other, lambda x, y: ~(x | y))

    def eqv(self, other: "BigZ | int") -> "BigZ":
        """~(a ^ b)."""
        return self._bitwise(other, lambda x, y: ~(x ^ y))

    def and_c1(self, other: "BigZ | int") -> "BigZ":
        """~a & b."""
        return self._bitwise(other, lambda x, y: ~x & y)

    def and_c2(self, other: "BigZ | int") -> "BigZ":
        """a & ~b."""
        return self._bitwise(other, lambda x, y: x & ~y)

    def or_c1(self, other: "BigZ | int") -> "BigZ":
        """~a | b."""
        return self._bitwise(other, lambda x, y: ~x | y)

    def or_c2(self, other: "BigZ | int") -> "BigZ":
        """a | ~b."""
        return self._bitwise(other, lambda x, y: x | ~y)

    def test_bit(self, index: int) -> bool:
        """
        Бит index (0 — младший) дополнительного кода.

        Для отрицательного a биты равны инвертированным битам |a| - 1.

        Raises:
            NumberDomainError: если index < 0
        """
        if index < 0:
            raise NumberDomainError(f"bit index must be non-negative, got {index}")
        if self.sign == Sign.MINUS:
            return not natural.test_bit(natural.subtract(self.digits, natural.ONE), index)
        return natural.test_bit(self.digits, index)

    def bit_count(self) -> int:
        """
        Число единичных бит для a >= 0.

        Для a < 0 дополнительный код содержит бесконечно много единиц;
        тогда считаются нулевые биты, т.е. bit_count(~a) (как logcount в
        Common Lisp).
        """
        if self.sign == Sign.MINUS:
            return natural.bit_count(natural.subtract(self.digits, natural.ONE))
        return natural.bit_count(self.digits)

    def ash(self, shift: int) -> "BigZ":
        """
        Арифметический сдвиг.

        shift >= 0: self * 2**shift
        shift < 0:  floor(self / 2**-shift), т.е. для отрицательных
                    округление к минус бесконечности

        Examples:
            >>> BigZ.from_int(3).ash(3), BigZ.from_int(3).ash(-1), BigZ.from_int(-3).ash(-1)
            (BigZ(24), BigZ(1), BigZ(-2))
        """
        if shift >= 0:
            return BigZ._from_parts(self.sign == Sign.MINUS, natural.shift_left(self.digits, shift))

        bits = -shift
        shifted = natural.shift_right(self.digits, bits)
        if self.sign == Sign.MINUS and natural.has_low_bits(self.digits, bits):
            shifted = natural.add(shifted, natural.ONE)
        return BigZ._from_parts(self.sign == Sign.MINUS, shifted)

    # -------------------------------------------------------------------------
    # Строковая конверсия
    # -------------------------------------------------------------------------

    def to_string(self, base: int = 10, force_sign: bool = False) -> str:
        """
        Запись в системе счисления base (2..36), цифры 0-9A-Z.

        Args:
            base: основание
            force_sign: всегда ставить знак ('+' для положительных);
                        ноль печатается без знака

        Raises:
            NumberParseError: если base вне 2..36
        """
        validate_base(base)
        body = natural.to_string(self.digits, base)
        if self.sign == Sign.MINUS:
            return "-" + body
        if force_sign and self.sign == Sign.PLUS:
            return "+" + body
        return body

    def to_string_buffer(
        self,
        buffer: bytearray,
        base: int = 10,
        force_sign: bool = False,
    ) -> BufferWriteResult:
        """
        Запись to_string в буфер вызывающего.

        Если буфер мал, он не изменяется, а BufferWriteResult.length
        сообщает требуемый размер.
        """
        return write_to_buffer(self.to_string(base, force_sign), buffer)

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigZ({self.to_string()})"

    def __hash__(self) -> int:
        # Совпадает с hash(int), так как BigZ(5) == 5
        return hash(self.to_int())

    def __eq__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.sign == operand.sign and self.digits == operand.digits

    def __lt__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) == CompareResult.LT

    def __le__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) != CompareResult.GT

    def __gt__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) == CompareResult.GT

    def __ge__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) != CompareResult.LT

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __int__(self) -> int:
        return self.to_int()

    def __index__(self) -> int:
        return self.to_int()

    def __float__(self) -> float:
        return self.to_float()

    def __neg__(self) -> "BigZ":
        return self.negate()

    def __pos__(self) -> "BigZ":
        return self

    def __abs__(self) -> "BigZ":
        return self.abs()

    def __invert__(self) -> "BigZ":
        return self.not_()

    def __add__(self, other: object) -> "BigZ":
        operand = _operand(other)
        return NotImplemented if operand is None else self.add(operand)

    def __radd__(self, other: object) -> "BigZ":
        operand = _operand(other)
        return NotImplemented if operand is None else operand.add(self)

    def __sub__(self, other: object) -> "BigZ":
        operand = _operand(other)
        return NotImplemented if operand is None else self.subtract(operand)

    def __rsub__(self, other: object) -> "BigZ":
        operand = _operand(other)
        return NotImplemented if operand is None else operand.subtract(self)

    def __mul__(self, other: object) -> "BigZ":
        operand = _operand(other)
        return NotImplemented if operand is None else self.multiply(operand)

    def __rmul__(self, other: object) -> "BigZ":
        operand = _operand(other)
        return NotImplemented if operand is None else operand.multiply(self)

    def __floordiv__(self, other: object) -> "BigZ":
        operand = _operand(other)
        return NotImplemented if operand is None else self.floor(operand)

    def __rfloordiv__(self, other: object) -> "BigZ":
        operand = _operand(other)
        return NotImplemented if operand is None else operand.floor(self)

    def __mod__(self, other: object) -> "BigZ":
        operand = _operand(other)
        return NotImplemented if operand is None else self.mod(operand)

    def __rmod__(self, other: object) -> "BigZ":
        operand = _operand(other)
        return NotImplemented if operand is None else operand.mod(self)

    def __divmod__(self, other: object) -> tuple["BigZ", "BigZ"]:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.floor(operand), self.mod(operand)

    def __pow__(self, exponent: object, modulus: object = None) -> "BigZ":
        if modulus is not None:
            return self.mod_exp(exponent, modulus)
        if not isinstance(exponent, (int, BigZ)):
            return NotImplemented
        return self.pow(exponent)

    def __lshift__(self, shift: int) -> "BigZ":
        if shift < 0:
            raise ValueError(f"negative shift count {shift}")
        return self.ash(shift)

    def __rshift__(self, shift: int) -> "BigZ":
        if shift < 0:
            raise ValueError(f"negative shift count {shift}")
        return self.ash(-shift)

    def __and__(self, other: object) -> "BigZ":
        operand = _operand(other)
        return NotImplemented if operand is None else self.and_(operand)

    __rand__ = __and__

    def __or__(self, other: object) -> "BigZ":
        operand = _operand(other)
        return NotImplemented if operand is None else self.or_(operand)

    __ror__ = __or__

    def __xor__(self, other: object) -> "BigZ":
        operand = _operand(other)
        return NotImplemented if operand is None else self.xor(operand)

    __rxor__ = __xor__


# =============================================================================
# CONSTANTS (значения)
# =============================================================================

ZERO: Final[BigZ] = BigZ(sign=Sign.ZERO)
ONE: Final[BigZ] = BigZ(sign=Sign.PLUS, digits=(1,))
MINUS_ONE: Final[BigZ] = BigZ(sign=Sign.MINUS, digits=(1,))


# =============================================================================
# HELPERS
# =============================================================================


def _operand(value: object) -> BigZ | None:
    if isinstance(value, BigZ):
        return value
    if isinstance(value, int):
        return BigZ.from_int(value)
    return None


def _coerce(value: Union[BigZ, int]) -> BigZ:
    operand = _operand(value)
    if operand is None:
        raise TypeError(f"cannot convert {type(value).__name__} to BigZ")
    return operand


def _twos_complement(value: BigZ, width: int) -> tuple[list[int], int]:
    """
    Первые width цифр дополнительного кода и цифра-заполнитель выше них.

    Для отрицательного значения код равен инверсии |value| - 1.
    """
    if value.sign == Sign.MINUS:
        fill = natural.DIGIT_MASK
        digits = [~d & natural.DIGIT_MASK for d in natural.subtract(value.digits, natural.ONE)]
    else:
        fill = 0
        digits = list(value.digits)
    digits.extend([fill] * (width - len(digits)))
    return digits, fill


def _from_twos_complement(digits: list[int], fill: int) -> BigZ:
    """Обратно из дополнительного кода: при заполнителе из единиц |v| = ~code + 1."""
    if fill == 0:
        return BigZ._from_parts(False, natural.normalize(digits))
    inverted = natural.normalize([~d & natural.DIGIT_MASK for d in digits])
    return BigZ._from_parts(True, natural.add(inverted, natural.ONE))


def coerce_bigz(value: Union[BigZ, int]) -> BigZ:
    """
    Приведение int к BigZ (BigZ возвращается как есть).

    Raises:
        TypeError: для прочих типов
    """
    return _coerce(value)


def version() -> str:
    """Версия арифметического ядра."""
    return ENGINE_VERSION
