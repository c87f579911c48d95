"""
Rational — Точная дробь произвольной точности (BigQ)

BigQ = numerator / denominator над BigZ, всегда в канонической форме:
denominator > 0, gcd(|numerator|, denominator) == 1, ноль записывается 0/1.

Модуль обеспечивает:
- Канонизацию при конструировании (политика отрицательного знаменателя
  задаётся RationalConfig)
- add/subtract/multiply/divide, negate/abs/inverse, трёхзначное сравнение
- Строковую запись "n/d" и разбор "[sign]n[/d]" в основании 2..36
- Приближение float дробью с ограниченным знаменателем (дерево Штерна-Броко)
  и обратную конверсию в float

НЕОПРЕДЕЛЁННОЕ ЗНАЧЕНИЕ:
QNAN — отдельный вариант результата, а не исключение. Любая операция с QNAN
возвращает QNAN, сравнение с QNAN даёт CompareResult.ERROR, строка —
"#.QNaN", float — quiet NaN. Цепочка вычислений fail-closed: один
неопределённый операнд делает неопределённым весь результат.
"""

import logging
import math
from dataclasses import dataclass
from typing import Final, Optional, Union

from pydantic import BaseModel, Field, model_validator

from exactnum.core.math.errors import (
    NumberDomainError,
    NumberError,
    NumberParseError,
    NumberZeroDivisionError,
)
from exactnum.core.math.integer import (
    ONE,
    ZERO,
    BigZ,
    BufferWriteResult,
    CompareResult,
    ParseMode,
    Sign,
    coerce_bigz,
    write_to_buffer,
)

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# Строковое представление неопределённой дроби
QNAN_STRING: Final[str] = "#.QNaN"

# Число бит дробной части при конверсии в float через floor (53-битная мантисса)
MANTISSA_BITS: Final[int] = 52

# Пробельные символы, пропускаемые перед записью дроби
_LEADING_SPACE: Final[str] = " \t\r\n"


# =============================================================================
# CONFIGURATION
# =============================================================================


@dataclass(frozen=True)
class RationalConfig:
    """
    Политика rational-слоя.

    По умолчанию отрицательный знаменатель при конструировании — ошибка
    вызывающего. С allow_negative_denominator=True знаки числителя и
    знаменателя переворачиваются.
    """

    # Нормализовать d < 0 вместо NumberDomainError
    allow_negative_denominator: bool = False

    # Точность дробной части в fallback-пути to_float
    mantissa_bits: int = MANTISSA_BITS

    def __post_init__(self):
        if self.mantissa_bits < 1:
            raise ValueError(f"mantissa_bits must be >= 1, got {self.mantissa_bits}")


DEFAULT_CONFIG: Final[RationalConfig] = RationalConfig()


# =============================================================================
# UNDEFINED RATIONAL
# =============================================================================


class UndefinedRational:
    """
    Неопределённая дробь (единственный экземпляр QNAN).

    Поглощает любые операции и никогда не равна ничему, кроме себя.
    """

    _instance: Optional["UndefinedRational"] = None

    def __new__(cls) -> "UndefinedRational":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def is_defined(self) -> bool:
        return False

    def add(self, other: object) -> "UndefinedRational":
        return self

    def subtract(self, other: object) -> "UndefinedRational":
        return self

    def multiply(self, other: object) -> "UndefinedRational":
        return self

    def divide(self, other: object) -> "UndefinedRational":
        return self

    def negate(self) -> "UndefinedRational":
        return self

    def abs(self) -> "UndefinedRational":
        return self

    def inverse(self) -> "UndefinedRational":
        return self

    def compare(self, other: object) -> CompareResult:
        return CompareResult.ERROR

    def to_string(self, base: int = 10, force_sign: bool = False) -> str:
        return QNAN_STRING

    def to_string_buffer(
        self,
        buffer: bytearray,
        base: int = 10,
        force_sign: bool = False,
    ) -> BufferWriteResult:
        return write_to_buffer(QNAN_STRING, buffer)

    def to_float(self, config: Optional[RationalConfig] = None) -> float:
        return math.nan

    def __float__(self) -> float:
        return math.nan

    def __str__(self) -> str:
        return QNAN_STRING

    def __repr__(self) -> str:
        return "QNAN"

    def _absorb(self, other: object) -> "UndefinedRational":
        return self

    __add__ = __radd__ = __sub__ = __rsub__ = _absorb
    __mul__ = __rmul__ = __truediv__ = __rtruediv__ = _absorb

    def __neg__(self) -> "UndefinedRational":
        return self

    def __abs__(self) -> "UndefinedRational":
        return self

    def __lt__(self, other: object) -> bool:
        return False

    __le__ = __gt__ = __ge__ = __lt__


QNAN: Final[UndefinedRational] = UndefinedRational()


# =============================================================================
# BIGQ MODEL
# =============================================================================


class BigQ(BaseModel):
    """
    Дробь произвольной точности в канонической форме.

    Конструирование напрямую через BigQ(numerator=..., denominator=...)
    проверяет каноничность (для внешних payload); арифметика строит
    результаты через канонизацию без повторной проверки.

    Examples:
        >>> BigQ.create(6, 4)
        BigQ(3/2)
        >>> BigQ.from_string("1/3") + BigQ.from_string("1/6")
        BigQ(1/2)
    """

    numerator: BigZ = Field(..., description="Числитель со знаком дроби")
    denominator: BigZ = Field(..., description="Знаменатель, всегда > 0")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_canonical(self) -> "BigQ":
        """denominator > 0 и gcd(|numerator|, denominator) == 1."""
        if self.denominator.sign != Sign.PLUS:
            raise ValueError(f"denominator must be positive, got {self.denominator}")
        if self.numerator.gcd(self.denominator) != ONE:
            raise ValueError(
                f"{self.numerator}/{self.denominator} is not reduced to lowest terms"
            )
        return self

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def _canonical(cls, numerator: BigZ, denominator: BigZ) -> "BigQ":
        # denominator > 0 гарантирован вызывающим
        if numerator.is_zero():
            return cls.model_construct(numerator=ZERO, denominator=ONE)
        if denominator == ONE:
            return cls.model_construct(numerator=numerator, denominator=denominator)

        divisor = numerator.gcd(denominator)
        if divisor != ONE:
            numerator = numerator.truncate(divisor)
            denominator = denominator.truncate(divisor)
        return cls.model_construct(numerator=numerator, denominator=denominator)

    @classmethod
    def create(
        cls,
        numerator: Union[BigZ, int],
        denominator: Union[BigZ, int] = 1,
        config: Optional[RationalConfig] = None,
    ) -> "BigQ":
        """
        Каноническая дробь numerator / denominator.

        Args:
            numerator: числитель
            denominator: знаменатель (по умолчанию 1)
            config: политика отрицательного знаменателя

        Returns:
            BigQ в канонической форме

        Raises:
            NumberZeroDivisionError: если denominator == 0
            NumberDomainError: если denominator < 0 и политика это запрещает
        """
        config = config or DEFAULT_CONFIG
        numerator = coerce_bigz(numerator)
        denominator = coerce_bigz(denominator)

        if denominator.is_zero():
            raise NumberZeroDivisionError(f"zero denominator for numerator {numerator}")
        if denominator.sign == Sign.MINUS:
            if not config.allow_negative_denominator:
                raise NumberDomainError(f"negative denominator {denominator}")
            logger.debug("normalizing negative denominator %s", denominator)
            numerator = numerator.negate()
            denominator = denominator.negate()

        return cls._canonical(numerator, denominator)

    @classmethod
    def from_bigz(cls, value: BigZ) -> "BigQ":
        """value / 1."""
        return cls._canonical(value, ONE)

    @classmethod
    def from_int(cls, value: int) -> "BigQ":
        return cls._canonical(BigZ.from_int(value), ONE)

    @classmethod
    def from_string(cls, text: str, base: int = 10) -> "BigQ":
        """
        Разбор записи [sign]numerator[/denominator].

        Ведущие пробелы, табуляции и переводы строк пропускаются. Знак
        допускается только перед числителем; знаменатель начинается
        сразу с цифры. Запись без '/' — целое над 1. После знаменателя
        (или целого) всё начиная с пробельного символа игнорируется.

        Raises:
            NumberParseError: синтаксическая ошибка, неверная цифра или base
            NumberZeroDivisionError: нулевой знаменатель
        """
        body = text.lstrip(_LEADING_SPACE)
        if not body:
            raise NumberParseError("empty rational numeral")

        unsigned = body[1:] if body.startswith(("+", "-")) else body
        if unsigned.startswith(("+", "-")):
            raise NumberParseError(f"repeated sign in {text!r}")

        slash = body.find("/")
        if slash < 0:
            return cls.from_bigz(BigZ.from_string(body, base, ParseMode.UNTIL_SPACE))

        denominator_text = body[slash + 1:]
        if not denominator_text or denominator_text[0] in "+-" + _LEADING_SPACE:
            raise NumberParseError(f"malformed denominator in {text!r}")

        numerator = BigZ.from_string(body, base, ParseMode.UNTIL_SLASH)
        denominator = BigZ.from_string(denominator_text, base, ParseMode.UNTIL_SPACE)
        return cls.create(numerator, denominator)

    @classmethod
    def from_float(cls, value: float, max_denominator: Union[BigZ, int]) -> "BigQ":
        """
        Приближение value дробью со знаменателем <= max_denominator.

        Спуск по дереву Штерна-Броко от границ 0/1 и 1/0 к |value|: медианта
        заменяет нижнюю или верхнюю границу, пока её знаменатель в пределах
        max_denominator. Серии шагов в одну сторону выполняются за один
        переход (как элементы цепной дроби), поэтому число итераций растёт
        логарифмически, а не линейно от max_denominator. Сравнение с value
        точное: float раскладывается в отношение целых.

        Args:
            value: конечное число
            max_denominator: ограничение знаменателя (>= 1)

        Returns:
            BigQ

        Raises:
            NumberDomainError: value не конечно или max_denominator < 1
        """
        if not math.isfinite(value):
            raise NumberDomainError(f"cannot approximate non-finite value {value}")
        limit = int(max_denominator)
        if limit < 1:
            raise NumberDomainError(f"max_denominator must be >= 1, got {limit}")

        p, q = abs(value).as_integer_ratio()
        lower_n, lower_d = 0, 1
        upper_n, upper_d = 1, 0
        iterations = 0

        while True:
            iterations += 1
            mediant_n = lower_n + upper_n
            mediant_d = lower_d + upper_d
            # sign(value - mediant) без округления
            side = p * mediant_d - q * mediant_n

            if side == 0:
                if mediant_d <= limit:
                    result = (mediant_n, mediant_d)
                elif lower_d < upper_d:
                    result = (lower_n, lower_d)
                else:
                    result = (upper_n, upper_d)
                break

            if mediant_d > limit:
                result = (upper_n, upper_d) if side > 0 else (lower_n, lower_d)
                break

            # value - lower и upper - value в общих знаменателях
            above_lower = p * lower_d - q * lower_n
            below_upper = q * upper_n - p * upper_d

            if side > 0:
                steps = _farey_steps(above_lower, below_upper, limit - lower_d, upper_d)
                lower_n += steps * upper_n
                lower_d += steps * upper_d
            else:
                steps = _farey_steps(below_upper, above_lower, limit - upper_d, lower_d)
                upper_n += steps * lower_n
                upper_d += steps * lower_d

        logger.debug(
            "farey approximation of %r with max_denominator=%d: %d/%d after %d iterations",
            value, limit, result[0], result[1], iterations,
        )
        numerator = result[0] if value >= 0 else -result[0]
        return cls.create(numerator, result[1])

    # -------------------------------------------------------------------------
    # Запросы
    # -------------------------------------------------------------------------

    def is_defined(self) -> bool:
        return True

    def is_zero(self) -> bool:
        return self.numerator.is_zero()

    def is_integer(self) -> bool:
        return self.denominator == ONE

    def signum(self) -> int:
        return self.numerator.signum()

    def to_float(self, config: Optional[RationalConfig] = None) -> float:
        """
        Приближение float.

        Сначала float(n) / float(d). Если оба переполняются (inf / inf),
        результат собирается как floor(q) плюс дробная часть, округлённая
        вниз до mantissa_bits двоичных знаков.
        """
        config = config or DEFAULT_CONFIG
        naive = self.numerator.to_float() / self.denominator.to_float()
        if not math.isnan(naive):
            return naive

        logger.debug(
            "to_float fallback for %d-bit numerator and %d-bit denominator",
            self.numerator.length(), self.denominator.length(),
        )
        whole = self.numerator.floor(self.denominator)
        scale = ONE.ash(config.mantissa_bits)
        fraction = self.subtract(whole).multiply(scale)
        scaled = fraction.numerator.floor(fraction.denominator)
        return whole.to_float() + scaled.to_float() / scale.to_float()

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, other: "Rational | BigZ | int") -> "Rational":
        """Сумма; при равных знаменателях без перекрёстного умножения."""
        other = _coerce(other)
        if other is QNAN:
            return QNAN

        if self.denominator == other.denominator:
            return BigQ._canonical(self.numerator.add(other.numerator), self.denominator)
        return BigQ._canonical(
            self.numerator.multiply(other.denominator).add(
                other.numerator.multiply(self.denominator)
            ),
            self.denominator.multiply(other.denominator),
        )

    def subtract(self, other: "Rational | BigZ | int") -> "Rational":
        other = _coerce(other)
        if other is QNAN:
            return QNAN
        return self.add(other.negate())

    def multiply(self, other: "Rational | BigZ | int") -> "Rational":
        other = _coerce(other)
        if other is QNAN:
            return QNAN
        return BigQ._canonical(
            self.numerator.multiply(other.numerator),
            self.denominator.multiply(other.denominator),
        )

    def divide(self, other: "Rational | BigZ | int") -> "Rational":
        """
        Частное.

        Raises:
            NumberZeroDivisionError: если other == 0
        """
        other = _coerce(other)
        if other is QNAN:
            return QNAN
        if other.is_zero():
            raise NumberZeroDivisionError(f"division of {self} by zero")

        numerator = self.numerator.multiply(other.denominator)
        denominator = self.denominator.multiply(other.numerator)
        if denominator.sign == Sign.MINUS:
            numerator, denominator = numerator.negate(), denominator.negate()
        return BigQ._canonical(numerator, denominator)

    def negate(self) -> "BigQ":
        return BigQ.model_construct(numerator=self.numerator.negate(), denominator=self.denominator)

    def abs(self) -> "BigQ":
        return BigQ.model_construct(numerator=self.numerator.abs(), denominator=self.denominator)

    def inverse(self) -> "BigQ":
        """
        1 / self.

        Числитель и знаменатель меняются местами, знак переносится на новый
        числитель. Сокращать не нужно: gcd уже равен 1.

        Raises:
            NumberZeroDivisionError: если self == 0
        """
        if self.is_zero():
            raise NumberZeroDivisionError("inverse of zero")
        if self.numerator.sign == Sign.MINUS:
            return BigQ.model_construct(
                numerator=self.denominator.negate(), denominator=self.numerator.abs()
            )
        return BigQ.model_construct(numerator=self.denominator, denominator=self.numerator)

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare(self, other: "Rational | BigZ | int") -> CompareResult:
        """
        Трёхзначное сравнение.

        Знаки числителей решают первыми, затем при равных знаменателях
        сравниваются числители, иначе n1*d2 против n2*d1.

        Returns:
            CompareResult; ERROR если other — QNAN
        """
        other = _coerce(other)
        if other is QNAN:
            return CompareResult.ERROR

        if self.numerator.sign != other.numerator.sign:
            if self.numerator.sign < other.numerator.sign:
                return CompareResult.LT
            return CompareResult.GT
        if self.denominator == other.denominator:
            return self.numerator.compare(other.numerator)
        return self.numerator.multiply(other.denominator).compare(
            other.numerator.multiply(self.denominator)
        )

    # -------------------------------------------------------------------------
    # Строковая конверсия
    # -------------------------------------------------------------------------

    def to_string(self, base: int = 10, force_sign: bool = False) -> str:
        """
        "n/d" в системе счисления base; целые без "/1".

        force_sign относится к числителю, знаменатель всегда без знака.
        """
        if self.denominator == ONE:
            return self.numerator.to_string(base, force_sign)
        return (
            f"{self.numerator.to_string(base, force_sign)}/"
            f"{self.denominator.to_string(base)}"
        )

    def to_string_buffer(
        self,
        buffer: bytearray,
        base: int = 10,
        force_sign: bool = False,
    ) -> BufferWriteResult:
        return write_to_buffer(self.to_string(base, force_sign), buffer)

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigQ({self.to_string()})"

    def __hash__(self) -> int:
        # Целая дробь равна BigZ и int, хеш должен совпадать с ними
        if self.is_integer():
            return hash(self.numerator)
        return hash((self.numerator.to_int(), self.denominator.to_int()))

    def __eq__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        if operand is QNAN:
            return False
        return self.numerator == operand.numerator and self.denominator == operand.denominator

    def _ordered(self, other: object, *accepted: CompareResult) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) in accepted

    def __lt__(self, other: object) -> bool:
        return self._ordered(other, CompareResult.LT)

    def __le__(self, other: object) -> bool:
        return self._ordered(other, CompareResult.LT, CompareResult.EQ)

    def __gt__(self, other: object) -> bool:
        return self._ordered(other, CompareResult.GT)

    def __ge__(self, other: object) -> bool:
        return self._ordered(other, CompareResult.GT, CompareResult.EQ)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __float__(self) -> float:
        return self.to_float()

    def __neg__(self) -> "BigQ":
        return self.negate()

    def __pos__(self) -> "BigQ":
        return self

    def __abs__(self) -> "BigQ":
        return self.abs()

    def __add__(self, other: object) -> "Rational":
        operand = _operand(other)
        return NotImplemented if operand is None else self.add(operand)

    def __radd__(self, other: object) -> "Rational":
        operand = _operand(other)
        return NotImplemented if operand is None else operand.add(self)

    def __sub__(self, other: object) -> "Rational":
        operand = _operand(other)
        return NotImplemented if operand is None else self.subtract(operand)

    def __rsub__(self, other: object) -> "Rational":
        operand = _operand(other)
        return NotImplemented if operand is None else operand.subtract(self)

    def __mul__(self, other: object) -> "Rational":
        operand = _operand(other)
        return NotImplemented if operand is None else self.multiply(operand)

    def __rmul__(self, other: object) -> "Rational":
        operand = _operand(other)
        return NotImplemented if operand is None else operand.multiply(self)

    def __truediv__(self, other: object) -> "Rational":
        operand = _operand(other)
        return NotImplemented if operand is None else self.divide(operand)

    def __rtruediv__(self, other: object) -> "Rational":
        operand = _operand(other)
        return NotImplemented if operand is None else operand.divide(self)


Rational = Union[BigQ, UndefinedRational]


# =============================================================================
# HELPERS
# =============================================================================


def _operand(value: object) -> Optional[Rational]:
    if isinstance(value, (BigQ, UndefinedRational)):
        return value
    if isinstance(value, BigZ):
        return BigQ.from_bigz(value)
    if isinstance(value, int):
        return BigQ.from_int(value)
    return None


def _coerce(value: object) -> Rational:
    operand = _operand(value)
    if operand is None:
        raise TypeError(f"cannot convert {type(value).__name__} to BigQ")
    return operand


def _farey_steps(distance: int, stride: int, room: int, growth: int) -> int:
    """
    Длина серии шагов медианты в одну сторону.

    j-й шаг подряд выполняется, пока j * stride < distance (медианта
    остаётся по ту же сторону от value) и прирост знаменателя
    j * growth не превышает room.

    Args:
        distance: расстояние от value до сдвигаемой границы
        stride: расстояние от value до неподвижной границы
        room: запас знаменателя до max_denominator
        growth: знаменатель неподвижной границы
    """
    steps = None
    if stride > 0:
        steps = (distance - 1) // stride
    if growth > 0:
        cap = room // growth
        steps = cap if steps is None else min(steps, cap)
    return steps


# =============================================================================
# PARSING
# =============================================================================


def parse_rational(text: str, base: int = 10) -> Rational:
    """
    Разбор дроби без исключений.

    Returns:
        BigQ, либо QNAN если запись некорректна (любая NumberError)
    """
    try:
        return BigQ.from_string(text, base)
    except NumberError as exc:
        logger.debug("parse_rational(%r, base=%d) -> QNAN: %s", text, base, exc)
        return QNAN
