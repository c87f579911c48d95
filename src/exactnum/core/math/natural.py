"""
Natural — Беззнаковая magnitude на векторе цифр

Модуль реализует арифметику неотрицательных целых, записанных как кортеж
цифр по основанию 2**32 (младшая цифра первой):
- Сложение/вычитание с переносом и заёмом
- Умножение столбиком, деление по алгоритму D (Knuth, TAOCP vol. 2, 4.3.1)
- Сдвиги, битовые запросы, целый квадратный корень (метод Ньютона)
- Перевод в строку и обратно для оснований 2..36

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждая цифра в диапазоне [0, DIGIT_BASE)
2. Старшая цифра никогда не равна нулю; ноль — пустой кортеж
3. Функции никогда не мутируют аргументы и возвращают нормализованный кортеж

Знак здесь не хранится: им управляет integer-слой.
"""

from typing import Final, Sequence

from exactnum.core.math.errors import NumberResourceError, NumberZeroDivisionError

# =============================================================================
# ПАРАМЕТРЫ ПРЕДСТАВЛЕНИЯ
# =============================================================================

# Ширина одной цифры в битах
DIGIT_BITS: Final[int] = 32

# Основание системы счисления цифр
DIGIT_BASE: Final[int] = 1 << DIGIT_BITS

# Маска одной цифры
DIGIT_MASK: Final[int] = DIGIT_BASE - 1

# Предельное число цифр одной magnitude (2**31 бит)
MAX_DIGITS: Final[int] = 1 << 26

# Алфавит цифр для оснований 2..36
DIGIT_CHARS: Final[str] = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

Digits = tuple[int, ...]

ZERO: Final[Digits] = ()
ONE: Final[Digits] = (1,)


# =============================================================================
# НОРМАЛИЗАЦИЯ И КОНВЕРСИЯ
# =============================================================================


def check_size(num_digits: int) -> None:
    """
    Проверка, что буфер из num_digits цифр допустим.

    Raises:
        NumberResourceError: если num_digits > MAX_DIGITS
    """
    if num_digits > MAX_DIGITS:
        raise NumberResourceError(
            f"magnitude of {num_digits} digits exceeds limit of {MAX_DIGITS} digits"
        )


def normalize(digits: Sequence[int]) -> Digits:
    """Отбрасывает старшие нулевые цифры."""
    end = len(digits)
    while end > 0 and digits[end - 1] == 0:
        end -= 1
    return tuple(digits[:end])


def from_int(value: int) -> Digits:
    """
    Разбиение неотрицательного Python int на цифры.

    Raises:
        ValueError: если value < 0
    """
    if value < 0:
        raise ValueError(f"magnitude must be non-negative, got {value}")

    out = []
    while value:
        out.append(value & DIGIT_MASK)
        value >>= DIGIT_BITS
    return tuple(out)


def to_int(a: Digits) -> int:
    """Сборка Python int из цифр."""
    value = 0
    for digit in reversed(a):
        value = (value << DIGIT_BITS) | digit
    return value


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def compare(a: Digits, b: Digits) -> int:
    """
    Трёхзначное сравнение magnitude.

    Returns:
        -1 если a < b, 0 если a == b, 1 если a > b
    """
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1

    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1
    return 0


# =============================================================================
# СЛОЖЕНИЕ / ВЫЧИТАНИЕ
# =============================================================================


def add(a: Digits, b: Digits) -> Digits:
    """Сумма a + b с распространением переноса."""
    if len(a) < len(b):
        a, b = b, a

    out = []
    carry = 0
    for i in range(len(a)):
        total = a[i] + (b[i] if i < len(b) else 0) + carry
        out.append(total & DIGIT_MASK)
        carry = total >> DIGIT_BITS
    if carry:
        out.append(carry)
    return tuple(out)


def subtract(a: Digits, b: Digits) -> Digits:
    """
    Разность a - b с распространением заёма.

    Raises:
        ValueError: если a < b (magnitude не может быть отрицательной)
    """
    if compare(a, b) < 0:
        raise ValueError("magnitude subtraction underflow: a < b")

    out = []
    borrow = 0
    for i in range(len(a)):
        diff = a[i] - (b[i] if i < len(b) else 0) - borrow
        if diff < 0:
            diff += DIGIT_BASE
            borrow = 1
        else:
            borrow = 0
        out.append(diff)
    return normalize(out)


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def multiply_digit(a: Digits, digit: int) -> Digits:
    """Произведение magnitude на одну цифру."""
    if digit == 0 or not a:
        return ZERO

    out = []
    carry = 0
    for x in a:
        product = x * digit + carry
        out.append(product & DIGIT_MASK)
        carry = product >> DIGIT_BITS
    if carry:
        out.append(carry)
    return tuple(out)


def multiply(a: Digits, b: Digits) -> Digits:
    """
    Произведение столбиком (schoolbook), O(len(a) * len(b)).

    Raises:
        NumberResourceError: если результат превышает MAX_DIGITS
    """
    if not a or not b:
        return ZERO
    if len(b) == 1:
        return multiply_digit(a, b[0])
    if len(a) == 1:
        return multiply_digit(b, a[0])

    size = len(a) + len(b)
    check_size(size)
    try:
        out = [0] * size
    except MemoryError as exc:
        raise NumberResourceError(f"cannot allocate {size} digits") from exc

    for i, x in enumerate(a):
        if x == 0:
            continue
        carry = 0
        for j, y in enumerate(b):
            t = out[i + j] + x * y + carry
            out[i + j] = t & DIGIT_MASK
            carry = t >> DIGIT_BITS
        k = i + len(b)
        while carry:
            t = out[k] + carry
            out[k] = t & DIGIT_MASK
            carry = t >> DIGIT_BITS
            k += 1
    return normalize(out)


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def divmod_digit(a: Digits, digit: int) -> tuple[Digits, int]:
    """
    Деление magnitude на одну цифру.

    Returns:
        (quotient, remainder), remainder — Python int в [0, digit)

    Raises:
        NumberZeroDivisionError: если digit == 0
    """
    if digit == 0:
        raise NumberZeroDivisionError("magnitude division by zero")

    out = [0] * len(a)
    remainder = 0
    for i in range(len(a) - 1, -1, -1):
        current = (remainder << DIGIT_BITS) | a[i]
        out[i], remainder = divmod(current, digit)
    return normalize(out), remainder


def divmod_(a: Digits, b: Digits) -> tuple[Digits, Digits]:
    """
    Деление с остатком: a = q * b + r, 0 <= r < b.

    Алгоритм D (Knuth): нормализация делителя так, чтобы старший бит его
    старшей цифры был установлен, оценка цифры частного по двум старшим
    цифрам остатка, коррекция оценки и add-back при отрицательном остатке.

    Raises:
        NumberZeroDivisionError: если b == 0
    """
    if not b:
        raise NumberZeroDivisionError("magnitude division by zero")
    if compare(a, b) < 0:
        return ZERO, a
    if len(b) == 1:
        quotient, remainder = divmod_digit(a, b[0])
        return quotient, from_int(remainder)

    shift = DIGIT_BITS - b[-1].bit_length()
    v = list(shift_left(b, shift))
    u = list(shift_left(a, shift))
    while len(u) < len(a) + 1:
        u.append(0)

    n = len(v)
    m = len(a) - n
    v_top = v[-1]
    v_next = v[-2]
    q = [0] * (m + 1)

    for j in range(m, -1, -1):
        # D3: оценка цифры частного
        numerator = (u[j + n] << DIGIT_BITS) | u[j + n - 1]
        q_hat, r_hat = divmod(numerator, v_top)
        while q_hat >= DIGIT_BASE or q_hat * v_next > ((r_hat << DIGIT_BITS) | u[j + n - 2]):
            q_hat -= 1
            r_hat += v_top
            if r_hat >= DIGIT_BASE:
                break

        # D4: умножение и вычитание
        borrow = 0
        carry = 0
        for i in range(n):
            product = q_hat * v[i] + carry
            carry = product >> DIGIT_BITS
            t = u[i + j] - (product & DIGIT_MASK) - borrow
            if t < 0:
                t += DIGIT_BASE
                borrow = 1
            else:
                borrow = 0
            u[i + j] = t
        t = u[j + n] - carry - borrow

        if t < 0:
            # D6: оценка оказалась на единицу больше, возвращаем делитель
            u[j + n] = t + DIGIT_BASE
            q_hat -= 1
            carry = 0
            for i in range(n):
                total = u[i + j] + v[i] + carry
                u[i + j] = total & DIGIT_MASK
                carry = total >> DIGIT_BITS
            u[j + n] = (u[j + n] + carry) & DIGIT_MASK
        else:
            u[j + n] = t

        q[j] = q_hat

    remainder = shift_right(normalize(u[:n]), shift)
    return normalize(q), remainder


# =============================================================================
# СДВИГИ И БИТЫ
# =============================================================================


def shift_left(a: Digits, bits: int) -> Digits:
    """Умножение на 2**bits."""
    if not a or bits == 0:
        return tuple(a)

    digit_shift, bit_shift = divmod(bits, DIGIT_BITS)
    check_size(len(a) + digit_shift + 1)

    out = [0] * digit_shift
    if bit_shift == 0:
        out.extend(a)
    else:
        carry = 0
        for x in a:
            out.append(((x << bit_shift) & DIGIT_MASK) | carry)
            carry = x >> (DIGIT_BITS - bit_shift)
        if carry:
            out.append(carry)
    return tuple(out)


def shift_right(a: Digits, bits: int) -> Digits:
    """Целочисленное деление на 2**bits (отбрасывание младших бит)."""
    digit_shift, bit_shift = divmod(bits, DIGIT_BITS)
    if digit_shift >= len(a):
        return ZERO

    src = a[digit_shift:]
    if bit_shift == 0:
        return tuple(src)

    out = []
    for i, x in enumerate(src):
        high = src[i + 1] if i + 1 < len(src) else 0
        out.append((x >> bit_shift) | ((high << (DIGIT_BITS - bit_shift)) & DIGIT_MASK))
    return normalize(out)


def has_low_bits(a: Digits, bits: int) -> bool:
    """Есть ли ненулевые биты среди младших bits бит."""
    digit_shift, bit_shift = divmod(bits, DIGIT_BITS)
    for i in range(min(digit_shift, len(a))):
        if a[i]:
            return True
    if bit_shift and digit_shift < len(a):
        return bool(a[digit_shift] & ((1 << bit_shift) - 1))
    return False


def bit_length(a: Digits) -> int:
    """Число значащих бит; 0 для нуля."""
    if not a:
        return 0
    return (len(a) - 1) * DIGIT_BITS + a[-1].bit_length()


def bit_count(a: Digits) -> int:
    """Число установленных бит."""
    return sum(digit.bit_count() for digit in a)


def test_bit(a: Digits, index: int) -> bool:
    """Значение бита index (0 — младший)."""
    digit_index, bit_index = divmod(index, DIGIT_BITS)
    if digit_index >= len(a):
        return False
    return bool((a[digit_index] >> bit_index) & 1)


def is_odd(a: Digits) -> bool:
    """Нечётность по младшей цифре; ноль чётный."""
    return bool(a) and bool(a[0] & 1)


# =============================================================================
# КВАДРАТНЫЙ КОРЕНЬ
# =============================================================================


def isqrt(a: Digits) -> Digits:
    """
    floor(sqrt(a)) методом Ньютона.

    Стартовое приближение 2**ceil(bits/2) заведомо не меньше корня,
    итерация x' = (x + a // x) // 2 монотонно убывает до ответа.
    """
    if not a:
        return ZERO

    x = shift_left(ONE, (bit_length(a) + 1) // 2)
    while True:
        quotient, _ = divmod_(a, x)
        y = shift_right(add(x, quotient), 1)
        if compare(y, x) >= 0:
            return x
        x = y


# =============================================================================
# СТРОКОВАЯ КОНВЕРСИЯ
# =============================================================================


def _chunk(base: int) -> tuple[int, int]:
    """
    Наибольшая степень base, помещающаяся в одну цифру.

    Returns:
        (base**width, width)
    """
    power = base
    width = 1
    while power * base < DIGIT_BASE:
        power *= base
        width += 1
    return power, width


def to_string(a: Digits, base: int) -> str:
    """
    Запись magnitude в системе счисления base (2..36), без знака.

    Magnitude делится на base**width пачками, каждая пачка раскладывается
    на width символов с ведущими нулями (кроме самой старшей).
    """
    if not a:
        return "0"

    power, width = _chunk(base)
    chunks = []
    while a:
        a, remainder = divmod_digit(a, power)
        chunks.append(remainder)

    parts = []
    for position, chunk in enumerate(reversed(chunks)):
        chars = []
        while chunk:
            chunk, digit = divmod(chunk, base)
            chars.append(DIGIT_CHARS[digit])
        text = "".join(reversed(chars))
        parts.append(text if position == 0 else text.rjust(width, "0"))
    return "".join(parts)


def from_digit_values(values: Sequence[int], base: int) -> Digits:
    """
    Сборка magnitude из значений цифр base-записи (старшая первой).

    Значения уже проверены вызывающим: 0 <= value < base.
    """
    _, width = _chunk(base)
    check_size(len(values) // width + 1)

    acc = ZERO
    for start in range(0, len(values), width):
        group = values[start:start + width]
        chunk = 0
        for value in group:
            chunk = chunk * base + value
        acc = add(multiply_digit(acc, base ** len(group)), from_int(chunk))
    return acc
