"""
Errors — Таксономия ошибок арифметического ядра

Все ошибки локальны для вызова, который их породил. Повторная попытка
никогда не помогает: у ядра нет transient-сбоев.

ТАКСОНОМИЯ:
1. NumberParseError    — некорректная запись числа (пустая строка, неверная
                         цифра, основание вне 2..36, кривой синтаксис дроби)
2. NumberDomainError   — операция вне области определения (деление на ноль,
                         модуль <= 0, знаменатель <= 0, отрицательная степень,
                         корень из отрицательного числа)
3. NumberResourceError — magnitude не помещается в допустимый размер буфера

Неопределённая дробь (QNAN) не является исключением: она распространяется
через rational-операции и всплывает там, где вызывающий её проверит.
"""


class NumberError(Exception):
    """Базовая ошибка арифметического ядра."""

    pass


class NumberParseError(NumberError, ValueError):
    """
    Некорректная строковая запись числа.

    Примеры: "", "+-1", "12G" в base 16, "1/-2", base=37.
    """

    pass


class NumberDomainError(NumberError, ArithmeticError):
    """Аргумент вне области определения операции."""

    pass


class NumberZeroDivisionError(NumberDomainError, ZeroDivisionError):
    """Деление на ноль в любой операции семейства div/floor/ceiling/round/mod/rem."""

    pass


class NumberResourceError(NumberError, MemoryError):
    """
    Превышен допустимый размер magnitude.

    Результат никогда не усекается молча: операция либо возвращает точное
    значение, либо поднимает эту ошибку.
    """

    pass
