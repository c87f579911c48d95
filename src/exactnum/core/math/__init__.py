"""
Core math modules для exactnum

Точная арифметика произвольной точности: целые (BigZ) и дроби (BigQ).
"""

# Errors
from exactnum.core.math.errors import (
    NumberDomainError,
    NumberError,
    NumberParseError,
    NumberResourceError,
    NumberZeroDivisionError,
)

# Random state
from exactnum.core.math.random_state import RandomState

# Integer engine
from exactnum.core.math.integer import (
    ENGINE_VERSION,
    MAX_BASE,
    MIN_BASE,
    MINUS_ONE,
    ONE,
    ZERO,
    BigZ,
    BufferWriteResult,
    CompareResult,
    ParseMode,
    Sign,
    version,
)

# Rational engine
from exactnum.core.math.rational import (
    MANTISSA_BITS,
    QNAN,
    QNAN_STRING,
    BigQ,
    Rational,
    RationalConfig,
    UndefinedRational,
    parse_rational,
)

__all__ = [
    # Errors
    "NumberError",
    "NumberParseError",
    "NumberDomainError",
    "NumberZeroDivisionError",
    "NumberResourceError",
    # Random state
    "RandomState",
    # Integer — Constants
    "ENGINE_VERSION",
    "MIN_BASE",
    "MAX_BASE",
    "ZERO",
    "ONE",
    "MINUS_ONE",
    # Integer — Types
    "BigZ",
    "Sign",
    "CompareResult",
    "ParseMode",
    "BufferWriteResult",
    # Integer — Functions
    "version",
    # Rational — Constants
    "MANTISSA_BITS",
    "QNAN",
    "QNAN_STRING",
    # Rational — Types
    "BigQ",
    "Rational",
    "RationalConfig",
    "UndefinedRational",
    # Rational — Functions
    "parse_rational",
]
