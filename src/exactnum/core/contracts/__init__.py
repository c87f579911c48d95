"""
Contract Validation Module

Модуль для валидации JSON представлений BigZ и BigQ.
"""

from .validators import (
    Contract,
    ContractValidator,
    SchemaLoader,
    bigq_from_payload,
    bigz_from_payload,
    to_payload,
    validate_bigq,
    validate_bigz,
)

__all__ = [
    # Classes
    "Contract",
    "SchemaLoader",
    "ContractValidator",
    # Functions
    "validate_bigz",
    "validate_bigq",
    "to_payload",
    "bigz_from_payload",
    "bigq_from_payload",
]
