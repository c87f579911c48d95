"""
JSON Schema контракты сериализованных чисел

Payload BigZ/BigQ сначала проверяется jsonschema (форма), затем
восстанавливается Pydantic моделью (каноничность).

Контракты:
- bigz — {"sign": -1|0|1, "digits": [...]}
- bigq — {"numerator": bigz, "denominator": bigz с sign == 1}

Схема не знает о каноничности: старшая нулевая цифра и несокращённая дробь
проходят jsonschema и отклоняются validators моделей.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, Type, Union

import jsonschema
from jsonschema import Draft202012Validator
from pydantic import BaseModel

from exactnum.core.math.integer import BigZ
from exactnum.core.math.rational import BigQ

Payload = Dict[str, Any]


# =============================================================================
# CONTRACTS
# =============================================================================


class Contract(str, Enum):
    """Контракт сериализованного значения; value совпадает с именем файла схемы."""

    BIGZ = "bigz"
    BIGQ = "bigq"

    @property
    def model(self) -> Type[BaseModel]:
        return BigZ if self is Contract.BIGZ else BigQ


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Чтение схем из каталога schema/ (package data).

    Каждая схема читается один раз и до попадания в кэш проходит
    meta-validation по Draft 2020-12.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Payload] = {}

    def load_schema(self, schema_name: str) -> Payload:
        """
        Схема по имени файла без расширения.

        Raises:
            FileNotFoundError: нет файла <schema_name>.json
            ValueError: файл не является JSON Schema
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.exists():
            raise FileNotFoundError(f"Schema not found: {path}")
        schema = json.loads(path.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# VALIDATOR
# =============================================================================


class ContractValidator:
    """Проверка payload против одного контракта и восстановление значения."""

    def __init__(self, contract: Union[Contract, str], loader: SchemaLoader | None = None):
        self.contract = Contract(contract)
        self.schema = (loader or _SCHEMA_LOADER).load_schema(self.contract.value)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, data: Payload) -> None:
        """
        Raises:
            jsonschema.ValidationError: первое найденное нарушение
        """
        self._validator.validate(data)

    def is_valid(self, data: Payload) -> bool:
        return self._validator.is_valid(data)

    def iter_errors(self, data: Payload) -> Iterator[jsonschema.ValidationError]:
        return self._validator.iter_errors(data)

    def load(self, data: Payload) -> Union[BigZ, BigQ]:
        """
        Схема, затем model_validate.

        Raises:
            jsonschema.ValidationError: нарушена форма payload
            pydantic.ValidationError: значение не в канонической форме
        """
        self.validate(data)
        return self.contract.model.model_validate(data)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_bigz(data: Payload) -> None:
    ContractValidator(Contract.BIGZ).validate(data)


def validate_bigq(data: Payload) -> None:
    ContractValidator(Contract.BIGQ).validate(data)


def to_payload(value: Union[BigZ, BigQ]) -> Payload:
    """JSON-совместимый dict: кортежи цифр становятся списками."""
    return value.model_dump(mode="json")


def bigz_from_payload(data: Payload) -> BigZ:
    return ContractValidator(Contract.BIGZ).load(data)


def bigq_from_payload(data: Payload) -> BigQ:
    return ContractValidator(Contract.BIGQ).load(data)
