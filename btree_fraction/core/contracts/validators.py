"""
JSON Schema Contract Validators

Валидация сериализованной формы дробей: payload {"bits": n}.

Схемы не хранятся файлами: каждая модель (UFrac8..UFrac64, IFrac8)
генерирует свою схему через pydantic model_json_schema(), поэтому
границы bits в схеме всегда совпадают с границами поля модели.

Модуль не импортирует доменные модели: модель передаётся аргументом.
"""

from functools import lru_cache
from typing import Any, Dict, Iterator, Type

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from pydantic import BaseModel


# =============================================================================
# SCHEMA BUILDER
# =============================================================================


def build_fraction_schema(model: Type[BaseModel]) -> Dict[str, Any]:
    """
    JSON Schema для payload модели.

    Поверх схемы pydantic запрещаются лишние поля: payload содержит
    только bits.

    Raises:
        ValueError: Если сгенерированная схема невалидна (meta-validation)
    """
    schema = dict(model.model_json_schema())
    schema.setdefault("additionalProperties", False)

    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema for {model.__name__}: {e}")

    return schema


# =============================================================================
# CONTRACT VALIDATOR
# =============================================================================


class FractionContractValidator:
    """
    Валидатор payload одной модели дроби.

    Инкапсулирует Draft202012Validator над схемой модели.
    """

    def __init__(self, model: Type[BaseModel]):
        """
        Args:
            model: Класс модели (например, UFrac8)
        """
        self.model = model
        self.schema = build_fraction_schema(model)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если payload не соответствует схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Все ошибки валидации (пустой итератор для валидного payload)."""
        return self.validator.iter_errors(data)


@lru_cache(maxsize=None)
def get_contract_validator(model: Type[BaseModel]) -> FractionContractValidator:
    """Кэшированный валидатор для модели (схема строится один раз)."""
    return FractionContractValidator(model)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_fraction_payload(data: Dict[str, Any], model: Type[BaseModel]) -> None:
    """
    Валидация payload дроби против схемы модели.

    Args:
        data: Payload ({"bits": n})
        model: Класс модели

    Raises:
        ValidationError: Если payload не соответствует схеме
    """
    get_contract_validator(model).validate(data)
