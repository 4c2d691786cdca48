"""
Contract Validation Module

Валидация сериализованной формы дробей ({"bits": n}).
"""

from .validators import (
    FractionContractValidator,
    build_fraction_schema,
    get_contract_validator,
    validate_fraction_payload,
)

__all__ = [
    # Classes
    "FractionContractValidator",
    # Functions
    "build_fraction_schema",
    "get_contract_validator",
    "validate_fraction_payload",
]
