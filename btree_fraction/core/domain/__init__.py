"""
Domain models: дроби фиксированной ширины.

UFrac8/16/32/64: беззнаковые. IFrac8: знаковая 8-битная.
"""

from btree_fraction.core.domain.ifrac import IFRAC8_WIDTH, SIGN_BIT, IFrac8
from btree_fraction.core.domain.ufrac import (
    UFRAC_TYPES,
    UFrac,
    UFrac8,
    UFrac16,
    UFrac32,
    UFrac64,
)

__all__ = [
    # Unsigned family
    "UFrac",
    "UFrac8",
    "UFrac16",
    "UFrac32",
    "UFrac64",
    "UFRAC_TYPES",
    # Signed variant
    "IFrac8",
    "IFRAC8_WIDTH",
    "SIGN_BIT",
]
