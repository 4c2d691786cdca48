"""
btree-fraction: рациональные числа как узлы дерева Штерна–Броко,
упакованные в целые фиксированной ширины.
"""

from btree_fraction.core.domain import IFrac8, UFrac8, UFrac16, UFrac32, UFrac64
from btree_fraction.core.math import (
    FractionDomainViolation,
    FractionPair,
    FractionPreconditionViolation,
)

__all__ = [
    "UFrac8",
    "UFrac16",
    "UFrac32",
    "UFrac64",
    "IFrac8",
    "FractionPair",
    "FractionDomainViolation",
    "FractionPreconditionViolation",
]
