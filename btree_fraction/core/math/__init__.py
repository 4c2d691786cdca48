"""
Core math modules для btree-fraction

Битовая раскладка, алгоритм Штерна–Броко и навигация по дереву.
Модели (UFrac*, IFrac8) строятся поверх этих функций в core.domain.
"""

# Numerical Safeguards
from btree_fraction.core.math.numerical_safeguards import (
    UNSIGNED_FLOOR,
    FractionDomainViolation,
    FractionPreconditionViolation,
    is_negative_zero,
    is_valid_float,
    validate_bits_fit,
    validate_encodable_float,
    validate_int_in_range,
)

# Bit Layout
from btree_fraction.core.math.bit_layout import (
    IFRAC8_MAGNITUDE_WIDTH,
    MIN_WIDTH,
    SUPPORTED_WIDTHS,
    WidthSpec,
    compose_bits,
    depth_of,
    get_width_spec,
    is_leaf_bits,
    to_binary_string,
    trailing_zeros,
)

# Stern–Brocot
from btree_fraction.core.math.stern_brocot import (
    GOLDEN_RATIO_FLOAT,
    FractionPair,
    compare_bits,
    compare_signed_bits,
    decode_bits,
    encode_float,
    encode_golden_ratio,
    encode_int,
    encode_rational,
)

# Navigation
from btree_fraction.core.math.navigation import (
    children_bits,
    invert_bits,
    left_child_bits,
    narrow_bits,
    narrow_bits_lossy,
    parent_bits,
    right_child_bits,
    sibling_bits,
    widen_bits,
)

__all__ = [
    # Numerical Safeguards — Constants
    "UNSIGNED_FLOOR",
    # Numerical Safeguards — Exceptions
    "FractionDomainViolation",
    "FractionPreconditionViolation",
    # Numerical Safeguards — Validation
    "is_negative_zero",
    "is_valid_float",
    "validate_bits_fit",
    "validate_encodable_float",
    "validate_int_in_range",
    # Bit Layout — Constants
    "IFRAC8_MAGNITUDE_WIDTH",
    "MIN_WIDTH",
    "SUPPORTED_WIDTHS",
    # Bit Layout — Types
    "WidthSpec",
    # Bit Layout — Functions
    "compose_bits",
    "depth_of",
    "get_width_spec",
    "is_leaf_bits",
    "to_binary_string",
    "trailing_zeros",
    # Stern–Brocot — Constants
    "GOLDEN_RATIO_FLOAT",
    # Stern–Brocot — Types
    "FractionPair",
    # Stern–Brocot — Functions
    "compare_bits",
    "compare_signed_bits",
    "decode_bits",
    "encode_float",
    "encode_golden_ratio",
    "encode_int",
    "encode_rational",
    # Navigation — Functions
    "children_bits",
    "invert_bits",
    "left_child_bits",
    "narrow_bits",
    "narrow_bits_lossy",
    "parent_bits",
    "right_child_bits",
    "sibling_bits",
    "widen_bits",
]
