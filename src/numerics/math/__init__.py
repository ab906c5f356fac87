"""
Numeric math модули

Классификация числовых типов, разрешение общего типа и approx-сравнения.
"""

# Numeric Traits
from src.numerics.math.numeric_traits import (
    # Tolerance constants
    DECIMAL_TOLERANCE_DIGITS,
    TOLERANCE_FLOAT16,
    TOLERANCE_FLOAT32,
    TOLERANCE_FLOAT64,
    TOLERANCE_LONGDOUBLE,
    # Exceptions
    IncompatibleNumericTypes,
    # Wrapper base
    NumericWrapper,
    # Predicates
    is_complex,
    is_floating_point,
    is_integral,
    is_number,
    # Type resolution
    common_numeric_type,
    floating_point_type,
    numeric_epsilon,
    tolerance,
)

# Approx Equality
from src.numerics.math.equality import (
    abs_approx_equal,
    approx_0,
    approx_1,
    approx_equal,
    approx_equal_range,
)

__all__ = [
    # Numeric Traits: Tolerance constants
    "DECIMAL_TOLERANCE_DIGITS",
    "TOLERANCE_FLOAT16",
    "TOLERANCE_FLOAT32",
    "TOLERANCE_FLOAT64",
    "TOLERANCE_LONGDOUBLE",
    # Numeric Traits: Exceptions
    "IncompatibleNumericTypes",
    # Numeric Traits: Wrapper base
    "NumericWrapper",
    # Numeric Traits: Predicates
    "is_complex",
    "is_floating_point",
    "is_integral",
    "is_number",
    # Numeric Traits: Type resolution
    "common_numeric_type",
    "floating_point_type",
    "numeric_epsilon",
    "tolerance",
    # Approx Equality
    "abs_approx_equal",
    "approx_0",
    "approx_1",
    "approx_equal",
    "approx_equal_range",
]
