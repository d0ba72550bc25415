"""
Core math modules для polyengine

Математические примитивы и численные алгоритмы с гарантией стабильности.

Алгоритмы над Polynomial живут в polyengine.core.math.arithmetic и
импортируются оттуда напрямую (модуль зависит от core.domain).
"""

# Numerical Safeguards
from polyengine.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_COEFF,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    # Checks
    is_close,
    is_negligible,
    is_valid_float,
    # Validation
    validate_coefficient,
    validate_exponent,
    # Power
    int_power,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_COEFF",
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Numerical Safeguards — Checks
    "is_close",
    "is_negligible",
    "is_valid_float",
    # Numerical Safeguards — Validation
    "validate_coefficient",
    "validate_exponent",
    # Numerical Safeguards — Power
    "int_power",
]
