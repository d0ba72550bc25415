"""
polyengine — sparse single-variable polynomial algebra engine.

Polynomial хранится как упорядоченный список термов (coefficient, exponent);
поддерживаются разбор из текста, форматирование, сложение, вычитание,
умножение, деление с остатком, дифференцирование, интегрирование и
вычисление в точке.
"""

from polyengine.core.domain import CoefficientOverflow, Polynomial, PolynomialError, Term
from polyengine.core.math.arithmetic import (
    DivisionByZero,
    DivisionResult,
    add,
    definite_integral,
    derivative,
    divide,
    evaluate,
    integrate,
    multiply,
    negate,
    nth_derivative,
    scale,
    subtract,
)
from polyengine.core.math.numerical_safeguards import EPS_COEFF
from polyengine.expression import (
    FormatConfig,
    MalformedExpression,
    ParserConfig,
    format_polynomial,
    parse_polynomial,
)

__all__ = [
    # Domain
    "Polynomial",
    "Term",
    "EPS_COEFF",
    # Exceptions
    "PolynomialError",
    "MalformedExpression",
    "DivisionByZero",
    "CoefficientOverflow",
    # Arithmetic
    "DivisionResult",
    "add",
    "subtract",
    "negate",
    "scale",
    "multiply",
    "derivative",
    "nth_derivative",
    "integrate",
    "definite_integral",
    "divide",
    "evaluate",
    # Expression
    "ParserConfig",
    "FormatConfig",
    "parse_polynomial",
    "format_polynomial",
]
