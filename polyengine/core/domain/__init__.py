"""
Domain models and value objects.

Contains Term (immutable monomial) and Polynomial (ordered Term Store).
"""

from polyengine.core.domain.polynomial import CoefficientOverflow, Polynomial, PolynomialError
from polyengine.core.domain.term import Term

__all__ = [
    "CoefficientOverflow",
    "Polynomial",
    "PolynomialError",
    "Term",
]
