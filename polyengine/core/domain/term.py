"""
Term — атомарный моном coefficient * x^exponent

Immutable Pydantic модель. Term Store (Polynomial) хранит только термы
с |coefficient| >= EPS_COEFF; сама модель допускает любой конечный
коэффициент, элиминация выполняется на уровне Polynomial.add_term.
"""

from pydantic import BaseModel, Field, field_validator

from polyengine.core.math.numerical_safeguards import validate_coefficient


class Term(BaseModel):
    """
    Моном coefficient * x^exponent.

    Immutable модель (frozen=True).
    """

    coefficient: float = Field(..., allow_inf_nan=False, description="Коэффициент терма")
    exponent: int = Field(..., ge=0, strict=True, description="Показатель степени (>= 0)")

    model_config = {"frozen": True}

    @field_validator("coefficient", mode="before")
    @classmethod
    def validate_coefficient_is_real(cls, v: float) -> float:
        """bool и строки не принимаются в качестве коэффициента"""
        return validate_coefficient(v)

    def negated(self) -> "Term":
        """Терм с противоположным знаком коэффициента"""
        return Term(coefficient=-self.coefficient, exponent=self.exponent)

    def scaled(self, factor: float) -> "Term":
        """Терм, умноженный на скаляр"""
        return Term(coefficient=self.coefficient * factor, exponent=self.exponent)

    def times(self, other: "Term") -> "Term":
        """Произведение двух мономов: коэффициенты умножаются, показатели складываются"""
        return Term(
            coefficient=self.coefficient * other.coefficient,
            exponent=self.exponent + other.exponent,
        )

    def as_pair(self) -> tuple[float, int]:
        return (self.coefficient, self.exponent)
