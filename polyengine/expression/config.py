"""
Конфигурация парсера и форматтера выражений.
"""

from dataclasses import dataclass


def _validate_variable(variable: str) -> None:
    if not (isinstance(variable, str) and len(variable) == 1 and variable.isascii() and variable.isalpha()):
        raise ValueError(f"variable must be a single ASCII letter, got {variable!r}")


@dataclass(frozen=True)
class ParserConfig:
    """Конфигурация парсера.

    - variable: имя переменной (одна латинская буква)
    - allow_scientific_notation: коэффициенты вида 1e+06, 2.5E-3
      (так форматтер печатает очень большие и очень малые коэффициенты)
    - allow_multiplication_sign: альтернативная запись 3*x и x**2
    """
    variable: str = "x"
    allow_scientific_notation: bool = True
    allow_multiplication_sign: bool = True

    def __post_init__(self) -> None:
        _validate_variable(self.variable)
        if self.allow_scientific_notation and self.variable in ("e", "E"):
            raise ValueError(
                f"variable {self.variable!r} is ambiguous with scientific notation; "
                f"disable allow_scientific_notation or choose another variable"
            )


@dataclass(frozen=True)
class FormatConfig:
    """Конфигурация форматтера.

    Значения по умолчанию дают компактную запись: "3x^2+2x", "-1x+0.5", "0".

    - precision: число значащих цифр коэффициента (формат %g)
    - omit_unit_coefficient: "x^2" вместо "1x^2", "-x" вместо "-1x"
    - spaced: "3x^2 + 2x - 1" вместо "3x^2+2x-1"
    """
    variable: str = "x"
    precision: int = 6
    omit_unit_coefficient: bool = False
    spaced: bool = False

    def __post_init__(self) -> None:
        _validate_variable(self.variable)
        if isinstance(self.precision, bool) or not isinstance(self.precision, int) or self.precision < 1:
            raise ValueError(f"precision must be a positive integer, got {self.precision!r}")
