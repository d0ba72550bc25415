"""
Formatter — текстовое представление Polynomial

Термы печатаются в порядке хранения (по убыванию показателя):
    показатель 0   → "c"
    показатель 1   → "cx"
    показатель >= 2 → "cx^e"
Перед каждым не первым термом с положительным коэффициентом ставится '+';
отрицательный коэффициент несёт свой знак. Нулевой полином → "0".

Коэффициенты печатаются в формате %g (FormatConfig.precision значащих цифр),
поэтому результат с "целыми" коэффициентами разбирается parse_polynomial
обратно в тот же полином.
"""

from typing import Optional

from polyengine.core.domain.polynomial import Polynomial
from polyengine.core.domain.term import Term
from polyengine.expression.config import FormatConfig


def format_coefficient(value: float, precision: int = 6) -> str:
    """
    Examples:
        >>> format_coefficient(3.0)
        '3'
        >>> format_coefficient(1 / 3)
        '0.333333'
        >>> format_coefficient(-2.5e7)
        '-2.5e+07'
    """
    return f"{value:.{precision}g}"


def format_term(term: Term, config: Optional[FormatConfig] = None) -> str:
    """Один терм со знаком коэффициента ("3x^2", "-1x", "0.5")."""
    config = config or FormatConfig()
    coefficient = format_coefficient(term.coefficient, config.precision)

    if term.exponent == 0:
        return coefficient

    if config.omit_unit_coefficient and coefficient in ("1", "-1"):
        coefficient = coefficient[:-1]

    if term.exponent == 1:
        return f"{coefficient}{config.variable}"

    return f"{coefficient}{config.variable}^{term.exponent}"


def format_polynomial(polynomial: Polynomial, config: Optional[FormatConfig] = None) -> str:
    """
    Текстовое представление полинома.

    Examples:
        >>> format_polynomial(Polynomial([(3, 2), (2, 1)]))
        '3x^2+2x'
        >>> format_polynomial(Polynomial([(1, 2), (-4, 0)]), FormatConfig(spaced=True))
        '1x^2 - 4'
        >>> format_polynomial(Polynomial())
        '0'
    """
    config = config or FormatConfig()

    if polynomial.is_zero():
        return "0"

    parts: list[str] = []
    for index, term in enumerate(polynomial):
        text = format_term(term, config)

        if index == 0:
            parts.append(text)
        elif config.spaced:
            if term.coefficient > 0:
                parts.append(f" + {text}")
            else:
                parts.append(f" - {text[1:]}")
        elif term.coefficient > 0:
            parts.append(f"+{text}")
        else:
            parts.append(text)

    return "".join(parts)
