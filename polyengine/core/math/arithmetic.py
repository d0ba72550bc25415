"""
Arithmetic — алгоритмы над Term Store

Все функции чистые: операнды не изменяются, результат — новый Polynomial.
Инварианты Term Store результата обеспечиваются Polynomial.add_term
(сокращение подобных и элиминация |coeff| < EPS_COEFF). Коэффициент,
переполнивший float, даёт CoefficientOverflow; evaluate возвращает
обычный float и может вернуть inf.

Алгоритмы:
- add / subtract: слияние двух последовательностей по убыванию показателя
- multiply: попарные произведения термов с накоплением через add_term
- derivative / integrate: почленные правила, порядок сохраняется
- divide: деление в столбик (quotient, remainder)
- evaluate: разреженная схема Горнера
"""

from typing import NamedTuple

from polyengine.core.domain.polynomial import CoefficientOverflow, Polynomial, PolynomialError
from polyengine.core.math.numerical_safeguards import (
    int_power,
    is_negligible,
    is_valid_float,
    validate_coefficient,
    validate_exponent,
)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class DivisionByZero(PolynomialError, ZeroDivisionError):
    """Деление на нулевой (пустой) полином."""

    pass


# =============================================================================
# RESULT
# =============================================================================


class DivisionResult(NamedTuple):
    """
    Результат деления с остатком.

    Распаковывается как пара: quotient, remainder = divide(a, d)

    Гарантия: quotient * divisor + remainder == dividend. remainder пуст
    или его степень < степени divisor, кроме случая, когда очередной терм
    частного пренебрежимо мал (|coeff| < EPS_COEFF): тогда деление
    останавливается и такой remainder возвращается как есть.
    """

    quotient: Polynomial
    remainder: Polynomial


# =============================================================================
# СЛОЖЕНИЕ / ВЫЧИТАНИЕ
# =============================================================================


def _accumulate(result: Polynomial, coefficient: float, exponent: int) -> None:
    """add_term для вычисленного коэффициента; переполнение float → CoefficientOverflow."""
    if not is_valid_float(coefficient):
        raise CoefficientOverflow(
            f"coefficient of x^{exponent} overflows float range: {coefficient!r}"
        )
    result.add_term(coefficient, exponent)


def _merge(a: Polynomial, b: Polynomial, sign: float) -> Polynomial:
    """Слияние по показателю: a + sign * b."""
    result = Polynomial()
    left = a.terms
    right = b.terms
    i = j = 0

    while i < len(left) or j < len(right):
        if j >= len(right) or (i < len(left) and left[i].exponent > right[j].exponent):
            _accumulate(result, left[i].coefficient, left[i].exponent)
            i += 1
        elif i >= len(left) or right[j].exponent > left[i].exponent:
            _accumulate(result, sign * right[j].coefficient, right[j].exponent)
            j += 1
        else:
            # Совпадающие показатели: add_term отбросит сократившийся терм
            _accumulate(
                result, left[i].coefficient + sign * right[j].coefficient, left[i].exponent
            )
            i += 1
            j += 1

    return result


def add(a: Polynomial, b: Polynomial) -> Polynomial:
    """
    Сумма a + b.

    Examples:
        >>> add(Polynomial([(3, 2), (2, 1)]), Polynomial([(4, 1), (1, 0)])).as_pairs()
        [(3.0, 2), (6.0, 1), (1.0, 0)]
    """
    return _merge(a, b, 1.0)


def subtract(a: Polynomial, b: Polynomial) -> Polynomial:
    """Разность a - b (термы b, не имеющие пары в a, копируются с обратным знаком)."""
    return _merge(a, b, -1.0)


def negate(a: Polynomial) -> Polynomial:
    return Polynomial(term.negated() for term in a)


def scale(a: Polynomial, factor: float) -> Polynomial:
    """
    Умножение на скаляр.

    Термы, ставшие пренебрежимо малыми, отбрасываются; factor == 0 даёт
    нулевой полином.
    """
    factor = validate_coefficient(factor, "factor")
    result = Polynomial()
    for term in a:
        _accumulate(result, term.coefficient * factor, term.exponent)
    return result


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def _multiply_by_monomial(a: Polynomial, coefficient: float, exponent: int) -> Polynomial:
    result = Polynomial()
    for term in a:
        _accumulate(result, term.coefficient * coefficient, term.exponent + exponent)
    return result


def multiply(a: Polynomial, b: Polynomial) -> Polynomial:
    """
    Произведение a * b.

    O(|a|·|b|) попарных произведений, каждое накапливается через add_term
    (сокращение подобных).

    Examples:
        >>> multiply(Polynomial([(3, 2), (2, 1)]), Polynomial([(4, 1), (1, 0)])).as_pairs()
        [(12.0, 3), (11.0, 2), (2.0, 1)]
    """
    result = Polynomial()
    for left in a:
        for right in b:
            _accumulate(
                result, left.coefficient * right.coefficient, left.exponent + right.exponent
            )
    return result


# =============================================================================
# ДИФФЕРЕНЦИРОВАНИЕ / ИНТЕГРИРОВАНИЕ
# =============================================================================


def derivative(a: Polynomial) -> Polynomial:
    """
    Производная: (c, e) → (c*e, e-1); константы исчезают.
    """
    result = Polynomial()
    for term in a:
        if term.exponent != 0:
            _accumulate(result, term.coefficient * term.exponent, term.exponent - 1)
    return result


def nth_derivative(a: Polynomial, n: int) -> Polynomial:
    """
    Производная порядка n (n == 0 → копия a).

    Raises:
        ValueError: Если n отрицательный
    """
    validate_exponent(n, "n")

    result = a.copy()
    for _ in range(n):
        if result.is_zero():
            break
        result = derivative(result)
    return result


def integrate(a: Polynomial) -> Polynomial:
    """
    Первообразная: (c, e) → (c/(e+1), e+1). Константа интегрирования = 0.
    """
    result = Polynomial()
    for term in a:
        _accumulate(result, term.coefficient / (term.exponent + 1), term.exponent + 1)
    return result


def definite_integral(a: Polynomial, lower: float, upper: float) -> float:
    """
    Определённый интеграл на [lower, upper] через разность первообразной.
    """
    antiderivative = integrate(a)
    return evaluate(antiderivative, upper) - evaluate(antiderivative, lower)


# =============================================================================
# ДЕЛЕНИЕ С ОСТАТКОМ
# =============================================================================


def divide(a: Polynomial, divisor: Polynomial) -> DivisionResult:
    """
    Деление в столбик: a = quotient * divisor + remainder.

    На каждом шаге старший терм остатка делится на старший терм делителя,
    результат добавляется в quotient, а term * divisor вычитается из остатка.
    Старший терм остатка сокращается точно по построению, поэтому он
    удаляется явно: шаг всегда строго понижает степень остатка, и
    округление float не может зациклить деление.

    Если очередной терм частного пренебрежимо мал, хранить его в quotient
    нельзя; деление останавливается, остаток не теряет старший терм.

    Args:
        a: Делимое
        divisor: Делитель

    Returns:
        DivisionResult(quotient, remainder)

    Raises:
        DivisionByZero: Если divisor — нулевой полином
        CoefficientOverflow: Если коэффициент частного не помещается в float
    """
    if divisor.is_zero():
        raise DivisionByZero(f"polynomial division by zero polynomial: {a!r} / {divisor!r}")

    lead = divisor.leading_term
    tail = divisor.without_leading()

    quotient = Polynomial()
    remainder = a.copy()

    while remainder and remainder.degree >= lead.exponent:
        head = remainder.leading_term
        step_coefficient = head.coefficient / lead.coefficient
        step_exponent = head.exponent - lead.exponent

        if is_negligible(step_coefficient):
            break

        _accumulate(quotient, step_coefficient, step_exponent)
        remainder = subtract(
            remainder.without_leading(),
            _multiply_by_monomial(tail, step_coefficient, step_exponent),
        )

    return DivisionResult(quotient=quotient, remainder=remainder)


# =============================================================================
# ВЫЧИСЛЕНИЕ В ТОЧКЕ
# =============================================================================


def evaluate(a: Polynomial, x: float) -> float:
    """
    Значение полинома в точке x.

    Разреженная схема Горнера: между соседними термами накопленное значение
    умножается на x^(разность показателей), степень считается int_power.

    Raises:
        ValueError: Если x NaN/Inf

    Examples:
        >>> evaluate(Polynomial([(3, 2), (2, 1)]), 2.0)
        16.0
    """
    x = validate_coefficient(x, "x")

    result = 0.0
    previous_exponent = None

    for term in a:
        if previous_exponent is not None:
            result *= int_power(x, previous_exponent - term.exponent)
        result += term.coefficient
        previous_exponent = term.exponent

    if previous_exponent is None:
        return 0.0

    return result * int_power(x, previous_exponent)
