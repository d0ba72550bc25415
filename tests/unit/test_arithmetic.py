"""
Тесты для Arithmetic — алгоритмы над Term Store

Проверяемые инварианты:
1. Результат любой операции удовлетворяет инвариантам Term Store
2. add коммутативно; a + (0 - a) == 0
3. multiply дистрибутивно относительно add
4. derivative(integrate(a)) == a
5. divide: quotient * d + remainder == a, deg(remainder) < deg(d)
6. DivisionByZero при пустом делителе
7. Операнды не изменяются
8. Переполнение коэффициента → CoefficientOverflow, evaluate → inf
"""

import pytest

from polyengine import (
    CoefficientOverflow,
    DivisionByZero,
    DivisionResult,
    Polynomial,
    PolynomialError,
    add,
    definite_integral,
    derivative,
    divide,
    evaluate,
    integrate,
    multiply,
    negate,
    nth_derivative,
    parse_polynomial,
    scale,
    subtract,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def p1() -> Polynomial:
    """3x^2 + 2x"""
    return parse_polynomial("3x^2 + 2x")


@pytest.fixture
def p2() -> Polynomial:
    """4x + 1"""
    return parse_polynomial("4x + 1")


# Набор полиномов с целыми коэффициентами для проверки алгебраических свойств
SAMPLES = [
    "0",
    "1",
    "-7",
    "x",
    "3x^2 + 2x",
    "4x + 1",
    "x^5 - 3x^2 + 2",
    "-2x^3 + x - 9",
    "x^10 + x^7 - x^3",
    "6x^4 - 6x^4 + x",
]

SAMPLE_PAIRS = [(a, b) for a in SAMPLES for b in SAMPLES[::3]]


def _p(text: str) -> Polynomial:
    return parse_polynomial(text)


# =============================================================================
# ТЕСТЫ: Add / Subtract
# =============================================================================


class TestAddSubtract:
    """Тесты слияния по показателю."""

    def test_add_example(self, p1, p2):
        """(3x^2+2x) + (4x+1) = 3x^2+6x+1"""
        assert add(p1, p2).as_pairs() == [(3.0, 2), (6.0, 1), (1.0, 0)]

    def test_subtract_example(self, p1, p2):
        """(3x^2+2x) - (4x+1) = 3x^2-2x-1"""
        assert subtract(p1, p2).as_pairs() == [(3.0, 2), (-2.0, 1), (-1.0, 0)]

    def test_subtract_negates_unmatched_right(self):
        assert subtract(Polynomial(), _p("x^2 - 1")).as_pairs() == [(-1.0, 2), (1.0, 0)]

    def test_cancellation_drops_term(self):
        assert add(_p("x^2 + x"), _p("-x")).as_pairs() == [(1.0, 2)]
        assert subtract(_p("x^2 + x"), _p("x^2 + x")).is_zero()

    def test_near_cancellation_drops_term(self):
        a = Polynomial([(1.0, 1)])
        b = Polynomial([(-1.0 + 1e-12, 1)])
        assert add(a, b).is_zero()

    def test_with_zero(self, p1):
        assert add(p1, Polynomial()) == p1
        assert add(Polynomial(), p1) == p1
        assert subtract(p1, Polynomial()) == p1

    @pytest.mark.parametrize("a,b", SAMPLE_PAIRS)
    def test_add_commutative(self, a, b):
        assert add(_p(a), _p(b)) == add(_p(b), _p(a))

    @pytest.mark.parametrize("a", SAMPLES)
    def test_additive_inverse(self, a):
        """a + (0 - a) == 0"""
        poly = _p(a)
        assert add(poly, subtract(Polynomial(), poly)).is_zero()
        assert add(poly, negate(poly)).is_zero()

    @pytest.mark.parametrize("a,b", SAMPLE_PAIRS)
    def test_result_invariants(self, a, b):
        add(_p(a), _p(b)).check_invariants()
        subtract(_p(a), _p(b)).check_invariants()

    def test_operands_not_mutated(self, p1, p2):
        add(p1, p2)
        subtract(p1, p2)
        assert p1.as_pairs() == [(3.0, 2), (2.0, 1)]
        assert p2.as_pairs() == [(4.0, 1), (1.0, 0)]


class TestScaleNegate:
    """Тесты скалярных операций."""

    def test_scale(self, p1):
        assert scale(p1, 0.5).as_pairs() == [(1.5, 2), (1.0, 1)]

    def test_scale_by_zero(self, p1):
        assert scale(p1, 0).is_zero()

    def test_scale_to_negligible_drops_terms(self):
        assert scale(_p("x + 1"), 1e-12).is_zero()

    def test_scale_rejects_nan(self, p1):
        with pytest.raises(ValueError, match="factor"):
            scale(p1, float("nan"))

    def test_negate(self, p1):
        assert negate(p1).as_pairs() == [(-3.0, 2), (-2.0, 1)]
        assert negate(Polynomial()).is_zero()


# =============================================================================
# ТЕСТЫ: Multiply
# =============================================================================


class TestMultiply:
    """Тесты умножения."""

    def test_multiply_example(self, p1, p2):
        """(3x^2+2x)(4x+1) = 12x^3 + (3+8)x^2 + 2x"""
        assert multiply(p1, p2).as_pairs() == [(12.0, 3), (11.0, 2), (2.0, 1)]

    def test_multiply_by_zero(self, p1):
        assert multiply(p1, Polynomial()).is_zero()
        assert multiply(Polynomial(), p1).is_zero()

    def test_multiply_by_one(self, p1):
        assert multiply(p1, _p("1")) == p1

    def test_difference_of_squares(self):
        """(x+1)(x-1) = x^2 - 1 (средний терм сокращается)"""
        assert multiply(_p("x + 1"), _p("x - 1")).as_pairs() == [(1.0, 2), (-1.0, 0)]

    @pytest.mark.parametrize("a,b", SAMPLE_PAIRS)
    def test_commutative(self, a, b):
        assert multiply(_p(a), _p(b)) == multiply(_p(b), _p(a))

    @pytest.mark.parametrize("a", SAMPLES[::2])
    @pytest.mark.parametrize("b,c", [("4x + 1", "x^2 - 3"), ("x^3", "-x^3 + 2"), ("0", "5")])
    def test_distributive(self, a, b, c):
        """a(b + c) == ab + ac"""
        pa, pb, pc = _p(a), _p(b), _p(c)
        assert multiply(pa, add(pb, pc)) == add(multiply(pa, pb), multiply(pa, pc))

    @pytest.mark.parametrize("a,b", SAMPLE_PAIRS)
    def test_result_invariants(self, a, b):
        multiply(_p(a), _p(b)).check_invariants()

    def test_degree_adds(self):
        product = multiply(_p("x^5 + 1"), _p("2x^3 - x"))
        assert product.degree == 8


# =============================================================================
# ТЕСТЫ: Derivative / Integrate
# =============================================================================


class TestDerivative:
    """Тесты дифференцирования."""

    def test_derivative_example(self, p1, p2):
        assert derivative(p1).as_pairs() == [(6.0, 1), (2.0, 0)]
        assert derivative(p2).as_pairs() == [(4.0, 0)]

    def test_constant_vanishes(self):
        """Производная константы — пустой полином, а не нулевой терм."""
        assert derivative(_p("5")).is_zero()
        assert derivative(Polynomial()).is_zero()

    def test_nth_derivative(self):
        p = _p("x^4 + x^2 + 1")
        assert nth_derivative(p, 0) == p
        assert nth_derivative(p, 2).as_pairs() == [(12.0, 2), (2.0, 0)]
        assert nth_derivative(p, 4).as_pairs() == [(24.0, 0)]
        assert nth_derivative(p, 10).is_zero()

    def test_nth_derivative_negative_order(self):
        with pytest.raises(ValueError, match="non-negative"):
            nth_derivative(_p("x"), -1)


class TestIntegrate:
    """Тесты интегрирования."""

    def test_integrate_example(self, p1, p2):
        """∫(3x^2+2x) = x^3 + x^2; ∫(4x+1) = 2x^2 + x"""
        assert integrate(p1).as_pairs() == [(1.0, 3), (1.0, 2)]
        assert integrate(p2).as_pairs() == [(2.0, 2), (1.0, 1)]

    def test_no_integration_constant(self):
        assert integrate(_p("1")).as_pairs() == [(1.0, 1)]
        assert integrate(Polynomial()).is_zero()

    def test_fractional_coefficients(self):
        assert integrate(_p("x^2")).as_pairs() == [(pytest.approx(1 / 3), 3)]

    @pytest.mark.parametrize("a", SAMPLES)
    def test_derivative_of_integral_recovers(self, a):
        """derivative(integrate(a)) == a"""
        poly = _p(a)
        assert derivative(integrate(poly)) == poly

    def test_definite_integral(self, p1):
        """∫_0^2 (3x^2+2x) dx = 8 + 4 = 12"""
        assert definite_integral(p1, 0.0, 2.0) == pytest.approx(12.0)
        assert definite_integral(p1, 2.0, 0.0) == pytest.approx(-12.0)
        assert definite_integral(Polynomial(), -1.0, 1.0) == 0.0


# =============================================================================
# ТЕСТЫ: Divide
# =============================================================================


class TestDivide:
    """Тесты деления с остатком."""

    def test_divide_example(self, p1, p2):
        """(3x^2+2x) / (4x+1): quotient 0.75x + 0.3125, remainder -0.3125"""
        quotient, remainder = divide(p1, p2)
        assert quotient.is_close(Polynomial([(0.75, 1), (0.3125, 0)]))
        assert remainder.is_close(Polynomial([(-0.3125, 0)]))

    def test_returns_named_result(self, p1, p2):
        result = divide(p1, p2)
        assert isinstance(result, DivisionResult)
        assert result.quotient is result[0]
        assert result.remainder is result[1]

    def test_exact_division(self):
        quotient, remainder = divide(_p("x^3 - 1"), _p("x - 1"))
        assert quotient.as_pairs() == [(1.0, 2), (1.0, 1), (1.0, 0)]
        assert remainder.is_zero()

    def test_lower_degree_dividend(self, p2):
        """deg(a) < deg(d): quotient пуст, remainder == a."""
        quotient, remainder = divide(p2, _p("x^2"))
        assert quotient.is_zero()
        assert remainder == p2

    def test_zero_dividend(self, p2):
        quotient, remainder = divide(Polynomial(), p2)
        assert quotient.is_zero()
        assert remainder.is_zero()

    def test_constant_divisor_is_scalar_division(self, p1):
        quotient, remainder = divide(p1, _p("2"))
        assert quotient.as_pairs() == [(1.5, 2), (1.0, 1)]
        assert remainder.is_zero()

    def test_division_by_zero_polynomial(self, p1):
        with pytest.raises(DivisionByZero):
            divide(p1, Polynomial())

    def test_division_by_zero_is_zero_division_error(self, p1):
        """DivisionByZero различим и как PolynomialError, и как ZeroDivisionError."""
        with pytest.raises(ZeroDivisionError):
            divide(p1, _p("0"))
        with pytest.raises(PolynomialError):
            divide(Polynomial(), Polynomial())

    @pytest.mark.parametrize("a", SAMPLES)
    @pytest.mark.parametrize("d", ["x - 1", "2x^2 + 1", "-3", "x^3 + x", "4x + 1"])
    def test_division_identity(self, a, d):
        """quotient * d + remainder == a; deg(remainder) < deg(d)."""
        pa, pd = _p(a), _p(d)
        quotient, remainder = divide(pa, pd)

        assert add(multiply(quotient, pd), remainder).is_close(pa)
        assert remainder.is_zero() or remainder.degree < pd.degree
        quotient.check_invariants()
        remainder.check_invariants()

    def test_terminates_with_awkward_floats(self):
        """Коэффициенты, не представимые точно, не зацикливают деление."""
        a = Polynomial([(0.1, 6), (0.7, 3), (1e8 / 3, 1), (0.3, 0)])
        d = Polynomial([(3.0, 2), (0.1, 1)])
        quotient, remainder = divide(a, d)
        assert quotient.degree == 4
        assert remainder.is_zero() or remainder.degree < 2
        assert add(multiply(quotient, d), remainder).is_close(a, rel_tol=1e-6, abs_tol=1e-6)

    def test_negligible_quotient_term_keeps_remainder(self):
        """Терм частного < EPS_COEFF не сохраняется: деление останавливается, remainder == a."""
        a = Polynomial([(1e-5, 2)])
        d = Polynomial([(1e5, 2), (1.0, 1)])
        quotient, remainder = divide(a, d)

        assert quotient.is_zero()
        assert remainder == a
        assert add(multiply(quotient, d), remainder).is_close(a)

    def test_negligible_step_after_regular_steps(self):
        """Деление останавливается на первом пренебрежимо малом шаге, тождество сохраняется."""
        a = Polynomial([(2e5, 3), (1e-5, 2)])
        d = Polynomial([(1e5, 2), (1.0, 0)])
        quotient, remainder = divide(a, d)

        assert quotient.as_pairs() == [(2.0, 1)]
        assert remainder.as_pairs() == [(1e-5, 2), (-2.0, 1)]
        assert add(multiply(quotient, d), remainder).is_close(a)
        remainder.check_invariants()

    def test_operands_not_mutated(self, p1, p2):
        divide(p1, p2)
        assert p1.as_pairs() == [(3.0, 2), (2.0, 1)]
        assert p2.as_pairs() == [(4.0, 1), (1.0, 0)]


# =============================================================================
# ТЕСТЫ: Evaluate
# =============================================================================


class TestEvaluate:
    """Тесты вычисления в точке."""

    def test_evaluate_example(self, p1, p2):
        """3*4 + 2*2 = 16; 4*2 + 1 = 9"""
        assert evaluate(p1, 2.0) == 16.0
        assert evaluate(p2, 2.0) == 9.0

    def test_zero_polynomial(self):
        assert evaluate(Polynomial(), 3.0) == 0.0

    def test_constant(self):
        assert evaluate(_p("-7"), 123.0) == -7.0

    def test_at_zero(self):
        assert evaluate(_p("x^3 + 5"), 0.0) == 5.0
        assert evaluate(_p("x^3 + x"), 0.0) == 0.0

    def test_sparse_high_degree(self):
        """x^40 - x^39 в x = 1 и x = -1"""
        p = _p("x^40 - x^39")
        assert evaluate(p, 1.0) == 0.0
        assert evaluate(p, -1.0) == 2.0

    @pytest.mark.parametrize("a", SAMPLES)
    @pytest.mark.parametrize("x", [-1.5, 0.0, 0.5, 2.0])
    def test_matches_naive_sum(self, a, x):
        poly = _p(a)
        expected = sum(term.coefficient * x**term.exponent for term in poly)
        assert evaluate(poly, x) == pytest.approx(expected)

    def test_accepts_int(self, p1):
        assert evaluate(p1, 2) == 16.0

    def test_non_finite_x_rejected(self, p1):
        with pytest.raises(ValueError, match="NaN/Inf"):
            evaluate(p1, float("nan"))


# =============================================================================
# ТЕСТЫ: Переполнение коэффициентов
# =============================================================================


class TestCoefficientOverflow:
    """Коэффициент результата вне диапазона float → CoefficientOverflow."""

    def test_multiply_product_overflow(self):
        a = Polynomial([(1e200, 1)])
        with pytest.raises(CoefficientOverflow, match="x\\^2"):
            multiply(a, a)

    def test_multiply_accumulated_overflow(self):
        """Каждое произведение конечно, переполняется сумма подобных термов."""
        a = Polynomial([(1e154, 1), (1e154, 0)])
        with pytest.raises(CoefficientOverflow):
            multiply(a, a)

    def test_derivative_overflow(self):
        with pytest.raises(CoefficientOverflow, match="x\\^9"):
            derivative(Polynomial([(1e308, 10)]))

    def test_add_overflow(self):
        a = Polynomial([(1e308, 1)])
        with pytest.raises(CoefficientOverflow):
            add(a, a)

    def test_scale_overflow(self):
        with pytest.raises(CoefficientOverflow):
            scale(Polynomial([(1e300, 0)]), 1e10)

    def test_divide_overflow(self):
        with pytest.raises(CoefficientOverflow):
            divide(Polynomial([(1e308, 1)]), Polynomial([(1e-8, 1)]))

    def test_error_kinds(self):
        """CoefficientOverflow различим как PolynomialError и как OverflowError."""
        a = Polynomial([(1e200, 1)])
        with pytest.raises(PolynomialError):
            multiply(a, a)
        with pytest.raises(OverflowError):
            multiply(a, a)

    def test_operand_not_mutated(self):
        a = Polynomial([(1e200, 1)])
        with pytest.raises(CoefficientOverflow):
            multiply(a, a)
        assert a.as_pairs() == [(1e200, 1)]

    def test_evaluate_returns_inf(self):
        """evaluate не строит Term Store: результат — обычный float, в т.ч. inf."""
        assert evaluate(Polynomial([(1e200, 2)]), 1e100) == float("inf")
