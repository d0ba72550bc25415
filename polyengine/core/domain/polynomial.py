"""
Polynomial — Term Store разреженного полинома одной переменной

Упорядоченная коллекция Term со строго убывающими показателями.

ИНВАРИАНТЫ (выполняются после каждой мутации):
1. Показатели строго убывают вдоль последовательности (без дубликатов)
2. Нет термов с |coefficient| < EPS_COEFF; нулевой полином — пустая последовательность
3. Терм, коэффициент которого при сокращении подобных стал пренебрежимо мал,
   удаляется, а не хранится как ноль

Единственная мутирующая операция — add_term. Арифметика
(polyengine.core.math.arithmetic) не изменяет операнды и всегда строит
новый Polynomial; операторы этого класса делегируют ей.
"""

from bisect import bisect_left
from typing import Any, Dict, Iterable, Iterator, Optional, Union

from polyengine.core.contracts.validators import SCHEMA_VERSION, validate_polynomial
from polyengine.core.domain.term import Term
from polyengine.core.math.numerical_safeguards import (
    EPS_COEFF,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    is_close,
    is_negligible,
    is_valid_float,
    validate_coefficient,
    validate_exponent,
)

TermLike = Union[Term, tuple[float, int]]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class PolynomialError(Exception):
    """Базовая ошибка полиномиального движка."""

    pass


class CoefficientOverflow(PolynomialError, OverflowError):
    """Коэффициент результата вышел за пределы конечного float."""

    pass


# =============================================================================
# TERM STORE
# =============================================================================


class Polynomial:
    """
    Разреженный полином как упорядоченный список термов.

    Создание:
        >>> p = Polynomial()
        >>> p.add_term(3, 2)
        >>> p.add_term(2, 1)
        >>> p.as_pairs()
        [(3.0, 2), (2.0, 1)]

        >>> Polynomial([(1, 1), (1, 1)]).as_pairs()
        [(2.0, 1)]

    Владение — строго по значению: ни один Polynomial не ссылается на
    внутреннее хранилище другого.
    """

    __hash__ = None  # mutable store

    def __init__(self, terms: Optional[Iterable[TermLike]] = None):
        self._terms: list[Term] = []

        if terms is not None:
            for term in terms:
                if isinstance(term, Term):
                    self.add_term(term.coefficient, term.exponent)
                else:
                    coefficient, exponent = term
                    self.add_term(coefficient, exponent)

    # -------------------------------------------------------------------------
    # Мутация
    # -------------------------------------------------------------------------

    def add_term(self, coefficient: float, exponent: int) -> None:
        """
        Вставка терма с сохранением инвариантов 1-3.

        - |coefficient| < EPS_COEFF → no-op
        - Терм с тем же показателем уже есть → коэффициенты складываются;
          если сумма пренебрежимо мала, терм удаляется
        - Иначе терм вставляется в позицию по убыванию показателя

        Args:
            coefficient: Коэффициент (конечный float)
            exponent: Показатель (int >= 0)

        Raises:
            ValueError: Если coefficient NaN/Inf или exponent отрицательный
            CoefficientOverflow: Если сумма подобных термов не помещается в float
        """
        coefficient = validate_coefficient(coefficient)
        validate_exponent(exponent)

        if is_negligible(coefficient, EPS_COEFF):
            return

        # Список упорядочен по убыванию показателя → по возрастанию -exponent
        index = bisect_left(self._terms, -exponent, key=lambda t: -t.exponent)

        # Значения уже проверены выше, повторная валидация pydantic не нужна
        if index < len(self._terms) and self._terms[index].exponent == exponent:
            combined = self._terms[index].coefficient + coefficient
            if not is_valid_float(combined):
                raise CoefficientOverflow(
                    f"coefficient of x^{exponent} overflows float range: "
                    f"{self._terms[index].coefficient!r} + {coefficient!r}"
                )
            if is_negligible(combined, EPS_COEFF):
                del self._terms[index]
            else:
                self._terms[index] = Term.model_construct(coefficient=combined, exponent=exponent)
            return

        self._terms.insert(index, Term.model_construct(coefficient=coefficient, exponent=exponent))

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def terms(self) -> tuple[Term, ...]:
        return tuple(self._terms)

    def as_pairs(self) -> list[tuple[float, int]]:
        """Термы как список пар (coefficient, exponent) в порядке хранения."""
        return [term.as_pair() for term in self._terms]

    @property
    def leading_term(self) -> Optional[Term]:
        """Терм с наибольшим показателем (None для нулевого полинома)."""
        return self._terms[0] if self._terms else None

    @property
    def leading_coefficient(self) -> float:
        """Коэффициент старшего терма (0.0 для нулевого полинома)."""
        return self._terms[0].coefficient if self._terms else 0.0

    @property
    def degree(self) -> Optional[int]:
        """Степень полинома; None для нулевого полинома."""
        return self._terms[0].exponent if self._terms else None

    def coefficient(self, exponent: int) -> float:
        """Коэффициент при x^exponent (0.0 если такого терма нет)."""
        validate_exponent(exponent)
        for term in self._terms:
            if term.exponent == exponent:
                return term.coefficient
            if term.exponent < exponent:
                break
        return 0.0

    def is_zero(self) -> bool:
        return not self._terms

    def copy(self) -> "Polynomial":
        """Независимая копия хранилища (Term неизменяемы, их можно разделять)."""
        result = Polynomial()
        result._terms = list(self._terms)
        return result

    def without_leading(self) -> "Polynomial":
        """Копия без старшего терма."""
        result = Polynomial()
        result._terms = self._terms[1:]
        return result

    def check_invariants(self) -> None:
        """
        Проверка инвариантов Term Store.

        Raises:
            PolynomialError: Если нарушен порядок, есть дубликат показателя
                или пренебрежимо малый коэффициент
        """
        previous: Optional[int] = None
        for position, term in enumerate(self._terms):
            if is_negligible(term.coefficient, EPS_COEFF):
                raise PolynomialError(
                    f"term #{position} has negligible coefficient {term.coefficient!r}"
                )
            if previous is not None and term.exponent >= previous:
                raise PolynomialError(
                    f"term #{position} exponent {term.exponent} does not strictly "
                    f"decrease (previous {previous})"
                )
            previous = term.exponent

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.as_pairs() == other.as_pairs()

    def is_close(
        self,
        other: "Polynomial",
        rel_tol: float = EPS_FLOAT_COMPARE_REL,
        abs_tol: float = EPS_FLOAT_COMPARE_ABS,
    ) -> bool:
        """Сравнение с толерантностью: те же показатели, близкие коэффициенты."""
        if len(self._terms) != len(other._terms):
            return False
        return all(
            a.exponent == b.exponent
            and is_close(a.coefficient, b.coefficient, rel_tol=rel_tol, abs_tol=abs_tol)
            for a, b in zip(self._terms, other._terms)
        )

    # -------------------------------------------------------------------------
    # Container protocol
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[Term]:
        return iter(tuple(self._terms))

    def __bool__(self) -> bool:
        return bool(self._terms)

    def __repr__(self) -> str:
        return f"Polynomial({self.as_pairs()!r})"

    def __str__(self) -> str:
        from polyengine.expression.formatter import format_polynomial

        return format_polynomial(self)

    # -------------------------------------------------------------------------
    # Парсинг и сериализация
    # -------------------------------------------------------------------------

    @classmethod
    def from_string(cls, expression: str, config=None) -> "Polynomial":
        """Разбор текстового выражения (см. polyengine.expression.parser)."""
        from polyengine.expression.parser import parse_polynomial

        return parse_polynomial(expression, config)

    def to_dict(self, variable: str = "x") -> Dict[str, Any]:
        """
        Сериализация в документ контракта polynomial.

        Returns:
            {"schema_version": "1", "variable": ..., "terms": [{"coefficient", "exponent"}, ...]}
        """
        return {
            "schema_version": SCHEMA_VERSION,
            "variable": variable,
            "terms": [term.model_dump() for term in self._terms],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Polynomial":
        """
        Восстановление из документа контракта polynomial.

        Термы проходят через add_term: дубликаты показателей складываются,
        пренебрежимо малые коэффициенты отбрасываются.

        Raises:
            jsonschema.ValidationError: Если документ не соответствует схеме
        """
        validate_polynomial(data)
        return cls(Term.model_validate(item) for item in data["terms"])

    # -------------------------------------------------------------------------
    # Операторы (делегируют polyengine.core.math.arithmetic)
    # -------------------------------------------------------------------------

    @staticmethod
    def _coerce(value: object) -> Optional["Polynomial"]:
        if isinstance(value, Polynomial):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return Polynomial([(value, 0)])
        return None

    def __add__(self, other: object) -> "Polynomial":
        from polyengine.core.math.arithmetic import add

        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return add(self, operand)

    def __radd__(self, other: object) -> "Polynomial":
        from polyengine.core.math.arithmetic import add

        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return add(operand, self)

    def __sub__(self, other: object) -> "Polynomial":
        from polyengine.core.math.arithmetic import subtract

        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return subtract(self, operand)

    def __rsub__(self, other: object) -> "Polynomial":
        from polyengine.core.math.arithmetic import subtract

        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return subtract(operand, self)

    def __mul__(self, other: object) -> "Polynomial":
        from polyengine.core.math.arithmetic import multiply

        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return multiply(self, operand)

    def __rmul__(self, other: object) -> "Polynomial":
        from polyengine.core.math.arithmetic import multiply

        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return multiply(operand, self)

    def __neg__(self) -> "Polynomial":
        from polyengine.core.math.arithmetic import negate

        return negate(self)

    def __divmod__(self, other: object):
        from polyengine.core.math.arithmetic import divide

        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return divide(self, operand)

    def __floordiv__(self, other: object) -> "Polynomial":
        result = self.__divmod__(other)
        if result is NotImplemented:
            return NotImplemented
        return result.quotient

    def __mod__(self, other: object) -> "Polynomial":
        result = self.__divmod__(other)
        if result is NotImplemented:
            return NotImplemented
        return result.remainder

    def __call__(self, x: float) -> float:
        from polyengine.core.math.arithmetic import evaluate

        return evaluate(self, x)

    def derivative(self) -> "Polynomial":
        from polyengine.core.math.arithmetic import derivative

        return derivative(self)

    def integrate(self) -> "Polynomial":
        from polyengine.core.math.arithmetic import integrate

        return integrate(self)

    def divide(self, divisor: "Polynomial"):
        from polyengine.core.math.arithmetic import divide

        return divide(self, divisor)

    def evaluate(self, x: float) -> float:
        return self(x)
