"""
Parser — разбор текстового выражения в Polynomial

Грамматика (после удаления всех пробелов):

    poly        := term (sign term)*
    term        := [sign] [coefficient] [ ['*'] variable [ ('^' | '**') exponent ] ]
    sign        := '+' | '-'
    coefficient := десятичное число (по умолчанию 1 перед переменной)
    exponent    := неотрицательное целое (по умолчанию 1 при наличии переменной)

Каждый разобранный терм сливается в результат через Polynomial.add_term,
поэтому "x + x" даёт 2x, а "x - x" — нулевой полином.

Разбор атомарный: либо возвращается полностью построенный Polynomial,
либо поднимается MalformedExpression.
"""

from typing import Optional

from polyengine.core.domain.polynomial import Polynomial
from polyengine.core.math.numerical_safeguards import is_valid_float
from polyengine.expression.config import ParserConfig
from polyengine.expression.lexer import (
    _DIGITS,
    Lexer,
    MalformedExpression,
    Token,
    TokenType,
    strip_whitespace,
)

_SIGNS = (TokenType.PLUS, TokenType.MINUS)
_POWER = (TokenType.CARET, TokenType.DOUBLE_STAR)


class Parser:
    """Recursive descent parser над потоком токенов Lexer."""

    def __init__(self, text: str, config: Optional[ParserConfig] = None):
        self.text = text
        self.config = config or ParserConfig()
        self._tokens = Lexer(text, self.config).tokenize()
        self._index = 0

    # -------------------------------------------------------------------------
    # Token stream
    # -------------------------------------------------------------------------

    @property
    def _current(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.type is not TokenType.END:
            self._index += 1
        return token

    def _error(self, reason: str, token: Optional[Token] = None) -> MalformedExpression:
        position = (token or self._current).position
        return MalformedExpression(self.text, reason, position)

    # -------------------------------------------------------------------------
    # Grammar
    # -------------------------------------------------------------------------

    def parse(self) -> Polynomial:
        if not self.text:
            raise MalformedExpression(self.text, "empty expression")

        result = Polynomial()

        sign = 1.0
        if self._current.type in _SIGNS:
            sign = -1.0 if self._advance().type is TokenType.MINUS else 1.0
        self._term(sign, result)

        while self._current.type is not TokenType.END:
            token = self._current
            if token.type not in _SIGNS:
                raise self._error(f"expected '+' or '-' before {token.text!r}", token)
            sign = -1.0 if self._advance().type is TokenType.MINUS else 1.0
            self._term(sign, result)

        return result

    def _term(self, sign: float, result: Polynomial) -> None:
        token = self._current

        if token.type in _SIGNS:
            raise self._error("consecutive signs are not allowed", token)
        if token.type is TokenType.END:
            raise self._error("expected a term after sign", token)

        coefficient = 1.0
        has_coefficient = False

        if token.type is TokenType.NUMBER:
            coefficient = self._coefficient(self._advance())
            has_coefficient = True

        if self._current.type is TokenType.STAR:
            star = self._advance()
            if not has_coefficient:
                raise self._error("'*' without a coefficient", star)
            if self._current.type is not TokenType.VARIABLE:
                raise self._error(f"expected {self.config.variable!r} after '*'")

        exponent = 0
        if self._current.type is TokenType.VARIABLE:
            self._advance()
            exponent = 1
            if self._current.type in _POWER:
                exponent = self._exponent(self._advance())
        elif not has_coefficient:
            if self._current.type in _POWER:
                raise self._error(f"power without variable {self.config.variable!r}")
            raise self._error(f"expected a coefficient or {self.config.variable!r}")

        if self._current.type in _POWER:
            raise self._error(f"power without variable {self.config.variable!r}")

        result.add_term(sign * coefficient, exponent)

    def _coefficient(self, token: Token) -> float:
        value = float(token.text)
        if not is_valid_float(value):
            raise self._error(f"coefficient {token.text!r} is out of range", token)
        return value

    def _exponent(self, power: Token) -> int:
        token = self._current

        if token.type is TokenType.END:
            raise self._error(f"missing exponent after {power.text!r}", token)
        if token.type is TokenType.MINUS:
            raise self._error("negative exponents are not supported", token)
        if token.type is not TokenType.NUMBER or not all(char in _DIGITS for char in token.text):
            raise self._error(
                f"exponent must be a non-negative integer, got {token.text!r}", token
            )

        self._advance()
        return int(token.text)


def parse_polynomial(expression: str, config: Optional[ParserConfig] = None) -> Polynomial:
    """
    Разбор выражения в Polynomial.

    Args:
        expression: Текст вида "3x^2 + 2x - 1"
        config: Конфигурация парсера (default: ParserConfig())

    Returns:
        Новый Polynomial

    Raises:
        MalformedExpression: Если выражение не соответствует грамматике
        TypeError: Если expression не строка

    Examples:
        >>> parse_polynomial("3x^2 + 2x").as_pairs()
        [(3.0, 2), (2.0, 1)]
        >>> parse_polynomial("0").as_pairs()
        []
    """
    if not isinstance(expression, str):
        raise TypeError(f"expression must be str, got {type(expression).__name__}")

    return Parser(strip_whitespace(expression), config).parse()
