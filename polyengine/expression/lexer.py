"""
Lexer — токенизация полиномиального выражения

Ручной сканер по строке без пробелов (пробелы удаляются до сканирования).
Каждый токен несёт позицию в очищенной строке; любой символ вне
грамматики немедленно даёт MalformedExpression.

Токены:
    NUMBER       3, 2.5, .5, 4., 1e+06 (экспонента — при allow_scientific_notation)
    VARIABLE     x
    CARET        ^
    DOUBLE_STAR  **  (при allow_multiplication_sign)
    STAR         *   (при allow_multiplication_sign)
    PLUS, MINUS  + -
    END          конец строки
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from polyengine.core.domain.polynomial import PolynomialError
from polyengine.expression.config import ParserConfig

_WHITESPACE = re.compile(r"\s+")
_DIGITS = frozenset("0123456789")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class MalformedExpression(PolynomialError, ValueError):
    """
    Выражение не соответствует грамматике полинома.

    Attributes:
        expression: Очищенная (без пробелов) строка выражения
        position: Позиция ошибки в очищенной строке (None — выражение целиком)
        reason: Короткое описание нарушения
    """

    def __init__(self, expression: str, reason: str, position: Optional[int] = None):
        self.expression = expression
        self.reason = reason
        self.position = position

        if position is None:
            message = f"malformed polynomial expression {expression!r}: {reason}"
        else:
            message = f"malformed polynomial expression {expression!r} at position {position}: {reason}"
        super().__init__(message)


# =============================================================================
# TOKENS
# =============================================================================


class TokenType(str, Enum):
    """Тип токена"""

    NUMBER = "NUMBER"
    VARIABLE = "VARIABLE"
    CARET = "CARET"
    DOUBLE_STAR = "DOUBLE_STAR"
    STAR = "STAR"
    PLUS = "PLUS"
    MINUS = "MINUS"
    END = "END"


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str
    position: int


# =============================================================================
# LEXER
# =============================================================================


def strip_whitespace(expression: str) -> str:
    return _WHITESPACE.sub("", expression)


class Lexer:
    """Сканер очищенной строки выражения.

    Usage:
        tokens = Lexer("3x^2+2x").tokenize()
    """

    def __init__(self, text: str, config: Optional[ParserConfig] = None):
        self.text = text
        self.config = config or ParserConfig()
        self._pos = 0

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        while self._pos < len(self.text):
            tokens.append(self._next_token())
        tokens.append(Token(TokenType.END, "", len(self.text)))
        return tokens

    def _error(self, reason: str, position: Optional[int] = None) -> MalformedExpression:
        return MalformedExpression(self.text, reason, self._pos if position is None else position)

    def _peek(self, offset: int = 0) -> str:
        index = self._pos + offset
        return self.text[index] if index < len(self.text) else ""

    def _next_token(self) -> Token:
        start = self._pos
        char = self._peek()

        if char in _DIGITS or char == ".":
            return self._number()

        if char == self.config.variable:
            self._pos += 1
            return Token(TokenType.VARIABLE, char, start)

        if char == "+":
            self._pos += 1
            return Token(TokenType.PLUS, char, start)

        if char == "-":
            self._pos += 1
            return Token(TokenType.MINUS, char, start)

        if char == "^":
            self._pos += 1
            return Token(TokenType.CARET, char, start)

        if char == "*" and self.config.allow_multiplication_sign:
            if self._peek(1) == "*":
                self._pos += 2
                return Token(TokenType.DOUBLE_STAR, "**", start)
            self._pos += 1
            return Token(TokenType.STAR, char, start)

        raise self._error(f"unexpected character {char!r}")

    def _digits(self) -> str:
        start = self._pos
        while self._peek() in _DIGITS:
            self._pos += 1
        return self.text[start:self._pos]

    def _number(self) -> Token:
        start = self._pos
        integer_part = self._digits()
        fraction_part = ""

        if self._peek() == ".":
            self._pos += 1
            fraction_part = self._digits()
            if not integer_part and not fraction_part:
                raise self._error("decimal point without digits", start)

        if self.config.allow_scientific_notation and self._peek() in ("e", "E"):
            mantissa_end = self._pos
            self._pos += 1
            if self._peek() in ("+", "-"):
                self._pos += 1
            if not self._digits():
                self._pos = mantissa_end
                raise self._error("incomplete exponent in number", mantissa_end)

        return Token(TokenType.NUMBER, self.text[start:self._pos], start)
