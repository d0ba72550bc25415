"""Expression — текстовый вход и выход Polynomial.

- Lexer/Parser: "3x^2 + 2x - 1" → Polynomial (MalformedExpression при ошибке)
- Formatter: Polynomial → "3x^2+2x-1"
"""

from .config import FormatConfig, ParserConfig
from .formatter import format_coefficient, format_polynomial, format_term
from .lexer import Lexer, MalformedExpression, Token, TokenType
from .parser import Parser, parse_polynomial

__all__ = [
    "FormatConfig",
    "ParserConfig",
    "format_coefficient",
    "format_polynomial",
    "format_term",
    "Lexer",
    "MalformedExpression",
    "Token",
    "TokenType",
    "Parser",
    "parse_polynomial",
]
