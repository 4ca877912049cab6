"""
Token Types for the for-loop language

Shared between the rule table, lexer and validator to avoid circular
dependencies.
"""

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Token kinds - value is the name shown in reports"""

    # Keywords
    FOR_KEYWORD = "ForKeyword"
    DO_KEYWORD = "DoKeyword"

    # Comparison
    LESS_THAN = "LessThan"
    GREATER_THAN = "GreaterThan"
    EQUALS = "Equals"

    # Assignment / arithmetic
    ASSIGN = "Assign"  # :=
    PLUS = "Plus"
    MINUS = "Minus"

    # Literals
    DECIMAL_LITERAL = "DecimalLiteral"
    HEX_LITERAL = "HexLiteral"

    # Punctuation
    OPEN_PAREN = "OpenParen"
    CLOSE_PAREN = "CloseParen"
    OPEN_BRACE = "OpenBrace"
    CLOSE_BRACE = "CloseBrace"
    DELIMITER = "Delimiter"  # ;

    # Types
    INT_TYPE = "IntType"
    DOUBLE_TYPE = "DoubleType"

    IDENTIFIER = "Identifier"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Token:
    """Classified lexeme with position info (column is the lexeme ordinal in its line)"""

    lexeme: str
    kind: TokenKind
    line: int = 0
    column: int = 0

    def __repr__(self):
        return f"Token({self.kind.name}, {self.lexeme!r}, {self.line}:{self.column})"
