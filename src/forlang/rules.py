"""
Token rule table and classifier.

The table is an ordered tuple of rules; the first rule whose predicate
accepts a lexeme decides its kind. Rules overlap on purpose (a hex run like
``0abc`` and a decimal like ``1e5`` share characters), so the order below is
part of the language definition:

1. exact keywords, operators and punctuation
2. hex literals
3. decimal literals
4. identifiers

Anything left over is ``TokenKind.UNKNOWN``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Tuple

from .token_types import TokenKind

log = logging.getLogger(__name__)

HEX_STYLES = ("plain", "prefixed")

EXACT = [
    ('for', TokenKind.FOR_KEYWORD),
    ('do', TokenKind.DO_KEYWORD),
    ('<', TokenKind.LESS_THAN),
    ('>', TokenKind.GREATER_THAN),
    ('=', TokenKind.EQUALS),
    (':=', TokenKind.ASSIGN),
    ('+', TokenKind.PLUS),
    ('-', TokenKind.MINUS),
    ('(', TokenKind.OPEN_PAREN),
    (')', TokenKind.CLOSE_PAREN),
    ('{', TokenKind.OPEN_BRACE),
    ('}', TokenKind.CLOSE_BRACE),
    (';', TokenKind.DELIMITER),
    ('int', TokenKind.INT_TYPE),
    ('double', TokenKind.DOUBLE_TYPE),
]

# Digit first, then hex digits; at least one a-f so plain decimals like 89 stay decimal.
PLAIN_HEX_RE = re.compile(r'[0-9][0-9a-f]*[a-f][0-9a-f]*')
PREFIXED_HEX_RE = re.compile(r'0x[0-9a-zA-Z]+')
# At least one digit, so alphabetic lexemes like e or ee stay identifiers.
DECIMAL_RE = re.compile(r'[0-9.e-]*[0-9][0-9.e-]*')
IDENT_RE = re.compile(r'[A-Za-z][A-Za-z0-9]*')


@dataclass(frozen=True)
class Rule:
    """Predicate over lexeme text and the kind it yields"""

    name: str
    predicate: Callable[[str], bool]
    kind: TokenKind

    def matches(self, lexeme: str) -> bool:
        return self.predicate(lexeme)


def exact_rule(text: str, kind: TokenKind) -> Rule:
    return Rule(repr(text), lambda lexeme: lexeme == text, kind)


def pattern_rule(name: str, pattern: re.Pattern, kind: TokenKind) -> Rule:
    return Rule(name, lambda lexeme: pattern.fullmatch(lexeme) is not None, kind)


def build_rule_table(hex_style: str = "plain") -> Tuple[Rule, ...]:
    """Build the ordered rule table for the given hex literal style"""
    if hex_style not in HEX_STYLES:
        raise ValueError(f"Unknown hex style {hex_style!r}, expected one of {HEX_STYLES}")

    hex_re = PLAIN_HEX_RE if hex_style == "plain" else PREFIXED_HEX_RE

    rules = [exact_rule(text, kind) for text, kind in EXACT]
    rules.append(pattern_rule('hex', hex_re, TokenKind.HEX_LITERAL))
    rules.append(pattern_rule('decimal', DECIMAL_RE, TokenKind.DECIMAL_LITERAL))
    rules.append(pattern_rule('identifier', IDENT_RE, TokenKind.IDENTIFIER))

    log.debug("built rule table: %d rules, hex style %s", len(rules), hex_style)
    return tuple(rules)


DEFAULT_RULES = build_rule_table()


def classify(lexeme: str, rules: Tuple[Rule, ...] = DEFAULT_RULES) -> TokenKind:
    """Return the kind of the first matching rule, or UNKNOWN"""
    for rule in rules:
        if rule.matches(lexeme):
            return rule.kind
    return TokenKind.UNKNOWN
