"""
Grammar validator for the for-loop construct

Checks a classified token stream against the single fixed shape

    for ( Initializer ; Condition ; Increment ) do { Body } [;]

Structure:
- Slots are checked strictly in order; there is no backtracking
- The first slot that cannot be satisfied yields a Mismatch and nothing
  is accepted
- An accepted statement keeps the tokens of each section and can render
  them as a lark Tree

Section shapes:
- Initializer: [int | double] Identifier := Value
- Condition:   Operand (< | > | =) Operand
- Increment:   Identifier := Value
- Body:        any tokens up to the next }, except a nested for
- Value:       Operand ((+ | -) Operand)*
- Operand:     Identifier | DecimalLiteral | HexLiteral
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from lark import Token as LarkToken, Tree

from .token_types import Token, TokenKind

log = logging.getLogger(__name__)


class GrammarSlot(Enum):
    """Required positions of the for statement, in order"""

    FOR_KEYWORD = "ForKeyword"
    OPEN_PAREN = "OpenParen"
    INITIALIZER = "Initializer"
    DELIMITER_1 = "Delimiter1"
    CONDITION = "Condition"
    DELIMITER_2 = "Delimiter2"
    INCREMENT = "Increment"
    CLOSE_PAREN = "CloseParen"
    DO_KEYWORD = "DoKeyword"
    OPEN_BRACE = "OpenBrace"
    BODY = "Body"
    CLOSE_BRACE = "CloseBrace"
    END = "End"


SLOT_ORDER: Tuple[GrammarSlot, ...] = tuple(GrammarSlot)

# Slots filled by exactly one token of a fixed kind
SINGLE_TOKEN_SLOTS: Dict[GrammarSlot, TokenKind] = {
    GrammarSlot.FOR_KEYWORD: TokenKind.FOR_KEYWORD,
    GrammarSlot.OPEN_PAREN: TokenKind.OPEN_PAREN,
    GrammarSlot.DELIMITER_1: TokenKind.DELIMITER,
    GrammarSlot.DELIMITER_2: TokenKind.DELIMITER,
    GrammarSlot.CLOSE_PAREN: TokenKind.CLOSE_PAREN,
    GrammarSlot.DO_KEYWORD: TokenKind.DO_KEYWORD,
    GrammarSlot.OPEN_BRACE: TokenKind.OPEN_BRACE,
    GrammarSlot.CLOSE_BRACE: TokenKind.CLOSE_BRACE,
}

OPERANDS = (TokenKind.IDENTIFIER, TokenKind.DECIMAL_LITERAL, TokenKind.HEX_LITERAL)
COMPARATORS = (TokenKind.LESS_THAN, TokenKind.GREATER_THAN, TokenKind.EQUALS)
ADDITIVE = (TokenKind.PLUS, TokenKind.MINUS)
TYPE_KEYWORDS = (TokenKind.INT_TYPE, TokenKind.DOUBLE_TYPE)

Section = Tuple[Token, ...]


@dataclass(frozen=True)
class Mismatch:
    """Where the token stream stopped fitting the statement shape"""

    slot: GrammarSlot
    expected: Tuple[TokenKind, ...]
    found: Optional[Token]
    line: int
    column: int

    @property
    def found_text(self) -> str:
        return repr(self.found.lexeme) if self.found is not None else "end of input"

    @property
    def expected_text(self) -> str:
        if not self.expected:
            return "end of input"
        return " or ".join(kind.value for kind in self.expected)

    def __str__(self):
        return (
            f"Mismatch at {self.slot.value}: expected {self.expected_text}, "
            f"found {self.found_text} at line {self.line}, token {self.column}"
        )


@dataclass(frozen=True)
class Accepted:
    """A for statement that matched every slot"""

    initializer: Section
    condition: Section
    increment: Section
    body: Section
    token_count: int

    def sections(self) -> List[Tuple[str, Section]]:
        return [
            ('initializer', self.initializer),
            ('condition', self.condition),
            ('increment', self.increment),
            ('body', self.body),
        ]

    @property
    def tree(self) -> Tree:
        return Tree('for_stmt', [
            Tree(name, [_lark_token(tok) for tok in section])
            for name, section in self.sections()
        ])


Outcome = Union[Accepted, Mismatch]


def _lark_token(tok: Token) -> LarkToken:
    return LarkToken(tok.kind.name, tok.lexeme, line=tok.line, column=tok.column)


class Validator:
    """Single pass, slot by slot check of one for statement"""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.pos = 0

    # ========================================================================
    # Token Navigation
    # ========================================================================

    def peek(self, offset: int = 0) -> Optional[Token]:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return None

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def check(self, *kinds: TokenKind) -> bool:
        current = self.peek()
        return current is not None and current.kind in kinds

    def end_position(self) -> Tuple[int, int]:
        """Position just past the last token"""
        if not self.tokens:
            return (1, 1)
        last = self.tokens[-1]
        return (last.line, last.column + 1)

    def mismatch(self, slot: GrammarSlot, *expected: TokenKind) -> Mismatch:
        found = self.peek()
        if found is None:
            line, column = self.end_position()
        else:
            line, column = found.line, found.column
        return Mismatch(slot, tuple(expected), found, line, column)

    def take(self, slot: GrammarSlot, into: List[Token], *kinds: TokenKind) -> Optional[Mismatch]:
        """Consume one token of the given kinds into `into`, or report a mismatch"""
        if not self.check(*kinds):
            return self.mismatch(slot, *kinds)
        into.append(self.advance())
        return None

    # ========================================================================
    # Sections
    # ========================================================================

    def parse_value(self, slot: GrammarSlot, into: List[Token]) -> Optional[Mismatch]:
        miss = self.take(slot, into, *OPERANDS)
        while miss is None and self.check(*ADDITIVE):
            into.append(self.advance())
            miss = self.take(slot, into, *OPERANDS)
        return miss

    def parse_assignment(self, slot: GrammarSlot, allow_type: bool) -> Union[Section, Mismatch]:
        consumed: List[Token] = []
        target_kinds: Tuple[TokenKind, ...] = (TokenKind.IDENTIFIER,)

        if allow_type:
            if self.check(*TYPE_KEYWORDS):
                consumed.append(self.advance())
            else:
                target_kinds = TYPE_KEYWORDS + target_kinds

        if not self.check(TokenKind.IDENTIFIER):
            return self.mismatch(slot, *target_kinds)
        consumed.append(self.advance())

        miss = self.take(slot, consumed, TokenKind.ASSIGN)
        if miss is None:
            miss = self.parse_value(slot, consumed)
        if miss is not None:
            return miss
        return tuple(consumed)

    def parse_initializer(self) -> Union[Section, Mismatch]:
        return self.parse_assignment(GrammarSlot.INITIALIZER, allow_type=True)

    def parse_increment(self) -> Union[Section, Mismatch]:
        return self.parse_assignment(GrammarSlot.INCREMENT, allow_type=False)

    def parse_condition(self) -> Union[Section, Mismatch]:
        slot = GrammarSlot.CONDITION
        consumed: List[Token] = []

        for kinds in (OPERANDS, COMPARATORS, OPERANDS):
            miss = self.take(slot, consumed, *kinds)
            if miss is not None:
                return miss
        return tuple(consumed)

    def parse_body(self) -> Union[Section, Mismatch]:
        consumed: List[Token] = []

        while self.peek() is not None and not self.check(TokenKind.CLOSE_BRACE):
            # Nested loops are not part of the language
            if self.check(TokenKind.FOR_KEYWORD):
                return self.mismatch(GrammarSlot.BODY, TokenKind.CLOSE_BRACE)
            consumed.append(self.advance())

        return tuple(consumed)

    def parse_end(self) -> Union[Section, Mismatch]:
        consumed: List[Token] = []

        if self.check(TokenKind.DELIMITER):
            consumed.append(self.advance())
        if self.peek() is not None:
            return self.mismatch(GrammarSlot.END)
        return tuple(consumed)

    SECTION_PARSERS = {
        GrammarSlot.INITIALIZER: parse_initializer,
        GrammarSlot.CONDITION: parse_condition,
        GrammarSlot.INCREMENT: parse_increment,
        GrammarSlot.BODY: parse_body,
        GrammarSlot.END: parse_end,
    }

    # ========================================================================
    # Top Level
    # ========================================================================

    def parse_slot(self, slot: GrammarSlot) -> Union[Section, Mismatch]:
        parser = self.SECTION_PARSERS.get(slot)
        if parser is not None:
            return parser(self)

        consumed: List[Token] = []
        miss = self.take(slot, consumed, SINGLE_TOKEN_SLOTS[slot])
        if miss is not None:
            return miss
        return tuple(consumed)

    def validate(self) -> Outcome:
        sections: Dict[GrammarSlot, Section] = {}

        for slot in SLOT_ORDER:
            result = self.parse_slot(slot)
            if isinstance(result, Mismatch):
                log.debug("validation stopped: %s", result)
                return result
            sections[slot] = result

        log.debug("accepted for statement of %d tokens", len(self.tokens))
        return Accepted(
            initializer=sections[GrammarSlot.INITIALIZER],
            condition=sections[GrammarSlot.CONDITION],
            increment=sections[GrammarSlot.INCREMENT],
            body=sections[GrammarSlot.BODY],
            token_count=len(self.tokens),
        )


def validate(tokens: Sequence[Token]) -> Outcome:
    """Validate one for statement"""
    return Validator(tokens).validate()
