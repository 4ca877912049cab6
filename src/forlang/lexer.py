"""
Lexer for the for-loop language

Splits source lines into lexemes and classifies them.

Input format:
- Lexemes are separated by whitespace
- The delimiter ``;`` may be fused to the lexeme before it (``x:=5;``)
- Nothing else is split: ``(i`` stays one lexeme and classifies as Unknown
"""

import logging
from typing import Iterable, List, Tuple

from .rules import DEFAULT_RULES, Rule, classify
from .token_types import Token

log = logging.getLogger(__name__)

DELIMITER = ';'


def split_delimiters(fragment: str) -> List[str]:
    """
    Split a fragment with a fused delimiter.

    Every non-empty piece followed by a delimiter in the fragment is
    re-emitted with an explicit ``;`` after it; empty pieces are dropped.
    """
    pieces = fragment.split(DELIMITER)
    lexemes: List[str] = []

    for i, piece in enumerate(pieces):
        if not piece:
            continue
        lexemes.append(piece)
        if i < len(pieces) - 1:
            lexemes.append(DELIMITER)

    return lexemes


def tokenize(line: str) -> List[str]:
    """Split one line into raw lexemes"""
    lexemes: List[str] = []

    for fragment in line.split():
        if DELIMITER in fragment and fragment != DELIMITER:
            lexemes.extend(split_delimiters(fragment))
        else:
            lexemes.append(fragment)

    return lexemes


def lex_line(line: str, line_no: int, rules: Tuple[Rule, ...] = DEFAULT_RULES) -> List[Token]:
    return [
        Token(lexeme, classify(lexeme, rules), line_no, column)
        for column, lexeme in enumerate(tokenize(line), start=1)
    ]


def lex(lines: Iterable[str], rules: Tuple[Rule, ...] = DEFAULT_RULES) -> List[Token]:
    """Tokenize and classify every line; lines are numbered from 1"""
    tokens: List[Token] = []

    for line_no, line in enumerate(lines, start=1):
        tokens.extend(lex_line(line, line_no, rules))

    log.debug("lexed %d tokens", len(tokens))
    return tokens
