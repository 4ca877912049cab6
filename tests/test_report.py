from __future__ import annotations

from forlang.report import format_token, report
from forlang.token_types import Token, TokenKind
from tests.support.harness import FOR_LOOP, FOR_LOOP_NO_CLOSE_PAREN, lex_source, validate_source


def test_token_lines() -> None:
    tokens = lex_source("for ( i")
    assert report(tokens) == [
        "1: for is ForKeyword",
        "2: ( is OpenParen",
        "3: i is Identifier",
        "Parse complete. Tokens found: 3",
    ]


def test_unknown_is_labeled() -> None:
    assert format_token(4, Token("(i", TokenKind.UNKNOWN, 1, 2)) == "4: (i is Unknown"


def test_accepted_summary_follows_tokens() -> None:
    tokens = lex_source(FOR_LOOP)
    lines = report(tokens, validate_source(FOR_LOOP))

    assert len(lines) == len(tokens) + 1
    assert lines[0] == "1: for is ForKeyword"
    assert lines[22] == "23: } is CloseBrace"
    assert lines[-1] == (
        "Accepted: for statement (23 tokens; initializer = i := 0, condition = i < 10, "
        "increment = i := i + 1, body = x := 1 ;)"
    )


def test_empty_body_summary() -> None:
    source = "for ( i := 0 ; i < 10 ; i := i + 1 ) do { }"
    lines = report(lex_source(source), validate_source(source))
    assert lines[-1].endswith("body = <empty>)")


def test_mismatch_summary() -> None:
    tokens = lex_source(FOR_LOOP_NO_CLOSE_PAREN)
    lines = report(tokens, validate_source(FOR_LOOP_NO_CLOSE_PAREN))

    assert lines[15] == "16: do is DoKeyword"
    assert lines[-2] == "Mismatch at CloseParen: expected CloseParen, found 'do' at line 1, token 16"
    assert lines[-1] == "Parse complete. Tokens found: 22"
    assert not any(line.startswith("Accepted") for line in lines)


def test_accepted_report_has_no_separate_count() -> None:
    lines = report(lex_source(FOR_LOOP), validate_source(FOR_LOOP))
    assert not any(line.startswith("Parse complete") for line in lines)
