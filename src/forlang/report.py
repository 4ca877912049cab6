"""Text report: one line per classified token, then the validation outcome."""

from typing import List, Optional, Sequence

from .token_types import Token
from .validator import Accepted, Outcome


def format_token(index: int, tok: Token) -> str:
    return f"{index}: {tok.lexeme} is {tok.kind.value}"


def format_outcome(outcome: Outcome) -> str:
    if isinstance(outcome, Accepted):
        parts = [
            f"{name} = {' '.join(tok.lexeme for tok in section) or '<empty>'}"
            for name, section in outcome.sections()
        ]
        return f"Accepted: for statement ({outcome.token_count} tokens; {', '.join(parts)})"
    return str(outcome)


def format_count(count: int) -> str:
    return f"Parse complete. Tokens found: {count}"


def report(tokens: Sequence[Token], outcome: Optional[Outcome] = None) -> List[str]:
    """
    Build report lines; `outcome` is None when only classifying.

    The accepted summary carries its own token count; classify-only and
    mismatch reports end with a separate count line.
    """
    lines = [format_token(i, tok) for i, tok in enumerate(tokens, start=1)]
    if outcome is not None:
        lines.append(format_outcome(outcome))
    if not isinstance(outcome, Accepted):
        lines.append(format_count(len(tokens)))
    return lines
