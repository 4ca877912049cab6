"""
Command-line driver for the for-loop language

Reads one source (file or stdin), lexes it, validates the for statement
unless only classifying, and prints the report.

Exit status:
- 0: report printed (and statement accepted, or --lenient / --classify-only)
- 1: source could not be read
- 2: grammar mismatch
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from .lexer import lex
from .report import report
from .rules import DEFAULT_RULES, HEX_STYLES, build_rule_table
from .token_types import Token
from .validator import Mismatch, Outcome, validate

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNREADABLE = 1
EXIT_MISMATCH = 2


class UnreadableInput(Exception):
    """Source could not be opened or decoded"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


@dataclass(frozen=True)
class RunConfig:
    hex_style: str = "plain"
    classify_only: bool = False
    lenient: bool = False
    show_tree: bool = False


@dataclass(frozen=True)
class RunResult:
    tokens: List[Token]
    outcome: Optional[Outcome]
    lines: List[str]

    @property
    def accepted(self) -> bool:
        return self.outcome is not None and not isinstance(self.outcome, Mismatch)


def run(source_lines: Iterable[str], config: Optional[RunConfig] = None) -> RunResult:
    """Lex, optionally validate, and build the report for one source"""
    config = config or RunConfig()
    rules = DEFAULT_RULES if config.hex_style == "plain" else build_rule_table(config.hex_style)

    tokens = lex(source_lines, rules)
    outcome = None if config.classify_only else validate(tokens)

    lines = report(tokens, outcome)
    if config.show_tree and outcome is not None and not isinstance(outcome, Mismatch):
        lines.extend(outcome.tree.pretty().rstrip("\n").splitlines())

    return RunResult(tokens, outcome, lines)


def read_source(arg: Optional[str]) -> List[str]:
    """
    Resolve CLI input into source lines.
    - None or "-" => read stdin.
    - Otherwise read the file at that path.
    """

    name = "-" if arg is None else arg

    try:
        if name == "-":
            return sys.stdin.read().splitlines()
        return Path(name).read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise UnreadableInput(name, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise UnreadableInput(name, f"not valid UTF-8 ({exc.reason})") from exc


def exit_status(result: RunResult, config: RunConfig) -> int:
    if isinstance(result.outcome, Mismatch) and not config.lenient:
        return EXIT_MISMATCH
    return EXIT_OK


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="forlang", description="Classify and validate a for-loop source file")
    ap.add_argument("source", nargs="?", help="Path to a source file (defaults to stdin)")
    ap.add_argument("--hex-style", choices=HEX_STYLES, default="plain", help="Hex literal form (default: plain)")
    ap.add_argument("--classify-only", action="store_true", help="Only classify tokens, skip grammar validation")
    ap.add_argument("--lenient", action="store_true", help="Exit 0 even when the grammar does not match")
    ap.add_argument("--tree", action="store_true", help="Print the parse tree of an accepted statement")
    ap.add_argument("--debug", action="store_true", help="Log debug details to stderr")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = RunConfig(
        hex_style=args.hex_style,
        classify_only=args.classify_only,
        lenient=args.lenient,
        show_tree=args.tree,
    )

    try:
        source_lines = read_source(args.source)
    except UnreadableInput as err:
        print(f"Error: {err}", file=sys.stderr)
        return EXIT_UNREADABLE

    result = run(source_lines, config)
    for line in result.lines:
        print(line)

    status = exit_status(result, config)
    log.debug("exit status %d", status)
    return status


if __name__ == "__main__":
    sys.exit(main())
