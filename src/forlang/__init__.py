"""Token classifier and grammar-shape validator for the for-loop language."""

__all__ = [
    "token_types",
    "rules",
    "lexer",
    "validator",
    "report",
    "runner",
]
