"""Errors raised while evaluating compiled queries."""

from src.query.tokens import TokenKind


class MalformedQueryError(ValueError):
    """A NOT or ADJACENCY operator is missing a neighboring operand."""
    
    def __init__(self, position: int, kind: TokenKind, missing: str):
        self.position = position
        self.kind = kind
        self.missing = missing
        super().__init__(
            f"{kind.value} operator at position {position} has no {missing} operand"
        )
