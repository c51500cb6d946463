"""
Query token types produced by the query compiler.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Tuple

NOT_MARKER = '~'
ADJACENCY_MARKER = '^'


class TokenKind(Enum):
    WORD = 'WORD'
    NOT = 'NOT'
    ADJACENCY = 'ADJACENCY'


@dataclass(frozen=True)
class QueryToken:
    """
    Single classified unit of a compiled query.
    
    Attributes:
        text: Lower-cased token text
        kind: WORD, NOT or ADJACENCY
    """
    text: str
    kind: TokenKind = TokenKind.WORD
    
    @classmethod
    def classify(cls, text: str) -> 'QueryToken':
        """
        Create a token, deciding its kind by exact match on the text.
        
        Only the bare markers are operators; "foo^bar" is a WORD.
        """
        if text == ADJACENCY_MARKER:
            return cls(text, TokenKind.ADJACENCY)
        if text == NOT_MARKER:
            return cls(text, TokenKind.NOT)
        return cls(text, TokenKind.WORD)
    
    def is_word(self) -> bool:
        return self.kind is TokenKind.WORD
    
    def is_not(self) -> bool:
        return self.kind is TokenKind.NOT
    
    def is_adjacency(self) -> bool:
        return self.kind is TokenKind.ADJACENCY


@dataclass(frozen=True)
class CompiledQuery:
    """
    Ordered, immutable token sequence for one raw query string.
    
    Attributes:
        tokens: Classified tokens in query order
        advanced: True when the raw query contained '^' (stop words kept)
    """
    tokens: Tuple[QueryToken, ...] = field(default_factory=tuple)
    advanced: bool = False
    
    def __len__(self) -> int:
        return len(self.tokens)
    
    def __iter__(self) -> Iterator[QueryToken]:
        return iter(self.tokens)
    
    def __getitem__(self, position: int) -> QueryToken:
        return self.tokens[position]
    
    def is_empty(self) -> bool:
        return not self.tokens
    
    def terms(self) -> list:
        """Get token texts in order."""
        return [token.text for token in self.tokens]
    
    def describe(self) -> str:
        """Format the token stream for display."""
        mode = 'advanced' if self.advanced else 'basic'
        parts = [f"{token.kind.value}({token.text!r})" for token in self.tokens]
        return f"[{mode}] " + ' '.join(parts)
