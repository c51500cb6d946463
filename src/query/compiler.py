"""
Query compiler: turns a raw query string into a classified token stream.
"""

from typing import Iterable, List, Optional
import logging

from .stop_words import STOP_WORDS, MAX_QUERY_TOKENS
from .tokens import ADJACENCY_MARKER, CompiledQuery, QueryToken

logger = logging.getLogger(__name__)


class QueryCompiler:
    """
    Compiles raw query strings.
    
    Pipeline: split on spaces, lower-case, drop stop words (unless the
    query is advanced), keep the first max_tokens, classify.
    """
    
    def __init__(self, stop_words: Optional[Iterable[str]] = None,
                 max_tokens: int = MAX_QUERY_TOKENS):
        """
        Initialize compiler.
        
        Args:
            stop_words: Words removed from basic queries (default: STOP_WORDS)
            max_tokens: Maximum number of tokens kept per query
        """
        if max_tokens < 0:
            raise ValueError(f"max_tokens must be non-negative, got {max_tokens}")
        
        self.stop_words = frozenset(stop_words) if stop_words is not None else STOP_WORDS
        self.max_tokens = max_tokens
    
    @classmethod
    def from_config(cls, config=None) -> 'QueryCompiler':
        """Build a compiler from the `query` section of a config."""
        if config is None or config.get('query') is None:
            return cls()
        return cls(max_tokens=config.query.get('max_tokens', MAX_QUERY_TOKENS))
    
    def compile(self, raw_query: str) -> CompiledQuery:
        """
        Compile a raw query string.
        
        Args:
            raw_query: User supplied query (any string, including empty)
            
        Returns:
            CompiledQuery with at most max_tokens tokens
        """
        # Consecutive spaces yield empty pieces; they are kept as empty WORDs
        terms = [piece.lower() for piece in raw_query.split(' ')]
        
        advanced = ADJACENCY_MARKER in raw_query
        if not advanced:
            terms = self._remove_stop_words(terms)
        
        terms = terms[:self.max_tokens]
        
        compiled = CompiledQuery(
            tokens=tuple(QueryToken.classify(term) for term in terms),
            advanced=advanced
        )
        logger.debug(f"Compiled query {raw_query!r} -> {compiled.describe()}")
        return compiled
    
    def _remove_stop_words(self, terms: List[str]) -> List[str]:
        return [term for term in terms if term not in self.stop_words]


_default_compiler = QueryCompiler()


def compile_query(raw_query: str) -> CompiledQuery:
    """Compile with the default stop words and token cap."""
    return _default_compiler.compile(raw_query)
