"""
Query compilation - tokenizing and classifying raw query strings.
"""

from .stop_words import STOP_WORDS, MAX_QUERY_TOKENS
from .tokens import TokenKind, QueryToken, CompiledQuery, NOT_MARKER, ADJACENCY_MARKER
from .compiler import QueryCompiler, compile_query

__all__ = [
    'STOP_WORDS',
    'MAX_QUERY_TOKENS',
    'NOT_MARKER',
    'ADJACENCY_MARKER',
    
    'TokenKind',
    'QueryToken',
    'CompiledQuery',
    'QueryCompiler',
    'compile_query',
]
