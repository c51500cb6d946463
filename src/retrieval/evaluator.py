"""
Boolean evaluator: narrows a document corpus with a compiled query.
"""

from typing import Dict, List, Sequence, Set
import logging

from src.query.tokens import CompiledQuery, QueryToken, TokenKind
from .errors import MalformedQueryError
from .match_set import MatchSet

logger = logging.getLogger(__name__)


def document_text(document) -> str:
    """Full text of a document (plain strings are their own text)."""
    if isinstance(document, str):
        return document
    return document.text


class _LoweredTexts:
    """Lower-cases each document's text once per evaluation pass."""
    
    def __init__(self):
        self._cache: Dict[int, str] = {}
    
    def contains(self, document, fragment: str) -> bool:
        key = id(document)
        text = self._cache.get(key)
        if text is None:
            text = document_text(document).lower()
            self._cache[key] = text
        return fragment in text


class BooleanEvaluator:
    """
    Evaluates a compiled query left to right over a document corpus.
    
    Tokens:
    - WORD: documents must contain the term (implicit AND)
    - NOT: documents must not contain the following token's text
    - ADJACENCY: documents must contain "<previous> <next>" as a phrase
    
    Operands used by NOT and ADJACENCY are marked consumed and skipped by
    the cursor; the compiled query itself is never modified.
    """
    
    def __init__(self, legacy_empty_fallback: bool = False):
        """
        Initialize evaluator.
        
        Args:
            legacy_empty_fallback: Treat a match set filtered down to zero
                documents as unset, so the next WORD or NOT rescans the whole
                corpus, as older Pirex releases did.
        """
        self.legacy_empty_fallback = legacy_empty_fallback
    
    @classmethod
    def from_config(cls, config=None) -> 'BooleanEvaluator':
        """Build an evaluator from the `search` section of a config."""
        if config is None or config.get('search') is None:
            return cls()
        return cls(legacy_empty_fallback=bool(config.search.get('legacy_empty_fallback', False)))
    
    def evaluate(self, query: CompiledQuery, documents: Sequence) -> List:
        """
        Evaluate a query against a corpus.
        
        Args:
            query: Compiled query
            documents: Full corpus in enumeration order (not modified)
            
        Returns:
            Matching documents in corpus order
            
        Raises:
            MalformedQueryError: If an operator lacks a required operand
        """
        tokens = query.tokens
        corpus = list(documents)
        texts = _LoweredTexts()
        consumed: Set[int] = set()
        matches: MatchSet = MatchSet.unset()
        
        position = 0
        while position < len(tokens):
            if position in consumed:
                position += 1
                continue
            
            token = tokens[position]
            
            if token.kind is TokenKind.WORD:
                term = token.text
                matches = self._scope(matches, corpus).narrow(
                    lambda doc: texts.contains(doc, term)
                )
            
            elif token.kind is TokenKind.NOT:
                operand_pos = self._next_operand(tokens, consumed, position)
                excluded = tokens[operand_pos].text
                matches = self._scope(matches, corpus).narrow(
                    lambda doc: not texts.contains(doc, excluded)
                )
                consumed.add(operand_pos)
            
            elif token.kind is TokenKind.ADJACENCY:
                before_pos = self._previous_operand(tokens, consumed, position)
                after_pos = self._next_operand(tokens, consumed, position)
                phrase = f"{tokens[before_pos].text} {tokens[after_pos].text}"
                # Only ever narrows what earlier tokens selected
                matches = matches.narrow(lambda doc: texts.contains(doc, phrase))
                consumed.add(after_pos)
            
            logger.debug(f"Token {position} {token.kind.value}({token.text!r}): {matches!r}")
            position += 1
        
        return matches.to_list()
    
    def _scope(self, matches: MatchSet, corpus: List) -> MatchSet:
        """Documents a WORD or NOT narrows: the whole corpus until a filter has run."""
        if matches.is_unset:
            return MatchSet.filtered(corpus)
        if self.legacy_empty_fallback and matches.is_empty():
            logger.debug("Empty match set treated as unset, rescanning corpus")
            return MatchSet.filtered(corpus)
        return matches
    
    @staticmethod
    def _next_operand(tokens: Sequence[QueryToken], consumed: Set[int], position: int) -> int:
        for candidate in range(position + 1, len(tokens)):
            if candidate not in consumed:
                return candidate
        raise MalformedQueryError(position, tokens[position].kind, 'following')
    
    @staticmethod
    def _previous_operand(tokens: Sequence[QueryToken], consumed: Set[int], position: int) -> int:
        for candidate in range(position - 1, -1, -1):
            if candidate not in consumed:
                return candidate
        raise MalformedQueryError(position, tokens[position].kind, 'preceding')


def evaluate_query(query: CompiledQuery, documents: Sequence,
                   legacy_empty_fallback: bool = False) -> List:
    """Evaluate with a one-off evaluator."""
    return BooleanEvaluator(legacy_empty_fallback).evaluate(query, documents)
