"""
Boolean retrieval over a flat document corpus.
"""

from .errors import MalformedQueryError
from .match_set import MatchSet
from .evaluator import BooleanEvaluator, evaluate_query, document_text

__all__ = [
    'MalformedQueryError',
    'MatchSet',
    'BooleanEvaluator',
    'evaluate_query',
    'document_text',
]
