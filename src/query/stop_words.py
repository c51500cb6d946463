"""Fixed stop-word list removed from non-advanced queries."""

STOP_WORDS: frozenset = frozenset({
    "a", "an", "and", "are", "but", "did", "do", "does", "for",
    "had", "has", "is", "it", "its", "of", "or", "that", "the",
    "this", "to", "were", "which", "with",
})

# Upper bound on tokens kept from a single query
MAX_QUERY_TOKENS = 100
