"""
Catalog of works (OPI), their documents, and the statistics index.
"""

from .models import Document, Opus, LoadSummary
from .postings import PostingEntry, PostingsList
from .inverted_index import InvertedIndex, index_terms
from .collection import Collection
from .store import Store, UnsupportedSnapshotError, snapshot_path, FILE_NAME, PLF

__all__ = [
    'Document',
    'Opus',
    'LoadSummary',
    'PostingEntry',
    'PostingsList',
    'InvertedIndex',
    'index_terms',
    'Collection',
    
    'Store',
    'UnsupportedSnapshotError',
    'snapshot_path',
    'FILE_NAME',
    'PLF',
]
